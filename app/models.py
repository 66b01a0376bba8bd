from sqlalchemy import Column, Integer, Text, DateTime
from .database import Base
import datetime


# ------------------------------------------------------------
# EMPLOYEE RECORD TABLE
# ------------------------------------------------------------
# Sensitive columns are Text: they hold either plaintext or an
# "enc::" token depending on ENCRYPTION_ENABLED at write time.
class EmployeeRecord(Base):
    __tablename__ = "employee_records"

    id = Column(Integer, primary_key=True, index=True)
    emp_name = Column(Text, nullable=True)
    password = Column(Text, nullable=True)
    department = Column(Text, nullable=True)
    age = Column(Integer, nullable=True)
    created_at = Column(DateTime, default=datetime.datetime.utcnow)


# API field name -> column name
FIELD_COLUMNS = {
    "empName": "emp_name",
    "password": "password",
    "department": "department",
    "age": "age",
}


def check_sensitive_fields(names):
    """Raise ValueError unless every name maps to a Text column."""
    for name in names:
        column_name = FIELD_COLUMNS.get(name)
        if column_name is None:
            raise ValueError(f"Unknown sensitive field: {name!r}")
        column = EmployeeRecord.__table__.columns[column_name]
        if not isinstance(column.type, Text):
            raise ValueError(f"Sensitive field {name!r} is not stored as text")
