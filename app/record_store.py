"""
Storage collaborator for employee records.

Persists whatever the record gate hands it. It never looks at field
contents, so it cannot tell plaintext from ciphertext.
"""

from __future__ import annotations

from typing import Any, Mapping

from .models import EmployeeRecord, FIELD_COLUMNS


class RecordNotFound(LookupError):
    def __init__(self, identifier):
        self.identifier = identifier
        super().__init__(f"Record {identifier} not found")


class EmployeeRecordStore:
    def __init__(self, session_factory):
        self.session_factory = session_factory

    def save(self, record: Mapping[str, Any]) -> dict[str, Any]:
        values = {column: record.get(field) for field, column in FIELD_COLUMNS.items()}
        with self.session_factory() as db:
            row = EmployeeRecord(**values)
            db.add(row)
            db.commit()
            db.refresh(row)
            return _to_record(row)

    def find_by_id(self, identifier: int) -> dict[str, Any]:
        with self.session_factory() as db:
            row = db.get(EmployeeRecord, identifier)
            if row is None:
                raise RecordNotFound(identifier)
            return _to_record(row)


def _to_record(row: EmployeeRecord) -> dict[str, Any]:
    record = {"id": row.id}
    for field, column in FIELD_COLUMNS.items():
        record[field] = getattr(row, column)
    return record
