from fastapi import Depends, Request, Response
from pydantic import BaseModel
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from typing import Optional

from Security.access_control import require_subject
from Security.audit_trail import audit
from Security.metrics import increment_record_operation, metrics_enabled


class EmployeeRecordIn(BaseModel):
    empName: Optional[str] = None
    password: Optional[str] = None
    age: Optional[int] = None
    department: Optional[str] = None


def register_api_routes(app):
    @app.get("/health")
    def health(request: Request):
        return {
            "status": "ok",
            "encryption_enabled": request.app.state.security.record_gate.encryption_enabled,
        }

    @app.post("/api/records", status_code=201)
    def create_record(
        payload: EmployeeRecordIn,
        request: Request,
        subject: str = Depends(require_subject),
    ):
        gate = request.app.state.security.record_gate
        record = gate.save(payload.model_dump())
        increment_record_operation("save")
        audit("record_saved", subject=subject, details=f"id={record['id']}")
        return record

    @app.get("/api/records/{record_id}")
    def read_record(
        record_id: int,
        request: Request,
        subject: str = Depends(require_subject),
    ):
        gate = request.app.state.security.record_gate
        record = gate.find_by_id(record_id)
        increment_record_operation("read")
        audit("record_read", subject=subject, details=f"id={record_id}")
        return record

    @app.get("/metrics")
    def prometheus_metrics(subject: str = Depends(require_subject)):
        if not metrics_enabled():
            return Response(status_code=404)
        return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)
