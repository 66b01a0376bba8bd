from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from Security.audit_trail import audit
from Security.errors import AuthError, CipherError
from Security.metrics import increment_cipher_failure
from .record_store import RecordNotFound


logger = logging.getLogger("app.errors")


def _error_body(code: str, message: str, request: Request) -> dict:
    return {
        "code": code,
        "detail": message,
        "request_id": getattr(request.state, "request_id", None),
    }


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(AuthError)
    async def auth_error_handler(request: Request, exc: AuthError):
        return JSONResponse(
            status_code=401,
            content=_error_body(exc.code, exc.message, request),
            headers={"WWW-Authenticate": "Bearer"},
        )

    @app.exception_handler(CipherError)
    async def cipher_error_handler(request: Request, exc: CipherError):
        increment_cipher_failure(exc.kind.name.lower())
        audit(
            "cipher_failure",
            details=f"code={exc.code} field={exc.field or '-'}",
            level=logging.ERROR,
        )
        return JSONResponse(status_code=500, content=_error_body(exc.code, exc.message, request))

    @app.exception_handler(RecordNotFound)
    async def not_found_handler(request: Request, exc: RecordNotFound):
        return JSONResponse(status_code=404, content=_error_body("RECORD_NOT_FOUND", str(exc), request))

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content=_error_body("INTERNAL_ERROR", "Internal server error", request))
