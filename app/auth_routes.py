from fastapi import APIRouter, Request
from pydantic import BaseModel, Field
from typing import Optional

from Security.audit_trail import audit
from Security.errors import AuthError, AuthErrorKind
from Security.metrics import increment_auth_failure, increment_tokens_issued

router = APIRouter()


class LoginRequest(BaseModel):
    username: str = Field(min_length=1)
    password: Optional[str] = None


@router.post("/login")
def login(payload: LoginRequest, request: Request):
    security = request.app.state.security

    if not security.credential_verifier.verify(payload.username, payload.password):
        increment_auth_failure("invalid_credentials")
        audit("login_failed", subject=payload.username)
        raise AuthError(AuthErrorKind.INVALID_CREDENTIALS)

    token = security.token_service.issue(payload.username)
    increment_tokens_issued()
    audit("login", subject=payload.username)

    return {
        "access_token": token,
        "token_type": "bearer",
        "expires_in": security.token_service.ttl_seconds,
    }
