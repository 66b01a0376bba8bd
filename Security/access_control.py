"""
ACCESS CONTROL
==============
Bearer-token gate in front of every record operation.
"""

# FLOW:
# - require_subject() (FastAPI dependency) reads the Authorization header.
# - AccessControl.authorize() strips "Bearer " and validates the token.
# - On AuthError the route body never runs: no gate, no storage access.
# HOW:
# - Any valid token grants access; there is no per-subject permission model.

from __future__ import annotations

from fastapi import Request

from Security.audit_trail import audit, bind_subject
from Security.errors import AuthError, AuthErrorKind
from Security.metrics import increment_auth_failure
from Security.token_service import TokenService


BEARER_SCHEME = "bearer"


class AccessControl:
    def __init__(self, token_service: TokenService):
        self.token_service = token_service

    def authorize(self, presented_credential: str | None) -> str:
        if presented_credential is None or not presented_credential.strip():
            raise AuthError(AuthErrorKind.MISSING)

        credential = presented_credential.strip()
        scheme, _, remainder = credential.partition(" ")
        if scheme.lower() == BEARER_SCHEME:
            credential = remainder.strip()

        return self.token_service.validate(credential)


async def require_subject(request: Request) -> str:
    """FastAPI dependency: authenticated subject or AuthError."""
    access_control: AccessControl = request.app.state.access_control
    try:
        subject = access_control.authorize(request.headers.get("Authorization"))
    except AuthError as exc:
        increment_auth_failure(exc.kind.name.lower())
        audit("auth_rejected", details=exc.code)
        raise
    request.state.subject = subject
    bind_subject(subject)
    return subject
