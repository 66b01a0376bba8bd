"""
AUDIT TRAIL
===========
Lightweight audit logging helper.
"""

# FLOW:
# - RequestIdMiddleware binds per-request context (ip, request id, path).
# - require_subject() adds the authenticated subject.
# - audit() emits one structured line to logs/audit.log.
# WHY:
# - Auth rejections and cipher failures need operator attention.
# HOW:
# - ContextVar for request context; stdlib logger "security.audit".

from __future__ import annotations

import contextvars
import logging

from Security.secrets_redaction import redact


logger = logging.getLogger("security.audit")

_audit_ctx: contextvars.ContextVar[dict[str, str] | None] = contextvars.ContextVar("audit_ctx", default=None)


def _client_ip(request) -> str:
    xff = (request.headers.get("x-forwarded-for") or "").strip()
    if xff:
        return xff.split(",")[0].strip()
    if request.client and request.client.host:
        return request.client.host
    return "-"


def set_audit_request_context(request):
    request_id = getattr(request.state, "request_id", "") or request.headers.get("x-request-id", "")
    payload = {
        "ip": _client_ip(request),
        "request_id": str(request_id or "").strip(),
        "path": str(request.url.path or "").strip(),
        "method": str(request.method or "").strip(),
    }
    return _audit_ctx.set(payload)


def clear_audit_request_context(token) -> None:
    _audit_ctx.reset(token)


def bind_subject(subject: str) -> None:
    ctx = dict(_audit_ctx.get() or {})
    ctx["subject"] = subject
    _audit_ctx.set(ctx)


def audit(event: str, subject: str | None = None, details: str | None = None, level: int = logging.INFO) -> None:
    ctx = _audit_ctx.get() or {}
    logger.log(
        level,
        "event=%s subject=%s ip=%s request_id=%s method=%s path=%s details=%s",
        event,
        subject or ctx.get("subject", "-"),
        ctx.get("ip", "-"),
        ctx.get("request_id", ""),
        ctx.get("method", ""),
        ctx.get("path", ""),
        redact(details or ""),
    )
