"""
ACTIVITY TRACKING
=================
Structured request logging for monitoring.

FLOW:
- configure_log_files() attaches rotating files to the security loggers.
- ActivityLoggingMiddleware logs each request with its subject.

WHY:
- Provides traceability for security audits and incident response.

HOW:
- Writes request lines to <log_dir>/security.log, audit events to
  <log_dir>/audit.log.
"""

from __future__ import annotations

import logging
import os
from logging.handlers import RotatingFileHandler

from starlette.middleware.base import BaseHTTPMiddleware

from Security.secrets_redaction import redact


LOG_FILES = {
    "security.activity": "security.log",
    "security.audit": "audit.log",
}


def configure_log_files(log_dir: str) -> None:
    """(Re)point the security loggers at files under log_dir."""
    os.makedirs(log_dir, exist_ok=True)
    formatter = logging.Formatter("%(asctime)s %(levelname)s %(message)s")
    for name, filename in LOG_FILES.items():
        logger = logging.getLogger(name)
        for handler in list(logger.handlers):
            if isinstance(handler, RotatingFileHandler):
                logger.removeHandler(handler)
                handler.close()
        handler = RotatingFileHandler(os.path.join(log_dir, filename), maxBytes=2_000_000, backupCount=3)
        handler.setFormatter(formatter)
        logger.setLevel(logging.INFO)
        logger.addHandler(handler)


class ActivityLoggingMiddleware(BaseHTTPMiddleware):
    def __init__(self, app):
        super().__init__(app)
        self.logger = logging.getLogger("security.activity")

    async def dispatch(self, request, call_next):
        response = await call_next(request)
        query = request.url.query
        if query:
            query = redact(query)
        self.logger.info(
            "method=%s path=%s query=%s status=%s subject=%s request_id=%s ip=%s",
            request.method,
            request.url.path,
            query or "",
            response.status_code,
            getattr(request.state, "subject", None) or "-",
            getattr(request.state, "request_id", None) or "",
            request.client.host if request.client else "unknown",
        )
        return response
