"""
SECRETS REDACTION
=================
Utility to mask secrets in logs.
"""

# FLOW:
# - redact() masks bearer tokens, credential query values and ciphertexts.
# HOW:
# - Replaces sensitive values with ***.

from __future__ import annotations

import re


_SECRET_PATTERNS = [
    re.compile(r"(bearer\s+)([^\s,;]+)", re.IGNORECASE),
    re.compile(r"(password=)([^&\s]+)", re.IGNORECASE),
    re.compile(r"(token=)([^&\s]+)", re.IGNORECASE),
    re.compile(r"(key=)([^&\s]+)", re.IGNORECASE),
    re.compile(r"(enc::)([A-Za-z0-9_\-=]+)"),
]


def redact(value: str) -> str:
    for pattern in _SECRET_PATTERNS:
        value = pattern.sub(r"\1***", value)
    return value
