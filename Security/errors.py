"""
SECURITY ERRORS
===============
Typed failures for the token and field-cipher layers.
"""

# FLOW:
# - Token Service / Access Control raise AuthError(kind).
# - Field Cipher / Record Gate raise CipherError(kind).
# - app/error_handlers.py maps each kind to a stable HTTP outcome.
# HOW:
# - Enum kinds carry the public error code; the message stays generic.

from __future__ import annotations

from enum import Enum


class AuthErrorKind(str, Enum):
    MISSING = "AUTH_MISSING"
    MALFORMED = "AUTH_MALFORMED"
    BAD_SIGNATURE = "AUTH_BAD_SIGNATURE"
    EXPIRED = "AUTH_EXPIRED"
    INVALID_CREDENTIALS = "AUTH_INVALID_CREDENTIALS"


class CipherErrorKind(str, Enum):
    INVALID_ENCODING = "CIPHER_INVALID_ENCODING"
    INTEGRITY_FAILURE = "CIPHER_INTEGRITY_FAILURE"


_AUTH_MESSAGES = {
    AuthErrorKind.MISSING: "Authentication credential missing",
    AuthErrorKind.MALFORMED: "Authentication token is malformed",
    AuthErrorKind.BAD_SIGNATURE: "Authentication token signature is invalid",
    AuthErrorKind.EXPIRED: "Authentication token has expired",
    AuthErrorKind.INVALID_CREDENTIALS: "Invalid credentials",
}

_CIPHER_MESSAGES = {
    CipherErrorKind.INVALID_ENCODING: "Stored value is not a valid ciphertext",
    CipherErrorKind.INTEGRITY_FAILURE: "Stored value failed integrity verification",
}


class SecurityError(Exception):
    """Base class for errors that map to a fixed response code."""

    kind: Enum

    @property
    def code(self) -> str:
        return self.kind.value


class AuthError(SecurityError):
    def __init__(self, kind: AuthErrorKind, message: str | None = None):
        self.kind = kind
        self.message = message or _AUTH_MESSAGES[kind]
        super().__init__(self.message)


class CipherError(SecurityError):
    def __init__(self, kind: CipherErrorKind, message: str | None = None, field: str | None = None):
        self.kind = kind
        self.message = message or _CIPHER_MESSAGES[kind]
        self.field = field
        super().__init__(self.message)


__all__ = [
    "AuthError",
    "AuthErrorKind",
    "CipherError",
    "CipherErrorKind",
    "SecurityError",
]
