"""
TOKEN SERVICE
=============
Stateless HS256 bearer tokens for API authentication.

FLOW:
- issue(subject) signs {sub, iat, exp} with the service secret.
- validate(token) checks structure, then signature, then expiry.

WHY:
- No server-side session store: validity is a pure function of the token
  content and the current time, recomputed on every request.

HOW:
- python-jose JWS/JWT with a single secret and a single algorithm.
- Segments must be canonical base64url, so every bit of the encoded token is
  covered either by the signature or by the encoding check.
"""

from __future__ import annotations

import binascii
import json
import re
import time
from typing import Callable

from jose import jws, jwt
from jose.exceptions import JWSError
from jose.utils import base64url_decode, base64url_encode

from Security.errors import AuthError, AuthErrorKind


ALGORITHM = "HS256"
DEFAULT_TTL_SECONDS = 60 * 60

_SEGMENT_RE = re.compile(r"^[A-Za-z0-9_-]+$")


class TokenService:
    def __init__(self, secret_key: str, ttl_seconds: int = DEFAULT_TTL_SECONDS, clock: Callable[[], float] = time.time):
        if not secret_key:
            raise ValueError("Token signing secret must not be empty")
        if ttl_seconds <= 0:
            raise ValueError("Token TTL must be positive")
        self._secret_key = secret_key
        self.ttl_seconds = ttl_seconds
        self._clock = clock

    def __repr__(self) -> str:
        return f"TokenService(ttl_seconds={self.ttl_seconds}, secret=<redacted>)"

    def issue(self, subject: str) -> str:
        if not isinstance(subject, str) or not subject:
            raise ValueError("Token subject must be a non-empty string")
        issued_at = int(self._clock())
        claims = {
            "sub": subject,
            "iat": issued_at,
            "exp": issued_at + self.ttl_seconds,
        }
        return jwt.encode(claims, self._secret_key, algorithm=ALGORITHM)

    def validate(self, token: str) -> str:
        """Return the token subject or raise AuthError."""
        _check_structure(token)

        try:
            payload = jws.verify(token, self._secret_key, algorithms=[ALGORITHM])
        except JWSError as exc:
            raise AuthError(AuthErrorKind.BAD_SIGNATURE) from exc

        claims = _parse_claims(payload)
        if self._clock() >= claims["exp"]:
            raise AuthError(AuthErrorKind.EXPIRED)
        return claims["sub"]


def _is_canonical_segment(segment: str) -> bool:
    if not _SEGMENT_RE.match(segment):
        return False
    try:
        raw = base64url_decode(segment.encode("ascii"))
    except (binascii.Error, ValueError):
        return False
    return base64url_encode(raw).decode("ascii") == segment


def _check_structure(token) -> None:
    if not isinstance(token, str):
        raise AuthError(AuthErrorKind.MALFORMED)
    segments = token.split(".")
    if len(segments) != 3 or not all(_is_canonical_segment(s) for s in segments):
        raise AuthError(AuthErrorKind.MALFORMED)
    try:
        header = json.loads(base64url_decode(segments[0].encode("ascii")))
        json.loads(base64url_decode(segments[1].encode("ascii")))
    except ValueError as exc:
        raise AuthError(AuthErrorKind.MALFORMED) from exc
    if not isinstance(header, dict):
        raise AuthError(AuthErrorKind.MALFORMED)


def _parse_claims(payload: bytes) -> dict:
    try:
        claims = json.loads(payload)
    except ValueError as exc:
        raise AuthError(AuthErrorKind.MALFORMED) from exc
    if not isinstance(claims, dict):
        raise AuthError(AuthErrorKind.MALFORMED)

    subject = claims.get("sub")
    if not isinstance(subject, str) or not subject:
        raise AuthError(AuthErrorKind.MALFORMED)
    for name in ("iat", "exp"):
        value = claims.get(name)
        # bool is an int subclass
        if not isinstance(value, int) or isinstance(value, bool):
            raise AuthError(AuthErrorKind.MALFORMED)
    return claims
