"""
FIELD CIPHER
============
AES-256-GCM encryption for single string values.

FLOW:
- encrypt() turns a plaintext string into a self-contained "enc::" token.
- decrypt() validates and reverses it.

WHY:
- Sensitive columns are protected individually, not whole rows.

HOW:
- Random 12-byte nonce per value; token = urlsafe base64 of
  nonce || ciphertext || tag. The GCM tag authenticates the whole value,
  so a flipped byte or a different key fails with INTEGRITY_FAILURE.
"""

from __future__ import annotations

import base64
import binascii
import os

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from Security.errors import CipherError, CipherErrorKind
from Security.key_management import CipherKey


NONCE_SIZE = 12
TAG_SIZE = 16
TOKEN_PREFIX = "enc::"


class FieldCipher:
    def __init__(self, key: CipherKey):
        self._aesgcm = AESGCM(key.material)

    def __repr__(self) -> str:
        return "FieldCipher(key=<redacted>)"

    def encrypt(self, plaintext: str) -> str:
        """Encrypt a string value. Returns an "enc::" prefixed base64 token."""
        if not isinstance(plaintext, str):
            raise CipherError(
                CipherErrorKind.INVALID_ENCODING,
                f"Only string values can be encrypted, got {type(plaintext).__name__}",
            )
        try:
            data = plaintext.encode("utf-8")
        except UnicodeEncodeError as exc:
            raise CipherError(CipherErrorKind.INVALID_ENCODING, "Value is not encodable as UTF-8") from exc
        nonce = os.urandom(NONCE_SIZE)
        ciphertext = self._aesgcm.encrypt(nonce, data, None)
        token = base64.urlsafe_b64encode(nonce + ciphertext).decode("ascii")
        return f"{TOKEN_PREFIX}{token}"

    def decrypt(self, ciphertext: str) -> str:
        """Decrypt a token produced by encrypt()."""
        raw = _decode_token(ciphertext)
        if raw is None:
            raise CipherError(CipherErrorKind.INVALID_ENCODING)
        nonce, body = raw[:NONCE_SIZE], raw[NONCE_SIZE:]
        try:
            data = self._aesgcm.decrypt(nonce, body, None)
        except InvalidTag as exc:
            raise CipherError(CipherErrorKind.INTEGRITY_FAILURE) from exc
        try:
            return data.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise CipherError(CipherErrorKind.INVALID_ENCODING, "Decrypted value is not UTF-8") from exc

    @staticmethod
    def is_ciphertext(value) -> bool:
        """True when value is structurally an encrypt() token (no key check)."""
        return _decode_token(value) is not None


def _decode_token(value) -> bytes | None:
    if not isinstance(value, str) or not value.startswith(TOKEN_PREFIX):
        return None
    try:
        raw = base64.urlsafe_b64decode(value[len(TOKEN_PREFIX):].encode("ascii"))
    except (binascii.Error, ValueError):
        return None
    if len(raw) < NONCE_SIZE + TAG_SIZE:
        return None
    return raw
