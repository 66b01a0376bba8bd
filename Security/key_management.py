"""
SECURE KEY MANAGEMENT
=====================
Process-lifetime AES-256 key for field-level encryption.
"""

# FLOW:
# - generate_cipher_key() creates one key at process start (create_app()).
# - The key is handed to FieldCipher and never leaves it.
# WHY:
# - The key lives in memory only; it is never written to .env or logs.
# HOW:
# - 32 random bytes wrapped in CipherKey, whose repr is redacted.

from __future__ import annotations

import os


KEY_SIZE = 32


class CipherKey:
    """Fixed-length symmetric key. Holds raw bytes; never renders them."""

    __slots__ = ("_material",)

    def __init__(self, material: bytes):
        if len(material) != KEY_SIZE:
            raise ValueError("AES-256 key must be 32 bytes")
        self._material = bytes(material)

    @property
    def material(self) -> bytes:
        return self._material

    def __repr__(self) -> str:
        return "CipherKey(<redacted>)"

    __str__ = __repr__


def generate_cipher_key() -> CipherKey:
    return CipherKey(os.urandom(KEY_SIZE))
