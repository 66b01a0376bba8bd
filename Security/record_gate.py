"""
RECORD GATE
===========
Encrypt-on-write / decrypt-on-read for a record's sensitive fields.

FLOW:
- save(): prepare_for_storage() -> storage.save() -> prepare_for_presentation().
- find_by_id(): storage.find_by_id() -> prepare_for_presentation().

WHY:
- Sensitive values are plaintext outside the gate and, when encryption is
  enabled, ciphertext at rest. A record is never stored half-encrypted.

HOW:
- Every transform works on a copy; the copy is returned only after all
  sensitive fields succeeded, so a CipherError leaves nothing observable.
- Mode mismatch (data written under the other EncryptionMode) is detected and
  raised as INTEGRITY_FAILURE, never repaired. With encryption disabled, a
  plaintext value that looks like ciphertext is refused before storage.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping, Protocol

from Security.errors import CipherError, CipherErrorKind
from Security.field_cipher import FieldCipher


logger = logging.getLogger("security.record_gate")

Record = dict[str, Any]


class RecordStorage(Protocol):
    def save(self, record: Mapping[str, Any]) -> Record: ...

    def find_by_id(self, identifier: int) -> Record: ...


class RecordGate:
    def __init__(
        self,
        cipher: FieldCipher,
        encryption_enabled: bool,
        sensitive_fields: Iterable[str],
        storage: RecordStorage | None = None,
    ):
        self.cipher = cipher
        self.encryption_enabled = bool(encryption_enabled)
        self.sensitive_fields = tuple(sensitive_fields)
        self.storage = storage

    def prepare_for_storage(self, record: Mapping[str, Any]) -> Record:
        prepared = dict(record)
        for name in self._present_fields(prepared):
            value = prepared[name]
            if self.encryption_enabled:
                prepared[name] = self._apply(self.cipher.encrypt, name, value)
            elif self.cipher.is_ciphertext(value):
                # would be unreadable later: presentation rejects it as a mode mismatch
                raise CipherError(
                    CipherErrorKind.INVALID_ENCODING,
                    "Plaintext value is indistinguishable from ciphertext",
                    field=name,
                )
        return prepared

    def prepare_for_presentation(self, record: Mapping[str, Any]) -> Record:
        prepared = dict(record)
        for name in self._present_fields(prepared):
            value = prepared[name]
            if self.encryption_enabled:
                prepared[name] = self._decrypt(name, value)
            elif self.cipher.is_ciphertext(value):
                raise CipherError(
                    CipherErrorKind.INTEGRITY_FAILURE,
                    "Stored value is encrypted but encryption is disabled",
                    field=name,
                )
        return prepared

    def save(self, record: Mapping[str, Any]) -> Record:
        if self.storage is None:
            raise RuntimeError("RecordGate has no storage collaborator")
        stored = self.storage.save(self.prepare_for_storage(record))
        return self.prepare_for_presentation(stored)

    def find_by_id(self, identifier: int) -> Record:
        if self.storage is None:
            raise RuntimeError("RecordGate has no storage collaborator")
        return self.prepare_for_presentation(self.storage.find_by_id(identifier))

    def _present_fields(self, record: Mapping[str, Any]) -> list[str]:
        # None means "not set" and is stored as-is in both modes
        return [name for name in self.sensitive_fields if record.get(name) is not None]

    def _decrypt(self, name: str, value):
        try:
            return self.cipher.decrypt(value)
        except CipherError as exc:
            logger.debug("Field decrypt failed field=%s code=%s", name, exc.code)
            raise CipherError(
                CipherErrorKind.INTEGRITY_FAILURE,
                "Stored value does not decrypt cleanly",
                field=name,
            ) from exc

    @staticmethod
    def _apply(transform, name: str, value):
        try:
            return transform(value)
        except CipherError as exc:
            exc.field = exc.field or name
            logger.debug("Field transform failed field=%s code=%s", name, exc.code)
            raise
