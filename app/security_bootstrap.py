"""
Security bootstrap utilities.

Builds the token service, field cipher, record gate and access control
once at startup from explicit settings. The cipher key is generated here
unless a caller injects one (tests do).
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable

from Security.access_control import AccessControl
from Security.authentication import CredentialVerifier
from Security.field_cipher import FieldCipher
from Security.key_management import CipherKey, generate_cipher_key
from Security.record_gate import RecordGate, RecordStorage
from Security.security_config import Settings
from Security.token_service import TokenService


@dataclass(frozen=True)
class SecurityComponents:
    token_service: TokenService
    access_control: AccessControl
    credential_verifier: CredentialVerifier
    record_gate: RecordGate


def initialize_security(
    settings: Settings,
    storage: RecordStorage,
    cipher_key: CipherKey | None = None,
    clock: Callable[[], float] = time.time,
) -> SecurityComponents:
    token_service = TokenService(settings.secret_key, ttl_seconds=settings.token_ttl_seconds, clock=clock)
    cipher = FieldCipher(cipher_key or generate_cipher_key())
    return SecurityComponents(
        token_service=token_service,
        access_control=AccessControl(token_service),
        credential_verifier=CredentialVerifier.from_file(settings.login_credentials_file),
        record_gate=RecordGate(
            cipher,
            encryption_enabled=settings.encryption_enabled,
            sensitive_fields=settings.sensitive_fields,
            storage=storage,
        ),
    )
