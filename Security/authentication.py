"""
LOGIN CREDENTIAL VERIFICATION
=============================
Optional password check in front of token issuance.

FLOW:
- No credentials file configured: any non-empty username may log in.
- Credentials file configured: username must exist and the password must
  match its bcrypt hash.

HOW:
- JSON file {"username": "<bcrypt hash>"}, read once at startup.
"""

from __future__ import annotations

import json

import bcrypt


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        return False


class CredentialVerifier:
    def __init__(self, password_hashes: dict[str, str] | None = None):
        self.password_hashes = password_hashes

    @classmethod
    def from_file(cls, path: str | None) -> "CredentialVerifier":
        if not path:
            return cls()
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"{path}: expected a JSON object of username -> bcrypt hash")
        return cls({str(k): str(v) for k, v in data.items()})

    @property
    def enforced(self) -> bool:
        return self.password_hashes is not None

    def verify(self, username: str, password: str | None) -> bool:
        if not username:
            return False
        if not self.enforced:
            return True
        hashed = self.password_hashes.get(username)
        if hashed is None or not password:
            return False
        return verify_password(password, hashed)
