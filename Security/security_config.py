"""
SECURITY CONFIG
===============
Centralized settings for the record service, loaded once from environment.
"""

# FLOW:
# - load_settings() reads the active env file plus process env into Settings.
# - create_app() passes Settings into every component explicitly.
# WHY:
# - EncryptionMode and the signing secret are fixed for the process lifetime.
# - The sensitive field set is fixed by the record schema, not by the environment.
# HOW:
# - dotenv + get_bool/get_int helpers, frozen dataclass result.

from __future__ import annotations

import os
import secrets
import logging
from dataclasses import dataclass, field

import dotenv


DEFAULT_SENSITIVE_FIELDS = ("empName", "password", "department")
SECRET_PLACEHOLDERS = {"", "change-this-secret", "CHANGE_THIS_SECRET", "REPLACE_WITH_SECURE_RANDOM_SECRET", "AUTO_GENERATE"}


def get_bool(name: str, default: bool = False) -> bool:
    return os.getenv(name, str(default)).strip().lower() in {"true", "1", "yes", "on"}


def get_int(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, str(default)))
    except ValueError:
        return default


def _env_name() -> str:
    env = os.getenv("APP_ENV", "").strip().lower()
    if env in {"prod", "production"}:
        return ".env.production"
    if env in {"local", "localhost", "dev", "development"}:
        return ".env.localhost"

    # Auto-select based on ENV_ACTIVE flag if APP_ENV is not set
    root = os.path.dirname(os.path.dirname(__file__))
    prod_path = os.path.join(root, ".env.production")

    def _is_active(path: str) -> bool:
        if not os.path.exists(path):
            return False
        with open(path, "r", encoding="utf-8") as f:
            for line in f:
                if line.strip().startswith("ENV_ACTIVE="):
                    return line.split("=", 1)[1].strip().strip('"').lower() == "true"
        return False

    if _is_active(prod_path):
        return ".env.production"
    return ".env.localhost"


def _env_path() -> str:
    root = os.path.dirname(os.path.dirname(__file__))
    return os.path.join(root, _env_name())


def ensure_token_secret(env_name: str = "SECRET_KEY") -> str:
    """Return the configured signing secret, or a fresh in-memory one."""
    primary = os.getenv(env_name, "").strip()
    if primary and primary not in SECRET_PLACEHOLDERS:
        return primary
    logging.getLogger("security.env").warning(
        "%s not configured; using a per-process secret, tokens will not survive restart",
        env_name,
    )
    return secrets.token_urlsafe(64)


@dataclass(frozen=True)
class Settings:
    encryption_enabled: bool = True
    secret_key: str = field(default_factory=lambda: secrets.token_urlsafe(64), repr=False)
    token_ttl_seconds: int = 3600
    sensitive_fields: tuple[str, ...] = DEFAULT_SENSITIVE_FIELDS
    database_url: str = "sqlite:///./records.db"
    login_credentials_file: str | None = None
    log_dir: str = "logs"

    def __post_init__(self):
        if self.token_ttl_seconds <= 0:
            raise ValueError("TOKEN_TTL_SECONDS must be positive")


def load_settings() -> Settings:
    """Read settings from the active env file and the process environment."""
    dotenv.load_dotenv(_env_path())

    if get_bool("APP_ENV_LOG", False):
        logging.getLogger("security.env").info("Active env file: %s", _env_path())

    return Settings(
        encryption_enabled=get_bool("ENCRYPTION_ENABLED", True),
        secret_key=ensure_token_secret(),
        token_ttl_seconds=get_int("TOKEN_TTL_SECONDS", 3600),
        database_url=os.getenv("DATABASE_URL", "sqlite:///./records.db"),
        login_credentials_file=os.getenv("LOGIN_CREDENTIALS_FILE") or None,
        log_dir=os.getenv("LOG_DIR", "logs"),
    )
