"""
Shared fixtures for the record service tests.
"""

import dataclasses

import pytest
from fastapi.testclient import TestClient

from app.database import build_engine
from app.main import create_app
from Security.field_cipher import FieldCipher
from Security.key_management import generate_cipher_key
from Security.security_config import Settings
from Security.token_service import TokenService


class FakeClock:
    """Manually advanced clock for expiry tests."""

    def __init__(self, now=1_700_000_000.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cipher_key():
    return generate_cipher_key()


@pytest.fixture
def cipher(cipher_key):
    return FieldCipher(cipher_key)


@pytest.fixture
def token_service(clock):
    return TokenService("test-signing-secret", ttl_seconds=3600, clock=clock)


@pytest.fixture
def settings(tmp_path):
    return Settings(
        encryption_enabled=True,
        secret_key="test-signing-secret",
        token_ttl_seconds=3600,
        database_url="sqlite://",
        log_dir=str(tmp_path / "logs"),
    )


@pytest.fixture
def engine(settings):
    engine = build_engine(settings.database_url)
    yield engine
    engine.dispose()


@pytest.fixture
def make_client(settings, engine, cipher_key, clock):
    """Build a TestClient; keyword overrides are applied to Settings."""

    def _make(**overrides):
        app = create_app(
            settings=dataclasses.replace(settings, **overrides),
            cipher_key=cipher_key,
            engine=engine,
            clock=clock,
        )
        return TestClient(app)

    return _make


@pytest.fixture
def client(make_client):
    return make_client()


@pytest.fixture
def auth_headers(client):
    response = client.post("/login", json={"username": "admin"})
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['access_token']}"}
