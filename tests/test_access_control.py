"""
Tests for bearer credential handling in AccessControl.
"""

import pytest

from Security.access_control import AccessControl
from Security.errors import AuthError, AuthErrorKind


@pytest.fixture
def access_control(token_service):
    return AccessControl(token_service)


@pytest.fixture
def token(token_service):
    return token_service.issue("admin")


@pytest.mark.parametrize("template", ["Bearer {}", "bearer {}", "BEARER   {}", "{}", "  Bearer {}  "])
def test_accepted_credential_forms(access_control, token, template):
    assert access_control.authorize(template.format(token)) == "admin"


@pytest.mark.parametrize("credential", [None, "", "   "])
def test_missing_credential(access_control, credential):
    with pytest.raises(AuthError) as excinfo:
        access_control.authorize(credential)
    assert excinfo.value.kind is AuthErrorKind.MISSING


@pytest.mark.parametrize("credential", ["Bearer", "Bearer    ", "Basic dXNlcjpwYXNz", "Bearer not.a.token"])
def test_malformed_credential(access_control, credential):
    with pytest.raises(AuthError) as excinfo:
        access_control.authorize(credential)
    assert excinfo.value.kind is AuthErrorKind.MALFORMED


def test_expired_token(access_control, token, clock):
    clock.advance(3600)
    with pytest.raises(AuthError) as excinfo:
        access_control.authorize(f"Bearer {token}")
    assert excinfo.value.kind is AuthErrorKind.EXPIRED
