"""
Tests for AES-GCM field encryption.
"""

import base64

import pytest

from Security.errors import CipherError, CipherErrorKind
from Security.field_cipher import FieldCipher, NONCE_SIZE, TOKEN_PREFIX
from Security.key_management import CipherKey, generate_cipher_key


def _reencode(raw):
    return TOKEN_PREFIX + base64.urlsafe_b64encode(raw).decode("ascii")


def _raw(token):
    return base64.urlsafe_b64decode(token[len(TOKEN_PREFIX):])


@pytest.mark.parametrize("value", ["John Doe", "", "password123", "IT", "Zoë Ångström 🙂", "x" * 10_000])
def test_round_trip(cipher, value):
    assert cipher.decrypt(cipher.encrypt(value)) == value


def test_ciphertext_is_prefixed_and_hides_plaintext(cipher):
    token = cipher.encrypt("John Doe")
    assert token.startswith(TOKEN_PREFIX)
    assert "John Doe" not in token


def test_repeated_encryption_differs(cipher):
    first = cipher.encrypt("John Doe")
    second = cipher.encrypt("John Doe")
    assert first != second
    assert cipher.decrypt(first) == cipher.decrypt(second) == "John Doe"


@pytest.mark.parametrize("value", ["John Doe", "enc::", "enc::!!!!", "enc::" + "A" * 8, "enc::é"])
def test_malformed_input_is_invalid_encoding(cipher, value):
    with pytest.raises(CipherError) as excinfo:
        cipher.decrypt(value)
    assert excinfo.value.kind is CipherErrorKind.INVALID_ENCODING


@pytest.mark.parametrize("position", [0, NONCE_SIZE, NONCE_SIZE + 3, -1])
def test_tampered_bytes_fail_integrity(cipher, position):
    raw = bytearray(_raw(cipher.encrypt("John Doe")))
    raw[position] ^= 0x01
    with pytest.raises(CipherError) as excinfo:
        cipher.decrypt(_reencode(bytes(raw)))
    assert excinfo.value.kind is CipherErrorKind.INTEGRITY_FAILURE


def test_wrong_key_fails_integrity(cipher):
    token = cipher.encrypt("John Doe")
    other = FieldCipher(generate_cipher_key())
    with pytest.raises(CipherError) as excinfo:
        other.decrypt(token)
    assert excinfo.value.kind is CipherErrorKind.INTEGRITY_FAILURE


@pytest.mark.parametrize("value", [30, None, b"bytes", "\ud800"])
def test_unencodable_values_rejected(cipher, value):
    with pytest.raises(CipherError) as excinfo:
        cipher.encrypt(value)
    assert excinfo.value.kind is CipherErrorKind.INVALID_ENCODING


def test_is_ciphertext(cipher):
    assert cipher.is_ciphertext(cipher.encrypt("John Doe"))
    assert not cipher.is_ciphertext("John Doe")
    assert not cipher.is_ciphertext("enc::short")
    assert not cipher.is_ciphertext(30)


def test_key_material_never_rendered(cipher_key):
    rendered = repr(cipher_key) + str(cipher_key) + repr(FieldCipher(cipher_key))
    assert "redacted" in rendered
    assert cipher_key.material.hex() not in rendered


def test_key_length_enforced():
    with pytest.raises(ValueError):
        CipherKey(b"short")
