"""Tests for one-time codes, password hashing and session tokens."""

from __future__ import annotations

import string
from dataclasses import replace

import pytest
from pydantic import ValidationError as PydanticValidationError

from estategate.config import Settings
from estategate.domain.entities import Role, User
from estategate.infrastructure.security import (
    create_user_access_token,
    decode_access_token,
    generate_otp_code,
    generate_secure_password,
    normalize_otp_code,
    session_signature,
)


def _user(**overrides) -> User:
    values = dict(
        id=1,
        role=Role.RESIDENT,
        estate_id=3,
        name="Ada Obi",
        email="ada@example.com",
        password="hashed",
    )
    values.update(overrides)
    return User(**values)


def test_otp_defaults_to_six_digits():
    code = generate_otp_code()

    assert len(code) == 6
    assert set(code) <= set(string.digits)


def test_otp_honours_length_and_alphabet():
    code = generate_otp_code(length=10, alphabet="ABCDEF")

    assert len(code) == 10
    assert set(code) <= set("ABCDEF")


def test_otp_codes_are_not_repeated_in_a_small_sample():
    codes = {generate_otp_code(length=12) for _ in range(50)}

    assert len(codes) == 50


@pytest.mark.parametrize("length, alphabet", [(0, "0123"), (6, "1"), (6, "1111")])
def test_otp_rejects_degenerate_configuration(length, alphabet):
    with pytest.raises(ValueError):
        generate_otp_code(length=length, alphabet=alphabet)


def test_normalize_otp_code_strips_separators():
    assert normalize_otp_code(" 123-456 ") == "123456"
    assert normalize_otp_code("ab c") == "ABC"


def test_generated_password_mixes_character_classes():
    password = generate_secure_password()

    assert 10 <= len(password) <= 14
    assert any(char.islower() for char in password)
    assert any(char.isupper() for char in password)
    assert any(char.isdigit() for char in password)
    assert any(char in string.punctuation for char in password)


def test_access_token_carries_role_estate_and_signature():
    user = _user()

    payload = decode_access_token(create_user_access_token(user))

    assert payload["sub"] == "ada@example.com"
    assert payload["role"] == "resident"
    assert payload["estate_id"] == 3
    assert payload["sig"] == session_signature(user)


def test_signature_changes_with_session_version_and_password():
    user = _user()

    assert session_signature(user) != session_signature(replace(user, session_version=1))
    assert session_signature(user) != session_signature(replace(user, password="other"))
    assert session_signature(user) != session_signature(replace(user, is_active=False))


def test_decode_rejects_tampered_token():
    token = create_user_access_token(_user())

    with pytest.raises(ValueError):
        decode_access_token(token[:-2] + ("AA" if not token.endswith("AA") else "BB"))


def test_settings_upper_case_the_code_alphabet(monkeypatch):
    monkeypatch.setenv("OTP_ALPHABET", "abcdefgh")

    assert Settings().otp_alphabet == "ABCDEFGH"


@pytest.mark.parametrize("alphabet", ["12-34", "12 34", "aA"])
def test_settings_reject_alphabets_that_do_not_survive_normalization(monkeypatch, alphabet):
    monkeypatch.setenv("OTP_ALPHABET", alphabet)

    with pytest.raises(PydanticValidationError):
        Settings()
