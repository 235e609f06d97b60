"""Common validation helpers for user use cases."""

from __future__ import annotations

import re

from estategate.domain.errors import ValidationError

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
PHONE_PATTERN = re.compile(r"^\+?[0-9][0-9 \-()]{5,19}$")

MIN_PASSWORD_LENGTH = 8


def normalize_email(email: str) -> str:
    """Return a lower-cased email address or raise ``ValidationError``."""

    normalized = (email or "").strip().lower()
    if not EMAIL_PATTERN.match(normalized):
        raise ValidationError("Email address is not valid")
    return normalized


def normalize_phone(phone: str | None) -> str | None:
    if phone is None:
        return None
    phone = phone.strip()
    if not phone:
        return None
    if not PHONE_PATTERN.match(phone):
        raise ValidationError("Phone number is not valid")
    return phone


def require_text(value: str | None, label: str) -> str:
    cleaned = (value or "").strip()
    if not cleaned:
        raise ValidationError(f"{label} is required")
    return cleaned


def ensure_password_strength(password: str) -> None:
    if len(password or "") < MIN_PASSWORD_LENGTH:
        raise ValidationError(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"
        )


__all__ = [
    "EMAIL_PATTERN",
    "MIN_PASSWORD_LENGTH",
    "PHONE_PATTERN",
    "ensure_password_strength",
    "normalize_email",
    "normalize_phone",
    "require_text",
]
