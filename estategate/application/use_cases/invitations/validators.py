"""Validation helpers for invitation use cases."""

from __future__ import annotations

from datetime import date

from estategate.domain.entities import VisitorDetails
from estategate.domain.errors import ValidationError

from ..users.validators import EMAIL_PATTERN, PHONE_PATTERN

MAX_NAME_LENGTH = 100
MAX_PURPOSE_LENGTH = 100


def validate_visitor_details(details: VisitorDetails, *, today: date) -> VisitorDetails:
    """Return a normalized copy of ``details`` or raise ``ValidationError``."""

    name = (details.name or "").strip()
    phone = (details.phone or "").strip()
    purpose = (details.purpose or "").strip()
    email = (details.email or "").strip() or None

    missing = [
        label
        for label, value in (
            ("visitor name", name),
            ("visitor phone", phone),
            ("purpose", purpose),
            ("visit date", details.visit_date),
            ("visit time", details.visit_time),
        )
        if not value
    ]
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}")

    if len(name) > MAX_NAME_LENGTH:
        raise ValidationError("Visitor name is too long")
    if not PHONE_PATTERN.match(phone):
        raise ValidationError("Visitor phone number is not valid")
    if len(purpose) > MAX_PURPOSE_LENGTH:
        raise ValidationError("Purpose is too long")
    if email is not None and not EMAIL_PATTERN.match(email):
        raise ValidationError("Visitor email address is not valid")
    if details.visit_date < today:
        raise ValidationError("Visit date cannot be in the past")

    return VisitorDetails(
        name=name,
        phone=phone,
        purpose=purpose,
        visit_date=details.visit_date,
        visit_time=details.visit_time,
        email=email,
    )


__all__ = ["validate_visitor_details"]
