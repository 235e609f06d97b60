"""Use case for a user editing their own profile."""

from __future__ import annotations

from dataclasses import replace

from sqlalchemy.orm import Session

from estategate.application.use_cases.notifications import notify_profile_updated
from estategate.domain.entities import Role, SessionContext, User
from estategate.domain.errors import NotFound
from estategate.domain.policies import Action, Resource, ensure_can
from estategate.infrastructure.repositories import UserRepository
from estategate.utils import now_in_app_timezone

from .validators import normalize_phone, require_text

# Admins are told when these members change their details.
_REPORTED_ROLES = (Role.RESIDENT, Role.GUARD)


def update_profile(
    session: Session,
    *,
    context: SessionContext,
    name: str | None = None,
    phone: str | None = None,
    apartment_number: str | None = None,
    apartment_type: str | None = None,
) -> User:
    ensure_can(context, Action.UPDATE, Resource.PROFILE)
    repository = UserRepository(session)
    user = repository.get(context.user_id)
    if user is None:
        raise NotFound("User not found")

    requested = {
        "name": require_text(name, "Name") if name is not None else None,
        "phone": normalize_phone(phone) if phone is not None else None,
        "apartment_number": apartment_number.strip() if apartment_number is not None else None,
        "apartment_type": apartment_type.strip() if apartment_type is not None else None,
    }
    changes = {
        field: value
        for field, value in requested.items()
        if value is not None and value != getattr(user, field)
    }
    if not changes:
        return user

    updated = repository.update(
        replace(user, **changes, updated_by=user.id, updated_at=now_in_app_timezone())
    )
    if updated.has_role(*_REPORTED_ROLES):
        notify_profile_updated(session, user=updated, changed_fields=sorted(changes))
    return updated


__all__ = ["update_profile"]
