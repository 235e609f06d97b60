"""Estate admins managing the residents and guards of their estate."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import replace

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from estategate.domain.entities import Role, SessionContext, User
from estategate.domain.errors import NotFound, PersistenceError, ValidationError
from estategate.domain.policies import Action, Resource, can_access_estate, ensure_can
from estategate.infrastructure.repositories import UserRepository
from estategate.infrastructure.security import get_password_hash
from estategate.utils import now_in_app_timezone

from .validators import normalize_email, normalize_phone, require_text

logger = logging.getLogger(__name__)

MEMBER_RESOURCES = {Role.RESIDENT: Resource.RESIDENT, Role.GUARD: Resource.GUARD}


def _resource_for(role: Role) -> Resource:
    try:
        return MEMBER_RESOURCES[role]
    except KeyError:
        raise ValidationError("Only residents and guards can be managed here") from None


def _target_estate(context: SessionContext, estate_id: int | None) -> int:
    if context.role.is_estate_member:
        estate_id = context.estate_id
    if estate_id is None:
        raise ValidationError("An estate is required")
    if not can_access_estate(context, estate_id):
        raise NotFound("Estate not found")
    return estate_id


def _get_member(
    repository: UserRepository, context: SessionContext, member_id: int, role: Role
) -> User:
    member = repository.get(member_id)
    if (
        member is None
        or member.role is not role
        or not can_access_estate(context, member.estate_id)
    ):
        raise NotFound(f"{role.value.capitalize()} not found")
    return member


def create_member(
    session: Session,
    *,
    context: SessionContext,
    role: Role,
    name: str,
    email: str,
    password: str,
    phone: str | None = None,
    apartment_number: str | None = None,
    apartment_type: str | None = None,
) -> User:
    """Register a resident or guard in the caller's estate.

    ``password`` is the generated temporary password; the member must change
    it on first sign in.
    """

    ensure_can(context, Action.CREATE, _resource_for(role))
    estate_id = _target_estate(context, None)
    repository = UserRepository(session)

    email = normalize_email(email)
    if repository.email_taken(email):
        raise ValidationError("Email address is already registered")

    user = User(
        id=None,
        role=role,
        estate_id=estate_id,
        name=require_text(name, "Name"),
        email=email,
        password=get_password_hash(password),
        phone=normalize_phone(phone),
        apartment_number=(apartment_number or "").strip() or None,
        apartment_type=(apartment_type or "").strip() or None,
        must_change_password=True,
        created_by=context.user_id,
        created_at=now_in_app_timezone(),
    )
    try:
        created = repository.create(user)
    except IntegrityError as exc:
        session.rollback()
        raise ValidationError("Email address is already registered") from exc
    except SQLAlchemyError as exc:
        session.rollback()
        logger.exception("Could not create %s in estate %s", role.value, estate_id)
        raise PersistenceError() from exc

    logger.info("User %s created %s %s", context.user_id, role.value, created.id)
    return created


def list_members(
    session: Session,
    *,
    context: SessionContext,
    role: Role,
    estate_id: int | None = None,
    skip: int = 0,
    limit: int | None = 100,
) -> Sequence[User]:
    ensure_can(context, Action.READ, _resource_for(role))
    target = _target_estate(context, estate_id)
    return UserRepository(session).list_by_estate(target, role=role, skip=skip, limit=limit)


def update_member(
    session: Session,
    *,
    context: SessionContext,
    member_id: int,
    role: Role,
    name: str | None = None,
    phone: str | None = None,
    apartment_number: str | None = None,
    apartment_type: str | None = None,
    is_active: bool | None = None,
) -> User:
    ensure_can(context, Action.UPDATE, _resource_for(role))
    repository = UserRepository(session)
    member = _get_member(repository, context, member_id, role)

    updated = replace(
        member,
        name=require_text(name, "Name") if name is not None else member.name,
        phone=normalize_phone(phone) if phone is not None else member.phone,
        apartment_number=(
            apartment_number.strip() or None
            if apartment_number is not None
            else member.apartment_number
        ),
        apartment_type=(
            apartment_type.strip() or None
            if apartment_type is not None
            else member.apartment_type
        ),
        is_active=is_active if is_active is not None else member.is_active,
        updated_by=context.user_id,
        updated_at=now_in_app_timezone(),
    )
    return repository.update(updated)


def delete_member(
    session: Session, *, context: SessionContext, member_id: int, role: Role
) -> None:
    """Soft delete a resident or guard and revoke their sessions."""

    ensure_can(context, Action.DELETE, _resource_for(role))
    repository = UserRepository(session)
    member = _get_member(repository, context, member_id, role)
    repository.delete(member.id, deleted_by=context.user_id, now=now_in_app_timezone())
    logger.info("User %s deleted %s %s", context.user_id, role.value, member_id)


__all__ = ["create_member", "delete_member", "list_members", "update_member"]
