"""Use case for creating an estate together with its first admin."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from estategate.application.use_cases.users.validators import normalize_email, require_text
from estategate.domain.entities import Estate, Role, SessionContext, User
from estategate.domain.errors import PersistenceError, ValidationError
from estategate.domain.policies import Action, Resource, ensure_can
from estategate.infrastructure.repositories import EstateRepository, UserRepository
from estategate.infrastructure.security import generate_secure_password, get_password_hash
from estategate.utils import now_in_app_timezone

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EstateData:
    """Attributes of an estate supplied by platform staff."""

    name: str
    address: str | None = None
    city: str | None = None
    state: str | None = None
    expiry_date: date | None = None


@dataclass(frozen=True)
class ProvisionResult:
    estate: Estate
    admin: User
    temporary_password: str


def _admin_name(email: str) -> str:
    local_part = email.split("@", 1)[0]
    words = local_part.replace(".", " ").replace("_", " ").replace("-", " ").split()
    return " ".join(word.capitalize() for word in words) or "Estate Admin"


def provision_estate(
    session: Session,
    *,
    context: SessionContext,
    estate_data: EstateData,
    admin_email: str,
) -> ProvisionResult:
    """Create ``estate_data`` and an admin account for ``admin_email``.

    The estate and the admin are committed together. The caller is recorded as
    the estate's owner. Delivering the temporary password is left to the
    caller.
    """

    ensure_can(context, Action.CREATE, Resource.ESTATE)
    if estate_data is None or not admin_email:
        raise ValidationError("Estate data and admin email are required in the request body.")

    name = require_text(estate_data.name, "Estate name")
    admin_email = normalize_email(admin_email)
    users = UserRepository(session)
    if users.email_taken(admin_email):
        raise ValidationError("Email address is already registered")

    now = now_in_app_timezone()
    temporary_password = generate_secure_password()
    try:
        estate = EstateRepository(session).create(
            Estate(
                id=None,
                name=name,
                address=estate_data.address,
                city=estate_data.city,
                state=estate_data.state,
                expiry_date=estate_data.expiry_date,
                owner_id=context.user_id,
            ),
            commit=False,
        )
        admin = users.create(
            User(
                id=None,
                role=Role.ADMIN,
                estate_id=estate.id,
                name=_admin_name(admin_email),
                email=admin_email,
                password=get_password_hash(temporary_password),
                must_change_password=True,
                created_by=context.user_id,
                created_at=now,
            )
        )
    except SQLAlchemyError as exc:
        session.rollback()
        logger.exception("Could not provision estate %s", name)
        raise PersistenceError() from exc

    estate = EstateRepository(session).get(estate.id) or estate
    logger.info(
        "Estate %s provisioned by user %s with admin %s",
        estate.id,
        context.user_id,
        admin.id,
    )
    return ProvisionResult(estate=estate, admin=admin, temporary_password=temporary_password)


__all__ = ["EstateData", "ProvisionResult", "provision_estate"]
