"""Use case for signing in with an email and password."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum, auto

from sqlalchemy.orm import Session

from estategate.domain.entities import User
from estategate.domain.errors import ValidationError
from estategate.infrastructure.repositories import EstateRepository, UserRepository
from estategate.infrastructure.security import (
    get_password_hash,
    needs_rehash,
    verify_password,
)
from estategate.utils import now_in_app_timezone

from .validators import normalize_email

logger = logging.getLogger(__name__)


class SignInStatus(Enum):
    SUCCESS = auto()
    INVALID_CREDENTIALS = auto()
    INACTIVE = auto()
    ESTATE_INACTIVE = auto()


@dataclass(frozen=True)
class SignInResult:
    status: SignInStatus
    user: User | None = None


def sign_in(session: Session, *, email: str, password: str) -> SignInResult:
    """Check the credentials and record the login.

    Members of a deactivated estate are refused like deactivated users. A
    successful sign in stamps ``last_login`` and upgrades the password hash
    when the hashing parameters changed, so tokens must be issued from the
    returned user.
    """

    users = UserRepository(session)
    try:
        user = users.get_by_email(normalize_email(email))
    except ValidationError:
        user = None
    if user is None or not verify_password(password, user.password):
        return SignInResult(SignInStatus.INVALID_CREDENTIALS)

    if not user.is_active:
        return SignInResult(SignInStatus.INACTIVE, user)
    if user.role.is_estate_member:
        estate = EstateRepository(session).get(user.estate_id) if user.estate_id else None
        if estate is None or not estate.is_active:
            return SignInResult(SignInStatus.ESTATE_INACTIVE, user)

    password_hash = user.password
    if needs_rehash(password_hash):
        logger.info("Upgrading the password hash of user %s", user.id)
        password_hash = get_password_hash(password)
    user = users.update(
        replace(user, password=password_hash, last_login=now_in_app_timezone())
    )
    return SignInResult(SignInStatus.SUCCESS, user)


__all__ = ["SignInResult", "SignInStatus", "sign_in"]
