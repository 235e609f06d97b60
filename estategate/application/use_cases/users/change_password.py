"""Use case for a user replacing their own password."""

from dataclasses import replace

from sqlalchemy.orm import Session

from estategate.domain.entities import SessionContext, User
from estategate.domain.errors import NotFound, ValidationError
from estategate.infrastructure.repositories import UserRepository
from estategate.infrastructure.security import get_password_hash, verify_password
from estategate.utils import now_in_app_timezone

from .validators import ensure_password_strength


def change_password(
    session: Session,
    *,
    context: SessionContext,
    current_password: str,
    new_password: str,
) -> User:
    """Replace the caller's password and clear the forced-change flag.

    Tokens issued before the change stop validating.
    """

    repository = UserRepository(session)
    user = repository.get(context.user_id)
    if user is None:
        raise NotFound("User not found")
    if not verify_password(current_password, user.password):
        raise ValidationError("Current password is incorrect")
    ensure_password_strength(new_password)
    if verify_password(new_password, user.password):
        raise ValidationError("New password must be different from the current one")

    return repository.update(
        replace(
            user,
            password=get_password_hash(new_password),
            must_change_password=False,
            updated_by=user.id,
            updated_at=now_in_app_timezone(),
        )
    )
