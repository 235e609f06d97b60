"""Use case for seeding platform staff accounts."""

from sqlalchemy.orm import Session

from estategate.domain.entities import PLATFORM_ROLES, Role, User
from estategate.domain.errors import ValidationError
from estategate.infrastructure.repositories import UserRepository
from estategate.infrastructure.security import get_password_hash
from estategate.utils import now_in_app_timezone

from .validators import ensure_password_strength, normalize_email, require_text


def create_platform_user(
    session: Session,
    *,
    name: str,
    email: str,
    password: str,
    role: Role = Role.SUPER_ADMIN,
    must_change_password: bool = False,
) -> User:
    """Create a super admin or developer, who belongs to no estate."""

    if role not in PLATFORM_ROLES:
        raise ValidationError("Only super_admin and developer accounts can be seeded")

    repository = UserRepository(session)
    email = normalize_email(email)
    if repository.email_taken(email):
        raise ValidationError("Email address is already registered")
    ensure_password_strength(password)

    return repository.create(
        User(
            id=None,
            role=role,
            estate_id=None,
            name=require_text(name, "Name"),
            email=email,
            password=get_password_hash(password),
            must_change_password=must_change_password,
            created_at=now_in_app_timezone(),
        )
    )
