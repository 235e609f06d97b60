"""Domain entity representing a user."""

from dataclasses import dataclass, field
from datetime import datetime

from .role import Role


@dataclass
class User:
    """Core attributes describing an application user."""

    id: int | None
    role: Role
    estate_id: int | None
    name: str
    email: str
    password: str
    phone: str | None = None
    apartment_number: str | None = None
    apartment_type: str | None = None
    must_change_password: bool = False
    session_version: int = 0
    last_login: datetime | None = None
    created_by: int | None = None
    created_at: datetime | None = None
    updated_by: int | None = None
    updated_at: datetime | None = None
    is_active: bool = True
    deleted: bool = False
    deleted_by: int | None = None
    deleted_at: datetime | None = None

    def has_role(self, *roles: Role) -> bool:
        """Return ``True`` when the user holds any of ``roles``."""

        return self.role in roles

    def is_admin(self) -> bool:
        """Return ``True`` when the user administers an estate."""

        return self.role is Role.ADMIN


@dataclass(frozen=True)
class SessionContext:
    """Identity of the caller, built once per request from the access token.

    Every use case receives the context explicitly instead of reading a shared
    "current user".
    """

    user_id: int
    role: Role
    estate_id: int | None
    name: str = ""
    email: str = ""
    owned_estate_ids: frozenset[int] = field(default_factory=frozenset)

    @classmethod
    def for_user(
        cls, user: User, *, owned_estate_ids: frozenset[int] | None = None
    ) -> "SessionContext":
        if user.id is None:
            msg = "Cannot build a session for an unsaved user"
            raise ValueError(msg)
        return cls(
            user_id=user.id,
            role=user.role,
            estate_id=user.estate_id,
            name=user.name,
            email=user.email,
            owned_estate_ids=owned_estate_ids or frozenset(),
        )


__all__ = ["SessionContext", "User"]
