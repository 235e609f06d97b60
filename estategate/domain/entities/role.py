"""Closed set of roles a user can hold."""

from enum import Enum


class Role(str, Enum):
    """Role variants recognised by the access-control policy."""

    RESIDENT = "resident"
    GUARD = "guard"
    ADMIN = "admin"
    SUPER_ADMIN = "super_admin"
    DEVELOPER = "developer"

    @property
    def is_estate_member(self) -> bool:
        """Return ``True`` for roles that belong to exactly one estate."""

        return self in ESTATE_ROLES

    @property
    def is_platform_staff(self) -> bool:
        return self in PLATFORM_ROLES

    @classmethod
    def parse(cls, value: "str | Role") -> "Role":
        """Return the role named by ``value`` or raise ``ValueError``."""

        if isinstance(value, Role):
            return value
        return cls(str(value).strip().lower())


ESTATE_ROLES = frozenset({Role.RESIDENT, Role.GUARD, Role.ADMIN})
PLATFORM_ROLES = frozenset({Role.SUPER_ADMIN, Role.DEVELOPER})


__all__ = ["ESTATE_ROLES", "PLATFORM_ROLES", "Role"]
