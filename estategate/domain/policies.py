"""Access-control policy for every role.

``can`` answers whether a role may perform an action on a kind of resource.
``row_scope`` turns a caller into the filter repositories apply in SQL, and the
``can_access_*`` helpers re-check individual rows after they are loaded.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .entities import Invitation, Role, SessionContext
from .errors import NotAuthorized


class Action(str, Enum):
    CREATE = "create"
    READ = "read"
    UPDATE = "update"
    DELETE = "delete"
    CANCEL = "cancel"
    APPROVE = "approve"
    VERIFY = "verify"


class Resource(str, Enum):
    INVITATION = "invitation"
    VISITOR_LOG = "visitor_log"
    NOTIFICATION = "notification"
    RESIDENT = "resident"
    GUARD = "guard"
    ESTATE = "estate"
    RESIDENCY_REQUEST = "residency_request"
    PROFILE = "profile"
    DEMO_REQUEST = "demo_request"


_OWN_INBOX = {
    Resource.NOTIFICATION: {Action.READ, Action.UPDATE},
    Resource.PROFILE: {Action.READ, Action.UPDATE},
}

_PLATFORM_GRANTS = {
    **_OWN_INBOX,
    Resource.ESTATE: {Action.CREATE, Action.READ, Action.UPDATE},
    Resource.INVITATION: {Action.READ},
    Resource.VISITOR_LOG: {Action.READ},
    Resource.RESIDENT: {Action.READ},
    Resource.GUARD: {Action.READ},
    Resource.DEMO_REQUEST: {Action.READ},
}

POLICY: dict[Role, dict[Resource, set[Action]]] = {
    Role.RESIDENT: {
        **_OWN_INBOX,
        Resource.INVITATION: {Action.CREATE, Action.READ, Action.CANCEL},
        Resource.RESIDENCY_REQUEST: {Action.CREATE, Action.READ},
    },
    Role.GUARD: {
        **_OWN_INBOX,
        Resource.INVITATION: {Action.READ, Action.VERIFY},
        Resource.VISITOR_LOG: {Action.READ},
    },
    Role.ADMIN: {
        **_OWN_INBOX,
        Resource.INVITATION: {Action.READ, Action.VERIFY, Action.APPROVE},
        Resource.VISITOR_LOG: {Action.READ},
        Resource.RESIDENT: {Action.CREATE, Action.READ, Action.UPDATE, Action.DELETE},
        Resource.GUARD: {Action.CREATE, Action.READ, Action.UPDATE, Action.DELETE},
        Resource.RESIDENCY_REQUEST: {Action.READ, Action.UPDATE},
        Resource.ESTATE: {Action.READ},
    },
    Role.SUPER_ADMIN: _PLATFORM_GRANTS,
    Role.DEVELOPER: _PLATFORM_GRANTS,
}


def can(role: Role, action: Action, resource: Resource) -> bool:
    """Return ``True`` when ``role`` may perform ``action`` on ``resource``."""

    return action in POLICY.get(role, {}).get(resource, set())


def ensure_can(context: SessionContext, action: Action, resource: Resource) -> None:
    """Raise :class:`NotAuthorized` unless the caller's role allows the action."""

    if not can(context.role, action, resource):
        raise NotAuthorized()


@dataclass(frozen=True)
class RowScope:
    """Row filter derived from the caller.

    Exactly one restriction applies: a resident id, a single estate, a set of
    estates or nothing at all (``unrestricted``).
    """

    resident_id: int | None = None
    estate_id: int | None = None
    estate_ids: frozenset[int] | None = None
    unrestricted: bool = False

    @property
    def is_empty(self) -> bool:
        return (
            not self.unrestricted
            and self.resident_id is None
            and self.estate_id is None
            and not self.estate_ids
        )


def row_scope(context: SessionContext, resource: Resource = Resource.INVITATION) -> RowScope:
    """Return the rows of ``resource`` the caller may read."""

    if context.role is Role.RESIDENT and resource in (
        Resource.INVITATION,
        Resource.RESIDENCY_REQUEST,
    ):
        return RowScope(resident_id=context.user_id)
    if context.role.is_estate_member:
        if context.estate_id is None:
            return RowScope()
        return RowScope(estate_id=context.estate_id)
    if context.role is Role.DEVELOPER:
        return RowScope(unrestricted=True)
    return RowScope(estate_ids=context.owned_estate_ids)


def can_access_estate(context: SessionContext, estate_id: int | None) -> bool:
    """Return ``True`` when ``estate_id`` lies within the caller's estates."""

    if estate_id is None:
        return False
    if context.role.is_estate_member:
        return context.estate_id == estate_id
    if context.role is Role.DEVELOPER:
        return True
    return estate_id in context.owned_estate_ids


def can_access_invitation(context: SessionContext, invitation: Invitation) -> bool:
    """Row-level check for a single invitation."""

    if context.role is Role.RESIDENT:
        return invitation.resident_id == context.user_id
    return can_access_estate(context, invitation.estate_id)


__all__ = [
    "Action",
    "POLICY",
    "Resource",
    "RowScope",
    "can",
    "can_access_estate",
    "can_access_invitation",
    "ensure_can",
    "row_scope",
]
