"""Domain entity representing a visitor invitation."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from enum import Enum


class InvitationStatus(str, Enum):
    """Lifecycle states of an invitation."""

    PENDING = "pending"
    APPROVED = "approved"
    USED = "used"
    EXPIRED = "expired"

    @property
    def is_terminal(self) -> bool:
        return self in (InvitationStatus.USED, InvitationStatus.EXPIRED)


ACTIVE_STATUSES = frozenset({InvitationStatus.PENDING, InvitationStatus.APPROVED})

# Only the verification gate moves an invitation to ``used`` and it requires
# ``approved``; ``pending`` invitations must be approved first.
ALLOWED_TRANSITIONS: dict[InvitationStatus, frozenset[InvitationStatus]] = {
    InvitationStatus.PENDING: frozenset(
        {InvitationStatus.APPROVED, InvitationStatus.EXPIRED}
    ),
    InvitationStatus.APPROVED: frozenset(
        {InvitationStatus.USED, InvitationStatus.EXPIRED}
    ),
    InvitationStatus.USED: frozenset(),
    InvitationStatus.EXPIRED: frozenset(),
}


def can_transition(current: InvitationStatus, target: InvitationStatus) -> bool:
    """Return ``True`` when ``current -> target`` is a legal status change."""

    return target in ALLOWED_TRANSITIONS[current]


def format_reference(invitation_id: int) -> str:
    """Return the human readable reference for ``invitation_id`` (``INV004``)."""

    return f"INV{invitation_id:03d}"


@dataclass(frozen=True)
class VisitorDetails:
    """Visitor information supplied by the inviting resident."""

    name: str
    phone: str
    purpose: str
    visit_date: date | None
    visit_time: time | None
    email: str | None = None


@dataclass
class Invitation:
    """Time-boxed, single-use authorization for a named visitor."""

    id: int | None
    reference: str | None
    resident_id: int
    estate_id: int
    visitor_name: str
    visitor_phone: str
    purpose: str
    visit_date: date
    visit_time: time
    code: str
    status: InvitationStatus
    expires_at: datetime
    visitor_email: str | None = None
    created_at: datetime | None = None
    used_at: datetime | None = None
    used_by: int | None = None
    cancelled_at: datetime | None = None

    def is_redeemable(self, now: datetime) -> bool:
        """Return ``True`` when the code can still be verified at ``now``.

        The boundary ``expires_at == now`` already counts as expired.
        """

        return self.status is InvitationStatus.APPROVED and self.expires_at > now

    def effective_status(self, now: datetime) -> InvitationStatus:
        """Return the status with time-based expiry applied lazily."""

        if self.status in ACTIVE_STATUSES and self.expires_at <= now:
            return InvitationStatus.EXPIRED
        return self.status


__all__ = [
    "ACTIVE_STATUSES",
    "ALLOWED_TRANSITIONS",
    "Invitation",
    "InvitationStatus",
    "VisitorDetails",
    "can_transition",
    "format_reference",
]
