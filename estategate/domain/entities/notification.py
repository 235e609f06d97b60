"""Domain entity representing a user notification."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

NOTIFICATION_INVITE_CREATED = "invite_created"
NOTIFICATION_INVITE_USED = "invite_used"
NOTIFICATION_INVITE_CANCELLED = "invite_cancelled"
NOTIFICATION_RESIDENCY_CHANGE_REQUEST = "residency_change_request"
NOTIFICATION_MAINTENANCE_REQUEST = "maintenance_request"
NOTIFICATION_CUSTOM_REQUEST = "custom_request"
NOTIFICATION_UNLOCK_REQUEST = "unlock_request"
NOTIFICATION_UNLOCK_APPROVED = "unlock_approved"
NOTIFICATION_REQUEST_RESOLVED = "request_resolved"
NOTIFICATION_PROFILE_UPDATED = "profile_updated"


@dataclass
class Notification:
    """Information message delivered to a specific user."""

    id: int | None
    user_id: int
    event_type: str
    title: str
    message: str
    payload: dict[str, Any] = field(default_factory=dict)
    created_at: datetime | None = None
    read_at: datetime | None = None

    @property
    def is_read(self) -> bool:
        return self.read_at is not None


__all__ = [
    "NOTIFICATION_CUSTOM_REQUEST",
    "NOTIFICATION_INVITE_CANCELLED",
    "NOTIFICATION_INVITE_CREATED",
    "NOTIFICATION_INVITE_USED",
    "NOTIFICATION_MAINTENANCE_REQUEST",
    "NOTIFICATION_PROFILE_UPDATED",
    "NOTIFICATION_REQUEST_RESOLVED",
    "NOTIFICATION_RESIDENCY_CHANGE_REQUEST",
    "NOTIFICATION_UNLOCK_APPROVED",
    "NOTIFICATION_UNLOCK_REQUEST",
    "Notification",
]
