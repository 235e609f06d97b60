"""Public helpers for emitting and reading notifications."""

from .events import (
    notify_invitation_cancelled,
    notify_invitation_created,
    notify_invitation_used,
    notify_profile_updated,
    notify_request_resolved,
    notify_request_submitted,
)
from .inbox import (
    list_notifications,
    mark_all_notifications_read,
    mark_notification_read,
)
from .relay import notify, notify_estate_admins, notify_many

__all__ = [
    "list_notifications",
    "mark_all_notifications_read",
    "mark_notification_read",
    "notify",
    "notify_estate_admins",
    "notify_invitation_cancelled",
    "notify_invitation_created",
    "notify_invitation_used",
    "notify_many",
    "notify_profile_updated",
    "notify_request_resolved",
    "notify_request_submitted",
]
