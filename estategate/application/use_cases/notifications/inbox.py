"""Read side of the notification relay."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from estategate.domain.entities import Notification, SessionContext
from estategate.domain.errors import NotFound
from estategate.domain.policies import Action, Resource, ensure_can
from estategate.infrastructure.repositories import NotificationRepository


def list_notifications(
    session: Session,
    *,
    context: SessionContext,
    unread_only: bool = False,
    limit: int | None = 50,
) -> Sequence[Notification]:
    """Return the caller's notifications, newest first."""

    ensure_can(context, Action.READ, Resource.NOTIFICATION)
    return NotificationRepository(session).list_for_user(
        context.user_id, unread_only=unread_only, limit=limit
    )


def mark_notification_read(
    session: Session, *, context: SessionContext, notification_id: int
) -> Notification:
    """Mark one of the caller's notifications as read.

    Idempotent: an already read notification is returned unchanged.
    """

    ensure_can(context, Action.UPDATE, Resource.NOTIFICATION)
    repository = NotificationRepository(session)
    notification = repository.get(notification_id)
    if notification is None or notification.user_id != context.user_id:
        raise NotFound("Notification not found")
    if notification.is_read:
        return notification
    repository.mark_as_read([notification_id], user_id=context.user_id)
    return repository.get(notification_id) or notification


def mark_all_notifications_read(session: Session, *, context: SessionContext) -> int:
    """Mark every unread notification of the caller; returns how many changed."""

    ensure_can(context, Action.UPDATE, Resource.NOTIFICATION)
    return NotificationRepository(session).mark_all_as_read(context.user_id)


__all__ = [
    "list_notifications",
    "mark_all_notifications_read",
    "mark_notification_read",
]
