"""Push stored notifications to the sockets of their recipients."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from anyio import from_thread

from estategate.domain.entities import Notification

from .manager import NotificationConnectionManager, notification_manager

logger = logging.getLogger(__name__)


def serialize_notification(notification: Notification) -> dict[str, Any]:
    """Return the JSON form of ``notification`` used on the socket."""

    def stamp(value):
        return value.isoformat() if value is not None else None

    return {
        "id": notification.id,
        "event_type": notification.event_type,
        "title": notification.title,
        "message": notification.message,
        "payload": dict(notification.payload or {}),
        "is_read": notification.is_read,
        "created_at": stamp(notification.created_at),
        "read_at": stamp(notification.read_at),
    }


class NotificationPublisher:
    """Schedule socket delivery from both sync and async callers.

    Use cases run in FastAPI's worker threads, so delivery is handed back to
    the event loop through ``anyio.from_thread``. Callers outside any loop
    (scripts, plain unit tests) skip realtime delivery.
    """

    def __init__(self, manager: NotificationConnectionManager) -> None:
        self._manager = manager

    def dispatch(self, notification: Notification) -> bool:
        """Return ``True`` if a delivery was scheduled."""

        user_id = notification.user_id
        if not self._manager.has_connections(user_id):
            return False

        message = {"type": "notification", "data": serialize_notification(notification)}
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            loop = None
        if loop is not None:
            loop.create_task(self._manager.send_to_user(user_id, message))
            return True
        try:
            from_thread.run(self._manager.send_to_user, user_id, message)
        except RuntimeError:
            logger.debug("No event loop; notification %s not pushed", notification.id)
            return False
        return True


notification_publisher = NotificationPublisher(notification_manager)


def dispatch_notification(notification: Notification) -> bool:
    return notification_publisher.dispatch(notification)


__all__ = [
    "NotificationPublisher",
    "dispatch_notification",
    "notification_publisher",
    "serialize_notification",
]
