"""Realtime notification delivery over websockets."""

from .manager import NotificationConnectionManager, notification_manager
from .poller import NotificationPoller
from .publisher import (
    NotificationPublisher,
    dispatch_notification,
    notification_publisher,
    serialize_notification,
)

__all__ = [
    "NotificationConnectionManager",
    "NotificationPoller",
    "NotificationPublisher",
    "dispatch_notification",
    "notification_manager",
    "notification_publisher",
    "serialize_notification",
]
