"""Fire-and-forget persistence of notifications."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from estategate.domain.entities import Notification, Role
from estategate.infrastructure.notifications import dispatch_notification
from estategate.infrastructure.repositories import NotificationRepository, UserRepository
from estategate.utils import now_in_app_timezone

logger = logging.getLogger(__name__)


def notify(
    session: Session,
    *,
    user_id: int,
    event_type: str,
    title: str,
    message: str,
    payload: dict[str, Any] | None = None,
) -> Notification | None:
    """Persist a notification for ``user_id`` and push it if they are connected.

    Never raises on storage failure: the failure is logged and ``None`` is
    returned so the action that triggered the notification still succeeds.
    """

    notification = Notification(
        id=None,
        user_id=user_id,
        event_type=event_type,
        title=title,
        message=message,
        payload=payload or {},
        created_at=now_in_app_timezone(),
        read_at=None,
    )
    try:
        saved = NotificationRepository(session).create(notification)
    except SQLAlchemyError:
        session.rollback()
        logger.exception(
            "Could not store %s notification for user %s", event_type, user_id
        )
        return None

    try:
        dispatch_notification(saved)
    except Exception:  # pragma: no cover - realtime push is best effort
        logger.exception("Realtime delivery failed for notification %s", saved.id)
    return saved


def notify_many(
    session: Session,
    user_ids: Iterable[int],
    *,
    event_type: str,
    title: str,
    message: str,
    payload: dict[str, Any] | None = None,
) -> list[Notification]:
    """Notify every distinct user in ``user_ids``; returns the stored rows."""

    saved: list[Notification] = []
    seen: set[int] = set()
    for user_id in user_ids:
        if not user_id or user_id in seen:
            continue
        seen.add(user_id)
        notification = notify(
            session,
            user_id=user_id,
            event_type=event_type,
            title=title,
            message=message,
            payload=payload,
        )
        if notification is not None:
            saved.append(notification)
    return saved


def notify_estate_admins(
    session: Session,
    estate_id: int,
    *,
    event_type: str,
    title: str,
    message: str,
    payload: dict[str, Any] | None = None,
) -> list[Notification]:
    """Notify every active admin of ``estate_id``."""

    try:
        admin_ids = UserRepository(session).list_ids_by_role(Role.ADMIN, estate_id=estate_id)
    except SQLAlchemyError:
        session.rollback()
        logger.exception("Could not resolve admins of estate %s", estate_id)
        return []
    return notify_many(
        session,
        admin_ids,
        event_type=event_type,
        title=title,
        message=message,
        payload=payload,
    )


__all__ = ["notify", "notify_estate_admins", "notify_many"]
