"""Persistence helpers for notification entities."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from sqlalchemy.orm import Query, Session

from estategate.domain.entities import Notification
from estategate.infrastructure.models import NotificationModel
from estategate.utils import now_in_app_timezone, to_app_time, to_storage_time


class NotificationRepository:
    """Store notifications and track which of them each user has read."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, notification_id: int) -> Notification | None:
        model = self.session.get(NotificationModel, notification_id)
        return self._to_entity(model) if model else None

    def list_for_user(
        self,
        user_id: int,
        *,
        unread_only: bool = False,
        limit: int | None = 50,
    ) -> Sequence[Notification]:
        """Return the notifications of ``user_id``, newest first."""

        query = self._unread(user_id) if unread_only else self._owned(user_id)
        query = query.order_by(NotificationModel.created_at.desc(), NotificationModel.id.desc())
        if limit is not None:
            query = query.limit(limit)
        return [self._to_entity(model) for model in query.all()]

    def create(self, notification: Notification) -> Notification:
        model = NotificationModel(
            user_id=notification.user_id,
            event_type=notification.event_type,
            title=notification.title,
            message=notification.message,
            payload=dict(notification.payload or {}),
            created_at=to_storage_time(notification.created_at or now_in_app_timezone()),
            read_at=to_storage_time(notification.read_at),
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def mark_as_read(self, notification_ids: Iterable[int], *, user_id: int) -> int:
        """Stamp the unread rows among ``notification_ids`` that belong to ``user_id``.

        Rows already read keep their first ``read_at``. Returns the number of
        rows that changed.
        """

        ids = sorted({notification_id for notification_id in notification_ids if notification_id})
        if not ids:
            return 0
        return self._stamp_read(self._unread(user_id).filter(NotificationModel.id.in_(ids)))

    def mark_all_as_read(self, user_id: int) -> int:
        return self._stamp_read(self._unread(user_id))

    def _owned(self, user_id: int) -> Query:
        return self.session.query(NotificationModel).filter(NotificationModel.user_id == user_id)

    def _unread(self, user_id: int) -> Query:
        return self._owned(user_id).filter(NotificationModel.read_at.is_(None))

    def _stamp_read(self, query: Query) -> int:
        read_at = to_storage_time(now_in_app_timezone())
        updated = query.update({NotificationModel.read_at: read_at}, synchronize_session=False)
        self.session.commit()
        return updated

    @staticmethod
    def _to_entity(model: NotificationModel) -> Notification:
        return Notification(
            id=model.id,
            user_id=model.user_id,
            event_type=model.event_type,
            title=model.title,
            message=model.message,
            payload=model.payload or {},
            created_at=to_app_time(model.created_at),
            read_at=to_app_time(model.read_at),
        )


__all__ = ["NotificationRepository"]
