"""Persistence helpers for the visitor entry log."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from estategate.domain.entities import VisitorLogEntry
from estategate.domain.policies import RowScope
from estategate.infrastructure.models import (
    InvitationModel,
    UserModel,
    VisitorLogModel,
)
from estategate.utils import to_app_time, to_storage_time


class VisitorLogRepository:
    """Append and read :class:`VisitorLogEntry` records. Entries are never updated."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def create(self, entry: VisitorLogEntry, *, commit: bool = True) -> VisitorLogEntry:
        model = VisitorLogModel(
            invitation_id=entry.invitation_id,
            guard_id=entry.guard_id,
            estate_id=entry.estate_id,
            visitor_name=entry.visitor_name,
            visitor_phone=entry.visitor_phone,
            verification_method=entry.verification_method,
            status=entry.status,
        )
        if entry.created_at is not None:
            model.created_at = to_storage_time(entry.created_at)
        self.session.add(model)
        if commit:
            self.session.commit()
        else:
            self.session.flush()
        self.session.refresh(model)
        return self._to_entity(model)

    def count_for_invitation(self, invitation_id: int) -> int:
        return (
            self.session.query(VisitorLogModel)
            .filter(VisitorLogModel.invitation_id == invitation_id)
            .count()
        )

    def list(
        self, scope: RowScope, *, skip: int = 0, limit: int | None = 100
    ) -> Sequence[VisitorLogEntry]:
        if scope.is_empty or scope.resident_id is not None:
            return []
        query = (
            self.session.query(VisitorLogModel, InvitationModel.purpose, UserModel.name)
            .join(InvitationModel, VisitorLogModel.invitation_id == InvitationModel.id)
            .join(UserModel, VisitorLogModel.guard_id == UserModel.id)
        )
        if scope.estate_id is not None:
            query = query.filter(VisitorLogModel.estate_id == scope.estate_id)
        elif not scope.unrestricted:
            query = query.filter(
                VisitorLogModel.estate_id.in_(sorted(scope.estate_ids or ()))
            )
        query = query.order_by(VisitorLogModel.created_at.desc(), VisitorLogModel.id.desc())
        query = query.offset(skip)
        if limit is not None:
            query = query.limit(limit)
        return [
            self._to_entity(model, purpose=purpose, guard_name=guard_name)
            for model, purpose, guard_name in query.all()
        ]

    @staticmethod
    def _to_entity(
        model: VisitorLogModel,
        *,
        purpose: str | None = None,
        guard_name: str | None = None,
    ) -> VisitorLogEntry:
        return VisitorLogEntry(
            id=model.id,
            invitation_id=model.invitation_id,
            guard_id=model.guard_id,
            estate_id=model.estate_id,
            visitor_name=model.visitor_name,
            visitor_phone=model.visitor_phone,
            verification_method=model.verification_method,
            status=model.status,
            created_at=to_app_time(model.created_at),
            purpose=purpose,
            guard_name=guard_name,
        )


__all__ = ["VisitorLogRepository"]
