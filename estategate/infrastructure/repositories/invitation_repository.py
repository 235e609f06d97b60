"""Persistence helpers for visitor invitations."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import datetime

from sqlalchemy.orm import Query, Session

from estategate.domain.entities import (
    ACTIVE_STATUSES,
    Invitation,
    InvitationStatus,
    can_transition,
    format_reference,
)
from estategate.domain.policies import RowScope
from estategate.infrastructure.models import InvitationModel
from estategate.utils import to_app_time, to_storage_time


class InvitationRepository:
    """Provide storage operations for :class:`Invitation` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def create(self, invitation: Invitation) -> Invitation:
        model = InvitationModel()
        self._apply_entity_to_model(model, invitation)
        self.session.add(model)
        self.session.flush()
        model.reference = format_reference(model.id)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def get(self, invitation_id: int) -> Invitation | None:
        model = self.session.get(InvitationModel, invitation_id)
        return self._to_entity(model) if model else None

    def find_active_by_code(
        self, code: str, *, estate_id: int | None, now: datetime
    ) -> Sequence[Invitation]:
        """Return approved, unexpired invitations whose code equals ``code``."""

        query = (
            self.session.query(InvitationModel)
            .filter(InvitationModel.code == code)
            .filter(InvitationModel.status == InvitationStatus.APPROVED.value)
            .filter(InvitationModel.expires_at > to_storage_time(now))
        )
        if estate_id is not None:
            query = query.filter(InvitationModel.estate_id == estate_id)
        return [self._to_entity(model) for model in query.order_by(InvitationModel.id).all()]

    def code_in_use(self, code: str, *, estate_id: int, now: datetime) -> bool:
        """Return ``True`` when another live invitation of the estate holds ``code``."""

        match = (
            self.session.query(InvitationModel.id)
            .filter(InvitationModel.estate_id == estate_id)
            .filter(InvitationModel.code == code)
            .filter(InvitationModel.status.in_(_values(ACTIVE_STATUSES)))
            .filter(InvitationModel.expires_at > to_storage_time(now))
            .first()
        )
        return match is not None

    def update_status(
        self,
        invitation_id: int,
        status: InvitationStatus,
        *,
        expected: Iterable[InvitationStatus],
        values: dict[str, object] | None = None,
    ) -> bool:
        """Move the invitation to ``status`` if it is currently in ``expected``.

        Returns ``False`` when no row matched or the change is not a legal
        transition. Commits on success.
        """

        expected = [current for current in expected if can_transition(current, status)]
        if not expected:
            return False
        changes: dict[object, object] = {InvitationModel.status: status.value}
        for column, value in (values or {}).items():
            if isinstance(value, datetime):
                value = to_storage_time(value)
            changes[getattr(InvitationModel, column)] = value
        updated = (
            self.session.query(InvitationModel)
            .filter(InvitationModel.id == invitation_id)
            .filter(InvitationModel.status.in_(_values(expected)))
            .update(changes, synchronize_session=False)
        )
        if not updated:
            self.session.rollback()
            return False
        self.session.commit()
        return True

    def consume(self, invitation_id: int, *, guard_id: int, now: datetime) -> bool:
        """Conditionally mark the invitation as used.

        The update only matches an approved, unexpired row, so of two
        concurrent calls exactly one sees an updated row. The caller commits.
        """

        naive_now = to_storage_time(now)
        updated = (
            self.session.query(InvitationModel)
            .filter(InvitationModel.id == invitation_id)
            .filter(InvitationModel.status == InvitationStatus.APPROVED.value)
            .filter(InvitationModel.expires_at > naive_now)
            .update(
                {
                    InvitationModel.status: InvitationStatus.USED.value,
                    InvitationModel.used_at: naive_now,
                    InvitationModel.used_by: guard_id,
                },
                synchronize_session=False,
            )
        )
        return updated == 1

    def list(
        self,
        scope: RowScope,
        *,
        status: InvitationStatus | None = None,
        skip: int = 0,
        limit: int | None = 100,
    ) -> Sequence[Invitation]:
        if scope.is_empty:
            return []
        query = self._scoped(self.session.query(InvitationModel), scope)
        if status is not None:
            query = query.filter(InvitationModel.status == status.value)
        query = query.order_by(InvitationModel.created_at.desc(), InvitationModel.id.desc())
        query = query.offset(skip)
        if limit is not None:
            query = query.limit(limit)
        return [self._to_entity(model) for model in query.all()]

    @staticmethod
    def _scoped(query: Query, scope: RowScope) -> Query:
        if scope.unrestricted:
            return query
        if scope.resident_id is not None:
            return query.filter(InvitationModel.resident_id == scope.resident_id)
        if scope.estate_id is not None:
            return query.filter(InvitationModel.estate_id == scope.estate_id)
        return query.filter(InvitationModel.estate_id.in_(sorted(scope.estate_ids or ())))

    @staticmethod
    def _apply_entity_to_model(model: InvitationModel, invitation: Invitation) -> None:
        model.resident_id = invitation.resident_id
        model.estate_id = invitation.estate_id
        model.visitor_name = invitation.visitor_name
        model.visitor_phone = invitation.visitor_phone
        model.visitor_email = invitation.visitor_email
        model.purpose = invitation.purpose
        model.visit_date = invitation.visit_date
        model.visit_time = invitation.visit_time
        model.code = invitation.code
        model.status = invitation.status.value
        if invitation.created_at is not None:
            model.created_at = to_storage_time(invitation.created_at)
        model.expires_at = to_storage_time(invitation.expires_at)

    @staticmethod
    def _to_entity(model: InvitationModel) -> Invitation:
        return Invitation(
            id=model.id,
            reference=model.reference,
            resident_id=model.resident_id,
            estate_id=model.estate_id,
            visitor_name=model.visitor_name,
            visitor_phone=model.visitor_phone,
            visitor_email=model.visitor_email,
            purpose=model.purpose,
            visit_date=model.visit_date,
            visit_time=model.visit_time,
            code=model.code,
            status=InvitationStatus(model.status),
            created_at=to_app_time(model.created_at),
            expires_at=to_app_time(model.expires_at),
            used_at=to_app_time(model.used_at),
            used_by=model.used_by,
            cancelled_at=to_app_time(model.cancelled_at),
        )


def _values(statuses: Iterable[InvitationStatus]) -> list[str]:
    return sorted(status.value for status in statuses)


__all__ = ["InvitationRepository"]
