"""Use case for a resident withdrawing an invitation."""

from __future__ import annotations

import logging
from datetime import datetime

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from estategate.application.use_cases.notifications import notify_invitation_cancelled
from estategate.domain.entities import (
    ACTIVE_STATUSES,
    Invitation,
    InvitationStatus,
    SessionContext,
)
from estategate.domain.errors import NotAuthorized, NotFound, PersistenceError, ValidationError
from estategate.domain.policies import Action, Resource, ensure_can
from estategate.infrastructure.repositories import InvitationRepository
from estategate.utils import now_in_app_timezone, to_app_time

logger = logging.getLogger(__name__)


def cancel_invitation(
    session: Session,
    *,
    context: SessionContext,
    invitation_id: int,
    now: datetime | None = None,
) -> Invitation:
    """Expire one of the caller's live invitations so its code stops working."""

    ensure_can(context, Action.CANCEL, Resource.INVITATION)
    now = to_app_time(now) or now_in_app_timezone()
    repository = InvitationRepository(session)

    invitation = repository.get(invitation_id)
    if invitation is None:
        raise NotFound("Invitation not found")
    if invitation.resident_id != context.user_id:
        raise NotAuthorized()
    if invitation.effective_status(now) not in ACTIVE_STATUSES:
        raise ValidationError("Only pending or approved invitations can be cancelled")

    try:
        changed = repository.update_status(
            invitation_id,
            InvitationStatus.EXPIRED,
            expected=ACTIVE_STATUSES,
            values={"cancelled_at": now},
        )
    except SQLAlchemyError as exc:
        session.rollback()
        logger.exception("Could not cancel invitation %s", invitation_id)
        raise PersistenceError() from exc
    if not changed:
        # Used or cancelled between the read and the update.
        raise ValidationError("Only pending or approved invitations can be cancelled")

    cancelled = repository.get(invitation_id) or invitation
    logger.info("Invitation %s cancelled by resident %s", cancelled.reference, context.user_id)
    notify_invitation_cancelled(session, invitation=cancelled)
    return cancelled


__all__ = ["cancel_invitation"]
