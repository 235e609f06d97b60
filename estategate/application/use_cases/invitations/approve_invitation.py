"""Use case for an estate admin approving a pending invitation."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from estategate.config import get_settings
from estategate.domain.entities import Invitation, InvitationStatus, SessionContext
from estategate.domain.errors import NotFound, PersistenceError, ValidationError
from estategate.domain.policies import Action, Resource, can_access_invitation, ensure_can
from estategate.infrastructure.repositories import InvitationRepository
from estategate.utils import now_in_app_timezone, to_app_time

logger = logging.getLogger(__name__)


def approve_invitation(
    session: Session,
    *,
    context: SessionContext,
    invitation_id: int,
    now: datetime | None = None,
) -> Invitation:
    """Move a pending invitation to approved and restart its validity window."""

    ensure_can(context, Action.APPROVE, Resource.INVITATION)
    now = to_app_time(now) or now_in_app_timezone()
    repository = InvitationRepository(session)

    invitation = repository.get(invitation_id)
    if invitation is None or not can_access_invitation(context, invitation):
        raise NotFound("Invitation not found")
    if invitation.status is not InvitationStatus.PENDING:
        raise ValidationError("Only pending invitations can be approved")

    expires_at = now + timedelta(hours=get_settings().invitation_validity_hours)
    try:
        changed = repository.update_status(
            invitation_id,
            InvitationStatus.APPROVED,
            expected=[InvitationStatus.PENDING],
            values={"expires_at": expires_at},
        )
    except SQLAlchemyError as exc:
        session.rollback()
        logger.exception("Could not approve invitation %s", invitation_id)
        raise PersistenceError() from exc
    if not changed:
        raise ValidationError("Only pending invitations can be approved")

    logger.info("Invitation %s approved by user %s", invitation.reference, context.user_id)
    return repository.get(invitation_id) or invitation


__all__ = ["approve_invitation"]
