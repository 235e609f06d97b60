"""Use case for issuing a visitor invitation."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from estategate.application.use_cases.notifications import notify_invitation_created
from estategate.config import get_settings
from estategate.domain.entities import (
    Invitation,
    InvitationStatus,
    SessionContext,
    VisitorDetails,
)
from estategate.domain.errors import NotAuthorized, PersistenceError
from estategate.domain.policies import Action, Resource, ensure_can
from estategate.infrastructure.repositories import InvitationRepository
from estategate.utils import now_in_app_timezone, to_app_time

from .codes import allocate_code
from .validators import validate_visitor_details

logger = logging.getLogger(__name__)


def create_invitation(
    session: Session,
    *,
    context: SessionContext,
    resident_id: int,
    estate_id: int,
    details: VisitorDetails,
    now: datetime | None = None,
) -> Invitation:
    """Create an invitation with a fresh one-time code for the calling resident.

    A resident may only invite on their own behalf and into their own estate.
    New invitations are approved immediately unless ``AUTO_APPROVE_INVITATIONS``
    is disabled, in which case they wait as ``pending`` for an estate admin.
    """

    ensure_can(context, Action.CREATE, Resource.INVITATION)
    if resident_id != context.user_id or estate_id != context.estate_id:
        raise NotAuthorized()

    now = to_app_time(now) or now_in_app_timezone()
    cleaned = validate_visitor_details(details, today=now.date())
    settings = get_settings()
    status = (
        InvitationStatus.APPROVED
        if settings.auto_approve_invitations
        else InvitationStatus.PENDING
    )

    repository = InvitationRepository(session)
    try:
        code = allocate_code(repository, estate_id=estate_id, now=now)
        invitation = repository.create(
            Invitation(
                id=None,
                reference=None,
                resident_id=resident_id,
                estate_id=estate_id,
                visitor_name=cleaned.name,
                visitor_phone=cleaned.phone,
                visitor_email=cleaned.email,
                purpose=cleaned.purpose,
                visit_date=cleaned.visit_date,
                visit_time=cleaned.visit_time,
                code=code,
                status=status,
                created_at=now,
                expires_at=now + timedelta(hours=settings.invitation_validity_hours),
            )
        )
    except SQLAlchemyError as exc:
        session.rollback()
        logger.exception("Could not store invitation for resident %s", resident_id)
        raise PersistenceError() from exc

    logger.info(
        "Invitation %s created by resident %s in estate %s (%s)",
        invitation.reference,
        resident_id,
        estate_id,
        invitation.status.value,
    )
    notify_invitation_created(session, invitation=invitation)
    return invitation


__all__ = ["create_invitation"]
