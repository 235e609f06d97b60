"""Use case for redeeming an invitation code at the gate."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from estategate.application.use_cases.notifications import notify_invitation_used
from estategate.domain.entities import (
    VERIFICATION_METHOD_OTP,
    VISITOR_LOG_STATUS_ENTERED,
    Invitation,
    InvitationStatus,
    SessionContext,
    VisitorLogEntry,
)
from estategate.domain.errors import (
    ConflictError,
    InvalidOrExpiredCode,
    PersistenceError,
    ValidationError,
)
from estategate.domain.policies import Action, Resource, can_access_invitation, ensure_can
from estategate.infrastructure.repositories import (
    EstateRepository,
    InvitationRepository,
    UserRepository,
    VisitorLogRepository,
)
from estategate.infrastructure.security import normalize_otp_code
from estategate.utils import now_in_app_timezone, to_app_time

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VerificationResult:
    """Outcome of a successful verification."""

    invitation: Invitation
    entry: VisitorLogEntry
    resident_name: str | None
    apartment_number: str | None
    estate_name: str | None


def verify_invitation(
    session: Session,
    *,
    context: SessionContext,
    code: str,
    now: datetime | None = None,
) -> VerificationResult:
    """Consume the invitation holding ``code`` and record the visitor's entry.

    Unknown, expired, already used and ambiguous codes all raise
    :class:`InvalidOrExpiredCode`; losing a race against another guard raises
    :class:`ConflictError`. Both carry the same message.
    """

    ensure_can(context, Action.VERIFY, Resource.INVITATION)
    normalized = normalize_otp_code(code or "")
    if not normalized:
        raise ValidationError("A code is required")

    now = to_app_time(now) or now_in_app_timezone()
    repository = InvitationRepository(session)
    try:
        matches = repository.find_active_by_code(
            normalized, estate_id=context.estate_id, now=now
        )
    except SQLAlchemyError as exc:
        session.rollback()
        logger.exception("Invitation lookup failed")
        raise PersistenceError() from exc

    if not matches:
        logger.info("Rejected code attempt by user %s", context.user_id)
        raise InvalidOrExpiredCode()
    if len(matches) > 1:
        logger.warning(
            "Code shared by %s live invitations in estate %s; refusing entry",
            len(matches),
            context.estate_id,
        )
        raise InvalidOrExpiredCode()

    invitation = matches[0]
    if not can_access_invitation(context, invitation):
        logger.warning(
            "User %s matched invitation %s outside their estate",
            context.user_id,
            invitation.id,
        )
        raise InvalidOrExpiredCode()

    try:
        if not repository.consume(invitation.id, guard_id=context.user_id, now=now):
            session.rollback()
            logger.info("Invitation %s was consumed concurrently", invitation.id)
            raise ConflictError()
        entry = VisitorLogRepository(session).create(
            VisitorLogEntry(
                id=None,
                invitation_id=invitation.id,
                guard_id=context.user_id,
                estate_id=invitation.estate_id,
                visitor_name=invitation.visitor_name,
                visitor_phone=invitation.visitor_phone,
                verification_method=VERIFICATION_METHOD_OTP,
                status=VISITOR_LOG_STATUS_ENTERED,
                created_at=now,
            )
        )
    except SQLAlchemyError as exc:
        session.rollback()
        logger.exception("Could not record entry for invitation %s", invitation.id)
        raise PersistenceError() from exc

    consumed = repository.get(invitation.id) or invitation
    logger.info(
        "Invitation %s verified by user %s (log %s)",
        consumed.reference,
        context.user_id,
        entry.id,
    )
    notify_invitation_used(session, invitation=consumed, entry=entry)

    resident = UserRepository(session).get(consumed.resident_id, include_deleted=True)
    estate = EstateRepository(session).get(consumed.estate_id)
    return VerificationResult(
        invitation=consumed,
        entry=entry,
        resident_name=resident.name if resident else None,
        apartment_number=resident.apartment_number if resident else None,
        estate_name=estate.name if estate else None,
    )


__all__ = ["VerificationResult", "verify_invitation"]
