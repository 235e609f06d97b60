"""Use case for a resident raising a request with their estate admins."""

from __future__ import annotations

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from estategate.application.use_cases.notifications import notify_request_submitted
from estategate.domain.entities import (
    REQUEST_PRIORITIES,
    REQUEST_STATUS_OPEN,
    REQUEST_TYPES,
    ResidencyRequest,
    SessionContext,
)
from estategate.domain.errors import NotFound, PersistenceError, ValidationError
from estategate.domain.policies import Action, Resource, ensure_can
from estategate.infrastructure.repositories import ResidencyRequestRepository, UserRepository
from estategate.utils import now_in_app_timezone

logger = logging.getLogger(__name__)


def submit_request(
    session: Session,
    *,
    context: SessionContext,
    request_type: str,
    title: str,
    details: str,
    priority: str = "medium",
) -> ResidencyRequest:
    ensure_can(context, Action.CREATE, Resource.RESIDENCY_REQUEST)
    if request_type not in REQUEST_TYPES:
        raise ValidationError("Unknown request type")
    if priority not in REQUEST_PRIORITIES:
        raise ValidationError("Priority must be one of: " + ", ".join(REQUEST_PRIORITIES))
    title = (title or "").strip()
    details = (details or "").strip()
    if not title or not details:
        raise ValidationError("Title and details are required")

    resident = UserRepository(session).get(context.user_id)
    if resident is None or resident.estate_id is None:
        raise NotFound("User not found")

    try:
        request = ResidencyRequestRepository(session).create(
            ResidencyRequest(
                id=None,
                estate_id=resident.estate_id,
                resident_id=resident.id,
                request_type=request_type,
                title=title,
                details=details,
                priority=priority,
                status=REQUEST_STATUS_OPEN,
                created_at=now_in_app_timezone(),
            )
        )
    except SQLAlchemyError as exc:
        session.rollback()
        logger.exception("Could not store %s for resident %s", request_type, resident.id)
        raise PersistenceError() from exc

    notify_request_submitted(session, request=request, resident=resident)
    return request
