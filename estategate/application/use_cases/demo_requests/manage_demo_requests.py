"""Submission and review of demo requests."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from estategate.application.use_cases.users.validators import (
    normalize_email,
    normalize_phone,
    require_text,
)
from estategate.domain.entities import (
    DEFAULT_DEMO_SOURCE,
    MIN_DEMO_RESIDENTS,
    MIN_DEMO_TABLETS,
    DemoRequest,
    SessionContext,
)
from estategate.domain.errors import PersistenceError, ValidationError
from estategate.domain.policies import Action, Resource, ensure_can
from estategate.infrastructure.repositories import DemoRequestRepository
from estategate.utils import now_in_app_timezone

logger = logging.getLogger(__name__)


def _optional(value: str | None) -> str | None:
    return (value or "").strip() or None


def submit_demo_request(
    session: Session,
    *,
    full_name: str,
    email: str,
    phone: str | None = None,
    organisation: str | None = None,
    residents: int | None = None,
    tablets: int | None = None,
    notes: str | None = None,
    source: str | None = None,
) -> DemoRequest:
    """Store a demo request. Anyone may submit one; no session is needed.

    Sizes below the smallest plan are raised to it.
    """

    request = DemoRequest(
        id=None,
        full_name=require_text(full_name, "Full name"),
        email=normalize_email(email),
        phone=normalize_phone(phone),
        organisation=_optional(organisation),
        residents=max(MIN_DEMO_RESIDENTS, residents or MIN_DEMO_RESIDENTS),
        tablets=max(MIN_DEMO_TABLETS, tablets or MIN_DEMO_TABLETS),
        notes=_optional(notes),
        source=_optional(source) or DEFAULT_DEMO_SOURCE,
        created_at=now_in_app_timezone(),
    )
    try:
        created = DemoRequestRepository(session).create(request)
    except SQLAlchemyError as exc:
        session.rollback()
        logger.exception("Could not store demo request from %s", request.email)
        raise PersistenceError() from exc

    logger.info("Demo request %s received from %s", created.id, created.source)
    return created


def list_demo_requests(
    session: Session,
    *,
    context: SessionContext,
    page: int = 1,
    limit: int = 10,
) -> tuple[Sequence[DemoRequest], int]:
    """Return one page of demo requests, newest first, and the exact total."""

    ensure_can(context, Action.READ, Resource.DEMO_REQUEST)
    if page < 1 or limit < 1:
        raise ValidationError("Page and limit must be positive")
    return DemoRequestRepository(session).page(skip=(page - 1) * limit, limit=limit)


def count_demo_requests(session: Session, *, context: SessionContext) -> int:
    ensure_can(context, Action.READ, Resource.DEMO_REQUEST)
    return DemoRequestRepository(session).count()


__all__ = ["count_demo_requests", "list_demo_requests", "submit_demo_request"]
