"""Reading and resolving resident requests."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import replace

from sqlalchemy.orm import Session

from estategate.application.use_cases.notifications import notify_request_resolved
from estategate.domain.entities import (
    REQUEST_STATUS_OPEN,
    RESOLUTION_STATUSES,
    ResidencyRequest,
    Role,
    SessionContext,
)
from estategate.domain.errors import NotFound, ValidationError
from estategate.domain.policies import (
    Action,
    Resource,
    can_access_estate,
    ensure_can,
    row_scope,
)
from estategate.infrastructure.repositories import ResidencyRequestRepository
from estategate.utils import now_in_app_timezone


def _visible(context: SessionContext, request: ResidencyRequest) -> bool:
    if context.role is Role.RESIDENT:
        return request.resident_id == context.user_id
    return can_access_estate(context, request.estate_id)


def list_requests(
    session: Session,
    *,
    context: SessionContext,
    status: str | None = None,
    skip: int = 0,
    limit: int | None = 100,
) -> Sequence[ResidencyRequest]:
    ensure_can(context, Action.READ, Resource.RESIDENCY_REQUEST)
    requests = ResidencyRequestRepository(session).list(
        row_scope(context, Resource.RESIDENCY_REQUEST), status=status, skip=skip, limit=limit
    )
    return [request for request in requests if _visible(context, request)]


def resolve_request(
    session: Session,
    *,
    context: SessionContext,
    request_id: int,
    status: str,
    resolution_note: str | None = None,
) -> ResidencyRequest:
    """Close an open request and notify the resident."""

    ensure_can(context, Action.UPDATE, Resource.RESIDENCY_REQUEST)
    if status not in RESOLUTION_STATUSES:
        raise ValidationError("Status must be one of: " + ", ".join(sorted(RESOLUTION_STATUSES)))

    repository = ResidencyRequestRepository(session)
    request = repository.get(request_id)
    if request is None or not _visible(context, request):
        raise NotFound("Request not found")
    if request.status != REQUEST_STATUS_OPEN:
        raise ValidationError("Request has already been resolved")

    resolved = repository.resolve(
        replace(
            request,
            status=status,
            resolution_note=(resolution_note or "").strip() or None,
            resolved_at=now_in_app_timezone(),
            resolved_by=context.user_id,
        )
    )
    notify_request_resolved(session, request=resolved)
    return resolved
