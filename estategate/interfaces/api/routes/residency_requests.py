"""Requests residents raise with their estate admins."""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from estategate.application.use_cases.residency_requests import (
    list_requests,
    resolve_request,
    submit_request,
)
from estategate.domain.entities import SessionContext
from estategate.domain.errors import DomainError
from estategate.infrastructure.database import get_db
from estategate.interfaces.api.dependencies import get_session_context
from estategate.interfaces.api.routes_helpers import to_http_exception
from estategate.interfaces.api.schemas import (
    ResidencyRequestCreate,
    ResidencyRequestRead,
    ResidencyRequestResolve,
)

router = APIRouter(prefix="/residency-requests", tags=["residency-requests"])


@router.post("/", response_model=ResidencyRequestRead, status_code=status.HTTP_201_CREATED)
def create_request(
    payload: ResidencyRequestCreate,
    db: Session = Depends(get_db),
    context: SessionContext = Depends(get_session_context),
):
    """Submit a request; every admin of the estate is notified."""

    try:
        request = submit_request(
            db,
            context=context,
            request_type=payload.request_type,
            title=payload.title,
            details=payload.details,
            priority=payload.priority,
        )
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return ResidencyRequestRead.model_validate(request)


@router.get("/", response_model=list[ResidencyRequestRead])
def read_requests(
    status_filter: str | None = Query(None, alias="status"),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    db: Session = Depends(get_db),
    context: SessionContext = Depends(get_session_context),
):
    try:
        requests = list_requests(
            db, context=context, status=status_filter, skip=skip, limit=limit
        )
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return [ResidencyRequestRead.model_validate(request) for request in requests]


@router.post("/{request_id}/resolve", response_model=ResidencyRequestRead)
def resolve(
    request_id: int,
    payload: ResidencyRequestResolve,
    db: Session = Depends(get_db),
    context: SessionContext = Depends(get_session_context),
):
    try:
        request = resolve_request(
            db,
            context=context,
            request_id=request_id,
            status=payload.status,
            resolution_note=payload.resolution_note,
        )
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return ResidencyRequestRead.model_validate(request)
