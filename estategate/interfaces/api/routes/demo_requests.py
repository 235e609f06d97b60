"""Demo requests from the public landing page."""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from estategate.application.use_cases.demo_requests import (
    count_demo_requests,
    list_demo_requests,
    submit_demo_request,
)
from estategate.domain.entities import SessionContext
from estategate.domain.errors import DomainError
from estategate.infrastructure.database import get_db
from estategate.interfaces.api.dependencies import get_session_context
from estategate.interfaces.api.routes_helpers import to_http_exception
from estategate.interfaces.api.schemas import (
    DemoRequestCount,
    DemoRequestCreate,
    DemoRequestListResponse,
    DemoRequestRead,
)

router = APIRouter(prefix="/demo-requests", tags=["demo-requests"])


@router.post("/", response_model=DemoRequestRead, status_code=status.HTTP_201_CREATED)
def create_demo_request(payload: DemoRequestCreate, db: Session = Depends(get_db)):
    """Submit a demo request. No token is required."""

    try:
        request = submit_demo_request(db, **payload.model_dump())
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return DemoRequestRead.model_validate(request)


@router.get("/", response_model=DemoRequestListResponse)
def read_demo_requests(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    db: Session = Depends(get_db),
    context: SessionContext = Depends(get_session_context),
):
    try:
        requests, total = list_demo_requests(db, context=context, page=page, limit=limit)
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return DemoRequestListResponse(
        data=[DemoRequestRead.model_validate(request) for request in requests], count=total
    )


@router.get("/count", response_model=DemoRequestCount)
def read_demo_request_count(
    db: Session = Depends(get_db),
    context: SessionContext = Depends(get_session_context),
):
    try:
        total = count_demo_requests(db, context=context)
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return DemoRequestCount(count=total)
