"""Estate provisioning and maintenance by platform staff."""

import logging
from datetime import date

from fastapi import APIRouter, BackgroundTasks, Depends, Query, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from estategate.application.use_cases.estates import (
    EstateData,
    get_estate,
    list_estates,
    provision_estate,
    update_estate,
)
from estategate.domain.entities import SessionContext
from estategate.domain.errors import DomainError, NotAuthorized
from estategate.infrastructure.database import get_db
from estategate.infrastructure.repositories import EstateFilters
from estategate.interfaces.api.dependencies import get_session_context
from estategate.interfaces.api.routes_helpers import deliver_credentials, to_http_exception
from estategate.interfaces.api.schemas import (
    EstateListResponse,
    EstateProvisionRequest,
    EstateProvisionResponse,
    EstateRead,
    EstateUpdate,
    UserRead,
)

router = APIRouter(prefix="/estates", tags=["estates"])
logger = logging.getLogger(__name__)


@router.post("/provision", response_model=EstateProvisionResponse)
def provision(
    payload: EstateProvisionRequest,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    context: SessionContext = Depends(get_session_context),
):
    """Create an estate with its admin and email the admin a temporary password.

    Failures other than authorization are answered with ``400 {"error": ...}``.
    """

    estate_data = None
    if payload.estate_data is not None:
        estate_data = EstateData(**payload.estate_data.model_dump())
    try:
        result = provision_estate(
            db,
            context=context,
            estate_data=estate_data,
            admin_email=payload.admin_email or "",
        )
    except NotAuthorized as exc:
        raise to_http_exception(exc) from exc
    except DomainError as exc:
        logger.info("Estate provisioning rejected: %s", exc.message)
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST, content={"error": exc.message}
        )

    background_tasks.add_task(
        deliver_credentials, result.admin.email, result.temporary_password
    )
    return EstateProvisionResponse(
        success=True,
        estate=EstateRead.model_validate(result.estate),
        admin=UserRead.model_validate(result.admin),
    )


@router.get("/", response_model=EstateListResponse)
def search_estates(
    search: str | None = Query(None, description="Matches name, city or state"),
    registered_from: date | None = None,
    registered_to: date | None = None,
    expires_from: date | None = None,
    expires_to: date | None = None,
    page: int = Query(1, ge=1),
    page_size: int = Query(10, ge=1, le=100),
    db: Session = Depends(get_db),
    context: SessionContext = Depends(get_session_context),
):
    filters = EstateFilters(
        search=search,
        registered_from=registered_from,
        registered_to=registered_to,
        expires_from=expires_from,
        expires_to=expires_to,
    )
    try:
        estates, total = list_estates(
            db,
            context=context,
            filters=filters,
            skip=(page - 1) * page_size,
            limit=page_size,
        )
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return EstateListResponse(
        data=[EstateRead.model_validate(estate) for estate in estates], count=total
    )


@router.get("/{estate_id}", response_model=EstateRead)
def read_estate(
    estate_id: int,
    db: Session = Depends(get_db),
    context: SessionContext = Depends(get_session_context),
):
    try:
        estate = get_estate(db, context=context, estate_id=estate_id)
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return EstateRead.model_validate(estate)


@router.patch("/{estate_id}", response_model=EstateRead)
def edit_estate(
    estate_id: int,
    payload: EstateUpdate,
    db: Session = Depends(get_db),
    context: SessionContext = Depends(get_session_context),
):
    try:
        estate = update_estate(
            db,
            context=context,
            estate_id=estate_id,
            changes=payload.model_dump(exclude_unset=True),
        )
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return EstateRead.model_validate(estate)
