"""Read access to the gate entry log."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from estategate.application.use_cases.visitor_logs import list_visitor_logs
from estategate.domain.entities import SessionContext
from estategate.domain.errors import DomainError
from estategate.infrastructure.database import get_db
from estategate.interfaces.api.dependencies import get_session_context
from estategate.interfaces.api.routes_helpers import to_http_exception
from estategate.interfaces.api.schemas import VisitorLogRead

router = APIRouter(prefix="/visitor-logs", tags=["visitor-logs"])


@router.get("/", response_model=list[VisitorLogRead])
def read_visitor_logs(
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    db: Session = Depends(get_db),
    context: SessionContext = Depends(get_session_context),
):
    try:
        entries = list_visitor_logs(db, context=context, skip=skip, limit=limit)
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return [VisitorLogRead.model_validate(entry) for entry in entries]
