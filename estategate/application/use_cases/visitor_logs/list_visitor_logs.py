"""Use case for reading the gate entry log."""

from collections.abc import Sequence

from sqlalchemy.orm import Session

from estategate.domain.entities import SessionContext, VisitorLogEntry
from estategate.domain.policies import (
    Action,
    Resource,
    can_access_estate,
    ensure_can,
    row_scope,
)
from estategate.infrastructure.repositories import VisitorLogRepository


def list_visitor_logs(
    session: Session,
    *,
    context: SessionContext,
    skip: int = 0,
    limit: int | None = 100,
) -> Sequence[VisitorLogEntry]:
    """Return entries of the caller's estates, newest first."""

    ensure_can(context, Action.READ, Resource.VISITOR_LOG)
    entries = VisitorLogRepository(session).list(
        row_scope(context, Resource.VISITOR_LOG), skip=skip, limit=limit
    )
    return [entry for entry in entries if can_access_estate(context, entry.estate_id)]
