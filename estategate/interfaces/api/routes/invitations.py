"""Routes for residents inviting visitors and admins reviewing invitations."""

import logging

from fastapi import APIRouter, BackgroundTasks, Depends, Query, status
from sqlalchemy.orm import Session

from estategate.application.use_cases.invitations import (
    approve_invitation,
    cancel_invitation,
    create_invitation,
    get_invitation,
    list_invitations,
)
from estategate.domain.entities import (
    Invitation,
    InvitationStatus,
    SessionContext,
    VisitorDetails,
)
from estategate.domain.errors import DomainError
from estategate.infrastructure.database import get_db
from estategate.infrastructure.email import send_visitor_invitation_email
from estategate.infrastructure.repositories import EstateRepository
from estategate.interfaces.api.dependencies import get_session_context
from estategate.interfaces.api.routes_helpers import to_http_exception
from estategate.interfaces.api.schemas import InvitationCreate, InvitationRead
from estategate.utils import now_in_app_timezone

router = APIRouter(prefix="/invitations", tags=["invitations"])
logger = logging.getLogger(__name__)


def to_invitation_read(invitation: Invitation, context: SessionContext) -> InvitationRead:
    """Serialize ``invitation`` for ``context``; the code stays with its resident."""

    read = InvitationRead.model_validate(invitation)
    return read.model_copy(
        update={
            "status": invitation.effective_status(now_in_app_timezone()),
            "code": invitation.code if invitation.resident_id == context.user_id else None,
        }
    )


def _email_visitor(
    email: str, invitation: Invitation, resident_name: str, estate_name: str
) -> None:
    delivered = send_visitor_invitation_email(
        email,
        visitor_name=invitation.visitor_name,
        resident_name=resident_name,
        estate_name=estate_name,
        code=invitation.code,
        expires_at=invitation.expires_at.strftime("%Y-%m-%d %H:%M"),
    )
    if not delivered:
        logger.warning("Could not email the code of invitation %s", invitation.reference)


@router.post("/", response_model=InvitationRead, status_code=status.HTTP_201_CREATED)
def invite_visitor(
    payload: InvitationCreate,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    context: SessionContext = Depends(get_session_context),
):
    """Issue a one-time code for a visitor of the calling resident."""

    details = VisitorDetails(
        name=payload.visitor_name,
        phone=payload.visitor_phone,
        purpose=payload.purpose,
        visit_date=payload.visit_date,
        visit_time=payload.visit_time,
        email=payload.visitor_email,
    )
    try:
        invitation = create_invitation(
            db,
            context=context,
            resident_id=payload.resident_id if payload.resident_id is not None else context.user_id,
            estate_id=payload.estate_id if payload.estate_id is not None else context.estate_id,
            details=details,
        )
    except DomainError as exc:
        raise to_http_exception(exc) from exc

    if invitation.visitor_email:
        estate = EstateRepository(db).get(invitation.estate_id)
        background_tasks.add_task(
            _email_visitor,
            invitation.visitor_email,
            invitation,
            context.name,
            estate.name if estate else "the estate",
        )
    return to_invitation_read(invitation, context)


@router.get("/", response_model=list[InvitationRead])
def read_invitations(
    status_filter: InvitationStatus | None = Query(None, alias="status"),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    db: Session = Depends(get_db),
    context: SessionContext = Depends(get_session_context),
):
    """Return the invitations visible to the caller, newest first."""

    try:
        invitations = list_invitations(
            db, context=context, status=status_filter, skip=skip, limit=limit
        )
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return [to_invitation_read(invitation, context) for invitation in invitations]


@router.get("/{invitation_id}", response_model=InvitationRead)
def read_invitation(
    invitation_id: int,
    db: Session = Depends(get_db),
    context: SessionContext = Depends(get_session_context),
):
    try:
        invitation = get_invitation(db, context=context, invitation_id=invitation_id)
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return to_invitation_read(invitation, context)


@router.post("/{invitation_id}/cancel", response_model=InvitationRead)
def cancel_visitor_invitation(
    invitation_id: int,
    db: Session = Depends(get_db),
    context: SessionContext = Depends(get_session_context),
):
    try:
        invitation = cancel_invitation(db, context=context, invitation_id=invitation_id)
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return to_invitation_read(invitation, context)


@router.post("/{invitation_id}/approve", response_model=InvitationRead)
def approve_visitor_invitation(
    invitation_id: int,
    db: Session = Depends(get_db),
    context: SessionContext = Depends(get_session_context),
):
    try:
        invitation = approve_invitation(db, context=context, invitation_id=invitation_id)
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return to_invitation_read(invitation, context)
