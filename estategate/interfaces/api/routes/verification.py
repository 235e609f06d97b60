"""Gate verification of invitation codes."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from estategate.application.use_cases.invitations import verify_invitation
from estategate.domain.entities import SessionContext
from estategate.domain.errors import DomainError
from estategate.infrastructure.database import get_db
from estategate.interfaces.api.dependencies import get_session_context
from estategate.interfaces.api.routes.invitations import to_invitation_read
from estategate.interfaces.api.routes_helpers import to_http_exception
from estategate.interfaces.api.schemas import (
    VerificationRequest,
    VerificationResponse,
    VisitorLogRead,
)

router = APIRouter(prefix="/verification", tags=["verification"])


@router.post("/", response_model=VerificationResponse)
def verify_code(
    payload: VerificationRequest,
    db: Session = Depends(get_db),
    context: SessionContext = Depends(get_session_context),
):
    """Redeem a visitor's code and record their entry.

    Unknown, expired and already used codes are all answered with the same
    ``invalid_or_expired`` error.
    """

    try:
        result = verify_invitation(db, context=context, code=payload.code)
    except DomainError as exc:
        raise to_http_exception(exc) from exc

    return VerificationResponse(
        invitation=to_invitation_read(result.invitation, context),
        visitor_log=VisitorLogRead.model_validate(result.entry),
        resident_name=result.resident_name,
        apartment_number=result.apartment_number,
        estate_name=result.estate_name,
    )
