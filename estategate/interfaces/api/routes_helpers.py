"""Helper utilities shared across API route handlers."""

import logging

from fastapi import HTTPException, status

from estategate.domain.errors import (
    DomainError,
    NotAuthorized,
    NotFound,
    PersistenceError,
    ValidationError,
)
from estategate.infrastructure.email import send_temporary_password_email

logger = logging.getLogger(__name__)


def to_http_exception(exc: DomainError) -> HTTPException:
    """Translate a domain failure into the HTTP error reported to the client."""

    reason = getattr(exc, "reason", None)
    if reason is not None:
        return HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"reason": reason, "message": exc.message},
        )
    if isinstance(exc, ValidationError):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=exc.message)
    if isinstance(exc, NotAuthorized):
        return HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=exc.message)
    if isinstance(exc, NotFound):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=exc.message)
    if isinstance(exc, PersistenceError):
        return HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=exc.message)
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=exc.message)


def deliver_credentials(email: str, password: str) -> None:
    """Email a temporary password; failures are only logged."""

    if not send_temporary_password_email(email, password):
        logger.warning("Could not send the credentials email to %s", email)
