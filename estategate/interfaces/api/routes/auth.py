"""Sign in, sign out and password changes."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session

from estategate.application.use_cases.users import (
    SignInStatus,
    change_password,
    sign_in,
    sign_out,
)
from estategate.domain.entities import SessionContext, User
from estategate.domain.errors import DomainError
from estategate.infrastructure.database import get_db
from estategate.infrastructure.security import create_user_access_token
from estategate.interfaces.api.dependencies import get_session_context
from estategate.interfaces.api.routes_helpers import to_http_exception
from estategate.interfaces.api.schemas import ChangePasswordRequest, MessageResponse, Token

router = APIRouter(prefix="/auth", tags=["auth"])
logger = logging.getLogger(__name__)


def _token_response(user: User) -> Token:
    return Token(
        access_token=create_user_access_token(user),
        token_type="bearer",
        role=user.role.value,
        estate_id=user.estate_id,
        must_change_password=user.must_change_password,
    )


# OAuth2PasswordRequestForm names the email field "username".
@router.post("/token", response_model=Token)
def login_for_access_token(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: Session = Depends(get_db),
):
    """Authenticate by email and password and return a bearer token."""

    result = sign_in(db, email=form_data.username, password=form_data.password)

    if result.status is SignInStatus.INVALID_CREDENTIALS:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if result.status is SignInStatus.INACTIVE:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Inactive user",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if result.status is SignInStatus.ESTATE_INACTIVE:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Estate is inactive",
        )

    logger.info("User %s signed in", result.user.id)
    return _token_response(result.user)


@router.post("/logout", response_model=MessageResponse)
def logout(
    db: Session = Depends(get_db),
    context: SessionContext = Depends(get_session_context),
) -> MessageResponse:
    """Revoke every token issued to the caller."""

    sign_out(db, context=context)
    return MessageResponse(message="Signed out")


@router.post("/change-password", response_model=Token)
def change_own_password(
    payload: ChangePasswordRequest,
    db: Session = Depends(get_db),
    context: SessionContext = Depends(get_session_context),
):
    """Replace the caller's password and return a token for the new credentials."""

    try:
        user = change_password(
            db,
            context=context,
            current_password=payload.current_password,
            new_password=payload.new_password,
        )
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return _token_response(user)
