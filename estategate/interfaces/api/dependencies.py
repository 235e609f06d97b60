"""FastAPI dependency utilities."""

from fastapi import Depends, HTTPException, Request, Response, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from estategate.domain.entities import Role, SessionContext, User
from estategate.infrastructure.database import get_db
from estategate.infrastructure.repositories import EstateRepository, UserRepository
from estategate.infrastructure.security import (
    decode_access_token,
    refresh_access_token,
    session_signature,
)

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/token")


def _credentials_exception(detail: str = "Could not validate credentials") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def resolve_current_user(token: str, db: Session) -> User:
    """Resolve the authenticated user for the provided token."""

    try:
        payload = decode_access_token(token)
    except ValueError as exc:
        raise _credentials_exception() from exc

    email = payload.get("sub")
    signature_claim = payload.get("sig")
    if not isinstance(email, str) or not isinstance(signature_claim, str):
        raise _credentials_exception()

    user = UserRepository(db).get_by_email(email)
    if user is None:
        raise _credentials_exception("User not found")

    # Password changes, deactivation and sign-out all move the signature.
    if signature_claim != session_signature(user):
        raise _credentials_exception()

    return user


def build_session_context(user: User, db: Session) -> SessionContext:
    """Return the per-request identity passed into every use case."""

    owned: frozenset[int] = frozenset()
    if user.role is Role.SUPER_ADMIN:
        owned = EstateRepository(db).list_ids_by_owner(user.id)
    return SessionContext.for_user(user, owned_estate_ids=owned)


def get_current_user(
    request: Request,
    response: Response,
    token: str = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
) -> User:
    """Return the authenticated user from the provided token."""

    user = resolve_current_user(token, db)

    try:
        refreshed_token = refresh_access_token(token)
    except ValueError as exc:
        raise _credentials_exception() from exc

    response.headers["X-Refreshed-Token"] = refreshed_token
    request.state.refreshed_token = refreshed_token

    return user


def get_current_active_user(current_user: User = Depends(get_current_user)) -> User:
    """Ensure the authenticated user is active."""

    if not current_user.is_active:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Inactive user",
        )
    return current_user


def get_session_context(
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db),
) -> SessionContext:
    return build_session_context(current_user, db)
