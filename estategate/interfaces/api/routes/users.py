"""Routes for the signed-in user's own profile."""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from estategate.application.use_cases.users import update_profile
from estategate.domain.entities import SessionContext, User
from estategate.domain.errors import DomainError
from estategate.infrastructure.database import get_db
from estategate.interfaces.api.dependencies import get_current_active_user, get_session_context
from estategate.interfaces.api.routes_helpers import to_http_exception
from estategate.interfaces.api.schemas import ProfileUpdate, UserRead

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=UserRead)
def read_current_user(current_user: User = Depends(get_current_active_user)):
    return UserRead.model_validate(current_user)


@router.patch("/me", response_model=UserRead)
def update_current_user(
    payload: ProfileUpdate,
    db: Session = Depends(get_db),
    context: SessionContext = Depends(get_session_context),
):
    """Update the caller's profile. Residents and guards trigger an admin notification."""

    changes = payload.model_dump(exclude_unset=True)
    if not changes:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="No changes were provided"
        )
    try:
        user = update_profile(db, context=context, **changes)
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return UserRead.model_validate(user)
