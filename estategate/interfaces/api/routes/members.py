"""Routes for estate admins managing residents and guards."""

from fastapi import APIRouter, BackgroundTasks, Depends, Query, Response, status
from sqlalchemy.orm import Session

from estategate.application.use_cases.users import (
    create_member,
    delete_member,
    list_members,
    update_member,
)
from estategate.domain.entities import Role, SessionContext
from estategate.domain.errors import DomainError
from estategate.infrastructure.database import get_db
from estategate.infrastructure.security import generate_secure_password
from estategate.interfaces.api.dependencies import get_session_context
from estategate.interfaces.api.routes_helpers import deliver_credentials, to_http_exception
from estategate.interfaces.api.schemas import MemberCreate, MemberUpdate, UserRead


def build_member_router(role: Role, prefix: str) -> APIRouter:
    """Return the CRUD router for estate members holding ``role``."""

    router = APIRouter(prefix=prefix, tags=[prefix.strip("/")])

    @router.post("/", response_model=UserRead, status_code=status.HTTP_201_CREATED)
    def register_member(
        payload: MemberCreate,
        background_tasks: BackgroundTasks,
        db: Session = Depends(get_db),
        context: SessionContext = Depends(get_session_context),
    ):
        generated_password = generate_secure_password()
        try:
            member = create_member(
                db,
                context=context,
                role=role,
                name=payload.name,
                email=payload.email,
                password=generated_password,
                phone=payload.phone,
                apartment_number=payload.apartment_number,
                apartment_type=payload.apartment_type,
            )
        except DomainError as exc:
            raise to_http_exception(exc) from exc

        background_tasks.add_task(deliver_credentials, member.email, generated_password)
        return UserRead.model_validate(member)

    @router.get("/", response_model=list[UserRead])
    def read_members(
        estate_id: int | None = Query(
            None, description="Estate to list; platform staff only"
        ),
        skip: int = Query(0, ge=0),
        limit: int = Query(100, ge=1, le=500),
        db: Session = Depends(get_db),
        context: SessionContext = Depends(get_session_context),
    ):
        try:
            members = list_members(
                db, context=context, role=role, estate_id=estate_id, skip=skip, limit=limit
            )
        except DomainError as exc:
            raise to_http_exception(exc) from exc
        return [UserRead.model_validate(member) for member in members]

    @router.patch("/{member_id}", response_model=UserRead)
    def edit_member(
        member_id: int,
        payload: MemberUpdate,
        db: Session = Depends(get_db),
        context: SessionContext = Depends(get_session_context),
    ):
        try:
            member = update_member(
                db,
                context=context,
                member_id=member_id,
                role=role,
                **payload.model_dump(exclude_unset=True),
            )
        except DomainError as exc:
            raise to_http_exception(exc) from exc
        return UserRead.model_validate(member)

    @router.delete("/{member_id}", status_code=status.HTTP_204_NO_CONTENT)
    def remove_member(
        member_id: int,
        db: Session = Depends(get_db),
        context: SessionContext = Depends(get_session_context),
    ) -> Response:
        try:
            delete_member(db, context=context, member_id=member_id, role=role)
        except DomainError as exc:
            raise to_http_exception(exc) from exc
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    return router


residents_router = build_member_router(Role.RESIDENT, "/residents")
guards_router = build_member_router(Role.GUARD, "/guards")
