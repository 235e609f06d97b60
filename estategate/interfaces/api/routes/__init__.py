from fastapi import FastAPI

from .auth import router as auth_router
from .demo_requests import router as demo_requests_router
from .estates import router as estates_router
from .invitations import router as invitations_router
from .members import guards_router, residents_router
from .notifications import router as notifications_router
from .residency_requests import router as residency_requests_router
from .users import router as users_router
from .verification import router as verification_router
from .visitor_logs import router as visitor_logs_router


def register_routes(app: FastAPI) -> None:
    """Register every API router on the FastAPI application."""

    app.include_router(auth_router)
    app.include_router(users_router)
    app.include_router(invitations_router)
    app.include_router(verification_router)
    app.include_router(visitor_logs_router)
    app.include_router(notifications_router)
    app.include_router(residents_router)
    app.include_router(guards_router)
    app.include_router(estates_router)
    app.include_router(residency_requests_router)
    app.include_router(demo_requests_router)
