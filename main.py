import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from estategate.config import get_settings
from estategate.domain.errors import DomainError
from estategate.infrastructure.database import engine, initialize_database
from estategate.interfaces.api.routes import register_routes
from estategate.interfaces.api.routes_helpers import to_http_exception

logger = logging.getLogger("estategate")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the database schema on startup and release the pool on shutdown."""

    initialize_database()
    logger.info("Estate Gate started")
    yield
    engine.dispose()


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    """Answer a domain failure no route translated itself."""

    http_error = to_http_exception(exc)
    return JSONResponse(status_code=http_error.status_code, content={"detail": http_error.detail})


def create_app() -> FastAPI:
    """Build the API: logging, CORS, error handling and every router."""

    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(title="Estate Gate", lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        # Clients swap in the refreshed token after every call.
        expose_headers=["X-Refreshed-Token"],
    )
    app.add_exception_handler(DomainError, domain_error_handler)

    @app.get("/health", tags=["health"])
    def health() -> dict[str, str]:
        return {"status": "ok"}

    register_routes(app)
    return app


app = create_app()
