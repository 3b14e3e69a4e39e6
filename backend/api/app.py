"""
FastAPI application factory.

Creates and configures the FastAPI application instance.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from shared.config import get_settings as get_app_settings
from shared.exceptions import (
    ShipmatesError,
    ValidationError,
    AuthenticationError,
    AuthorizationError,
    NotFoundError,
    ConflictError,
    ExternalServiceError,
)
from modules.accounts.routes import router as accounts_router
from modules.profiles.routes import router as profiles_router

from .config import get_settings
from .routes import health

logger = logging.getLogger(__name__)

GENERIC_SERVER_ERROR = "Server error, try again later..."

# Most specific first; the first matching family decides the status.
ERROR_STATUS_CODES: list[tuple[type[ShipmatesError], int]] = [
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (AuthenticationError, status.HTTP_401_UNAUTHORIZED),
    (AuthorizationError, status.HTTP_403_FORBIDDEN),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ConflictError, status.HTTP_409_CONFLICT),
    (ExternalServiceError, status.HTTP_503_SERVICE_UNAVAILABLE),
]


def status_for_error(exc: ShipmatesError) -> int:
    """Map an error family to its HTTP status (500 for anything unclassified)."""
    for error_type, status_code in ERROR_STATUS_CODES:
        if isinstance(exc, error_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def shipmates_error_handler(request: Request, exc: ShipmatesError) -> JSONResponse:
    """
    Render a domain error.

    Client errors carry their code, message and details. Infrastructure
    errors are logged with details and rendered with a generic message.
    """
    status_code = status_for_error(exc)

    if status_code >= 500:
        logger.error(
            f"{request.method} {request.url.path} failed: {exc.code}: {exc.message} {exc.details}"
        )
        body = {"error": exc.code, "message": GENERIC_SERVER_ERROR}
    else:
        body = {"error": exc.code, "message": exc.message}
        if exc.details:
            body["details"] = exc.details

    headers = {"WWW-Authenticate": "Bearer"} if status_code == status.HTTP_401_UNAUTHORIZED else None
    return JSONResponse(status_code=status_code, content=body, headers=headers)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Runs startup and shutdown logic.
    """
    # Startup
    settings = get_settings()
    logger.info(f"Starting Shipmates API on {settings.host}:{settings.port}")
    yield
    # Shutdown
    logger.info("Shutting down Shipmates API")


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    settings = get_settings()
    app_settings = get_app_settings()

    configure_logging(app_settings.log_level)

    app = FastAPI(
        title=app_settings.app_name,
        description="Account and session backend for Shipmates",
        version=app_settings.app_version,
        lifespan=lifespan,
        docs_url="/api/docs" if settings.debug else None,
        redoc_url="/api/redoc" if settings.debug else None,
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    app.add_exception_handler(ShipmatesError, shipmates_error_handler)

    # Register routes
    app.include_router(health.router, prefix="/api", tags=["health"])
    app.include_router(accounts_router, prefix="/api/users", tags=["users"])
    app.include_router(profiles_router, prefix="/api/users", tags=["profiles"])

    return app


# Application instance for uvicorn
app = create_app()
