"""
Health check endpoints.

Provides endpoints for monitoring application health and readiness.
"""

from fastapi import APIRouter, Response, status
from pydantic import BaseModel

from shared.config import get_settings

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    version: str


class ReadinessResponse(BaseModel):
    """Readiness check response model."""

    status: str
    store: str
    tokens: str


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """
    Basic health check endpoint.

    Returns 200 if the API is running.
    """
    return HealthResponse(status="healthy", version=get_settings().app_version)


@router.get("/ready", response_model=ReadinessResponse)
async def readiness_check(response: Response) -> ReadinessResponse:
    """
    Readiness check endpoint.

    Reports whether the account store and token signing are configured.
    Returns 503 until both are.
    """
    settings = get_settings()

    if settings.account_store_backend == "memory":
        store = "memory"
    elif settings.supabase_url and settings.supabase_service_role_key:
        store = "configured"
    else:
        store = "missing"

    tokens = "configured" if settings.jwt_access_secret and settings.jwt_refresh_secret else "missing"

    ready = store != "missing" and tokens != "missing"
    if not ready:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    return ReadinessResponse(
        status="ready" if ready else "not_ready",
        store=store,
        tokens=tokens,
    )
