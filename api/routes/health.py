"""
Health check endpoints.

Provides endpoints for monitoring application health and readiness.
"""

from fastapi import APIRouter
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
    database: str
    auth: str
    admin: str


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """
    Basic health check endpoint.

    Returns 200 if the API is running.
    """
    return HealthResponse(status="healthy", version=get_settings().app_version)


@router.get("/ready", response_model=ReadinessResponse)
async def readiness_check() -> ReadinessResponse:
    """
    Readiness check endpoint.

    Reports whether the store and token verification are configured.
    Does not open a connection.
    """
    settings = get_settings()
    database = "configured" if settings.supabase_url and settings.supabase_service_role_key else "missing"
    auth = "configured" if settings.supabase_jwt_secret else "missing"
    return ReadinessResponse(
        status="ready" if database == auth == "configured" else "not_ready",
        database=database,
        auth=auth,
        admin="enabled" if settings.admin_api_key else "disabled",
    )
