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
    supabase: str
    token_signing: str


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

    Reports whether the configuration needed by the auth workflows is present.
    """
    settings = get_settings()
    supabase_ready = bool(
        settings.supabase_url
        and settings.supabase_anon_key
        and settings.supabase_service_role_key
    )
    signing_ready = bool(settings.jwt_secret)

    return ReadinessResponse(
        status="ready" if supabase_ready and signing_ready else "not_ready",
        supabase="configured" if supabase_ready else "missing",
        token_signing="configured" if signing_ready else "missing",
    )
