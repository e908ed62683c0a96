"""
Health check endpoints.

Provides endpoints for monitoring application health and readiness.
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from shared.config import Settings

from ..dependencies import get_app_settings

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    version: str


class ReadinessResponse(BaseModel):
    """Readiness check response model."""

    status: str
    database: str
    signing: str
    mail: str


@router.get("/health", response_model=HealthResponse)
async def health_check(settings: Settings = Depends(get_app_settings)) -> HealthResponse:
    """
    Basic health check endpoint.

    Returns 200 if the API is running.
    """
    return HealthResponse(status="healthy", version=settings.app_version)


@router.get("/ready", response_model=ReadinessResponse)
async def readiness_check(settings: Settings = Depends(get_app_settings)) -> ReadinessResponse:
    """
    Readiness check endpoint.

    Reports which required settings are present; does not contact Supabase.
    """
    database = "configured" if settings.supabase_url and settings.supabase_service_role_key else "missing"
    signing = "configured" if settings.token_secret else "missing"
    mail = "configured" if settings.resend_api_key else "disabled"
    return ReadinessResponse(
        status="ready" if database == signing == "configured" else "degraded",
        database=database,
        signing=signing,
        mail=mail,
    )
