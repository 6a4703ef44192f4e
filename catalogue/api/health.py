"""Health check endpoints.

Provides endpoints for monitoring service health and readiness.
"""

from fastapi import APIRouter
from pydantic import BaseModel

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response schema."""

    status: str
    service: str
    version: str


class ReadinessResponse(BaseModel):
    """Readiness check response schema."""

    status: str
    store_backend: str


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Check service health.

    Returns:
        Health status with service name and version.
    """
    from catalogue.infrastructure.config import settings

    return HealthResponse(
        status="healthy",
        service="catalogue-api",
        version=settings.api_version,
    )


@router.get("/ready", response_model=ReadinessResponse)
async def readiness_check() -> ReadinessResponse:
    """Check if service is ready to accept requests.

    Returns:
        Readiness status and the configured store backend.
    """
    from catalogue.infrastructure.config import settings

    return ReadinessResponse(status="ready", store_backend=settings.store_backend)
