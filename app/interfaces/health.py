"""
Health check router.

Provides a simple health endpoint for liveness/readiness probes.
No business logic. Returns application status and version.
The price provider is not contacted here.
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from app.core.container import ServiceContainer
from app.interfaces.dependencies import get_container

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    status: str
    version: str


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Returns application health status and version.",
)
def health_check(
    container: ServiceContainer = Depends(get_container),
) -> HealthResponse:
    """Return current application health status."""
    return HealthResponse(status="ok", version=container.settings.version)
