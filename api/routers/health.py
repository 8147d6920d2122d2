"""
Health check endpoints.

Provides liveness and readiness checks.
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from api.schemas.common import (
    ComponentHealth,
    HealthCheckResponse,
    HealthStatus,
    ReadinessResponse,
)
from core.config import Settings, get_settings
from database import is_database_available, ping_database

router = APIRouter(prefix="/health", tags=["health"])


@router.get(
    "",
    response_model=HealthCheckResponse,
    summary="Basic health check",
    description="Quick health check endpoint for load balancers and container orchestration.",
)
async def health_check() -> HealthCheckResponse:
    """
    Basic health check.

    Returns a simple healthy status if the API is running.
    """
    return HealthCheckResponse(
        status=HealthStatus.HEALTHY,
        timestamp=datetime.now(timezone.utc),
    )


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    summary="Readiness check",
    description="Check if the application is ready to accept traffic.",
)
async def readiness_check(
    settings: Settings = Depends(get_settings),
) -> ReadinessResponse:
    """
    Readiness check for Kubernetes.

    Verifies that the database is initialized and answers queries.
    """
    if not is_database_available():
        database = ComponentHealth(
            status=HealthStatus.UNHEALTHY,
            error="Database not initialized",
        )
    elif await ping_database():
        database = ComponentHealth(status=HealthStatus.HEALTHY)
    else:
        database = ComponentHealth(
            status=HealthStatus.UNHEALTHY,
            error="Database did not answer",
        )

    return ReadinessResponse(
        status=database.status,
        timestamp=datetime.now(timezone.utc),
        version=settings.app_version,
        environment=settings.environment,
        components={"database": database},
    )


@router.get(
    "/live",
    response_model=HealthCheckResponse,
    summary="Liveness check",
    description="Check if the application is alive.",
)
async def liveness_check() -> HealthCheckResponse:
    """
    Liveness check for Kubernetes.

    Simple check that the application process is running.
    """
    return HealthCheckResponse(
        status=HealthStatus.HEALTHY,
        timestamp=datetime.now(timezone.utc),
    )
