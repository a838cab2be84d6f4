"""Health check endpoints."""

from fastapi import APIRouter

from woodshop import __version__
from woodshop.config import settings
from woodshop.infra.database import verify_db_connection
from woodshop.infra.logging import get_logger
from woodshop.schemas.common import HealthResponse

router = APIRouter()
logger = get_logger(__name__)


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """Basic health check. Returns 200 if the service is running."""
    return HealthResponse(
        status="healthy",
        version=__version__,
        environment=settings.environment,
        checks={},
    )


@router.get("/health/ready", response_model=HealthResponse)
async def health_ready() -> HealthResponse:
    """Readiness check.

    Verifies the catalog database is reachable. A failing database reports
    "degraded" rather than an error since the gallery still renders empty.
    """
    checks = {"database": await verify_db_connection()}
    all_healthy = all(checks.values())
    if not all_healthy:
        logger.warning("Readiness degraded", checks=checks)

    return HealthResponse(
        status="healthy" if all_healthy else "degraded",
        version=__version__,
        environment=settings.environment,
        checks=checks,
    )


@router.get("/health/live", response_model=HealthResponse)
async def health_live() -> HealthResponse:
    """Liveness check."""
    return HealthResponse(
        status="healthy",
        version=__version__,
        environment=settings.environment,
        checks={"alive": True},
    )
