"""
API Health Check Endpoint

Health check for the restaurant-settings API.
"""

from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import APIRouter

from src.api.schemas.error import ErrorResponse
from src.api.v1.schemas.responses import HealthResponse
from src.core.config import settings
from src.core.logger import get_logger

logger = get_logger(__name__)

router = APIRouter()

API_VERSION = "1.0.0"


def check_database_health() -> Dict[str, Any]:
    """Check database connection health."""
    try:
        from src.stores.database import test_connection

        status = test_connection()
        return {"status": "healthy", "details": status}
    except Exception as e:
        logger.warning("Database health check failed: %s", str(e))
        return {"status": "unhealthy", "error": str(e)}


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="API Health Check",
    description="Check the overall health of the API and its dependencies",
    tags=["health"],
    responses={
        200: {"model": HealthResponse, "description": "Health check results"},
        503: {"model": ErrorResponse, "description": "Service unavailable"},
    },
)
def health_check() -> HealthResponse:
    """
    Health check endpoint for the API.

    Checks the status of:
    - API service itself
    - The settings store backend in use
    - Database connection (only if enabled in configuration)

    Returns:
        HealthResponse: Overall health status and component details
    """
    components: Dict[str, Any] = {}
    overall_healthy = True

    components["settings_store"] = {
        "status": "healthy",
        "backend": settings.settings_store__backend,
    }

    if settings.health__check_database:
        db_health = check_database_health()
        components["database"] = db_health
        if db_health["status"] == "unhealthy":
            overall_healthy = False

    components["api"] = {
        "status": "healthy",
        "version": API_VERSION,
        "environment": settings.environment,
    }

    return HealthResponse(
        status="healthy" if overall_healthy else "unhealthy",
        timestamp=datetime.now(timezone.utc).isoformat(),
        version=API_VERSION,
        environment=settings.environment,
        components=components,
    )
