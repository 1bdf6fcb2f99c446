# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Controller: System endpoints — health, readiness, metrics.
Pure HTTP layer — no business logic.
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from sqlalchemy.exc import SQLAlchemyError
from starlette.responses import Response

from launchlist.core.config import Settings
from launchlist.core.dependencies import get_settings, get_signup_repo
from launchlist.core.logging import get_logger
from launchlist.repositories import SignupRepository

router = APIRouter(tags=["System"])
logger = get_logger(__name__)


@router.get("/health")
def health_check(settings: Settings = Depends(get_settings)):
    """Liveness probe for Docker and orchestration."""
    return {
        "status": "ok",
        "service": settings.SERVICE_NAME,
        "version": settings.SERVICE_VERSION,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@router.get("/health/ready")
def readiness_check(
    repo: SignupRepository = Depends(get_signup_repo),
    settings: Settings = Depends(get_settings),
):
    """Readiness probe — verifies the database answers."""
    try:
        repo.verify_connection()
    except SQLAlchemyError:
        logger.warning("Readiness check failed — database unreachable", exc_info=True)
        return JSONResponse(
            status_code=503,
            content={"status": "not_ready", "service": settings.SERVICE_NAME,
                     "database": "disconnected"},
        )
    return {"status": "ready", "service": settings.SERVICE_NAME, "database": "connected"}


@router.get("/metrics")
def prometheus_metrics():
    """Expose Prometheus metrics in OpenMetrics format."""
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
