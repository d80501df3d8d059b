"""Health check endpoint."""

import logging
from datetime import datetime, timezone
from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

from adapter.mongodb.connection import ping

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
def health(request: Request):
    """Health check endpoint with dependency status."""
    context = getattr(request.app.state, "context", None)
    health_status = {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z'),
        "strategy": request.app.state.settings.auth_strategy.value,
        "services": {},
    }

    if context is None:
        health_status["services"]["mongodb"] = {
            "status": "unhealthy",
            "message": "Not connected",
        }
    elif context.mongo_client is None:
        # in-memory stores
        health_status["services"]["mongodb"] = {
            "status": "skipped",
            "message": "Not configured",
        }
    elif ping(context.mongo_client):
        health_status["services"]["mongodb"] = {
            "status": "healthy",
            "message": "Connection successful",
        }
    else:
        health_status["services"]["mongodb"] = {
            "status": "unhealthy",
            "message": "Ping failed",
        }

    overall_healthy = health_status["services"]["mongodb"]["status"] != "unhealthy"
    if not overall_healthy:
        health_status["status"] = "unhealthy"
        logger.warning("Health check failed", extra={"services": health_status["services"]})

    return JSONResponse(
        status_code=status.HTTP_200_OK if overall_healthy else status.HTTP_503_SERVICE_UNAVAILABLE,
        content=health_status,
    )
