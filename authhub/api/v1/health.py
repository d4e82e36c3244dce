# 📄 File: authhub/api/v1/health.py
# 🧭 Purpose (Layman Explanation):
# A quick checkup endpoint that tells load balancers and operators whether the service, its
# database and its redis store are working.
# 🧪 Purpose (Technical Summary):
# Health endpoint reporting database and redis status plus event bus statistics; returns 503
# when a dependency is unhealthy.
# 🔗 Dependencies:
# FastAPI, authhub.shared.core.dependencies (Container, health_status)
# 🔄 Connected Modules / Calls From:
# authhub.api.v1.router, monitoring systems, load balancers

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from authhub.shared.core.dependencies import Container, get_container, health_status

logger = logging.getLogger(__name__)

health_router = APIRouter()


@health_router.get(
    "/health",
    summary="Health Check",
    description="Service, database and redis health",
    tags=["Health Check"],
)
async def health_check(container: Container = Depends(get_container)) -> JSONResponse:
    """
    Health check endpoint

    Returns 200 when every dependency answers, 503 otherwise.
    """
    checks = await health_status(container)
    healthy = all(
        check.get("status") == "healthy"
        for name, check in checks.items()
        if name != "event_bus"
    )
    if not healthy:
        logger.warning(f"Health check degraded: {checks}")

    return JSONResponse(
        status_code=200 if healthy else 503,
        content={
            "status": "healthy" if healthy else "unhealthy",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "service": "authhub-api",
            "version": container.settings.APP_VERSION,
            "checks": checks,
        },
    )
