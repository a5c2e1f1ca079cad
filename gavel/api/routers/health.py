"""
Gavel - Health Router
=====================

Liveness endpoint for load balancers and monitoring.

Author: Gavel contributors
"""

from datetime import datetime, timezone

from fastapi import APIRouter

from gavel.core.logger import logger
from gavel.api.dependencies import is_appeal_service_ready


router = APIRouter(prefix="/health", tags=["Health"])


@router.get("")
async def health_check() -> dict:
    """
    Basic health check endpoint.

    Reports whether the appeal service has been wired up yet.
    """
    return {
        "status": "healthy",
        "ready": is_appeal_service_ready(),
        "run_id": logger.run_id,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


__all__ = ["router"]
