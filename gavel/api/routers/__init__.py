"""
Gavel - API Routers
===================

Author: Gavel contributors
"""

from gavel.api.routers.appeals import router as appeals_router
from gavel.api.routers.auth import router as auth_router
from gavel.api.routers.health import router as health_router

__all__ = [
    "appeals_router",
    "auth_router",
    "health_router",
]
