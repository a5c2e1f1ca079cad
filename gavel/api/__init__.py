"""
Gavel - API Package
===================

FastAPI-based REST API for the appeal page.

Features:
- JWT bearer authentication carrying the user's Discord identity
- Appeal submission and listing
- Health check

Usage with bot:
    from gavel.api import APIService

    api_service = APIService(appeal_service)
    await api_service.start()

    # On shutdown
    await api_service.stop()

Author: Gavel contributors
"""

import asyncio
from typing import TYPE_CHECKING, Optional

import uvicorn

from gavel.core.logger import logger
from gavel.utils.async_utils import create_safe_task
from gavel.api.config import APIConfig, get_api_config
from gavel.api.app import create_app
from gavel.api.services.auth import AuthService, get_auth_service

if TYPE_CHECKING:
    from gavel.services.appeals import AppealService


# =============================================================================
# API Service
# =============================================================================

class APIService:
    """
    Manages the FastAPI server lifecycle within the Discord bot.

    This service runs the API server in a background task, allowing
    the bot and API to run concurrently.
    """

    def __init__(
        self,
        appeal_service: "AppealService",
        config: Optional[APIConfig] = None,
    ) -> None:
        """
        Initialize the API service.

        Args:
            appeal_service: Service the endpoints delegate to.
            config: API settings, loaded from the environment if omitted.
        """
        self._config = config or get_api_config()
        self._app = create_app(appeal_service, self._config)
        self._server: Optional[uvicorn.Server] = None
        self._task: Optional[asyncio.Task] = None

    @property
    def is_running(self) -> bool:
        """Check if the API server is running."""
        return self._task is not None and not self._task.done()

    async def start(self) -> None:
        """Start the API server in a background task."""
        if self.is_running:
            logger.warning("API Already Running")
            return

        config = uvicorn.Config(
            app=self._app,
            host=self._config.host,
            port=self._config.port,
            log_level="warning",
            access_log=False,
        )
        self._server = uvicorn.Server(config)
        self._task = create_safe_task(self._server.serve(), "API Server")

        logger.tree("API Service Started", [
            ("Host", self._config.host),
            ("Port", str(self._config.port)),
            ("Debug", str(self._config.debug)),
        ], emoji="🌐")

    async def stop(self) -> None:
        """Stop the API server gracefully."""
        if not self.is_running:
            return

        logger.tree("API Service Stopping", [], emoji="🛑")

        if self._server:
            self._server.should_exit = True

        if self._task:
            try:
                await asyncio.wait_for(self._task, timeout=5.0)
            except asyncio.TimeoutError:
                self._task.cancel()
                try:
                    await self._task
                except asyncio.CancelledError:
                    pass

        self._server = None
        self._task = None

        logger.tree("API Service Stopped", [], emoji="✅")


# =============================================================================
# Exports
# =============================================================================

__all__ = [
    "APIService",
    "APIConfig",
    "get_api_config",
    "create_app",
    "AuthService",
    "get_auth_service",
]
