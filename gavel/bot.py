"""
Gavel - Main Bot Class
======================

Discord client hosting the appeal service and its web API.

Author: Gavel contributors
"""

from datetime import datetime
from typing import Optional

import discord
from discord.ext import commands

from gavel.core.config import Config, NY_TZ, get_config
from gavel.core.database import DatabaseManager, get_db
from gavel.core.logger import logger
from gavel.services.appeals import (
    AppealService,
    DiscordNotificationGateway,
    setup_appeal_views,
)


# =============================================================================
# GavelBot Class
# =============================================================================

class GavelBot(commands.Bot):
    """
    Main Discord bot class for Gavel.

    DESIGN: Holds the services and wires them together:
    - Database and notification gateway are built once and injected
      into the AppealService
    - Persistent appeal buttons are registered in setup_hook so buttons on
      old case messages keep working after a restart
    - The API server runs in the bot's event loop and stops with it

    SERVICE INITIALIZATION ORDER (setup_hook, before on_ready):
    1. Database
    2. Notification gateway + AppealService
    3. Persistent views
    4. API server
    """

    def __init__(self, config: Optional[Config] = None) -> None:
        """Initialize the bot with the intents it needs."""
        self.config = config or get_config()

        intents = discord.Intents.default()

        super().__init__(
            command_prefix="!",
            intents=intents,
            help_command=None,
        )

        self.start_time: datetime = datetime.now(NY_TZ)
        self.db: Optional[DatabaseManager] = None
        self.appeal_service: Optional[AppealService] = None
        self.api_service = None

    # =========================================================================
    # Setup
    # =========================================================================

    async def setup_hook(self) -> None:
        """Build services and register persistent views before on_ready."""
        if self.config.error_webhook_url:
            logger.set_webhook(self.config.error_webhook_url)

        self.db = get_db()

        gateway = DiscordNotificationGateway(
            client=self,
            channel_id=self.config.appeal_channel_id,
            thread_auto_archive_minutes=self.config.thread_auto_archive_minutes,
        )
        self.appeal_service = AppealService(self.db, gateway, self.config)

        setup_appeal_views(self)

        from gavel.api import APIService
        self.api_service = APIService(self.appeal_service)
        await self.api_service.start()

    async def on_ready(self) -> None:
        """Log the connection."""
        if not self.user:
            return

        logger.tree("BOT ONLINE", [
            ("Name", self.user.name),
            ("ID", str(self.user.id)),
            ("Guilds", str(len(self.guilds))),
            ("Appeal Channel", str(self.config.appeal_channel_id)),
        ], emoji="🚀")

    # =========================================================================
    # Shutdown
    # =========================================================================

    async def close(self) -> None:
        """Stop the API, close the database and disconnect."""
        logger.info("Initiating Graceful Shutdown")

        if self.api_service:
            await self.api_service.stop()

        if self.db:
            self.db.close()

        await super().close()

        logger.tree("SHUTDOWN COMPLETE", [
            ("Uptime", str(datetime.now(NY_TZ) - self.start_time)),
        ], emoji="🛑")


# =============================================================================
# Module Export
# =============================================================================

__all__ = ["GavelBot"]
