#!/usr/bin/env python3
"""
Gavel - Entry Point
===================

Starts the Discord bot and the appeal API.

Handles the complete lifecycle:
1. Loads .env into the environment
2. Validates configuration
3. Starts the bot (which starts the API in its event loop)
4. Shuts down cleanly on Ctrl+C

Author: Gavel contributors
"""

import asyncio
import sys

from dotenv import load_dotenv

# Environment must be loaded before the logger reads its settings
load_dotenv()

from gavel.core.config import ConfigValidationError, get_config, validate_and_log_config  # noqa: E402
from gavel.core.logger import logger  # noqa: E402
from gavel.bot import GavelBot  # noqa: E402


async def main() -> None:
    """
    Main entry point for Gavel.

    Raises:
        SystemExit: If configuration is invalid or the bot fails to start.
    """
    logger.tree("GAVEL STARTING", [
        ("Run ID", logger.run_id),
    ], "⚖️")

    try:
        validate_and_log_config()
    except ConfigValidationError as e:
        logger.error("Configuration Invalid", [("Error", str(e))])
        sys.exit(1)

    config = get_config()
    bot = GavelBot(config)

    try:
        async with bot:
            await bot.start(config.discord_token)
    except Exception as e:
        logger.error("Bot Crashed", [
            ("Error Type", type(e).__name__),
            ("Error", str(e)[:200]),
        ])
        sys.exit(1)


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("🛑 Bot stopped by user (Ctrl+C)")
