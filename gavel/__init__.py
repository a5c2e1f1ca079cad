"""
Gavel - Source Package
======================

Moderation appeal service for Discord communities. Users submit appeals
against mutes and bans through the web API, moderators answer them with
buttons on the appeal message.

Package Structure:
- bot.py: Discord bot class, service wiring and persistent buttons
- api/: FastAPI application (appeal submission and listing)
- core/: Configuration, logging and database
- services/: Appeal lifecycle, history lookup and Discord notifications
- utils/: Shared async and Discord helpers

Author: Gavel contributors
Version: v1.0.0
"""
