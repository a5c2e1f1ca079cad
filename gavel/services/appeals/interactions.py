"""
Gavel - Appeal Interactions
===========================

Handlers behind the persistent appeal buttons.

DESIGN:
    Every handler acknowledges the interaction before touching storage,
    since Discord expires unacknowledged interactions after 3 seconds.
    An interaction that is already expired is logged and dropped.
    The AppealService is read from the bot (interaction.client).

Author: Gavel contributors
"""

import sqlite3
from typing import TYPE_CHECKING, Optional

import discord

from gavel.core.database.models import Decision
from gavel.core.logger import logger
from gavel.utils.discord_errors import log_http_error

from .constants import MSG_HISTORY_FAILED, MSG_NO_VIOLATIONS
from .embeds import build_history_embed

if TYPE_CHECKING:
    from .service import AppealService


# =============================================================================
# Helpers
# =============================================================================

async def acknowledge(interaction: discord.Interaction) -> bool:
    """
    Defer the interaction.

    Returns:
        False if the interaction can no longer be answered.
    """
    try:
        await interaction.response.defer()
        return True
    except discord.InteractionResponded:
        return True
    except discord.HTTPException as e:
        logger.warning("Interaction Expired", [
            ("Custom ID", str(interaction.data.get("custom_id") if interaction.data else None)),
            ("User", f"{interaction.user} ({interaction.user.id})"),
            ("Error", str(e)[:100]),
        ])
        return False


def _get_service(interaction: discord.Interaction) -> Optional["AppealService"]:
    service = getattr(interaction.client, "appeal_service", None)
    if service is None:
        logger.error("Appeal Service Unavailable", [
            ("User", f"{interaction.user} ({interaction.user.id})"),
        ])
    return service


# =============================================================================
# Handlers
# =============================================================================

async def handle_decision(
    interaction: discord.Interaction,
    case_id: str,
    decision: Decision,
) -> None:
    """Apply an approve/reject button press."""
    if not await acknowledge(interaction):
        return

    service = _get_service(interaction)
    if service is None:
        return

    try:
        outcome = await service.decide_appeal(
            case_id=case_id,
            decision=decision,
            moderator_id=interaction.user.id,
            moderator_tag=str(interaction.user),
            case_message=interaction.message,
        )
    except sqlite3.Error as e:
        logger.error("Appeal Decision Failed", [
            ("Case ID", case_id),
            ("Decision", decision.value),
            ("Error Type", type(e).__name__),
            ("Error", str(e)[:100]),
        ])
        return

    logger.tree("Appeal Button Handled", [
        ("Case ID", case_id),
        ("Decision", decision.value),
        ("Moderator", f"{interaction.user} ({interaction.user.id})"),
        ("Outcome", outcome.value),
    ], emoji="⚖️")


async def handle_history(interaction: discord.Interaction, user_id: int) -> None:
    """Reply ephemerally with the user's previous violations."""
    if not await acknowledge(interaction):
        return

    service = _get_service(interaction)
    if service is None:
        return

    try:
        try:
            history = service.violation_history(user_id)
        except sqlite3.Error as e:
            logger.error("Violation History Failed", [
                ("User ID", str(user_id)),
                ("Error Type", type(e).__name__),
                ("Error", str(e)[:100]),
            ])
            await interaction.followup.send(MSG_HISTORY_FAILED, ephemeral=True)
            return

        if history.is_empty:
            await interaction.followup.send(MSG_NO_VIOLATIONS, ephemeral=True)
            return

        await interaction.followup.send(embed=build_history_embed(history), ephemeral=True)
    except discord.HTTPException as e:
        log_http_error(e, "History Reply", [("User ID", str(user_id))])


__all__ = ["acknowledge", "handle_decision", "handle_history"]
