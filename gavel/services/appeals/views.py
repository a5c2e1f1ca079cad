"""
Gavel - Appeal Views
====================

Discord UI components for the appeal case message.

Author: Gavel contributors
"""

from typing import TYPE_CHECKING

import discord

from gavel.core.database.models import Decision
from gavel.core.logger import logger

from .interactions import handle_decision, handle_history

if TYPE_CHECKING:
    from discord.ext import commands


# =============================================================================
# Appeal Action View
# =============================================================================

class AppealActionView(discord.ui.View):
    """
    Buttons attached to a new case message.

    DESIGN:
        The buttons are DynamicItems whose custom_id carries the case ID or
        user ID, so they keep working after a restart without any stored
        view state.

    Layout:
        Approve, Reject, View History
    """

    def __init__(self, case_id: str, user_id: int):
        super().__init__(timeout=None)
        self.add_item(ApproveAppealButton(case_id))
        self.add_item(RejectAppealButton(case_id))
        self.add_item(ViolationHistoryButton(user_id))


# =============================================================================
# Buttons
# =============================================================================

class ApproveAppealButton(discord.ui.DynamicItem[discord.ui.Button], template=r"approve_(?P<case_id>[0-9]+)"):
    """Persistent approve appeal button."""

    def __init__(self, case_id: str):
        super().__init__(
            discord.ui.Button(
                label="Approve",
                style=discord.ButtonStyle.success,
                custom_id=f"approve_{case_id}",
            )
        )
        self.case_id = case_id

    @classmethod
    async def from_custom_id(
        cls,
        interaction: discord.Interaction,
        item: discord.ui.Button,
        match,
    ) -> "ApproveAppealButton":
        return cls(match.group("case_id"))

    async def callback(self, interaction: discord.Interaction) -> None:
        """Handle approve button click."""
        await handle_decision(interaction, self.case_id, Decision.APPROVE)


class RejectAppealButton(discord.ui.DynamicItem[discord.ui.Button], template=r"reject_(?P<case_id>[0-9]+)"):
    """Persistent reject appeal button."""

    def __init__(self, case_id: str):
        super().__init__(
            discord.ui.Button(
                label="Reject",
                style=discord.ButtonStyle.danger,
                custom_id=f"reject_{case_id}",
            )
        )
        self.case_id = case_id

    @classmethod
    async def from_custom_id(
        cls,
        interaction: discord.Interaction,
        item: discord.ui.Button,
        match,
    ) -> "RejectAppealButton":
        return cls(match.group("case_id"))

    async def callback(self, interaction: discord.Interaction) -> None:
        """Handle reject button click."""
        await handle_decision(interaction, self.case_id, Decision.REJECT)


class ViolationHistoryButton(discord.ui.DynamicItem[discord.ui.Button], template=r"history_(?P<user_id>[0-9]+)"):
    """Persistent view history button, bound to the appeal's subject."""

    def __init__(self, user_id: int):
        super().__init__(
            discord.ui.Button(
                label="View History",
                style=discord.ButtonStyle.primary,
                custom_id=f"history_{user_id}",
            )
        )
        self.user_id = user_id

    @classmethod
    async def from_custom_id(
        cls,
        interaction: discord.Interaction,
        item: discord.ui.Button,
        match,
    ) -> "ViolationHistoryButton":
        return cls(int(match.group("user_id")))

    async def callback(self, interaction: discord.Interaction) -> None:
        """Handle view history button click."""
        await handle_history(interaction, self.user_id)


# =============================================================================
# Registration
# =============================================================================

def setup_appeal_views(bot: "commands.Bot") -> None:
    """Register appeal dynamic items for persistence."""
    bot.add_dynamic_items(
        ApproveAppealButton,
        RejectAppealButton,
        ViolationHistoryButton,
    )
    logger.debug("Appeal Views Registered")


__all__ = [
    "AppealActionView",
    "ApproveAppealButton",
    "RejectAppealButton",
    "ViolationHistoryButton",
    "setup_appeal_views",
]
