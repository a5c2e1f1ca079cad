"""
Gavel - Notification Gateway
============================

Everything the appeal engine needs from Discord, behind one interface.

DESIGN:
    The engine only sees the NotificationGateway protocol, so it can be
    driven by a fake in tests. DiscordNotificationGateway is built with
    the bot client and channel ID it should use instead of reaching for
    globals. Discord failures are turned into DependencyUnavailable so
    the engine handles one exception type.

Author: Gavel contributors
"""

from typing import List, Optional, Protocol

import discord

from gavel.core.constants import THREAD_NAME_LIMIT
from gavel.core.database.models import AppealRecord
from gavel.core.errors import DependencyUnavailable
from gavel.core.logger import logger
from gavel.utils.discord_errors import log_http_error
from gavel.utils.retry import safe_fetch_channel

from .constants import DM_DECISION, MSG_CHANNEL_NOT_FOUND, MSG_POST_FAILED, STATUS_LINE
from .embeds import build_appeal_embed, build_resolved_embed
from .results import Submitter
from .views import AppealActionView


# =============================================================================
# Interface
# =============================================================================

class NotificationGateway(Protocol):
    """Outbound notifications for the appeal lifecycle."""

    async def post_appeal(
        self,
        appeal: AppealRecord,
        submitter: Submitter,
        evidence_links: List[str],
    ) -> None:
        """Publish a new case with its decision and history buttons."""
        ...

    async def notify_subject(self, appeal: AppealRecord) -> None:
        """Tell the appeal's subject about the decision."""
        ...

    async def update_case_message(
        self,
        appeal: AppealRecord,
        message: Optional[discord.Message],
    ) -> None:
        """Show the decision on the case message and remove its buttons."""
        ...


# =============================================================================
# Discord Implementation
# =============================================================================

class DiscordNotificationGateway:
    """
    NotificationGateway backed by a discord.py client.

    Attributes:
        client: Connected Discord client.
        channel_id: Channel new appeals are posted in.
        thread_auto_archive_minutes: Archive delay for discussion threads.
    """

    def __init__(
        self,
        client: discord.Client,
        channel_id: int,
        thread_auto_archive_minutes: int = 1440,
    ) -> None:
        self.client = client
        self.channel_id = channel_id
        self.thread_auto_archive_minutes = thread_auto_archive_minutes

    # =========================================================================
    # Submission
    # =========================================================================

    async def post_appeal(
        self,
        appeal: AppealRecord,
        submitter: Submitter,
        evidence_links: List[str],
    ) -> None:
        """
        Post the case message and open a discussion thread on it.

        Raises:
            DependencyUnavailable: If the channel is missing or the post failed.
                A failed thread is logged only.
        """
        case_id = appeal["case_id"]

        try:
            channel = await safe_fetch_channel(self.client, self.channel_id)
        except discord.HTTPException as e:
            log_http_error(e, "Appeal Channel Fetch", [("Channel ID", str(self.channel_id))])
            raise DependencyUnavailable("post_appeal", MSG_CHANNEL_NOT_FOUND) from e

        if channel is None or not isinstance(channel, discord.abc.Messageable):
            logger.error("Appeal Channel Not Found", [
                ("Channel ID", str(self.channel_id)),
                ("Case ID", case_id),
            ])
            raise DependencyUnavailable("post_appeal", MSG_CHANNEL_NOT_FOUND)

        embed = build_appeal_embed(appeal, submitter, evidence_links)
        view = AppealActionView(case_id, appeal["user_id"])

        try:
            message = await channel.send(embed=embed, view=view)
        except discord.HTTPException as e:
            log_http_error(e, "Appeal Post", [
                ("Case ID", case_id),
                ("Channel ID", str(self.channel_id)),
            ])
            raise DependencyUnavailable("post_appeal", MSG_POST_FAILED) from e

        thread_name = f"{submitter.username}'s Appeal"
        if len(thread_name) > THREAD_NAME_LIMIT:
            thread_name = thread_name[:THREAD_NAME_LIMIT - 3] + "..."

        try:
            await message.create_thread(
                name=thread_name,
                auto_archive_duration=self.thread_auto_archive_minutes,
                reason=f"Thread for Appeal ID {case_id}",
            )
        except discord.HTTPException as e:
            log_http_error(e, "Appeal Thread", [("Case ID", case_id)])

        logger.tree("Appeal Posted", [
            ("Case ID", case_id),
            ("Message ID", str(message.id)),
            ("Screenshots", str(len(evidence_links))),
        ], emoji="📨")

    # =========================================================================
    # Decision
    # =========================================================================

    async def notify_subject(self, appeal: AppealRecord) -> None:
        """
        DM the user the outcome of their appeal.

        Raises:
            DependencyUnavailable: If the user can't be found or has DMs closed.
        """
        user_id = appeal["user_id"]
        content = DM_DECISION.format(case_id=appeal["case_id"], status=appeal["status"])

        try:
            user = self.client.get_user(user_id) or await self.client.fetch_user(user_id)
            await user.send(content)
        except discord.Forbidden as e:
            logger.debug("DM Blocked", [("User ID", str(user_id))])
            raise DependencyUnavailable("notify_subject", "DMs closed") from e
        except discord.HTTPException as e:
            log_http_error(e, "Decision DM", [
                ("User ID", str(user_id)),
                ("Case ID", appeal["case_id"]),
            ])
            raise DependencyUnavailable("notify_subject", f"HTTP {e.status}") from e

    async def update_case_message(
        self,
        appeal: AppealRecord,
        message: Optional[discord.Message],
    ) -> None:
        """
        Recolour the case embed, add the decision fields and drop the buttons.

        Raises:
            DependencyUnavailable: If the edit was refused.
        """
        if message is None:
            logger.debug("No Case Message To Update", [("Case ID", appeal["case_id"])])
            return

        original = message.embeds[0] if message.embeds else None
        embed = build_resolved_embed(original, appeal)
        content = STATUS_LINE.format(status=appeal["status"].lower())

        try:
            await message.edit(content=content, embed=embed, view=None)
        except discord.HTTPException as e:
            log_http_error(e, "Case Message Edit", [
                ("Case ID", appeal["case_id"]),
                ("Message ID", str(message.id)),
            ])
            raise DependencyUnavailable("update_case_message", f"HTTP {e.status}") from e


__all__ = ["NotificationGateway", "DiscordNotificationGateway"]
