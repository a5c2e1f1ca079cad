"""
Gavel - Appeal Embeds
=====================

Embed builders for the public case message and the history reply.

Author: Gavel contributors
"""

from datetime import datetime
from typing import List, Optional

import discord

from gavel.core.config import EmbedColors, NY_TZ
from gavel.core.constants import EMBED_FIELD_VALUE_LIMIT
from gavel.core.database.models import AppealRecord, AppealStatus

from .results import Submitter, ViolationHistory


def _clip(value: str, limit: int = EMBED_FIELD_VALUE_LIMIT) -> str:
    """Trim a field value to Discord's limit."""
    if len(value) <= limit:
        return value
    return value[:limit - 3] + "..."


# =============================================================================
# Case Message
# =============================================================================

def build_appeal_embed(
    appeal: AppealRecord,
    submitter: Submitter,
    evidence_links: Optional[List[str]] = None,
) -> discord.Embed:
    """
    Build the public embed for a new appeal.

    Args:
        appeal: The stored appeal.
        submitter: Identity of the user who submitted it.
        evidence_links: Screenshot URLs, already validated.
    """
    embed = discord.Embed(
        title="New Appeal Submitted",
        color=EmbedColors.PENDING,
        timestamp=datetime.now(NY_TZ),
    )
    embed.set_author(name=appeal["user_tag"], icon_url=submitter.avatar_url)

    embed.add_field(name="Appeal ID", value=f"`{appeal['case_id']}`", inline=True)
    embed.add_field(
        name="User",
        value=f"<@{appeal['user_id']}> ({appeal['user_tag']})",
        inline=True,
    )
    embed.add_field(name="Muted/Banned", value=appeal["punishment_kind"], inline=True)
    embed.add_field(name="Punishment Reason", value=_clip(appeal["punishment_reason"]), inline=False)
    embed.add_field(name="Reason to Revoke", value=_clip(appeal["appeal_reason"]), inline=False)
    embed.add_field(
        name="Additional Considerations",
        value=_clip(appeal.get("additional_notes") or "None"),
        inline=False,
    )
    embed.add_field(
        name="Submitted At",
        value=f"<t:{int(appeal['submitted_at'])}:F>",
        inline=False,
    )

    for index, link in enumerate(evidence_links or [], start=1):
        embed.add_field(
            name=f"Screenshot #{index}",
            value=f"[View Screenshot]({link})",
            inline=False,
        )

    return embed


def build_resolved_embed(
    original: Optional[discord.Embed],
    appeal: AppealRecord,
) -> discord.Embed:
    """
    Copy the case embed and stamp the decision onto it.

    Args:
        original: Embed currently on the case message, if any.
        appeal: The appeal after its status transition.
    """
    approved = appeal["status"] == AppealStatus.APPROVED.value

    if original is not None:
        embed = discord.Embed.from_dict(original.to_dict())
    else:
        embed = discord.Embed(title=f"Appeal #{appeal['case_id']}")

    embed.color = EmbedColors.APPROVED if approved else EmbedColors.REJECTED
    embed.add_field(name="Status", value=f"`{appeal['status']}`", inline=True)
    embed.add_field(
        name="Moderator",
        value=f"<@{appeal['resolver_id']}> ({appeal['resolver_tag']})",
        inline=True,
    )
    embed.add_field(
        name="Responded At",
        value=f"<t:{int(appeal['resolved_at'])}:F>",
        inline=False,
    )
    return embed


# =============================================================================
# History
# =============================================================================

def build_history_embed(history: ViolationHistory) -> discord.Embed:
    """Build the ephemeral embed listing a user's previous violations."""
    embed = discord.Embed(
        title="Previous Violations",
        description=f"<@{history.user_id}>",
        color=EmbedColors.HISTORY,
        timestamp=datetime.now(NY_TZ),
    )

    for entry in history.entries:
        embed.add_field(
            name=f"Case #{entry.case_id} - {entry.date}",
            value=_clip("\n".join([
                f"**Action:** {entry.action}",
                f"**Reason:** {entry.reason}",
                f"**Moderator:** {entry.moderator}",
            ])),
            inline=False,
        )

    if history.note:
        embed.add_field(name="Note", value=history.note, inline=False)

    return embed


__all__ = [
    "build_appeal_embed",
    "build_resolved_embed",
    "build_history_embed",
]
