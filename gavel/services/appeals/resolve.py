"""
Gavel - Appeal Resolution Mixin
===============================

Moderator decisions on pending appeals.

Author: Gavel contributors
"""

from typing import TYPE_CHECKING, Optional

from gavel.core.database.models import AppealRecord, AppealStatus, Decision
from gavel.core.errors import DependencyUnavailable
from gavel.core.logger import logger

from .results import DecisionOutcome

if TYPE_CHECKING:
    import discord

    from .service import AppealService


class ResolveMixin:
    """Mixin for appeal resolution methods."""

    async def decide_appeal(
        self: "AppealService",
        case_id: str,
        decision: Decision,
        moderator_id: int,
        moderator_tag: str,
        case_message: Optional["discord.Message"] = None,
    ) -> DecisionOutcome:
        """
        Approve or reject a pending appeal.

        Repeated, concurrent or stale calls are no-ops: only the call whose
        update matched a Pending row returns APPLIED and notifies anyone.

        Args:
            case_id: Case ID from the button.
            decision: Approve or reject.
            moderator_id: Deciding moderator's ID.
            moderator_tag: Deciding moderator's display tag.
            case_message: Case message to update, when known.

        Returns:
            The DecisionOutcome.
        """
        appeal = self.db.get_appeal(case_id)
        if not appeal:
            logger.debug("Decision Ignored", [
                ("Case ID", case_id),
                ("Reason", "Unknown case"),
            ])
            return DecisionOutcome.NOT_FOUND

        if appeal["status"] != AppealStatus.PENDING.value:
            logger.debug("Decision Ignored", [
                ("Case ID", case_id),
                ("Status", appeal["status"]),
            ])
            return DecisionOutcome.ALREADY_RESOLVED

        resolved = self.db.resolve_appeal(
            case_id=case_id,
            status=decision.status,
            resolver_id=moderator_id,
            resolver_tag=moderator_tag,
        )
        if resolved is None:
            logger.warning("Decision Lost Race", [
                ("Case ID", case_id),
                ("Moderator", f"{moderator_tag} ({moderator_id})"),
            ])
            return DecisionOutcome.ALREADY_RESOLVED

        await self._announce_decision(resolved, case_message)
        return DecisionOutcome.APPLIED

    async def _announce_decision(
        self: "AppealService",
        appeal: AppealRecord,
        case_message: Optional["discord.Message"],
    ) -> None:
        """DM the subject and update the case message, logging any failure."""
        try:
            await self.gateway.notify_subject(appeal)
        except DependencyUnavailable as e:
            logger.warning("Decision DM Not Delivered", [
                ("Case ID", appeal["case_id"]),
                ("User ID", str(appeal["user_id"])),
                ("Reason", e.reason),
            ])

        try:
            await self.gateway.update_case_message(appeal, case_message)
        except DependencyUnavailable as e:
            logger.warning("Case Message Not Updated", [
                ("Case ID", appeal["case_id"]),
                ("Reason", e.reason),
            ])


__all__ = ["ResolveMixin"]
