"""
Gavel - Violation History Mixin
===============================

Compiles a user's previous enforcement actions from the report ledger.

Author: Gavel contributors
"""

from datetime import datetime
from typing import TYPE_CHECKING, Optional

from gavel.core.config import NY_TZ
from gavel.core.constants import ACTION_TAKEN_PREFIX
from gavel.core.database.models import ReportRecord
from gavel.core.logger import logger

from .constants import DEFAULT_MODERATOR, DEFAULT_REASON, HISTORY_DATE_FORMAT
from .results import ViolationEntry, ViolationHistory

if TYPE_CHECKING:
    from .service import AppealService


def _strip_prefix(status: str) -> str:
    """Drop the "Action Taken:" prefix, whatever its case."""
    if status[:len(ACTION_TAKEN_PREFIX)].lower() == ACTION_TAKEN_PREFIX.lower():
        status = status[len(ACTION_TAKEN_PREFIX):]
    return status.strip()


def _to_entry(report: ReportRecord) -> ViolationEntry:
    date = datetime.fromtimestamp(report["timestamp"], NY_TZ).strftime(HISTORY_DATE_FORMAT)
    return ViolationEntry(
        case_id=str(report.get("case_id") or "?"),
        date=date,
        action=_strip_prefix(report["status"]),
        reason=report.get("reason") or DEFAULT_REASON,
        moderator=report.get("action_taken_by_name") or DEFAULT_MODERATOR,
    )


class HistoryMixin:
    """Mixin for violation history lookups."""

    def violation_history(
        self: "AppealService",
        user_id: int,
        limit: Optional[int] = None,
    ) -> ViolationHistory:
        """
        Get the user's most recent completed enforcement actions.

        Args:
            user_id: User whose history to compile.
            limit: Entries to return, defaults to the configured history limit.

        Returns:
            ViolationHistory, newest first, with the total ledger count.
        """
        if limit is None:
            limit = self.config.history_limit

        total = self.db.count_action_taken_reports(user_id)
        if total == 0:
            return ViolationHistory(user_id=user_id)

        reports = self.db.get_action_taken_reports(user_id, limit)
        history = ViolationHistory(
            user_id=user_id,
            entries=[_to_entry(report) for report in reports],
            total=total,
        )

        logger.tree("Violation History Compiled", [
            ("User ID", str(user_id)),
            ("Shown", str(len(history.entries))),
            ("Total", str(total)),
        ], emoji="📜")

        return history


__all__ = ["HistoryMixin"]
