"""
Gavel - Reports Mixin
=====================

Read access to the report ledger. Rows are written by the report intake
side; this service only counts and lists completed enforcement actions.

Author: Gavel contributors
"""

from typing import TYPE_CHECKING, List

from gavel.core.constants import ACTION_TAKEN_PREFIX
from .models import ReportRecord

if TYPE_CHECKING:
    from .manager import DatabaseManager


# LIKE is case-insensitive for ASCII, matching "action taken:" as well
_ACTION_TAKEN_PATTERN = f"{ACTION_TAKEN_PREFIX}%"


class ReportsMixin:
    """Mixin for report ledger reads."""

    def get_action_taken_reports(
        self: "DatabaseManager",
        author_id: int,
        limit: int,
    ) -> List[ReportRecord]:
        """
        Get the user's completed enforcement reports.

        Args:
            author_id: Reported user's ID.
            limit: Maximum rows to return.

        Returns:
            Report records, newest first.
        """
        rows = self.fetchall(
            """SELECT * FROM reports
               WHERE author_id = ? AND status LIKE ?
               ORDER BY timestamp DESC
               LIMIT ?""",
            (str(author_id), _ACTION_TAKEN_PATTERN, limit)
        )
        return [dict(row) for row in rows]

    def count_action_taken_reports(self: "DatabaseManager", author_id: int) -> int:
        """Count all of the user's completed enforcement reports."""
        row = self.fetchone(
            """SELECT COUNT(*) as count FROM reports
               WHERE author_id = ? AND status LIKE ?""",
            (str(author_id), _ACTION_TAKEN_PATTERN)
        )
        return row["count"] if row else 0


__all__ = ["ReportsMixin"]
