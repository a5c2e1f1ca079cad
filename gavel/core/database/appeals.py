"""
Gavel - Appeals Mixin
=====================

Appeal storage: case ID allocation, creation, lookups and the single
Pending -> final status transition.

Author: Gavel contributors
"""

import secrets
import time
from typing import TYPE_CHECKING, List, Optional

from gavel.core.constants import CASE_ID_MAX, CASE_ID_MIN
from gavel.core.errors import CaseIdExhaustedError
from gavel.core.logger import logger
from .models import AppealRecord, AppealStatus

if TYPE_CHECKING:
    from .base import DatabaseBase
    from .manager import DatabaseManager


DEFAULT_MAX_ATTEMPTS = 50


class AppealsMixin:
    """Mixin for appeal operations."""

    # =========================================================================
    # Case IDs
    # =========================================================================

    def generate_case_id(
        self: "DatabaseManager",
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        tx: Optional["DatabaseBase.Transaction"] = None,
    ) -> str:
        """
        Draw a free 4 digit case ID.

        Args:
            max_attempts: Draws allowed before giving up.
            tx: Open transaction to check existence in. When given, the
                caller inserts in the same transaction so the ID cannot be
                taken in between.

        Returns:
            A numeric string between 1000 and 9999 not used by any appeal.

        Raises:
            CaseIdExhaustedError: If every draw collided.
        """
        span = CASE_ID_MAX - CASE_ID_MIN + 1
        for _ in range(max_attempts):
            case_id = str(CASE_ID_MIN + secrets.randbelow(span))
            if tx is not None:
                existing = tx.execute(
                    "SELECT 1 FROM appeals WHERE case_id = ?", (case_id,)
                ).fetchone()
            else:
                existing = self.fetchone(
                    "SELECT 1 FROM appeals WHERE case_id = ?", (case_id,)
                )
            if not existing:
                return case_id

        logger.error("Case ID Space Exhausted", [
            ("Attempts", str(max_attempts)),
        ])
        raise CaseIdExhaustedError(max_attempts)

    # =========================================================================
    # Creation
    # =========================================================================

    def create_appeal(
        self: "DatabaseManager",
        user_id: int,
        user_tag: str,
        punishment_kind: str,
        punishment_reason: str,
        appeal_reason: str,
        additional_notes: str = "",
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    ) -> AppealRecord:
        """
        Allocate a case ID and insert a Pending appeal atomically.

        Raises:
            CaseIdExhaustedError: If no free case ID was found.
            sqlite3.IntegrityError: If the user already has a pending appeal.
        """
        with self.transaction() as tx:
            case_id = self.generate_case_id(max_attempts, tx=tx)
            tx.execute(
                """INSERT INTO appeals (
                    case_id, user_id, user_tag, punishment_kind,
                    punishment_reason, appeal_reason, additional_notes,
                    status, submitted_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)""",
                (
                    case_id, user_id, user_tag, punishment_kind,
                    punishment_reason, appeal_reason, additional_notes,
                    AppealStatus.PENDING.value, time.time(),
                )
            )
            row = tx.execute(
                "SELECT * FROM appeals WHERE case_id = ?", (case_id,)
            ).fetchone()

        logger.tree("Appeal Created", [
            ("Case ID", case_id),
            ("User", f"{user_tag} ({user_id})"),
            ("Type", punishment_kind),
        ], emoji="📝")

        return dict(row)

    # =========================================================================
    # Lookups
    # =========================================================================

    def get_appeal(self: "DatabaseManager", case_id: str) -> Optional[AppealRecord]:
        """Get an appeal by its case ID."""
        row = self.fetchone(
            "SELECT * FROM appeals WHERE case_id = ?",
            (case_id,)
        )
        return dict(row) if row else None

    def get_user_appeals(self: "DatabaseManager", user_id: int) -> List[AppealRecord]:
        """
        Get all appeals for a user.

        Args:
            user_id: User ID.

        Returns:
            List of appeal records, newest first.
        """
        rows = self.fetchall(
            """SELECT * FROM appeals
               WHERE user_id = ?
               ORDER BY submitted_at DESC, id DESC""",
            (user_id,)
        )
        return [dict(row) for row in rows]

    def get_pending_appeal(self: "DatabaseManager", user_id: int) -> Optional[AppealRecord]:
        """Get the user's pending appeal, if any."""
        row = self.fetchone(
            "SELECT * FROM appeals WHERE user_id = ? AND status = ?",
            (user_id, AppealStatus.PENDING.value)
        )
        return dict(row) if row else None

    def get_recent_rejection(
        self: "DatabaseManager",
        user_id: int,
        since: float,
    ) -> Optional[AppealRecord]:
        """
        Get the user's latest rejected appeal resolved at or after a time.

        Args:
            user_id: User ID.
            since: Epoch seconds lower bound on resolved_at.

        Returns:
            The most recent matching appeal or None.
        """
        row = self.fetchone(
            """SELECT * FROM appeals
               WHERE user_id = ? AND status = ? AND resolved_at >= ?
               ORDER BY resolved_at DESC
               LIMIT 1""",
            (user_id, AppealStatus.REJECTED.value, since)
        )
        return dict(row) if row else None

    # =========================================================================
    # Resolution
    # =========================================================================

    def resolve_appeal(
        self: "DatabaseManager",
        case_id: str,
        status: AppealStatus,
        resolver_id: int,
        resolver_tag: str,
    ) -> Optional[AppealRecord]:
        """
        Move a pending appeal to a final status.

        The update only matches while the appeal is still Pending, so of
        any number of concurrent calls exactly one succeeds.

        Returns:
            The updated appeal, or None if it was not pending (or unknown).
        """
        with self.transaction() as tx:
            cursor = tx.execute(
                """UPDATE appeals
                   SET status = ?,
                       resolver_id = ?,
                       resolver_tag = ?,
                       resolved_at = ?
                   WHERE case_id = ? AND status = ?""",
                (
                    status.value, resolver_id, resolver_tag, time.time(),
                    case_id, AppealStatus.PENDING.value,
                )
            )
            if cursor.rowcount == 0:
                return None
            row = tx.execute(
                "SELECT * FROM appeals WHERE case_id = ?", (case_id,)
            ).fetchone()

        logger.tree("Appeal Resolved", [
            ("Case ID", case_id),
            ("Status", status.value),
            ("Moderator", f"{resolver_tag} ({resolver_id})"),
        ], emoji="✅" if status is AppealStatus.APPROVED else "❌")

        return dict(row)


__all__ = ["AppealsMixin", "DEFAULT_MAX_ATTEMPTS"]
