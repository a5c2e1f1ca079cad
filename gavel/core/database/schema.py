"""
Gavel - Database Schema Module
==============================

Table definitions for appeals and the report ledger.

Author: Gavel contributors
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from gavel.core.database.manager import DatabaseManager


class SchemaMixin:
    """Mixin for database schema initialization."""

    def _init_tables(self: "DatabaseManager") -> None:
        """
        Initialize all database tables.

        DESIGN: Tables are created if not exist, allowing safe restarts.
        Uniqueness rules the appeal lifecycle depends on are enforced here,
        not only in application code.
        """
        conn = self._ensure_connection()
        cursor = conn.cursor()

        # -----------------------------------------------------------------
        # Appeals Table
        # DESIGN: One row per accepted submission. resolver_* and
        # resolved_at stay NULL until the single Pending -> final update.
        # -----------------------------------------------------------------
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS appeals (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                case_id TEXT UNIQUE NOT NULL,
                user_id INTEGER NOT NULL,
                user_tag TEXT NOT NULL,
                punishment_kind TEXT NOT NULL,
                punishment_reason TEXT NOT NULL,
                appeal_reason TEXT NOT NULL,
                additional_notes TEXT NOT NULL DEFAULT '',
                status TEXT NOT NULL DEFAULT 'Pending',
                submitted_at REAL NOT NULL,
                resolver_id INTEGER,
                resolver_tag TEXT,
                resolved_at REAL,
                CHECK (status IN ('Pending', 'Approved', 'Rejected')),
                CHECK ((status = 'Pending') = (resolved_at IS NULL))
            )
        """)
        cursor.execute(
            "CREATE INDEX IF NOT EXISTS idx_appeals_user ON appeals(user_id, submitted_at DESC)"
        )
        cursor.execute(
            "CREATE INDEX IF NOT EXISTS idx_appeals_user_status ON appeals(user_id, status, resolved_at)"
        )
        # At most one pending appeal per user
        cursor.execute(
            """CREATE UNIQUE INDEX IF NOT EXISTS idx_appeals_one_pending
               ON appeals(user_id) WHERE status = 'Pending'"""
        )

        # -----------------------------------------------------------------
        # Reports Table
        # DESIGN: Written by the report intake side only. Created here so
        # history lookups work against an empty ledger.
        # -----------------------------------------------------------------
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS reports (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                case_id TEXT UNIQUE,
                message_id TEXT,
                channel_id TEXT,
                reporter_id TEXT,
                reporter_tag TEXT,
                author_id TEXT,
                author_tag TEXT,
                content TEXT,
                image_url TEXT,
                timestamp REAL NOT NULL,
                status TEXT NOT NULL DEFAULT 'Pending',
                action_taken_by TEXT,
                action_taken_by_name TEXT,
                action_taken_timestamp REAL,
                action_type TEXT,
                reason TEXT,
                previous_violations INTEGER DEFAULT 0,
                message_link TEXT,
                is_profile INTEGER DEFAULT 0,
                report_message_id TEXT DEFAULT ''
            )
        """)
        cursor.execute(
            "CREATE INDEX IF NOT EXISTS idx_reports_author_status ON reports(author_id, status)"
        )
        cursor.execute(
            "CREATE INDEX IF NOT EXISTS idx_reports_author_time ON reports(author_id, timestamp DESC)"
        )

        conn.commit()


__all__ = ["SchemaMixin"]
