"""
Gavel - Database Manager
========================

SQLite database manager for appeals and the report ledger.

Author: Gavel contributors
"""

from pathlib import Path
from typing import Optional

from gavel.core.logger import logger
from gavel.core.database.base import DatabaseBase
from gavel.core.database.schema import SchemaMixin
from gavel.core.database.appeals import AppealsMixin
from gavel.core.database.reports import ReportsMixin


# =============================================================================
# Database Manager
# =============================================================================

class DatabaseManager(
    SchemaMixin,
    AppealsMixin,
    ReportsMixin,
    DatabaseBase,
):
    """
    Centralized database manager with thread-safe operations.

    DESIGN: One instance per database file. The bot shares the instance
    returned by get_db(); tests build their own against a temp file.
    Uses WAL mode for better concurrency with multiple readers.
    """

    def __init__(self, db_path: Path) -> None:
        """Initialize database connection and tables."""
        self._init_base(Path(db_path))
        self._init_tables()

        logger.tree("Database Manager Initialized", [
            ("Path", str(self.db_path)),
            ("WAL Mode", "Enabled"),
        ], emoji="🗄️")


# =============================================================================
# Global Instance
# =============================================================================

_db: Optional[DatabaseManager] = None


def get_db() -> DatabaseManager:
    """
    Get the shared database instance, opening it from config if needed.

    Returns:
        The DatabaseManager for the configured database path.
    """
    global _db
    if _db is None:
        from gavel.core.config import get_config
        _db = DatabaseManager(get_config().database_path)
    return _db


__all__ = ["DatabaseManager", "get_db"]
