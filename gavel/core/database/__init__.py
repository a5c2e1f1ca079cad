"""
Gavel - Database Module
=======================

SQLite storage for appeals and read access to the report ledger.

Author: Gavel contributors
"""

from gavel.core.database.manager import DatabaseManager, get_db
from gavel.core.database.models import (
    AppealRecord,
    AppealStatus,
    Decision,
    PunishmentKind,
    ReportRecord,
)

__all__ = [
    "DatabaseManager",
    "get_db",
    "AppealRecord",
    "AppealStatus",
    "Decision",
    "PunishmentKind",
    "ReportRecord",
]
