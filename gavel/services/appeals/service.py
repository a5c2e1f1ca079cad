"""
Gavel - Appeal Service
======================

Service for handling mute and ban appeals.

Author: Gavel contributors
"""

import asyncio
import weakref
from typing import List, Optional

from gavel.core.config import Config, get_config
from gavel.core.database import AppealRecord, DatabaseManager
from gavel.core.logger import logger

from .create import CreateMixin
from .eligibility import EligibilityMixin
from .gateway import NotificationGateway
from .history import HistoryMixin
from .resolve import ResolveMixin


class AppealService(EligibilityMixin, CreateMixin, ResolveMixin, HistoryMixin):
    """
    Service for managing appeals.

    DESIGN:
        Appeals arrive through the web API and are decided with buttons on
        the case message. Storage and Discord are injected, so the same
        service runs against a fake gateway in tests.
        A user's submissions are serialized by a per-user lock, decisions
        by a conditional update in the database.
    """

    def __init__(
        self,
        db: DatabaseManager,
        gateway: NotificationGateway,
        config: Optional[Config] = None,
    ) -> None:
        self.db = db
        self.gateway = gateway
        self.config = config or get_config()
        # Entries disappear once no submission holds the lock
        self._submit_locks: "weakref.WeakValueDictionary[int, asyncio.Lock]" = (
            weakref.WeakValueDictionary()
        )

        logger.tree("Appeal Service Initialized", [
            ("Rejection Cooldown", f"{self.config.appeal_cooldown_days} days"),
            ("History Limit", str(self.config.history_limit)),
        ], emoji="📨")

    # =========================================================================
    # Queries
    # =========================================================================

    def get_user_appeals(self, user_id: int) -> List[AppealRecord]:
        """All of a user's appeals, newest first."""
        return self.db.get_user_appeals(user_id)


__all__ = ["AppealService"]
