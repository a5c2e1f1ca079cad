"""
Gavel - Appeals Package
=======================

Appeal lifecycle, violation history and Discord notifications.

Author: Gavel contributors
"""

from .service import AppealService
from .gateway import NotificationGateway, DiscordNotificationGateway
from .results import (
    DecisionOutcome,
    SubmissionResult,
    Submitter,
    ViolationEntry,
    ViolationHistory,
)
from .views import setup_appeal_views, AppealActionView

__all__ = [
    "AppealService",
    "NotificationGateway",
    "DiscordNotificationGateway",
    "DecisionOutcome",
    "SubmissionResult",
    "Submitter",
    "ViolationEntry",
    "ViolationHistory",
    "setup_appeal_views",
    "AppealActionView",
]
