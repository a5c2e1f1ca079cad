"""
Gavel - Database Type Definitions
=================================

TypedDict definitions for database records and the enums stored in them.

Author: Gavel contributors
"""

from enum import Enum
from typing import Optional, TypedDict


# =============================================================================
# Enums
# =============================================================================

class AppealStatus(str, Enum):
    """Appeal lifecycle states. Pending moves to a final state exactly once."""

    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"


class PunishmentKind(str, Enum):
    """Enforcement action being appealed."""

    MUTED = "Muted"
    BANNED = "Banned"

    @classmethod
    def parse(cls, value: str) -> Optional["PunishmentKind"]:
        """Match a form value case-insensitively, None if unknown."""
        wanted = value.strip().lower()
        for kind in cls:
            if kind.value.lower() == wanted:
                return kind
        return None


class Decision(str, Enum):
    """Moderator decision on a pending appeal."""

    APPROVE = "approve"
    REJECT = "reject"

    @property
    def status(self) -> AppealStatus:
        """Final status this decision moves an appeal to."""
        return AppealStatus.APPROVED if self is Decision.APPROVE else AppealStatus.REJECTED


# =============================================================================
# Records
# =============================================================================

class AppealRecord(TypedDict, total=False):
    """Type for appeal records."""
    id: int
    case_id: str
    user_id: int
    user_tag: str
    punishment_kind: str
    punishment_reason: str
    appeal_reason: str
    additional_notes: str
    status: str
    submitted_at: float
    resolver_id: Optional[int]
    resolver_tag: Optional[str]
    resolved_at: Optional[float]


class ReportRecord(TypedDict, total=False):
    """Type for report ledger records."""
    id: int
    case_id: str
    message_id: Optional[str]
    channel_id: Optional[str]
    reporter_id: Optional[str]
    reporter_tag: Optional[str]
    author_id: str
    author_tag: Optional[str]
    content: Optional[str]
    image_url: Optional[str]
    timestamp: float
    status: str
    action_taken_by: Optional[str]
    action_taken_by_name: Optional[str]
    action_taken_timestamp: Optional[float]
    action_type: Optional[str]
    reason: Optional[str]
    previous_violations: int
    message_link: Optional[str]
    is_profile: int
    report_message_id: str


__all__ = [
    "AppealStatus",
    "PunishmentKind",
    "Decision",
    "AppealRecord",
    "ReportRecord",
]
