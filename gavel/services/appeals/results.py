"""
Gavel - Appeal Results
======================

Value types passed in and out of the appeal engine.

Author: Gavel contributors
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from gavel.core.database.models import AppealRecord
from gavel.core.errors import AppealRejection


@dataclass(frozen=True)
class Submitter:
    """Identity of the user submitting an appeal, taken from their token."""

    user_id: int
    username: str
    discriminator: str = "0"
    avatar: Optional[str] = None

    @property
    def tag(self) -> str:
        """username#discriminator, or the bare username for migrated accounts."""
        if not self.discriminator or self.discriminator == "0":
            return self.username
        return f"{self.username}#{self.discriminator}"

    @property
    def avatar_url(self) -> Optional[str]:
        if not self.avatar:
            return None
        return f"https://cdn.discordapp.com/avatars/{self.user_id}/{self.avatar}.png?size=128"


@dataclass
class SubmissionResult:
    """
    Outcome of a submission.

    An accepted submission has an appeal and no rejection. A submission
    that was stored but could not be posted has both.
    """

    appeal: Optional[AppealRecord] = None
    rejection: Optional[AppealRejection] = None

    @property
    def accepted(self) -> bool:
        return self.appeal is not None and self.rejection is None


class DecisionOutcome(str, Enum):
    """Outcome of a moderator decision."""

    APPLIED = "applied"                    # This call moved the appeal out of Pending
    ALREADY_RESOLVED = "already_resolved"  # Someone else decided first
    NOT_FOUND = "not_found"                # Unknown case ID


@dataclass(frozen=True)
class ViolationEntry:
    """One completed enforcement action from the report ledger."""

    case_id: str
    date: str
    action: str
    reason: str
    moderator: str


@dataclass
class ViolationHistory:
    """A user's most recent violations plus how many were left out."""

    user_id: int
    entries: List[ViolationEntry] = field(default_factory=list)
    total: int = 0

    @property
    def omitted(self) -> int:
        return max(self.total - len(self.entries), 0)

    @property
    def is_empty(self) -> bool:
        return not self.entries

    @property
    def note(self) -> Optional[str]:
        """Truncation note, None when every violation is shown."""
        if self.omitted <= 0:
            return None
        return (
            f"Showing only {len(self.entries)} of {self.total} total "
            f"({self.omitted} more not shown)."
        )


__all__ = [
    "Submitter",
    "SubmissionResult",
    "DecisionOutcome",
    "ViolationEntry",
    "ViolationHistory",
]
