"""
Gavel - Error Taxonomy
======================

Typed outcomes and exceptions shared by the appeal engine, the
notification gateway and the API.

DESIGN:
    Expected outcomes (bad input, duplicate appeal, cooldown, stale
    button) are values, not exceptions, so callers branch on an explicit
    kind. Exceptions are kept for dependencies that failed: the Discord
    side (DependencyUnavailable) and case ID allocation
    (CaseIdExhaustedError).

Author: Gavel contributors
"""

from dataclasses import dataclass
from enum import Enum


# =============================================================================
# Rejections
# =============================================================================

class RejectionKind(str, Enum):
    """Why a submission was not accepted (or not fully delivered)."""

    VALIDATION = "validation"          # Missing or invalid fields
    PENDING_EXISTS = "pending_exists"  # Subject already has a pending appeal
    THROTTLED = "throttled"            # Rejected appeal inside the cooldown window
    UNAVAILABLE = "unavailable"        # Storage or Discord side failed


@dataclass(frozen=True)
class AppealRejection:
    """A typed submission rejection with a message safe to show the user."""

    kind: RejectionKind
    message: str


# =============================================================================
# Exceptions
# =============================================================================

class DependencyUnavailable(Exception):
    """
    Raised when an external collaborator cannot do its job.

    Covers a missing appeal channel, DM delivery failures and message
    edits that Discord refused.
    """

    def __init__(self, operation: str, reason: str) -> None:
        self.operation = operation
        self.reason = reason
        super().__init__(f"{operation}: {reason}")


class CaseIdExhaustedError(Exception):
    """Raised when no free case ID was found within the retry ceiling."""

    def __init__(self, attempts: int) -> None:
        self.attempts = attempts
        super().__init__(f"No free case ID after {attempts} attempts")


__all__ = [
    "RejectionKind",
    "AppealRejection",
    "DependencyUnavailable",
    "CaseIdExhaustedError",
]
