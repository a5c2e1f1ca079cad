"""
Gavel - Appeal Constants
========================

User-facing messages and fixed values for the appeal system.

Author: Gavel contributors
"""

# =============================================================================
# Submission Messages
# =============================================================================

MSG_MISSING_FIELDS = "Missing required fields."
MSG_INVALID_PUNISHMENT = "Invalid punishment type."
MSG_PENDING_EXISTS = "You already have a pending appeal."
MSG_THROTTLED = (
    "You have a rejected appeal within the last {days} days. "
    "Please wait before appealing again."
)
MSG_SUBMITTED = "Appeal submitted successfully."
MSG_CHANNEL_NOT_FOUND = "Appeal channel not found."
MSG_POST_FAILED = "Failed to post appeal."
MSG_UNAVAILABLE = "Internal server error."

# =============================================================================
# Decision Messages
# =============================================================================

DM_DECISION = "Hello! Your appeal (#{case_id}) has been **{status}**."
STATUS_LINE = "The appeal has been **{status}**."

# =============================================================================
# History
# =============================================================================

DEFAULT_REASON = "No reason"
DEFAULT_MODERATOR = "Unknown"
MSG_NO_VIOLATIONS = "No previous violations found."
MSG_HISTORY_FAILED = "Error fetching violation history."
HISTORY_DATE_FORMAT = "%m/%d/%Y"


# =============================================================================
# Module Export
# =============================================================================

__all__ = [
    "MSG_MISSING_FIELDS",
    "MSG_INVALID_PUNISHMENT",
    "MSG_PENDING_EXISTS",
    "MSG_THROTTLED",
    "MSG_SUBMITTED",
    "MSG_CHANNEL_NOT_FOUND",
    "MSG_POST_FAILED",
    "MSG_UNAVAILABLE",
    "DM_DECISION",
    "STATUS_LINE",
    "DEFAULT_REASON",
    "DEFAULT_MODERATOR",
    "MSG_NO_VIOLATIONS",
    "MSG_HISTORY_FAILED",
    "HISTORY_DATE_FORMAT",
]
