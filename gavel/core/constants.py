"""
Gavel - Centralized Constants
=============================

Magic numbers and fixed strings shared across modules.

Author: Gavel contributors
"""

# =============================================================================
# Time Constants (in seconds)
# =============================================================================

SECONDS_PER_DAY = 86400

# =============================================================================
# Database
# =============================================================================

DB_CONNECTION_TIMEOUT = 30.0          # sqlite3.connect timeout (seconds)
SQLITE_BUSY_TIMEOUT = 5000            # PRAGMA busy_timeout (milliseconds)

# =============================================================================
# Case IDs
# =============================================================================

CASE_ID_MIN = 1000                    # Smallest 4 digit case ID
CASE_ID_MAX = 9999                    # Largest 4 digit case ID

# =============================================================================
# Appeals
# =============================================================================

MAX_EVIDENCE_LINKS = 2                # Screenshot links the form offers

# =============================================================================
# Report Ledger
# =============================================================================

ACTION_TAKEN_PREFIX = "Action Taken:" # Status prefix of completed enforcements
DEFAULT_HISTORY_LIMIT = 10           # Violations shown by View History

# =============================================================================
# Discord Limits
# =============================================================================

EMBED_FIELD_VALUE_LIMIT = 1024
THREAD_NAME_LIMIT = 100
THREAD_ARCHIVE_DURATIONS = (60, 1440, 4320, 10080)  # Minutes Discord accepts
