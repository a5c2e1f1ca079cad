"""
Gavel - Configuration Module
============================

Centralized configuration management with environment variable validation.

DESIGN:
    Configuration is loaded once from environment variables (populated
    from .env by main.py) into a dataclass. Required values are checked
    up front so a misconfigured deployment fails at startup instead of on
    the first appeal.

    Key patterns:
    - get_config() caches a single Config instance
    - Validation happens once at load time, not on every access
    - Numeric tunables are clamped to sane ranges with a warning

Author: Gavel contributors
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple
from zoneinfo import ZoneInfo

from gavel.core.constants import DEFAULT_HISTORY_LIMIT, THREAD_ARCHIVE_DURATIONS


# =============================================================================
# Timezone Configuration
# =============================================================================

NY_TZ = ZoneInfo("America/New_York")
"""Eastern timezone used for log timestamps and rendered dates."""


# =============================================================================
# Configuration Dataclass
# =============================================================================

@dataclass
class Config:
    """
    Service configuration loaded from environment variables.

    Attributes:
        discord_token: Discord bot authentication token.
        appeal_channel_id: Channel where new appeals are posted.
        jwt_secret: Secret used to verify API bearer tokens.
        database_path: SQLite file holding appeals and reports.
        appeal_cooldown_days: Days a rejected user must wait to appeal again.
        case_id_max_attempts: Draws allowed before case ID allocation gives up.
        history_limit: Violations shown by the View History button.
    """

    # -------------------------------------------------------------------------
    # Required
    # -------------------------------------------------------------------------

    discord_token: str
    appeal_channel_id: int
    jwt_secret: str

    # -------------------------------------------------------------------------
    # Optional: Storage
    # -------------------------------------------------------------------------

    database_path: Path = Path("data") / "gavel.db"

    # -------------------------------------------------------------------------
    # Optional: Appeal Rules
    # -------------------------------------------------------------------------

    appeal_cooldown_days: int = 7
    case_id_max_attempts: int = 50
    history_limit: int = DEFAULT_HISTORY_LIMIT
    thread_auto_archive_minutes: int = 1440

    # -------------------------------------------------------------------------
    # Optional: Webhooks
    # -------------------------------------------------------------------------

    error_webhook_url: Optional[str] = None


# =============================================================================
# Embed Colors
# =============================================================================

class EmbedColors:
    """Color palette for appeal embeds."""

    PENDING = 0x00AE86   # New appeal waiting for a decision
    APPROVED = 0x90EE90  # Light green
    REJECTED = 0xFFB6C1  # Light pink
    HISTORY = 0x5865F2   # Discord blurple
    ERROR = 0xFF0000     # Webhook error alerts


# =============================================================================
# Validation
# =============================================================================

class ConfigValidationError(Exception):
    """Raised when required configuration is missing or invalid."""

    pass


def _parse_int(value: Optional[str], name: str) -> int:
    """
    Parse string to integer with descriptive error handling.

    Raises:
        ConfigValidationError: If value is missing or not a valid integer.
    """
    if not value:
        raise ConfigValidationError(f"Missing required: {name}")
    try:
        return int(value)
    except ValueError:
        raise ConfigValidationError(f"Invalid integer for {name}: {value}")


def _parse_int_with_default(
    value: Optional[str],
    default: int,
    name: str,
    min_val: Optional[int] = None,
    max_val: Optional[int] = None,
) -> int:
    """
    Parse optional integer with default and range validation.

    Args:
        value: String value from environment variable.
        default: Default value if not set or invalid.
        name: Variable name for warning messages.
        min_val: Minimum allowed value (inclusive).
        max_val: Maximum allowed value (inclusive).

    Returns:
        Parsed integer within valid range, or default.
    """
    if not value:
        return default
    from gavel.core.logger import logger
    try:
        parsed = int(value)
    except ValueError:
        logger.warning(f"Config {name}='{value}' invalid, using default {default}")
        return default
    if min_val is not None and parsed < min_val:
        logger.warning(f"Config {name}={parsed} below min {min_val}, using {min_val}")
        return min_val
    if max_val is not None and parsed > max_val:
        logger.warning(f"Config {name}={parsed} above max {max_val}, using {max_val}")
        return max_val
    return parsed


def _parse_choice(
    value: Optional[str],
    default: int,
    name: str,
    choices: Tuple[int, ...],
) -> int:
    """Parse an optional integer that must be one of a fixed set of values."""
    parsed = _parse_int_with_default(value, default, name)
    if parsed not in choices:
        from gavel.core.logger import logger
        allowed = ", ".join(str(c) for c in choices)
        logger.warning(f"Config {name}={parsed} not one of {allowed}, using {default}")
        return default
    return parsed


def _validate_url(value: Optional[str], name: str) -> Optional[str]:
    """Return the URL if it looks like http(s), otherwise None."""
    if not value:
        return None
    if not value.startswith(("https://", "http://")):
        from gavel.core.logger import logger
        logger.warning(f"Config {name} invalid URL format, ignoring")
        return None
    return value


# =============================================================================
# Configuration Loading
# =============================================================================

def load_config() -> Config:
    """
    Load and validate configuration from environment variables.

    Returns:
        Validated Config object with all settings.

    Raises:
        ConfigValidationError: If any required variable is missing or invalid.
    """
    missing = []

    discord_token = os.getenv("DISCORD_TOKEN")
    if not discord_token:
        missing.append("DISCORD_TOKEN")

    appeal_channel_id_str = os.getenv("APPEAL_CHANNEL_ID")
    if not appeal_channel_id_str:
        missing.append("APPEAL_CHANNEL_ID")

    jwt_secret = os.getenv("GAVEL_JWT_SECRET")
    if not jwt_secret:
        missing.append("GAVEL_JWT_SECRET")

    if missing:
        raise ConfigValidationError(
            f"Missing required environment variables: {', '.join(missing)}"
        )

    database_path = os.getenv("DATABASE_PATH")

    return Config(
        discord_token=discord_token,
        appeal_channel_id=_parse_int(appeal_channel_id_str, "APPEAL_CHANNEL_ID"),
        jwt_secret=jwt_secret,
        database_path=Path(database_path) if database_path else Path("data") / "gavel.db",
        appeal_cooldown_days=_parse_int_with_default(
            os.getenv("APPEAL_COOLDOWN_DAYS"), 7, "APPEAL_COOLDOWN_DAYS", min_val=0, max_val=365
        ),
        case_id_max_attempts=_parse_int_with_default(
            os.getenv("CASE_ID_MAX_ATTEMPTS"), 50, "CASE_ID_MAX_ATTEMPTS", min_val=1, max_val=10000
        ),
        history_limit=_parse_int_with_default(
            os.getenv("HISTORY_LIMIT"), DEFAULT_HISTORY_LIMIT, "HISTORY_LIMIT", min_val=1, max_val=25
        ),
        thread_auto_archive_minutes=_parse_choice(
            os.getenv("THREAD_AUTO_ARCHIVE_MINUTES"), 1440, "THREAD_AUTO_ARCHIVE_MINUTES",
            THREAD_ARCHIVE_DURATIONS,
        ),
        error_webhook_url=_validate_url(os.getenv("ERROR_WEBHOOK_URL"), "ERROR_WEBHOOK_URL"),
    )


# =============================================================================
# Global Config Instance
# =============================================================================

_config: Optional[Config] = None


def get_config() -> Config:
    """
    Get the global configuration instance, loading if needed.

    Raises:
        ConfigValidationError: On first call if config is invalid.
    """
    global _config
    if _config is None:
        _config = load_config()
    return _config


def validate_and_log_config() -> None:
    """
    Validate configuration and log a summary at startup.

    Raises:
        ConfigValidationError: If required configuration is missing.
    """
    from gavel.core.logger import logger

    config = get_config()

    if not config.error_webhook_url:
        logger.info("Optional config not set: ERROR_WEBHOOK_URL")

    logger.tree("Configuration Validated", [
        ("Required", "✅ All required variables set"),
        ("Appeal Channel", str(config.appeal_channel_id)),
        ("Database", str(config.database_path)),
        ("Rejection Cooldown", f"{config.appeal_cooldown_days} days"),
        ("History Limit", str(config.history_limit)),
    ], emoji="⚙️")


# =============================================================================
# Module Export
# =============================================================================

__all__ = [
    "Config",
    "ConfigValidationError",
    "EmbedColors",
    "NY_TZ",
    "get_config",
    "load_config",
    "validate_and_log_config",
]
