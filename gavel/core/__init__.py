"""
Gavel - Core Package
====================

Configuration, logging, error types and database access.

DESIGN:
    Core modules expose shared instances so every service sees the same
    state:
    - get_config() returns the same Config instance
    - get_db() returns the same DatabaseManager instance
    - logger is a global TreeLogger instance

Author: Gavel contributors
"""

# =============================================================================
# Core Imports
# =============================================================================

from .config import (
    Config,
    ConfigValidationError,
    EmbedColors,
    NY_TZ,
    get_config,
)

from .logger import logger, TreeLogger

from .database import DatabaseManager, get_db


__all__ = [
    "Config",
    "ConfigValidationError",
    "EmbedColors",
    "NY_TZ",
    "get_config",
    "logger",
    "TreeLogger",
    "DatabaseManager",
    "get_db",
]
