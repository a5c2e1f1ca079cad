"""
Gavel - Utilities Package
=========================

Shared async and Discord helpers.

Author: Gavel contributors
"""

from .async_utils import create_safe_task
from .discord_errors import log_http_error
from .retry import retry_async, safe_fetch_channel

__all__ = [
    "create_safe_task",
    "log_http_error",
    "retry_async",
    "safe_fetch_channel",
]
