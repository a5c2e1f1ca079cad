"""
Gavel - Discord Error Logging
=============================

Consistent log lines for failed Discord API calls.

Author: Gavel contributors
"""

from typing import List, Optional, Tuple

import discord

from gavel.core.logger import logger


# HTTP status code descriptions for logging
HTTP_STATUS_DESCRIPTIONS = {
    400: "Bad Request",
    401: "Unauthorized",
    403: "Forbidden",
    404: "Not Found",
    429: "Rate Limited",
    500: "Internal Server Error",
    502: "Bad Gateway",
    503: "Service Unavailable",
    504: "Gateway Timeout",
}


def log_http_error(
    e: discord.HTTPException,
    operation: str,
    context: Optional[List[Tuple[str, str]]] = None,
) -> None:
    """
    Log a Discord HTTPException with status details.

    Args:
        e: The HTTPException that occurred.
        operation: Description of what operation failed.
        context: Additional (key, value) pairs for the log entry.
    """
    status_desc = HTTP_STATUS_DESCRIPTIONS.get(e.status, "Unknown")

    log_items = [
        ("Status", f"{e.status} ({status_desc})"),
        ("Error", str(e.text) if getattr(e, "text", None) else str(e)),
    ]
    if context:
        log_items.extend(context)

    # Recoverable or expected statuses are warnings
    if e.status == 429:
        logger.warning(f"🚦 {operation} Rate Limited", log_items)
    elif e.status == 403:
        logger.warning(f"🚫 {operation} Forbidden", log_items)
    elif e.status == 404:
        logger.warning(f"❓ {operation} Not Found", log_items)
    else:
        logger.error(f"❌ {operation} Failed", log_items)


__all__ = ["log_http_error", "HTTP_STATUS_DESCRIPTIONS"]
