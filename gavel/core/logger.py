"""
Gavel - Logger Module
=====================

Tree-style logging with Eastern timestamps and daily log files.

DESIGN:
    Every log call writes one headline plus optional indented details,
    which keeps appeal events (who, which case, what happened) readable
    at a glance in both the console and the log file.

    Key features:
    - Tree formatting for (key, value) detail lists
    - Eastern timestamps (EST/EDT handled by zoneinfo)
    - One directory per day, old directories pruned on startup
    - Separate error file
    - Optional Discord webhook for error alerts (aiohttp)

Author: Gavel contributors
"""

import asyncio
import os
import uuid
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Tuple

import aiohttp

from gavel.core.config import EmbedColors, NY_TZ


# =============================================================================
# Constants
# =============================================================================

LOGS_DIR = Path(os.getenv("GAVEL_LOGS_DIR", "logs"))
"""Directory for all log files, organized by date."""

LOG_RETENTION_DAYS = 7
"""Number of days to keep dated log directories."""

Details = List[Tuple[str, str]]


# =============================================================================
# Tree Logger Class
# =============================================================================

class TreeLogger:
    """
    Logger with tree-style detail output.

    Attributes:
        run_id: Short identifier for this process run.
        log_file: Path to the main log file.
        error_file: Path to the error-only log file.
    """

    def __init__(self, name: str = "Gavel") -> None:
        self.run_id: str = str(uuid.uuid4())[:8]
        self._name = name
        self._webhook_url: Optional[str] = None

        today = datetime.now(NY_TZ).strftime("%Y-%m-%d")
        self.log_dir = LOGS_DIR / today
        self.log_dir.mkdir(parents=True, exist_ok=True)

        self.log_file = self.log_dir / f"{name}-{today}.log"
        self.error_file = self.log_dir / f"{name}-Errors-{today}.log"

        self._cleanup_old_logs()
        self._write_session_header()

    def set_webhook(self, url: Optional[str]) -> None:
        """Set the Discord webhook URL used for error alerts."""
        self._webhook_url = url

    # =========================================================================
    # Log Files
    # =========================================================================

    def _cleanup_old_logs(self) -> None:
        """Remove dated log directories older than the retention period."""
        now = datetime.now()
        deleted = 0

        for item in LOGS_DIR.iterdir():
            if not item.is_dir():
                continue
            try:
                dir_date = datetime.strptime(item.name, "%Y-%m-%d")
            except ValueError:
                continue  # Not a dated directory
            if (now - dir_date).days > LOG_RETENTION_DAYS:
                for f in item.iterdir():
                    f.unlink()
                item.rmdir()
                deleted += 1

        if deleted > 0:
            print(f"[LOG CLEANUP] Removed {deleted} old log directories")

    def _write_session_header(self) -> None:
        header = f"""
============================================================
NEW SESSION - RUN ID: {self.run_id}
[{datetime.now(NY_TZ).strftime("%I:%M:%S %p %Z")}]
============================================================
"""
        with open(self.log_file, "a", encoding="utf-8") as f:
            f.write(header)

    # =========================================================================
    # Core Logging
    # =========================================================================

    def _get_timestamp(self) -> str:
        return datetime.now(NY_TZ).strftime("[%I:%M:%S %p %Z]")

    def _write(
        self,
        message: str,
        emoji: str = "",
        include_timestamp: bool = True,
        is_error: bool = False,
    ) -> None:
        """Write one line to the console, the main log and optionally the error log."""
        if include_timestamp:
            timestamp = self._get_timestamp()
            full_message = f"{timestamp} {emoji} {message}" if emoji else f"{timestamp} {message}"
        else:
            full_message = f"{emoji} {message}" if emoji else message

        print(full_message)

        with open(self.log_file, "a", encoding="utf-8") as f:
            f.write(f"{full_message}\n")

        if is_error:
            with open(self.error_file, "a", encoding="utf-8") as f:
                f.write(f"{full_message}\n")

    def _write_details(self, details: Details, is_error: bool = False) -> None:
        for i, (key, value) in enumerate(details):
            prefix = "└─" if i == len(details) - 1 else "├─"
            self._write(f"  {prefix} {key}: {value}", include_timestamp=False, is_error=is_error)

    # =========================================================================
    # Tree Formatting
    # =========================================================================

    def tree(self, title: str, items: Details, emoji: str = "📦") -> None:
        """
        Log a headline followed by tree-formatted details.

        Example output:
            [02:30:45 PM EST] 📝 Appeal Created
              ├─ Case ID: 4821
              └─ User ID: 123456789
        """
        self._write(title, emoji=emoji)
        self._write_details(items)

    # =========================================================================
    # Log Levels
    # =========================================================================

    def debug(self, msg: str, details: Optional[Details] = None) -> None:
        """Log a debug message (only when the DEBUG env var is set)."""
        if os.getenv("DEBUG"):
            self._write(msg, "🔍")
            if details:
                self._write_details(details)

    def info(self, msg: str, details: Optional[Details] = None) -> None:
        self._write(msg, "ℹ️")
        if details:
            self._write_details(details)

    def warning(self, msg: str, details: Optional[Details] = None) -> None:
        self._write(msg, "⚠️")
        if details:
            self._write_details(details)

    def error(self, msg: str, details: Optional[Details] = None) -> None:
        """
        Log an error, written to both the main and the error log.

        Errors with details are also forwarded to the webhook when one is
        configured and an event loop is running.
        """
        self._write(msg, "❌", is_error=True)
        if not details:
            return
        self._write_details(details, is_error=True)

        if self._webhook_url:
            try:
                loop = asyncio.get_running_loop()
            except RuntimeError:
                return  # No loop (startup or tests), skip the alert
            loop.create_task(self._send_webhook_error(msg, details))

    # =========================================================================
    # Webhook Integration
    # =========================================================================

    async def _send_webhook_error(self, title: str, details: Details) -> None:
        """Post an error embed to the configured Discord webhook."""
        if not self._webhook_url:
            return

        description = "\n".join(f"**{k}:** {v}" for k, v in details)
        payload = {
            "embeds": [{
                "title": f"❌ {title}",
                "description": description,
                "color": EmbedColors.ERROR,
                "timestamp": datetime.now(NY_TZ).isoformat(),
                "footer": {"text": f"{self._name} Run ID: {self.run_id}"},
            }]
        }

        try:
            async with aiohttp.ClientSession() as session:
                async with session.post(
                    self._webhook_url,
                    json=payload,
                    timeout=aiohttp.ClientTimeout(total=10),
                ) as resp:
                    if resp.status != 204:
                        print(f"Webhook error: {resp.status}")
        except aiohttp.ClientError as e:
            print(f"Failed to send webhook: {e}")


# =============================================================================
# Global Instance
# =============================================================================

logger = TreeLogger()
"""Shared logger instance imported by every module."""


__all__ = [
    "logger",
    "TreeLogger",
]
