"""
Gavel - Violation History Tests
===============================

Tests for compiling and rendering a user's previous violations.
"""

from datetime import datetime

from gavel.core.config import EmbedColors, NY_TZ
from gavel.services.appeals.embeds import build_history_embed
from gavel.services.appeals.results import ViolationEntry, ViolationHistory


# =============================================================================
# History Compilation Tests
# =============================================================================

class TestViolationHistory:
    """Tests for violation_history."""

    def test_no_violations(self, appeal_service):
        """A clean user has an empty history."""
        history = appeal_service.violation_history(42)

        assert history.is_empty
        assert history.total == 0
        assert history.note is None

    def test_limited_to_ten_with_note(self, appeal_service, seed_report):
        """Fifteen violations show ten with a truncation note."""
        for _ in range(15):
            seed_report(42)

        history = appeal_service.violation_history(42)

        assert len(history.entries) == 10
        assert history.total == 15
        assert history.omitted == 5
        assert history.note == "Showing only 10 of 15 total (5 more not shown)."

    def test_explicit_limit(self, appeal_service, seed_report):
        """An explicit limit overrides the configured one."""
        for _ in range(4):
            seed_report(42)

        history = appeal_service.violation_history(42, limit=2)

        assert len(history.entries) == 2
        assert history.total == 4

    def test_zero_limit_respected(self, appeal_service, seed_report):
        """An explicit limit of 0 returns no entries, not the configured default."""
        for _ in range(3):
            seed_report(42)

        history = appeal_service.violation_history(42, limit=0)

        assert history.entries == []
        assert history.total == 3
        assert history.omitted == 3

    def test_entry_fields(self, appeal_service, seed_report):
        """Entries strip the prefix and format the date in Eastern time."""
        ts = datetime(2024, 3, 5, 12, 0, tzinfo=NY_TZ).timestamp()
        seed_report(42, status="Action Taken: Banned", reason="Raiding",
                    moderator="moduser", timestamp=ts, case_id="R777")

        entry = appeal_service.violation_history(42).entries[0]

        assert entry == ViolationEntry(
            case_id="R777",
            date="03/05/2024",
            action="Banned",
            reason="Raiding",
            moderator="moduser",
        )

    def test_prefix_stripped_any_case(self, appeal_service, seed_report):
        """Lowercase prefixes are stripped too."""
        seed_report(42, status="action taken:  Muted")

        assert appeal_service.violation_history(42).entries[0].action == "Muted"

    def test_missing_reason_and_moderator(self, appeal_service, seed_report):
        """Blank reason and moderator fall back to defaults."""
        seed_report(42, reason=None, moderator="")

        entry = appeal_service.violation_history(42).entries[0]

        assert entry.reason == "No reason"
        assert entry.moderator == "Unknown"

    def test_non_actions_excluded(self, appeal_service, seed_report):
        """Reports without an enforcement action are not violations."""
        seed_report(42, status="Dismissed")
        seed_report(42, status="Pending")

        assert appeal_service.violation_history(42).is_empty


# =============================================================================
# Embed Tests
# =============================================================================

class TestHistoryEmbed:
    """Tests for build_history_embed."""

    def _entry(self, n):
        return ViolationEntry(
            case_id=str(n), date="01/02/2024", action="Muted",
            reason="Spam", moderator="moduser",
        )

    def test_fields_per_entry(self):
        """Each entry renders as one field."""
        history = ViolationHistory(user_id=42, entries=[self._entry(1), self._entry(2)], total=2)

        embed = build_history_embed(history)

        assert embed.title == "Previous Violations"
        assert embed.description == "<@42>"
        assert embed.color.value == EmbedColors.HISTORY
        assert [f.name for f in embed.fields] == ["Case #1 - 01/02/2024", "Case #2 - 01/02/2024"]
        assert "**Action:** Muted" in embed.fields[0].value
        assert "**Moderator:** moduser" in embed.fields[0].value

    def test_note_field_when_truncated(self):
        """Truncated histories end with a Note field."""
        history = ViolationHistory(user_id=42, entries=[self._entry(1)], total=3)

        embed = build_history_embed(history)

        assert embed.fields[-1].name == "Note"
        assert embed.fields[-1].value == "Showing only 1 of 3 total (2 more not shown)."
