"""
Gavel - Configuration Tests
===========================

Tests for environment parsing and validation.
"""

import pytest

from gavel.core.config import ConfigValidationError, load_config
from gavel.core.constants import DEFAULT_HISTORY_LIMIT


@pytest.fixture
def base_env(monkeypatch):
    """Required variables set, optional ones cleared."""
    monkeypatch.setenv("DISCORD_TOKEN", "test-token")
    monkeypatch.setenv("APPEAL_CHANNEL_ID", "444555666")
    monkeypatch.setenv("GAVEL_JWT_SECRET", "test-secret")
    for name in ("HISTORY_LIMIT", "THREAD_AUTO_ARCHIVE_MINUTES", "APPEAL_COOLDOWN_DAYS"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestLoadConfig:
    """Tests for load_config."""

    def test_defaults(self, base_env):
        """Unset optional values use their defaults."""
        config = load_config()

        assert config.appeal_channel_id == 444555666
        assert config.history_limit == DEFAULT_HISTORY_LIMIT
        assert config.thread_auto_archive_minutes == 1440
        assert config.appeal_cooldown_days == 7

    def test_missing_required(self, base_env):
        """A missing required variable raises ConfigValidationError."""
        base_env.delenv("DISCORD_TOKEN")

        with pytest.raises(ConfigValidationError):
            load_config()

    @pytest.mark.parametrize("minutes", ["60", "1440", "4320", "10080"])
    def test_archive_duration_accepted(self, base_env, minutes):
        """Durations Discord accepts are kept."""
        base_env.setenv("THREAD_AUTO_ARCHIVE_MINUTES", minutes)

        assert load_config().thread_auto_archive_minutes == int(minutes)

    @pytest.mark.parametrize("minutes", ["120", "59", "20000", "abc"])
    def test_archive_duration_rejected(self, base_env, minutes):
        """Any other duration falls back to one day."""
        base_env.setenv("THREAD_AUTO_ARCHIVE_MINUTES", minutes)

        assert load_config().thread_auto_archive_minutes == 1440

    def test_history_limit_clamped(self, base_env):
        """History limits above the embed field budget are clamped."""
        base_env.setenv("HISTORY_LIMIT", "100")

        assert load_config().history_limit == 25
