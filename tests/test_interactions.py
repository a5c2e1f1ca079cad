"""
Gavel - Button Interaction Tests
================================

Tests for the persistent appeal button callbacks.
Uses mocked Discord objects to simulate moderator clicks.
"""

import sqlite3
from unittest.mock import MagicMock

import discord
import pytest

from gavel.services.appeals.constants import MSG_HISTORY_FAILED, MSG_NO_VIOLATIONS
from gavel.services.appeals.views import (
    ApproveAppealButton,
    RejectAppealButton,
    ViolationHistoryButton,
    setup_appeal_views,
)


def _pending_case(db, user_id=123456789):
    return db.create_appeal(
        user_id=user_id,
        user_tag="testuser",
        punishment_kind="Banned",
        punishment_reason="Raiding",
        appeal_reason="Wrong account",
    )["case_id"]


# =============================================================================
# Decision Button Tests
# =============================================================================

class TestDecisionButtons:
    """Tests for the approve and reject buttons."""

    def test_custom_ids(self):
        """Buttons carry the case or user ID in their custom_id."""
        assert ApproveAppealButton("1234").item.custom_id == "approve_1234"
        assert RejectAppealButton("1234").item.custom_id == "reject_1234"
        assert ViolationHistoryButton(42).item.custom_id == "history_42"

    def test_buttons_registered_as_dynamic_items(self):
        """All three buttons are registered so they survive restarts."""
        bot = MagicMock()

        setup_appeal_views(bot)

        bot.add_dynamic_items.assert_called_once_with(
            ApproveAppealButton, RejectAppealButton, ViolationHistoryButton
        )
        assert issubclass(ApproveAppealButton, discord.ui.DynamicItem)

    @pytest.mark.asyncio
    async def test_approve_click(self, mock_discord_interaction, test_db, fake_gateway):
        """Approve defers, resolves the appeal and reports to the gateway."""
        case_id = _pending_case(test_db)

        await ApproveAppealButton(case_id).callback(mock_discord_interaction)

        mock_discord_interaction.response.defer.assert_awaited_once()
        appeal = test_db.get_appeal(case_id)
        assert appeal["status"] == "Approved"
        assert appeal["resolver_id"] == 111222333
        assert appeal["resolver_tag"] == "moduser"
        assert fake_gateway.updated[0][1] is mock_discord_interaction.message

    @pytest.mark.asyncio
    async def test_reject_click(self, mock_discord_interaction, test_db):
        """Reject moves the appeal to Rejected."""
        case_id = _pending_case(test_db)

        await RejectAppealButton(case_id).callback(mock_discord_interaction)

        assert test_db.get_appeal(case_id)["status"] == "Rejected"

    @pytest.mark.asyncio
    async def test_stale_click_changes_nothing(self, mock_discord_interaction, test_db, fake_gateway):
        """Clicking a decided case again leaves it and notifies nobody."""
        case_id = _pending_case(test_db)
        await ApproveAppealButton(case_id).callback(mock_discord_interaction)

        await RejectAppealButton(case_id).callback(mock_discord_interaction)

        assert test_db.get_appeal(case_id)["status"] == "Approved"
        assert len(fake_gateway.notified) == 1

    @pytest.mark.asyncio
    async def test_expired_interaction_dropped(self, mock_discord_interaction, test_db):
        """An interaction that can no longer be deferred is ignored."""
        case_id = _pending_case(test_db)
        mock_discord_interaction.response.defer.side_effect = discord.NotFound(
            MagicMock(status=404), "Unknown interaction"
        )

        await ApproveAppealButton(case_id).callback(mock_discord_interaction)

        assert test_db.get_appeal(case_id)["status"] == "Pending"

    @pytest.mark.asyncio
    async def test_service_missing(self, mock_discord_interaction, test_db):
        """Without an appeal service on the bot nothing is resolved."""
        case_id = _pending_case(test_db)
        del mock_discord_interaction.client.appeal_service

        await ApproveAppealButton(case_id).callback(mock_discord_interaction)

        assert test_db.get_appeal(case_id)["status"] == "Pending"


# =============================================================================
# History Button Tests
# =============================================================================

class TestHistoryButton:
    """Tests for the View History button."""

    @pytest.mark.asyncio
    async def test_no_violations(self, mock_discord_interaction):
        """A clean user gets the no-violations message."""
        await ViolationHistoryButton(42).callback(mock_discord_interaction)

        mock_discord_interaction.followup.send.assert_awaited_once_with(
            MSG_NO_VIOLATIONS, ephemeral=True
        )

    @pytest.mark.asyncio
    async def test_history_embed(self, mock_discord_interaction, seed_report):
        """Violations are sent as an ephemeral embed."""
        seed_report(42)
        seed_report(42)

        await ViolationHistoryButton(42).callback(mock_discord_interaction)

        call_args = mock_discord_interaction.followup.send.call_args
        assert call_args[1]["ephemeral"] is True
        assert len(call_args[1]["embed"].fields) == 2

    @pytest.mark.asyncio
    async def test_database_error(self, mock_discord_interaction, appeal_service, monkeypatch):
        """Storage failures produce the generic error message."""
        def _broken(*args, **kwargs):
            raise sqlite3.OperationalError("disk I/O error")

        monkeypatch.setattr(appeal_service.db, "count_action_taken_reports", _broken)

        await ViolationHistoryButton(42).callback(mock_discord_interaction)

        mock_discord_interaction.followup.send.assert_awaited_once_with(
            MSG_HISTORY_FAILED, ephemeral=True
        )
