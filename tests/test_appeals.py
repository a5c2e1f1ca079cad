"""
Gavel - Appeal Service Tests
============================

Tests for submission, eligibility and moderator decisions.
"""

import asyncio
import time

import pytest

from gavel.core.constants import SECONDS_PER_DAY
from gavel.core.database import AppealStatus, Decision, PunishmentKind
from gavel.core.errors import DependencyUnavailable, RejectionKind
from gavel.services.appeals import DecisionOutcome, Submitter
from gavel.services.appeals.constants import (
    MSG_CHANNEL_NOT_FOUND,
    MSG_INVALID_PUNISHMENT,
    MSG_MISSING_FIELDS,
    MSG_PENDING_EXISTS,
)


async def _submit(service, submitter, **overrides):
    fields = dict(
        punishment_kind="Muted",
        punishment_reason="Spamming",
        appeal_reason="It was a misunderstanding",
    )
    fields.update(overrides)
    return await service.submit_appeal(submitter, **fields)


def _reject_at(db, case_id, resolved_at):
    db.resolve_appeal(case_id, AppealStatus.REJECTED, 111222333, "moduser")
    db.execute("UPDATE appeals SET resolved_at = ? WHERE case_id = ?", (resolved_at, case_id))


# =============================================================================
# Value Type Tests
# =============================================================================

class TestSubmitter:
    """Tests for submitter identity."""

    def test_tag_without_discriminator(self):
        """Migrated accounts show the bare username."""
        assert Submitter(1, "testuser").tag == "testuser"
        assert Submitter(1, "testuser", discriminator="").tag == "testuser"

    def test_tag_with_discriminator(self):
        """Legacy accounts show username#discriminator."""
        assert Submitter(1, "testuser", discriminator="1234").tag == "testuser#1234"

    def test_avatar_url(self):
        """Avatar hashes become CDN URLs."""
        assert Submitter(1, "u").avatar_url is None
        assert Submitter(1, "u", avatar="abc").avatar_url.startswith(
            "https://cdn.discordapp.com/avatars/1/abc.png"
        )


class TestPunishmentKind:
    """Tests for punishment kind parsing."""

    def test_parse_any_case(self):
        """Form values match regardless of case."""
        assert PunishmentKind.parse("muted") is PunishmentKind.MUTED
        assert PunishmentKind.parse(" BANNED ") is PunishmentKind.BANNED

    def test_parse_unknown(self):
        """Unknown kinds return None."""
        assert PunishmentKind.parse("Kicked") is None


# =============================================================================
# Submission Tests
# =============================================================================

class TestSubmission:
    """Tests for submit_appeal."""

    @pytest.mark.asyncio
    async def test_accepted_submission(self, appeal_service, fake_gateway, submitter):
        """A valid submission is stored Pending and posted once."""
        result = await _submit(appeal_service, submitter, additional_notes="  extra  ")

        assert result.accepted
        assert result.appeal["status"] == "Pending"
        assert result.appeal["punishment_kind"] == "Muted"
        assert result.appeal["additional_notes"] == "extra"
        assert result.appeal["user_tag"] == "testuser"
        assert len(fake_gateway.posted) == 1
        assert fake_gateway.posted[0][0]["case_id"] == result.appeal["case_id"]

    @pytest.mark.asyncio
    async def test_punishment_kind_normalized(self, appeal_service, submitter):
        """Lowercase kinds are stored in their canonical form."""
        result = await _submit(appeal_service, submitter, punishment_kind="banned")
        assert result.appeal["punishment_kind"] == "Banned"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("missing", ["punishment_kind", "punishment_reason", "appeal_reason"])
    async def test_missing_fields(self, appeal_service, fake_gateway, submitter, missing):
        """Any blank required field is a validation rejection."""
        result = await _submit(appeal_service, submitter, **{missing: "   "})

        assert not result.accepted
        assert result.appeal is None
        assert result.rejection.kind is RejectionKind.VALIDATION
        assert result.rejection.message == MSG_MISSING_FIELDS
        assert fake_gateway.posted == []

    @pytest.mark.asyncio
    async def test_invalid_punishment_kind(self, appeal_service, submitter):
        """Kinds other than Muted/Banned are rejected."""
        result = await _submit(appeal_service, submitter, punishment_kind="Kicked")

        assert result.rejection.kind is RejectionKind.VALIDATION
        assert result.rejection.message == MSG_INVALID_PUNISHMENT

    @pytest.mark.asyncio
    async def test_pending_appeal_blocks_new_one(self, appeal_service, fake_gateway, submitter):
        """A second submission while one is pending is refused."""
        await _submit(appeal_service, submitter)
        result = await _submit(appeal_service, submitter)

        assert result.rejection.kind is RejectionKind.PENDING_EXISTS
        assert result.rejection.message == MSG_PENDING_EXISTS
        assert len(fake_gateway.posted) == 1

    @pytest.mark.asyncio
    async def test_concurrent_submissions(self, appeal_service, test_db, submitter):
        """Of two simultaneous submissions exactly one is accepted."""
        results = await asyncio.gather(
            _submit(appeal_service, submitter),
            _submit(appeal_service, submitter),
        )

        accepted = [r for r in results if r.accepted]
        refused = [r for r in results if not r.accepted]
        assert len(accepted) == 1
        assert refused[0].rejection.kind is RejectionKind.PENDING_EXISTS
        assert len(test_db.get_user_appeals(submitter.user_id)) == 1

    @pytest.mark.asyncio
    async def test_gateway_failure_reported(self, appeal_service, fake_gateway, test_db, submitter):
        """A stored appeal that could not be posted is returned with UNAVAILABLE."""
        fake_gateway.post_error = DependencyUnavailable("post_appeal", MSG_CHANNEL_NOT_FOUND)

        result = await _submit(appeal_service, submitter)

        assert not result.accepted
        assert result.appeal is not None
        assert result.rejection.kind is RejectionKind.UNAVAILABLE
        assert result.rejection.message == MSG_CHANNEL_NOT_FOUND
        assert test_db.get_pending_appeal(submitter.user_id) is not None

    @pytest.mark.asyncio
    async def test_exhausted_case_ids(self, appeal_service, test_db, submitter, monkeypatch):
        """Case ID exhaustion becomes an UNAVAILABLE rejection."""
        monkeypatch.setattr("gavel.core.database.appeals.secrets.randbelow", lambda n: 0)
        await _submit(appeal_service, Submitter(1, "other"))

        result = await _submit(appeal_service, submitter)

        assert result.rejection.kind is RejectionKind.UNAVAILABLE
        assert test_db.get_user_appeals(submitter.user_id) == []

    @pytest.mark.asyncio
    async def test_evidence_links_passed_to_gateway(self, appeal_service, fake_gateway, submitter):
        """Only the first two http(s) links reach the gateway."""
        links = ["javascript:alert(1)", "https://a.example/1.png", 5, "", "http://b.example/2.png", "https://c.example/3.png"]

        await _submit(appeal_service, submitter, evidence_links=links)

        assert fake_gateway.posted[0][2] == ["https://a.example/1.png", "http://b.example/2.png"]


# =============================================================================
# Eligibility Tests
# =============================================================================

class TestEligibility:
    """Tests for the rejection cooldown."""

    @pytest.mark.asyncio
    async def test_recent_rejection_throttles(self, appeal_service, test_db, submitter):
        """A rejection 3 days ago blocks a new appeal."""
        first = await _submit(appeal_service, submitter)
        _reject_at(test_db, first.appeal["case_id"], time.time() - 3 * SECONDS_PER_DAY)

        result = await _submit(appeal_service, submitter)

        assert result.rejection.kind is RejectionKind.THROTTLED
        assert "7 days" in result.rejection.message

    @pytest.mark.asyncio
    async def test_old_rejection_allows(self, appeal_service, test_db, submitter):
        """A rejection 8 days ago no longer blocks."""
        first = await _submit(appeal_service, submitter)
        _reject_at(test_db, first.appeal["case_id"], time.time() - 8 * SECONDS_PER_DAY)

        result = await _submit(appeal_service, submitter)

        assert result.accepted

    @pytest.mark.asyncio
    async def test_approval_does_not_throttle(self, appeal_service, test_db, submitter):
        """Approved appeals never start a cooldown."""
        first = await _submit(appeal_service, submitter)
        test_db.resolve_appeal(first.appeal["case_id"], AppealStatus.APPROVED, 1, "mod")

        result = await _submit(appeal_service, submitter)

        assert result.accepted

    @pytest.mark.asyncio
    async def test_zero_cooldown_disables_throttle(self, appeal_service, test_db, submitter):
        """A cooldown of 0 days turns throttling off."""
        appeal_service.config.appeal_cooldown_days = 0
        first = await _submit(appeal_service, submitter)
        _reject_at(test_db, first.appeal["case_id"], time.time())

        result = await _submit(appeal_service, submitter)

        assert result.accepted

    def test_clean_evidence_links_none(self, appeal_service):
        """No links yields an empty list."""
        assert appeal_service.clean_evidence_links(None) == []


# =============================================================================
# Decision Tests
# =============================================================================

class TestDecisions:
    """Tests for decide_appeal."""

    @pytest.mark.asyncio
    async def test_approve_applies_once(self, appeal_service, fake_gateway, submitter, mock_case_message):
        """The first decision applies, notifies and updates the message."""
        submitted = await _submit(appeal_service, submitter)
        case_id = submitted.appeal["case_id"]

        outcome = await appeal_service.decide_appeal(
            case_id, Decision.APPROVE, 111222333, "moduser", mock_case_message
        )

        assert outcome is DecisionOutcome.APPLIED
        assert fake_gateway.notified[0]["status"] == "Approved"
        assert fake_gateway.updated[0][1] is mock_case_message

    @pytest.mark.asyncio
    async def test_second_decision_is_noop(self, appeal_service, fake_gateway, test_db, submitter):
        """A later click sees ALREADY_RESOLVED and changes nothing."""
        submitted = await _submit(appeal_service, submitter)
        case_id = submitted.appeal["case_id"]

        await appeal_service.decide_appeal(case_id, Decision.REJECT, 1, "mod1")
        first = test_db.get_appeal(case_id)
        outcome = await appeal_service.decide_appeal(case_id, Decision.APPROVE, 2, "mod2")

        assert outcome is DecisionOutcome.ALREADY_RESOLVED
        assert test_db.get_appeal(case_id)["status"] == "Rejected"
        assert len(fake_gateway.notified) == 1
        stored = test_db.get_appeal(case_id)
        assert stored["resolver_id"] == 1
        assert stored["resolver_tag"] == "mod1"
        assert stored["resolved_at"] == first["resolved_at"]

    @pytest.mark.asyncio
    async def test_lost_race_is_noop(self, appeal_service, fake_gateway, test_db, submitter, monkeypatch):
        """A decision that read Pending but lost the update changes nothing."""
        submitted = await _submit(appeal_service, submitter)
        case_id = submitted.appeal["case_id"]
        stale = test_db.get_appeal(case_id)
        await appeal_service.decide_appeal(case_id, Decision.APPROVE, 1, "mod1")
        first = test_db.get_appeal(case_id)

        monkeypatch.setattr(test_db, "get_appeal", lambda cid: dict(stale))
        outcome = await appeal_service.decide_appeal(case_id, Decision.REJECT, 2, "mod2")
        monkeypatch.undo()

        assert outcome is DecisionOutcome.ALREADY_RESOLVED
        assert test_db.get_appeal(case_id) == first
        assert len(fake_gateway.notified) == 1
        assert len(fake_gateway.updated) == 1

    @pytest.mark.asyncio
    async def test_concurrent_decisions(self, appeal_service, fake_gateway, submitter):
        """Of two simultaneous decisions exactly one applies."""
        submitted = await _submit(appeal_service, submitter)
        case_id = submitted.appeal["case_id"]

        outcomes = await asyncio.gather(
            appeal_service.decide_appeal(case_id, Decision.APPROVE, 1, "mod1"),
            appeal_service.decide_appeal(case_id, Decision.REJECT, 2, "mod2"),
        )

        assert sorted(o.value for o in outcomes) == ["already_resolved", "applied"]
        assert len(fake_gateway.notified) == 1

    @pytest.mark.asyncio
    async def test_unknown_case(self, appeal_service, fake_gateway):
        """Unknown case IDs are NOT_FOUND."""
        outcome = await appeal_service.decide_appeal("0000", Decision.APPROVE, 1, "mod")

        assert outcome is DecisionOutcome.NOT_FOUND
        assert fake_gateway.notified == []

    @pytest.mark.asyncio
    async def test_dm_failure_still_applies(self, appeal_service, fake_gateway, test_db, submitter):
        """A closed DM is logged and the message update still happens."""
        fake_gateway.notify_error = DependencyUnavailable("notify_subject", "DMs closed")
        submitted = await _submit(appeal_service, submitter)
        case_id = submitted.appeal["case_id"]

        outcome = await appeal_service.decide_appeal(case_id, Decision.REJECT, 1, "mod")

        assert outcome is DecisionOutcome.APPLIED
        assert test_db.get_appeal(case_id)["status"] == "Rejected"
        assert len(fake_gateway.updated) == 1

    @pytest.mark.asyncio
    async def test_rejection_starts_cooldown(self, appeal_service, submitter):
        """Rejecting through decide_appeal throttles the next submission."""
        submitted = await _submit(appeal_service, submitter)
        await appeal_service.decide_appeal(submitted.appeal["case_id"], Decision.REJECT, 1, "mod")

        result = await _submit(appeal_service, submitter)

        assert result.rejection.kind is RejectionKind.THROTTLED
