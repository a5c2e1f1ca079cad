"""
Gavel - Test Fixtures
=====================

Shared fixtures for all tests.
"""

import os
import tempfile
import time
from typing import Callable, Optional
from unittest.mock import AsyncMock, MagicMock

import pytest

# Set up test environment before importing modules
os.environ.setdefault("GAVEL_LOGS_DIR", tempfile.mkdtemp(prefix="gavel-logs-"))
os.environ.setdefault("DISCORD_TOKEN", "test-token")
os.environ.setdefault("APPEAL_CHANNEL_ID", "444555666")
os.environ.setdefault("GAVEL_JWT_SECRET", "test-secret")

from gavel.core.config import Config  # noqa: E402
from gavel.core.database import DatabaseManager  # noqa: E402
from gavel.core.errors import DependencyUnavailable  # noqa: E402
from gavel.services.appeals import AppealService, Submitter  # noqa: E402


JWT_SECRET = "test-secret"


# =============================================================================
# Fakes
# =============================================================================

class FakeGateway:
    """NotificationGateway that records calls instead of talking to Discord."""

    def __init__(self):
        self.posted = []
        self.notified = []
        self.updated = []
        self.post_error: Optional[DependencyUnavailable] = None
        self.notify_error: Optional[DependencyUnavailable] = None
        self.update_error: Optional[DependencyUnavailable] = None

    async def post_appeal(self, appeal, submitter, evidence_links):
        if self.post_error:
            raise self.post_error
        self.posted.append((appeal, submitter, evidence_links))

    async def notify_subject(self, appeal):
        if self.notify_error:
            raise self.notify_error
        self.notified.append(appeal)

    async def update_case_message(self, appeal, message):
        if self.update_error:
            raise self.update_error
        self.updated.append((appeal, message))


# =============================================================================
# Database Fixtures
# =============================================================================

@pytest.fixture
def temp_db_path(tmp_path):
    """Create a temporary database path for testing."""
    return tmp_path / "test_gavel.db"


@pytest.fixture
def test_db(temp_db_path):
    """Create a fresh test database instance."""
    db = DatabaseManager(temp_db_path)
    yield db
    db.close()


@pytest.fixture
def seed_report(test_db) -> Callable[..., None]:
    """Insert a report ledger row for a user."""
    counter = {"n": 0}

    def _seed(
        author_id: int,
        status: str = "Action Taken: Muted",
        reason: Optional[str] = "Spam",
        moderator: Optional[str] = "moduser",
        timestamp: Optional[float] = None,
        case_id: Optional[str] = None,
    ) -> None:
        counter["n"] += 1
        test_db.execute(
            """INSERT INTO reports (
                case_id, author_id, author_tag, status, reason,
                action_taken_by_name, timestamp
            ) VALUES (?, ?, ?, ?, ?, ?, ?)""",
            (
                case_id or f"R{counter['n']:04d}",
                str(author_id),
                "reported#0",
                status,
                reason,
                moderator,
                timestamp if timestamp is not None else time.time() - counter["n"],
            )
        )

    return _seed


# =============================================================================
# Service Fixtures
# =============================================================================

@pytest.fixture
def test_config(temp_db_path):
    """Config with test values, independent of the environment."""
    return Config(
        discord_token="test-token",
        appeal_channel_id=444555666,
        jwt_secret=JWT_SECRET,
        database_path=temp_db_path,
    )


@pytest.fixture
def fake_gateway():
    """Recording notification gateway."""
    return FakeGateway()


@pytest.fixture
def appeal_service(test_db, fake_gateway, test_config):
    """AppealService wired to the temp database and fake gateway."""
    return AppealService(test_db, fake_gateway, test_config)


@pytest.fixture
def submitter():
    """A user submitting an appeal."""
    return Submitter(user_id=123456789, username="testuser", avatar="abc123")


# =============================================================================
# API Fixtures
# =============================================================================

@pytest.fixture
def api_config():
    """API settings with a known JWT secret."""
    from gavel.api.config import APIConfig
    return APIConfig(jwt_secret=JWT_SECRET)


@pytest.fixture
def client(appeal_service, api_config):
    """TestClient for an app backed by the test appeal service."""
    from fastapi.testclient import TestClient

    from gavel.api.app import create_app
    from gavel.api.dependencies import set_appeal_service

    app = create_app(appeal_service, api_config)
    with TestClient(app) as test_client:
        yield test_client
    set_appeal_service(None)


@pytest.fixture
def auth_headers(api_config):
    """Build Authorization headers for a user."""
    from gavel.api.services.auth import AuthService

    auth = AuthService(api_config)

    def _headers(user_id: int = 123456789, username: str = "testuser") -> dict:
        token, _ = auth.create_access_token(user_id, username, avatar="abc123")
        return {"Authorization": f"Bearer {token}"}

    return _headers


# =============================================================================
# Discord Mocks
# =============================================================================

@pytest.fixture
def mock_discord_moderator():
    """Create a mock Discord moderator."""
    mod = MagicMock()
    mod.id = 111222333
    mod.name = "moduser"
    mod.__str__ = MagicMock(return_value="moduser")
    mod.mention = "<@111222333>"
    return mod


@pytest.fixture
def mock_case_message():
    """Create a mock case message carrying the appeal embed."""
    message = MagicMock()
    message.id = 888999000
    message.embeds = []
    message.edit = AsyncMock()
    return message


@pytest.fixture
def mock_discord_interaction(mock_discord_moderator, mock_case_message, appeal_service):
    """Create a mock button interaction on a bot holding the appeal service."""
    interaction = MagicMock()
    interaction.user = mock_discord_moderator
    interaction.message = mock_case_message
    interaction.data = {"custom_id": "approve_1234"}
    interaction.client = MagicMock()
    interaction.client.appeal_service = appeal_service
    interaction.response = MagicMock()
    interaction.response.defer = AsyncMock()
    interaction.followup = MagicMock()
    interaction.followup.send = AsyncMock()
    return interaction
