"""
Shared test fixtures for the Watch Party API test suite.
"""

from unittest.mock import MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from app.config import Settings
from app.services.lifecycle import SessionLifecycle
from app.services.store import SessionStore, UserRegistry
from app.services.sync import PlaybackSync


class FakeConnection:
    """Stand-in transport that records every pushed message."""

    def __init__(self):
        self.sent = []

    async def send_json(self, data):
        self.sent.append(data)


@pytest.fixture
def test_settings():
    """Settings configured for testing (reaper task disabled)."""
    return Settings(
        debug=True,
        log_level="DEBUG",
        reaper_enabled=False,
    )


@pytest.fixture
def test_app(test_settings):
    """A fresh application with its own empty stores."""
    from app.main import create_app

    return create_app(test_settings)


@pytest_asyncio.fixture
async def app_client(test_app):
    """Async HTTP client bound to the test application."""
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def sessions():
    return SessionStore()


@pytest.fixture
def users():
    return UserRegistry()


@pytest.fixture
def lifecycle(sessions, users):
    return SessionLifecycle(sessions, users)


@pytest.fixture
def notifier():
    """Records broadcast calls instead of scheduling deliveries."""
    return MagicMock()


@pytest.fixture
def sync(sessions, users, notifier):
    return PlaybackSync(sessions, users, notify=notifier)


@pytest.fixture
def make_user(users):
    """Register a user backed by a FakeConnection."""

    def _make_user():
        return users.register(FakeConnection())

    return _make_user
