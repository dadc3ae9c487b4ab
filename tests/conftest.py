"""Shared pytest fixtures and store doubles."""

import uuid

import pytest

from storefront.session.session_manager import SessionManager
from storefront.session.stores import ArraySessionStore
from storefront.support import Config


TEST_SECRET = "test-secret-key"


@pytest.fixture(autouse=True)
def config_overrides():
    """Pin the secret and environment; drop overrides after each test."""
    Config.set("app.APP_SECRET_KEY", TEST_SECRET)
    Config.set("app.APP_ENV", "development")
    Config.set("app.APP_DEBUG", False)
    yield
    Config.clear_runtime_overrides()


class LaggyStore(ArraySessionStore):
    """
    In-memory store whose writes only become readable after a delay.

    The first `hidden_reads` reads after a write miss; `read_errors` reads
    raise before any miss is counted. Every call is recorded in `events`.
    """

    def __init__(self, hidden_reads=0, read_errors=0, upsert_error=None,
                 reject_upsert=False, destroy_error=None):
        super().__init__()
        self.hidden_reads = hidden_reads
        self.read_errors = read_errors
        self.upsert_error = upsert_error
        self.reject_upsert = reject_upsert
        self.destroy_error = destroy_error
        self.reads = 0
        self.events = []
        self._misses_left = 0

    async def find(self, session_id):
        self.reads += 1
        self.events.append(("find", session_id))
        if self.read_errors > 0:
            self.read_errors -= 1
            raise ConnectionError("store unavailable")
        if self._misses_left > 0:
            self._misses_left -= 1
            return None
        return await super().find(session_id)

    async def upsert(self, session_id, data):
        self.events.append(("upsert", session_id))
        if self.upsert_error is not None:
            raise self.upsert_error
        if self.reject_upsert:
            return False
        self._misses_left = self.hidden_reads
        return await super().upsert(session_id, data)

    async def destroy(self, session_id):
        self.events.append(("destroy", session_id))
        if self.destroy_error is not None:
            raise self.destroy_error
        return await super().destroy(session_id)

    def count(self, operation):
        return sum(1 for op, _ in self.events if op == operation)


class RecordingSleep:
    """Sleep replacement that records requested delays and returns at once."""

    def __init__(self):
        self.delays = []

    async def __call__(self, delay, cancel_token=None):
        self.delays.append(delay)


@pytest.fixture
def store():
    return ArraySessionStore()


@pytest.fixture
def recording_sleep():
    return RecordingSleep()


@pytest.fixture
def unique_id():
    """Generate a unique test ID."""
    return f"test-{uuid.uuid4().hex[:12]}"


def make_session(store, session_id="initial-session-id"):
    return SessionManager(store=store, session_id=session_id, lifetime=3600)
