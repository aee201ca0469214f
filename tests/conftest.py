"""
Shared test fixtures and configuration for entire test suite.

Provides: controllable clocks, in-memory key-value store, session store,
chat log ledger and sample CMS documents
Dependencies: pytest
System role: Test infrastructure and fixture management
"""

from datetime import datetime, timedelta, timezone

import pytest

from concierge.boundary.kv.memory_store import InMemoryKeyValueStore
from concierge.core.export.chat_log_ledger import ChatLogLedger
from concierge.core.session.session_store import SessionStore


class FakeClock:
    """Manually advanced clock returning epoch seconds."""

    def __init__(self, start: float = 1_000_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeDateTimeClock:
    """Manually advanced clock returning aware UTC datetimes."""

    def __init__(self, start: datetime) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def fake_clock() -> FakeClock:
    """Provide a monotonic-style fake clock."""
    return FakeClock()


@pytest.fixture
def utc_clock() -> FakeDateTimeClock:
    """Provide a datetime clock fixed at 2025-06-15 09:30:00 UTC."""
    return FakeDateTimeClock(datetime(2025, 6, 15, 9, 30, 0, tzinfo=timezone.utc))


@pytest.fixture
def kv_store(fake_clock: FakeClock) -> InMemoryKeyValueStore:
    """Provide an in-memory key-value store driven by the fake clock."""
    return InMemoryKeyValueStore(clock=fake_clock)


@pytest.fixture
def session_store(kv_store: InMemoryKeyValueStore, utc_clock: FakeDateTimeClock) -> SessionStore:
    """Provide a session store with a 24h TTL."""
    return SessionStore(kv_store, ttl_seconds=86400, clock=utc_clock)


@pytest.fixture
def ledger(kv_store: InMemoryKeyValueStore, utc_clock: FakeDateTimeClock) -> ChatLogLedger:
    """Provide a chat log ledger with a 7 day TTL."""
    return ChatLogLedger(kv_store, ttl_seconds=604800, clock=utc_clock)


@pytest.fixture
def sample_courses() -> list[dict]:
    """Provide two course documents, the second without a price."""
    return [
        {
            "_id": "course-1",
            "_type": "course",
            "_updatedAt": "2025-05-01T10:00:00Z",
            "title": "Kinesiology Basics",
            "slug": {"current": "kinesiology-basics"},
            "description": "An introduction to muscle testing and balancing techniques.",
            "duration": "6 hours",
            "price": 25000,
            "level": "beginner",
        },
        {
            "_id": "course-2",
            "_type": "course",
            "_updatedAt": "2025-05-02T10:00:00Z",
            "title": "Advanced Practitioner Course",
            "slug": {"current": "advanced-practitioner"},
            "description": "Deepen your practice with case studies and supervised sessions.",
            "duration": "12 hours",
            "level": "advanced",
        },
    ]
