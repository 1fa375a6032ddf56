"""
Shared fixtures for sleep-journal tests.
"""

from datetime import datetime, timedelta
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio

from journal_platform.persistence import JournalStore
from journal_platform.runtime.models import JournalEntry


@pytest.fixture
def now():
    """A fixed 'current time' so window arithmetic is deterministic."""
    return datetime(2026, 3, 14, 21, 30, 0)


@pytest.fixture
def db_path(tmp_path):
    """Database path inside a not-yet-existing data directory."""
    return tmp_path / "data" / "sleepjournal.db"


@pytest_asyncio.fixture
async def store(db_path):
    """A lazily initialized store on a throwaway file; closed after the test."""
    journal = JournalStore(db_path)
    yield journal
    await journal.close()


@pytest.fixture
def make_entry(now):
    """Build unsaved entries.

    Usage:
        make_entry(text="hi", hours_ago=2, mood=7)
    """
    def _make(text: str = "Slept well", *, hours_ago: float = 0, mood: int = 5,
              social_comfort: int = 5, regret: int = 5) -> JournalEntry:
        return JournalEntry(
            created_at=now - timedelta(hours=hours_ago),
            text=text,
            mood=mood,
            social_comfort=social_comfort,
            regret=regret,
        )
    return _make


@pytest.fixture
def sample_entries(now):
    """25 persisted-looking entries, newest first, one per hour."""
    return [
        JournalEntry(
            id=25 - i,
            created_at=now - timedelta(hours=i),
            text=f"Entry number {25 - i}",
            mood=(i % 10) + 1,
            social_comfort=((i + 3) % 10) + 1,
            regret=((i + 6) % 10) + 1,
        )
        for i in range(25)
    ]


@pytest.fixture
def mock_store():
    """A stand-in store whose ``list_entries`` is an AsyncMock.

    Usage:
        mock_store.list_entries.return_value = entries
    """
    fake = MagicMock(spec=JournalStore)
    fake.list_entries = AsyncMock(return_value=[])
    return fake
