"""Tests for the journal data classes and error taxonomy."""

import sqlite3
from datetime import date, datetime, time

from journal_platform.runtime.models import (
    InvalidArgumentError,
    JournalEntry,
    JournalError,
    OperationCancelledError,
    StorageFailure,
    UserPreferences,
)


class TestJournalEntry:
    def test_defaults(self):
        entry = JournalEntry(created_at=datetime(2026, 1, 2, 23, 0))

        assert entry.id == 0
        assert entry.is_persisted is False
        assert (entry.mood, entry.social_comfort, entry.regret) == (5, 5, 5)
        assert entry.entry_date == date(2026, 1, 2)

    def test_dict_round_trip(self):
        entry = JournalEntry(
            id=3, created_at=datetime(2026, 1, 2, 23, 0, 0, 1234), text="hi",
            mood=9, social_comfort=2, regret=4,
        )
        data = entry.to_dict()

        assert data["created_at"] == "2026-01-02T23:00:00.001234"
        assert JournalEntry.from_dict(data) == entry
        assert entry.is_persisted is True

    def test_from_dict_defaults(self):
        entry = JournalEntry.from_dict({"created_at": "2026-01-02T08:00:00", "id": None})
        assert entry.id == 0
        assert entry.text == ""
        assert entry.mood == 5


class TestUserPreferences:
    def test_defaults(self):
        prefs = UserPreferences()
        assert prefs.id == 1
        assert prefs.reminder_time == time(21, 0)
        assert prefs.to_dict() == {
            "user_name": None,
            "enable_reminders": False,
            "reminder_time": "21:00",
            "use_dark_mode": False,
        }


class TestErrors:
    def test_hierarchy(self):
        assert issubclass(InvalidArgumentError, JournalError)
        assert issubclass(InvalidArgumentError, ValueError)
        assert issubclass(OperationCancelledError, JournalError)
        assert issubclass(StorageFailure, JournalError)

    def test_storage_failure_keeps_operation(self):
        cause = sqlite3.OperationalError("disk I/O error")
        try:
            try:
                raise cause
            except sqlite3.Error as e:
                raise StorageFailure("save entry") from e
        except StorageFailure as failure:
            assert failure.operation == "save entry"
            assert failure.__cause__ is cause
            assert "save entry" in str(failure)
