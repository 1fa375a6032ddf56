"""
Data structures and exceptions for the sleep-journal platform.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, time
from typing import Optional

from .config import (
    DEFAULT_ENABLE_REMINDERS,
    DEFAULT_RATING,
    DEFAULT_REMINDER_TIME,
    DEFAULT_USE_DARK_MODE,
)

# The preferences table only ever holds this row
PREFERENCES_ROW_ID = 1


class JournalError(Exception):
    """Base class for errors raised by the journal platform."""


class InvalidArgumentError(JournalError, ValueError):
    """Raised when input is missing or malformed, before any I/O happens."""


class OperationCancelledError(JournalError):
    """Raised when the caller asked for an operation to be abandoned."""


class StorageFailure(JournalError):
    """Raised when the backing database cannot complete an operation.

    The original ``sqlite3``/``OSError`` is chained as ``__cause__``.
    """

    def __init__(self, operation: str, message: str = ""):
        super().__init__(message or f"Storage failure during {operation}")
        self.operation = operation


@dataclass
class JournalEntry:
    """A single dated journal entry."""
    created_at: datetime
    text: str = ""
    mood: int = DEFAULT_RATING
    social_comfort: int = DEFAULT_RATING
    regret: int = DEFAULT_RATING
    id: int = 0  # 0 until the store assigns one

    @property
    def entry_date(self) -> date:
        """Date portion of ``created_at``, used for display and date filters."""
        return self.created_at.date()

    @property
    def is_persisted(self) -> bool:
        return self.id != 0

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "created_at": self.created_at.isoformat(),
            "text": self.text,
            "mood": self.mood,
            "social_comfort": self.social_comfort,
            "regret": self.regret,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "JournalEntry":
        created_at = data["created_at"]
        if isinstance(created_at, str):
            created_at = datetime.fromisoformat(created_at)
        return cls(
            id=data.get("id", 0) or 0,
            created_at=created_at,
            text=data.get("text", ""),
            mood=data.get("mood", DEFAULT_RATING),
            social_comfort=data.get("social_comfort", DEFAULT_RATING),
            regret=data.get("regret", DEFAULT_RATING),
        )


@dataclass
class UserPreferences:
    """Application settings; persisted as a single row."""
    user_name: Optional[str] = None
    enable_reminders: bool = DEFAULT_ENABLE_REMINDERS
    reminder_time: time = field(default=DEFAULT_REMINDER_TIME)
    use_dark_mode: bool = DEFAULT_USE_DARK_MODE
    id: int = PREFERENCES_ROW_ID

    def to_dict(self) -> dict:
        return {
            "user_name": self.user_name,
            "enable_reminders": self.enable_reminders,
            "reminder_time": self.reminder_time.strftime("%H:%M"),
            "use_dark_mode": self.use_dark_mode,
        }
