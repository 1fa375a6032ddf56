"""
Configuration constants for the sleep-journal platform.
"""

import os
from datetime import time
from pathlib import Path

# Persisted layout
DB_FILE = "sleepjournal.db"
APP_DIR_NAME = "sleep-journal"

# Bumped whenever _SCHEMA_SQL changes shape
SCHEMA_VERSION = 1

# History pagination
PAGE_SIZE = 20
# "Load more" fires once this many (or fewer) loaded items remain below the viewport
REMAINING_ITEMS_THRESHOLD = 5

# Rating scale (1..MAX_RATING); contracts.v1 validates input against it
MAX_RATING = 10
DEFAULT_RATING = 5

# Preference defaults
DEFAULT_REMINDER_TIME = time(21, 0)
DEFAULT_ENABLE_REMINDERS = False
DEFAULT_USE_DARK_MODE = False

# Statistics look-back windows, in days
RECENT_WINDOWS_DAYS = (7, 30)

_DATA_DIR_ENV = "SLEEP_JOURNAL_DATA_DIR"
_BUSY_TIMEOUT_MS_ENV = "SLEEP_JOURNAL_BUSY_TIMEOUT_MS"

_DEFAULT_BUSY_TIMEOUT_MS = 5_000


def _to_int_env(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    return value if value > 0 else default


def get_data_dir() -> Path:
    """Return the application-private data directory.

    Uses a platform-appropriate location and supports an override via
    ``SLEEP_JOURNAL_DATA_DIR`` for tests and portable installs.
    """
    override = os.environ.get(_DATA_DIR_ENV, "").strip()
    if override:
        return Path(override)

    if os.name == "nt":
        base = Path(os.environ.get("APPDATA", str(Path.home() / "AppData" / "Roaming")))
        return base / APP_DIR_NAME

    xdg = os.environ.get("XDG_DATA_HOME", "").strip()
    base = Path(xdg) if xdg else Path.home() / ".local" / "share"
    return base / APP_DIR_NAME


def get_db_path(data_dir: Path | None = None) -> Path:
    """Return the path to the journal's SQLite database."""
    return (data_dir or get_data_dir()) / DB_FILE


def get_busy_timeout_ms() -> int:
    """SQLite busy timeout, overridable via ``SLEEP_JOURNAL_BUSY_TIMEOUT_MS``."""
    return _to_int_env(_BUSY_TIMEOUT_MS_ENV, _DEFAULT_BUSY_TIMEOUT_MS)
