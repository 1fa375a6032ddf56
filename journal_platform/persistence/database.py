"""Platform-owned SQLite database primitives."""

import logging
import sqlite3
import tempfile
from pathlib import Path

import aiosqlite

from journal_platform.runtime.config import SCHEMA_VERSION, get_busy_timeout_ms

logger = logging.getLogger(__name__)

MEMORY_DB = ":memory:"


async def open_connection(db_path: Path | str,
                          busy_timeout_ms: int | None = None) -> aiosqlite.Connection:
    """Open (or create) the journal database.

    Returns an ``aiosqlite.Connection`` with ``sqlite3.Row`` rows and a busy
    timeout set. The schema is not touched; see :func:`init_db`.
    The caller is responsible for closing the connection.
    """
    if str(db_path) != MEMORY_DB:
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)
    conn = await aiosqlite.connect(str(db_path))
    conn.row_factory = sqlite3.Row
    timeout = busy_timeout_ms if busy_timeout_ms is not None else get_busy_timeout_ms()
    await conn.execute(f"PRAGMA busy_timeout = {int(timeout)}")
    return conn


def is_throwaway_path(db_path: Path | str) -> bool:
    """Return True for in-memory databases and files under the temp directory."""
    if str(db_path) == MEMORY_DB:
        return True
    try:
        resolved = Path(db_path).resolve()
        tmp_root = Path(tempfile.gettempdir()).resolve()
    except OSError:
        return False
    return resolved == tmp_root or tmp_root in resolved.parents


async def apply_journal_tuning(conn: aiosqlite.Connection) -> bool:
    """Switch the database to WAL with NORMAL sync.

    Failures are logged and swallowed.
    Returns True when WAL mode is active afterwards.
    """
    try:
        cursor = await conn.execute("PRAGMA journal_mode=WAL")
        row = await cursor.fetchone()
        await conn.execute("PRAGMA synchronous=NORMAL")
    except sqlite3.Error as e:
        logger.warning("Could not enable WAL journal mode: %s", e)
        return False

    mode = (row[0] if row else "") or ""
    if mode.lower() != "wal":
        logger.warning("Database refused WAL journal mode (got %r)", mode)
        return False
    return True


async def init_db(conn: aiosqlite.Connection) -> None:
    """Create tables and indexes if they don't exist and record the schema version."""
    await conn.executescript(_SCHEMA_SQL)

    cursor = await conn.execute("SELECT MAX(version) FROM schema_version")
    row = await cursor.fetchone()
    current = row[0] if row[0] is not None else 0

    if current < SCHEMA_VERSION:
        await conn.execute(
            "INSERT OR REPLACE INTO schema_version (version) VALUES (?)",
            (SCHEMA_VERSION,),
        )
    await conn.commit()


async def table_names(conn: aiosqlite.Connection) -> set[str]:
    """Return the names of all user tables in the database."""
    cursor = await conn.execute(
        "SELECT name FROM sqlite_master WHERE type = 'table' AND name NOT LIKE 'sqlite_%'"
    )
    return {r[0] for r in await cursor.fetchall()}


_SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS schema_version (
    version INTEGER PRIMARY KEY
);

CREATE TABLE IF NOT EXISTS journal_entry (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    created_at TEXT NOT NULL,
    text TEXT NOT NULL DEFAULT '',
    mood INTEGER NOT NULL,
    social_comfort INTEGER NOT NULL,
    regret INTEGER NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_journal_entry_created_at
    ON journal_entry(created_at DESC);

CREATE TABLE IF NOT EXISTS user_preferences (
    id INTEGER PRIMARY KEY CHECK (id = 1),
    user_name TEXT,
    enable_reminders INTEGER NOT NULL DEFAULT 0,
    reminder_time TEXT NOT NULL DEFAULT '21:00:00',
    use_dark_mode INTEGER NOT NULL DEFAULT 0
);

CREATE TABLE IF NOT EXISTS passage (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    title TEXT NOT NULL DEFAULT '',
    content TEXT NOT NULL DEFAULT ''
);
"""


__all__ = [
    "MEMORY_DB",
    "open_connection",
    "is_throwaway_path",
    "apply_journal_tuning",
    "init_db",
    "table_names",
]
