"""Platform-owned journal store: lifecycle, cancellation and error policy.

``JournalStore`` is the single owner of the backing database file. Row-level
SQL lives in :class:`EntryStore` and :class:`PreferencesStore`; this class
adds the pieces every operation shares:

* lazy, exactly-once schema setup behind a double-checked ``asyncio.Lock``;
* a pre-I/O check of the caller's cancellation event;
* logging of storage errors before they are re-raised as
  :class:`StorageFailure`.
"""

from __future__ import annotations

import asyncio
import logging
import sqlite3
from pathlib import Path
from typing import Awaitable, Callable, Optional, TypeVar

import aiosqlite

from journal_platform.runtime.config import get_db_path
from journal_platform.runtime.models import (
    InvalidArgumentError,
    JournalEntry,
    OperationCancelledError,
    StorageFailure,
    UserPreferences,
)

from .database import apply_journal_tuning, init_db, is_throwaway_path, open_connection
from .entry_store import EntryStore
from .preferences_store import PreferencesStore

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _check_cancelled(operation: str, cancel_event: Optional[asyncio.Event]) -> None:
    if cancel_event is not None and cancel_event.is_set():
        raise OperationCancelledError(f"{operation} was cancelled")


class JournalStore:
    """Asynchronous CRUD over the journal database.

    Usage::

        async with JournalStore(path) as store:
            saved = await store.save_entry(JournalEntry(created_at=now, text="..."))
            entries = await store.list_entries()

    ``wal_mode=None`` enables WAL except for in-memory databases and files
    under the system temp directory.
    """

    def __init__(self, db_path: Path | str, *, wal_mode: bool | None = None,
                 busy_timeout_ms: int | None = None):
        self.db_path = db_path
        self._wal_mode = wal_mode
        self._busy_timeout_ms = busy_timeout_ms
        self._conn: aiosqlite.Connection | None = None
        self._initialized = False
        self._init_lock = asyncio.Lock()
        self.wal_enabled = False

    async def __aenter__(self) -> "JournalStore":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def ensure_initialized(self) -> None:
        """Open the database and create the schema, once.

        The flag is read without the lock; only callers that see it unset
        queue on the lock, and the first one through does the work.
        """
        if self._initialized:
            return
        async with self._init_lock:
            if self._initialized:
                return
            await self._initialize()

    def _should_tune(self) -> bool:
        if self._wal_mode is not None:
            return self._wal_mode
        return not is_throwaway_path(self.db_path)

    async def _initialize(self) -> None:
        conn = None
        try:
            conn = await open_connection(self.db_path, self._busy_timeout_ms)
            if self._should_tune():
                self.wal_enabled = await apply_journal_tuning(conn)
            else:
                logger.debug("Skipping journal tuning for throwaway database %s", self.db_path)
            await init_db(conn)
        except BaseException as e:
            if conn is not None:
                await conn.close()
            if isinstance(e, (sqlite3.Error, OSError)):
                logger.exception("Failed to initialize journal database at %s", self.db_path)
                raise StorageFailure("initialize", f"Could not initialize database: {e}") from e
            raise

        self._conn = conn
        self._initialized = True
        logger.info("Journal database initialized at %s (wal=%s)", self.db_path, self.wal_enabled)

    async def close(self) -> None:
        """Close the connection. The next operation re-opens it."""
        async with self._init_lock:
            if self._conn is not None:
                await self._conn.close()
                logger.info("Journal database connection closed")
            self._conn = None
            self._initialized = False

    async def _run(self, operation: str,
                   action: Callable[[aiosqlite.Connection], Awaitable[T]],
                   cancel_event: Optional[asyncio.Event]) -> T:
        _check_cancelled(operation, cancel_event)
        await self.ensure_initialized()
        _check_cancelled(operation, cancel_event)
        try:
            return await action(self._conn)
        except (sqlite3.Error, OSError) as e:
            logger.exception("Storage failure during %s (db=%s)", operation, self.db_path)
            raise StorageFailure(operation, f"{operation} failed: {e}") from e

    # ------------------------------------------------------------------
    # Entries
    # ------------------------------------------------------------------

    async def save_entry(self, entry: JournalEntry,
                         cancel_event: Optional[asyncio.Event] = None) -> JournalEntry:
        """Insert (``id == 0``) or overwrite (``id != 0``) an entry.

        Returns the stored entry; the argument is left untouched.
        """
        if entry is None:
            raise InvalidArgumentError("entry must not be None")
        if not isinstance(entry, JournalEntry):
            raise InvalidArgumentError(
                f"entry must be a JournalEntry, got {type(entry).__name__}"
            )

        async def _save(conn):
            if entry.id == 0:
                return await EntryStore.insert(conn, entry)
            return await EntryStore.upsert(conn, entry)

        stored = await self._run("save entry", _save, cancel_event)
        logger.info("Journal entry saved. id=%d created_at=%s",
                    stored.id, stored.created_at.isoformat())
        return stored

    async def list_entries(self,
                           cancel_event: Optional[asyncio.Event] = None) -> list[JournalEntry]:
        """All entries ordered by ``created_at`` descending, then id descending."""
        entries = await self._run("list entries", EntryStore.list_all, cancel_event)
        logger.debug("Retrieved %d journal entries", len(entries))
        return entries

    async def get_entry(self, entry_id: int,
                        cancel_event: Optional[asyncio.Event] = None) -> Optional[JournalEntry]:
        """Return the entry with ``entry_id``, or None when there is none."""
        return await self._run(
            "get entry", lambda conn: EntryStore.get(conn, entry_id), cancel_event
        )

    async def delete_entry(self, entry_id: int,
                           cancel_event: Optional[asyncio.Event] = None) -> bool:
        """Delete an entry. Unknown ids are a logged no-op."""
        deleted = await self._run(
            "delete entry", lambda conn: EntryStore.delete(conn, entry_id), cancel_event
        )
        if deleted:
            logger.info("Deleted journal entry %d", entry_id)
        else:
            logger.warning("Delete requested for missing journal entry %d", entry_id)
        return deleted

    async def count_entries(self, cancel_event: Optional[asyncio.Event] = None) -> int:
        return await self._run("count entries", EntryStore.count, cancel_event)

    # ------------------------------------------------------------------
    # Preferences
    # ------------------------------------------------------------------

    async def get_preferences(self,
                              cancel_event: Optional[asyncio.Event] = None) -> Optional[UserPreferences]:
        """Return the stored preferences, or None if they were never saved."""
        return await self._run("get preferences", PreferencesStore.load, cancel_event)

    async def save_preferences(self, preferences: UserPreferences,
                               cancel_event: Optional[asyncio.Event] = None) -> UserPreferences:
        """Insert or update the single preferences row."""
        if preferences is None:
            raise InvalidArgumentError("preferences must not be None")
        if not isinstance(preferences, UserPreferences):
            raise InvalidArgumentError(
                f"preferences must be UserPreferences, got {type(preferences).__name__}"
            )
        stored = await self._run(
            "save preferences", lambda conn: PreferencesStore.save(conn, preferences), cancel_event
        )
        logger.info("User preferences saved")
        return stored


def open_default_store(data_dir: Path | None = None, **kwargs) -> JournalStore:
    """Build a store at the configured application data path (not yet opened)."""
    return JournalStore(get_db_path(data_dir), **kwargs)


__all__ = ["JournalStore", "open_default_store"]
