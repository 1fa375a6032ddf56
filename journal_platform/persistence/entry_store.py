"""Platform-owned journal entry store."""

from dataclasses import replace
from datetime import datetime
from typing import Optional

import aiosqlite

from journal_platform.runtime.models import JournalEntry

_COLUMNS = "id, created_at, text, mood, social_comfort, regret"


def encode_timestamp(value: datetime) -> str:
    """Serialize ``created_at`` so that text order matches chronological order.

    Aware datetimes are converted to naive local time; the fixed microsecond
    width keeps lexical comparison valid. Local time repeats during a DST
    fall-back hour, so entries written in that hour sort by wall-clock time
    rather than by instant.
    """
    if value.tzinfo is not None:
        value = value.astimezone().replace(tzinfo=None)
    return value.isoformat(timespec="microseconds")


def normalize_timestamp(value: datetime) -> datetime:
    """Return ``value`` exactly as it will read back from the store."""
    return datetime.fromisoformat(encode_timestamp(value))


class EntryStore:
    """Single-record CRUD operations for journal entries."""

    @staticmethod
    async def insert(conn: aiosqlite.Connection, entry: JournalEntry) -> JournalEntry:
        """Insert a new entry. Returns a copy carrying the assigned id."""
        cursor = await conn.execute(
            """INSERT INTO journal_entry
               (created_at, text, mood, social_comfort, regret)
               VALUES (?, ?, ?, ?, ?)""",
            (encode_timestamp(entry.created_at), entry.text, entry.mood,
             entry.social_comfort, entry.regret),
        )
        await conn.commit()
        return replace(entry, id=cursor.lastrowid,
                       created_at=normalize_timestamp(entry.created_at))

    @staticmethod
    async def upsert(conn: aiosqlite.Connection, entry: JournalEntry) -> JournalEntry:
        """Write ``entry`` under its own id, overwriting any row with that id.

        There is no existence check: saving an id that was never issued
        creates that row, which is the caller's mistake to avoid.
        """
        await conn.execute(
            """INSERT INTO journal_entry
               (id, created_at, text, mood, social_comfort, regret)
               VALUES (?, ?, ?, ?, ?, ?)
               ON CONFLICT(id) DO UPDATE SET
                   created_at = excluded.created_at,
                   text = excluded.text,
                   mood = excluded.mood,
                   social_comfort = excluded.social_comfort,
                   regret = excluded.regret""",
            (entry.id, encode_timestamp(entry.created_at), entry.text, entry.mood,
             entry.social_comfort, entry.regret),
        )
        await conn.commit()
        return replace(entry, created_at=normalize_timestamp(entry.created_at))

    @staticmethod
    async def list_all(conn: aiosqlite.Connection) -> list[JournalEntry]:
        """All entries, newest first; equal timestamps fall back to newest id."""
        cursor = await conn.execute(
            f"SELECT {_COLUMNS} FROM journal_entry ORDER BY created_at DESC, id DESC"
        )
        rows = await cursor.fetchall()
        return [EntryStore._row_to_entry(r) for r in rows]

    @staticmethod
    async def get(conn: aiosqlite.Connection, entry_id: int) -> Optional[JournalEntry]:
        """Load a single entry by id, or None."""
        cursor = await conn.execute(
            f"SELECT {_COLUMNS} FROM journal_entry WHERE id = ?", (entry_id,)
        )
        row = await cursor.fetchone()
        if row is None:
            return None
        return EntryStore._row_to_entry(row)

    @staticmethod
    async def delete(conn: aiosqlite.Connection, entry_id: int) -> bool:
        """Delete an entry. Returns True if a row was removed."""
        cursor = await conn.execute(
            "DELETE FROM journal_entry WHERE id = ?", (entry_id,)
        )
        await conn.commit()
        return cursor.rowcount > 0

    @staticmethod
    async def count(conn: aiosqlite.Connection) -> int:
        cursor = await conn.execute("SELECT COUNT(*) FROM journal_entry")
        row = await cursor.fetchone()
        return row[0]

    @staticmethod
    def _row_to_entry(row) -> JournalEntry:
        return JournalEntry(
            id=row["id"],
            created_at=datetime.fromisoformat(row["created_at"]),
            text=row["text"],
            mood=row["mood"],
            social_comfort=row["social_comfort"],
            regret=row["regret"],
        )


__all__ = ["EntryStore", "encode_timestamp", "normalize_timestamp"]
