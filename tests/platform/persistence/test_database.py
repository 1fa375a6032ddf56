"""
Tests for the low-level database primitives.
"""

import logging
import sqlite3
import tempfile
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

from journal_platform.persistence.database import (
    apply_journal_tuning,
    init_db,
    is_throwaway_path,
    open_connection,
    table_names,
)
from journal_platform.runtime.config import SCHEMA_VERSION


@pytest.mark.asyncio
async def test_open_connection_creates_parent_dir(db_path):
    conn = await open_connection(db_path)
    try:
        assert db_path.parent.is_dir()
    finally:
        await conn.close()


@pytest.mark.asyncio
async def test_init_db_is_idempotent(db_path):
    conn = await open_connection(db_path)
    try:
        await init_db(conn)
        await init_db(conn)

        names = await table_names(conn)
        cursor = await conn.execute("SELECT version FROM schema_version")
        versions = [r[0] for r in await cursor.fetchall()]
    finally:
        await conn.close()

    assert {"journal_entry", "user_preferences", "passage", "schema_version"} <= names
    assert versions == [SCHEMA_VERSION]


@pytest.mark.asyncio
async def test_preferences_table_rejects_second_row(db_path):
    conn = await open_connection(db_path)
    try:
        await init_db(conn)
        with pytest.raises(sqlite3.IntegrityError):
            await conn.execute("INSERT INTO user_preferences (id) VALUES (2)")
    finally:
        await conn.close()


@pytest.mark.asyncio
async def test_in_memory_database(tmp_path):
    conn = await open_connection(":memory:")
    try:
        await init_db(conn)
        assert "journal_entry" in await table_names(conn)
    finally:
        await conn.close()
    assert list(tmp_path.iterdir()) == []


class TestJournalTuning:
    @pytest.mark.asyncio
    async def test_enables_wal_on_file_database(self, db_path):
        conn = await open_connection(db_path)
        try:
            assert await apply_journal_tuning(conn) is True
        finally:
            await conn.close()

    @pytest.mark.asyncio
    async def test_memory_database_reports_no_wal(self, caplog):
        conn = await open_connection(":memory:")
        try:
            with caplog.at_level(logging.WARNING, logger="journal_platform.persistence.database"):
                assert await apply_journal_tuning(conn) is False
        finally:
            await conn.close()
        assert caplog.records

    @pytest.mark.asyncio
    async def test_tuning_errors_are_swallowed(self, caplog):
        conn = MagicMock()
        conn.execute = AsyncMock(side_effect=sqlite3.OperationalError("database is locked"))

        with caplog.at_level(logging.WARNING, logger="journal_platform.persistence.database"):
            assert await apply_journal_tuning(conn) is False

        assert any("database is locked" in r.getMessage() for r in caplog.records)


class TestThrowawayPath:
    def test_memory(self):
        assert is_throwaway_path(":memory:") is True

    def test_temp_dir_file(self):
        assert is_throwaway_path(Path(tempfile.gettempdir()) / "x" / "journal.db") is True

    def test_pytest_tmp_path(self, tmp_path):
        assert is_throwaway_path(tmp_path / "journal.db") is True

    def test_regular_path(self):
        assert is_throwaway_path(Path("/srv/sleep-journal/sleepjournal.db")) is False
