"""Tests for data-directory and tuning configuration."""

import os
from pathlib import Path

import pytest

from journal_platform.runtime import config


class TestDataDir:
    def test_env_override(self, monkeypatch, tmp_path):
        monkeypatch.setenv("SLEEP_JOURNAL_DATA_DIR", str(tmp_path / "portable"))
        assert config.get_data_dir() == tmp_path / "portable"

    def test_blank_override_ignored(self, monkeypatch, tmp_path):
        monkeypatch.setenv("SLEEP_JOURNAL_DATA_DIR", "   ")
        monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path))
        monkeypatch.setattr(os, "name", "posix")
        assert config.get_data_dir() == tmp_path / "sleep-journal"

    def test_xdg_data_home(self, monkeypatch, tmp_path):
        monkeypatch.delenv("SLEEP_JOURNAL_DATA_DIR", raising=False)
        monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path))
        monkeypatch.setattr(os, "name", "posix")
        assert config.get_data_dir() == tmp_path / "sleep-journal"

    def test_home_fallback(self, monkeypatch, tmp_path):
        monkeypatch.delenv("SLEEP_JOURNAL_DATA_DIR", raising=False)
        monkeypatch.delenv("XDG_DATA_HOME", raising=False)
        monkeypatch.setattr(os, "name", "posix")
        monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path))
        assert config.get_data_dir() == tmp_path / ".local" / "share" / "sleep-journal"


class TestDbPath:
    def test_explicit_dir(self, tmp_path):
        assert config.get_db_path(tmp_path) == tmp_path / "sleepjournal.db"

    def test_uses_data_dir(self, monkeypatch, tmp_path):
        monkeypatch.setenv("SLEEP_JOURNAL_DATA_DIR", str(tmp_path))
        assert config.get_db_path() == tmp_path / "sleepjournal.db"


class TestBusyTimeout:
    def test_default(self, monkeypatch):
        monkeypatch.delenv("SLEEP_JOURNAL_BUSY_TIMEOUT_MS", raising=False)
        assert config.get_busy_timeout_ms() == 5000

    def test_override(self, monkeypatch):
        monkeypatch.setenv("SLEEP_JOURNAL_BUSY_TIMEOUT_MS", "250")
        assert config.get_busy_timeout_ms() == 250

    @pytest.mark.parametrize("raw", ["abc", "0", "-10", ""])
    def test_invalid_values_fall_back(self, monkeypatch, raw):
        monkeypatch.setenv("SLEEP_JOURNAL_BUSY_TIMEOUT_MS", raw)
        assert config.get_busy_timeout_ms() == 5000
