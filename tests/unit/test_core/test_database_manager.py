"""Tests for DatabaseManager: load, reset and save of the active instance."""

from __future__ import annotations

import pytest

from catalogdb.core.database_manager import DatabaseManager
from catalogdb.core.db import DatabaseEntry, DatabaseLoadError
from catalogdb.core.enums import StoreLanguage


class TestDatabaseManager:
    """Tests for the active-instance lifecycle."""

    def test_starts_empty_at_configured_path(self, mock_config) -> None:
        manager = DatabaseManager()

        assert manager.db_path == mock_config.DATABASE_FILE
        assert manager.database.count == 0
        assert manager.database.db_path == mock_config.DATABASE_FILE

    def test_save_then_load(self, mock_config, temp_db_path) -> None:
        manager = DatabaseManager(temp_db_path)
        manager.database.add(DatabaseEntry(id=440, name="Team Fortress 2"))
        manager.save()

        other = DatabaseManager(temp_db_path)
        loaded = other.load()

        assert other.database is loaded
        assert loaded.get_name(440) == "Team Fortress 2"

    def test_load_replaces_instance(self, mock_config, temp_db_path) -> None:
        manager = DatabaseManager(temp_db_path)
        before = manager.database

        manager.load()

        assert manager.database is not before

    def test_load_from_other_path(self, mock_config, temp_db_path, tmp_path) -> None:
        manager = DatabaseManager(temp_db_path)
        other_path = tmp_path / "other.json"

        manager.load(other_path)

        assert manager.db_path == other_path
        assert manager.database.db_path == other_path

    def test_corrupt_load_keeps_previous(self, mock_config, temp_db_path) -> None:
        manager = DatabaseManager(temp_db_path)
        manager.database.add(DatabaseEntry(id=1, name="Kept"))
        before = manager.database

        temp_db_path.parent.mkdir(parents=True, exist_ok=True)
        temp_db_path.write_text("{broken", encoding="utf-8")

        with pytest.raises(DatabaseLoadError):
            manager.load()

        assert manager.database is before
        assert manager.database.get_name(1) == "Kept"

    def test_reset(self, mock_config, temp_db_path) -> None:
        """reset() swaps in an empty store with the same language and path."""
        manager = DatabaseManager(temp_db_path)
        manager.database.add(DatabaseEntry(id=1, name="Gone"))
        manager.database.language = StoreLanguage.GERMAN
        old = manager.database

        new = manager.reset()

        assert manager.database is new
        assert new is not old
        assert new.count == 0
        assert new.language == StoreLanguage.GERMAN
        assert new.db_path == temp_db_path
        # Holders of the old instance still see its data
        assert old.get_name(1) == "Gone"
