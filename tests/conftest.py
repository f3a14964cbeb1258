# tests/conftest.py
from pathlib import Path
from typing import Generator

import pytest

from catalogdb.config import config
from catalogdb.core.db import Database, DatabaseEntry, LanguageSupport, VRSupport
from catalogdb.core.enums import AppPlatforms, AppType, StoreLanguage


@pytest.fixture
def temp_db_path(tmp_path) -> Path:
    """Snapshot file path inside a per-test directory (not created)."""
    return tmp_path / "data" / "database.json"


@pytest.fixture
def database(temp_db_path) -> Database:
    """Empty Database bound to a temp snapshot path."""
    return Database(db_path=temp_db_path, language=StoreLanguage.ENGLISH)


@pytest.fixture
def sample_database_entries() -> list[DatabaseEntry]:
    """Two base games, a DLC of the first and a DLC-of-DLC stub."""
    return [
        DatabaseEntry(
            id=440,
            name="Team Fortress 2",
            app_type=AppType.GAME,
            platforms=AppPlatforms.ALL,
            developers=["Valve"],
            publishers=["Valve"],
            genres=["Action", "Free to Play"],
            tags=["Free to Play", "Hero Shooter", "Multiplayer", "FPS", "Action"],
            flags=["Multi-player", "Steam Trading Cards"],
            language_support=LanguageSupport(
                full_audio=["English"], interface=["English", "German"], subtitles=["English"]
            ),
            steam_release_date="10 Oct, 2007",
            last_store_scrape=1700000000,
            last_app_info_update=1700000000,
        ),
        DatabaseEntry(
            id=570,
            name="Dota 2",
            app_type=AppType.GAME,
            platforms=AppPlatforms.WINDOWS | AppPlatforms.LINUX,
            developers=["Valve"],
            publishers=["Valve"],
            genres=["Strategy", "Free to Play"],
            tags=["Free to Play", "MOBA", "Strategy", "Multiplayer"],
            flags=["Multi-player", "Steam Workshop"],
            language_support=LanguageSupport(interface=["english", "French"]),
            steam_release_date="9 Jul, 2013",
            last_store_scrape=1700000000,
        ),
        DatabaseEntry(
            id=1001,
            name="Team Fortress 2 - Soundtrack",
            app_type=AppType.DLC,
            parent_id=440,
        ),
        DatabaseEntry(
            id=1002,
            name="Team Fortress 2 - Soundtrack Bonus",
            app_type=AppType.DLC,
            parent_id=1001,
        ),
        DatabaseEntry(
            id=620,
            name="Portal 2 VR Mod",
            app_type=AppType.APPLICATION,
            developers=["Valve", "Valve"],
            publishers=["Valve", "Community"],
            vr_support=VRSupport(headsets=["Valve Index"], input=["Tracked Motion Controllers"]),
            steam_release_date="Coming soon",
        ),
    ]


@pytest.fixture
def populated_database(database, sample_database_entries) -> Database:
    """Database filled with sample_database_entries."""
    for entry in sample_database_entries:
        database.add(entry)
    return database


@pytest.fixture
def mock_config(monkeypatch, tmp_path) -> Generator:
    """Point the global config at a temp data directory.

    Tests that construct a DatabaseManager or rely on backup rotation
    should not touch the user's real data directory.
    """
    data_dir = tmp_path / "config_data"
    monkeypatch.setattr(config, "DATA_DIR", data_dir)
    monkeypatch.setattr(config, "DATABASE_FILE", data_dir / "database.json")
    monkeypatch.setattr(config, "SETTINGS_FILE", data_dir / "settings.json")
    monkeypatch.setattr(config, "STORE_LANGUAGE", "english")
    monkeypatch.setattr(config, "PRETTY_JSON", False)
    monkeypatch.setattr(config, "MAX_BACKUPS", 5)
    monkeypatch.setattr(config, "LOG_LEVEL", "INFO")
    monkeypatch.setattr(config, "LOG_FILE", None)
    monkeypatch.setattr(config, "STEAM_API_KEY", None)
    yield config
