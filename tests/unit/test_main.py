"""Tests for the command-line entry point."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest
import requests

from catalogdb.__main__ import main
from catalogdb.core.db import AppListItem, Database, DatabaseEntry
from catalogdb.core.enums import StoreLanguage


@pytest.fixture
def mock_setup_logging():
    """Keep the entry point from installing handlers on the package logger."""
    with patch("catalogdb.__main__.setup_logging") as mocked:
        yield mocked


@pytest.fixture
def saved_database(mock_config, temp_db_path) -> Database:
    db = Database(db_path=temp_db_path)
    db.add(DatabaseEntry(id=440, name="Team Fortress 2", tags=["FPS"]))
    db.save()
    return db


class TestMain:
    """Tests for main()."""

    def test_configures_logging(self, mock_config, mock_setup_logging, temp_db_path) -> None:
        assert main(["--database", str(temp_db_path), "--log-level", "debug"]) == 0
        mock_setup_logging.assert_called_once_with("debug")

    def test_defaults_to_configured_level(self, mock_config, mock_setup_logging) -> None:
        assert main([]) == 0
        mock_setup_logging.assert_called_once_with(None)

    def test_bad_log_level_is_usage_error(self, mock_config) -> None:
        with patch("catalogdb.__main__.setup_logging", side_effect=ValueError("Unknown log level: 'x'")):
            with pytest.raises(SystemExit) as exc_info:
                main(["--log-level", "x"])
        assert exc_info.value.code == 2

    def test_corrupt_snapshot_fails(self, mock_config, mock_setup_logging, temp_db_path) -> None:
        temp_db_path.parent.mkdir(parents=True, exist_ok=True)
        temp_db_path.write_text("{broken", encoding="utf-8")

        assert main(["--database", str(temp_db_path)]) == 1

    def test_change_language_saves(self, mock_setup_logging, saved_database, temp_db_path) -> None:
        assert main(["--database", str(temp_db_path), "--language", "german"]) == 0

        loaded = Database.load(temp_db_path)
        assert loaded.language == StoreLanguage.GERMAN
        assert loaded.get_tags(440) == []

    def test_unknown_language(self, mock_setup_logging, saved_database, temp_db_path) -> None:
        assert main(["--database", str(temp_db_path), "--language", "klingon"]) == 2

    def test_refresh_without_key(self, mock_setup_logging, saved_database, temp_db_path) -> None:
        assert main(["--database", str(temp_db_path), "--refresh-app-list"]) == 1

    @patch("catalogdb.__main__.AppListAPI")
    def test_refresh_app_list(self, mock_api: MagicMock, mock_config, mock_setup_logging, saved_database, temp_db_path) -> None:
        mock_config.STEAM_API_KEY = "test_key"
        mock_api.return_value.get_app_list.return_value = [AppListItem(440, "Team Fortress 2"), AppListItem(730, "CS2")]

        assert main(["--database", str(temp_db_path), "--refresh-app-list"]) == 0

        mock_api.assert_called_once_with("test_key")
        assert Database.load(temp_db_path).get_name(730) == "CS2"

    @patch("catalogdb.__main__.AppListAPI")
    def test_refresh_network_error(self, mock_api: MagicMock, mock_config, mock_setup_logging, saved_database, temp_db_path) -> None:
        mock_config.STEAM_API_KEY = "test_key"
        mock_api.return_value.get_app_list.side_effect = requests.ConnectionError("offline")

        assert main(["--database", str(temp_db_path), "--refresh-app-list"]) == 1
        assert Database.load(temp_db_path).count == 1
