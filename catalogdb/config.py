"""
Configuration - data directory, snapshot location and store defaults.
Reads settings.json from the data directory and environment overrides.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from catalogdb.utils.json_utils import load_json, save_json

logger = logging.getLogger("catalogdb.config")


__all__ = ["Config", "config"]


@dataclass
class Config:
    """
    Central configuration handling for the store.
    Manages paths, persistence options and scoring defaults.
    """

    DATA_DIR: Path = Path.home() / ".catalogdb"
    DATABASE_FILE: Path | None = None
    SETTINGS_FILE: Path | None = None

    # Default values
    STORE_LANGUAGE: str = "english"
    PRETTY_JSON: bool = False

    MAX_BACKUPS: int = 5

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FILE: Path | None = None

    # API KEYS
    STEAM_API_KEY: str | None = None

    def __post_init__(self):
        """Apply environment overrides and load settings after instantiation."""
        load_dotenv()
        env_dir = os.getenv("CATALOGDB_DATA_DIR")
        if env_dir:
            self.DATA_DIR = Path(env_dir)

        if self.DATABASE_FILE is None:
            self.DATABASE_FILE = self.DATA_DIR / "database.json"
        if self.SETTINGS_FILE is None:
            self.SETTINGS_FILE = self.DATA_DIR / "settings.json"

        self._load_settings()

        # Environment wins over settings.json
        env_language = os.getenv("CATALOGDB_LANGUAGE")
        if env_language:
            self.STORE_LANGUAGE = env_language

        env_level = os.getenv("CATALOGDB_LOG_LEVEL")
        if env_level:
            self.LOG_LEVEL = env_level

        env_key = os.getenv("STEAM_API_KEY")
        if env_key:
            self.STEAM_API_KEY = env_key

    def _load_settings(self) -> None:
        """Load settings from JSON file."""
        data = load_json(self.SETTINGS_FILE)
        if not isinstance(data, dict):
            logger.error("Ignoring settings file %s: expected a JSON object", self.SETTINGS_FILE)
            return

        self.STORE_LANGUAGE = data.get("store_language", self.STORE_LANGUAGE)
        self.PRETTY_JSON = data.get("pretty_json", self.PRETTY_JSON)
        self.MAX_BACKUPS = data.get("max_backups", self.MAX_BACKUPS)
        self.STEAM_API_KEY = data.get("steam_api_key", self.STEAM_API_KEY)
        self.LOG_LEVEL = data.get("log_level", self.LOG_LEVEL)

        log_file = data.get("log_file")
        if log_file:
            self.LOG_FILE = Path(log_file)

        database_file = data.get("database_file")
        if database_file:
            self.DATABASE_FILE = Path(database_file)

    def save(self) -> None:
        """Save current configuration to JSON file."""
        data = {
            "store_language": self.STORE_LANGUAGE,
            "pretty_json": self.PRETTY_JSON,
            "max_backups": self.MAX_BACKUPS,
            "steam_api_key": self.STEAM_API_KEY,
            "log_level": self.LOG_LEVEL,
            "log_file": str(self.LOG_FILE) if self.LOG_FILE else "",
            "database_file": str(self.DATABASE_FILE) if self.DATABASE_FILE else "",
        }
        save_json(self.SETTINGS_FILE, data)


# Global instance
config = Config()
