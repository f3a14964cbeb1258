# catalogdb/core/database_manager.py

"""Lifecycle of the active Database instance.

The application's composition point creates one DatabaseManager and hands
it to every collaborator. Loading a snapshot or resetting replaces the
active instance as a whole; collaborators should fetch ``manager.database``
per operation instead of caching the instance.
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path

from catalogdb.config import config
from catalogdb.core.db import Database
from catalogdb.core.enums import StoreLanguage

logger = logging.getLogger("catalogdb.database_manager")

__all__ = ["DatabaseManager"]


class DatabaseManager:
    """Owns the active Database and swaps it on load/reset."""

    def __init__(self, db_path: Path | None = None) -> None:
        """Initializes the manager with an empty database.

        Args:
            db_path: Snapshot file; defaults to ``config.DATABASE_FILE``.
        """
        self.db_path = db_path or config.DATABASE_FILE
        self._lock = threading.Lock()
        self._database = Database(db_path=self.db_path, language=StoreLanguage.parse(config.STORE_LANGUAGE))

    @property
    def database(self) -> Database:
        """The currently active database."""
        with self._lock:
            return self._database

    def load(self, path: Path | None = None) -> Database:
        """Replaces the active database with one loaded from disk.

        Args:
            path: Snapshot to load; defaults to the manager's db_path.

        Returns:
            The newly active database.

        Raises:
            DatabaseLoadError: If the snapshot exists but is corrupt. The
                previously active database stays in place.
        """
        path = path or self.db_path
        database = Database.load(path)
        with self._lock:
            self._database = database
            self.db_path = path
        return database

    def reset(self) -> Database:
        """Replaces the active database with a new empty one."""
        with self._lock:
            language = self._database.language
            database = Database(db_path=self.db_path, language=language)
            self._database = database
        logger.info("Database was reset")
        return database

    def save(self) -> None:
        """Saves the active database to its db_path."""
        self.database.save()
