"""Snapshot persistence and language invalidation.

The whole store is written as one JSON document:

    {
      "schema_version": 1,
      "language": "english",
      "last_update": 1700000000,
      "games": {"440": {"id": 440, "name": "...", ...}, ...}
    }

Loading and saving hold the store lock for the whole file operation so the
file always reflects one consistent state of the store.
"""

from __future__ import annotations

import json
import logging
import threading
import time
from pathlib import Path
from typing import Any

from catalogdb.config import config
from catalogdb.core.backup_manager import BackupManager
from catalogdb.core.db.models import DatabaseEntry
from catalogdb.core.enums import StoreLanguage
from catalogdb.utils.json_utils import load_json, save_json

logger = logging.getLogger("catalogdb.database")

__all__ = ["DatabaseLoadError", "SnapshotMixin"]


class DatabaseLoadError(Exception):
    """Raised when a snapshot file exists but cannot be read or parsed."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Cannot load database from '{path}': {reason}")
        self.path = path
        self.reason = reason


class SnapshotMixin:
    """Mixin providing load/save and language changes.

    Requires StoreBase attributes: lock, games, last_update, db_path,
    _language, SCHEMA_VERSION.
    """

    lock: threading.Lock
    games: dict[int, DatabaseEntry]
    last_update: int
    db_path: Path | None
    _language: StoreLanguage
    SCHEMA_VERSION: int

    # ------------------------------------------------------------------
    # Save
    # ------------------------------------------------------------------

    def _to_snapshot(self, last_update: int) -> dict[str, Any]:
        return {
            "schema_version": self.SCHEMA_VERSION,
            "language": self._language.value,
            "last_update": last_update,
            "games": {str(app_id): entry.to_dict() for app_id, entry in self.games.items()},
        }

    def _save_unlocked(self, path: Path, pretty: bool | None) -> None:
        logger.info("Saving database to '%s'", path)
        start = time.perf_counter()

        last_update = int(time.time())
        data = self._to_snapshot(last_update)

        BackupManager().create_backup(path)
        # ASCII escapes keep names with lone surrogates loadable
        save_json(path, data, pretty=config.PRETTY_JSON if pretty is None else pretty, strict=True, ensure_ascii=True)
        self.last_update = last_update

        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.info("Saved database to '%s' (%d entries) in %.0fms", path, len(self.games), elapsed_ms)

    def save(self, path: Path | None = None, pretty: bool | None = None) -> None:
        """Writes the whole store to a snapshot file.

        The previous file is kept as a rotating backup and the new one is
        swapped in atomically.

        Args:
            path: Target file; defaults to ``db_path``.
            pretty: Indent the JSON; defaults to ``config.PRETTY_JSON``.

        Raises:
            ValueError: If neither ``path`` nor ``db_path`` is set.
            OSError: If the file cannot be written.
        """
        with self.lock:
            target = path or self.db_path
            if target is None:
                raise ValueError("No snapshot path given and database has no db_path")
            self._save_unlocked(Path(target), pretty)

    # ------------------------------------------------------------------
    # Load
    # ------------------------------------------------------------------

    def _apply_snapshot(self, path: Path, data: Any) -> None:
        """Replaces the store content from parsed snapshot data. Caller holds the lock."""
        if not isinstance(data, dict):
            raise DatabaseLoadError(path, "top level is not an object")

        version = data.get("schema_version")
        if not isinstance(version, int) or isinstance(version, bool) or version < 1:
            raise DatabaseLoadError(path, f"invalid schema version {version!r}")
        if version > self.SCHEMA_VERSION:
            raise DatabaseLoadError(
                path, f"schema version {version} is newer than supported version {self.SCHEMA_VERSION}"
            )

        try:
            language = StoreLanguage.parse(data.get("language", StoreLanguage.ENGLISH.value))
        except ValueError as exc:
            raise DatabaseLoadError(path, str(exc)) from exc

        raw_games = data.get("games", {})
        if not isinstance(raw_games, dict):
            raise DatabaseLoadError(path, "'games' is not an object")

        games: dict[int, DatabaseEntry] = {}
        for key, raw_entry in raw_games.items():
            try:
                entry = DatabaseEntry.from_dict(raw_entry)
                app_id = int(key)
            except (KeyError, TypeError, ValueError) as exc:
                raise DatabaseLoadError(path, f"malformed entry {key!r}: {exc}") from exc
            if app_id != entry.id:
                raise DatabaseLoadError(path, f"entry {key!r} carries id {entry.id}")
            games[app_id] = entry

        self.games = games
        self._language = language
        self.last_update = int(data.get("last_update") or 0)

    @classmethod
    def load(cls, path: Path, language: StoreLanguage | None = None):
        """Creates a database from a snapshot file.

        A missing file is not an error: an empty database bound to ``path``
        is returned.

        Args:
            path: Snapshot file to read; becomes the new instance's db_path.
            language: Language for the empty database when the file is
                missing (default: configured store language).

        Returns:
            The loaded database.

        Raises:
            DatabaseLoadError: If the file exists but is unreadable or corrupt.
        """
        path = Path(path)
        logger.info("Loading database from '%s'", path)

        if not path.exists():
            logger.warning("Database file not found at '%s', starting empty", path)
            return cls(db_path=path, language=language or StoreLanguage.parse(config.STORE_LANGUAGE))

        start = time.perf_counter()
        try:
            data = load_json(path, strict=True)
        except (json.JSONDecodeError, UnicodeDecodeError, OSError) as exc:
            raise DatabaseLoadError(path, str(exc)) from exc

        db = cls(db_path=path)
        with db.lock:
            db._apply_snapshot(path, data)

        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.info("Loaded database from '%s' (%d entries) in %.0fms", path, len(db.games), elapsed_ms)
        return db

    # ------------------------------------------------------------------
    # Language
    # ------------------------------------------------------------------

    def change_language(self, language: StoreLanguage | str) -> bool:
        """Switches the store language and invalidates localized data.

        Tags, flags, genres, release dates, VR and language support of every
        entry are cleared and the entries are marked as needing a store
        refresh. Ids, parents, names, types and platforms are kept. The
        store is then saved to ``db_path`` if it has one.

        Args:
            language: New language (member, API name or language code).

        Returns:
            True if the language changed, False if it already matched.
        """
        language = StoreLanguage.parse(language)

        with self.lock:
            if self._language == language:
                return False

            logger.info("Changing store language from %s to %s", self._language.value, language.value)
            self._language = language

            for entry in self.games.values():
                entry.clear_localized()

            if self.db_path is not None:
                self._save_unlocked(self.db_path, None)
            else:
                logger.warning("Database has no db_path, language change not persisted")

        return True
