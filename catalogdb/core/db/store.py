"""Keyed entry storage and locking.

Holds the id -> entry mapping, the active store language and the single
lock that serializes every access to them.
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path

from catalogdb.core.db.models import DatabaseEntry
from catalogdb.core.enums import AppType, StoreLanguage

logger = logging.getLogger("catalogdb.database")

__all__ = ["StoreBase"]


class StoreBase:
    """Base class providing the entry mapping, the lock and CRUD.

    The lock is a plain ``threading.Lock`` and is NOT reentrant. Public
    methods acquire it once and only call ``_``-prefixed helpers, which
    expect the caller to hold it. Code outside the package must never call
    Database methods while holding ``lock`` itself.
    """

    SCHEMA_VERSION = 1

    db_path: Path | None

    def __init__(self, db_path: Path | None = None, language: StoreLanguage = StoreLanguage.ENGLISH) -> None:
        """Initialize an empty store.

        Args:
            db_path: Snapshot file this instance saves to by default.
            language: Active store language for localized fields.
        """
        self.db_path = db_path
        self.lock = threading.Lock()
        self.games: dict[int, DatabaseEntry] = {}
        self.last_update: int = 0
        self._language = language

    # ------------------------------------------------------------------
    # Unlocked helpers (caller holds self.lock)
    # ------------------------------------------------------------------

    def _get(self, app_id: int) -> DatabaseEntry | None:
        return self.games.get(app_id)

    def _add(self, entry: DatabaseEntry) -> None:
        existing = self.games.get(entry.id)
        if existing is not None:
            existing.merge_in(entry)
        else:
            self.games[entry.id] = entry

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def language(self) -> StoreLanguage:
        """Active store language."""
        with self.lock:
            return self._language

    @language.setter
    def language(self, value: StoreLanguage) -> None:
        with self.lock:
            self._language = value

    @property
    def count(self) -> int:
        """Number of entries in the store."""
        with self.lock:
            return len(self.games)

    def __len__(self) -> int:
        return self.count

    def __contains__(self, app_id: object) -> bool:
        return isinstance(app_id, int) and self.contains(app_id)

    def add(self, entry: DatabaseEntry | None) -> None:
        """Adds an entry, merging it into an existing entry with the same id.

        Args:
            entry: Entry to add. None is ignored.

        Raises:
            ValueError: If the id is not positive or the parent id is negative.
        """
        if entry is None:
            return
        if entry.id <= 0:
            raise ValueError(f"Entry id must be positive, got {entry.id}")
        if entry.parent_id < 0:
            raise ValueError(f"Entry {entry.id} has negative parent id {entry.parent_id}")

        with self.lock:
            self._add(entry)

    def remove(self, app_id: int) -> None:
        """Removes an entry by id.

        References to it from other entries' ``parent_id`` are left as-is.
        """
        with self.lock:
            self.games.pop(app_id, None)

    def clear(self) -> None:
        """Removes every entry."""
        with self.lock:
            self.games.clear()

    def contains(self, app_id: int) -> bool:
        """Checks whether an entry exists for the id."""
        with self.lock:
            return app_id in self.games

    def get(self, app_id: int) -> DatabaseEntry | None:
        """Returns the entry for an id, or None if absent."""
        with self.lock:
            return self._get(app_id)

    def values(self) -> list[DatabaseEntry]:
        """Returns a list of all entries, safe to iterate while others write."""
        with self.lock:
            return list(self.games.values())

    def get_name(self, app_id: int) -> str:
        """Returns the entry name, or an empty string for unknown ids."""
        with self.lock:
            entry = self._get(app_id)
            return entry.name if entry else ""

    def is_type(self, app_id: int, app_type: AppType) -> bool:
        """Checks an entry's type; False for unknown ids."""
        with self.lock:
            entry = self._get(app_id)
            return entry is not None and entry.app_type == app_type

    def include_item_in_game_list(self, app_id: int) -> bool:
        """True if the item is a game or an application."""
        with self.lock:
            entry = self._get(app_id)
            return entry is not None and entry.app_type in (AppType.APPLICATION, AppType.GAME)
