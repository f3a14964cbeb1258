"""Attribute lookups with fallback to the parent chain.

A DLC or other child item often carries no tags, genres or developers of
its own; these lookups walk ``parent_id`` links (at most ``depth`` hops) and
return the first non-empty value found. Values are never combined across
the chain.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable

from catalogdb.core.db.models import DatabaseEntry
from catalogdb.utils.date_utils import parse_release_year

logger = logging.getLogger("catalogdb.database")

__all__ = ["HierarchyMixin"]


class HierarchyMixin:
    """Mixin providing parent-chain attribute resolution.

    Requires StoreBase attributes: lock, games, _get().
    Requires AggregationMixin: _genre_vocabulary() (genre tag fallback).
    """

    DEFAULT_DEPTH = 3

    lock: threading.Lock
    games: dict[int, DatabaseEntry]

    def _resolve(self, app_id: int, depth: int, pick: Callable[[DatabaseEntry], object]) -> DatabaseEntry | None:
        """Returns the first entry in the chain for which ``pick`` is truthy.

        Visits the entry itself and then up to ``depth`` ancestors, so a
        reference cycle is followed at most ``depth`` times. Caller holds
        the lock.
        """
        entry = self._get(app_id)
        while entry is not None:
            if pick(entry):
                return entry
            if depth <= 0 or entry.parent_id <= 0:
                return None
            depth -= 1
            entry = self._get(entry.parent_id)
        return None

    def _resolve_list(self, app_id: int, depth: int, attr: str) -> list[str]:
        with self.lock:
            entry = self._resolve(app_id, depth, lambda e: getattr(e, attr))
            return list(getattr(entry, attr)) if entry else []

    def get_developers(self, app_id: int, depth: int = DEFAULT_DEPTH) -> list[str]:
        """Developers of the item or its nearest ancestor that has any."""
        return self._resolve_list(app_id, depth, "developers")

    def get_publishers(self, app_id: int, depth: int = DEFAULT_DEPTH) -> list[str]:
        """Publishers of the item or its nearest ancestor that has any."""
        return self._resolve_list(app_id, depth, "publishers")

    def get_flags(self, app_id: int, depth: int = DEFAULT_DEPTH) -> list[str]:
        """Store feature flags of the item or its nearest ancestor that has any."""
        return self._resolve_list(app_id, depth, "flags")

    def get_tags(self, app_id: int, depth: int = DEFAULT_DEPTH) -> list[str]:
        """User tags (rank order) of the item or its nearest ancestor that has any."""
        return self._resolve_list(app_id, depth, "tags")

    def get_genres(self, app_id: int, depth: int = DEFAULT_DEPTH, tag_fallback: bool = False) -> list[str]:
        """Genres of the item or its nearest ancestor that has any.

        Args:
            app_id: Item to look up.
            depth: Maximum number of parent hops.
            tag_fallback: When an entry has no genres, use those of its own
                tags that are known genres somewhere in the store.

        Returns:
            The resolved genre list, or an empty list.
        """
        with self.lock:
            vocabulary: set[str] | None = None
            entry = self._get(app_id)

            while entry is not None:
                if entry.genres:
                    return list(entry.genres)

                if tag_fallback and entry.tags:
                    if vocabulary is None:
                        vocabulary = {genre.casefold() for genre in self._genre_vocabulary()}
                    from_tags = [tag for tag in entry.tags if tag.casefold() in vocabulary]
                    if from_tags:
                        return from_tags

                if depth <= 0 or entry.parent_id <= 0:
                    break
                depth -= 1
                entry = self._get(entry.parent_id)

            return []

    def get_release_year(self, app_id: int) -> int:
        """Year of the item's store release date; 0 if missing or unparseable."""
        with self.lock:
            entry = self._get(app_id)
            release_date = entry.steam_release_date if entry else ""
        return parse_release_year(release_date)

    def supports_vr(self, app_id: int, depth: int = DEFAULT_DEPTH) -> bool:
        """True if the item, or its nearest ancestor with VR data, lists VR hardware."""
        with self.lock:
            return self._resolve(app_id, depth, lambda e: e.vr_support.has_any()) is not None
