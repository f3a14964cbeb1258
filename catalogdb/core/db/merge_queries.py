"""Integration of externally sourced batches into the store.

Two feeds arrive as in-memory batches: the bulk public app listing
(``{appid, name}`` pairs) and the local app-info cache (type, platforms,
parent and name per item). Each record is integrated on its own; a
malformed record is logged, counted and skipped.
"""

from __future__ import annotations

import logging
import threading
import time
from typing import Any, Iterable, Mapping, Protocol

from catalogdb.core.db.models import AppInfoRecord, AppListItem, DatabaseEntry, ImportStats
from catalogdb.core.enums import AppPlatforms, AppType

logger = logging.getLogger("catalogdb.database")

__all__ = ["AppListSource", "MergeMixin"]

_RECORD_ERRORS = (KeyError, TypeError, ValueError)


class AppListSource(Protocol):
    """Anything that can fetch the public app listing (see AppListAPI)."""

    def get_app_list(self) -> list[AppListItem]: ...


class MergeMixin:
    """Mixin providing batch integration.

    Requires StoreBase attributes: lock, games, _get(), _add().
    """

    lock: threading.Lock
    games: dict[int, DatabaseEntry]

    def integrate_app_list(self, apps: Iterable[AppListItem | Mapping[str, Any]]) -> ImportStats:
        """Integrates the bulk public app listing.

        Unknown ids become new entries with the listed name. Known entries
        whose name differs from a non-blank listed name are renamed and
        their type is reset to unknown. Entries whose name already matches,
        and records listing no name, leave known entries untouched.

        Args:
            apps: AppListItem instances or raw ``{"appid", "name"}`` records.

        Returns:
            ImportStats with created (imported), renamed (updated) and
            skipped (failed) counts.
        """
        start = time.monotonic()
        added = updated = failed = 0

        with self.lock:
            for raw in apps:
                try:
                    item = raw if isinstance(raw, AppListItem) else AppListItem.from_dict(raw)
                except _RECORD_ERRORS as exc:
                    logger.warning("Skipping malformed app list record %r: %s", raw, exc)
                    failed += 1
                    continue

                entry = self._get(item.app_id)
                if entry is None:
                    self._add(DatabaseEntry(id=item.app_id, name=item.name))
                    added += 1
                    continue

                # A listing without a name says nothing about the stored one
                if not item.name.strip():
                    continue
                if entry.name == item.name:
                    continue

                entry.name = item.name
                entry.app_type = AppType.UNKNOWN
                updated += 1

        logger.info("Integrated app list: added %d apps, updated %d apps, skipped %d", added, updated, failed)
        return ImportStats(
            games_imported=added,
            games_updated=updated,
            games_failed=failed,
            duration_seconds=time.monotonic() - start,
            source="app_list",
        )

    def fetch_integrate_app_list(self, source: AppListSource) -> ImportStats:
        """Fetches the public app listing and integrates it.

        The fetch runs without holding the store lock, so other readers and
        writers are not blocked for the network round trip.

        Args:
            source: Client providing ``get_app_list()``.

        Returns:
            ImportStats of the integration.

        Raises:
            Whatever the source raises on fetch failure; nothing is merged then.
        """
        logger.info("Downloading list of public apps")
        apps = source.get_app_list()
        logger.info("Downloaded %d public apps", len(apps))
        return self.integrate_app_list(apps)

    def integrate_appinfo(
        self,
        records: Mapping[int, AppInfoRecord | Mapping[str, Any]] | Iterable[AppInfoRecord | Mapping[str, Any]],
        timestamp: int | None = None,
    ) -> ImportStats:
        """Integrates records read from the local app-info cache.

        Per field: the type is only set from a known incoming type, the name
        only from a non-empty one, the parent only from a positive one.
        Platforms are only taken when the entry has none, or when it was
        never store-refreshed and the incoming set is non-empty.

        Args:
            records: Mapping of id -> record, or an iterable of records
                (AppInfoRecord or raw mappings).
            timestamp: Freshness stamp for touched entries (default: now).

        Returns:
            ImportStats; ``games_updated`` counts every integrated record,
            ``games_imported`` the subset that created a new entry.
        """
        start = time.monotonic()
        if timestamp is None:
            timestamp = int(time.time())
        items = records.values() if isinstance(records, Mapping) else records
        created = integrated = failed = 0

        with self.lock:
            for raw in items:
                try:
                    info = raw if isinstance(raw, AppInfoRecord) else AppInfoRecord.from_dict(raw)
                except _RECORD_ERRORS as exc:
                    logger.warning("Skipping malformed app info record %r: %s", raw, exc)
                    failed += 1
                    continue

                entry = self._get(info.app_id)
                if entry is None:
                    entry = DatabaseEntry(id=info.app_id)
                    self._add(entry)
                    created += 1

                entry.last_app_info_update = timestamp
                if info.app_type != AppType.UNKNOWN:
                    entry.app_type = info.app_type

                if info.name:
                    entry.name = info.name

                if entry.platforms == AppPlatforms.NONE or (
                    entry.last_store_scrape == 0 and info.platforms != AppPlatforms.NONE
                ):
                    entry.platforms = info.platforms

                if info.parent_id > 0:
                    entry.parent_id = info.parent_id

                integrated += 1

        logger.info("Integrated %d app info records (%d new, %d skipped)", integrated, created, failed)
        return ImportStats(
            games_imported=created,
            games_updated=integrated,
            games_failed=failed,
            duration_seconds=time.monotonic() - start,
            source="appinfo",
        )
