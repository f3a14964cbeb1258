"""Database module - the in-memory metadata store.

All mixins compose into the Database class via multiple inheritance.
StoreBase comes last in the MRO and provides __init__, the entry
mapping and the lock; the mixins only add queries on top of it.
"""

from __future__ import annotations

from catalogdb.core.db.aggregate_queries import AggregationMixin
from catalogdb.core.db.hierarchy_queries import HierarchyMixin
from catalogdb.core.db.merge_queries import MergeMixin
from catalogdb.core.db.models import (
    STALE_SCRAPE_TIMESTAMP,
    AppInfoRecord,
    AppListItem,
    DatabaseEntry,
    ImportStats,
    LanguageSupport,
    VRSupport,
)
from catalogdb.core.db.snapshot import DatabaseLoadError, SnapshotMixin
from catalogdb.core.db.store import StoreBase

__all__ = [
    "AppInfoRecord",
    "AppListItem",
    "Database",
    "DatabaseEntry",
    "DatabaseLoadError",
    "ImportStats",
    "LanguageSupport",
    "STALE_SCRAPE_TIMESTAMP",
    "VRSupport",
]


class Database(
    SnapshotMixin,
    MergeMixin,
    HierarchyMixin,
    AggregationMixin,
    StoreBase,
):
    """Main database class composing all query mixins.

    Inherits storage and locking from StoreBase, persistence from
    SnapshotMixin, and all query methods from the remaining mixins.
    """

    pass
