"""catalogdb - metadata store for a personal software catalog.

Exposes the Database class and its entry model; everything else lives in
the ``core``, ``integrations`` and ``utils`` subpackages.
"""

from __future__ import annotations

from catalogdb.core.db import Database, DatabaseEntry
from catalogdb.core.database_manager import DatabaseManager
from catalogdb.version import __version__

__all__ = ["Database", "DatabaseEntry", "DatabaseManager", "__version__"]
