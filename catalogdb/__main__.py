"""Command-line entry point (``python -m catalogdb`` or ``catalogdb``).

Loads the snapshot, optionally switches the store language and refreshes
the public app list, then saves.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import requests

from catalogdb.config import config
from catalogdb.core.database_manager import DatabaseManager
from catalogdb.core.db import DatabaseLoadError
from catalogdb.core.logging import setup_logging
from catalogdb.integrations import AppListAPI
from catalogdb.version import __app_name__, __version__

logger = logging.getLogger("catalogdb.main")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog=__app_name__, description="Maintain the catalog metadata snapshot.")
    parser.add_argument("--database", type=Path, help="snapshot file (default: from settings)")
    parser.add_argument("--language", help="switch the store language (API name or code)")
    parser.add_argument("--refresh-app-list", action="store_true", help="download and merge the public app list")
    parser.add_argument("--log-level", help="DEBUG, INFO, WARNING or ERROR (default: from settings)")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Runs the command line and returns the process exit code."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        setup_logging(args.log_level)
    except ValueError as exc:
        parser.error(str(exc))

    manager = DatabaseManager(args.database)
    try:
        database = manager.load()
    except DatabaseLoadError as exc:
        logger.error("%s", exc)
        return 1

    if args.language:
        try:
            database.change_language(args.language)
        except ValueError as exc:
            logger.error("%s", exc)
            return 2

    if args.refresh_app_list:
        if not config.STEAM_API_KEY:
            logger.error("No Steam API key configured, set STEAM_API_KEY")
            return 1
        try:
            stats = database.fetch_integrate_app_list(AppListAPI(config.STEAM_API_KEY))
        except requests.RequestException as exc:
            logger.error("App list refresh failed: %s", exc)
            return 1
        logger.info("App list: %d new, %d renamed", stats.games_imported, stats.games_updated)
        database.save()

    logger.info("%d entries in %s", database.count, manager.db_path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
