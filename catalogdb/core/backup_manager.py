# catalogdb/core/backup_manager.py

"""
Manages snapshot backups with automatic rotation.

Before a snapshot file is overwritten, a timestamped copy of the previous
version is kept next to it (or in a dedicated directory). Old copies are
removed once more than MAX_BACKUPS exist.
"""
from __future__ import annotations

import logging
import os
import shutil
import time
from pathlib import Path

from catalogdb.config import config

logger = logging.getLogger("catalogdb.backup_manager")

__all__ = ["BackupManager"]


class BackupManager:
    """
    Manages creation and rotation of file backups.
    """

    def __init__(self, backup_dir: Path | None = None, max_backups: int | None = None):
        """
        Initializes the BackupManager.

        Args:
            backup_dir: Directory for storing backups. If None, backups are
                created in the same directory as the original file.
            max_backups: Number of backups to keep per file. If None, the
                configured MAX_BACKUPS is used. 0 disables backups.
        """
        self.backup_dir = backup_dir
        self.max_backups = max_backups

    @property
    def limit(self) -> int:
        return config.MAX_BACKUPS if self.max_backups is None else self.max_backups

    def create_backup(self, file_path: Path) -> Path | None:
        """
        Creates a timestamped backup of a file, then rotates old backups.

        The backup name carries the Unix time in nanoseconds
        (e.g. database_1700000000123456789.json) so repeated saves within
        one second do not collide.

        Args:
            file_path: Path to the file to back up.

        Returns:
            Path to the created backup file, or None if the file doesn't
            exist, backups are disabled, or copying failed.
        """
        if self.limit <= 0 or not file_path.exists():
            return None

        backup_name = f"{file_path.stem}_{time.time_ns()}{file_path.suffix}"

        target_dir = self.backup_dir if self.backup_dir else file_path.parent
        target_dir.mkdir(parents=True, exist_ok=True)

        backup_path = target_dir / backup_name

        try:
            shutil.copy2(file_path, backup_path)
            logger.info("Created backup %s", backup_name)
        except OSError as backup_error:
            logger.error("Backup of %s failed: %s", file_path, backup_error)
            return None

        self._rotate_backups(file_path)
        return backup_path

    def list_backups(self, file_path: Path) -> list[Path]:
        """Returns existing backups of a file, newest first."""
        target_dir = self.backup_dir if self.backup_dir else file_path.parent
        if not target_dir.exists():
            return []
        backups = [
            p
            for p in target_dir.glob(f"{file_path.stem}_*{file_path.suffix}")
            if p.stem[len(file_path.stem) + 1 :].isdigit()
        ]
        return sorted(backups, key=lambda p: int(p.stem[len(file_path.stem) + 1 :]), reverse=True)

    def _rotate_backups(self, file_path: Path) -> None:
        """
        Removes old backups exceeding the configured limit.

        Args:
            file_path: The original file path (used to match backup files).
        """
        for old in self.list_backups(file_path)[self.limit :]:
            try:
                os.remove(old)
                logger.info("Removed old backup %s", old.name)
            except OSError as delete_error:
                logger.error("Could not remove backup %s: %s", old.name, delete_error)
