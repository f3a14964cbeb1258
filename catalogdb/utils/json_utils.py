"""Centralized JSON file I/O with consistent error handling.

Provides load_json() and save_json() for settings and snapshot files.
Writes go through a temporary sibling file that is swapped into place,
so readers never observe a half-written file.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

__all__ = ["load_json", "save_json"]

logger = logging.getLogger("catalogdb.json_utils")


def load_json(path: Path, default: Any = None, strict: bool = False) -> Any:
    """Load and parse a JSON file with unified error handling.

    Args:
        path: Path to the JSON file.
        default: Value to return if the file doesn't exist (or, when not
            strict, fails to parse). Defaults to empty dict if None.
        strict: Re-raise read and parse errors instead of falling back
            to ``default``.

    Returns:
        Parsed JSON data, or default value.

    Raises:
        json.JSONDecodeError: If strict and the content is not valid JSON.
        OSError: If strict and the file cannot be read.
        UnicodeDecodeError: If strict and the file is not valid UTF-8.
    """
    if default is None:
        default = {}
    if not path.exists():
        return default
    try:
        with open(path, encoding="utf-8") as f:
            return json.load(f)
    except (json.JSONDecodeError, UnicodeDecodeError, OSError) as exc:
        if strict:
            raise
        logger.warning("Failed to load JSON from %s: %s", path, exc)
        return default


def save_json(
    path: Path,
    data: Any,
    ensure_parents: bool = True,
    pretty: bool = True,
    strict: bool = False,
    ensure_ascii: bool = False,
) -> bool:
    """Save data as JSON, replacing the target atomically.

    Args:
        path: Target file path.
        data: Data to serialize as JSON.
        ensure_parents: Create parent directories if needed.
        pretty: Indent the output; compact separators otherwise.
        strict: Re-raise write and encoding errors instead of returning False.
        ensure_ascii: Escape non-ASCII characters. Needed when the data may
            hold strings that cannot be encoded as UTF-8 (lone surrogates).

    Returns:
        True on success, False on failure.

    Raises:
        OSError: If strict and the file could not be written.
        ValueError: If strict and a string cannot be encoded.
        TypeError: If strict and the data is not JSON serializable.
    """
    tmp_name: str | None = None
    try:
        if ensure_parents:
            path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            if pretty:
                json.dump(data, f, indent=2, ensure_ascii=ensure_ascii)
            else:
                json.dump(data, f, separators=(",", ":"), ensure_ascii=ensure_ascii)
        os.replace(tmp_name, path)
        return True
    except (OSError, ValueError, TypeError) as exc:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.remove(tmp_name)
        if strict:
            raise
        logger.error("Failed to save JSON to %s: %s", path, exc)
        return False
