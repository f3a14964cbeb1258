# catalogdb/utils/date_utils.py

"""Utility functions for interpreting store release-date strings.

Store pages publish release dates as free text whose shape depends on the
page language and region, e.g. "21 Aug, 2012", "Aug 21, 2012", "2012-08-21"
or just "2012". Only the year is needed by the store, so parsing is lenient
and never raises: anything that does not match a known shape yields 0.
"""

from __future__ import annotations

from datetime import datetime


__all__ = ['parse_release_date', 'parse_release_year']

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

# Tried in order; the first matching format wins.
_RELEASE_DATE_FORMATS: list[str] = [
    "%d %b, %Y",   # 21 Aug, 2012  (store default)
    "%b %d, %Y",   # Aug 21, 2012  (US region)
    "%d %B, %Y",   # 21 August, 2012
    "%B %d, %Y",   # August 21, 2012
    "%d %b %Y",    # 21 Aug 2012
    "%d %B %Y",    # 21 August 2012
    "%Y-%m-%d",    # ISO
    "%d.%m.%Y",    # European numeric
    "%m/%d/%Y",    # US numeric
    "%Y/%m/%d",
    "%b %Y",       # Aug 2012
    "%B %Y",       # August 2012
    "%Y",          # bare year
]


def parse_release_date(date_str: str | None) -> datetime | None:
    """Parses a store release-date string into a datetime.

    Args:
        date_str: The free-text release date.

    Returns:
        The parsed datetime, or None when the string is empty or matches
        none of the known formats.
    """
    if not date_str or not date_str.strip():
        return None

    date_str = " ".join(date_str.split())

    for fmt in _RELEASE_DATE_FORMATS:
        try:
            return datetime.strptime(date_str, fmt)
        except ValueError:
            continue

    return None


def parse_release_year(date_str: str | None) -> int:
    """Returns the year of a store release-date string, or 0 if unparseable."""
    parsed = parse_release_date(date_str)
    return parsed.year if parsed else 0
