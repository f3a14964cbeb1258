"""Steam Web API client for the public app listing.

Uses the IStoreService/GetAppList/v1 endpoint, which pages through all
public apps by ``last_appid``. Backs off exponentially on HTTP 429.
The client only fetches; integration into the store is done by
``Database.fetch_integrate_app_list()``.
"""

from __future__ import annotations

import logging
import time
from typing import Any

import requests

from catalogdb.core.db.models import AppListItem

logger = logging.getLogger("catalogdb.app_list_api")

__all__ = ["AppListAPI"]

_BASE_DELAY = 1.0
_MAX_RETRIES = 3
_PAGE_SIZE = 50000
_API_URL = "https://api.steampowered.com/IStoreService/GetAppList/v1/"


class AppListAPI:
    """Paged client for the public app listing.

    Attributes:
        api_key: Steam Web API key for authentication.
    """

    def __init__(self, api_key: str, include_dlc: bool = True, include_software: bool = True) -> None:
        """Initializes the AppListAPI client.

        Args:
            api_key: Steam Web API key. Must not be empty.
            include_dlc: Also list DLC.
            include_software: Also list non-game software.

        Raises:
            ValueError: If api_key is empty or whitespace-only.
        """
        if not api_key or not api_key.strip():
            raise ValueError("Steam API key must not be empty")
        self.api_key: str = api_key.strip()
        self.include_dlc = include_dlc
        self.include_software = include_software

    def get_app_list(self) -> list[AppListItem]:
        """Fetches every page of the public app listing.

        Records without a usable id are dropped.

        Returns:
            All listed apps in API order.

        Raises:
            requests.RequestException: On network or HTTP failure.
        """
        apps: list[AppListItem] = []
        last_appid = 0
        page = 0

        while True:
            page += 1
            data = self._fetch_page(last_appid)
            raw_apps = data.get("apps", [])

            for raw in raw_apps:
                try:
                    apps.append(AppListItem.from_dict(raw))
                except (KeyError, TypeError, ValueError) as exc:
                    logger.debug("Dropping app list record %r: %s", raw, exc)

            logger.debug("App list page %d: %d apps", page, len(raw_apps))

            if not data.get("have_more_results") or not raw_apps:
                break
            next_appid = int(data.get("last_appid") or 0)
            if not next_appid and apps:
                next_appid = apps[-1].app_id
            # Paging must advance
            if next_appid <= last_appid:
                break
            last_appid = next_appid

        return apps

    def _fetch_page(self, last_appid: int) -> dict[str, Any]:
        """Fetches a single page of the listing.

        Implements exponential backoff on HTTP 429 (rate limit).

        Args:
            last_appid: Highest id of the previous page (0 for the first).

        Returns:
            The ``response`` object of the API reply.

        Raises:
            requests.ConnectionError: On network failure.
            requests.HTTPError: On non-retryable HTTP errors or exhausted retries.
        """
        params: dict[str, Any] = {
            "key": self.api_key,
            "include_games": "true",
            "include_dlc": "true" if self.include_dlc else "false",
            "include_software": "true" if self.include_software else "false",
            "max_results": _PAGE_SIZE,
        }
        if last_appid:
            params["last_appid"] = last_appid

        for attempt in range(_MAX_RETRIES):
            response = requests.get(_API_URL, params=params, timeout=30)

            if response.status_code == 429:
                delay = _BASE_DELAY * (2**attempt)
                logger.warning("Rate limited (429), retrying in %.1fs...", delay)
                time.sleep(delay)
                continue

            response.raise_for_status()
            return response.json().get("response", {})

        logger.error("Exhausted retries fetching app list page after id %d", last_appid)
        raise requests.HTTPError(f"Rate limited fetching app list after {_MAX_RETRIES} attempts")
