from __future__ import annotations

__all__: list[str] = ["AppListAPI"]

from catalogdb.integrations.app_list_api import AppListAPI
