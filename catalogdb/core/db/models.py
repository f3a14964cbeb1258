"""Database data models and conversion functions.

Contains the core data structures used by the store: DatabaseEntry and its
VR/language support records, the input records handed over by the listing
and app-info collaborators, and ImportStats for merge reporting.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from catalogdb.core.enums import AppPlatforms, AppType

__all__ = [
    "AppInfoRecord",
    "AppListItem",
    "DatabaseEntry",
    "ImportStats",
    "LanguageSupport",
    "STALE_SCRAPE_TIMESTAMP",
    "VRSupport",
]

# Store-refresh timestamp meaning "scraped a very long time ago"
STALE_SCRAPE_TIMESTAMP = 1


def _str_list(value: Any, key: str) -> list[str]:
    """Validates a JSON value as a list of strings (None means empty)."""
    if value is None:
        return []
    if not isinstance(value, list):
        raise TypeError(f"'{key}' must be a list, got {type(value).__name__}")
    return [str(item) for item in value]


def _positive_id(value: Any, key: str) -> int:
    """Converts a raw id to int and rejects non-positive values."""
    if isinstance(value, bool):
        raise TypeError(f"'{key}' must be an integer")
    app_id = int(value)
    if app_id <= 0:
        raise ValueError(f"'{key}' must be positive, got {app_id}")
    return app_id


@dataclass(frozen=True)
class ImportStats:
    """Statistics from a merge/import operation."""

    games_imported: int
    games_updated: int
    games_failed: int
    duration_seconds: float
    source: str


@dataclass
class VRSupport:
    """VR hardware an item supports, as listed on its store page."""

    headsets: list[str] = field(default_factory=list)
    input: list[str] = field(default_factory=list)
    play_area: list[str] = field(default_factory=list)

    def has_any(self) -> bool:
        """True if any of the three lists is non-empty."""
        return bool(self.headsets or self.input or self.play_area)

    def to_dict(self) -> dict[str, list[str]]:
        return {"headsets": list(self.headsets), "input": list(self.input), "play_area": list(self.play_area)}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> VRSupport:
        if data is None:
            return cls()
        return cls(
            headsets=_str_list(data.get("headsets"), "headsets"),
            input=_str_list(data.get("input"), "input"),
            play_area=_str_list(data.get("play_area"), "play_area"),
        )


@dataclass
class LanguageSupport:
    """Languages an item supports, named in the store's active language."""

    full_audio: list[str] = field(default_factory=list)
    interface: list[str] = field(default_factory=list)
    subtitles: list[str] = field(default_factory=list)

    def has_any(self) -> bool:
        """True if any of the three lists is non-empty."""
        return bool(self.full_audio or self.interface or self.subtitles)

    def to_dict(self) -> dict[str, list[str]]:
        return {
            "full_audio": list(self.full_audio),
            "interface": list(self.interface),
            "subtitles": list(self.subtitles),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> LanguageSupport:
        if data is None:
            return cls()
        return cls(
            full_audio=_str_list(data.get("full_audio"), "full_audio"),
            interface=_str_list(data.get("interface"), "interface"),
            subtitles=_str_list(data.get("subtitles"), "subtitles"),
        )


@dataclass
class DatabaseEntry:
    """Metadata record for a single catalog item.

    ``parent_id`` is a weak reference to the base item (e.g. the game a DLC
    belongs to). It is only used to fill in missing attributes and may point
    at an id the store does not contain.
    """

    id: int
    name: str = ""
    app_type: AppType = AppType.UNKNOWN
    platforms: AppPlatforms = AppPlatforms.NONE
    parent_id: int = 0

    # Ordered as delivered by the source; tag order is the store's rank order
    developers: list[str] = field(default_factory=list)
    publishers: list[str] = field(default_factory=list)
    genres: list[str] = field(default_factory=list)
    tags: list[str] = field(default_factory=list)
    flags: list[str] = field(default_factory=list)

    vr_support: VRSupport = field(default_factory=VRSupport)
    language_support: LanguageSupport = field(default_factory=LanguageSupport)

    # Free text, parsed lazily (see utils.date_utils)
    steam_release_date: str = ""

    # Freshness (Unix seconds, 0 = never)
    last_store_scrape: int = 0
    last_app_info_update: int = 0

    def merge_in(self, other: DatabaseEntry) -> None:
        """Merges a record for the same id into this one, field by field.

        Data from the app-info cache (name, parent) is taken when the other
        record is fresher in that respect; scraped data (tags, genres, ...)
        when its store scrape is at least as recent. An empty or unknown
        incoming value never erases a present one.

        Args:
            other: Incoming record; must carry the same id.

        Raises:
            ValueError: If the ids differ.
        """
        if other.id != self.id:
            raise ValueError(f"Cannot merge entry {other.id} into entry {self.id}")

        use_app_info_fields = other.last_app_info_update > self.last_app_info_update or (
            self.last_app_info_update == 0 and other.last_app_info_update >= self.last_store_scrape
        )
        use_scrape_fields = other.last_store_scrape >= self.last_store_scrape

        if other.app_type != AppType.UNKNOWN and (self.app_type == AppType.UNKNOWN or use_app_info_fields):
            self.app_type = other.app_type

        if other.platforms != AppPlatforms.NONE and (
            self.platforms == AppPlatforms.NONE or other.last_store_scrape >= self.last_store_scrape
        ):
            self.platforms = other.platforms

        if use_app_info_fields:
            if other.name:
                self.name = other.name
            if other.parent_id > 0:
                self.parent_id = other.parent_id
        elif not self.name and other.name:
            self.name = other.name

        if use_scrape_fields:
            for attr in ("developers", "publishers", "genres", "tags", "flags"):
                incoming = getattr(other, attr)
                if incoming:
                    setattr(self, attr, list(incoming))

            if other.steam_release_date:
                self.steam_release_date = other.steam_release_date
            if other.vr_support.has_any():
                self.vr_support = VRSupport.from_dict(other.vr_support.to_dict())
            if other.language_support.has_any():
                self.language_support = LanguageSupport.from_dict(other.language_support.to_dict())

            self.last_store_scrape = other.last_store_scrape

        self.last_app_info_update = max(self.last_app_info_update, other.last_app_info_update)

    def clear_localized(self) -> None:
        """Drops every field whose content depends on the store language.

        Identity fields (id, parent, name, type, platforms) are kept. The
        store-refresh timestamp is set to a very old value so the next
        refresh picks the entry up.
        """
        self.tags = []
        self.flags = []
        self.genres = []
        self.steam_release_date = ""
        self.vr_support = VRSupport()
        self.language_support = LanguageSupport()
        self.last_store_scrape = STALE_SCRAPE_TIMESTAMP

    def to_dict(self) -> dict[str, Any]:
        """Serializes the entry for the snapshot file."""
        return {
            "id": self.id,
            "parent_id": self.parent_id,
            "name": self.name,
            "app_type": self.app_type.value,
            "platforms": int(self.platforms),
            "developers": list(self.developers),
            "publishers": list(self.publishers),
            "genres": list(self.genres),
            "tags": list(self.tags),
            "flags": list(self.flags),
            "vr_support": self.vr_support.to_dict(),
            "language_support": self.language_support.to_dict(),
            "steam_release_date": self.steam_release_date,
            "last_store_scrape": self.last_store_scrape,
            "last_app_info_update": self.last_app_info_update,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> DatabaseEntry:
        """Builds an entry from its snapshot representation.

        Raises:
            KeyError: If the id is missing.
            TypeError: If a field has the wrong JSON type.
            ValueError: If a numeric field is invalid.
        """
        if not isinstance(data, Mapping):
            raise TypeError(f"entry must be an object, got {type(data).__name__}")

        parent_id = int(data.get("parent_id") or 0)
        if parent_id < 0:
            raise ValueError(f"'parent_id' must not be negative, got {parent_id}")

        return cls(
            id=_positive_id(data["id"], "id"),
            name=str(data.get("name") or ""),
            app_type=AppType.parse(data.get("app_type")),
            platforms=AppPlatforms(int(data.get("platforms") or 0) & AppPlatforms.ALL),
            parent_id=parent_id,
            developers=_str_list(data.get("developers"), "developers"),
            publishers=_str_list(data.get("publishers"), "publishers"),
            genres=_str_list(data.get("genres"), "genres"),
            tags=_str_list(data.get("tags"), "tags"),
            flags=_str_list(data.get("flags"), "flags"),
            vr_support=VRSupport.from_dict(data.get("vr_support")),
            language_support=LanguageSupport.from_dict(data.get("language_support")),
            steam_release_date=str(data.get("steam_release_date") or ""),
            last_store_scrape=int(data.get("last_store_scrape") or 0),
            last_app_info_update=int(data.get("last_app_info_update") or 0),
        )


@dataclass(frozen=True)
class AppListItem:
    """One ``{id, name}`` record from the bulk public app listing."""

    app_id: int
    name: str

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> AppListItem:
        """Parses a raw listing record (``appid`` or ``id`` key).

        Raises:
            KeyError: If neither id key is present.
            TypeError: If the record is not a mapping.
            ValueError: If the id is not a positive integer.
        """
        if not isinstance(data, Mapping):
            raise TypeError(f"app list record must be an object, got {type(data).__name__}")
        raw_id = data["appid"] if "appid" in data else data["id"]
        return cls(app_id=_positive_id(raw_id, "appid"), name=str(data.get("name") or ""))


@dataclass(frozen=True)
class AppInfoRecord:
    """One item read from the local app-info cache.

    Attributes:
        app_id: Catalog id.
        name: Display name, empty if the cache has none.
        app_type: Item type, UNKNOWN if the cache has none.
        platforms: Supported platforms, NONE if unknown.
        parent_id: Owning item, 0 if none.
    """

    app_id: int
    name: str = ""
    app_type: AppType = AppType.UNKNOWN
    platforms: AppPlatforms = AppPlatforms.NONE
    parent_id: int = 0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> AppInfoRecord:
        """Parses a raw cache record.

        ``platforms`` may be an integer bit set or a list of platform names.

        Raises:
            KeyError: If neither ``appid`` nor ``id`` is present.
            TypeError: If the record is not a mapping.
            ValueError: If a numeric field is invalid.
        """
        if not isinstance(data, Mapping):
            raise TypeError(f"app info record must be an object, got {type(data).__name__}")
        raw_id = data["appid"] if "appid" in data else data["id"]

        raw_platforms = data.get("platforms")
        if isinstance(raw_platforms, (list, tuple)):
            platforms = AppPlatforms.from_names(raw_platforms)
        else:
            platforms = AppPlatforms(int(raw_platforms or 0) & AppPlatforms.ALL)

        return cls(
            app_id=_positive_id(raw_id, "appid"),
            name=str(data.get("name") or ""),
            app_type=AppType.parse(data.get("app_type", data.get("type"))),
            platforms=platforms,
            parent_id=max(int(data.get("parent_id", data.get("parent")) or 0), 0),
        )
