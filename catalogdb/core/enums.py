# catalogdb/core/enums.py

"""Enumerations shared by the store: app types, platform bit flags and store languages."""

from __future__ import annotations

from enum import Enum, IntFlag
from typing import Iterable

__all__ = ["AppPlatforms", "AppType", "StoreLanguage"]


class AppType(Enum):
    """Kind of catalog item as reported by the app-info cache or the store."""

    UNKNOWN = "unknown"
    APPLICATION = "application"
    CONFIG = "config"
    DEMO = "demo"
    DLC = "dlc"
    GAME = "game"
    MEDIA = "media"
    MUSIC = "music"
    SERIES = "series"
    TOOL = "tool"
    VIDEO = "video"

    @classmethod
    def parse(cls, value: AppType | str | None) -> AppType:
        """Maps a raw type string to a member, case-insensitively.

        Args:
            value: Member, raw string (e.g. "Game", "DLC") or None.

        Returns:
            The matching member, or UNKNOWN for None and unrecognised values.
        """
        if isinstance(value, cls):
            return value
        if not value:
            return cls.UNKNOWN
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.UNKNOWN


class AppPlatforms(IntFlag):
    """Operating systems an item runs on."""

    NONE = 0
    WINDOWS = 1
    MAC = 2
    LINUX = 4
    ALL = WINDOWS | MAC | LINUX

    @classmethod
    def from_names(cls, names: Iterable[str]) -> AppPlatforms:
        """Builds a flag set from platform names such as "windows" or "linux".

        Unknown names are ignored; "osx" and "macos" are aliases for MAC.
        """
        result = cls.NONE
        for name in names:
            key = _PLATFORM_ALIASES.get(str(name).strip().lower())
            if key is not None:
                result |= key
        return result


_PLATFORM_ALIASES: dict[str, AppPlatforms] = {
    "windows": AppPlatforms.WINDOWS,
    "win": AppPlatforms.WINDOWS,
    "mac": AppPlatforms.MAC,
    "macos": AppPlatforms.MAC,
    "osx": AppPlatforms.MAC,
    "linux": AppPlatforms.LINUX,
}


class StoreLanguage(Enum):
    """Language used when scraping localized store data.

    The value is the name the store API expects in its ``l=`` parameter.
    """

    ARABIC = "arabic"
    BULGARIAN = "bulgarian"
    SCHINESE = "schinese"
    TCHINESE = "tchinese"
    CZECH = "czech"
    DANISH = "danish"
    DUTCH = "dutch"
    ENGLISH = "english"
    FINNISH = "finnish"
    FRENCH = "french"
    GERMAN = "german"
    GREEK = "greek"
    HUNGARIAN = "hungarian"
    ITALIAN = "italian"
    JAPANESE = "japanese"
    KOREANA = "koreana"
    NORWEGIAN = "norwegian"
    POLISH = "polish"
    PORTUGUESE = "portuguese"
    BRAZILIAN = "brazilian"
    ROMANIAN = "romanian"
    RUSSIAN = "russian"
    SPANISH = "spanish"
    LATAM = "latam"
    SWEDISH = "swedish"
    THAI = "thai"
    TURKISH = "turkish"
    UKRAINIAN = "ukrainian"
    VIETNAMESE = "vietnamese"

    @property
    def code(self) -> str:
        """ISO-style language code (e.g. "en", "de", "zh-CN")."""
        return _LANGUAGE_CODES[self]

    @classmethod
    def parse(cls, value: StoreLanguage | str) -> StoreLanguage:
        """Resolves a store language from its API name or language code.

        Raises:
            ValueError: If the value matches no language.
        """
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower()
        for language in cls:
            if key in (language.value, language.code.lower()):
                return language
        raise ValueError(f"Unknown store language: {value!r}")


_LANGUAGE_CODES: dict[StoreLanguage, str] = {
    StoreLanguage.ARABIC: "ar",
    StoreLanguage.BULGARIAN: "bg",
    StoreLanguage.SCHINESE: "zh-CN",
    StoreLanguage.TCHINESE: "zh-TW",
    StoreLanguage.CZECH: "cs",
    StoreLanguage.DANISH: "da",
    StoreLanguage.DUTCH: "nl",
    StoreLanguage.ENGLISH: "en",
    StoreLanguage.FINNISH: "fi",
    StoreLanguage.FRENCH: "fr",
    StoreLanguage.GERMAN: "de",
    StoreLanguage.GREEK: "el",
    StoreLanguage.HUNGARIAN: "hu",
    StoreLanguage.ITALIAN: "it",
    StoreLanguage.JAPANESE: "ja",
    StoreLanguage.KOREANA: "ko",
    StoreLanguage.NORWEGIAN: "no",
    StoreLanguage.POLISH: "pl",
    StoreLanguage.PORTUGUESE: "pt",
    StoreLanguage.BRAZILIAN: "pt-BR",
    StoreLanguage.ROMANIAN: "ro",
    StoreLanguage.RUSSIAN: "ru",
    StoreLanguage.SPANISH: "es",
    StoreLanguage.LATAM: "es-419",
    StoreLanguage.SWEDISH: "sv",
    StoreLanguage.THAI: "th",
    StoreLanguage.TURKISH: "tr",
    StoreLanguage.UKRAINIAN: "uk",
    StoreLanguage.VIETNAMESE: "vi",
}
