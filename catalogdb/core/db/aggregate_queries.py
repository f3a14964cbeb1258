"""Store-wide vocabularies and frequency/weighted scores.

Every query scans either the whole store or a caller-supplied subset given
as ``app_filter``: a mapping of app id to that item's *hidden* flag. Hidden
items and ids missing from the store are skipped.
"""

from __future__ import annotations

import logging
import threading
from typing import Iterable, Iterator, Mapping

from catalogdb.core.db.models import DatabaseEntry, LanguageSupport, VRSupport

logger = logging.getLogger("catalogdb.database")

__all__ = ["AggregationMixin", "tag_scores_for_entry"]


def _ci_union(values: Iterable[str]) -> list[str]:
    """Case-insensitive union, first spelling wins, sorted case-insensitively."""
    seen: dict[str, str] = {}
    for value in values:
        seen.setdefault(value.casefold(), value)
    return [seen[key] for key in sorted(seen)]


def tag_scores_for_entry(tags: list[str], weight_factor: float, tags_per_game: int) -> list[tuple[str, float]]:
    """Scores an entry's tags by rank.

    The first tag scores ``weight_factor``, the last selected tag scores 1.0
    and the tags in between are linearly interpolated. A weight factor of
    1 or less gives every tag a flat 1.0.

    Args:
        tags: The entry's tags in rank order.
        weight_factor: Score of the highest-ranked tag.
        tags_per_game: How many tags to take from the front (0 = all).

    Returns:
        (tag, score) pairs in rank order.
    """
    count = len(tags) if tags_per_game <= 0 else min(tags_per_game, len(tags))
    scored: list[tuple[str, float]] = []

    for i in range(count):
        score = 1.0
        if weight_factor > 1:
            if count == 1:
                score = float(weight_factor)
            else:
                t = i / (count - 1)
                score = (1 - t) * weight_factor + t
        scored.append((tags[i], score))

    return scored


class AggregationMixin:
    """Mixin providing vocabulary and scoring queries.

    Requires StoreBase attributes: lock, games.
    """

    lock: threading.Lock
    games: dict[int, DatabaseEntry]

    def _entries_in_scope(self, app_filter: Mapping[int, bool] | None) -> Iterator[DatabaseEntry]:
        """Yields entries in scope. Caller holds the lock."""
        if app_filter is None:
            yield from self.games.values()
            return

        for app_id, hidden in app_filter.items():
            if hidden:
                continue
            entry = self.games.get(app_id)
            if entry is not None:
                yield entry

    def _genre_vocabulary(self) -> list[str]:
        """All genres across the store. Caller holds the lock."""
        return _ci_union(genre for entry in self.games.values() for genre in entry.genres)

    # ------------------------------------------------------------------
    # Vocabularies
    # ------------------------------------------------------------------

    def all_flags(self, app_filter: Mapping[int, bool] | None = None) -> list[str]:
        """All distinct store feature flags (case-insensitive)."""
        with self.lock:
            return _ci_union(flag for entry in self._entries_in_scope(app_filter) for flag in entry.flags)

    def all_genres(self, app_filter: Mapping[int, bool] | None = None) -> list[str]:
        """All distinct genres (case-insensitive)."""
        with self.lock:
            if app_filter is None:
                return self._genre_vocabulary()
            return _ci_union(genre for entry in self._entries_in_scope(app_filter) for genre in entry.genres)

    def all_languages(self, app_filter: Mapping[int, bool] | None = None) -> LanguageSupport:
        """Distinct full-audio, interface and subtitle languages."""
        with self.lock:
            entries = list(self._entries_in_scope(app_filter))
            return LanguageSupport(
                full_audio=_ci_union(v for e in entries for v in e.language_support.full_audio),
                interface=_ci_union(v for e in entries for v in e.language_support.interface),
                subtitles=_ci_union(v for e in entries for v in e.language_support.subtitles),
            )

    def all_vr_support(self, app_filter: Mapping[int, bool] | None = None) -> VRSupport:
        """Distinct VR headsets, input devices and play areas."""
        with self.lock:
            entries = list(self._entries_in_scope(app_filter))
            return VRSupport(
                headsets=_ci_union(v for e in entries for v in e.vr_support.headsets),
                input=_ci_union(v for e in entries for v in e.vr_support.input),
                play_area=_ci_union(v for e in entries for v in e.vr_support.play_area),
            )

    # ------------------------------------------------------------------
    # Frequencies and scores
    # ------------------------------------------------------------------

    def _count_names(self, attr: str, app_filter: Mapping[int, bool] | None, min_count: int) -> dict[str, int]:
        counts: dict[str, int] = {}
        with self.lock:
            for entry in self._entries_in_scope(app_filter):
                # dict.fromkeys: each name counts once per entry
                for name in dict.fromkeys(getattr(entry, attr)):
                    counts[name] = counts.get(name, 0) + 1

        return {name: count for name, count in counts.items() if count >= min_count}

    def calculate_developer_counts(
        self, app_filter: Mapping[int, bool] | None = None, min_count: int = 0
    ) -> dict[str, int]:
        """Counts entries per developer.

        Args:
            app_filter: Optional subset (app id -> hidden flag).
            min_count: Drop developers with fewer entries.

        Returns:
            Mapping of developer name to number of entries.
        """
        return self._count_names("developers", app_filter, min_count)

    def calculate_publisher_counts(
        self, app_filter: Mapping[int, bool] | None = None, min_count: int = 0
    ) -> dict[str, int]:
        """Counts entries per publisher. See calculate_developer_counts()."""
        return self._count_names("publishers", app_filter, min_count)

    def calculate_tag_scores(
        self,
        app_filter: Mapping[int, bool] | None = None,
        weight_factor: float = 1.0,
        min_score: float = 0.0,
        tags_per_game: int = 0,
        exclude_genres: bool = False,
        score_sort: bool = True,
    ) -> dict[str, float]:
        """Accumulates rank-weighted tag scores across entries.

        Args:
            app_filter: Optional subset (app id -> hidden flag).
            weight_factor: Score of each entry's top-ranked tag; the last
                selected tag scores 1.0. Values <= 1 mean flat scoring.
            min_score: Drop tags whose total is below this.
            tags_per_game: Tags taken per entry, from the front (0 = all).
            exclude_genres: Drop tags that are also known genres.
            score_sort: Order by descending score (ties alphabetically);
                alphabetical by tag otherwise.

        Returns:
            Ordered mapping of tag to total score.
        """
        scores: dict[str, float] = {}
        with self.lock:
            for entry in self._entries_in_scope(app_filter):
                for tag, score in tag_scores_for_entry(entry.tags, weight_factor, tags_per_game):
                    scores[tag] = scores.get(tag, 0.0) + score

            genres = {genre.casefold() for genre in self._genre_vocabulary()} if exclude_genres else set()

        kept = [(tag, score) for tag, score in scores.items() if score >= min_score and tag.casefold() not in genres]
        if score_sort:
            kept.sort(key=lambda item: (-item[1], item[0]))
        else:
            kept.sort(key=lambda item: item[0])

        return dict(kept)
