"""Keeps the N best matches, one per character, sorted by score."""

from __future__ import annotations

from collections.abc import Iterator

from hanzi_lookup.entities import Match


class MatchCollector:
    """Collects matches, keeping at most ``limit`` of them, best score first."""

    def __init__(self, limit: int) -> None:
        if limit <= 0:
            raise ValueError("Expected a positive number for the maximum number of matches.")
        self._limit = limit
        self._matches: list[Match] = []

    @property
    def limit(self) -> int:
        return self._limit

    @property
    def matches(self) -> list[Match]:
        """The collected matches, largest score first."""
        return list(self._matches)

    def __len__(self) -> int:
        return len(self._matches)

    def __iter__(self) -> Iterator[Match]:
        return iter(list(self._matches))

    def _remove_existing_lower(self, match: Match) -> bool:
        """Drop a worse entry for the same character; return True if the new match should be skipped."""
        index = next(
            (i for i, existing in enumerate(self._matches) if existing.hanzi == match.hanzi),
            None,
        )
        if index is None:
            return False
        if match.score <= self._matches[index].score:
            return True
        del self._matches[index]
        return False

    def file_match(self, match: Match) -> None:
        """Offer a match; it is kept if it ranks among the best ``limit``."""
        if len(self._matches) == self._limit and match.score <= self._matches[-1].score:
            return
        if self._remove_existing_lower(match):
            return
        position = next(
            (i for i, existing in enumerate(self._matches) if existing.score < match.score),
            len(self._matches),
        )
        self._matches.insert(position, match)
        if len(self._matches) > self._limit:
            self._matches.pop()