"""Scores analyzed input substrokes against reference characters."""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence

from hanzi_lookup.chardata import CharData
from hanzi_lookup.entities import Match, Point, SubStroke
from hanzi_lookup.match_collector import MatchCollector
from hanzi_lookup.scoring import (
    MatcherParams,
    ScoreTables,
    init_score_tables,
    strokes_range,
    sub_strokes_range,
)

# Score of a cell whose two substrokes lie too far apart to be compared.
_UNUSABLE_SCORE = -3.4028234663852886e38


def _fmax(a: float, b: float) -> float:
    """Maximum that ignores a nan operand."""
    if math.isnan(a):
        return b
    if math.isnan(b):
        return a
    return a if a >= b else b


def _to_byte(value: float) -> int:
    """Saturating conversion to 0..255: nan and negatives give 0."""
    if math.isnan(value) or value <= 0.0:
        return 0
    if value >= 255.0:
        return 255
    return int(value)


def _round(value: float) -> float:
    """Round half away from zero; non-finite values pass through."""
    if not math.isfinite(value):
        return value
    return math.floor(value + 0.5) if value >= 0.0 else math.ceil(value - 0.5)


class Matcher:
    """Finds the reference characters that best match a set of input substrokes."""

    def __init__(self, char_data: Iterable[CharData], params: MatcherParams | None = None) -> None:
        self._char_data: tuple[CharData, ...] = tuple(char_data)
        self._params = params or MatcherParams()
        self._tables: ScoreTables = init_score_tables()

    @property
    def params(self) -> MatcherParams:
        return self._params

    @property
    def char_data(self) -> tuple[CharData, ...]:
        return self._char_data

    def _skip_seed(self, index: int) -> float:
        """Penalty for starting the alignment ``index`` substrokes in."""
        return -self._params.avg_substroke_length * self._params.skip_penalty_multiplier * index

    def lookup(self, sub_strokes: Sequence[SubStroke], stroke_count: int, limit: int) -> list[Match]:
        """Return up to ``limit`` best matches for the input, best score first.

        ``sub_strokes`` are the input's analyzed substrokes in order and
        ``stroke_count`` the number of strokes they came from.
        """
        collector = MatchCollector(limit)
        # Empty input gets no matches, though a permissive lookup would find some.
        if stroke_count <= 0:
            return collector.matches

        params = self._params
        looseness = params.default_looseness
        sub_stroke_count = len(sub_strokes)

        stroke_range = strokes_range(stroke_count, looseness, params)
        minimum_strokes = max(stroke_count - stroke_range, 1)
        maximum_strokes = min(stroke_count + stroke_range, params.max_character_stroke_count)

        sub_range = sub_strokes_range(sub_stroke_count, looseness, params)
        min_sub_strokes = max(sub_stroke_count - sub_range, 1)
        max_sub_strokes = min(sub_stroke_count + sub_range, params.max_character_sub_stroke_count)

        for repo_char in self._char_data:
            if not minimum_strokes <= repo_char.stroke_count <= maximum_strokes:
                continue
            if not min_sub_strokes <= len(repo_char.sub_strokes) <= max_sub_strokes:
                continue
            collector.file_match(self.match_one(stroke_count, sub_strokes, sub_range, repo_char))
        return collector.matches

    def match_one(
        self,
        input_stroke_count: int,
        input_sub_strokes: Sequence[SubStroke],
        sub_strokes_range: int,
        repo_char: CharData,
    ) -> Match:
        """Score the input against one reference character."""
        params = self._params
        score = self.compute_match_score(input_sub_strokes, sub_strokes_range, repo_char)
        cap = params.correct_num_strokes_cap
        # A small bonus for the same stroke count, declining as strokes increase.
        if input_stroke_count == repo_char.stroke_count and input_stroke_count < cap:
            bonus = params.correct_num_strokes_bonus * max(cap - input_stroke_count, 0) / cap
            score += bonus * score
        return Match(repo_char.hanzi, score)

    def compute_match_score(
        self,
        input_sub_strokes: Sequence[SubStroke],
        sub_strokes_range: int,
        repo_char: CharData,
    ) -> float:
        """Align the two substroke sequences and return the best alignment score."""
        params = self._params
        limit = params.max_character_sub_stroke_count
        repo_sub_strokes = repo_char.sub_strokes
        if len(input_sub_strokes) > limit or len(repo_sub_strokes) > limit:
            raise ValueError(f"at most {limit} substrokes can be compared")

        multiplier = params.skip_penalty_multiplier
        previous = [self._skip_seed(y) for y in range(len(repo_sub_strokes) + 1)]
        for x, sub_stroke in enumerate(input_sub_strokes):
            input_direction = _to_byte(_round(sub_stroke.direction))
            input_length = _to_byte(_round(sub_stroke.length))
            input_center = Point(_to_byte(sub_stroke.center_x), _to_byte(sub_stroke.center_y))
            current = [self._skip_seed(x + 1)]
            for y, repo in enumerate(repo_sub_strokes):
                new_score = _UNUSABLE_SCORE
                if abs(x - y) <= sub_strokes_range:
                    # Penalties for skipping a substroke on either side.
                    skip_input = previous[y + 1] - input_length / 256.0 * multiplier
                    skip_repo = current[y] - repo.length / 256.0 * multiplier
                    skip_score = _fmax(skip_input, skip_repo)
                    match_score = self._tables.sub_stroke_score(
                        input_direction,
                        input_length,
                        repo.direction,
                        repo.length,
                        input_center,
                        Point(repo.center_x, repo.center_y),
                    )
                    new_score = _fmax(previous[y] + match_score, skip_score)
                current.append(new_score)
            previous = current
        return previous[len(repo_sub_strokes)]