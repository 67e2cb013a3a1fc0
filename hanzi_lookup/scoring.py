"""Matching parameters, precomputed score tables and looseness ranges."""

from __future__ import annotations

import math
from dataclasses import dataclass

from hanzi_lookup.cubic_curve import CubicCurve2D
from hanzi_lookup.entities import Point

_DIRECTION_SAMPLES = 256
_LENGTH_SAMPLES = 129
_POSITION_SAMPLES = 450
_SHORT_STROKE_LENGTH = 64


@dataclass(frozen=True)
class MatcherParams:
    """The algorithm's tuning constants."""

    max_character_stroke_count: int = 48
    max_character_sub_stroke_count: int = 64
    default_looseness: float = 0.15
    # An average substroke length, out of 1.
    avg_substroke_length: float = 0.33
    # Penalty multiplier for skipping a substroke.
    skip_penalty_multiplier: float = 1.75
    # Largest bonus multiplier for a character with the correct number of strokes.
    correct_num_strokes_bonus: float = 0.1
    # Characters with more strokes than this get no bonus.
    correct_num_strokes_cap: int = 10


def _round(value: float) -> float:
    """Round half away from zero; nan and infinities pass through."""
    if not math.isfinite(value):
        return value
    return math.floor(value + 0.5) if value >= 0.0 else math.ceil(value - 0.5)


def _to_count(value: float) -> int:
    """Convert to a non-negative count, saturating: nan and negatives become 0."""
    if math.isnan(value) or value <= 0.0:
        return 0
    if math.isinf(value):
        raise OverflowError("range is infinite")
    return int(value)


def _check_byte(name: str, value: int) -> None:
    if not 0 <= value <= 255:
        raise ValueError(f"{name} out of range 0..255: {value!r}")


def _sample_curve(curve: CubicCurve2D, samples: int) -> tuple[float, ...]:
    """Sample y evenly across the curve's x range."""
    step = (curve.x2 - curve.x1) / samples
    return tuple(
        curve.y_on_curve(curve.first_solution_for_x(min(curve.x1 + i * step, curve.x2)))
        for i in range(samples)
    )


@dataclass(frozen=True)
class ScoreTables:
    """Precomputed lookup tables for comparing two substrokes."""

    # Indexed by the direction difference, 0..255.
    direction: tuple[float, ...]
    # Indexed by the smaller-over-larger length ratio times 128, 0..128.
    length: tuple[float, ...]
    # Indexed by the squared distance of the two centers, 0..449.
    position: tuple[float, ...]

    def direction_score(self, direction1: int, direction2: int, input_length: int) -> float:
        """Score two directions; short input strokes get a bonus since direction matters less."""
        _check_byte("direction", direction1)
        _check_byte("direction", direction2)
        score = self.direction[abs(direction1 - direction2)]
        if input_length < _SHORT_STROKE_LENGTH:
            bonus_max = min(1.0, 1.0 - score)
            score += bonus_max * (1.0 - input_length / _SHORT_STROKE_LENGTH)
        return score

    def length_score(self, length1: int, length2: int) -> float:
        """Score two lengths by the ratio of the shorter to the longer."""
        _check_byte("length", length1)
        _check_byte("length", length2)
        shorter, longer = sorted((length1, length2))
        ratio = 0 if longer == 0 else int(_round(shorter * 128.0 / longer))
        return self.length[ratio]

    def sub_stroke_score(
        self,
        input_direction: int,
        input_length: int,
        repo_direction: int,
        repo_length: int,
        input_center: Point,
        repo_center: Point,
    ) -> float:
        """Score one input substroke against one reference substroke."""
        score = self.direction_score(input_direction, repo_direction, input_length)
        score *= self.length_score(input_length, repo_length)
        dx = input_center.x - repo_center.x
        dy = input_center.y - repo_center.y
        closeness = self.position[dx * dx + dy * dy]
        # Distance shrinks a positive score and makes a negative one more negative.
        return score * closeness if score > 0.0 else score / closeness


def init_score_tables() -> ScoreTables:
    """Build the direction, length and position score tables."""
    # Drops as directions grow apart, then rises again: a stroke written
    # backwards still gets some credit for its orientation.
    direction_curve = CubicCurve2D(0.0, 1.0, 0.5, 1.0, 0.25, -2.0, 1.0, 1.0)
    # Grows quickly with the length ratio and levels off.
    length_curve = CubicCurve2D(0.0, 0.0, 0.25, 1.0, 0.75, 1.0, 1.0, 1.0)
    position = tuple(1.0 - math.sqrt(i) / 22.0 for i in range(_POSITION_SAMPLES))
    return ScoreTables(
        direction=_sample_curve(direction_curve, _DIRECTION_SAMPLES),
        length=_sample_curve(length_curve, _LENGTH_SAMPLES),
        position=position,
    )


def strokes_range(stroke_count: int, looseness: float, params: MatcherParams | None = None) -> int:
    """How far a reference character's stroke count may differ from the input's."""
    params = params or MatcherParams()
    if looseness == 0.0:
        return 0
    if looseness == 1.0:
        return params.max_character_stroke_count
    # Grows slowly at first, then rapidly towards the maximum.
    curve = CubicCurve2D(
        0.0, 0.0,
        0.35, stroke_count * 0.4,
        0.6, float(stroke_count),
        1.0, float(params.max_character_stroke_count),
    )
    t = curve.first_solution_for_x(looseness)
    return _to_count(_round(curve.y_on_curve(t)))


def sub_strokes_range(
    sub_stroke_count: int, looseness: float, params: MatcherParams | None = None
) -> int:
    """How far apart in sequence two compared substrokes may lie."""
    params = params or MatcherParams()
    if looseness == 1.0:
        return params.max_character_sub_stroke_count
    y0 = sub_stroke_count * 0.25
    ctrl1_y = 1.5 * y0
    curve = CubicCurve2D(
        0.0, y0,
        0.4, ctrl1_y,
        0.75, 1.5 * ctrl1_y,
        1.0, float(params.max_character_sub_stroke_count),
    )
    t = curve.first_solution_for_x(looseness)
    return _to_count(_round(curve.y_on_curve(t)))