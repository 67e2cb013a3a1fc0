"""Basic value types: points, strokes, matches and analyzed substrokes."""

from __future__ import annotations

import json
import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass


@dataclass(frozen=True)
class Point:
    """A point on the 256x256 drawing surface."""

    x: int
    y: int

    def __post_init__(self) -> None:
        for value in (self.x, self.y):
            if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= 255:
                raise ValueError(f"point coordinate out of range 0..255: {value!r}")


@dataclass(frozen=True)
class Stroke:
    """One pen stroke: the points it passed through, in order."""

    points: tuple[Point, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "points", tuple(self.points))

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self):
        return iter(self.points)


@dataclass(frozen=True)
class Match:
    """A candidate character and its score; higher is better."""

    hanzi: str
    score: float

    def __post_init__(self) -> None:
        if not isinstance(self.hanzi, str) or len(self.hanzi) != 1:
            raise ValueError(f"hanzi must be a single character: {self.hanzi!r}")


@dataclass(frozen=True)
class SubStroke:
    """One analyzed substroke.

    Direction is normalized into 0..256 from 0..2*pi, length into 0..256 from 0..1,
    and the center coordinates lie in 0..256.
    """

    direction: float
    length: float
    center_x: float
    center_y: float


def _coordinate(value: object) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"coordinate must be a number: {value!r}")
    if isinstance(value, float):
        if not math.isfinite(value):
            raise ValueError(f"coordinate must be finite: {value!r}")
        # Round half away from zero.
        value = math.floor(value + 0.5) if value >= 0 else math.ceil(value - 0.5)
    if not 0 <= value <= 255:
        raise ValueError(f"coordinate out of range 0..255: {value!r}")
    return int(value)


def _point(raw: object) -> Point:
    if not isinstance(raw, list) or len(raw) < 2:
        raise ValueError(f"point must be a list of at least two numbers: {raw!r}")
    return Point(_coordinate(raw[0]), _coordinate(raw[1]))


def parse_strokes(text: str | bytes) -> list[Stroke]:
    """Parse strokes from JSON of the form [[[x, y], ...], ...].

    Integer coordinates are taken as they are; float coordinates are rounded.
    Raises ValueError on malformed input or coordinates outside 0..255.
    """
    data = json.loads(text)
    if not isinstance(data, list):
        raise ValueError("strokes must be a JSON array")
    strokes = []
    for raw_stroke in data:
        if not isinstance(raw_stroke, list):
            raise ValueError(f"stroke must be a JSON array: {raw_stroke!r}")
        strokes.append(Stroke(tuple(_point(raw) for raw in raw_stroke)))
    return strokes


def incremental_replay(chars: Iterable[Sequence[Stroke]]) -> list[list[Stroke]]:
    """Expand each character into its proper stroke prefixes, shortest first.

    A character of n strokes yields prefixes of 1 .. n-1 strokes; the full
    character itself is not included.
    """
    return [list(char[:count]) for char in chars for count in range(1, len(char))]