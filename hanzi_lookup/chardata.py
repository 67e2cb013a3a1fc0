"""Reference character data: characters with their encoded substrokes."""

from __future__ import annotations

import base64
import json
import os
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class SubStrokeTriple:
    """A reference substroke: direction, length and a packed 4+4 bit center."""

    direction: int
    length: int
    center: int

    @property
    def center_x(self) -> int:
        """The center's X coordinate, 0..15, from the high nibble."""
        return (self.center & 0xF0) >> 4

    @property
    def center_y(self) -> int:
        """The center's Y coordinate, 0..15, from the low nibble."""
        return self.center & 0x0F


@dataclass(frozen=True)
class CharData:
    """A reference character with its stroke count and substrokes."""

    hanzi: str
    stroke_count: int
    sub_strokes: tuple[SubStrokeTriple, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "sub_strokes", tuple(self.sub_strokes))


def _unsigned(value: Any) -> int:
    """Read an unsigned JSON number; anything that is not a number counts as 0."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    if isinstance(value, float) or value < 0:
        raise ValueError(f"expected an unsigned integer: {value!r}")
    return value


def _char_data(entry: Any, blob: bytes) -> CharData:
    # Each entry looks like ["丿", 1, 2, 0]:
    # character, stroke count, substroke count, first byte of its substrokes.
    fields = entry if isinstance(entry, list) else []

    def field(index: int) -> Any:
        return fields[index] if index < len(fields) else None

    hanzi = " "
    raw_hanzi = field(0)
    if isinstance(raw_hanzi, str):
        if not raw_hanzi:
            raise ValueError("character entry has an empty string")
        hanzi = raw_hanzi[0]

    stroke_count = _unsigned(field(1)) & 0xFFFF
    sub_stroke_count = _unsigned(field(2))
    start = _unsigned(field(3))

    chunk = blob[start:start + 3 * sub_stroke_count]
    if len(chunk) < 3 * sub_stroke_count:
        raise ValueError(f"substrokes of {hanzi!r} run past the end of the data")
    triples = tuple(
        SubStrokeTriple(*chunk[offset:offset + 3]) for offset in range(0, len(chunk), 3)
    )
    return CharData(hanzi, stroke_count, triples)


def parse_json_strokes(data: str | bytes | Mapping[str, Any]) -> list[CharData]:
    """Build character data from the JSON stroke document.

    ``data`` is JSON text or an already parsed object with a base64 "substrokes"
    blob and a "chars" list. Raises ValueError on inconsistent data.
    """
    if isinstance(data, (str, bytes, bytearray)):
        data = json.loads(data)
    if not isinstance(data, Mapping):
        return []

    blob = b""
    encoded = data.get("substrokes")
    if isinstance(encoded, str):
        blob = base64.b64decode(encoded, validate=True)

    chars = data.get("chars")
    if not isinstance(chars, list):
        return []
    return [_char_data(entry, blob) for entry in chars]


def load_json_strokes(path: str | os.PathLike[str]) -> list[CharData]:
    """Read and parse the JSON stroke document at ``path``."""
    with open(path, encoding="utf-8") as handle:
        return parse_json_strokes(json.load(handle))