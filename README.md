# hanzi_lookup

`hanzi_lookup` ranks Chinese characters by how well they match a handwritten
input. The input is a sequence of analysed substrokes. Each one has a
direction, a length and a centre. The package compares that sequence with a
repository of reference characters and returns the best candidates, highest
score first.

The package is pure Python and has no runtime dependencies.

## Installation

```
pip install .
```

To also install the test requirements:

```
pip install ".[test]"
```

## Drawings

`hanzi_lookup.entities` holds the basic value types:

- `Point`: one point on the 256x256 drawing surface. Both coordinates must
  be integers in `0..255`, otherwise `ValueError` is raised.
- `Stroke`: the points of one pen stroke, in order. A `Stroke` can be
  iterated and has a length.
- `SubStroke`: one analysed substroke, with the fields `direction`, `length`,
  `center_x` and `center_y`.
- `Match`: one candidate, with a single-character `hanzi` and a `score`.

`parse_strokes` reads a drawing from JSON of the form `[[[x, y], ...], ...]`.
Integer coordinates are used as given. Float coordinates are rounded half
away from zero. Malformed input, and coordinates outside `0..255`, raise
`ValueError`:

```python
from hanzi_lookup.entities import parse_strokes

strokes = parse_strokes("[[[70,124],[119,124],[191,124]]]")
```

`incremental_replay` takes a list of whole characters and expands each one
into its proper stroke prefixes, shortest first. A character of *n* strokes
gives prefixes of 1 to *n*-1 strokes. The full character is not included.

## Character repository

`hanzi_lookup.chardata` reads the reference data. The data is a JSON
document with two members:

- `"substrokes"`: one base64 blob of bytes, three bytes per substroke
  (direction, length, packed centre).
- `"chars"`: a list of entries such as `["丿", 1, 2, 0]`. The fields are the
  character, its stroke count, its substroke count, and the byte offset of
  its first substroke in the blob.

```python
from hanzi_lookup.chardata import load_json_strokes, parse_json_strokes

chars = load_json_strokes("strokes.json")  # from a file path
chars = parse_json_strokes(json_text)      # from JSON text, bytes or a parsed dict
```

The result is a list of `CharData` values (`hanzi`, `stroke_count`,
`sub_strokes`). Each substroke is a `SubStrokeTriple` (`direction`,
`length`, `center`). The `center_x` and `center_y` properties unpack the
centre's high and low 4 bits, each in `0..15`. Substrokes that run past the
end of the blob, and negative or fractional numbers, raise `ValueError`.

## Matching

`hanzi_lookup.matcher.Matcher` is built from the reference characters. It
also takes an optional `MatcherParams`:

```python
from hanzi_lookup.chardata import load_json_strokes
from hanzi_lookup.entities import SubStroke
from hanzi_lookup.matcher import Matcher

matcher = Matcher(load_json_strokes("strokes.json"))
input_sub_strokes = [SubStroke(direction=0.0, length=120.0, center_x=8.0, center_y=8.0)]
matches = matcher.lookup(input_sub_strokes, stroke_count=1, limit=8)
for match in matches:
    print(match.hanzi, match.score)
```

`lookup(sub_strokes, stroke_count, limit)` returns up to `limit` `Match`
values, best first. A `stroke_count` of zero or less gives no matches.

The matching works in three steps:

1. **Candidate filter.** Only reference characters whose stroke count and
   substroke count are close to the input's are compared. The allowed
   distance comes from a looseness curve, computed by `strokes_range` and
   `sub_strokes_range` in `hanzi_lookup.scoring`.
2. **Alignment.** `compute_match_score` aligns the two substroke sequences
   with a dynamic-programming score. Skipping a substroke on either side
   costs a penalty. Substrokes further apart in sequence than the range are
   not compared. Each compared pair is scored on direction, length and
   centre distance by `ScoreTables.sub_stroke_score`.
3. **Stroke-count bonus.** `match_one` adds a small bonus when the input and
   the reference have the same number of strokes, and that number is below
   the cap.

Input directions and lengths are rounded and clamped to `0..255`. Input
centre coordinates are truncated to integers and compared with the 4-bit
centres of the reference substrokes, so they should lie in `0..15`. More
than `max_character_sub_stroke_count` substrokes on either side raises
`ValueError`.

`MatcherParams` holds the tuning constants:

| field | default |
| --- | --- |
| `max_character_stroke_count` | 48 |
| `max_character_sub_stroke_count` | 64 |
| `default_looseness` | 0.15 |
| `avg_substroke_length` | 0.33 |
| `skip_penalty_multiplier` | 1.75 |
| `correct_num_strokes_bonus` | 0.1 |
| `correct_num_strokes_cap` | 10 |

`init_score_tables()` builds the lookup tables. There are 256 direction
entries, 129 length-ratio entries and 450 squared-distance entries. Most of
these values are sampled from the cubic curves of
`hanzi_lookup.cubic_curve.CubicCurve2D`.

## Collecting results

`hanzi_lookup.match_collector.MatchCollector(limit)` keeps the best `limit`
matches, highest score first. It keeps one entry per character: when the
same character is filed again, only the better score stays. A limit below 1
raises `ValueError`. Offer matches with `file_match`, and read them back
through the `matches` property.

## What the package does not do

- It does not turn raw `Stroke` drawings into `SubStroke` values. The input
  to `Matcher.lookup` must already be analysed substrokes.
- It ships no character repository. You must supply the JSON stroke data
  yourself.
- It has no command-line program.

## Running the tests

```
pytest
```