import pytest

from hanzi_lookup.chardata import CharData, SubStrokeTriple
from hanzi_lookup.entities import SubStroke
from hanzi_lookup.matcher import Matcher
from hanzi_lookup.scoring import MatcherParams, init_score_tables


def _char(hanzi, stroke_count, *triples):
    return CharData(hanzi, stroke_count, tuple(SubStrokeTriple(*t) for t in triples))


HORIZONTAL = _char("一", 1, (0, 128, 0x77))
VERTICAL = _char("丨", 1, (64, 128, 0x77))
BACKWARDS = _char("乀", 1, (128, 128, 0x77))
MANY_STROKES = _char("鸡", 20, (0, 128, 0x77))

INPUT = [SubStroke(direction=0.0, length=128.0, center_x=7.0, center_y=7.0)]


def _matcher(*chars, params=None):
    return Matcher(chars, params)


def test_empty_input_gives_no_matches():
    matcher = _matcher(HORIZONTAL, VERTICAL)
    assert matcher.lookup([], 0, 8) == []


def test_non_positive_limit_raises():
    matcher = _matcher(HORIZONTAL)
    with pytest.raises(ValueError):
        matcher.lookup(INPUT, 1, 0)


def test_best_match_is_identical_character():
    matcher = _matcher(VERTICAL, BACKWARDS, HORIZONTAL)
    matches = matcher.lookup(INPUT, 1, 8)
    assert matches[0].hanzi == "一"
    scores = [m.score for m in matches]
    assert scores == sorted(scores, reverse=True)


def test_limit_respected():
    matcher = _matcher(VERTICAL, BACKWARDS, HORIZONTAL)
    matches = matcher.lookup(INPUT, 1, 2)
    assert len(matches) == 2
    assert matches[0].hanzi == "一"


def test_far_stroke_count_is_filtered_out():
    matcher = _matcher(MANY_STROKES, VERTICAL)
    hanzi = [m.hanzi for m in matcher.lookup(INPUT, 1, 8)]
    assert "鸡" not in hanzi
    assert hanzi == ["丨"]


def test_duplicate_characters_are_collapsed():
    worse = _char("一", 1, (128, 128, 0x00))
    matcher = _matcher(worse, HORIZONTAL)
    matches = matcher.lookup(INPUT, 1, 8)
    assert [m.hanzi for m in matches] == ["一"]
    best = matcher.compute_match_score(INPUT, 1, HORIZONTAL)
    assert matches[0].score == pytest.approx(best * 1.09)


def test_exact_single_substroke_score_is_table_product():
    tables = init_score_tables()
    matcher = _matcher(HORIZONTAL)
    score = matcher.compute_match_score(INPUT, 1, HORIZONTAL)
    assert score == pytest.approx(tables.direction[0] * tables.length[128])


def test_exact_match_beats_opposite_direction():
    matcher = _matcher(HORIZONTAL, VERTICAL)
    exact = matcher.compute_match_score(INPUT, 1, HORIZONTAL)
    other = matcher.compute_match_score(INPUT, 1, VERTICAL)
    assert exact > other


def test_match_one_adds_bonus_for_equal_stroke_count():
    matcher = _matcher(HORIZONTAL)
    base = matcher.compute_match_score(INPUT, 1, HORIZONTAL)
    match = matcher.match_one(1, INPUT, 1, HORIZONTAL)
    assert match.hanzi == "一"
    assert match.score == pytest.approx(base * 1.09)


def test_match_one_no_bonus_for_different_stroke_count():
    matcher = _matcher(MANY_STROKES)
    base = matcher.compute_match_score(INPUT, 1, MANY_STROKES)
    assert matcher.match_one(1, INPUT, 1, MANY_STROKES).score == pytest.approx(base)


def test_match_one_without_bonus_parameter():
    params = MatcherParams(correct_num_strokes_bonus=0.0)
    matcher = _matcher(HORIZONTAL, params=params)
    base = matcher.compute_match_score(INPUT, 1, HORIZONTAL)
    assert matcher.match_one(1, INPUT, 1, HORIZONTAL).score == pytest.approx(base)


def test_too_many_substrokes_raise():
    matcher = _matcher(HORIZONTAL)
    too_many = INPUT * 65
    with pytest.raises(ValueError):
        matcher.compute_match_score(too_many, 10, HORIZONTAL)


def test_skipping_an_extra_input_substroke_costs_score():
    matcher = _matcher(HORIZONTAL)
    single = matcher.compute_match_score(INPUT, 1, HORIZONTAL)
    extra = [INPUT[0], SubStroke(direction=64.0, length=128.0, center_x=7.0, center_y=7.0)]
    doubled = matcher.compute_match_score(extra, 1, HORIZONTAL)
    assert doubled < single


def test_two_substroke_character_prefers_same_order():
    forward = _char("十", 2, (0, 128, 0x77), (64, 128, 0x77))
    reverse = _char("丁", 2, (64, 128, 0x77), (0, 128, 0x77))
    matcher = _matcher(reverse, forward)
    sub_strokes = [
        SubStroke(direction=0.0, length=128.0, center_x=7.0, center_y=7.0),
        SubStroke(direction=64.0, length=128.0, center_x=7.0, center_y=7.0),
    ]
    matches = matcher.lookup(sub_strokes, 2, 8)
    assert matches[0].hanzi == "十"