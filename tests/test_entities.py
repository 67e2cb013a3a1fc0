import pytest

from hanzi_lookup.entities import (
    Match,
    Point,
    Stroke,
    SubStroke,
    incremental_replay,
    parse_strokes,
)

STROKES_1 = "[[[70,124],[71,124],[79,124],[104,124],[119,124],[132,125],[151,126],[168,126],[169,126],[189,125],[191,124],[191,124]]]"
STROKES_2 = "[[[76,127],[77,127],[84,127],[97,128],[119,128],[125,129],[138,130],[147,130],[153,131],[154,131],[158,131],[162,131],[167,131],[168,131],[169,131],[169,131]],[[129,60],[129,62],[128,74],[128,102],[128,118],[129,143],[130,162],[130,170],[130,178],[131,184],[131,188],[131,193],[131,196],[131,198],[131,203],[131,203]]]"
STROKES_3 = "[[[86,65],[98,66],[146,69],[152,69],[161,69],[166,69],[170,68],[170,68]],[[47,97],[48,97],[54,97],[89,103],[117,104],[146,101],[169,100],[176,98],[180,98],[184,98],[189,98],[193,98],[195,98],[195,98]],[[103,109],[103,110],[99,132],[91,156],[70,180],[56,190],[53,192]]]"


def test_parse_sample_strokes():
    strokes = parse_strokes(STROKES_2)
    assert len(strokes) == 2
    assert strokes[0].points[0] == Point(76, 127)
    assert strokes[0].points[-1] == Point(169, 131)
    assert strokes[1].points[0] == Point(129, 60)
    assert strokes[1].points[-1] == Point(131, 203)


def test_parse_single_stroke():
    strokes = parse_strokes(STROKES_1)
    assert len(strokes) == 1
    assert list(strokes[0]) == list(strokes[0].points)
    assert strokes[0].points[3] == Point(104, 124)


def test_parse_rounds_float_coordinates():
    strokes = parse_strokes("[[[12.5, 3.4]]]")
    assert strokes[0].points == (Point(13, 3),)


def test_parse_accepts_bytes():
    assert parse_strokes(STROKES_1.encode("utf-8")) == parse_strokes(STROKES_1)


@pytest.mark.parametrize(
    "text",
    ["[[[256, 0]]]", "[[[-1, 0]]]", "[[[1]]]", '"x"', "[[[true, 1]]]", "[[5]]", "[1]", "[[[1, \"a\"]]]"],
)
def test_parse_rejects_malformed(text):
    with pytest.raises(ValueError):
        parse_strokes(text)


def test_parse_rejects_invalid_json():
    with pytest.raises(ValueError):
        parse_strokes("[[[1, 2]")


def test_point_range_checked():
    with pytest.raises(ValueError):
        Point(300, 0)
    with pytest.raises(ValueError):
        Point(0, -5)


def test_stroke_points_become_tuple():
    stroke = Stroke([Point(1, 2), Point(3, 4)])
    assert stroke.points == (Point(1, 2), Point(3, 4))
    assert len(stroke) == 2


def test_match_requires_single_character():
    with pytest.raises(ValueError):
        Match("ab", 1.0)
    with pytest.raises(ValueError):
        Match("", 1.0)


def test_substroke_holds_fields():
    sub = SubStroke(direction=12.0, length=40.0, center_x=100.0, center_y=20.0)
    assert (sub.direction, sub.length, sub.center_x, sub.center_y) == (12.0, 40.0, 100.0, 20.0)


def test_incremental_replay_prefixes():
    two = parse_strokes(STROKES_2)
    three = parse_strokes(STROKES_3)
    replay = incremental_replay([two, three])
    assert [len(r) for r in replay] == [1, 1, 2]
    assert replay[0] == two[:1]
    assert replay[1] == three[:1]
    assert replay[2] == three[:2]


def test_incremental_replay_skips_single_stroke_chars():
    one = parse_strokes(STROKES_1)
    assert incremental_replay([one]) == []
    assert incremental_replay([]) == []