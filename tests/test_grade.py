# tests/test_grade.py

import math

from models.grade import Grade


def test_letter_and_color_follow_raw():
    grade = Grade(91.0)
    assert grade.letter == "A-"
    assert grade.color == "green"

    grade.raw = 72.5
    assert grade.letter == "C-"
    assert grade.color == "yellow"


def test_undefined_grade():
    grade = Grade()

    assert not grade.is_defined
    assert grade.letter == "N/A"
    assert grade.color == "gray"
    assert grade.to_dict() == {"letter": "N/A", "raw": None, "color": "gray"}


def test_grade_from_dict():
    assert Grade.from_dict({"raw": 88.0}).raw == 88.0
    assert math.isnan(Grade.from_dict({"raw": None}).raw)
    assert math.isnan(Grade.from_dict(None).raw)


def test_grade_equality_treats_undefined_as_equal():
    assert Grade(math.nan) == Grade(None)
    assert Grade(88.0) == Grade(88.0)
    assert Grade(88.0) != Grade(math.nan)
