# tests/test_grading.py

import math

import pytest

from core.grading import (
    is_weighted,
    letter_gpa,
    letter_grade,
    letter_grade_color,
    mean,
    percentage,
    round_grade,
)


@pytest.mark.parametrize(
    "grade, letter",
    [
        (100, "A"),
        (93, "A"),
        (92.99, "A-"),
        (90, "A-"),
        (89.99, "B+"),
        (87, "B+"),
        (83, "B"),
        (82.99, "B-"),
        (80, "B-"),
        (77, "C+"),
        (73, "C"),
        (70, "C-"),
        (69.99, "D+"),
        (67, "D+"),
        (60, "D"),
        (59.99, "F"),
        (0, "F"),
    ],
)
def test_letter_grade_thresholds(grade, letter):
    assert letter_grade(grade) == letter


def test_letter_grade_undefined_inputs():
    assert letter_grade(-1) == "N/A"
    assert letter_grade(math.nan) == "N/A"
    assert letter_grade(None) == "N/A"
    assert letter_grade("eighty") == "N/A"


def test_letter_grade_above_one_hundred():
    assert letter_grade(104.5) == "A"


def test_letter_grade_is_monotonic():
    order = ["F", "D", "D+", "C-", "C", "C+", "B-", "B", "B+", "A-", "A"]
    ranks = [order.index(letter_grade(g / 4)) for g in range(0, 401)]

    assert ranks == sorted(ranks)


def test_letter_gpa():
    assert letter_gpa("A", False) == 4.0
    assert letter_gpa("A", True) == 5.0
    assert letter_gpa("A-", False) == 3.7
    assert letter_gpa("B+", False) == 3.3
    assert letter_gpa("C-", True) == pytest.approx(2.7)
    assert letter_gpa("F", False) == 0.0
    assert letter_gpa("F", True) == 1.0


def test_letter_gpa_unrecognized_letter():
    assert math.isnan(letter_gpa("N/A", False))
    assert math.isnan(letter_gpa("N/A", True))
    assert math.isnan(letter_gpa("E", False))


def test_is_weighted():
    assert is_weighted("AP Chemistry")
    assert is_weighted("English 10 Honors")
    assert is_weighted("IB Math SL")
    assert is_weighted("Magnet Robotics")
    assert not is_weighted("Chemistry")
    assert not is_weighted("ap chemistry")


def test_is_weighted_has_no_word_boundary():
    assert is_weighted("SHIBBOLETH SEMINAR")
    assert is_weighted("CAPSTONE")
    assert not is_weighted("MAGNET")


def test_letter_grade_color():
    assert letter_grade_color("A") == "green"
    assert letter_grade_color("B-") == "lime"
    assert letter_grade_color("F") == "red"
    assert letter_grade_color("N/A") == "gray"
    assert letter_grade_color("nonsense") == "gray"


def test_percentage():
    assert percentage(17, 20) == 85.0
    assert percentage(2, 3) == 66.67
    assert math.isnan(percentage(0, 0))
    assert math.isnan(percentage(5, 0))
    assert math.isnan(percentage(math.nan, 10))
    assert math.isnan(percentage(5, None))


def test_round_grade_passes_nan_through():
    assert round_grade(84.005001) == 84.01
    assert math.isnan(round_grade(math.nan))


def test_mean():
    assert mean([3.0, 4.0]) == 3.5
    assert math.isnan(mean([]))
    assert math.isnan(mean([4.0, math.nan]))
