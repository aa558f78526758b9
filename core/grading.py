# core/grading.py

"""
Pure grade arithmetic shared by the models, the normalizer, and the what-if projector.

Provides:
- `letter_grade()`: NSD grading policy letter for a numeric percentage.
- `letter_gpa()`: NSD grading policy GPA points for a letter, with the weighted-course bonus.
- `letter_grade_color()`: fixed display color for a letter.
- `is_weighted()`: course name heuristic for AP/Honors/IB/Magnet courses.
- `percentage()` and `round_grade()`: two-decimal percentage helpers that never raise.

Notes:
- An undefined grade is always `math.nan` and its letter is always "N/A". Nothing in here raises
  on bad numeric input; callers are expected to treat `nan` as "ungraded".
- Percentages above 100 (extra credit) stay in the top band and grade as an "A"; the scale has
  no upper bound.
- Must never import from models!
"""

from __future__ import annotations

import math
from typing import Any

NOT_AVAILABLE = "N/A"

# (lower bound, letter), checked top-down
LETTER_BANDS: list[tuple[float, str]] = [
    (93.0, "A"),
    (90.0, "A-"),
    (87.0, "B+"),
    (83.0, "B"),
    (80.0, "B-"),
    (77.0, "C+"),
    (73.0, "C"),
    (70.0, "C-"),
    (67.0, "D+"),
    (60.0, "D"),
    (0.0, "F"),
]

GPA_POINTS: dict[str, float] = {
    "A": 4.0,
    "A-": 3.7,
    "B+": 3.3,
    "B": 3.0,
    "B-": 2.7,
    "C+": 2.3,
    "C": 2.0,
    "C-": 1.7,
    "D+": 1.3,
    "D": 1.0,
    "F": 0.0,
}

WEIGHTED_BONUS = 1.0

WEIGHTED_KEYWORDS: tuple[str, ...] = ("AP", "Hon", "IB", "Mag")

LETTER_COLORS: dict[str, str] = {
    "A": "green",
    "A-": "green",
    "B+": "lime",
    "B": "lime",
    "B-": "lime",
    "C+": "yellow",
    "C": "yellow",
    "C-": "yellow",
    "D+": "orange",
    "D": "orange",
    "F": "red",
    NOT_AVAILABLE: "gray",
}


# === numeric helpers ===


def to_number(value: Any) -> float:
    """
    Casts a value to float, returning `nan` instead of raising for anything that is not numeric.
    """
    if isinstance(value, bool):
        return math.nan

    try:
        return float(value)

    except (TypeError, ValueError):
        return math.nan


def is_defined(value: Any) -> bool:
    number = to_number(value)
    return not math.isnan(number)


def round_grade(value: float) -> float:
    if math.isnan(value) or math.isinf(value):
        return value

    return round(value, 2)


def percentage(earned: float, possible: float) -> float:
    """
    Returns `earned / possible * 100` rounded to two decimals.

    Args:
        earned (float): Points earned, possibly `nan`.
        possible (float): Points possible, possibly `nan` or zero.

    Returns:
        The percentage, or `nan` if either input is undefined or `possible` is zero.
    """
    earned = to_number(earned)
    possible = to_number(possible)

    if math.isnan(earned) or math.isnan(possible) or possible == 0:
        return math.nan

    return round_grade(earned / possible * 100)


# === letter grades and GPA ===


def letter_grade(grade: Any) -> str:
    """
    Maps a numeric percentage onto the NSD letter scale.

    Args:
        grade (Any): The percentage. Values above 100 grade as an "A".

    Returns:
        The letter grade, or "N/A" for negative, `nan`, or non-numeric input.
    """
    grade = to_number(grade)

    if math.isnan(grade) or grade < 0:
        return NOT_AVAILABLE

    for lower_bound, letter in LETTER_BANDS:
        if grade >= lower_bound:
            return letter

    return NOT_AVAILABLE


def letter_gpa(letter: str, weighted: bool) -> float:
    """
    Maps a letter grade onto the NSD 4.0 GPA scale, adding 1.0 for weighted courses.

    Args:
        letter (str): A letter produced by `letter_grade()`.
        weighted (bool): True for AP/Honors/IB/Magnet courses.

    Returns:
        The GPA points, or `nan` for an unrecognized letter (including "N/A").
    """
    base_gpa = GPA_POINTS.get(letter)

    if base_gpa is None:
        return math.nan

    return base_gpa + WEIGHTED_BONUS if weighted else base_gpa


def letter_grade_color(letter: str) -> str:
    return LETTER_COLORS.get(letter, LETTER_COLORS[NOT_AVAILABLE])


def is_weighted(course_name: str) -> bool:
    # plain substring match; "SHIBBOLETH" contains "IB" and counts as weighted
    return any(keyword in course_name for keyword in WEIGHTED_KEYWORDS)


def mean(values: list[float]) -> float:
    """
    Arithmetic mean that propagates `nan` and returns `nan` for an empty list.
    """
    if not values:
        return math.nan

    return sum(values) / len(values)
