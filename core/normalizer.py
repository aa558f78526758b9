# core/normalizer.py

"""
Converts a raw gradebook snapshot into the `Grades` display model.

The snapshot is the decoded JSON document delivered by the school's gradebook service: a list of
courses, each with staff, marks (only the first mark is used), weighted categories, and
assignments with "earned / possible" point strings, plus the current and available reporting
periods.

Normalization rules:
- A course without marks gets a placeholder mark with an undefined grade and no categories or
  assignments, never a failure.
- Course names lose parenthesized fragments; the weighted flag is decided on the unstripped title.
- Category rows whose name contains "total" are dropped. Weights arrive as percentages and are
  clamped to 0-100 %.
- Assignment names are decoded twice (the gradebook double-escapes them).
- Point strings that do not match "earned / possible" leave the assignment ungraded.
- After conversion every category, every course grade, and both GPA values are recomputed from
  the assignments. The snapshot's own calculated scores are ignored, so a course without
  categories has an undefined grade.
"""

from __future__ import annotations

import datetime
import json
import logging
import math
import re
from typing import Any

from core.formatters import (
    decode_assignment_name,
    format_reporting_period_name,
    parse_date,
    strip_parens,
)
from core.grading import is_weighted, percentage, to_number
from core.response import ErrorCode, Response
from core.utils import generate_uuid
from models.assignment import Assignment
from models.category import Category
from models.course import UNCATEGORIZED, Course
from models.grades import Grades
from models.reporting_period import ReportingPeriod

logger = logging.getLogger(__name__)

NUMBER = r"(\d+\.?\d*|\.\d+)"
POINTS_PATTERN = re.compile(rf"^{NUMBER} / {NUMBER}$")
LEADING_NUMBER_PATTERN = re.compile(r"^\s*(\d+\.?\d*|\.\d+)")

PLACEHOLDER_MARK: dict[str, Any] = {
    "name": "",
    "calculatedScore": {"raw": math.nan, "string": "N/A"},
    "weightedCategories": [],
    "assignments": [],
}


# === field parsers ===


def parse_points(points: Any) -> tuple[float, float, float]:
    """
    Parses a gradebook points string.

    Args:
        points (Any): Usually "<earned> / <possible>", e.g. "8.5 / 10".

    Returns:
        A (grade, earned, possible) tuple. For anything that does not match the format, grade and
        earned are `nan` and possible is the string's leading number, or `nan` if it has none
        (e.g. "10 Points Possible" -> (nan, nan, 10.0)).
    """
    text = str(points).strip() if points is not None else ""
    match = POINTS_PATTERN.match(text)

    if match:
        earned = float(match.group(1))
        possible = float(match.group(2))
        return percentage(earned, possible), earned, possible

    leading = LEADING_NUMBER_PATTERN.match(text)
    possible = float(leading.group(0)) if leading else math.nan

    logger.debug("Unparsed points string %r, possible=%s", points, possible)

    return math.nan, math.nan, possible


def parse_weight(weight: Any) -> float:
    """
    Converts a category weight reported as a percentage ("40", "40.0", {"standard": "40"}) to a fraction.

    Missing or non-numeric weights become 0.0; weights outside 0-100 % are clamped into range.
    """
    raw_weight = weight

    if isinstance(weight, dict):
        weight = weight.get("standard")

    if isinstance(weight, str):
        weight = weight.strip().rstrip("%")

    fraction = to_number(weight) / 100

    if not math.isfinite(fraction):
        return 0.0

    if not 0.0 <= fraction <= 1.0:
        logger.warning("Category weight %r out of range, clamping", raw_weight)
        fraction = min(max(fraction, 0.0), 1.0)

    return fraction


# === record converters ===


def build_category(raw_category: dict) -> Category:
    points = raw_category.get("points") or {}

    return Category(
        id=generate_uuid(),
        name=raw_category["type"],
        weight=parse_weight(raw_category.get("weight")),
        points_earned=points.get("current", 0.0),
        points_possible=points.get("possible", 0.0),
    )


def build_assignment(raw_assignment: dict, categories: list[Category]) -> Assignment:
    _, earned, possible = parse_points(raw_assignment.get("points"))
    dates = raw_assignment.get("date") or {}
    category_name = raw_assignment.get("type") or UNCATEGORIZED
    category = next((c for c in categories if c.name == category_name), None)

    return Assignment(
        id=generate_uuid(),
        name=decode_assignment_name(raw_assignment.get("name", "")),
        points_earned=earned,
        points_possible=possible,
        category_id=category.id if category else None,
        category_name=category_name,
        # the gradebook reports the due date under "start"
        due_date=parse_date(dates.get("start")),
        assigned_date=parse_date(dates.get("due")),
    )


def build_course(raw_course: dict, position: int) -> Course:
    """
    Converts one raw course and recalculates its categories and grade.

    Args:
        raw_course (dict): The raw course record.
        position (int): 1-based position of the course, used when the period is missing.

    Returns:
        The normalized `Course`.
    """
    marks = raw_course.get("marks") or [PLACEHOLDER_MARK]
    mark = marks[0]
    title = raw_course.get("title", "")
    staff = raw_course["staff"]

    categories = [
        build_category(c)
        for c in mark.get("weightedCategories") or []
        if "total" not in c["type"].lower()
    ]
    assignments = [
        build_assignment(a, categories) for a in mark.get("assignments") or []
    ]

    course = Course(
        name=strip_parens(title),
        period=raw_course.get("period") or position,
        room=raw_course.get("room", ""),
        teacher_name=staff.get("name", ""),
        teacher_email=staff.get("email", ""),
        weighted=is_weighted(title),
        categories=categories,
        assignments=assignments,
    )

    course.calculate_all()

    return course


def build_reporting_period(
    raw_period: dict, today: datetime.date | None = None, with_dates: bool = False
) -> ReportingPeriod:
    label = None

    if with_dates:
        dates = raw_period.get("date") or {}
        label = format_reporting_period_name(
            raw_period["name"],
            parse_date(dates.get("start")),
            parse_date(dates.get("end")),
            today,
        )

    return ReportingPeriod(raw_period["name"], raw_period["index"], label)


# === entry points ===


def normalize_gradebook(raw: dict, today: datetime.date | None = None) -> Response:
    """
    Converts a raw gradebook snapshot into a fully recalculated `Grades` model.

    Args:
        raw (dict): The decoded gradebook snapshot.
        today (datetime.date | None): Reference date for reporting-period labels. Defaults to today.

    Returns:
        Response: A structured response with the following contract:
            - success (bool):
                - True if the snapshot was normalized.
                - False if required structure is missing or a field fails validation.
            - detail (str | None):
                - On failure, a human-readable description of the error.
                - On success, a summary message.
            - error (ErrorCode | str | None):
                - `ErrorCode.INVALID_INPUT` if a required key is missing or has the wrong shape.
                - `ErrorCode.INVALID_FIELD_VALUE` if a field fails model validation.
            - status_code (int | None):
                - 200 on success
                - 400 on failure
            - data (dict | None): Payload with the following keys:
                - On success:
                    - "grades" (Grades): The normalized model.
                - On failure:
                    - None

        Notes:
            - Never mutates `raw`.
            - Individual malformed point strings or dates never fail the pass; they degrade to ungraded values.
    """
    try:
        courses = [
            build_course(raw_course, i)
            for i, raw_course in enumerate(raw["courses"], 1)
        ]

        reporting_period = raw["reportingPeriod"]
        current = build_reporting_period(reporting_period["current"])
        available = [
            build_reporting_period(p, today, with_dates=True)
            for p in reporting_period.get("available") or []
        ]

        grades = Grades(courses, current, available)

    except (KeyError, TypeError, AttributeError) as e:
        return Response.fail(
            detail=f"Malformed gradebook snapshot, missing or invalid field: {e}",
            error=ErrorCode.INVALID_INPUT,
        )

    except ValueError as e:
        return Response.fail(
            detail=f"Invalid field value: {e}",
            error=ErrorCode.INVALID_FIELD_VALUE,
        )

    logger.info(
        "Normalized %d courses for %s (gpa=%s, wgpa=%s)",
        len(grades.courses),
        grades.period.name,
        grades.gpa,
        grades.wgpa,
    )

    return Response.succeed(
        detail=f"Normalized {len(grades.courses)} courses.",
        data={
            "grades": grades,
        },
    )


def load_snapshot(file_path: str, today: datetime.date | None = None) -> Response:
    """
    Reads a raw gradebook snapshot from a JSON file and normalizes it.

    Args:
        file_path (str): Path to the snapshot file.
        today (datetime.date | None): Passed through to `normalize_gradebook()`.

    Returns:
        Response: The `normalize_gradebook()` response, or a failure with:
            - `ErrorCode.NOT_FOUND` (404) if the file does not exist.
            - `ErrorCode.INVALID_INPUT` if the file is not valid JSON.
            - `ErrorCode.INTERNAL_ERROR` for other filesystem errors.
    """
    try:
        with open(file_path, "r") as f:
            raw = json.load(f)

    except FileNotFoundError:
        return Response.fail(
            detail=f"Snapshot file not found: {file_path}.",
            error=ErrorCode.NOT_FOUND,
            status_code=404,
        )

    except json.JSONDecodeError as e:
        return Response.fail(
            detail=f"Failed to parse JSON data: {e}",
            error=ErrorCode.INVALID_INPUT,
        )

    except OSError as e:
        return Response.fail(
            detail=f"Failed to read snapshot: {e}",
            error=ErrorCode.INTERNAL_ERROR,
        )

    if not isinstance(raw, dict):
        return Response.fail(
            detail=f"Expected {file_path} to contain a JSON object.",
            error=ErrorCode.INVALID_INPUT,
        )

    return normalize_gradebook(raw, today)
