# tests/conftest.py

import datetime
import math

import pytest

from models.assignment import Assignment
from models.category import Category
from models.course import Course
from models.grades import Grades
from models.reporting_period import ReportingPeriod

TODAY = datetime.date(2025, 10, 15)


def build_course(name, weights, points, **kwargs):
    """
    Builds and recalculates a course.

    `weights` maps category name -> weight; `points` is a list of
    (category name, earned, possible) tuples in assignment order.
    """
    categories = [
        Category(f"c{i:03}", category_name, weight)
        for i, (category_name, weight) in enumerate(weights.items(), 1)
    ]
    by_name = {c.name: c for c in categories}

    assignments = []
    for i, (category_name, earned, possible) in enumerate(points, 1):
        category = by_name.get(category_name)
        assignments.append(
            Assignment(
                id=f"a{i:03}",
                name=f"{category_name} {i}",
                points_earned=earned,
                points_possible=possible,
                category_id=category.id if category else None,
                category_name=category_name,
                due_date=TODAY,
                assigned_date=TODAY,
            )
        )

    course = Course(
        name=name,
        period=kwargs.get("period", 1),
        room=kwargs.get("room", "B201"),
        teacher_name="Ada Lovelace",
        teacher_email="alovelace@nsd.org",
        weighted=kwargs.get("weighted"),
        categories=categories,
        assignments=assignments,
    )
    course.calculate_all()

    return course


@pytest.fixture
def sample_category():
    return Category("c001", "Homework", 0.4)


@pytest.fixture
def sample_assignment():
    return Assignment(
        id="a001",
        name="Lab Report",
        points_earned=8.5,
        points_possible=10.0,
        category_id="c001",
        category_name="Homework",
        due_date=datetime.date(2025, 9, 30),
        assigned_date=datetime.date(2025, 9, 23),
    )


@pytest.fixture
def ungraded_assignment():
    return Assignment(
        id="a002",
        name="Final Project",
        points_earned=math.nan,
        points_possible=100.0,
        category_id="c001",
        category_name="Homework",
    )


@pytest.fixture
def sample_course():
    # Homework 17 / 20 = 85 %, Tests 45 / 50 = 90 % -> 0.4 * 85 + 0.6 * 90 = 88
    return build_course(
        "AP Chemistry",
        {"Homework": 0.4, "Tests": 0.6},
        [
            ("Homework", 9, 10),
            ("Tests", 45, 50),
            ("Homework", 8, 10),
        ],
    )


@pytest.fixture
def single_category_course():
    return build_course("Chemistry", {"Tests": 1.0}, [("Tests", 80, 100)])


@pytest.fixture
def sample_grades(sample_course):
    # 88 -> B+ (3.3, weighted 4.3) and 84 -> B (3.0, unweighted)
    second = build_course(
        "World History",
        {"Homework": 0.4, "Tests": 0.6},
        [("Homework", 90, 100), ("Tests", 80, 100)],
        period=2,
    )

    return Grades(
        courses=[sample_course, second],
        period=ReportingPeriod("Q1", 0),
        periods=[ReportingPeriod("Q1", 0, "Q1 (ends in 2 days)")],
    )


@pytest.fixture
def raw_snapshot():
    return {
        "courses": [
            {
                "title": "AP Biology (S1)",
                "period": 1,
                "room": "S104",
                "staff": {"name": "Rosalind Franklin", "email": "rfranklin@nsd.org"},
                "marks": [
                    {
                        "name": "Q1",
                        "calculatedScore": {"raw": 91.5, "string": "A-"},
                        "weightedCategories": [
                            {
                                "type": "Homework",
                                "weight": {"standard": "40"},
                                "points": {"current": 17, "possible": 20},
                            },
                            {
                                "type": "Tests",
                                "weight": {"standard": "60"},
                                "points": {"current": 45, "possible": 50},
                            },
                            {
                                "type": "TOTAL",
                                "weight": {"standard": "100"},
                                "points": {"current": 62, "possible": 70},
                            },
                        ],
                        "assignments": [
                            {
                                "name": "Cell Lab &amp;amp; Report",
                                "points": "9 / 10",
                                "type": "Homework",
                                "date": {"start": "2025-09-30", "due": "2025-09-23"},
                            },
                            {
                                "name": "&amp;lt;b&amp;gt;Unit 1 Test",
                                "points": "45 / 50",
                                "type": "Tests",
                                "date": {"start": "2025-10-02", "due": "2025-10-01"},
                            },
                            {
                                "name": "Reading Quiz",
                                "points": "8 / 10",
                                "type": "Homework",
                                "date": {"start": "2025-10-05", "due": "2025-10-04"},
                            },
                            {
                                "name": "Genetics Project",
                                "points": "100 Points Possible",
                                "type": "Homework",
                                "date": {"start": "2025-10-20", "due": "2025-10-10"},
                            },
                        ],
                    }
                ],
            },
            {
                "title": "Health",
                "period": 0,
                "room": "G1",
                "staff": {"name": "Florence Nightingale", "email": "fn@nsd.org"},
                "marks": [],
            },
        ],
        "reportingPeriod": {
            "current": {"name": "Q1", "index": 0},
            "available": [
                {
                    "name": "Q1",
                    "index": 0,
                    "date": {"start": "2025-09-01", "end": "2025-10-17"},
                },
                {
                    "name": "Q2",
                    "index": 1,
                    "date": {"start": "2025-10-20", "end": "2026-01-23"},
                },
            ],
        },
    }
