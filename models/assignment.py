# models/assignment.py

"""
The Assignment model represents one graded (or not yet graded) item in a course.

Points earned and points possible are both allowed to be `nan`, which is how the gradebook
reports ungraded work. The assignment's own grade is derived from its points on every read,
so editing either value re-grades the assignment immediately.

Assignments reference their category by the category's stable `id`, not by name or position.
`category_name` keeps the label the gradebook reported so that assignments whose category is
missing from the course's category list can still be displayed.
"""

from __future__ import annotations

import datetime
import math
from typing import Any

from core.formatters import parse_date
from core.grading import percentage, to_number
from models.grade import Grade


class Assignment:

    def __init__(
        self,
        id: str,
        name: str,
        points_earned: float,
        points_possible: float,
        category_id: str | None,
        category_name: str,
        due_date: datetime.date | None = None,
        assigned_date: datetime.date | None = None,
    ):
        self._id = id
        self._name = name
        # points use setter methods for validation
        self.points_earned = points_earned
        self.points_possible = points_possible
        self._category_id = category_id
        self._category_name = category_name
        self._due_date = due_date
        self._assigned_date = assigned_date

    # === properties ===

    @property
    def id(self) -> str:
        return self._id

    @property
    def name(self) -> str:
        return self._name

    @name.setter
    def name(self, name: str) -> None:
        self._name = name

    @property
    def points_earned(self) -> float:
        return self._points_earned

    @points_earned.setter
    def points_earned(self, points: Any) -> None:
        self._points_earned = Assignment.validate_points_input(points)

    @property
    def points_possible(self) -> float:
        return self._points_possible

    @points_possible.setter
    def points_possible(self, points: Any) -> None:
        self._points_possible = Assignment.validate_points_input(points)

    @property
    def is_graded(self) -> bool:
        return not (
            math.isnan(self._points_earned) or math.isnan(self._points_possible)
        )

    @property
    def grade(self) -> Grade:
        return Grade(percentage(self._points_earned, self._points_possible))

    @property
    def category_id(self) -> str | None:
        return self._category_id

    @property
    def category_name(self) -> str:
        return self._category_name

    def link_category(self, category_id: str | None, category_name: str) -> None:
        self._category_id = category_id
        self._category_name = category_name

    @property
    def due_date(self) -> datetime.date | None:
        return self._due_date

    @property
    def assigned_date(self) -> datetime.date | None:
        return self._assigned_date

    # === persistence and import ===

    def to_dict(self) -> dict:
        return {
            "id": self._id,
            "name": self._name,
            "grade": self.grade.to_dict(),
            "points": {
                "earned": None if math.isnan(self._points_earned) else self._points_earned,
                "possible": (
                    None if math.isnan(self._points_possible) else self._points_possible
                ),
            },
            "date": {
                "due": self._due_date.isoformat() if self._due_date else None,
                "assigned": (
                    self._assigned_date.isoformat() if self._assigned_date else None
                ),
            },
            "category_id": self._category_id,
            "category": self._category_name,
        }

    @classmethod
    def from_dict(cls, data: dict) -> Assignment:
        points = data.get("points", {})
        dates = data.get("date", {})

        return cls(
            id=data["id"],
            name=data["name"],
            points_earned=points.get("earned"),
            points_possible=points.get("possible"),
            category_id=data.get("category_id"),
            category_name=data.get("category", "N/A"),
            due_date=parse_date(dates.get("due")),
            assigned_date=parse_date(dates.get("assigned")),
        )

    # === dunder methods ===

    def __repr__(self) -> str:
        return f"Assignment({self._id}, {self._name}, {self._points_earned}, {self._points_possible}, {self._category_id})"

    def __str__(self) -> str:
        return f"ASSIGNMENT: {self._name} - (ID: {self._id})"

    # === data validators ===

    @staticmethod
    def validate_points_input(points: Any) -> float:
        """
        Validates and normalizes input for an `Assignment` points value.

        Accepts any input, and then:
            - Casts to float; missing or non-numeric input becomes `nan` (ungraded).
            - Ensures the number is not infinite.
            - Ensures it is non-negative.

        Args:
            points (Any): The input value to validate.

        Returns:
            The normalized points value (float, possibly `nan`).

        Raises:
            ValueError: If the input is infinite or less than zero.
        """
        points = to_number(points)

        if math.isinf(points):
            raise ValueError("Invalid input. Points must be a finite number.")

        if points < 0:
            raise ValueError("Invalid input. Points cannot be less than zero.")

        return points
