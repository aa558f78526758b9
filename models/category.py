# models/category.py

"""
Represents a weighted grade category within a course (e.g. "Homework", "Tests").

Key behaviors:
- `weight`: a fraction from 0 to 1 of the course grade. Validated through `validate_weight_input()`.
- `points_earned` / `points_possible` / `grade`: derived values. They are only ever written by
  `Course.calculate_category()` and are stale until it runs again after an assignment mutation.
- `to_dict()` / `from_dict()`: Used for serialization and persistence.
"""

from __future__ import annotations

import math
from typing import Any

from core.grading import percentage, to_number
from models.grade import Grade


class Category:

    def __init__(
        self,
        id: str,
        name: str,
        weight: float,
        points_earned: float = 0.0,
        points_possible: float = 0.0,
    ):
        self._id = id
        self._name = name
        # weight uses setter method for validation
        self.weight = weight
        self._points_earned = to_number(points_earned)
        self._points_possible = to_number(points_possible)
        self._grade = Grade(percentage(self._points_earned, self._points_possible))

    # === properties ===

    @property
    def id(self) -> str:
        return self._id

    @property
    def name(self) -> str:
        return self._name

    @property
    def weight(self) -> float:
        return self._weight

    @weight.setter
    def weight(self, weight: Any) -> None:
        self._weight = Category.validate_weight_input(weight)

    @property
    def points_earned(self) -> float:
        return self._points_earned

    @property
    def points_possible(self) -> float:
        return self._points_possible

    @property
    def grade(self) -> Grade:
        return self._grade

    def set_points(self, earned: float, possible: float) -> None:
        """
        Stores freshly summed points and re-derives the category grade from them.
        """
        self._points_earned = earned
        self._points_possible = possible
        self._grade.raw = percentage(earned, possible)

    # === persistence and import ===

    def to_dict(self) -> dict:
        return {
            "id": self._id,
            "name": self._name,
            "weight": self._weight,
            "grade": self._grade.to_dict(),
            "points": {
                "earned": self._points_earned,
                "possible": self._points_possible,
            },
        }

    @classmethod
    def from_dict(cls, data: dict) -> Category:
        points = data.get("points", {})

        return cls(
            id=data["id"],
            name=data["name"],
            weight=data["weight"],
            points_earned=points.get("earned", 0.0),
            points_possible=points.get("possible", 0.0),
        )

    # === dunder methods ===

    def __repr__(self) -> str:
        return f"Category({self._id}, {self._name}, {self._weight}, {self._points_earned}, {self._points_possible})"

    def __str__(self) -> str:
        return f"CATEGORY: name: {self._name}, weight: {self._weight}, id: {self._id}"

    # === data validators ===

    @staticmethod
    def validate_weight_input(weight: Any) -> float:
        """
        Validates and normalizes input for a `Category` weight.

        - Casts to float.
        - Ensures the number is finite.
        - Ensures it is between 0 and 1, inclusive.

        Args:
            weight (Any): The input value to validate.

        Returns:
            The normalized weight value.

        Raises:
            TypeError: If the input cannot be cast to float.
            ValueError: If the input is non-finite or out of bounds.
        """
        if isinstance(weight, bool):
            raise TypeError("Weight must be a number.")

        try:
            weight = float(weight)

        except (TypeError, ValueError):
            raise TypeError("Weight must be a number.")

        if not math.isfinite(weight):
            raise ValueError("Weight must be a finite number.")

        if weight < 0 or weight > 1:
            raise ValueError("Weight must be between 0 and 1.")

        return weight
