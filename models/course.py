# models/course.py

"""
The Course model holds one class's categories and assignments and owns every recalculation rule
that keeps their derived grades consistent.

Recalculation rules:
- A category's points are the sums over the course's assignments that link to the category and
  have both points defined. Its grade is `earned / possible * 100`, undefined for 0/0.
- The course grade is the weighted mean of the categories whose grade is defined, with the
  weights renormalized over just those categories. With no defined category the course grade
  is undefined.

Editing operations (`add_assignment()`, `remove_assignment()`, `update_assignment_category()`,
`update_assignment_points()`) mutate the course in place, rerun the rules they affect, and
return a `Response` carrying the course. Bad indices or values are rejected with
`ErrorCode.INVALID_ARGUMENT` and leave the course untouched.
"""

from __future__ import annotations

import datetime
import logging
import math

from core.grading import is_weighted, letter_gpa, round_grade, to_number
from core.response import Response
from core.utils import generate_uuid, require_index
from models.assignment import Assignment
from models.category import Category
from models.grade import Grade

logger = logging.getLogger(__name__)

NEW_ASSIGNMENT_NAME = "New Assignment"
UNCATEGORIZED = "N/A"
POINT_FIELDS = ("earned", "possible")


class Course:

    def __init__(
        self,
        name: str,
        period: int,
        room: str,
        teacher_name: str,
        teacher_email: str,
        weighted: bool | None = None,
        grade: float = math.nan,
        categories: list[Category] | None = None,
        assignments: list[Assignment] | None = None,
    ):
        self._name = name
        self._period = period
        self._room = room
        self._teacher_name = teacher_name
        self._teacher_email = teacher_email
        self._is_weighted = is_weighted(name) if weighted is None else weighted
        self._grade = Grade(grade)
        self._categories: list[Category] = categories or []
        self._assignments: list[Assignment] = assignments or []

    # === properties ===

    @property
    def name(self) -> str:
        return self._name

    @property
    def period(self) -> int:
        return self._period

    @property
    def room(self) -> str:
        return self._room

    @property
    def teacher_name(self) -> str:
        return self._teacher_name

    @property
    def teacher_email(self) -> str:
        return self._teacher_email

    @property
    def is_weighted(self) -> bool:
        return self._is_weighted

    @is_weighted.setter
    def is_weighted(self, weighted: bool) -> None:
        self._is_weighted = weighted

    @property
    def grade(self) -> Grade:
        return self._grade

    @property
    def categories(self) -> list[Category]:
        return self._categories

    @property
    def assignments(self) -> list[Assignment]:
        return self._assignments

    def gpa(self, weighted: bool | None = None) -> float:
        """
        Returns the course's GPA contribution, using the course's own weighted flag by default.
        """
        weighted = self._is_weighted if weighted is None else weighted
        return letter_gpa(self._grade.letter, weighted)

    # === data accessors ===

    def find_category_index(self, category_id: str | None) -> int | None:
        for i, category in enumerate(self._categories):
            if category.id == category_id:
                return i

        return None

    def find_category_by_name(self, name: str) -> Category | None:
        return next((c for c in self._categories if c.name == name), None)

    def graded_assignments_in(self, category: Category) -> list[Assignment]:
        return [
            a
            for a in self._assignments
            if a.category_id == category.id and a.is_graded
        ]

    # === recalculation ===

    def calculate_category(self, category_index: int) -> None:
        """
        Recomputes one category's points and grade from its current graded assignments.

        Args:
            category_index (int): Position of the category in `self.categories`.

        Raises:
            IndexError: If the index is out of range.

        Notes:
            - Idempotent: running it twice without an assignment change gives the same result.
        """
        category = self._categories[require_index(self._categories, category_index)]
        graded = self.graded_assignments_in(category)

        category.set_points(
            sum(a.points_earned for a in graded),
            sum(a.points_possible for a in graded),
        )

    def calculate_grade(self) -> None:
        """
        Recomputes the course grade from the categories with a defined grade, renormalizing
        their weights so undefined categories drop out of both numerator and denominator.
        """
        defined = [c for c in self._categories if c.grade.is_defined]
        total_weight = sum(c.weight for c in defined)

        if not defined or total_weight == 0:
            self._grade.raw = math.nan
            return

        self._grade.raw = round_grade(
            sum(c.grade.raw * (c.weight / total_weight) for c in defined)
        )

    def calculate_all(self) -> None:
        for i in range(len(self._categories)):
            self.calculate_category(i)

        self.calculate_grade()

    # === data manipulators ===

    def add_assignment(self, today: datetime.date | None = None) -> Response:
        """
        Prepends a placeholder assignment with 0 / 0 points.

        Args:
            today (datetime.date | None): Due and assigned date for the placeholder. Defaults to today.

        Returns:
            Response: A structured response with the following contract:
                - success (bool): Always True.
                - detail (str | None): A simple confirmation message.
                - status_code (int | None): 200.
                - data (dict): Payload with the following keys:
                    - "course" (Course): This course.
                    - "assignment" (Assignment): The new placeholder.

        Notes:
            - The placeholder links to the first category, or to no category ("N/A") if the course has none.
            - No recalculation runs: 0 / 0 points leave every grade unchanged.
        """
        today = today or datetime.date.today()
        first_category = self._categories[0] if self._categories else None

        assignment = Assignment(
            id=generate_uuid(),
            name=NEW_ASSIGNMENT_NAME,
            points_earned=0.0,
            points_possible=0.0,
            category_id=first_category.id if first_category else None,
            category_name=first_category.name if first_category else UNCATEGORIZED,
            due_date=today,
            assigned_date=today,
        )
        self._assignments.insert(0, assignment)

        logger.debug("Added placeholder assignment to %s", self._name)

        return Response.succeed(
            detail="Placeholder assignment added.",
            data={
                "course": self,
                "assignment": assignment,
            },
        )

    def remove_assignment(self, assignment_index: int) -> Response:
        """
        Removes an assignment by position and recalculates every category and the course grade.

        Args:
            assignment_index (int): Position of the assignment in `self.assignments`.

        Returns:
            Response: A structured response with the following contract:
                - success (bool):
                    - True if the assignment was removed.
                    - False if the index is out of range.
                - detail (str | None): A human-readable description of the outcome.
                - error (ErrorCode | str | None):
                    - `ErrorCode.INVALID_ARGUMENT` if the index is out of range.
                - status_code (int | None):
                    - 200 on success
                    - 400 on failure
                - data (dict | None):
                    - On success:
                        - "course" (Course): This course.
                        - "assignment" (Assignment): The removed assignment.
                    - On failure:
                        - None
        """
        try:
            index = require_index(self._assignments, assignment_index)

        except (IndexError, TypeError) as e:
            return Response.invalid_argument(f"Cannot remove assignment: {e}")

        assignment = self._assignments.pop(index)
        self.calculate_all()

        logger.debug("Removed %s from %s", assignment.name, self._name)

        return Response.succeed(
            detail=f"Assignment successfully removed: {assignment.name}.",
            data={
                "course": self,
                "assignment": assignment,
            },
        )

    def update_assignment_category(
        self, assignment_index: int, category_index: int
    ) -> Response:
        """
        Links an assignment to the category at a given position, then recalculates the course.

        Args:
            assignment_index (int): Position of the assignment in `self.assignments`.
            category_index (int): Position of the new category in `self.categories`.

        Returns:
            Response: A structured response with the following contract:
                - success (bool):
                    - True if the assignment was recategorized.
                    - False if either index is out of range.
                - error (ErrorCode | str | None):
                    - `ErrorCode.INVALID_ARGUMENT` if either index is out of range.
                - status_code (int | None):
                    - 200 on success
                    - 400 on failure
                - data (dict | None):
                    - On success:
                        - "course" (Course): This course.
                    - On failure:
                        - None

        Notes:
            - Every category is recalculated, since both the old and the new category change.
        """
        try:
            assignment = self._assignments[
                require_index(self._assignments, assignment_index)
            ]
            category = self._categories[
                require_index(self._categories, category_index)
            ]

        except (IndexError, TypeError) as e:
            return Response.invalid_argument(f"Cannot recategorize assignment: {e}")

        assignment.link_category(category.id, category.name)
        self.calculate_all()

        logger.debug("Moved %s to category %s", assignment.name, category.name)

        return Response.succeed(
            detail=f"Assignment category successfully updated to: {category.name}.",
            data={
                "course": self,
            },
        )

    def update_assignment_points(
        self, assignment_index: int, field: str, value: float
    ) -> Response:
        """
        Sets points earned or points possible on one assignment and recalculates what it affects.

        Args:
            assignment_index (int): Position of the assignment in `self.assignments`.
            field (str): Either "earned" or "possible".
            value (float): The new points value. Negative values are clamped to 0.

        Returns:
            Response: A structured response with the following contract:
                - success (bool):
                    - True if the points were updated.
                    - False if the index, field, or value is invalid.
                - error (ErrorCode | str | None):
                    - `ErrorCode.INVALID_ARGUMENT` for an out-of-range index, an unknown field, or a non-numeric value.
                - status_code (int | None):
                    - 200 on success
                    - 400 on failure
                - data (dict | None):
                    - On success:
                        - "course" (Course): This course.
                        - "assignment" (Assignment): The updated assignment.
                    - On failure:
                        - None

        Notes:
            - The assignment's own grade follows its points automatically.
            - Only the assignment's category is recalculated, followed by the course grade.
        """
        if field not in POINT_FIELDS:
            return Response.invalid_argument(
                f"Unknown points field: {field!r}. Expected one of {', '.join(POINT_FIELDS)}."
            )

        points = to_number(value)

        if not math.isfinite(points):
            return Response.invalid_argument(
                f"Points must be a finite number, got {value!r}."
            )

        try:
            assignment = self._assignments[
                require_index(self._assignments, assignment_index)
            ]

        except (IndexError, TypeError) as e:
            return Response.invalid_argument(f"Cannot update assignment points: {e}")

        points = max(points, 0.0)

        if field == "earned":
            assignment.points_earned = points
        else:
            assignment.points_possible = points

        category_index = self.find_category_index(assignment.category_id)

        if category_index is not None:
            self.calculate_category(category_index)

        self.calculate_grade()

        logger.debug(
            "Set points %s of %s to %s in %s",
            field,
            assignment.name,
            points,
            self._name,
        )

        return Response.succeed(
            detail=f"Assignment points {field} successfully updated to: {points}.",
            data={
                "course": self,
                "assignment": assignment,
            },
        )

    # === persistence and import ===

    def to_dict(self) -> dict:
        return {
            "name": self._name,
            "period": self._period,
            "room": self._room,
            "weighted": self._is_weighted,
            "grade": self._grade.to_dict(),
            "teacher": {
                "name": self._teacher_name,
                "email": self._teacher_email,
            },
            "categories": [c.to_dict() for c in self._categories],
            "assignments": [a.to_dict() for a in self._assignments],
        }

    @classmethod
    def from_dict(cls, data: dict) -> Course:
        teacher = data.get("teacher", {})

        return cls(
            name=data["name"],
            period=data["period"],
            room=data.get("room", ""),
            teacher_name=teacher.get("name", ""),
            teacher_email=teacher.get("email", ""),
            weighted=data.get("weighted"),
            grade=data.get("grade", {}).get("raw"),
            categories=[Category.from_dict(c) for c in data.get("categories", [])],
            assignments=[Assignment.from_dict(a) for a in data.get("assignments", [])],
        )

    # === dunder methods ===

    def __repr__(self) -> str:
        return f"Course({self._name}, {self._period}, {self._grade.raw}, {len(self._categories)} categories, {len(self._assignments)} assignments)"

    def __str__(self) -> str:
        return f"COURSE: {self._name} - (Period: {self._period})"
