# models/grades.py

"""
The Grades model is the top-level result of normalizing a gradebook snapshot and the object the
dashboard renders.

It holds the normalized courses, the current and available reporting periods, and two derived
GPA values:
- `gpa`: the mean over all courses of the unweighted GPA points of each course's letter grade.
- `wgpa`: the same mean, adding 1.0 for every course flagged as weighted.

A course with an undefined grade contributes `nan`, so either GPA becomes `nan` until every course
is graded. The weighted flag of a course defaults to the name heuristic in `core.grading` and can
be overridden with `update_course_weighting()`.

Provides `save()` / `load()` for persisting an already-normalized model as JSON. Raw gradebook
snapshots are loaded through `core.normalizer.load_snapshot()` instead.
"""

from __future__ import annotations

import json
import logging
import math
import os

from core.grading import mean
from core.response import ErrorCode, Response
from core.utils import require_index
from models.course import Course
from models.reporting_period import ReportingPeriod

logger = logging.getLogger(__name__)


class Grades:

    def __init__(
        self,
        courses: list[Course],
        period: ReportingPeriod,
        periods: list[ReportingPeriod] | None = None,
    ):
        self._courses = courses
        self._period = period
        self._periods = periods or []
        self._gpa = math.nan
        self._wgpa = math.nan

        self.calculate_gpa()

    # === properties ===

    @property
    def courses(self) -> list[Course]:
        return self._courses

    @property
    def gpa(self) -> float:
        return self._gpa

    @property
    def wgpa(self) -> float:
        return self._wgpa

    @property
    def period(self) -> ReportingPeriod:
        return self._period

    @property
    def periods(self) -> list[ReportingPeriod]:
        return self._periods

    # === recalculation ===

    def calculate_gpa(self) -> None:
        self._gpa = mean([c.gpa(weighted=False) for c in self._courses])
        self._wgpa = mean([c.gpa() for c in self._courses])

    def update_course_weighting(self, course_index: int, weighted: bool) -> Response:
        """
        Overrides the weighted flag of one course and recomputes both GPA values.

        Args:
            course_index (int): Position of the course in `self.courses`.
            weighted (bool): The new weighted flag.

        Returns:
            Response: A structured response with the following contract:
                - success (bool):
                    - True if the flag was set.
                    - False if the index is out of range.
                - error (ErrorCode | str | None):
                    - `ErrorCode.INVALID_ARGUMENT` if the index is out of range.
                - status_code (int | None):
                    - 200 on success
                    - 400 on failure
                - data (dict | None):
                    - On success:
                        - "grades" (Grades): This model.
                        - "gpa" (float): The recomputed unweighted GPA.
                        - "wgpa" (float): The recomputed weighted GPA.
                    - On failure:
                        - None
        """
        try:
            course = self._courses[require_index(self._courses, course_index)]

        except (IndexError, TypeError) as e:
            return Response.invalid_argument(f"Cannot update course weighting: {e}")

        course.is_weighted = bool(weighted)
        self.calculate_gpa()

        logger.debug("Set weighted=%s on %s", course.is_weighted, course.name)

        return Response.succeed(
            detail=f"{course.name} is now {'weighted' if course.is_weighted else 'unweighted'}.",
            data={
                "grades": self,
                "gpa": self._gpa,
                "wgpa": self._wgpa,
            },
        )

    # === persistence and import ===

    def to_dict(self) -> dict:
        return {
            "courses": [c.to_dict() for c in self._courses],
            "gpa": None if math.isnan(self._gpa) else self._gpa,
            "wgpa": None if math.isnan(self._wgpa) else self._wgpa,
            "period": self._period.to_dict(),
            "periods": [p.to_dict() for p in self._periods],
        }

    @classmethod
    def from_dict(cls, data: dict) -> Grades:
        return cls(
            courses=[Course.from_dict(c) for c in data["courses"]],
            period=ReportingPeriod.from_dict(data["period"]),
            periods=[ReportingPeriod.from_dict(p) for p in data.get("periods", [])],
        )

    def save(self, file_path: str) -> Response:
        """
        Serializes the model and writes it to disk in JSON format.

        Args:
            file_path (str): The target file. Missing parent directories are created.

        Returns:
            Response: A structured response with the following contract:
                - success (bool):
                    - True if the model was written to disk.
                    - False for serialization or filesystem errors.
                - detail (str | None): A human-readable description of the outcome.
                - error (ErrorCode | str | None):
                    - `ErrorCode.INVALID_FIELD_VALUE` if the model is not JSON serializable.
                    - `ErrorCode.INTERNAL_ERROR` if an OSError is raised.
                - status_code (int | None):
                    - 200 on success
                    - 400 on failure
                - data (dict | None):
                    - On success:
                        - "path" (str): The file written.
                    - On failure:
                        - None

        Notes:
            - This intentionally overwrites existing data.
        """
        try:
            parent = os.path.dirname(file_path)
            if parent:
                os.makedirs(parent, exist_ok=True)

            with open(file_path, "w") as f:
                json.dump(self.to_dict(), f, indent=2, sort_keys=True)

        except (TypeError, ValueError) as e:
            return Response.fail(
                detail=f"Object not JSON serializable: {e}",
                error=ErrorCode.INVALID_FIELD_VALUE,
            )

        except OSError as e:
            return Response.fail(
                detail=f"Failed to write data to disk: {e}",
                error=ErrorCode.INTERNAL_ERROR,
            )

        logger.info("Saved %d courses to %s", len(self._courses), file_path)

        return Response.succeed(
            detail="Grades successfully saved to disk.",
            data={
                "path": file_path,
            },
        )

    @classmethod
    def load(cls, file_path: str) -> Response:
        """
        Loads a model previously written by `save()`.

        Args:
            file_path (str): The JSON file to read.

        Returns:
            Response: A structured response with the following contract:
                - success (bool):
                    - True if the model was restored.
                    - False for missing files, malformed JSON, or missing fields.
                - error (ErrorCode | str | None):
                    - `ErrorCode.NOT_FOUND` if the file does not exist.
                    - `ErrorCode.INVALID_INPUT` if the JSON is malformed or a required field is missing.
                    - `ErrorCode.INVALID_FIELD_VALUE` if a field fails validation.
                    - `ErrorCode.INTERNAL_ERROR` for other filesystem errors.
                - status_code (int | None):
                    - 200 on success
                    - 404 if the file does not exist
                    - 400 for other failures
                - data (dict | None):
                    - On success:
                        - "grades" (Grades): The restored model.
                    - On failure:
                        - None

        Notes:
            - Stored grades are trusted as saved; no recalculation runs apart from GPA.
        """
        try:
            with open(file_path, "r") as f:
                grades = cls.from_dict(json.load(f))

        except FileNotFoundError:
            return Response.fail(
                detail=f"No saved grades found at: {file_path}.",
                error=ErrorCode.NOT_FOUND,
                status_code=404,
            )

        except json.JSONDecodeError as e:
            return Response.fail(
                detail=f"Failed to parse JSON data: {e}",
                error=ErrorCode.INVALID_INPUT,
            )

        except (KeyError, TypeError, AttributeError) as e:
            return Response.fail(
                detail=f"Missing required field: {e}",
                error=ErrorCode.INVALID_INPUT,
            )

        except ValueError as e:
            return Response.fail(
                detail=f"Invalid field value: {e}",
                error=ErrorCode.INVALID_FIELD_VALUE,
            )

        except OSError as e:
            return Response.fail(
                detail=f"Failed to read data from disk: {e}",
                error=ErrorCode.INTERNAL_ERROR,
            )

        return Response.succeed(
            data={
                "grades": grades,
            },
        )

    # === dunder methods ===

    def __repr__(self) -> str:
        return f"Grades({len(self._courses)} courses, {self._gpa}, {self._wgpa})"
