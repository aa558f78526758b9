# models/grade.py

"""
Represents a single derived grade: a numeric percentage plus its letter and display color.

Only the percentage is stored. `letter` and `color` are computed from it on every read, so a
grade can never report a letter that disagrees with its percentage. An undefined grade holds
`math.nan` and reads as "N/A" / gray.
"""

from __future__ import annotations

import math

from core.grading import letter_grade, letter_grade_color, to_number


class Grade:

    def __init__(self, raw: float = math.nan):
        self.raw = raw

    # === properties ===

    @property
    def raw(self) -> float:
        return self._raw

    @raw.setter
    def raw(self, raw: float | None) -> None:
        self._raw = to_number(raw)

    @property
    def letter(self) -> str:
        return letter_grade(self._raw)

    @property
    def color(self) -> str:
        return letter_grade_color(self.letter)

    @property
    def is_defined(self) -> bool:
        return not math.isnan(self._raw)

    # === persistence and import ===

    def to_dict(self) -> dict:
        return {
            "letter": self.letter,
            "raw": self._raw if self.is_defined else None,
            "color": self.color,
        }

    @classmethod
    def from_dict(cls, data: dict | None) -> Grade:
        return cls((data or {}).get("raw"))

    # === dunder methods ===

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grade):
            return NotImplemented

        if not self.is_defined and not other.is_defined:
            return True

        return self._raw == other._raw

    def __repr__(self) -> str:
        return f"Grade({self._raw}, {self.letter})"
