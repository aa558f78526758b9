# models/reporting_period.py

"""
Represents a school grading window (quarter, semester, ...) as reported by the gradebook.

`label` is the display name, which for available periods carries a relative date hint such as
"Q2 (ends in 12 days)". `name` is always the bare period name.
"""

from __future__ import annotations


class ReportingPeriod:

    def __init__(self, name: str, index: int, label: str | None = None):
        self._name = name
        self._index = index
        self._label = label or name

    @property
    def name(self) -> str:
        return self._name

    @property
    def index(self) -> int:
        return self._index

    @property
    def label(self) -> str:
        return self._label

    def to_dict(self) -> dict:
        return {
            "name": self._name,
            "label": self._label,
            "index": self._index,
        }

    @classmethod
    def from_dict(cls, data: dict) -> ReportingPeriod:
        return cls(name=data["name"], index=data["index"], label=data.get("label"))

    def __repr__(self) -> str:
        return f"ReportingPeriod({self._name}, {self._index})"
