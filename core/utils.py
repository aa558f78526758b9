# core/utils.py

"""
Identifier and position helpers shared by the grade records.

Categories and assignments receive a random UUID when they are created, so the link from an
assignment to its category survives renames and reordering of the category list. Everything
else addresses courses, categories, and assignments by their position in the owning list.
"""

import uuid
from typing import Sequence


def generate_uuid() -> str:
    return str(uuid.uuid4())


def require_index(items: Sequence, index: int) -> int:
    """
    Validates a list position, rejecting negative positions that Python would otherwise wrap.

    Raises:
        TypeError: If the index is not an integer.
        IndexError: If the index is outside `0 <= index < len(items)`.
    """
    if isinstance(index, bool) or not isinstance(index, int):
        raise TypeError(f"Index must be an integer, got {index!r}.")

    if not 0 <= index < len(items):
        raise IndexError(f"Index {index} is out of range for {len(items)} items.")

    return index
