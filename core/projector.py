# core/projector.py

"""
What-if grade projection: which combinations of future points reach a desired course grade?

Each category of a course gets a number of remaining assignment slots, each worth one point. The
projector walks the tree of "add one more earned point to category i" choices and records every
allocation whose projected course percentage, rounded to two decimals like every displayed grade,
reaches the target:

    100 * sum_i(weight[i] * (earned[i] + added[i]) / (possible[i] + remaining[i]))

The walk only ever moves rightward through the categories (a child may add to category i or any
later category, never an earlier one), so each multiset of additions is visited once rather than
once per ordering. A node that reaches the target is recorded and not expanded further. Results
come back in depth-first, lowest-index-first discovery order with no deduplication or ranking;
`minimal_allocations()` filters out allocations that another accepted allocation dominates.

The search is bounded by a node budget, a wall-clock timeout, and an optional cancellation event.
When a bound trips, the allocations found so far are returned and the result is marked truncated.

A category with a nonzero weight and no possible points even after its remaining slots makes the
projection undefined; the search then returns no allocations instead of raising.
"""

from __future__ import annotations

import logging
import math
import threading
import time
from enum import Enum
from typing import Callable, Sequence

from core.config import get_config
from core.grading import round_grade, to_number
from core.response import Response
from models.course import Course

logger = logging.getLogger(__name__)

Allocation = tuple[list[int], float]


class StopReason(str, Enum):
    COMPLETE = "complete"
    NODE_LIMIT = "node_limit"
    TIMEOUT = "timeout"
    CANCELLED = "cancelled"
    UNDEFINED = "undefined"


class ProjectionResult:

    def __init__(
        self,
        allocations: list[Allocation],
        nodes_visited: int,
        stop_reason: StopReason,
    ):
        self._allocations = allocations
        self._nodes_visited = nodes_visited
        self._stop_reason = stop_reason

    @property
    def allocations(self) -> list[Allocation]:
        return self._allocations

    @property
    def nodes_visited(self) -> int:
        return self._nodes_visited

    @property
    def stop_reason(self) -> StopReason:
        return self._stop_reason

    @property
    def truncated(self) -> bool:
        return self._stop_reason in (
            StopReason.NODE_LIMIT,
            StopReason.TIMEOUT,
            StopReason.CANCELLED,
        )

    def to_dict(self) -> dict:
        return {
            "allocations": [
                {"points": list(points), "grade": grade}
                for points, grade in self._allocations
            ],
            "nodes_visited": self._nodes_visited,
            "stop_reason": self._stop_reason.value,
            "truncated": self.truncated,
        }

    def __repr__(self) -> str:
        return f"ProjectionResult({len(self._allocations)} allocations, {self._nodes_visited} nodes, {self._stop_reason.value})"


# === search ===


def projected_grade(
    weights: Sequence[float],
    earned: Sequence[float],
    denominators: Sequence[float],
    added: Sequence[int],
) -> float:
    """
    Returns the projected course percentage for one allocation of added points.

    Zero-weight categories contribute nothing. A weighted category with a zero denominator makes
    the whole projection `nan`.
    """
    total = 0.0

    for weight, points, denominator, extra in zip(weights, earned, denominators, added):
        if weight == 0:
            continue

        if denominator == 0:
            return math.nan

        total += weight * (points + extra) / denominator

    return total * 100


def generate_table(
    course: Course,
    desired: float,
    remaining: Sequence[int],
    max_nodes: int | None = None,
    timeout: float | None = None,
    cancel: threading.Event | None = None,
    clock: Callable[[], float] = time.monotonic,
) -> ProjectionResult:
    """
    Enumerates the point allocations that lift a course to the desired percentage.

    Args:
        course (Course): The course to project. Read only.
        desired (float): Target course percentage on a 0-100 scale.
        remaining (Sequence[int]): Remaining one-point slots per category, in category order.
        max_nodes (int | None): Node budget. Defaults to the configured SEARCH_MAX_NODES.
        timeout (float | None): Wall-clock budget in seconds. Defaults to the configured SEARCH_TIMEOUT.
        cancel (threading.Event | None): Checked before every node; setting it stops the search.
        clock (Callable[[], float]): Monotonic time source.

    Returns:
        A `ProjectionResult` with every accepted `(allocation, projected percentage)` pair in
        discovery order.

    Notes:
        - Inputs are assumed valid; `project_course()` is the validating wrapper.
        - The course is never mutated.
    """
    settings = get_config()
    max_nodes = settings.SEARCH_MAX_NODES if max_nodes is None else max_nodes
    timeout = settings.SEARCH_TIMEOUT if timeout is None else timeout
    deadline = clock() + timeout

    categories = course.categories
    n = len(categories)
    weights = [c.weight for c in categories]
    earned = [c.points_earned for c in categories]
    # possible + added + still-remaining is the same at every node
    denominators = [c.points_possible + r for c, r in zip(categories, remaining)]

    if n == 0 or math.isnan(projected_grade(weights, earned, denominators, [0] * n)):
        logger.debug("Projection for %s is undefined", course.name)
        return ProjectionResult([], 0, StopReason.UNDEFINED)

    allocations: list[Allocation] = []
    nodes_visited = 0
    stop_reason = StopReason.COMPLETE

    # (added points, budget left, first category the next increment may touch)
    stack: list[tuple[list[int], list[int], int]] = [([0] * n, list(remaining), 0)]

    while stack:
        if nodes_visited >= max_nodes:
            stop_reason = StopReason.NODE_LIMIT
            break

        if cancel is not None and cancel.is_set():
            stop_reason = StopReason.CANCELLED
            break

        if clock() >= deadline:
            stop_reason = StopReason.TIMEOUT
            break

        added, budget, start = stack.pop()
        nodes_visited += 1

        grade = projected_grade(weights, earned, denominators, added)

        if round_grade(grade) >= desired:
            allocations.append((added, grade))
            continue

        # pushed in reverse so the lowest index is explored first
        for i in range(n - 1, start - 1, -1):
            if budget[i] >= 1:
                child_added = list(added)
                child_added[i] += 1
                child_budget = list(budget)
                child_budget[i] -= 1
                stack.append((child_added, child_budget, i))

    if stop_reason is not StopReason.COMPLETE:
        logger.warning(
            "What-if search for %s stopped early (%s) after %d nodes with %d allocations",
            course.name,
            stop_reason.value,
            nodes_visited,
            len(allocations),
        )
    else:
        logger.debug(
            "What-if search for %s visited %d nodes, found %d allocations",
            course.name,
            nodes_visited,
            len(allocations),
        )

    return ProjectionResult(allocations, nodes_visited, stop_reason)


def project_course(
    course: Course,
    desired: float,
    remaining: Sequence[int],
    max_nodes: int | None = None,
    timeout: float | None = None,
    cancel: threading.Event | None = None,
) -> Response:
    """
    Validates what-if input and runs `generate_table()`.

    Args:
        course (Course): The course to project.
        desired (float): Target course percentage on a 0-100 scale.
        remaining (Sequence[int]): One non-negative integer per category.
        max_nodes (int | None): Optional node budget override.
        timeout (float | None): Optional timeout override, in seconds.
        cancel (threading.Event | None): Optional cancellation event.

    Returns:
        Response: A structured response with the following contract:
            - success (bool):
                - True if the search ran, including searches that were truncated or undefined.
                - False if the input is invalid.
            - detail (str | None): A human-readable summary or the validation error.
            - error (ErrorCode | str | None):
                - `ErrorCode.INVALID_ARGUMENT` for a non-finite target, a length mismatch, a
                  negative or non-integer slot count, or a non-positive budget override.
            - status_code (int | None):
                - 200 on success
                - 400 on failure
            - data (dict | None): Payload with the following keys:
                - On success:
                    - "allocations" (list[tuple[list[int], float]]): Accepted allocations.
                    - "result" (ProjectionResult): Full search outcome.
                - On failure:
                    - None
    """
    target = to_number(desired)

    if not math.isfinite(target):
        return Response.invalid_argument(
            f"Desired grade must be a finite number, got {desired!r}."
        )

    if len(remaining) != len(course.categories):
        return Response.invalid_argument(
            f"Expected {len(course.categories)} remaining slot counts, got {len(remaining)}."
        )

    for slots in remaining:
        if isinstance(slots, bool) or not isinstance(slots, int) or slots < 0:
            return Response.invalid_argument(
                f"Remaining slot counts must be non-negative integers, got {slots!r}."
            )

    if max_nodes is not None and max_nodes <= 0:
        return Response.invalid_argument("The node budget must be positive.")

    if timeout is not None and timeout <= 0:
        return Response.invalid_argument("The timeout must be positive.")

    result = generate_table(
        course, target, list(remaining), max_nodes, timeout, cancel
    )

    if result.stop_reason is StopReason.UNDEFINED:
        detail = "The projected grade is undefined for this course."
    elif result.truncated:
        detail = f"Search stopped early ({result.stop_reason.value}); {len(result.allocations)} allocations found so far."
    else:
        detail = f"Found {len(result.allocations)} allocations."

    return Response.succeed(
        detail=detail,
        data={
            "allocations": result.allocations,
            "result": result,
        },
    )


def minimal_allocations(allocations: list[Allocation]) -> list[Allocation]:
    """
    Drops every allocation that needs at least as many points in every category as some other
    accepted allocation. Discovery order is preserved.
    """
    minimal = []

    for points, grade in allocations:
        dominated = any(
            other != points and all(o <= p for o, p in zip(other, points))
            for other, _ in allocations
        )

        if not dominated:
            minimal.append((points, grade))

    return minimal
