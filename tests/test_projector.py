# tests/test_projector.py

import itertools
import math
import threading

import pytest

from conftest import build_course
from core.projector import (
    StopReason,
    generate_table,
    minimal_allocations,
    project_course,
    projected_grade,
)
from core.response import ErrorCode


@pytest.fixture
def even_course():
    # two half-weight categories at 8 / 10 each
    return build_course(
        "Chemistry",
        {"Homework": 0.5, "Tests": 0.5},
        [("Homework", 8, 10), ("Tests", 8, 10)],
    )


def points_of(result):
    return [points for points, _ in result.allocations]


def test_projected_grade():
    assert projected_grade([0.5, 0.5], [8, 8], [10, 10], [0, 0]) == pytest.approx(80.0)
    assert projected_grade([0.5, 0.5], [8, 8], [12, 12], [2, 0]) == pytest.approx(75.0)
    assert projected_grade([1.0, 0.0], [8, 0], [10, 0], [0, 0]) == pytest.approx(80.0)
    assert math.isnan(projected_grade([1.0], [0], [0], [0]))


def test_generate_table_discovery_order(even_course):
    result = generate_table(even_course, 74, [2, 2])

    assert points_of(result) == [[2, 0], [1, 1], [0, 2]]
    assert [grade for _, grade in result.allocations] == pytest.approx([75.0] * 3)
    assert result.stop_reason is StopReason.COMPLETE
    assert not result.truncated
    assert result.nodes_visited == 6


def test_accepted_nodes_are_not_expanded(even_course):
    result = generate_table(even_course, 70, [2, 2])

    assert points_of(result) == [[1, 0], [0, 1]]
    assert result.nodes_visited == 3


def test_single_category(single_category_course):
    assert generate_table(single_category_course, 81, [1]).allocations == []

    result = generate_table(single_category_course, 80, [1])
    assert points_of(result) == [[1]]
    assert result.allocations[0][1] == pytest.approx(8100 / 101)

    result = generate_table(single_category_course, 79, [1])
    assert points_of(result) == [[0]]
    assert result.allocations[0][1] == pytest.approx(8000 / 101)


def test_current_grade_equal_to_target_is_reached():
    course = build_course("Chemistry", {"Tests": 1.0}, [("Tests", 57, 100)])
    assert course.grade.raw == 57.0

    result = generate_table(course, 57, [0])

    assert points_of(result) == [[0]]
    assert result.nodes_visited == 1
    assert result.stop_reason is StopReason.COMPLETE


def test_target_matched_after_added_points():
    # Homework 9 / 10 and Tests 5 / 10 at equal weight project to 70
    course = build_course(
        "Chemistry",
        {"Homework": 0.5, "Tests": 0.5},
        [("Homework", 8, 9), ("Tests", 5, 10)],
    )

    result = generate_table(course, 70, [1, 0])

    assert points_of(result) == [[1, 0]]


def test_unreachable_target(single_category_course):
    result = generate_table(single_category_course, 101, [1])

    assert result.allocations == []
    assert result.stop_reason is StopReason.COMPLETE


def test_category_with_no_points_yet():
    course = build_course("Chemistry", {"Tests": 1.0}, [])
    result = generate_table(course, 100, [3])

    assert points_of(result) == [[3]]
    assert result.allocations[0][1] == pytest.approx(100.0)


def test_zero_denominator_is_undefined():
    course = build_course("Chemistry", {"Tests": 1.0}, [])
    result = generate_table(course, 50, [0])

    assert result.allocations == []
    assert result.stop_reason is StopReason.UNDEFINED
    assert result.nodes_visited == 0


def test_zero_weight_category_is_ignored():
    course = build_course(
        "Chemistry", {"Tests": 1.0, "Extra Credit": 0.0}, [("Tests", 80, 100)]
    )
    result = generate_table(course, 80, [0, 0])

    assert points_of(result) == [[0, 0]]


def test_course_without_categories_is_undefined():
    course = build_course("Health", {}, [])
    result = generate_table(course, 50, [])

    assert result.stop_reason is StopReason.UNDEFINED


def test_node_limit_truncates(even_course):
    result = generate_table(even_course, 74, [2, 2], max_nodes=3)

    assert points_of(result) == [[2, 0]]
    assert result.nodes_visited == 3
    assert result.stop_reason is StopReason.NODE_LIMIT
    assert result.truncated


def test_cancel_event_stops_search(even_course):
    cancel = threading.Event()
    cancel.set()

    result = generate_table(even_course, 74, [2, 2], cancel=cancel)

    assert result.allocations == []
    assert result.nodes_visited == 0
    assert result.stop_reason is StopReason.CANCELLED


def test_timeout_truncates(even_course):
    ticks = itertools.chain([0.0, 0.0, 0.0], itertools.repeat(5.0))
    result = generate_table(
        even_course, 74, [2, 2], timeout=1.0, clock=lambda: next(ticks)
    )

    assert result.nodes_visited == 2
    assert result.stop_reason is StopReason.TIMEOUT
    assert result.truncated


def test_result_to_dict(even_course):
    data = generate_table(even_course, 70, [2, 2]).to_dict()

    assert [a["points"] for a in data["allocations"]] == [[1, 0], [0, 1]]
    assert data["stop_reason"] == "complete"
    assert data["truncated"] is False


# === project_course ===


def test_project_course(even_course):
    before = even_course.to_dict()
    response = project_course(even_course, 74, [2, 2])

    assert response.success
    assert [points for points, _ in response.data["allocations"]] == [
        [2, 0],
        [1, 1],
        [0, 2],
    ]
    assert response.data["result"].stop_reason is StopReason.COMPLETE
    assert even_course.to_dict() == before


def test_project_course_undefined_is_not_a_failure():
    course = build_course("Chemistry", {"Tests": 1.0}, [])
    response = project_course(course, 50, [0])

    assert response.success
    assert response.data["allocations"] == []
    assert response.data["result"].stop_reason is StopReason.UNDEFINED


@pytest.mark.parametrize(
    "desired, remaining, kwargs",
    [
        (math.nan, [1, 1], {}),
        (math.inf, [1, 1], {}),
        ("high", [1, 1], {}),
        (74, [1], {}),
        (74, [1, 1, 1], {}),
        (74, [-1, 1], {}),
        (74, [1.5, 1], {}),
        (74, [True, 1], {}),
        (74, [1, 1], {"max_nodes": 0}),
        (74, [1, 1], {"timeout": 0}),
    ],
)
def test_project_course_invalid_argument(even_course, desired, remaining, kwargs):
    response = project_course(even_course, desired, remaining, **kwargs)

    assert not response.success
    assert response.error is ErrorCode.INVALID_ARGUMENT
    assert response.status_code == 400


def test_minimal_allocations():
    allocations = [([1, 0], 75.0), ([1, 1], 80.0), ([0, 1], 75.0)]

    assert minimal_allocations(allocations) == [([1, 0], 75.0), ([0, 1], 75.0)]


def test_minimal_allocations_keeps_incomparable(even_course):
    allocations = generate_table(even_course, 74, [2, 2]).allocations

    assert minimal_allocations(allocations) == allocations
