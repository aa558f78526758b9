# tests/test_grades.py

import json
import math

import pytest

from conftest import build_course
from core.response import ErrorCode
from models.grades import Grades
from models.reporting_period import ReportingPeriod


def test_gpa_and_weighted_gpa(sample_grades):
    assert sample_grades.gpa == pytest.approx(3.15)
    assert sample_grades.wgpa == pytest.approx(3.65)


def test_undefined_course_makes_gpa_undefined(sample_grades):
    courses = sample_grades.courses + [build_course("Health", {}, [])]
    grades = Grades(courses, ReportingPeriod("Q1", 0))

    assert math.isnan(grades.gpa)
    assert math.isnan(grades.wgpa)
    assert grades.to_dict()["gpa"] is None


def test_no_courses_gpa_is_undefined():
    grades = Grades([], ReportingPeriod("Q1", 0))

    assert math.isnan(grades.gpa)
    assert math.isnan(grades.wgpa)


def test_calculate_gpa_after_course_edit(sample_grades):
    # AP Chemistry Homework 18 / 20 = 90 % -> 90 % overall, A-
    sample_grades.courses[0].update_assignment_points(0, "earned", 10)
    sample_grades.calculate_gpa()

    assert sample_grades.gpa == pytest.approx((3.7 + 3.0) / 2)
    assert sample_grades.wgpa == pytest.approx((4.7 + 3.0) / 2)


def test_update_course_weighting(sample_grades):
    response = sample_grades.update_course_weighting(1, True)

    assert response.success
    assert sample_grades.courses[1].is_weighted
    assert response.data["wgpa"] == pytest.approx(4.15)
    assert response.data["gpa"] == pytest.approx(3.15)

    response = sample_grades.update_course_weighting(0, False)

    assert response.success
    assert sample_grades.wgpa == pytest.approx(3.3 / 2 + 4.0 / 2)


@pytest.mark.parametrize("index", [2, -1, "0"])
def test_update_course_weighting_invalid_index(sample_grades, index):
    response = sample_grades.update_course_weighting(index, True)

    assert not response.success
    assert response.error is ErrorCode.INVALID_ARGUMENT
    assert sample_grades.wgpa == pytest.approx(3.65)


def test_grades_to_dict(sample_grades):
    data = sample_grades.to_dict()

    assert [c["name"] for c in data["courses"]] == ["AP Chemistry", "World History"]
    assert data["period"] == {"name": "Q1", "label": "Q1", "index": 0}
    assert data["periods"][0]["label"] == "Q1 (ends in 2 days)"
    assert data["gpa"] == pytest.approx(3.15)


# === persistence ===


def test_save_and_load(sample_grades, tmp_path):
    file_path = tmp_path / "nested" / "grades.json"

    response = sample_grades.save(str(file_path))
    assert response.success
    assert response.data["path"] == str(file_path)
    assert file_path.exists()

    response = Grades.load(str(file_path))
    assert response.success

    grades = response.data["grades"]
    assert [c.name for c in grades.courses] == ["AP Chemistry", "World History"]
    assert grades.courses[0].grade.raw == 88.0
    assert grades.courses[0].is_weighted
    assert grades.gpa == pytest.approx(3.15)
    assert grades.periods[0].label == "Q1 (ends in 2 days)"


def test_load_missing_file(tmp_path):
    response = Grades.load(str(tmp_path / "missing.json"))

    assert not response.success
    assert response.error is ErrorCode.NOT_FOUND
    assert response.status_code == 404


def test_load_malformed_json(tmp_path):
    file_path = tmp_path / "grades.json"
    file_path.write_text("{not json")

    response = Grades.load(str(file_path))

    assert not response.success
    assert response.error is ErrorCode.INVALID_INPUT


def test_load_missing_field(tmp_path):
    file_path = tmp_path / "grades.json"
    file_path.write_text(json.dumps({"courses": []}))

    response = Grades.load(str(file_path))

    assert not response.success
    assert response.error is ErrorCode.INVALID_INPUT


def test_load_invalid_field_value(sample_grades, tmp_path):
    data = sample_grades.to_dict()
    data["courses"][0]["categories"][0]["weight"] = 40

    file_path = tmp_path / "grades.json"
    file_path.write_text(json.dumps(data))

    response = Grades.load(str(file_path))

    assert not response.success
    assert response.error is ErrorCode.INVALID_FIELD_VALUE
