# cli/model_formatters.py

# anything that renders grade records for the terminal
from textwrap import dedent

import core.formatters as formatters
from models.assignment import Assignment
from models.category import Category
from models.course import Course
from models.grades import Grades

# === course formatters ===


def format_course_oneline(course: Course) -> str:
    weighted = " [WEIGHTED]" if course.is_weighted else ""
    grade = formatters.format_grade(course.grade.raw, course.grade.letter)

    return f"P{course.period} {course.name:<30} | {grade}{weighted}"


def format_course_multiline(course: Course) -> str:
    return dedent(
        f"""\
        {course.name}:
        ... Period: {course.period}
        ... Room: {course.room or '[NO ROOM]'}
        ... Teacher: {course.teacher_name} <{course.teacher_email}>
        ... Grade: {formatters.format_grade(course.grade.raw, course.grade.letter)}
        ... Weighted: {'Yes' if course.is_weighted else 'No'}"""
    )


# === category formatters ===


def format_category_oneline(category: Category) -> str:
    grade = formatters.format_grade(category.grade.raw, category.grade.letter)
    points = formatters.format_points(category.points_earned, category.points_possible)

    return f"{category.name:<20} | {formatters.format_weight(category.weight)} | {points:<15} | {grade}"


# === assignment formatters ===


def format_assignment_oneline(assignment: Assignment) -> str:
    grade = formatters.format_grade(assignment.grade.raw, assignment.grade.letter)
    points = formatters.format_points(
        assignment.points_earned, assignment.points_possible
    )

    return f"{assignment.name:<30} | {assignment.category_name:<15} | {points:<15} | {grade}"


def format_assignment_multiline(assignment: Assignment) -> str:
    return dedent(
        f"""\
        Assignment:
        ... Name: {assignment.name}
        ... Category: {assignment.category_name}
        ... Points: {formatters.format_points(assignment.points_earned, assignment.points_possible)}
        ... Grade: {formatters.format_grade(assignment.grade.raw, assignment.grade.letter)}
        ... Due: {formatters.format_date(assignment.due_date)}
        ... Assigned: {formatters.format_date(assignment.assigned_date)}"""
    )


# === summary formatters ===


def format_gpa_summary(grades: Grades) -> str:
    return dedent(
        f"""\
        Reporting period: {grades.period.label}
        ... GPA: {formatters.format_number(grades.gpa)}
        ... Weighted GPA: {formatters.format_number(grades.wgpa)}"""
    )


def format_allocation(points: list[int], grade: float, course: Course) -> str:
    additions = ", ".join(
        f"{category.name} +{added}"
        for category, added in zip(course.categories, points)
        if added
    )

    return f"{additions or '[NO ADDITIONAL POINTS]'} -> {grade:.2f} %"
