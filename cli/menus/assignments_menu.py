# cli/menus/assignments_menu.py

"""
Assignment editor for the grade dashboard CLI.

Lets the user try out hypothetical changes to one course: add a placeholder assignment, delete an
assignment, edit points earned or possible, and move an assignment to another category. Every
change is delegated to the `Course` editing operations, which recalculate the affected category
and course grades, after which the GPA values are refreshed.
"""

from typing import cast

import cli.menu_helpers as helpers
import cli.model_formatters as model_formatters
import core.formatters as formatters
from cli.menu_helpers import MenuSignal
from core.response import Response
from models.grades import Grades


def run(grades: Grades, course_index: int) -> None:
    """
    Top-level loop with dispatch for the Edit Assignments menu.

    Args:
        grades (Grades): The active `Grades` model.
        course_index (int): Position of the course in `grades.courses`.
    """
    title = formatters.format_banner_text("Edit Assignments")
    options = [
        ("View Assignments", lambda: view_assignments(grades, course_index)),
        ("Add Assignment", lambda: add_assignment(grades, course_index)),
        ("Delete Assignment", lambda: delete_assignment(grades, course_index)),
        ("Edit Points Earned", lambda: edit_points(grades, course_index, "earned")),
        ("Edit Points Possible", lambda: edit_points(grades, course_index, "possible")),
        ("Change Category", lambda: change_category(grades, course_index)),
    ]

    helpers.run_menu_loop(title, options, "Return to Course menu")

    helpers.returning_to("Course menu")


def view_assignments(grades: Grades, course_index: int) -> None:
    course = grades.courses[course_index]

    if not course.assignments:
        print("\nThis course has no assignments.")
        return

    banner = formatters.format_banner_text(f"{course.name} Assignments")
    print(f"\n{banner}")

    helpers.display_results(
        course.assignments, True, model_formatters.format_assignment_oneline
    )


def add_assignment(grades: Grades, course_index: int) -> None:
    course = grades.courses[course_index]
    course_response = course.add_assignment()

    print(f"\n{course_response.detail}")
    print(model_formatters.format_assignment_multiline(course.assignments[0]))


def delete_assignment(grades: Grades, course_index: int) -> None:
    course = grades.courses[course_index]
    assignment_index = helpers.prompt_index_from_list(
        course.assignments, "Assignments", model_formatters.format_assignment_oneline
    )

    if assignment_index is None:
        helpers.returning_without_changes()
        return

    assignment = course.assignments[assignment_index]

    if not helpers.confirm_action(f"Delete {assignment.name}?"):
        helpers.returning_without_changes()
        return

    report_course_change(grades, course_index, course.remove_assignment(assignment_index))


def edit_points(grades: Grades, course_index: int, field: str) -> None:
    course = grades.courses[course_index]
    assignment_index = helpers.prompt_index_from_list(
        course.assignments, "Assignments", model_formatters.format_assignment_oneline
    )

    if assignment_index is None:
        helpers.returning_without_changes()
        return

    value = helpers.prompt_number_or_cancel(
        f"Enter the new points {field} (leave blank to cancel):"
    )

    if value is MenuSignal.CANCEL:
        helpers.returning_without_changes()
        return
    value = cast(float, value)

    report_course_change(
        grades,
        course_index,
        course.update_assignment_points(assignment_index, field, value),
    )


def change_category(grades: Grades, course_index: int) -> None:
    course = grades.courses[course_index]
    assignment_index = helpers.prompt_index_from_list(
        course.assignments, "Assignments", model_formatters.format_assignment_oneline
    )

    if assignment_index is None:
        helpers.returning_without_changes()
        return

    category_index = helpers.prompt_index_from_list(
        course.categories, "Categories", model_formatters.format_category_oneline
    )

    if category_index is None:
        helpers.returning_without_changes()
        return

    report_course_change(
        grades,
        course_index,
        course.update_assignment_category(assignment_index, category_index),
    )


def report_course_change(
    grades: Grades, course_index: int, course_response: Response
) -> None:
    """
    Displays the outcome of a course edit and refreshes GPA values after a successful one.
    """
    if not course_response.success:
        helpers.display_response_failure(course_response)
        return

    grades.calculate_gpa()
    course = grades.courses[course_index]

    print(f"\n{course_response.detail}")
    print(
        f"... {course.name} is now {formatters.format_grade(course.grade.raw, course.grade.letter)}"
    )
