# cli/menus/course_menu.py

"""
Course menu for the grade dashboard CLI.

Shows one course's details and categories and links to the assignment editor, the what-if
projector, and the weighted-course toggle.
"""

import cli.menu_helpers as helpers
import cli.model_formatters as model_formatters
import core.formatters as formatters
from cli.menus import assignments_menu, what_if_menu
from models.grades import Grades


def run(grades: Grades, course_index: int) -> None:
    """
    Top-level loop with dispatch for one course.

    Args:
        grades (Grades): The active `Grades` model.
        course_index (int): Position of the course in `grades.courses`.
    """
    course = grades.courses[course_index]
    title = formatters.format_banner_text(course.name)
    options = [
        ("View Course Summary", lambda: view_course(grades, course_index)),
        ("Edit Assignments", lambda: assignments_menu.run(grades, course_index)),
        ("What-If Projection", lambda: what_if_menu.run(grades, course_index)),
        ("Toggle Weighted Course", lambda: toggle_weighting(grades, course_index)),
    ]

    helpers.run_menu_loop(title, options, "Return to Courses menu")

    helpers.returning_to("Courses menu")


def view_course(grades: Grades, course_index: int) -> None:
    course = grades.courses[course_index]

    print(f"\n{model_formatters.format_course_multiline(course)}")

    banner = formatters.format_banner_text("Categories")
    print(f"\n{banner}")

    if not course.categories:
        print("This course has no weighted categories.")

    for category in course.categories:
        print(f"... {model_formatters.format_category_oneline(category)}")


def toggle_weighting(grades: Grades, course_index: int) -> None:
    course = grades.courses[course_index]

    print(
        f"\n{course.name} is currently {'weighted' if course.is_weighted else 'unweighted'}."
    )

    if not helpers.confirm_action(
        f"Mark this course as {'unweighted' if course.is_weighted else 'weighted'}?"
    ):
        helpers.returning_without_changes()
        return

    grades_response = grades.update_course_weighting(
        course_index, not course.is_weighted
    )

    if not grades_response.success:
        helpers.display_response_failure(grades_response)
        return

    print(f"\n{grades_response.detail}")
    print(f"\n{model_formatters.format_gpa_summary(grades)}")
