# cli/menus/what_if_menu.py

"""
What-if projection prompt for the grade dashboard CLI.

Asks for a target course percentage and the number of one-point assignment slots remaining in
each category, runs the projector, and lists the allocations that reach the target.
"""

from typing import cast

import cli.menu_helpers as helpers
import cli.model_formatters as model_formatters
import core.formatters as formatters
from cli.menu_helpers import MenuSignal
from core.projector import minimal_allocations, project_course
from models.grades import Grades


def run(grades: Grades, course_index: int) -> None:
    """
    Runs one what-if projection for a course.

    Args:
        grades (Grades): The active `Grades` model.
        course_index (int): Position of the course in `grades.courses`.

    Notes:
        - The course is never modified.
        - By default only allocations that no other allocation beats in every category are shown.
    """
    course = grades.courses[course_index]

    if not course.categories:
        print("\nThis course has no weighted categories to project.")
        return

    print(f"\n{model_formatters.format_course_oneline(course)}")
    for category in course.categories:
        print(f"... {model_formatters.format_category_oneline(category)}")

    desired = helpers.prompt_number_or_cancel(
        "Enter the desired course percentage (leave blank to cancel):"
    )

    if desired is MenuSignal.CANCEL:
        helpers.returning_without_changes()
        return
    desired = cast(float, desired)

    names = ", ".join(c.name for c in course.categories)
    remaining = helpers.prompt_count_list_or_cancel(
        f"Enter the remaining points for each category ({names}), separated by spaces:",
        len(course.categories),
    )

    if remaining is MenuSignal.CANCEL:
        helpers.returning_without_changes()
        return
    remaining = cast(list[int], remaining)

    projection_response = project_course(course, desired, remaining)

    if not projection_response.success:
        helpers.display_response_failure(projection_response)
        return

    allocations = projection_response.data["allocations"]

    print(f"\n{projection_response.detail}")

    if not allocations:
        print(f"\n{desired:.2f} % is out of reach with the remaining points.")
        return

    show_all = helpers.confirm_action(
        "Show every allocation (n shows only the smallest ones)?"
    )
    shown = allocations if show_all else minimal_allocations(allocations)

    banner = formatters.format_banner_text("What-If Allocations")
    print(f"\n{banner}")

    helpers.display_results(
        shown,
        True,
        lambda allocation: model_formatters.format_allocation(
            allocation[0], allocation[1], course
        ),
    )
