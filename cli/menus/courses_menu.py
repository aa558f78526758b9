# cli/menus/courses_menu.py

"""
Courses menu for the grade dashboard CLI.

Lists every normalized course with its grade, shows the GPA summary, opens a single course, and
saves the edited model to disk.
"""

import cli.menu_helpers as helpers
import cli.model_formatters as model_formatters
import core.formatters as formatters
from cli.menu_helpers import MenuSignal
from cli.menus import course_menu
from core.config import get_config
from models.grades import Grades


def run(grades: Grades) -> None:
    """
    Top-level loop with dispatch for the Courses menu.

    Args:
        grades (Grades): The active `Grades` model.
    """
    title = formatters.format_banner_text(f"Grades - {grades.period.name}")
    options = [
        ("View GPA Summary", lambda: view_summary(grades)),
        ("Open a Course", lambda: open_course(grades)),
        ("Save Grades", lambda: save_grades(grades)),
    ]

    helpers.run_menu_loop(title, options, "Return to Start Menu")

    helpers.returning_to("Start Menu")


def view_summary(grades: Grades) -> None:
    print(f"\n{model_formatters.format_gpa_summary(grades)}")

    banner = formatters.format_banner_text("Courses")
    print(f"\n{banner}")

    helpers.display_results(grades.courses, False, model_formatters.format_course_oneline)

    if grades.periods:
        print("\nAvailable reporting periods:")
        for period in grades.periods:
            print(f"... {period.label}")


def open_course(grades: Grades) -> None:
    course_index = helpers.prompt_index_from_list(
        grades.courses, "Courses", model_formatters.format_course_oneline
    )

    if course_index is None:
        return

    course_menu.run(grades, course_index)


def save_grades(grades: Grades) -> None:
    default_path = get_config().SAVE_PATH
    file_path = helpers.prompt_user_input_or_cancel(
        f"Enter a file to save to (leave blank to use {default_path}):"
    )

    if file_path is MenuSignal.CANCEL:
        file_path = default_path

    grades_response = grades.save(str(file_path))

    if not grades_response.success:
        helpers.display_response_failure(grades_response)
        return

    print(f"\n{grades_response.detail}")
