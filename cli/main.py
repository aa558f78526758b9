# cli/main.py

"""
Start Menu for the grade dashboard CLI.

Provides functions for loading a raw gradebook snapshot or a previously saved `Grades` model.
"""

from __future__ import annotations

import os
from typing import Callable

import cli.menu_helpers as helpers
import core.formatters as formatters
from cli.menu_helpers import MenuSignal
from cli.menus import courses_menu
from core.config import configure_logging
from core.normalizer import load_snapshot
from core.response import Response
from models.grades import Grades


def run_cli() -> None:
    """
    Top-level loop with dispatch for the Start menu.

    Raises:
        RuntimeError: If the menu response is unrecognized.
    """
    configure_logging()

    title = formatters.format_banner_text("GRADE DASHBOARD")
    options = [
        ("Load a gradebook snapshot", load_gradebook_snapshot),
        ("Load saved grades", load_saved_grades),
    ]
    zero_option = "Exit Program"

    while True:
        menu_response = helpers.display_menu(title, options, zero_option)

        if menu_response is MenuSignal.EXIT:
            exit_program()

        elif callable(menu_response):
            grades = menu_response()

            if grades is not None:
                courses_menu.run(grades)

        else:
            raise RuntimeError(f"Unexpected MenuResponse received: {menu_response}")


def load_gradebook_snapshot() -> Grades | None:
    """
    Prompts for a raw gradebook snapshot (JSON) and normalizes it.

    Returns:
        Grades: The normalized model if loading succeeds.
        None: If the user cancels.
    """
    return _load_from_prompt(
        "Enter path to a gradebook snapshot file (leave blank to cancel):",
        load_snapshot,
    )


def load_saved_grades() -> Grades | None:
    """
    Prompts for a file previously written by "Save Grades".

    Returns:
        Grades: The restored model if loading succeeds.
        None: If the user cancels.
    """
    return _load_from_prompt(
        "Enter path to a saved grades file (leave blank to cancel):",
        Grades.load,
    )


def _load_from_prompt(
    prompt: str, loader: Callable[[str], Response]
) -> Grades | None:
    while True:
        file_path = helpers.prompt_user_input_or_cancel(prompt)

        if file_path is MenuSignal.CANCEL:
            return None

        file_path = os.path.abspath(os.path.expanduser(str(file_path)))

        if not os.path.isfile(file_path):
            print(f"\nFile not found: {file_path}. Please try again.")
            continue

        print("\nLoading grades ...")

        loader_response = loader(file_path)

        if not loader_response.success:
            helpers.display_response_failure(loader_response)
            continue

        print("... Grades loaded successfully.")

        return loader_response.data["grades"]


def exit_program():
    """
    Displays an exit banner and terminates the CLI program.

    Raises:
        SystemExit: Always raised to immediately terminate execution.
    """
    exit_banner = formatters.format_banner_text("Exiting Program")
    print(f"\n{exit_banner}\n")

    raise SystemExit


if __name__ == "__main__":
    run_cli()
