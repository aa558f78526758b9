# cli/menu_helpers.py

"""
Helper functions for CLI menus and user interaction in the grade dashboard.

This module provides utilities for:
- Displaying interactive menus and result lists
- Prompting for and validating user input
- Selecting courses, categories, and assignments by their position
- Displaying standard system messages and error feedback

These functions are shared across all menu modules to maintain consistent behavior and reduce duplication.
"""

from __future__ import annotations

import math
from enum import Enum
from typing import Any, Callable, Sequence

import core.formatters as formatters
from core.grading import to_number
from core.response import Response


class MenuSignal(Enum):
    CANCEL = "CANCEL"
    EXIT = "EXIT"


# === display methods ===


def display_menu(
    title: str,
    options: list[tuple[str, Callable[..., Any]]],
    zero_option: str = "Return",
) -> MenuSignal | Callable[..., Any]:
    """
    Displays a numbered CLI menu and returns the selected action.

    Args:
        title (str): The heading displayed above the menu options.
        options (list[tuple[str, Callable[..., Any]]]): A list of (label, action) pairs to present.
        zero_option (str, optional): The label for the "cancel" or "exit" option. Defaults to "Return".

    Returns:
        MenuSignal.EXIT if the user selects the zero option.
        Callable[..., Any]: The function associated with the selected menu item.

    Notes:
        - Menu selection is repeated until a valid choice is made.
        - User input is matched by menu index, not by label.
    """
    while True:
        print(f"\n{title}")

        for i, (label, _) in enumerate(options, 1):
            print(f"{i}. {label}")

        print(f"0. {zero_option}")

        choice = prompt_user_input("\nSelect an option: ")

        if choice == "0":
            return MenuSignal.EXIT

        try:
            # casts choice to int and adjusts for zero-index, retrieves action from tuple
            return options[int(choice) - 1][1]

        except (ValueError, IndexError):
            print("Invalid selection. Please try again.")


def display_results(
    results: Sequence[Any],
    show_index: bool = False,
    formatter: Callable[[Any], str] = lambda x: str(x),
) -> None:
    for i, result in enumerate(results, 1):
        prefix = f"{i:>2}. " if show_index else ""
        print(f"{prefix}{formatter(result)}")


def run_menu_loop(
    title: str,
    options: list[tuple[str, Callable[[], Any]]],
    zero_option: str,
) -> None:
    """
    Dispatches menu selections until the user picks the zero option.

    Raises:
        RuntimeError: If the menu response is unrecognized.
    """
    while True:
        menu_response = display_menu(title, options, zero_option)

        if menu_response is MenuSignal.EXIT:
            break

        elif callable(menu_response):
            menu_response()

        else:
            raise RuntimeError(f"Unexpected MenuResponse received: {menu_response}")


# === prompt user input methods ===


# Prompt Helpers
#
# Conventions:
# - `prompt_user_input()` is the base function, used by all others to standardize the UI format.
# - Blank input is the cancel signal for every `_or_cancel` variant.
# - `confirm_action()` loops until the user enters a valid yes/no response.


def confirm_action(prompt: str) -> bool:
    while True:
        choice = prompt_user_input(f"{prompt} (y/n): ").lower()

        if choice == "y" or choice == "yes":
            return True

        elif choice == "n" or choice == "no":
            return False

        else:
            print("Invalid selection. Please try again.")


def prompt_user_input(prompt: str) -> str:
    return input(f"\n{prompt}\n  >> ").strip()


def prompt_user_input_or_cancel(prompt: str) -> str | MenuSignal:
    response = prompt_user_input(prompt)
    return MenuSignal.CANCEL if response == "" else response


def prompt_number_or_cancel(prompt: str) -> float | MenuSignal:
    while True:
        response = prompt_user_input_or_cancel(prompt)

        if response is MenuSignal.CANCEL:
            return response

        number = to_number(response)

        if math.isfinite(number):
            return number

        print("\nInvalid input. Please enter a number.")


def prompt_count_list_or_cancel(prompt: str, length: int) -> list[int] | MenuSignal:
    """
    Prompts for `length` whitespace- or comma-separated non-negative integers.
    """
    while True:
        response = prompt_user_input_or_cancel(prompt)

        if response is MenuSignal.CANCEL:
            return response

        tokens = str(response).replace(",", " ").split()

        try:
            counts = [int(token) for token in tokens]

        except ValueError:
            print("\nInvalid input. Please enter whole numbers only.")
            continue

        if len(counts) != length or any(c < 0 for c in counts):
            print(f"\nPlease enter exactly {length} non-negative whole numbers.")
            continue

        return counts


def prompt_index_from_list(
    list_data: Sequence[Any],
    list_description: str,
    formatter: Callable[[Any], str] = lambda x: str(x),
) -> int | None:
    """
    Prompts the user to select an item from a list and returns its position.

    Args:
        list_data (Sequence[Any]): The items to choose from, displayed in their stored order.
        list_description (str): A short description used in prompts and headings (e.g. "assignments").
        formatter (Callable[[Any], str], optional): Converts each item to a display string.

    Returns:
        int: The zero-based position of the selected item.
        None: If the list is empty or the user cancels with "0".

    Notes:
        - Items are never sorted; the returned position is the position the model operations expect.
    """
    if not list_data:
        print(f"\nThere are no {list_description.lower()}.")
        return None

    while True:
        print(f"\n{formatters.format_banner_text(list_description)}")

        display_results(list_data, True, formatter)

        choice = prompt_user_input("Select an option (0 to cancel):")

        if choice == "0":
            return None

        try:
            index = int(choice) - 1

            if not 0 <= index < len(list_data):
                raise IndexError(index)

            return index

        except (ValueError, IndexError):
            print("\nInvalid selection. Please try again.")


# === system messages ===


def returning_without_changes() -> None:
    print("\nReturning without changes.")


def returning_to(destination: str) -> None:
    print(f"\nReturning to {destination}.")


def display_response_failure(response: Response) -> None:
    """
    Displays a formatted error message based on a failed `Response`.

    Notes:
        - Does nothing if the response was successful.
        - Enum error codes are printed by name; string errors are printed as-is.
    """
    if response.success:
        return

    error_label = (
        response.error.name if isinstance(response.error, Enum) else str(response.error)
    )

    print(f"\n[ERROR: {error_label}] {response.detail}")
