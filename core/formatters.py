# core/formatters.py

# all pure utilities & date/datetime helpers
# must never import from models!

from __future__ import annotations

import datetime
import math
import re
from html.parser import HTMLParser
from typing import Any

PARENS_PATTERN = re.compile(r"\(([^)]+)\)")

# === generic text formatters ===


def format_banner_text(title: str, width: int = 40) -> str:
    line = "=" * width
    centered_title = f"{title:^{width}}"

    return f"{line}\n{centered_title}\n{line}"


def strip_parens(text: str) -> str:
    """
    Removes every parenthesized fragment, e.g. "Chemistry (AP) (S1)" -> "Chemistry".
    """
    return PARENS_PATTERN.sub("", text).strip()


class _TextCollector(HTMLParser):
    """
    Keeps character data and drops markup. Only `<` followed by a tag name starts a tag, so
    comparison characters such as "< 70" stay in the text.
    """

    def __init__(self):
        super().__init__(convert_charrefs=True)
        self.chunks: list[str] = []

    def handle_data(self, data: str) -> None:
        self.chunks.append(data)


def extract_text_content(markup: str) -> str:
    parser = _TextCollector()
    parser.feed(markup)
    parser.close()

    return "".join(parser.chunks)


def decode_assignment_name(name: str) -> str:
    """
    Extracts display text from an assignment name as delivered by the gradebook.

    The gradebook escapes assignment names twice, so text extraction runs twice:
    "&amp;lt;b&amp;gt;Quiz" -> "&lt;b&gt;Quiz" -> "<b>Quiz".
    """
    return extract_text_content(extract_text_content(name))


# === grade formatters ===


def format_number(value: float, places: int = 2) -> str:
    if value is None or math.isnan(value):
        return "--"

    text = f"{value:.{places}f}"

    return text.rstrip("0").rstrip(".") if "." in text else text


def format_grade(raw: float, letter: str) -> str:
    if math.isnan(raw):
        return letter

    return f"{letter} ({raw:.2f} %)"


def format_points(earned: float, possible: float) -> str:
    return f"{format_number(earned)} / {format_number(possible)}"


def format_weight(weight: float) -> str:
    return f"{weight * 100:>5.1f} %"


# === date formatters ===


def parse_date(value: Any) -> datetime.date | None:
    """
    Coerces a date, datetime, or ISO-8601 string into a `datetime.date`.

    Returns:
        The date, or None if the value is empty or cannot be parsed.
    """
    if isinstance(value, datetime.datetime):
        return value.date()

    if isinstance(value, datetime.date):
        return value

    if not isinstance(value, str) or not value.strip():
        return None

    text = value.strip()

    # fromisoformat() rejects a trailing "Z" before Python 3.11
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"

    try:
        return datetime.datetime.fromisoformat(text).date()

    except ValueError:
        pass

    try:
        return datetime.datetime.strptime(text, "%m/%d/%Y").date()

    except ValueError:
        return None


def format_date(value: datetime.date | None) -> str:
    return value.strftime("%Y-%m-%d") if value else "[NO DATE]"


def _plural_days(days: int) -> str:
    return f"{days} day{'s' if days > 1 else ''}"


def format_relative_period(
    start: datetime.date,
    end: datetime.date,
    today: datetime.date | None = None,
) -> str:
    """
    Describes where a reporting period sits relative to today.

    Args:
        start (datetime.date): First day of the period.
        end (datetime.date): Last day of the period.
        today (datetime.date | None): Reference date. Defaults to `datetime.date.today()`.

    Returns:
        One of "ends in N days", "starts in N days", "ended N days ago", "ends today",
        or "starts today".
    """
    today = today or datetime.date.today()

    days_left = (end - today).days
    days_to_start = (start - today).days
    days_ago = (today - end).days

    if days_left > 0 and days_to_start < 0:
        return f"ends in {_plural_days(days_left)}"

    elif days_to_start > 0:
        return f"starts in {_plural_days(days_to_start)}"

    elif days_ago > 0:
        return f"ended {_plural_days(days_ago)} ago"

    elif days_ago == 0:
        return "ends today"

    return "starts today"


def format_reporting_period_name(
    name: str,
    start: datetime.date | None,
    end: datetime.date | None,
    today: datetime.date | None = None,
) -> str:
    if start is None or end is None:
        return name

    return f"{name} ({format_relative_period(start, end, today)})"
