"""Date grammar: ISO dates, today/tomorrow and weekday names."""

import re
from datetime import date, datetime, timedelta

from task_parser.errors import ParseError

# Sunday = 0
WEEKDAYS = (
    "sunday",
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
)

WEEKDAY_ABBREVIATIONS = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")

_ABBREVIATION_INDEX = {
    "sun": 0,
    "mon": 1,
    "tue": 2,
    "tues": 2,
    "wed": 3,
    "thu": 4,
    "thur": 4,
    "thurs": 4,
    "fri": 5,
    "sat": 6,
}

_ISO_DATE_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


def as_date(value: date | datetime) -> date:
    """Truncate a datetime to its calendar date."""
    if isinstance(value, datetime):
        return value.date()
    return value


def parse_date(value: str, reference: date | datetime) -> date | None:
    """Parse a single word into a calendar date.

    Supported formats:
    - ISO date: "2025-01-10"
    - Relative: "today", "tomorrow"
    - Weekday: "monday", "tuesday", ... (next strictly future occurrence)

    Args:
        value: Word to parse (case-insensitive)
        reference: Reference date for relative forms

    Returns:
        Date, or None if the word is not a date

    Raises:
        ParseError: If the word is an ISO date that does not exist
    """
    text = value.strip()

    if _ISO_DATE_RE.fullmatch(text):
        try:
            return date.fromisoformat(text)
        except ValueError as e:
            raise ParseError(f"Invalid date: {text}") from e

    today = as_date(reference)
    lower = text.lower()

    if lower == "today":
        return today
    if lower == "tomorrow":
        return today + timedelta(days=1)

    day_index = get_weekday_index(lower)
    if day_index is not None:
        return get_next_weekday(day_index, today)

    return None


def get_weekday(value: date) -> int:
    """Get weekday index of a date with Sunday = 0."""
    return (value.weekday() + 1) % 7


def get_next_weekday(target_day: int, from_date: date | datetime) -> date:
    """Get the next occurrence of a weekday, never the starting date itself.

    Args:
        target_day: Day of week (0 = Sunday, 6 = Saturday)
        from_date: Starting date

    Returns:
        Date of next occurrence, 1 to 7 days later
    """
    start = as_date(from_date)
    days_until = target_day - get_weekday(start)
    if days_until <= 0:
        days_until += 7
    return start + timedelta(days=days_until)


def get_weekday_index(name: str) -> int | None:
    """Get weekday index (Sunday = 0) from a full weekday name."""
    lower = name.lower()
    if lower in WEEKDAYS:
        return WEEKDAYS.index(lower)
    return None


def parse_weekday(name: str) -> int | None:
    """Get weekday index from a full name or an abbreviation like "Mon"."""
    index = get_weekday_index(name)
    if index is None:
        index = _ABBREVIATION_INDEX.get(name.lower())
    return index


def get_weekday_name(index: int) -> str:
    """Get lowercase weekday name from index."""
    if not 0 <= index <= 6:
        raise ValueError(f"Invalid weekday index: {index}")
    return WEEKDAYS[index]


def is_weekday(name: str) -> bool:
    """Check if a string is a full weekday name."""
    return get_weekday_index(name) is not None


def format_date(value: date | datetime) -> str:
    """Format a date as YYYY-MM-DD."""
    return as_date(value).isoformat()
