"""Time window grammar: HH:MM-HH:MM, including windows that cross midnight."""

import re
from datetime import time

from task_parser.errors import ParseError
from task_parser.models import TimeWindow

_TIME_RE = re.compile(r"([0-9]{1,2}):([0-9]{2})")
_WINDOW_RE = re.compile(r"([0-9]{1,2}:[0-9]{2})-([0-9]{1,2}:[0-9]{2})")


def parse_time(value: str) -> tuple[int, int]:
    """Parse a time string (H:MM or HH:MM) into hour and minute.

    Raises:
        ParseError: If the format is invalid or a component is out of range
    """
    match = _TIME_RE.fullmatch(value.strip())
    if not match:
        raise ParseError(f"Invalid time format: {value} (expected HH:MM)")

    hour = int(match.group(1))
    minute = int(match.group(2))

    if hour > 23:
        raise ParseError(f"Invalid hour: {hour} (must be 0-23)")
    if minute > 59:
        raise ParseError(f"Invalid minute: {minute} (must be 0-59)")

    return hour, minute


def normalize_time(value: str) -> str:
    """Validate a time and return it as zero-padded HH:MM."""
    hour, minute = parse_time(value)
    return f"{hour:02d}:{minute:02d}"


def parse_time_window(value: str) -> TimeWindow:
    """Parse "HH:MM-HH:MM" into a TimeWindow.

    Windows where the end is not after the start cross midnight
    (e.g. 18:00-08:00) and are valid.

    Raises:
        ParseError: If the format is invalid or either time is out of range
    """
    match = _WINDOW_RE.fullmatch(value.strip())
    if not match:
        raise ParseError(f"Invalid time window format: {value} (expected HH:MM-HH:MM)")

    return TimeWindow(start=normalize_time(match.group(1)), end=normalize_time(match.group(2)))


def format_time_window(window: TimeWindow) -> str:
    """Format a TimeWindow as "HH:MM-HH:MM"."""
    return f"{window.start}-{window.end}"


def _minute_of_day(value: str | time) -> int:
    if isinstance(value, time):
        return value.hour * 60 + value.minute
    hour, minute = parse_time(value)
    return hour * 60 + minute


def crosses_midnight(window: TimeWindow) -> bool:
    """Check if a window crosses midnight.

    Identical start and end count as crossing (a full day).
    """
    return _minute_of_day(window.end) <= _minute_of_day(window.start)


def is_time_in_window(value: str | time, window: TimeWindow) -> bool:
    """Check if a time falls inside a window (start inclusive, end exclusive)."""
    minutes = _minute_of_day(value)
    start = _minute_of_day(window.start)
    end = _minute_of_day(window.end)

    if crosses_midnight(window):
        return minutes >= start or minutes < end
    return start <= minutes < end
