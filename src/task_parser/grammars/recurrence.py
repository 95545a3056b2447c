"""Recurrence grammar.

Parses the leading words of a task title:

- Shorthand: "daily", "weekly", "monthly"
- Work week: "weekdays" (Mon-Fri)
- Weekday set: "Mon,Wed,Fri"
- Calendar mode: "every monday", "every 2w", "every 3d", "every 1m"
- Completion mode: "after 2w", "after 30d", "after 3m"

Each form may be followed by a time of day ("daily 09:00").

An unknown first word is not an error, it is just the start of the title.
Once "every" or "after" has been read, a malformed continuation is.
"""

import logging
import re
from collections.abc import Sequence
from dataclasses import replace
from datetime import date, datetime
from typing import NamedTuple

from task_parser.errors import ParseError
from task_parser.grammars.dates import (
    WEEKDAY_ABBREVIATIONS,
    as_date,
    get_weekday_index,
    get_weekday_name,
    parse_weekday,
)
from task_parser.models import RecurrenceMode, RecurrencePattern, RecurrenceType

logger = logging.getLogger(__name__)

SHORTHAND = {
    "daily": RecurrenceType.DAILY,
    "weekly": RecurrenceType.WEEKLY,
    "monthly": RecurrenceType.MONTHLY,
}

WORK_WEEK = (1, 2, 3, 4, 5)

_UNITS = {"d": "days", "w": "weeks", "m": "months"}
_UNIT_SUFFIXES = {unit: suffix for suffix, unit in _UNITS.items()}

_INTERVAL_RE = re.compile(r"([0-9]+)([dwm])")
_TIME_OF_DAY_RE = re.compile(r"([01]?[0-9]|2[0-3]):([0-5][0-9])")


class RecurrenceMatch(NamedTuple):
    """Parsed pattern and the number of leading words it used."""

    pattern: RecurrencePattern
    tokens_consumed: int


def parse_recurrence(words: Sequence[str], reference: date | datetime) -> RecurrenceMatch | None:
    """Try to parse a recurrence pattern from the beginning of a word list.

    Args:
        words: Leading words of the title
        reference: Anchor date for calendar-mode patterns

    Returns:
        RecurrenceMatch, or None if the first word starts no recurrence

    Raises:
        ParseError: If "every" or "after" is followed by an invalid word
    """
    if not words:
        return None

    anchor = as_date(reference)
    first = words[0].lower()
    consumed = 1

    if first in SHORTHAND:
        pattern = RecurrencePattern(
            mode=RecurrenceMode.CALENDAR, type=SHORTHAND[first], anchor=anchor
        )
    elif first == "weekdays":
        pattern = RecurrencePattern(
            mode=RecurrenceMode.CALENDAR,
            type=RecurrenceType.WEEKLY,
            days_of_week=WORK_WEEK,
            anchor=anchor,
        )
    elif first == "every":
        pattern = _parse_every(words, anchor)
        consumed = 2
    elif first == "after":
        pattern = _parse_after(words)
        consumed = 2
    else:
        days = parse_weekday_set(first)
        if days is None:
            return None
        pattern = RecurrencePattern(
            mode=RecurrenceMode.CALENDAR,
            type=RecurrenceType.WEEKLY,
            days_of_week=days,
            anchor=anchor,
        )

    # Optional time of day: "every monday 16:00"
    if len(words) > consumed:
        time_match = _TIME_OF_DAY_RE.fullmatch(words[consumed])
        if time_match:
            hour, minute = time_match.groups()
            pattern = replace(pattern, time_of_day=f"{int(hour):02d}:{minute}")
            consumed += 1

    logger.debug(f"[Recurrence] Parsed {pattern} from {consumed} word(s)")
    return RecurrenceMatch(pattern, consumed)


def _parse_every(words: Sequence[str], anchor: date) -> RecurrencePattern:
    if len(words) < 2:
        raise ParseError('Expected weekday or interval after "every"')

    second = words[1].lower()

    day_of_week = get_weekday_index(second)
    if day_of_week is not None:
        return RecurrencePattern(
            mode=RecurrenceMode.CALENDAR,
            type=RecurrenceType.WEEKLY,
            day_of_week=day_of_week,
            anchor=anchor,
        )

    interval = _parse_interval("every", second)
    if interval is not None:
        count, unit = interval
        return RecurrencePattern(
            mode=RecurrenceMode.CALENDAR,
            type=RecurrenceType.INTERVAL,
            interval=count,
            unit=unit,
            anchor=anchor,
        )

    raise ParseError(f"Invalid recurrence pattern: every {second}")


def _parse_after(words: Sequence[str]) -> RecurrencePattern:
    if len(words) < 2:
        raise ParseError('Expected interval after "after"')

    second = words[1].lower()

    interval = _parse_interval("after", second)
    if interval is None:
        raise ParseError(f"Invalid recurrence pattern: after {second}")

    count, unit = interval
    return RecurrencePattern(
        mode=RecurrenceMode.COMPLETION,
        type=RecurrenceType.INTERVAL,
        interval=count,
        unit=unit,
    )


def _parse_interval(keyword: str, word: str) -> tuple[int, str] | None:
    """Parse "<N>(d|w|m)" into a count and unit name."""
    match = _INTERVAL_RE.fullmatch(word)
    if not match:
        return None

    count = int(match.group(1))
    if count <= 0:
        raise ParseError(f"Interval must be positive: {keyword} {word}")

    return count, _UNITS[match.group(2)]


def parse_weekday_set(word: str) -> tuple[int, ...] | None:
    """Parse a comma-joined weekday list like "Mon,Wed,Fri".

    Every comma piece must be a weekday, and the list must name at least two
    different days, so "Friday," stays title text.

    Returns:
        Sorted unique day indexes (Sunday = 0), or None if the word is not a
        weekday list
    """
    pieces = word.split(",")
    if len(pieces) < 2:
        return None

    days: set[int] = set()
    for piece in pieces:
        day = parse_weekday(piece)
        if day is None:
            return None
        days.add(day)

    if len(days) < 2:
        return None
    return tuple(sorted(days))


def format_weekday_set(days: Sequence[int]) -> str:
    """Format a weekday set as "weekdays" or a list like "Mon,Wed,Fri"."""
    ordered = tuple(sorted(set(days)))
    if ordered == WORK_WEEK:
        return "weekdays"
    return ",".join(WEEKDAY_ABBREVIATIONS[day] for day in ordered)


def format_recurrence(pattern: RecurrencePattern) -> str:
    """Format a RecurrencePattern back to its leading-word form."""
    time_suffix = f" {pattern.time_of_day}" if pattern.time_of_day else ""

    if pattern.type == RecurrenceType.INTERVAL:
        prefix = "every" if pattern.mode == RecurrenceMode.CALENDAR else "after"
        return f"{prefix} {pattern.interval}{_UNIT_SUFFIXES[pattern.unit]}{time_suffix}"

    if pattern.type == RecurrenceType.WEEKLY:
        if pattern.day_of_week is not None:
            return f"every {get_weekday_name(pattern.day_of_week)}{time_suffix}"
        if pattern.days_of_week:
            return f"{format_weekday_set(pattern.days_of_week)}{time_suffix}"

    return f"{pattern.type.value}{time_suffix}"
