"""Data model for tokens and parsed tasks."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Literal


class ParserMode(str, Enum):
    """Parser mode - selects which syntax extensions are active."""

    CHURN = "churn"  # task manager: dates, recurrence, buckets, windows, dependencies
    TT = "tt"  # time tracker: timestamps, state markers, priorities, remarks


class TokenType(str, Enum):
    """Token kinds produced by the tokenizer."""

    # Shared
    DESCRIPTION = "description"
    PROJECT = "project"
    TAG = "tag"
    DURATION = "duration"

    # churn only
    BUCKET = "bucket"
    WINDOW = "window"
    DEPENDENCIES = "dependencies"

    # tt only
    TIMESTAMP = "timestamp"
    PRIORITY = "priority"
    EXPLICIT_DURATION = "explicit_duration"
    REMARK = "remark"
    RESUME_MARKER = "resume_marker"
    END_MARKER = "end_marker"
    PAUSE_MARKER = "pause_marker"
    ABANDON_MARKER = "abandon_marker"
    STATE_SUFFIX = "state_suffix"


@dataclass(frozen=True)
class Token:
    """Classified substring of the trimmed input."""

    type: TokenType
    value: str
    position: int  # Offset of the matched text in the trimmed input


class RecurrenceMode(str, Enum):
    """Calendar-anchored or completion-anchored recurrence."""

    CALENDAR = "calendar"
    COMPLETION = "completion"


class RecurrenceType(str, Enum):
    """Recurrence type."""

    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    INTERVAL = "interval"


RecurrenceUnit = Literal["days", "weeks", "months"]
TaskState = Literal["end", "pause", "abandon"]
StateSuffix = Literal["paused", "completed", "abandoned"]


@dataclass(frozen=True)
class RecurrencePattern:
    """Recurrence pattern.

    ``anchor`` is only set for calendar mode, ``interval``/``unit`` only for
    interval patterns. ``day_of_week`` (single day, "every monday") and
    ``days_of_week`` (explicit set, "Mon,Wed,Fri") are mutually exclusive.
    """

    mode: RecurrenceMode
    type: RecurrenceType
    interval: int | None = None
    unit: RecurrenceUnit | None = None
    day_of_week: int | None = None  # 0-6, Sunday = 0
    days_of_week: tuple[int, ...] | None = None  # Sorted, unique
    time_of_day: str | None = None  # HH:MM
    anchor: date | None = None


@dataclass(frozen=True)
class TimeWindow:
    """Time window, crossing midnight when end <= start."""

    start: str  # HH:MM
    end: str  # HH:MM


@dataclass(frozen=True)
class ParsedTask:
    """Fields shared by both modes."""

    title: str
    raw: str = ""
    project: str | None = None
    tags: tuple[str, ...] = ()
    duration: int | None = None  # minutes


@dataclass(frozen=True)
class ChurnParsedTask(ParsedTask):
    """Task manager record."""

    date: date | None = None
    bucket: str | None = None
    recurrence: RecurrencePattern | None = None
    window: TimeWindow | None = None
    dependencies: tuple[int, ...] | None = None


@dataclass(frozen=True)
class TTParsedTask(ParsedTask):
    """Time tracker record."""

    timestamp: datetime | None = None
    priority: int | None = None  # 1-9
    explicit_duration: int | None = None  # minutes
    remark: str | None = None
    state: TaskState | None = None
    state_suffix: StateSuffix | None = None
    resume_marker: str | None = None  # "prev", "resume" or a number
