"""tt (time tracker) mode: timestamps, state markers, priorities, remarks."""

import logging
import re
from collections.abc import Sequence
from datetime import date, datetime
from functools import partial
from typing import Any

from task_parser.errors import ParseError
from task_parser.grammars.dates import as_date, format_date
from task_parser.grammars.duration import format_duration, parse_duration
from task_parser.grammars.time_window import parse_time
from task_parser.models import Token, TokenType, TTParsedTask
from task_parser.tokenizer import find_token, find_tokens, parse_token

logger = logging.getLogger(__name__)

_TIMESTAMP_RE = re.compile(
    r"(?:(?P<date>[0-9]{4}-[0-9]{2}-[0-9]{2})\s+)?"
    r"(?P<time>[0-9]{1,2}:[0-9]{2})(?::(?P<second>[0-9]{2}))?"
)

# Checked in this order, the tokenizer only ever emits one of them
_STATE_MARKERS = (
    (TokenType.END_MARKER, "end"),
    (TokenType.PAUSE_MARKER, "pause"),
    (TokenType.ABANDON_MARKER, "abandon"),
)


def parse_timestamp(value: str, reference: date | datetime) -> datetime:
    """Parse a timestamp into a datetime.

    Supports:
    - HH:MM
    - HH:MM:SS
    - YYYY-MM-DD HH:MM
    - YYYY-MM-DD HH:MM:SS

    Time-only values are placed on the reference date.

    Raises:
        ParseError: If the format is invalid or a component is out of range
    """
    match = _TIMESTAMP_RE.fullmatch(value.strip())
    if not match:
        raise ParseError(f"Invalid timestamp format: {value}")

    day = as_date(reference)
    if match.group("date"):
        try:
            day = date.fromisoformat(match.group("date"))
        except ValueError as e:
            raise ParseError(f"Invalid date: {match.group('date')}") from e

    hour, minute = parse_time(match.group("time"))

    second = int(match.group("second") or 0)
    if second > 59:
        raise ParseError(f"Invalid second: {second} (must be 0-59)")

    return datetime(day.year, day.month, day.day, hour, minute, second)


def format_timestamp(value: datetime, reference: date | datetime | None = None) -> str:
    """Format a timestamp as HH:MM[:SS], with its date when not on the reference day."""
    text = f"{value.hour:02d}:{value.minute:02d}"
    if value.second:
        text += f":{value.second:02d}"
    if reference is not None and value.date() != as_date(reference):
        text = f"{format_date(value)} {text}"
    return text


def parse_tt_tokens(tokens: Sequence[Token], raw: str, reference: date | datetime) -> TTParsedTask:
    """Build a TTParsedTask from tokens.

    The title may be empty, e.g. for a bare "17:00 @end".

    Args:
        tokens: Tokens from the tt tokenizer
        raw: Trimmed input
        reference: Date used for time-only timestamps

    Returns:
        TTParsedTask
    """
    fields: dict[str, Any] = {}

    timestamp = find_token(tokens, TokenType.TIMESTAMP)
    if timestamp:
        fields["timestamp"] = parse_token(timestamp, partial(parse_timestamp, reference=reference))

    for token_type, state in _STATE_MARKERS:
        if find_token(tokens, token_type):
            fields["state"] = state
            break

    resume_marker = find_token(tokens, TokenType.RESUME_MARKER)
    if resume_marker:
        fields["resume_marker"] = resume_marker.value

    state_suffix = find_token(tokens, TokenType.STATE_SUFFIX)
    if state_suffix:
        fields["state_suffix"] = state_suffix.value

    project = find_token(tokens, TokenType.PROJECT)
    if project:
        fields["project"] = project.value

    duration = find_token(tokens, TokenType.DURATION)
    if duration:
        fields["duration"] = parse_token(duration, parse_duration)

    explicit_duration = find_token(tokens, TokenType.EXPLICIT_DURATION)
    if explicit_duration:
        fields["explicit_duration"] = parse_token(explicit_duration, parse_duration)

    priority = find_token(tokens, TokenType.PRIORITY)
    if priority:
        fields["priority"] = int(priority.value)

    remark = find_token(tokens, TokenType.REMARK)
    if remark:
        fields["remark"] = remark.value

    title = " ".join(token.value for token in find_tokens(tokens, TokenType.DESCRIPTION)).strip()
    tags = tuple(token.value for token in find_tokens(tokens, TokenType.TAG))

    logger.debug(f"[TT] Parsed fields {sorted(fields)} from {raw!r}")
    return TTParsedTask(title=title, raw=raw, tags=tags, **fields)


def format_tt_task(task: TTParsedTask, reference: date | datetime | None = None) -> str:
    """Format a TTParsedTask back to its canonical string.

    Args:
        task: Record to format
        reference: When given, timestamps on another day keep their date
    """
    parts: list[str] = []

    if task.timestamp:
        parts.append(format_timestamp(task.timestamp, reference))

    # Single marker slot after the timestamp
    if task.resume_marker:
        parts.append(f"@{task.resume_marker}")
    elif task.state:
        parts.append(f"@{task.state}")

    if task.title:
        parts.append(task.title)

    if task.project:
        parts.append(f"@{task.project}")

    parts.extend(f"+{tag}" for tag in task.tags)

    if task.duration is not None:
        parts.append(f"~{format_duration(task.duration)}")

    if task.explicit_duration is not None:
        parts.append(f"({format_duration(task.explicit_duration)})")

    if task.priority is not None:
        parts.append(f"^{task.priority}")

    if task.state_suffix:
        parts.append(f"->{task.state_suffix}")

    # Remark runs to the end of the line, so it must come last
    if task.remark:
        parts.append(f"# {task.remark}")

    return " ".join(parts)
