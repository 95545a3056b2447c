"""churn (task manager) mode: dates, recurrence, buckets, windows, dependencies."""

import logging
from collections.abc import Callable, Sequence
from datetime import date, datetime
from typing import Any

from task_parser.errors import ParseError
from task_parser.grammars.dates import format_date, parse_date
from task_parser.grammars.duration import format_duration, parse_duration
from task_parser.grammars.recurrence import format_recurrence, parse_recurrence
from task_parser.grammars.time_window import format_time_window, parse_time_window
from task_parser.models import ChurnParsedTask, Token, TokenType
from task_parser.tokenizer import find_token, find_tokens, parse_token

logger = logging.getLogger(__name__)

# Takes the leading title words, returns (fields, words consumed) or None
LeadingProbe = Callable[[Sequence[str], date | datetime], tuple[dict[str, Any], int] | None]


def _probe_recurrence(
    words: Sequence[str], reference: date | datetime
) -> tuple[dict[str, Any], int] | None:
    match = parse_recurrence(words, reference)
    if match is None:
        return None
    return {"recurrence": match.pattern}, match.tokens_consumed


def _probe_date(
    words: Sequence[str], reference: date | datetime
) -> tuple[dict[str, Any], int] | None:
    if not words:
        return None
    parsed = parse_date(words[0], reference)
    if parsed is None:
        return None
    return {"date": parsed}, 1


LEADING_PROBES: tuple[LeadingProbe, ...] = (_probe_recurrence, _probe_date)


def parse_dependencies(value: str) -> tuple[int, ...]:
    """Parse a comma-separated list of task IDs.

    Raises:
        ParseError: If an ID is not a positive integer
    """
    result: list[int] = []
    for item in value.split(","):
        item = item.strip()
        try:
            task_id = int(item)
        except ValueError:
            task_id = 0
        if task_id <= 0:
            raise ParseError(f"Invalid dependency ID: {item} (must be positive integer)")
        result.append(task_id)

    return tuple(result)


def parse_churn_tokens(
    tokens: Sequence[Token], raw: str, reference: date | datetime
) -> ChurnParsedTask:
    """Build a ChurnParsedTask from tokens.

    The first description token may start with a recurrence pattern or a
    date, which are removed from the title.

    Args:
        tokens: Tokens from the churn tokenizer
        raw: Trimmed input
        reference: Reference date for relative dates and recurrence anchors

    Returns:
        ChurnParsedTask

    Raises:
        ParseError: If a field is invalid or the title is empty
    """
    fields: dict[str, Any] = {}

    descriptions = find_tokens(tokens, TokenType.DESCRIPTION)
    parts = [token.value for token in descriptions]
    if parts:
        words = parts[0].split()
        for probe in LEADING_PROBES:
            try:
                result = probe(words, reference)
            except ParseError as e:
                raise ParseError(e.message, descriptions[0].position) from e
            if result is not None:
                found, consumed = result
                fields.update(found)
                parts[0] = " ".join(words[consumed:])
                break

    title = " ".join(part for part in parts if part).strip()

    # First occurrence wins for single-valued fields
    project = find_token(tokens, TokenType.PROJECT)
    if project:
        fields["project"] = project.value

    duration = find_token(tokens, TokenType.DURATION)
    if duration:
        fields["duration"] = parse_token(duration, parse_duration)

    bucket = find_token(tokens, TokenType.BUCKET)
    if bucket:
        fields["bucket"] = bucket.value

    window = find_token(tokens, TokenType.WINDOW)
    if window:
        fields["window"] = parse_token(window, parse_time_window)

    dependencies = find_token(tokens, TokenType.DEPENDENCIES)
    if dependencies:
        fields["dependencies"] = parse_token(dependencies, parse_dependencies)

    tags = tuple(token.value for token in find_tokens(tokens, TokenType.TAG))

    if not title:
        raise ParseError("Task title is required")

    logger.debug(f"[Churn] Parsed fields {sorted(fields)} from {raw!r}")
    return ChurnParsedTask(title=title, raw=raw, tags=tags, **fields)


def format_churn_task(task: ChurnParsedTask) -> str:
    """Format a ChurnParsedTask back to its canonical string."""
    parts: list[str] = []

    # Recurrence takes the leading slot, a date only without it
    if task.recurrence:
        parts.append(format_recurrence(task.recurrence))
    elif task.date:
        parts.append(format_date(task.date))

    if task.title:
        parts.append(task.title)

    if task.project:
        parts.append(f"@{task.project}")

    parts.extend(f"+{tag}" for tag in task.tags)

    if task.duration is not None:
        parts.append(f"~{format_duration(task.duration)}")

    if task.bucket:
        parts.append(f"${task.bucket}")

    if task.window:
        parts.append(f"window:{format_time_window(task.window)}")

    if task.dependencies:
        parts.append(f"after:{','.join(str(task_id) for task_id in task.dependencies)}")

    return " ".join(parts)
