"""TaskParser facade: text to record and back."""

import logging
from datetime import date, datetime
from typing import TypeVar

from task_parser.errors import ParseError
from task_parser.models import ChurnParsedTask, ParsedTask, ParserMode, Token, TTParsedTask
from task_parser.modes.churn import format_churn_task, parse_churn_tokens
from task_parser.modes.tt import format_tt_task, parse_tt_tokens
from task_parser.tokenizer import tokenize

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=ParsedTask)


class TaskParser:
    """Mode-aware task description parser.

    Supports two modes:
    - "churn": task management (dates, recurrence, buckets, windows, dependencies)
    - "tt": time tracking (timestamps, state markers, priorities, explicit durations, remarks)

    Both modes share @project, +tag, ~duration and the title.

    Example:
        parser = TaskParser(mode="churn")
        task = parser.parse("2025-01-10 Deploy app @relay +urgent ~2h")

        parser = TaskParser(mode="tt")
        entry = parser.parse("09:00 Meeting with team @work +meeting ~1h ^3")
    """

    def __init__(
        self,
        mode: ParserMode | str = ParserMode.CHURN,
        reference: date | datetime | None = None,
    ) -> None:
        """Initialize parser.

        Args:
            mode: Parser mode
            reference: Reference moment for relative dates, recurrence anchors
                and time-only timestamps. Defaults to the time of each call.
        """
        self._mode = ParserMode(mode)
        self._reference = reference

    @property
    def mode(self) -> ParserMode:
        return self._mode

    def _now(self) -> date | datetime:
        if self._reference is not None:
            return self._reference
        return datetime.now()

    def parse(self, text: str) -> ParsedTask:
        """Parse a task description.

        Args:
            text: Task description

        Returns:
            ChurnParsedTask or TTParsedTask depending on mode

        Raises:
            ParseError: If parsing fails
        """
        if not isinstance(text, str) or not text.strip():
            raise ParseError("Task description cannot be empty")

        raw = text.strip()
        tokens = tokenize(raw, self._mode)
        reference = self._now()

        if self._mode == ParserMode.TT:
            task: ParsedTask = parse_tt_tokens(tokens, raw, reference)
        else:
            task = parse_churn_tokens(tokens, raw, reference)

        logger.debug(f"[Parser] {self._mode.value}: {raw!r} -> {task}")
        return task

    def tokenize(self, text: str) -> list[Token]:
        """Tokenize a task description in this parser's mode."""
        return tokenize(text, self._mode)

    def format(self, task: ParsedTask) -> str:
        """Format a parsed task back to a string."""
        if self._mode == ParserMode.TT:
            return format_tt_task(_expect(task, TTParsedTask), self._now())
        return format_churn_task(_expect(task, ChurnParsedTask))

    @staticmethod
    def parse_churn(text: str, reference: date | datetime | None = None) -> ChurnParsedTask:
        """Parse in churn mode."""
        return _expect(TaskParser(ParserMode.CHURN, reference).parse(text), ChurnParsedTask)

    @staticmethod
    def parse_tt(text: str, reference: date | datetime | None = None) -> TTParsedTask:
        """Parse in tt mode."""
        return _expect(TaskParser(ParserMode.TT, reference).parse(text), TTParsedTask)

    @staticmethod
    def format_churn(task: ChurnParsedTask) -> str:
        """Format a churn task."""
        return format_churn_task(task)

    @staticmethod
    def format_tt(task: TTParsedTask, reference: date | datetime | None = None) -> str:
        """Format a tt entry."""
        return format_tt_task(task, reference)


def _expect(task: ParsedTask, cls: type[T]) -> T:
    # Plain ParsedTask records carry only shared fields, so upgrade them
    if isinstance(task, cls):
        return task
    if type(task) is ParsedTask:
        return cls(
            title=task.title,
            raw=task.raw,
            project=task.project,
            tags=task.tags,
            duration=task.duration,
        )
    raise TypeError(f"Expected {cls.__name__}, got {type(task).__name__}")


def parse(
    text: str,
    mode: ParserMode | str = ParserMode.CHURN,
    reference: date | datetime | None = None,
) -> ParsedTask:
    """Parse a task description in the given mode."""
    return TaskParser(mode, reference).parse(text)


def format_task(task: ParsedTask, reference: date | datetime | None = None) -> str:
    """Format a record, choosing the mode from its type."""
    if isinstance(task, TTParsedTask):
        return format_tt_task(task, reference if reference is not None else datetime.now())
    return format_churn_task(_expect(task, ChurnParsedTask))
