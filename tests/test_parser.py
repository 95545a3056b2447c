"""Tests for the TaskParser facade."""

from datetime import date, datetime
from pathlib import Path

import pytest
import yaml

from task_parser.errors import ParseError
from task_parser.models import ChurnParsedTask, ParsedTask, ParserMode, TokenType, TTParsedTask
from task_parser.parser import TaskParser, format_task, parse

ROUNDTRIP_CASES = yaml.safe_load((Path(__file__).parent / "data" / "roundtrip.yaml").read_text())


def test_default_mode() -> None:
    """Test churn is the default mode."""
    assert TaskParser().mode == ParserMode.CHURN


def test_mode_from_string() -> None:
    """Test modes may be given by name."""
    assert TaskParser("tt").mode == ParserMode.TT


def test_unknown_mode() -> None:
    """Test an unknown mode name is rejected."""
    with pytest.raises(ValueError):
        TaskParser("jira")


@pytest.mark.parametrize("mode", list(ParserMode))
@pytest.mark.parametrize("text", ["", "   ", "\n\t"])
def test_parse_empty(mode: ParserMode, text: str) -> None:
    """Test blank input is rejected in both modes."""
    with pytest.raises(ParseError, match="Task description cannot be empty"):
        TaskParser(mode).parse(text)


def test_parse_non_string() -> None:
    """Test non-string input is rejected like blank input."""
    with pytest.raises(ParseError, match="Task description cannot be empty"):
        TaskParser().parse(None)  # type: ignore[arg-type]


def test_parse_error_is_value_error() -> None:
    """Test callers can catch ParseError as ValueError."""
    with pytest.raises(ValueError):
        TaskParser().parse("@relay")


def test_parse_returns_mode_record(churn_parser: TaskParser, tt_parser: TaskParser) -> None:
    """Test each mode returns its own record type."""
    assert isinstance(churn_parser.parse("Task"), ChurnParsedTask)
    assert isinstance(tt_parser.parse("Task"), TTParsedTask)


def test_tokenize_uses_parser_mode(tt_parser: TaskParser) -> None:
    """Test the facade tokenizes in its own mode."""
    tokens = tt_parser.tokenize("09:00 Task")

    assert [token.type for token in tokens] == [TokenType.TIMESTAMP, TokenType.DESCRIPTION]


def test_static_helpers(reference: datetime) -> None:
    """Test the mode-specific shortcuts."""
    churn = TaskParser.parse_churn("tomorrow Task ~1h", reference)
    entry = TaskParser.parse_tt("09:00 Task ^2", reference)

    assert churn.date == date(2025, 1, 16)
    assert entry.priority == 2
    assert TaskParser.format_churn(churn) == "2025-01-16 Task ~1h"
    assert TaskParser.format_tt(entry, reference) == "09:00 Task ^2"


def test_module_parse(reference: datetime) -> None:
    """Test the module-level parse function."""
    task = parse("17:00 @end", "tt", reference)

    assert isinstance(task, TTParsedTask)
    assert task.state == "end"


def test_format_task_dispatches_on_type(reference: datetime) -> None:
    """Test format_task picks the mode from the record type."""
    assert format_task(ChurnParsedTask(title="Task", bucket="ops")) == "Task $ops"
    assert (
        format_task(TTParsedTask(title="Task", timestamp=datetime(2025, 1, 14, 9, 0)), reference)
        == "2025-01-14 09:00 Task"
    )


def test_format_base_record() -> None:
    """Test a plain shared-fields record formats like a churn task."""
    task = ParsedTask(title="Test", tags=("tag1",), project="p", duration=45)

    assert format_task(task) == "Test @p +tag1 ~45m"
    assert TaskParser(ParserMode.TT).format(task) == "Test @p +tag1 ~45m"


def test_format_wrong_record_type() -> None:
    """Test a record of the other mode is rejected."""
    with pytest.raises(TypeError, match="Expected TTParsedTask, got ChurnParsedTask"):
        TaskParser(ParserMode.TT).format(ChurnParsedTask(title="Task"))


@pytest.mark.parametrize("line", ROUNDTRIP_CASES["churn"])
def test_churn_roundtrip(churn_parser: TaskParser, line: str) -> None:
    """Test canonical churn lines survive parse and format."""
    task = churn_parser.parse(line)

    assert churn_parser.format(task) == line
    assert churn_parser.parse(churn_parser.format(task)) == task


@pytest.mark.parametrize("line", ROUNDTRIP_CASES["tt"])
def test_tt_roundtrip(tt_parser: TaskParser, line: str) -> None:
    """Test canonical tt lines survive parse and format."""
    task = tt_parser.parse(line)

    assert tt_parser.format(task) == line
    assert tt_parser.parse(tt_parser.format(task)) == task


@pytest.mark.parametrize(
    ("mode", "text", "canonical"),
    [
        ("churn", "DAILY Standup", "daily Standup"),
        ("churn", "Fri,Mon Review", "Mon,Fri Review"),
        ("churn", "mon,TUE,wed,thu,fri 7:30 Gym", "weekdays 07:30 Gym"),
        ("churn", "every 2W 7:05 X", "every 2w 07:05 X"),
        ("churn", "Task window:9:00-17:00", "Task window:09:00-17:00"),
        ("churn", "Task @a @b", "Task @a"),
        ("churn", "tomorrow Buy ~90m", "2025-01-16 Buy ~1h30m"),
        ("churn", "Ship +x after:3,1 now $ops ~0h", "Ship now +x ~0m $ops after:3,1"),
        ("tt", "9:00 Task ~90m", "09:00 Task ~1h30m"),
        ("tt", "2025-01-15 09:00:00 Today", "09:00 Today"),
        ("tt", "09:00 ^4 Task ->paused @p", "09:00 Task @p ^4 ->paused"),
        ("tt", "14:00 @3 (60m) Resume", "14:00 @3 Resume (1h)"),
    ],
)
def test_format_is_idempotent(reference: datetime, mode: str, text: str, canonical: str) -> None:
    """Test formatting normalizes once and is stable afterwards."""
    parser = TaskParser(mode, reference)

    first = parser.format(parser.parse(text))

    assert first == canonical
    assert parser.format(parser.parse(first)) == first
