"""Mode-aware parser for single-line task and time-tracker entries."""

from task_parser.errors import ParseError
from task_parser.grammars.dates import (
    format_date,
    get_next_weekday,
    get_weekday_index,
    get_weekday_name,
    is_weekday,
    parse_date,
)
from task_parser.grammars.duration import format_duration, parse_duration
from task_parser.grammars.recurrence import format_recurrence, parse_recurrence
from task_parser.grammars.time_window import (
    crosses_midnight,
    format_time_window,
    is_time_in_window,
    parse_time,
    parse_time_window,
)
from task_parser.models import (
    ChurnParsedTask,
    ParsedTask,
    ParserMode,
    RecurrenceMode,
    RecurrencePattern,
    RecurrenceType,
    TimeWindow,
    Token,
    TokenType,
    TTParsedTask,
)
from task_parser.modes.churn import format_churn_task, parse_churn_tokens
from task_parser.modes.tt import format_tt_task, parse_tt_tokens
from task_parser.parser import TaskParser, format_task, parse
from task_parser.tokenizer import Tokenizer, find_token, find_tokens, tokenize

__all__ = [
    "ChurnParsedTask",
    "ParseError",
    "ParsedTask",
    "ParserMode",
    "RecurrenceMode",
    "RecurrencePattern",
    "RecurrenceType",
    "TTParsedTask",
    "TaskParser",
    "TimeWindow",
    "Token",
    "TokenType",
    "Tokenizer",
    "crosses_midnight",
    "find_token",
    "find_tokens",
    "format_churn_task",
    "format_date",
    "format_duration",
    "format_recurrence",
    "format_task",
    "format_time_window",
    "format_tt_task",
    "get_next_weekday",
    "get_weekday_index",
    "get_weekday_name",
    "is_time_in_window",
    "is_weekday",
    "parse",
    "parse_churn_tokens",
    "parse_date",
    "parse_duration",
    "parse_recurrence",
    "parse_time",
    "parse_time_window",
    "parse_tt_tokens",
    "tokenize",
]
