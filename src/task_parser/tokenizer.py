"""Mode-aware tokenizer for single-line task descriptions."""

import logging
import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import TypeVar

from task_parser.errors import ParseError
from task_parser.grammars.duration import DURATION_PATTERN
from task_parser.models import ParserMode, Token, TokenType

logger = logging.getLogger(__name__)

T = TypeVar("T")

_IDENTIFIER = r"[a-zA-Z][a-zA-Z0-9_-]*"

_WHITESPACE_RE = re.compile(r"\s+")
_WORD_RE = re.compile(r"\S+")

# tt prefixes, only at the start of the input
_TIMESTAMP_RE = re.compile(r"(?:[0-9]{4}-[0-9]{2}-[0-9]{2}\s+)?[0-9]{1,2}:[0-9]{2}(?::[0-9]{2})?")
_STATE_MARKER_RE = re.compile(r"@(end|pause|abandon|resume|prev|[0-9]+)(?=\s|$)")

_STATE_MARKER_TYPES = {
    "end": TokenType.END_MARKER,
    "pause": TokenType.PAUSE_MARKER,
    "abandon": TokenType.ABANDON_MARKER,
}


@dataclass(frozen=True)
class Marker:
    """A metadata marker: token type plus the pattern capturing its value."""

    type: TokenType
    pattern: re.Pattern[str]
    terminal: bool = False  # Nothing after this marker is tokenized

    def match(self, text: str, position: int) -> re.Match[str] | None:
        return self.pattern.match(text, position)


SHARED_MARKERS = (
    Marker(TokenType.PROJECT, re.compile(rf"@({_IDENTIFIER})")),
    Marker(TokenType.TAG, re.compile(rf"\+({_IDENTIFIER})")),
    Marker(TokenType.DURATION, re.compile(rf"~({DURATION_PATTERN})")),
)

CHURN_MARKERS = (
    Marker(TokenType.BUCKET, re.compile(rf"\$({_IDENTIFIER})")),
    Marker(TokenType.WINDOW, re.compile(r"window:([0-9]{1,2}:[0-9]{2}-[0-9]{1,2}:[0-9]{2})")),
    Marker(TokenType.DEPENDENCIES, re.compile(r"after:([0-9]+(?:,[0-9]+)*)")),
)

TT_MARKERS = (
    Marker(TokenType.PRIORITY, re.compile(r"\^([1-9])")),
    Marker(TokenType.EXPLICIT_DURATION, re.compile(rf"\(({DURATION_PATTERN})\)")),
    Marker(TokenType.REMARK, re.compile(r"# (.*)", re.DOTALL), terminal=True),
    Marker(TokenType.STATE_SUFFIX, re.compile(r"->(paused|completed|abandoned)")),
)

MODE_MARKERS = {
    ParserMode.CHURN: SHARED_MARKERS + CHURN_MARKERS,
    ParserMode.TT: SHARED_MARKERS + TT_MARKERS,
}


class Tokenizer:
    """Scans a line left to right into description and metadata tokens.

    Markers are tried in priority order at each word boundary; anything no
    marker accepts is collected as description text.
    """

    def __init__(self, mode: ParserMode | str) -> None:
        """Initialize tokenizer with the marker set of the given mode."""
        self._mode = ParserMode(mode)
        self._markers = MODE_MARKERS[self._mode]

    @property
    def mode(self) -> ParserMode:
        return self._mode

    def tokenize(self, text: str) -> list[Token]:
        """Tokenize a task description.

        Args:
            text: Task description, surrounding whitespace is ignored

        Returns:
            Tokens in input order, positions relative to the trimmed input

        Raises:
            ParseError: If the input is empty
        """
        line = text.strip()
        if not line:
            raise ParseError("Input cannot be empty")

        tokens: list[Token] = []
        cursor = 0
        if self._mode == ParserMode.TT:
            cursor = self._scan_prefixes(line, tokens)

        words: list[str] = []
        words_start = cursor

        while cursor < len(line):
            space = _WHITESPACE_RE.match(line, cursor)
            if space:
                cursor = space.end()
                continue

            found = self._match_marker(line, cursor)
            if found is None:
                word = _WORD_RE.match(line, cursor)
                if not words:
                    words_start = cursor
                words.append(word.group(0))
                cursor = word.end()
                continue

            marker, match = found
            if words:
                tokens.append(Token(TokenType.DESCRIPTION, " ".join(words), words_start))
                words = []
            tokens.append(Token(marker.type, match.group(1), cursor))
            cursor = match.end()
            if marker.terminal:
                break

        if words:
            tokens.append(Token(TokenType.DESCRIPTION, " ".join(words), words_start))

        logger.debug(f"[Tokenizer] {self._mode.value}: {len(tokens)} token(s) from {line!r}")
        return tokens

    def _match_marker(self, line: str, cursor: int) -> tuple[Marker, re.Match[str]] | None:
        for marker in self._markers:
            match = marker.match(line, cursor)
            if match:
                return marker, match
        return None

    def _scan_prefixes(self, line: str, tokens: list[Token]) -> int:
        """Consume the tt timestamp and state marker prefixes.

        Returns:
            Cursor position after the prefixes
        """
        cursor = 0

        timestamp = _TIMESTAMP_RE.match(line)
        if timestamp:
            tokens.append(Token(TokenType.TIMESTAMP, timestamp.group(0), 0))
            cursor = timestamp.end()
            space = _WHITESPACE_RE.match(line, cursor)
            if space:
                cursor = space.end()

        marker = _STATE_MARKER_RE.match(line, cursor)
        if marker:
            value = marker.group(1)
            token_type = _STATE_MARKER_TYPES.get(value, TokenType.RESUME_MARKER)
            tokens.append(Token(token_type, value, cursor))
            cursor = marker.end()

        return cursor


_TOKENIZERS = {mode: Tokenizer(mode) for mode in ParserMode}


def tokenize(text: str, mode: ParserMode | str = ParserMode.CHURN) -> list[Token]:
    """Tokenize a task description in the given mode."""
    return _TOKENIZERS[ParserMode(mode)].tokenize(text)


def find_tokens(tokens: Iterable[Token], token_type: TokenType) -> list[Token]:
    """Find all tokens of a type, in input order."""
    return [token for token in tokens if token.type == token_type]


def find_token(tokens: Iterable[Token], token_type: TokenType) -> Token | None:
    """Find the first token of a type."""
    return next((token for token in tokens if token.type == token_type), None)


def parse_token(token: Token, grammar: Callable[[str], T]) -> T:
    """Apply a field grammar to a token's value.

    Raises:
        ParseError: Grammar error, located at the token's position
    """
    try:
        return grammar(token.value)
    except ParseError as e:
        raise ParseError(e.message, token.position) from e
