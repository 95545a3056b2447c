"""Duration grammar: 2h, 30m, 1h30m."""

import re

from task_parser.errors import ParseError

# Two-component form first so "1h30m" is not cut short at "1h"
DURATION_PATTERN = r"[0-9]+h[0-9]+m|[0-9]+[hm]"

_DURATION_RE = re.compile(r"(?:([0-9]+)h)?(?:([0-9]+)m)?")


def parse_duration(value: str) -> int:
    """Parse a duration string into total minutes.

    Args:
        value: Duration in one of the forms ``<N>h<N>m``, ``<N>h`` or ``<N>m``

    Returns:
        Total minutes

    Raises:
        ParseError: If the string is not a duration
    """
    text = value.strip()
    match = _DURATION_RE.fullmatch(text)
    if not text or not match:
        raise ParseError(f"Invalid duration: {value} (expected e.g. 2h, 30m, 1h30m)")

    hours, minutes = match.groups()
    return int(hours or 0) * 60 + int(minutes or 0)


def format_duration(minutes: int) -> str:
    """Format minutes in canonical form, omitting zero components."""
    hours, mins = divmod(minutes, 60)
    if hours and mins:
        return f"{hours}h{mins}m"
    if hours:
        return f"{hours}h"
    return f"{mins}m"
