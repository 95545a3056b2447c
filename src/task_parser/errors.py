"""Errors raised by task_parser."""


class ParseError(ValueError):
    """Raised when a task description cannot be parsed."""

    def __init__(self, message: str, position: int | None = None) -> None:
        """Initialize with a human-readable message and optional input offset."""
        self.message = message
        self.position = position
        location = f" at position {position}" if position is not None else ""
        super().__init__(f"{message}{location}")
