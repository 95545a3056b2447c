"""Test fixtures for TaskParser."""

from datetime import datetime

import pytest

from task_parser.models import ParserMode
from task_parser.parser import TaskParser


@pytest.fixture
def reference() -> datetime:
    """Fixed reference moment, a Wednesday."""
    return datetime(2025, 1, 15, 10, 30)


@pytest.fixture
def churn_parser(reference: datetime) -> TaskParser:
    """Create churn-mode parser pinned to the reference moment."""
    return TaskParser(ParserMode.CHURN, reference)


@pytest.fixture
def tt_parser(reference: datetime) -> TaskParser:
    """Create tt-mode parser pinned to the reference moment."""
    return TaskParser(ParserMode.TT, reference)
