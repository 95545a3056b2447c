"""API models for TaskParser."""

import datetime
from dataclasses import asdict
from typing import Annotated, Literal

from pydantic import BaseModel, Field

from task_parser.models import (
    ChurnParsedTask,
    ParsedTask,
    ParserMode,
    RecurrenceMode,
    RecurrencePattern,
    RecurrenceType,
    TimeWindow,
    TokenType,
    TTParsedTask,
)


class RecurrenceModel(BaseModel):
    """Recurrence pattern."""

    mode: RecurrenceMode
    type: RecurrenceType
    interval: int | None = Field(default=None, gt=0)
    unit: Literal["days", "weeks", "months"] | None = None
    day_of_week: int | None = Field(default=None, ge=0, le=6)
    days_of_week: list[Annotated[int, Field(ge=0, le=6)]] | None = None
    time_of_day: str | None = None  # HH:MM
    anchor: datetime.date | None = None


class TimeWindowModel(BaseModel):
    """Time window, HH:MM each."""

    start: str
    end: str


class TaskModel(BaseModel):
    """Task fields of both modes; fields of the other mode stay empty."""

    title: str = ""
    raw: str = ""
    project: str | None = None
    tags: list[str] = Field(default_factory=list)
    duration: int | None = Field(default=None, ge=0)  # minutes

    # churn
    date: datetime.date | None = None
    bucket: str | None = None
    recurrence: RecurrenceModel | None = None
    window: TimeWindowModel | None = None
    dependencies: list[int] | None = None

    # tt
    timestamp: datetime.datetime | None = None
    priority: int | None = Field(default=None, ge=1, le=9)
    explicit_duration: int | None = Field(default=None, ge=0)
    remark: str | None = None
    state: Literal["end", "pause", "abandon"] | None = None
    state_suffix: Literal["paused", "completed", "abandoned"] | None = None
    resume_marker: str | None = None

    def to_task(self, mode: ParserMode) -> ParsedTask:
        """Convert to the record type of the given mode."""
        shared = {
            "title": self.title,
            "raw": self.raw,
            "project": self.project,
            "tags": tuple(self.tags),
            "duration": self.duration,
        }

        if mode == ParserMode.TT:
            return TTParsedTask(
                **shared,
                timestamp=self.timestamp,
                priority=self.priority,
                explicit_duration=self.explicit_duration,
                remark=self.remark,
                state=self.state,
                state_suffix=self.state_suffix,
                resume_marker=self.resume_marker,
            )

        recurrence = None
        if self.recurrence:
            fields = self.recurrence.model_dump()
            if fields["days_of_week"] is not None:
                fields["days_of_week"] = tuple(sorted(set(fields["days_of_week"])))
            recurrence = RecurrencePattern(**fields)

        window = None
        if self.window:
            window = TimeWindow(start=self.window.start, end=self.window.end)

        return ChurnParsedTask(
            **shared,
            date=self.date,
            bucket=self.bucket,
            recurrence=recurrence,
            window=window,
            dependencies=tuple(self.dependencies) if self.dependencies else None,
        )


class TaskResponse(TaskModel):
    """API response model for parsed tasks."""

    mode: ParserMode


class ParseRequest(BaseModel):
    """Request model for parsing a line."""

    text: str
    mode: ParserMode | None = None
    reference: datetime.datetime | None = None


class FormatRequest(BaseModel):
    """Request model for formatting a task."""

    task: TaskModel
    mode: ParserMode | None = None
    reference: datetime.datetime | None = None


class FormatResponse(BaseModel):
    """API response model for formatted text."""

    text: str


class TokenizeRequest(BaseModel):
    """Request model for tokenizing a line."""

    text: str
    mode: ParserMode | None = None


class TokenResponse(BaseModel):
    """API response model for tokens."""

    type: TokenType
    value: str
    position: int


def task_to_response(task: ParsedTask, mode: ParserMode) -> TaskResponse:
    """Convert a parsed record to its API response."""
    return TaskResponse.model_validate({**asdict(task), "mode": mode})
