"""Parse/format API endpoints."""

import logging

from fastapi import APIRouter, HTTPException

from task_parser.api.models import (
    FormatRequest,
    FormatResponse,
    ParseRequest,
    TaskResponse,
    TokenizeRequest,
    TokenResponse,
    task_to_response,
)
from task_parser.errors import ParseError
from task_parser.factory import get_parser, resolve_mode

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/health")
async def health() -> dict[str, str]:
    """Liveness check."""
    return {"status": "ok"}


@router.post("/parse", response_model=TaskResponse)
async def parse_task(request: ParseRequest) -> TaskResponse:
    """Parse a single line into a task record.

    Args:
        request: Text, optional mode and optional reference moment

    Returns:
        Parsed task fields

    Raises:
        HTTPException: 422 if the line cannot be parsed
    """
    mode = resolve_mode(request.mode)
    parser = get_parser(mode, request.reference)

    try:
        task = parser.parse(request.text)
    except ParseError as e:
        logger.warning(f"[API] Rejected {mode.value} input {request.text!r}: {e}")
        raise HTTPException(status_code=422, detail=str(e)) from e

    return task_to_response(task, mode)


@router.post("/format", response_model=FormatResponse)
async def format_task(request: FormatRequest) -> FormatResponse:
    """Format a task record back to its canonical line.

    Args:
        request: Task fields, optional mode and optional reference moment

    Returns:
        Canonical text
    """
    mode = resolve_mode(request.mode)
    parser = get_parser(mode, request.reference)
    return FormatResponse(text=parser.format(request.task.to_task(mode)))


@router.post("/tokenize", response_model=list[TokenResponse])
async def tokenize_text(request: TokenizeRequest) -> list[TokenResponse]:
    """Split a line into tokens without extracting fields.

    Raises:
        HTTPException: 422 if the line is empty
    """
    mode = resolve_mode(request.mode)

    try:
        tokens = get_parser(mode).tokenize(request.text)
    except ParseError as e:
        logger.warning(f"[API] Rejected {mode.value} input {request.text!r}: {e}")
        raise HTTPException(status_code=422, detail=str(e)) from e

    return [
        TokenResponse(type=token.type, value=token.value, position=token.position)
        for token in tokens
    ]
