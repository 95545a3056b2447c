"""Dependency injection factory."""

import logging
from datetime import date, datetime

from fastapi import FastAPI

from task_parser.config import Config
from task_parser.models import ParserMode
from task_parser.parser import TaskParser

logger = logging.getLogger(__name__)

# Global config instance for dependency injection
_config: Config | None = None


def get_config() -> Config:
    """Get or create Config instance."""
    global _config
    if _config is None:
        _config = Config()
    return _config


def resolve_mode(mode: ParserMode | str | None) -> ParserMode:
    """Return the given mode, or the configured default when None."""
    if mode is None:
        return get_config().default_mode
    return ParserMode(mode)


def get_parser(
    mode: ParserMode | str | None = None,
    reference: date | datetime | None = None,
) -> TaskParser:
    """Create TaskParser for the given (or default) mode."""
    return TaskParser(resolve_mode(mode), reference)


def create_app() -> FastAPI:
    """Create FastAPI application (composition root)."""
    from task_parser.api.parse import router as parse_router

    app = FastAPI(
        title="TaskParser",
        description="Parse and format task and time-tracker lines",
        version="0.1.0",
    )

    app.include_router(parse_router, prefix="/api")

    logger.info(f"[Factory] Created app, default mode: {get_config().default_mode.value}")
    return app
