"""Configuration for task_parser."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from task_parser.models import ParserMode


class Config(BaseSettings):
    """Application configuration, read from TASK_PARSER_* environment variables."""

    model_config = SettingsConfigDict(env_prefix="TASK_PARSER_")

    default_mode: ParserMode = Field(default=ParserMode.CHURN)
    host: str = Field(default="127.0.0.1")
    port: int = Field(default=8000)
    log_level: str = Field(default="INFO")
