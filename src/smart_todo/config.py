"""Configuration for the smart-todo command-line tool.

Configuration is loaded from:
- environment variables
- and a local `.env` file (if present)

The dependency engine itself takes no configuration; these settings only
affect logging and where the CLI looks for a snapshot by default.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LogFormat = Literal["json", "text"]

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class SmartTodoSettings(BaseSettings):
    """Settings for the smart-todo CLI.

    Environment variables:
    - LOG_LEVEL                 (optional)
    - SMART_TODO_LOG_FORMAT     (optional, json | text)
    - SMART_TODO_SNAPSHOT_PATH  (optional)

    Notes:
        Tests can point at a specific env file with
        `SmartTodoSettings(_env_file=path_to_env)`.
    """

    log_level: str = Field(
        default="INFO",
        validation_alias="LOG_LEVEL",
        description="Root logging level",
    )

    log_format: LogFormat = Field(
        default="json",
        validation_alias="SMART_TODO_LOG_FORMAT",
        description="Log output format: structured JSON or plain text",
    )

    snapshot_path: Path = Field(
        default=Path("tasks.json"),
        validation_alias="SMART_TODO_SNAPSHOT_PATH",
        description="Task snapshot read when no path is given on the command line",
    )

    model_config = SettingsConfigDict(
        env_prefix="",
        env_file=".env",
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"LOG_LEVEL must be one of {sorted(_LOG_LEVELS)}")
        return level
