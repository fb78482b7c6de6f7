"""Tool settings loading and management."""

import os
from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator

from ..utils.logging import ConfigurationError, LogLevel


class ToolSettings(BaseModel):
    """Settings for the tp command line tool."""

    sessions_dir: str | None = Field(
        default=None, description="Directory holding session files"
    )
    log_level: str = Field(default="WARNING", description="Logging level")
    log_file: str | None = Field(default=None, description="Log file path")
    log_format: str = Field(default="text", description="Log format: text or json")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in LogLevel.__members__:
            raise ValueError(f"unknown log level '{value}'")
        return level

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, value: str) -> str:
        fmt = value.lower()
        if fmt not in ("text", "json"):
            raise ValueError(f"unknown log format '{value}'")
        return fmt


def load_env_vars() -> dict[str, Any]:
    """Load settings from environment variables."""
    config: dict[str, Any] = {}
    prefix = "TP_"

    env_mappings = {
        f"{prefix}SESSIONS_DIR": "sessions_dir",
        f"{prefix}LOG_LEVEL": "log_level",
        f"{prefix}LOG_FILE": "log_file",
        f"{prefix}LOG_FORMAT": "log_format",
    }

    for env_var, config_key in env_mappings.items():
        if os.environ.get(env_var):
            config[config_key] = os.environ[env_var]

    return config


def load_settings(cli_overrides: dict[str, Any] | None = None) -> ToolSettings:
    """Load settings from environment variables and CLI flags.

    Precedence order (highest to lowest):
    1. CLI flag overrides
    2. Environment variables
    3. Default values
    """
    config_data = load_env_vars()

    if cli_overrides:
        config_data.update({k: v for k, v in cli_overrides.items() if v is not None})

    try:
        return ToolSettings(**config_data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid settings: {e}") from e
