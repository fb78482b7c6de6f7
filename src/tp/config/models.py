"""Session configuration models."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _blank_entries_as_defaults(value: Any) -> Any:
    # A bare "-" list item parses as None and stands for an all-default entry
    if isinstance(value, list):
        return [{} if item is None else item for item in value]
    return value


class PaneConfig(BaseModel):
    """A single pane within a window."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    focus: bool = Field(default=False, description="Select this pane after loading")
    directory: str | None = Field(
        default=None, description="Working directory, inherits the window's if unset"
    )
    command: str | None = Field(
        default=None, description="Command typed into the pane after creation"
    )


class WindowConfig(BaseModel):
    """A window and its ordered panes."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str | None = Field(default=None, description="Window name")
    directory: str | None = Field(
        default=None, description="Working directory, inherits the session's if unset"
    )
    panes: list[PaneConfig] = Field(default_factory=list, description="Ordered panes")

    @field_validator("panes", mode="before")
    @classmethod
    def validate_panes(cls, v: Any) -> Any:
        return _blank_entries_as_defaults(v)


class SessionConfig(BaseModel):
    """Configuration model for a tmux session layout."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str = Field(min_length=1, description="tmux session name")
    directory: str | None = Field(
        default=None, description="Working directory, defaults to '.'"
    )
    windows: list[WindowConfig] = Field(
        default_factory=list, description="Ordered windows"
    )

    @field_validator("windows", mode="before")
    @classmethod
    def validate_windows(cls, v: Any) -> Any:
        return _blank_entries_as_defaults(v)


def scaffold_session(name: str) -> SessionConfig:
    """Build the starter configuration written by ``tp new``."""
    return SessionConfig(
        name=name,
        directory=".",
        windows=[
            WindowConfig(
                name="shell",
                panes=[PaneConfig(focus=True, command="echo 'Hello :)'")],
            )
        ],
    )
