"""Configuration management module."""

from .loader import ToolSettings, load_settings
from .models import PaneConfig, SessionConfig, WindowConfig, scaffold_session
from .storage import (
    create_session,
    dump_session,
    list_sessions,
    load_session,
    parse_session,
    session_path,
    sessions_dir,
)

__all__ = [
    "PaneConfig",
    "SessionConfig",
    "ToolSettings",
    "WindowConfig",
    "create_session",
    "dump_session",
    "list_sessions",
    "load_session",
    "load_settings",
    "parse_session",
    "scaffold_session",
    "session_path",
    "sessions_dir",
]
