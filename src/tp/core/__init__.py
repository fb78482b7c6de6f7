"""Layout resolution for tp sessions."""

from .layout import ResolvedLayout, ResolvedPane, ResolvedWindow, resolve_layout
from .paths import resolve_directory

__all__ = [
    "ResolvedLayout",
    "ResolvedPane",
    "ResolvedWindow",
    "resolve_directory",
    "resolve_layout",
]
