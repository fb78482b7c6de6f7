"""Directory resolution for session, window and pane working directories."""

import os
from pathlib import Path

from ..utils.logging import PathResolutionError

HOME_MARKER = "~"


def resolve_directory(
    explicit: str | None, inherited: Path, cwd: Path | None = None
) -> Path:
    """Resolve a configured directory to an absolute path.

    An explicit directory replaces the inherited one entirely. Relative
    directories are taken relative to the current working directory, never
    relative to ``inherited``, so overrides do not compound.

    Args:
        explicit: Directory from the configuration, or None if unset
        inherited: Already resolved directory of the enclosing level
        cwd: Working directory used for relative paths, defaults to the
            process working directory

    Returns:
        Absolute, normalized directory path

    Raises:
        PathResolutionError: If a home-relative path cannot be expanded
    """
    if explicit is None:
        return inherited

    expanded = explicit
    if explicit.startswith(HOME_MARKER):
        expanded = os.path.expanduser(explicit)
        if expanded.startswith(HOME_MARKER):
            raise PathResolutionError(
                f"Cannot expand home directory in '{explicit}'",
                {"directory": explicit},
            )

    base = cwd if cwd is not None else Path.cwd()
    return Path(os.path.normpath(base / expanded))
