"""
Layout resolution.

Turns a partially specified SessionConfig into a ResolvedLayout: every
window has at least one pane, every pane has an absolute directory, and the
pane to focus after loading is fixed.
"""

from dataclasses import dataclass
from pathlib import Path

from ..config.models import PaneConfig, SessionConfig, WindowConfig
from ..utils.logging import LogContext, get_logger
from .paths import resolve_directory

logger = get_logger(__name__, LogContext.LAYOUT)


@dataclass(frozen=True)
class ResolvedPane:
    """A pane with its directory resolved."""

    directory: Path
    command: str | None = None
    focus: bool = False


@dataclass(frozen=True)
class ResolvedWindow:
    """A window with its directory and panes resolved.

    ``name`` is empty when tmux should pick the window name.
    """

    name: str
    directory: Path
    panes: tuple[ResolvedPane, ...]


@dataclass(frozen=True)
class ResolvedLayout:
    """Fully resolved, ordered session layout."""

    session_name: str
    directory: Path
    windows: tuple[ResolvedWindow, ...]

    @property
    def focus_target(self) -> tuple[int, int]:
        """Return (window index, pane index) of the pane to select.

        The last pane marked ``focus`` in window-then-pane order wins; with
        no marked pane the first pane of the first window is used.
        """
        target = (0, 0)
        for window_index, window in enumerate(self.windows):
            for pane_index, pane in enumerate(window.panes):
                if pane.focus:
                    target = (window_index, pane_index)
        return target

    @property
    def pane_count(self) -> int:
        return sum(len(window.panes) for window in self.windows)


def _resolve_window(
    window: WindowConfig, session_dir: Path, cwd: Path
) -> ResolvedWindow:
    window_dir = resolve_directory(window.directory, session_dir, cwd)
    panes = window.panes or [PaneConfig()]

    resolved_panes = tuple(
        ResolvedPane(
            directory=resolve_directory(pane.directory, window_dir, cwd),
            command=pane.command,
            focus=pane.focus,
        )
        for pane in panes
    )
    return ResolvedWindow(
        name=window.name or "", directory=window_dir, panes=resolved_panes
    )


def resolve_layout(config: SessionConfig, cwd: Path | None = None) -> ResolvedLayout:
    """Resolve a session configuration into a layout ready to materialize.

    Args:
        config: Parsed session configuration
        cwd: Working directory for relative paths, defaults to the process
            working directory

    Returns:
        ResolvedLayout with at least one window and one pane per window

    Raises:
        PathResolutionError: If a directory cannot be resolved
    """
    base = cwd if cwd is not None else Path.cwd()
    session_dir = resolve_directory(config.directory, base, base)
    windows = config.windows or [WindowConfig()]

    layout = ResolvedLayout(
        session_name=config.name,
        directory=session_dir,
        windows=tuple(_resolve_window(w, session_dir, base) for w in windows),
    )
    logger.debug(
        "Layout resolved",
        session_name=config.name,
        windows=len(layout.windows),
        panes=layout.pane_count,
    )
    return layout
