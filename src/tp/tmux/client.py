"""
tmux command client.

``MuxClient`` is the set of operations the session materializer needs;
``TmuxClient`` implements it on top of libtmux. Windows and panes are
addressed by zero-based position into the session's window list and the
window's pane list, so tmux's ``base-index`` and ``pane-base-index``
options never leak into positions.
"""

import os
import subprocess  # nosec B404
from pathlib import Path
from typing import Any, Protocol

import libtmux
from libtmux import exc as libtmux_exc

from ..utils.logging import TmuxError
from .logging_utils import log_tmux_command


class MuxClient(Protocol):
    """Operations a terminal multiplexer must provide."""

    def session_exists(self, session: str) -> bool: ...

    def new_session(
        self, session: str, directory: Path, window_name: str | None = None
    ) -> None: ...

    def new_window(self, session: str, name: str | None, directory: Path) -> None: ...

    def split_pane(self, session: str, window: int, directory: Path) -> None: ...

    def send_command(
        self, session: str, window: int, pane: int, command: str
    ) -> None: ...

    def select_pane(self, session: str, window: int, pane: int) -> None: ...

    def switch_or_attach(self, session: str) -> None: ...


class TmuxClient:
    """MuxClient backed by a tmux server through libtmux."""

    def __init__(self, server: libtmux.Server | None = None):
        """Initialize tmux client.

        Args:
            server: libtmux server to use, defaults to the user's server
        """
        self._server = server if server is not None else libtmux.Server()

    @staticmethod
    def _check(result: Any, operation: str, target: str, command: str) -> None:
        if result.stderr:
            raise TmuxError(
                f"tmux {command} failed for {target}: {' '.join(result.stderr)}",
                operation=operation,
                target=target,
            )

    def _session(self, session: str, operation: str) -> libtmux.Session:
        found = self._server.sessions.get(session_name=session, default=None)
        if found is None:
            raise TmuxError(
                f"can't find session: {session}", operation=operation, target=session
            )
        return found

    def _window(self, session: str, window: int, operation: str) -> libtmux.Window:
        target = f"{session}:{window}"
        windows = self._session(session, operation).windows
        if not 0 <= window < len(windows):
            raise TmuxError(
                f"can't find window: {target}", operation=operation, target=target
            )
        return windows[window]

    def _pane(
        self, session: str, window: int, pane: int, operation: str
    ) -> libtmux.Pane:
        target = f"{session}:{window}.{pane}"
        panes = self._window(session, window, operation).panes
        if not 0 <= pane < len(panes):
            raise TmuxError(
                f"can't find pane: {target}", operation=operation, target=target
            )
        return panes[pane]

    def session_exists(self, session: str) -> bool:
        """Check if a tmux session exists."""
        try:
            return self._server.has_session(session, exact=True)
        except libtmux_exc.LibTmuxException as e:
            raise TmuxError(
                f"Failed to query session {session}: {e}",
                operation="session_exists",
                target=session,
            ) from e

    def new_session(
        self, session: str, directory: Path, window_name: str | None = None
    ) -> None:
        """Create a detached session whose first window starts in ``directory``."""
        log_tmux_command(["new-session", "-d", "-s", session, "-c", str(directory)])
        try:
            self._server.new_session(
                session_name=session,
                start_directory=str(directory),
                window_name=window_name or None,
                attach=False,
            )
        except libtmux_exc.LibTmuxException as e:
            raise TmuxError(
                f"Failed to create session {session}: {e}",
                operation="new_session",
                target=session,
            ) from e

    def new_window(self, session: str, name: str | None, directory: Path) -> None:
        """Append a window to the session."""
        tmux_session = self._session(session, "new_window")
        log_tmux_command(["new-window", "-d", "-c", str(directory)])
        try:
            tmux_session.new_window(
                window_name=name or None,
                start_directory=str(directory),
                attach=False,
            )
        except libtmux_exc.LibTmuxException as e:
            raise TmuxError(
                f"Failed to create window in {session}: {e}",
                operation="new_window",
                target=session,
            ) from e

    def split_pane(self, session: str, window: int, directory: Path) -> None:
        """Split the window's last pane, the new pane starting in ``directory``.

        tmux places a split pane right after the pane it splits, so panes
        keep the order they were created in.
        """
        last_pane = self._window(session, window, "split_pane").panes[-1]
        args = ("split-window", "-c", str(directory))
        log_tmux_command(args)
        result = last_pane.cmd(*args)
        self._check(result, "split_pane", f"{session}:{window}", args[0])

    def send_command(self, session: str, window: int, pane: int, command: str) -> None:
        """Type ``command`` into a pane and press Enter.

        The text is sent literally so a command spelling a key name is not
        interpreted as that key.
        """
        target = f"{session}:{window}.{pane}"
        tmux_pane = self._pane(session, window, pane, "send_command")
        for args in (("send-keys", "-l", command), ("send-keys", "Enter")):
            log_tmux_command(args)
            self._check(tmux_pane.cmd(*args), "send_command", target, args[0])

    def select_pane(self, session: str, window: int, pane: int) -> None:
        """Make a pane, and its window, the active one."""
        tmux_window = self._window(session, window, "select_pane")
        tmux_pane = self._pane(session, window, pane, "select_pane")
        log_tmux_command(("select-window",))
        self._check(
            tmux_window.cmd("select-window"),
            "select_pane",
            f"{session}:{window}",
            "select-window",
        )
        log_tmux_command(("select-pane",))
        self._check(
            tmux_pane.cmd("select-pane"),
            "select_pane",
            f"{session}:{window}.{pane}",
            "select-pane",
        )

    def switch_or_attach(self, session: str) -> None:
        """Switch the current client to the session, or attach a new client.

        Inside tmux the running client is switched; outside tmux the
        terminal is handed to ``tmux attach-session`` until it detaches.
        """
        if os.environ.get("TMUX"):
            log_tmux_command(("switch-client", "-t", session))
            result = self._server.cmd("switch-client", "-t", session)
            self._check(result, "switch_or_attach", session, "switch-client")
            return

        args = ["tmux", "attach-session", "-t", session]
        log_tmux_command(args[1:])
        try:
            result = subprocess.run(args, check=False)  # nosec B603
        except OSError as e:
            raise TmuxError(
                f"Failed to attach to session {session}: {e}",
                operation="switch_or_attach",
                target=session,
            ) from e

        if result.returncode != 0:
            raise TmuxError(
                f"Failed to attach to session {session}: exit code {result.returncode}",
                operation="switch_or_attach",
                target=session,
            )


# Global tmux client instance
_tmux_client: TmuxClient | None = None


def get_tmux_client() -> TmuxClient:
    """Get the global tmux client instance.

    Returns:
        TmuxClient instance
    """
    global _tmux_client
    if _tmux_client is None:
        _tmux_client = TmuxClient()
    return _tmux_client
