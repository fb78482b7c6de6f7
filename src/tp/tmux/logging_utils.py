"""Logging utilities for tmux operations."""

from typing import Any

from ..utils.logging import LogContext, get_logger

tmux_logger = get_logger("tp.tmux", LogContext.TMUX)


def log_tmux_command(args: list[str] | tuple[str, ...]) -> None:
    """Log a raw tmux command before it runs."""
    tmux_logger.debug(f"tmux {' '.join(args)}", command=list(args))


def log_session_operation(
    operation: str,
    session_name: str,
    status: str,
    context: dict[str, Any] | None = None,
) -> None:
    """Log session operation.

    Failures are logged at debug level; the CLI reports them to the user.
    """
    message = f"Session {operation} {status} - {session_name}"
    if context:
        message += f" - {context}"

    if status == "error":
        tmux_logger.debug(message, operation=operation, session_name=session_name)
    else:
        tmux_logger.info(message, operation=operation, session_name=session_name)


def log_session_attach(session_name: str, created: bool) -> None:
    """Log switching or attaching to a session."""
    state = "new" if created else "existing"
    tmux_logger.info(
        f"Session attached - {session_name} ({state})",
        session_name=session_name,
        created=created,
    )


def log_layout_setup(session_name: str, windows: list[tuple[int, int]]) -> None:
    """Log a materialized layout as (window index, pane count) pairs."""
    message = f"Layout applied - {session_name} (windows: {windows})"
    tmux_logger.info(message, session_name=session_name)
