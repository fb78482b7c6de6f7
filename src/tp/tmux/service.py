"""
Session materialization.

Given a resolved layout, either switches to an already running session of
the same name or creates the session window by window and pane by pane,
then selects the focus pane and attaches. An existing session is never
modified, even if its live layout differs from the configuration.
"""

from dataclasses import dataclass, field
from typing import Any

from ..core.layout import ResolvedLayout
from ..utils.logging import MaterializeError, TmuxError
from .client import MuxClient
from .logging_utils import (
    log_layout_setup,
    log_session_attach,
    log_session_operation,
    tmux_logger,
)


@dataclass(frozen=True)
class Operation:
    """A single MuxClient call: method name, positional args and target."""

    method: str
    args: tuple[Any, ...]
    target: str

    def apply(self, client: MuxClient) -> None:
        getattr(client, self.method)(*self.args)


@dataclass
class MaterializeResult:
    """Outcome of loading a session."""

    session_name: str
    created: bool
    windows: list[tuple[int, int]] = field(default_factory=list)


def plan_operations(layout: ResolvedLayout, session_name: str) -> list[Operation]:
    """Build the ordered operations that create ``layout`` from scratch.

    All windows and panes are created first, in configuration order, since
    later operations address panes by position. Commands follow, also in
    configuration order, once every pane exists.

    Args:
        layout: Resolved session layout
        session_name: tmux session name

    Returns:
        Operations ending with pane selection and attach
    """
    operations: list[Operation] = []
    commands: list[Operation] = []

    for window_index, window in enumerate(layout.windows):
        window_target = f"{session_name}:{window_index}"
        # A window starts in the directory of its first pane
        start_directory = window.panes[0].directory
        name = window.name or None

        if window_index == 0:
            operations.append(
                Operation(
                    "new_session", (session_name, start_directory, name), session_name
                )
            )
        else:
            operations.append(
                Operation(
                    "new_window", (session_name, name, start_directory), window_target
                )
            )

        for pane_index, pane in enumerate(window.panes):
            pane_target = f"{window_target}.{pane_index}"
            if pane_index > 0:
                operations.append(
                    Operation(
                        "split_pane",
                        (session_name, window_index, pane.directory),
                        pane_target,
                    )
                )
            if pane.command:
                commands.append(
                    Operation(
                        "send_command",
                        (session_name, window_index, pane_index, pane.command),
                        pane_target,
                    )
                )

    operations.extend(commands)

    focus_window, focus_pane = layout.focus_target
    operations.append(
        Operation(
            "select_pane",
            (session_name, focus_window, focus_pane),
            f"{session_name}:{focus_window}.{focus_pane}",
        )
    )
    operations.append(Operation("switch_or_attach", (session_name,), session_name))
    return operations


def _run(operation: Operation, client: MuxClient) -> None:
    try:
        operation.apply(client)
    except TmuxError as e:
        log_session_operation(
            operation.method, operation.target, "error", {"error": e.message}
        )
        raise MaterializeError(
            f"{operation.method} failed for {operation.target}: {e.message}",
            operation=operation.method,
            target=operation.target,
        ) from e


def materialize(
    layout: ResolvedLayout, session_name: str, client: MuxClient
) -> MaterializeResult:
    """Create the session described by ``layout`` or attach to it if running.

    Operations run one at a time; the first failure stops the sequence and
    leaves whatever was already created in place.

    Args:
        layout: Resolved session layout
        session_name: tmux session name
        client: Multiplexer client executing the operations

    Returns:
        MaterializeResult describing what was done

    Raises:
        MaterializeError: If any operation fails
    """
    try:
        exists = client.session_exists(session_name)
    except TmuxError as e:
        raise MaterializeError(
            f"session_exists failed for {session_name}: {e.message}",
            operation="session_exists",
            target=session_name,
        ) from e

    if exists:
        tmux_logger.info("Session already running", session_name=session_name)
        _run(Operation("switch_or_attach", (session_name,), session_name), client)
        log_session_attach(session_name, created=False)
        return MaterializeResult(session_name=session_name, created=False)

    log_session_operation("create", session_name, "starting")
    for operation in plan_operations(layout, session_name):
        if operation.method == "switch_or_attach":
            log_session_operation("create", session_name, "success")
        _run(operation, client)

    windows = [
        (index, len(window.panes)) for index, window in enumerate(layout.windows)
    ]
    log_layout_setup(session_name, windows)
    log_session_attach(session_name, created=True)
    return MaterializeResult(session_name=session_name, created=True, windows=windows)
