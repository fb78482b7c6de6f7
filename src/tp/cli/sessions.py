"""Session commands: new, load and list."""

import click

from ..config import create_session, list_sessions, load_session
from ..core import resolve_layout
from ..tmux import get_tmux_client, materialize
from ..utils.logging import TpError
from .utils import error_handler, output_json, quiet_echo, success_message, verbose_echo


def _sessions_dir(ctx: click.Context) -> str | None:
    settings = ctx.obj.get("settings") if ctx.obj else None
    return settings.sessions_dir if settings else None


def complete_session_names(
    ctx: click.Context, param: click.Parameter, incomplete: str
) -> list[str]:
    """Offer session names from the session directory for shell completion."""
    # Group callbacks do not run during completion, so read the raw option
    directory = ctx.find_root().params.get("sessions_dir")
    try:
        names = list_sessions(directory)
    except (TpError, OSError):
        return []
    return [name for name in names if name.startswith(incomplete)]


@click.command()
@click.argument("name")
@click.pass_context
@error_handler
def new(ctx: click.Context, name: str) -> None:
    """Create a starter session file.

    NAME: Name of the session to create
    """
    path = create_session(name, _sessions_dir(ctx))
    if ctx.obj and ctx.obj.get("json"):
        output_json({"session_name": name, "path": str(path)})
    elif not (ctx.obj and ctx.obj.get("quiet")):
        success_message(f"Created session file {path}")


@click.command()
@click.argument("name", shell_complete=complete_session_names)
@click.pass_context
@error_handler
def load(ctx: click.Context, name: str) -> None:
    """Create a tmux session from its file, or attach if it is running.

    NAME: Name of the session to load
    """
    session = load_session(name, _sessions_dir(ctx))
    layout = resolve_layout(session)
    verbose_echo(
        ctx,
        f"Resolved {len(layout.windows)} window(s), {layout.pane_count} pane(s) "
        f"in {layout.directory}",
    )

    result = materialize(layout, session.name, get_tmux_client())

    if ctx.obj and ctx.obj.get("json"):
        output_json(
            {
                "session_name": result.session_name,
                "created": result.created,
                "windows": [
                    {"index": index, "panes": panes} for index, panes in result.windows
                ],
            }
        )
    elif result.created:
        quiet_echo(
            ctx,
            f"Created session '{result.session_name}' with "
            f"{len(result.windows)} window(s)",
        )
    else:
        quiet_echo(ctx, f"Attached to existing session '{result.session_name}'")


@click.command(name="list")
@click.pass_context
@error_handler
def list_command(ctx: click.Context) -> None:
    """List available sessions."""
    names = list_sessions(_sessions_dir(ctx))
    if ctx.obj and ctx.obj.get("json"):
        output_json(names)
        return

    for name in names:
        click.echo(name)
