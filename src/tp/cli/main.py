"""Main CLI entry point for tp."""

from pathlib import Path

import click

from .. import __version__
from ..config import load_settings
from ..utils.logging import ConfigurationError, setup_logging
from .completions import completions
from .sessions import list_command, load, new
from .utils import handle_error


@click.group(name="tp")
@click.version_option(version=__version__, prog_name="tp")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output")
@click.option("--json", is_flag=True, help="Output in JSON format")
@click.option(
    "--sessions-dir",
    type=click.Path(file_okay=False),
    help="Directory holding session files (overrides TP_SESSIONS_DIR)",
)
@click.option("--log-level", help="Override log_level setting")
@click.pass_context
def main(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    json: bool,
    sessions_dir: str | None,
    log_level: str | None,
) -> None:
    """A simple tmux project loader.

    Sessions are described by YAML files, one per session, in
    ~/.config/tp or the directory named by TP_SESSIONS_DIR.

    \b
    - new: create a starter session file
    - load: create a session from its file, or attach if running
    - list: list available sessions
    - completions: print a shell completion script
    """
    # Validate conflicting options
    if verbose and quiet:
        raise click.UsageError("Cannot use both --verbose and --quiet options")

    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["json"] = json

    cli_overrides = {
        "sessions_dir": sessions_dir,
        "log_level": "DEBUG" if verbose else log_level,
    }
    try:
        settings = load_settings(cli_overrides)
    except ConfigurationError as e:
        handle_error(e.message)
        return

    ctx.obj["settings"] = settings
    setup_logging(
        settings.log_level,
        log_file=Path(settings.log_file).expanduser() if settings.log_file else None,
        enable_structured=settings.log_format == "json",
    )


main.add_command(new)
main.add_command(load)
main.add_command(list_command)
main.add_command(completions)


if __name__ == "__main__":
    main()
