"""Shell completion script generation."""

import click
from click.shell_completion import get_completion_class

from .utils import error_handler

COMPLETE_VAR = "_TP_COMPLETE"
SHELLS = ("bash", "zsh", "fish")


@click.command()
@click.argument("shell", type=click.Choice(SHELLS))
@click.pass_context
@error_handler
def completions(ctx: click.Context, shell: str) -> None:
    """Print the completion script for SHELL.

    \b
    Example:
      eval "$(tp completions zsh)"
    """
    completion_class = get_completion_class(shell)
    root = ctx.find_root()
    prog_name = root.info_name or "tp"
    completion = completion_class(root.command, {}, prog_name, COMPLETE_VAR)
    click.echo(completion.source())
