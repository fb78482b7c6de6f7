"""CLI utilities for output formatting and common functionality."""

import json
import sys
from collections.abc import Callable
from functools import wraps
from typing import Any

import click

from ..utils.logging import LogContext, TpError, get_logger

logger = get_logger(__name__, LogContext.CLI)


def error_handler(func: Callable[..., Any]) -> Callable[..., Any]:
    """Decorator rendering errors as a single line on stderr and exiting."""

    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except TpError as e:
            logger.debug(
                f"{type(e).__name__} in {func.__name__}", error_context=e.context
            )
            message = _one_line(e.message)
            click.echo(click.style(f"Error: {message}", fg="red"), err=True)
            sys.exit(1)
        except Exception as e:
            logger.debug(f"Unexpected error in {func.__name__}", exception=e)
            message = _one_line(str(e))
            click.echo(click.style(f"Unexpected error: {message}", fg="red"), err=True)
            sys.exit(1)

    return wrapper


def _one_line(message: str) -> str:
    return " ".join(part.strip() for part in message.splitlines() if part.strip())


def success_message(message: str) -> None:
    """Display a success message."""
    click.echo(click.style(f"✓ {message}", fg="green"))


def output_json(data: Any) -> None:
    """Output data as JSON."""
    click.echo(json.dumps(data, indent=2))


def handle_error(message: str, exit_code: int = 1) -> None:
    """Handle errors with consistent formatting."""
    click.echo(click.style(f"Error: {message}", fg="red"), err=True)
    sys.exit(exit_code)


def verbose_echo(ctx: click.Context, message: str) -> None:
    """Echo message only if verbose mode is enabled."""
    if ctx.obj and ctx.obj.get("verbose"):
        click.echo(click.style(f"[VERBOSE] {message}", fg="blue"), err=True)


def quiet_echo(ctx: click.Context, message: str) -> None:
    """Echo message only if not in quiet mode."""
    if not (ctx.obj and ctx.obj.get("quiet")):
        click.echo(message)
