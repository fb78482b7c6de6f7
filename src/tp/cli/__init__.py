"""Command line interface for tp."""

from .main import main

__all__ = ["main"]
