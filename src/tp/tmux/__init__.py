"""
tmux session management for tp.

This package provides:
- The MuxClient protocol and its libtmux implementation
- Materialization of resolved layouts into tmux sessions
"""

from ..utils.logging import MaterializeError, TmuxError
from .client import MuxClient, TmuxClient, get_tmux_client
from .service import MaterializeResult, Operation, materialize, plan_operations

__all__ = [
    "MaterializeError",
    "MaterializeResult",
    "MuxClient",
    "Operation",
    "TmuxClient",
    "TmuxError",
    "get_tmux_client",
    "materialize",
    "plan_operations",
]
