"""tp: a simple tmux project loader."""

__version__ = "0.1.0"

from .config.models import PaneConfig, SessionConfig, WindowConfig
from .core.layout import ResolvedLayout, resolve_layout
from .tmux.service import materialize

__all__ = [
    "PaneConfig",
    "ResolvedLayout",
    "SessionConfig",
    "WindowConfig",
    "__version__",
    "materialize",
    "resolve_layout",
]
