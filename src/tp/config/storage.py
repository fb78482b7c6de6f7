"""Session file storage: locating, reading, writing and listing session files."""

import os
from pathlib import Path

import yaml
from pydantic import ValidationError

from ..utils.logging import (
    ConfigExistsError,
    ConfigNotFoundError,
    ConfigParseError,
    ConfigurationError,
    LogContext,
    get_logger,
)
from .models import SessionConfig, scaffold_session

logger = get_logger(__name__, LogContext.CONFIG)

SESSIONS_DIR_ENV = "TP_SESSIONS_DIR"
DEFAULT_SESSIONS_DIR = Path(".config") / "tp"
SESSION_FILE_EXT = ".yaml"


def sessions_dir(override: str | Path | None = None) -> Path:
    """Return the directory holding session files.

    Args:
        override: Explicit directory, takes precedence over the environment

    Returns:
        Session directory path (not necessarily existing)

    Raises:
        ConfigurationError: If no directory can be determined
    """
    if override:
        return Path(override).expanduser()

    env_dir = os.environ.get(SESSIONS_DIR_ENV)
    if env_dir:
        return Path(env_dir).expanduser()

    try:
        return Path.home() / DEFAULT_SESSIONS_DIR
    except RuntimeError as e:
        raise ConfigurationError(f"invalid session directory: {e}") from e


def session_path(name: str, directory: str | Path | None = None) -> Path:
    """Return the path of the session file for ``name``."""
    return sessions_dir(directory) / f"{name}{SESSION_FILE_EXT}"


def parse_session(content: str, source: str = "<string>") -> SessionConfig:
    """Parse YAML content into a SessionConfig.

    Raises:
        ConfigParseError: On invalid YAML, a non-mapping document or a
            schema violation (including unknown keys)
    """
    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigParseError(
            f"Invalid YAML in session file {source}: {e}", {"source": source}
        ) from e

    if not isinstance(data, dict):
        raise ConfigParseError(
            f"Invalid session file {source}: expected a mapping at the top level",
            {"source": source},
        )

    try:
        return SessionConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigParseError(
            f"Invalid session file {source}: {e}", {"source": source}
        ) from e


def load_session(name: str, directory: str | Path | None = None) -> SessionConfig:
    """Load the session file for ``name``.

    Raises:
        ConfigNotFoundError: If the session file does not exist
        ConfigParseError: If the file cannot be parsed
        ConfigurationError: If the file cannot be read
    """
    path = session_path(name, directory)
    if not path.is_file():
        raise ConfigNotFoundError(
            f"Session '{name}' not found at {path}. Run 'tp new {name}' to create it.",
            {"path": str(path)},
        )

    try:
        content = path.read_text()
    except OSError as e:
        raise ConfigurationError(
            f"Failed to read session file {path}: {e}", {"path": str(path)}
        ) from e

    session = parse_session(content, str(path))
    logger.debug("Session file loaded", path=str(path), session_name=session.name)
    return session


def dump_session(session: SessionConfig) -> str:
    """Serialize a SessionConfig to YAML, omitting unset fields."""
    data = session.model_dump(exclude_none=True)
    return yaml.safe_dump(data, default_flow_style=False, sort_keys=False)


def create_session(name: str, directory: str | Path | None = None) -> Path:
    """Write a starter session file for ``name``.

    Returns:
        Path of the written file

    Raises:
        ConfigExistsError: If the session file already exists
        ConfigurationError: If the file cannot be written
    """
    session = scaffold_session(name)
    path = session_path(name, directory)
    if path.exists():
        raise ConfigExistsError(
            f"Session '{name}' already exists at {path}", {"path": str(path)}
        )

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        # "x" refuses to overwrite a file created since the check above
        with open(path, "x") as f:
            f.write(dump_session(session))
    except FileExistsError as e:
        raise ConfigExistsError(
            f"Session '{name}' already exists at {path}", {"path": str(path)}
        ) from e
    except OSError as e:
        raise ConfigurationError(
            f"Failed to write session file {path}: {e}", {"path": str(path)}
        ) from e

    logger.info("Session file created", path=str(path), session_name=name)
    return path


def list_sessions(directory: str | Path | None = None) -> list[str]:
    """List session names found in the session directory, sorted."""
    root = sessions_dir(directory)
    if not root.is_dir():
        logger.debug("Session directory does not exist", path=str(root))
        return []

    return sorted(
        path.stem
        for path in root.iterdir()
        if path.is_file() and path.suffix == SESSION_FILE_EXT
    )
