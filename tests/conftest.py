"""
Pytest configuration and shared fixtures for tp tests.
"""

import sys
from pathlib import Path

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from tp.utils.logging import TmuxError


class RecordingClient:
    """MuxClient fake that records every call in order.

    Args:
        existing: Names of sessions reported as already running
        fail_on: Method name that raises TmuxError when called
    """

    def __init__(self, existing: tuple[str, ...] = (), fail_on: str | None = None):
        self.sessions = set(existing)
        self.fail_on = fail_on
        self.calls: list[tuple] = []

    def _record(self, method: str, *args) -> None:
        self.calls.append((method, *args))
        if method == self.fail_on:
            raise TmuxError(f"{method} exited with status 1", operation=method)

    @property
    def methods(self) -> list[str]:
        return [call[0] for call in self.calls]

    def session_exists(self, session):
        self._record("session_exists", session)
        return session in self.sessions

    def new_session(self, session, directory, window_name=None):
        self._record("new_session", session, directory, window_name)
        self.sessions.add(session)

    def new_window(self, session, name, directory):
        self._record("new_window", session, name, directory)

    def split_pane(self, session, window, directory):
        self._record("split_pane", session, window, directory)

    def send_command(self, session, window, pane, command):
        self._record("send_command", session, window, pane, command)

    def select_pane(self, session, window, pane):
        self._record("select_pane", session, window, pane)

    def switch_or_attach(self, session):
        self._record("switch_or_attach", session)


@pytest.fixture
def recording_client() -> RecordingClient:
    """Provide a fresh recording client with no running sessions."""
    return RecordingClient()


@pytest.fixture
def sessions_dir(tmp_path, monkeypatch) -> Path:
    """Point TP_SESSIONS_DIR at an empty temporary directory."""
    directory = tmp_path / "sessions"
    directory.mkdir()
    monkeypatch.setenv("TP_SESSIONS_DIR", str(directory))
    return directory


@pytest.fixture
def workdir(tmp_path, monkeypatch) -> Path:
    """Run the test from a dedicated working directory."""
    directory = tmp_path / "work"
    directory.mkdir()
    monkeypatch.chdir(directory)
    return directory


@pytest.fixture
def make_client():
    """Provide the RecordingClient class for tests needing custom setups."""
    return RecordingClient
