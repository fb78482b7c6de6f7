"""Integration tests for the new/load workflow through the tmux client."""

from unittest.mock import Mock, patch

import pytest
from click.testing import CliRunner
from libtmux import exc as libtmux_exc

from tp.cli.main import main
from tp.tmux import client as client_module


class FakePane:
    """Pane recording the tmux commands sent to it."""

    def __init__(self, window):
        self.window = window

    @property
    def label(self):
        return f"{self.window.label}.{self.window.panes.index(self)}"

    def cmd(self, *args):
        self.window.session.server.commands.append((self.label, *args))
        if args[0] == "split-window":
            position = self.window.panes.index(self) + 1
            self.window.panes.insert(position, FakePane(self.window))
        return Mock(stdout=[], stderr=[])


class FakeWindow:
    def __init__(self, session, name, directory):
        self.session = session
        self.name = name
        self.directory = directory
        self.panes = [FakePane(self)]

    @property
    def label(self):
        return f"{self.session.name}:{self.session.windows.index(self)}"

    def cmd(self, *args):
        self.session.server.commands.append((self.label, *args))
        return Mock(stdout=[], stderr=[])


class FakeSession:
    def __init__(self, server, name):
        self.server = server
        self.name = name
        self.windows = []

    def new_window(self, window_name=None, start_directory=None, attach=True):
        if self.server.window_error:
            raise libtmux_exc.LibTmuxException(self.server.window_error)
        window = FakeWindow(self, window_name, start_directory)
        self.windows.append(window)
        return window


class FakeSessions(list):
    def get(self, default=None, **kwargs):
        for session in self:
            if session.name == kwargs["session_name"]:
                return session
        return default


class FakeServer:
    """In-memory stand-in for a tmux server."""

    def __init__(self):
        self.sessions = FakeSessions()
        self.commands = []
        self.created = []
        self.window_error = None

    def has_session(self, name, exact=True):
        return self.sessions.get(session_name=name) is not None

    def new_session(self, session_name, start_directory, window_name, attach):
        self.created.append((session_name, start_directory, window_name))
        session = FakeSession(self, session_name)
        session.windows.append(FakeWindow(session, window_name, start_directory))
        self.sessions.append(session)
        return session

    def cmd(self, *args):
        self.commands.append(("server", *args))
        return Mock(stdout=[], stderr=[])


class TestLoadWorkflow:
    """Drive the CLI end to end against an in-memory tmux server."""

    @pytest.fixture(autouse=True)
    def no_logging_setup(self):
        with patch("tp.cli.main.setup_logging"):
            yield

    @pytest.fixture
    def tmux_server(self, monkeypatch):
        """Serve every TmuxClient from one fake server."""
        monkeypatch.setattr(client_module, "_tmux_client", None)
        monkeypatch.setenv("TMUX", "/tmp/tmux-1000/default,1,0")
        server = FakeServer()

        with patch("tp.tmux.client.libtmux.Server", return_value=server):
            yield server

    def test_new_then_load_then_reload(self, sessions_dir, workdir, tmux_server):
        runner = CliRunner()

        result = runner.invoke(main, ["new", "my-session"])
        assert result.exit_code == 0

        result = runner.invoke(main, ["load", "my-session"])
        assert result.exit_code == 0, result.output
        assert "Created session 'my-session'" in result.output

        assert tmux_server.created == [("my-session", str(workdir), "shell")]
        assert tmux_server.commands == [
            ("my-session:0.0", "send-keys", "-l", "echo 'Hello :)'"),
            ("my-session:0.0", "send-keys", "Enter"),
            ("my-session:0", "select-window"),
            ("my-session:0.0", "select-pane"),
            ("server", "switch-client", "-t", "my-session"),
        ]

        tmux_server.commands.clear()
        result = runner.invoke(main, ["load", "my-session"])

        assert result.exit_code == 0
        assert "Attached to existing session 'my-session'" in result.output
        assert len(tmux_server.created) == 1
        assert tmux_server.commands == [
            ("server", "switch-client", "-t", "my-session")
        ]

    def test_multi_window_layout(self, sessions_dir, workdir, tmux_server):
        (sessions_dir / "stack.yaml").write_text(
            "name: stack\n"
            "directory: /srv/stack\n"
            "windows:\n"
            "  - name: code\n"
            "    panes:\n"
            "      - command: vim\n"
            "      - directory: /srv/stack/tests\n"
            "        focus: true\n"
            "      - command: make watch\n"
            "  - name: logs\n"
            "    directory: /var/log\n"
            "    panes:\n"
            "      - command: tail -f syslog\n"
        )

        result = CliRunner().invoke(main, ["load", "stack"])

        assert result.exit_code == 0, result.output
        session = tmux_server.sessions.get(session_name="stack")
        assert [w.name for w in session.windows] == ["code", "logs"]
        assert session.windows[1].directory == "/var/log"
        assert len(session.windows[0].panes) == 3
        assert tmux_server.commands == [
            ("stack:0.0", "split-window", "-c", "/srv/stack/tests"),
            ("stack:0.1", "split-window", "-c", "/srv/stack"),
            ("stack:0.0", "send-keys", "-l", "vim"),
            ("stack:0.0", "send-keys", "Enter"),
            ("stack:0.2", "send-keys", "-l", "make watch"),
            ("stack:0.2", "send-keys", "Enter"),
            ("stack:1.0", "send-keys", "-l", "tail -f syslog"),
            ("stack:1.0", "send-keys", "Enter"),
            ("stack:0", "select-window"),
            ("stack:0.1", "select-pane"),
            ("server", "switch-client", "-t", "stack"),
        ]

    def test_tmux_error_aborts_load(self, sessions_dir, workdir, tmux_server):
        (sessions_dir / "s.yaml").write_text("name: s\nwindows: [{}, {}]\n")
        tmux_server.window_error = "no space for new window"

        result = CliRunner().invoke(main, ["load", "s"])

        assert result.exit_code == 1
        assert "Error: new_window failed for s:1" in result.output
        assert "no space for new window" in result.output
        sent = [command[1] for command in tmux_server.commands]
        assert "switch-client" not in sent
