"""Unit tests for directory resolution."""

from pathlib import Path

import pytest

from tp.core.paths import resolve_directory
from tp.utils.logging import PathResolutionError


class TestResolveDirectory:
    """Test resolve_directory."""

    def test_unset_returns_inherited(self, tmp_path):
        """An unset directory falls through to the inherited one unchanged."""
        inherited = tmp_path / "inherited"
        assert resolve_directory(None, inherited, cwd=tmp_path) == inherited

    def test_absolute_overrides_inherited(self, tmp_path):
        """An absolute directory replaces the inherited one."""
        result = resolve_directory("/srv/app", tmp_path / "inherited", cwd=tmp_path)
        assert result == Path("/srv/app")

    def test_relative_resolves_against_cwd_not_inherited(self, tmp_path):
        """Relative directories do not compound on the inherited directory."""
        result = resolve_directory("src", Path("/somewhere/else"), cwd=tmp_path)
        assert result == tmp_path / "src"

    def test_dot_is_cwd(self, tmp_path):
        """'.' resolves to the working directory itself."""
        assert resolve_directory(".", Path("/other"), cwd=tmp_path) == tmp_path

    def test_defaults_to_process_cwd(self, workdir):
        """Without an explicit cwd the process working directory is used."""
        result = resolve_directory("logs", Path("/other"))
        assert result == Path.cwd() / "logs"

    def test_path_is_normalized(self, tmp_path):
        """Parent references and duplicate separators are collapsed."""
        result = resolve_directory("./a/../b//c", Path("/other"), cwd=tmp_path)
        assert result == tmp_path / "b" / "c"

    def test_home_shorthand_is_expanded(self, tmp_path, monkeypatch):
        """'~/x' expands against the user's home directory."""
        home = tmp_path / "home"
        monkeypatch.setenv("HOME", str(home))
        result = resolve_directory("~/code/project", Path("/other"), cwd=tmp_path)
        assert result == home / "code" / "project"

    def test_bare_home_marker(self, tmp_path, monkeypatch):
        """'~' on its own is the home directory."""
        home = tmp_path / "home"
        monkeypatch.setenv("HOME", str(home))
        assert resolve_directory("~", Path("/other"), cwd=tmp_path) == home

    def test_unexpandable_home_raises(self, tmp_path, monkeypatch):
        """A home shorthand that cannot be expanded is a resolution error."""
        monkeypatch.setattr("tp.core.paths.os.path.expanduser", lambda path: path)

        with pytest.raises(PathResolutionError) as exc_info:
            resolve_directory("~/code", Path("/other"), cwd=tmp_path)

        assert "~/code" in exc_info.value.message
        assert exc_info.value.context == {"directory": "~/code"}

    def test_tilde_inside_path_is_literal(self, tmp_path):
        """Only a leading '~' is treated as the home shorthand."""
        result = resolve_directory("backup~/x", Path("/other"), cwd=tmp_path)
        assert result == tmp_path / "backup~" / "x"
