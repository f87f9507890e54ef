"""Command line tests."""

from __future__ import annotations

from pathlib import Path
from unittest import mock

import pytest

from procstream import __version__, cli


@pytest.fixture
def find_paths():
    with mock.patch.object(cli, "find_executable_paths") as patched:
        yield patched


class TestWhich:
    """Test the which subcommand."""

    def test_prints_first_match(self, find_paths, capsys):
        find_paths.return_value = [Path("/usr/bin/git")]

        assert cli.main(["which", "git"]) == 0

        find_paths.assert_called_once_with("git", max_results=1)
        assert capsys.readouterr().out.splitlines() == [str(Path("/usr/bin/git"))]

    def test_all(self, find_paths, capsys):
        find_paths.return_value = [Path("/a/git"), Path("/b/git")]

        assert cli.main(["which", "git", "--all"]) == 0

        find_paths.assert_called_once_with("git", max_results=None)
        assert len(capsys.readouterr().out.splitlines()) == 2

    def test_max(self, find_paths):
        find_paths.return_value = [Path("/a/git")]
        cli.main(["which", "git", "--max", "3"])
        find_paths.assert_called_once_with("git", max_results=3)

    def test_not_found(self, find_paths, capsys):
        find_paths.return_value = []
        assert cli.main(["which", "nothing"]) == 1
        assert capsys.readouterr().out == ""

    @pytest.mark.parametrize("value", ["0", "-2", "many"])
    def test_invalid_max(self, value: str, find_paths):
        with pytest.raises(SystemExit) as exc_info:
            cli.main(["which", "git", "--max", value])
        assert exc_info.value.code == 2
        find_paths.assert_not_called()

    def test_all_and_max_conflict(self, find_paths):
        with pytest.raises(SystemExit):
            cli.main(["which", "git", "--all", "--max", "2"])


class TestParser:
    """Test top-level options."""

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            cli.main(["--version"])
        assert exc_info.value.code == 0
        assert __version__ in capsys.readouterr().out

    def test_command_required(self):
        with pytest.raises(SystemExit):
            cli.main([])
