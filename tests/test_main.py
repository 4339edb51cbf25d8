"""Tests for command line parsing and exit codes."""

from pathlib import Path

import pytest

from syshealth import main as cli
from syshealth import __version__
from syshealth.errors import ValidationError


@pytest.fixture
def run(settings, tmp_path: Path):
    """Invoke main with the isolated test configuration."""
    config_file = str(tmp_path / "syshealth.conf")

    def invoke(*argv: str) -> int:
        return cli.main(["--config", config_file, *argv])
    return invoke


class TestParser:
    """Verify the command line surface."""

    def test_modes(self) -> None:
        """Every mode is a subcommand with its positional arguments."""
        parser = cli.build_parser()
        args = parser.parse_args(["perm_owner", "bob", "/srv", "750", "bob", "staff"])
        assert (args.mode, args.user, args.path, args.perms, args.owner, args.group) == (
            "perm_owner", "bob", "/srv", "750", "bob", "staff")
        assert parser.parse_args(["sys_report", "out.json", "-f", "json"]).format == "json"
        assert parser.parse_args([]).mode is None

    def test_missing_argument_exits_one(self, capsys: pytest.CaptureFixture) -> None:
        """A mode missing its arguments is a usage error with status 1."""
        with pytest.raises(SystemExit) as excinfo:
            cli.main(["setup_projects", "bob"])
        assert excinfo.value.code == 1
        assert "usage: syshealth setup_projects" in capsys.readouterr().err

    def test_unknown_choice_exits_one(self) -> None:
        """An invalid option value is also a usage error with status 1."""
        with pytest.raises(SystemExit) as excinfo:
            cli.main(["sys_report", "out.txt", "--format", "xml"])
        assert excinfo.value.code == 1


class TestExitCodes:
    """Verify modes map to 0 on success and 1 on failure."""

    def test_help(self, run, capsys: pytest.CaptureFixture) -> None:
        """help prints usage and succeeds."""
        assert run("help") == 0
        assert "add_users" in capsys.readouterr().out

    def test_version(self, capsys: pytest.CaptureFixture) -> None:
        """--version prints the package version."""
        assert cli.main(["--version"]) == 0
        assert __version__ in capsys.readouterr().out

    def test_add_users_missing_file(self, run, tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
        """A missing user list is an error."""
        assert run("add_users", str(tmp_path / "users.txt")) == 1
        assert "not found" in capsys.readouterr().out

    @pytest.mark.parametrize("failed,expected", [([], 0), (["carol"], 1)])
    def test_add_users_failures(self, run, monkeypatch: pytest.MonkeyPatch, failed, expected) -> None:
        """Any user that could not be created makes the run fail."""
        monkeypatch.setattr(cli, "add_users", lambda path: {"created": ["bob"], "skipped": ["al"], "failed": failed})
        assert run("add_users", "users.txt") == expected

    def test_setup_projects_failures(self, run, monkeypatch: pytest.MonkeyPatch) -> None:
        """A project that could not be created makes the run fail."""
        monkeypatch.setattr(cli, "setup_projects", lambda user, count, settings: {"failed": ["project2"]})
        assert run("setup_projects", "bob", "3") == 1

    def test_sys_report(self, run, monkeypatch: pytest.MonkeyPatch) -> None:
        """sys_report writes to the given file in the chosen format."""
        written = []
        monkeypatch.setattr(cli, "write_system_report", lambda path, fmt: written.append((path, fmt)))
        assert run("sys_report", "report.json", "--format", "json") == 0
        assert written == [("report.json", "json")]

    def test_process_manage_unknown_action(self, run, capsys: pytest.CaptureFixture) -> None:
        """An unknown action is rejected."""
        assert run("process_manage", "root", "explode") == 1
        assert "Unknown action 'explode'" in capsys.readouterr().out

    def test_perm_owner_validation(self, run, monkeypatch: pytest.MonkeyPatch) -> None:
        """Validation errors from perm_owner become exit code 1."""
        def reject(*args):
            raise ValidationError("Invalid permissions '999'.")
        monkeypatch.setattr(cli, "perm_owner", reject)
        assert run("perm_owner", "bob", "/srv", "999", "bob", "staff") == 1

    def test_default_mode_is_menu(self, run, monkeypatch: pytest.MonkeyPatch) -> None:
        """Without a mode the interactive menu runs."""
        class FakeMenu:
            def __init__(self, settings, selector=None):
                self.selector = selector

            def run(self):
                return 0
        monkeypatch.setattr(cli, "HealthMenu", FakeMenu)
        assert run() == 0

    def test_interrupt(self, run, monkeypatch: pytest.MonkeyPatch) -> None:
        """Ctrl+C exits with status 1."""
        def interrupt(path, fmt):
            raise KeyboardInterrupt
        monkeypatch.setattr(cli, "write_system_report", interrupt)
        assert run("sys_report", "out.txt") == 1

    def test_invalid_config(self, settings, tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
        """A malformed configuration file is reported, not raised."""
        bad = tmp_path / "bad.conf"
        bad.write_text("[commands]\ntimeout = soon\n")
        assert cli.main(["--config", str(bad), "help"]) == 1
        assert "Invalid configuration" in capsys.readouterr().out

    def test_non_ascii_digits_rejected(self, run, capsys: pytest.CaptureFixture) -> None:
        """A superscript digit as the project count is a validation failure."""
        assert run("setup_projects", "root", "²") == 1
        assert "Invalid project count" in capsys.readouterr().out
