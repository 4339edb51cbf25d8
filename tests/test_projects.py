"""Tests for project scaffolding."""

import os
from pathlib import Path
from types import SimpleNamespace

import pytest

from syshealth.modules import projects
from syshealth.modules.base import ValidationError

from conftest import FakeCommands


@pytest.fixture
def account(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> SimpleNamespace:
    """A fake 'alice' whose home is under tmp_path."""
    home = tmp_path / "home" / "alice"
    home.mkdir(parents=True)
    entry = SimpleNamespace(pw_name="alice", pw_dir=str(home), pw_gid=os.getgid())
    monkeypatch.setattr(projects, "require_user", lambda name: name)
    monkeypatch.setattr(projects.pwd, "getpwnam", lambda name: entry)
    return entry


def make_dirs(command, _input):
    """Let the fake mkdir really create the directory."""
    os.makedirs(command[-1], exist_ok=True)
    return (0, "", "")


class TestSetupProjects:
    """Verify numbered project creation."""

    def test_creates_each_project(self, settings, fake_commands: FakeCommands, account: SimpleNamespace) -> None:
        """Each project gets a directory, README, owner and mode."""
        fake_commands.respond(("mkdir",), make_dirs)
        summary = projects.setup_projects("alice", "2", settings)

        base = Path(account.pw_dir) / "projects"
        expected = [str(base / "project1"), str(base / "project2")]
        assert summary["created"] == expected
        assert [call[-1] for call in fake_commands.commands("mkdir")] == expected
        assert fake_commands.commands("tee")[0] == ["tee", str(base / "project1" / "README.md")]
        assert fake_commands.commands("chmod")[0] == ["chmod", "750", expected[0]]
        chown = fake_commands.commands("chown")[0]
        assert chown[:2] == ["chown", "-R"]
        assert chown[2].startswith("alice:")

        readme = next(text for text in fake_commands.inputs if text and text.startswith("# project1"))
        assert "Owner: alice" in readme

    def test_existing_projects_are_skipped(self, settings, fake_commands: FakeCommands,
                                           account: SimpleNamespace) -> None:
        """A project directory that already exists is left alone."""
        (Path(account.pw_dir) / "projects" / "project1").mkdir(parents=True)
        summary = projects.setup_projects("alice", "2", settings)
        assert len(summary["skipped"]) == 1
        assert len(summary["created"]) == 1

    def test_failure_continues_with_next(self, settings, fake_commands: FakeCommands,
                                         account: SimpleNamespace) -> None:
        """One failing project does not stop the others."""
        def mkdir(command, _input):
            return (1, "", "Permission denied") if command[-1].endswith("project1") else (0, "", "")

        fake_commands.respond(("mkdir",), mkdir)
        summary = projects.setup_projects("alice", "3", settings)
        assert len(summary["failed"]) == 1
        assert len(summary["created"]) == 2

    @pytest.mark.parametrize("count", ["0", "101", "two", "-3"])
    def test_count_is_validated(self, settings, fake_commands: FakeCommands,
                                account: SimpleNamespace, count: str) -> None:
        """The project count must be between 1 and 100."""
        with pytest.raises(ValidationError, match="project count"):
            projects.setup_projects("alice", count, settings)
        assert fake_commands.calls == []

    def test_configured_mode_and_directory(self, settings, fake_commands: FakeCommands,
                                           account: SimpleNamespace) -> None:
        """Directory name and mode come from settings."""
        settings.projects_dir = "work"
        settings.projects_mode = "700"
        projects.setup_projects("alice", "1", settings)
        assert fake_commands.commands("chmod") == [["chmod", "700", str(Path(account.pw_dir) / "work" / "project1")]]


class TestProjectPaths:
    """Verify project naming."""

    def test_numbering_starts_at_one(self) -> None:
        """Projects are numbered from 1 to count."""
        assert projects.project_paths("/home/a", "projects", 2) == [
            "/home/a/projects/project1",
            "/home/a/projects/project2",
        ]

    def test_unknown_user_rejected(self) -> None:
        """Unknown users are rejected before anything runs."""
        with pytest.raises(ValidationError):
            projects.setup_projects("no_such_user_syshealth", "1", SimpleNamespace(projects_mode="750"))
