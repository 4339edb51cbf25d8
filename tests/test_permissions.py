"""Tests for permission and ownership changes."""

import os
import pwd
from pathlib import Path

import pytest

from syshealth.modules import permissions
from syshealth.modules.base import CommandError, ValidationError

from conftest import FakeCommands


@pytest.fixture
def accounts(monkeypatch: pytest.MonkeyPatch) -> None:
    """Accept alice/bob as users and devs as a group."""
    def require_user(name: str) -> str:
        if name not in ("alice", "bob"):
            raise ValidationError(f"User '{name}' does not exist.")
        return name

    def require_group(name: str) -> str:
        if name != "devs":
            raise ValidationError(f"Group '{name}' does not exist.")
        return name

    monkeypatch.setattr(permissions, "require_user", require_user)
    monkeypatch.setattr(permissions, "require_group", require_group)
    monkeypatch.setattr(permissions, "describe_access", lambda user, path: f"'{user}' owns {path}")


class TestPermOwner:
    """Verify chmod/chown orchestration."""

    def test_applies_mode_and_owner(self, tmp_path: Path, fake_commands: FakeCommands, accounts: None) -> None:
        """chmod then chown run on the path, and the listing is returned."""
        target = tmp_path / "shared"
        target.mkdir()
        fake_commands.respond(("ls",), (0, f"drwxr-x--- 2 bob devs 4096 Jan 1 00:00 {target}\n", ""))

        listing = permissions.perm_owner("alice", str(target), "750", "bob", "devs")

        assert fake_commands.calls[:2] == [
            ["chmod", "750", str(target)],
            ["chown", "bob:devs", str(target)],
        ]
        assert listing.startswith("drwxr-x---")

    @pytest.mark.parametrize("perms", ["75", "888", "rwx"])
    def test_invalid_permissions(self, tmp_path: Path, fake_commands: FakeCommands,
                                 accounts: None, perms: str) -> None:
        """Bad modes are rejected before any command runs."""
        with pytest.raises(ValidationError, match="Invalid permissions"):
            permissions.perm_owner("alice", str(tmp_path), perms, "bob", "devs")
        assert fake_commands.calls == []

    def test_missing_path(self, tmp_path: Path, fake_commands: FakeCommands, accounts: None) -> None:
        """The path must exist."""
        with pytest.raises(ValidationError, match="does not exist"):
            permissions.perm_owner("alice", str(tmp_path / "gone"), "755", "bob", "devs")

    def test_unknown_owner(self, tmp_path: Path, fake_commands: FakeCommands, accounts: None) -> None:
        """The owner must be an existing user."""
        with pytest.raises(ValidationError, match="User 'mallory' does not exist"):
            permissions.perm_owner("alice", str(tmp_path), "755", "mallory", "devs")

    def test_unknown_group(self, tmp_path: Path, fake_commands: FakeCommands, accounts: None) -> None:
        """The group must exist."""
        with pytest.raises(ValidationError, match="Group 'ops' does not exist"):
            permissions.perm_owner("alice", str(tmp_path), "755", "bob", "ops")

    def test_chmod_failure_propagates(self, tmp_path: Path, fake_commands: FakeCommands, accounts: None) -> None:
        """A failing chmod stops before chown."""
        fake_commands.respond(("chmod",), (1, "", "Operation not permitted"))
        with pytest.raises(CommandError, match="Operation not permitted"):
            permissions.perm_owner("alice", str(tmp_path), "755", "bob", "devs")
        assert not fake_commands.commands("chown")


class TestDescribeAccess:
    """Verify the access summary."""

    def test_owner(self, tmp_path: Path) -> None:
        """The creating user owns a fresh file."""
        path = tmp_path / "mine.txt"
        path.write_text("x")
        me = pwd.getpwuid(os.getuid()).pw_name
        assert permissions.describe_access(me, str(path)) == f"'{me}' owns {path}"
