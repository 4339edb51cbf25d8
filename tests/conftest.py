"""Shared fixtures: isolated settings and a recording stand-in for subprocess.run."""

import shutil
import subprocess
from pathlib import Path
from typing import Callable, Dict, List, Optional, Tuple, Union

import pytest

from syshealth import config
from syshealth.modules import base

Response = Union[Tuple[int, str, str], Callable[[List[str], Optional[str]], Tuple[int, str, str]]]


class FakeCommands:
    """Record every command and answer with canned (returncode, stdout, stderr)."""

    def __init__(self) -> None:
        self.calls: List[List[str]] = []
        self.inputs: List[Optional[str]] = []
        self.responses: Dict[Tuple[str, ...], Response] = {}
        self.missing: set = set()

    def respond(self, prefix: Tuple[str, ...], response: Response) -> None:
        """Answer commands starting with prefix; the longest matching prefix wins."""
        self.responses[prefix] = response

    def commands(self, name: str) -> List[List[str]]:
        return [call for call in self.calls if call[0] == name]

    def which(self, name: str) -> Optional[str]:
        return None if name in self.missing else f"/usr/bin/{name}"

    def run(self, command, input=None, **kwargs) -> subprocess.CompletedProcess:
        self.calls.append(list(command))
        self.inputs.append(input)
        if command[0] in self.missing:
            raise FileNotFoundError(command[0])

        matches = [p for p in self.responses if tuple(command[: len(p)]) == p]
        if not matches:
            return subprocess.CompletedProcess(command, 0, "", "")
        response = self.responses[max(matches, key=len)]
        if callable(response):
            response = response(list(command), input)
        returncode, stdout, stderr = response
        return subprocess.CompletedProcess(command, returncode, stdout, stderr)


@pytest.fixture
def settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> config.Settings:
    """Settings with reports under tmp_path and sudo disabled."""
    config_file = tmp_path / "syshealth.conf"
    config_file.write_text(
        "[output]\n"
        f"directory = {tmp_path / 'reports'}\n"
        "[commands]\n"
        "use_sudo = false\n"
        "[ssh]\n"
        f"key_path = {tmp_path / 'keys' / 'id_rsa_test'}\n"
    )
    monkeypatch.setattr(config, "SYSTEM_CONFIG", str(tmp_path / "missing-system.conf"))
    monkeypatch.setattr(config, "USER_CONFIG", str(tmp_path / "missing-user.conf"))
    monkeypatch.delenv(config.ENV_VAR, raising=False)
    return config.load_settings(str(config_file))


@pytest.fixture
def fake_commands(settings: config.Settings, monkeypatch: pytest.MonkeyPatch) -> FakeCommands:
    """Replace subprocess.run and shutil.which for the command layer."""
    fake = FakeCommands()
    monkeypatch.setattr(base.subprocess, "run", fake.run)
    monkeypatch.setattr(shutil, "which", fake.which)
    return fake
