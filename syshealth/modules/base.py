#!/usr/bin/env python3
"""
Command layer shared by every task: running OS utilities, privilege
escalation and the base class for report sections.
"""

import os
import shutil
import subprocess
import logging
from typing import Dict, List, Optional, Callable

from ..config import get_settings
from ..errors import CommandError, SyshealthError, ValidationError
from ..ui import console

logger = logging.getLogger("syshealth")

__all__ = [
    "CommandError", "SyshealthError", "ValidationError", "DiagnosticModule",
    "run_command", "privileged", "command_exists", "require_command", "is_root",
]


def run_command(command: List[str], input_text: Optional[str] = None, check: bool = True,
                timeout: Optional[int] = None) -> subprocess.CompletedProcess:
    """
    Run a command and capture its output as text.

    Args:
        command: Command to run as a list of strings
        input_text: Data written to the command's stdin
        check: Raise CommandError when the command exits non-zero
        timeout: Seconds before the command is abandoned (defaults to settings)

    Returns:
        The completed process
    """
    if timeout is None:
        timeout = get_settings().command_timeout

    logger.info(f"Running: {' '.join(command)}")
    try:
        result = subprocess.run(
            command,
            input=input_text,
            capture_output=True,
            text=True,
            check=False,
            timeout=timeout
        )
    except FileNotFoundError:
        raise CommandError(command)
    except subprocess.TimeoutExpired:
        raise CommandError(command, -1, f"timed out after {timeout} seconds")

    if check and result.returncode != 0:
        raise CommandError(command, result.returncode, result.stderr or "")
    return result


def is_root() -> bool:
    """Check if running with root privileges."""
    return os.geteuid() == 0


def privileged(command: List[str]) -> List[str]:
    """Prefix a root-only command with sudo when we are not root."""
    if is_root() or not get_settings().use_sudo:
        return command
    return ["sudo"] + command


def command_exists(name: str) -> bool:
    return shutil.which(name) is not None


def require_command(name: str) -> bool:
    """Return True when the tool is installed, warning the user otherwise."""
    if not command_exists(name):
        console.warn(f"Command '{name}' not found. Install it to enable related features.")
        return False
    return True


class DiagnosticModule:
    """Base class for all report sections."""

    def __init__(self, name: str, description: str):
        self.name = name
        self.description = description
        self.enabled = True

    def run(self) -> Dict[str, str]:
        """Run the diagnostic commands and return results keyed by section header."""
        raise NotImplementedError("Subclasses must implement this method")

    def safe_run_command(self, command: List[str], head_lines: int = 0,
                         filter_func: Optional[Callable[[str], bool]] = None) -> str:
        """
        Run a command, never raising, and return its output.

        Args:
            command: Command to run as a list of strings
            head_lines: Number of first lines to keep (0 for all)
            filter_func: Function to filter lines (should return True to keep line)

        Returns:
            Command output, or an "Error:" line describing the failure
        """
        try:
            result = run_command(command, check=False)
        except CommandError as e:
            return f"Error: {e}"

        if result.returncode != 0:
            return f"Error: {result.stderr.strip() or result.stdout.strip()}"

        lines = result.stdout.splitlines()
        if filter_func:
            lines = [line for line in lines if filter_func(line)]
        if head_lines > 0:
            lines = lines[:head_lines]
        return "\n".join(lines)

    def safe_read_file(self, file_path: str, head_lines: int = 0,
                       filter_func: Optional[Callable[[str], bool]] = None) -> str:
        """Read a file the same way safe_run_command reads command output."""
        try:
            with open(file_path, 'r') as f:
                lines = f.read().splitlines()
        except FileNotFoundError:
            return f"File not found: {file_path}"
        except PermissionError:
            return f"Permission denied: {file_path}"
        except OSError as e:
            return f"Failed to read file {file_path}: {e}"

        if filter_func:
            lines = [line for line in lines if filter_func(line)]
        if head_lines > 0:
            lines = lines[:head_lines]
        return "\n".join(lines)
