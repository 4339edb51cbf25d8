#!/usr/bin/env python3
"""
Exception hierarchy for the System Health Toolkit.
"""

from typing import List, Optional


class SyshealthError(Exception):
    """Base class for every failure reported to the user."""


class ValidationError(SyshealthError):
    """User supplied input was rejected before any command ran."""


class ConfigError(SyshealthError):
    """A configuration file could not be parsed."""


class CommandError(SyshealthError):
    """An external command could not be started or exited non-zero."""

    def __init__(self, command: List[str], returncode: Optional[int] = None, stderr: str = ""):
        self.command = command
        self.returncode = returncode
        self.stderr = stderr.strip()

        if returncode is None:
            message = f"Command not found: {command[0]}"
        else:
            message = f"Command {' '.join(command)} failed with code {returncode}"
            if self.stderr:
                message += f": {self.stderr}"
        super().__init__(message)
