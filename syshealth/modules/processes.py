#!/usr/bin/env python3
"""
Process listing, keyword filtering and per-user process management.
"""

import logging
from typing import List

from .base import run_command, privileged, ValidationError, SyshealthError
from .validators import require_user
from ..ui import console

logger = logging.getLogger("syshealth.processes")

PROCESS_ACTIONS = ("list", "count", "top", "kill")
USER_PS_FORMAT = "pid,ppid,%cpu,%mem,etime,cmd"


def list_processes() -> str:
    """Return the full `ps aux` table."""
    return run_command(["ps", "aux"]).stdout


def filter_processes(keyword: str, table: str = None) -> List[str]:
    """Return the process lines containing keyword, case-insensitively."""
    if table is None:
        table = list_processes()
    needle = keyword.lower()
    matches = []
    for line in table.splitlines()[1:]:
        lowered = line.lower()
        if needle not in lowered:
            continue
        # grep helpers searching for the same keyword are noise
        if "grep" in lowered and "grep" not in needle:
            continue
        matches.append(line)
    return matches


def active_processes(keyword: str, table: str = None) -> int:
    """Print processes matching keyword and return how many matched."""
    if table is None:
        table = list_processes()

    if not keyword.strip():
        console.warn("No keyword entered; showing all processes again briefly.")
        console.plain("\n".join(table.splitlines()[:20]))
        return 0

    matches = filter_processes(keyword.strip(), table)
    if not matches:
        console.warn(f"No processes matched keyword '{keyword.strip()}'.")
        return 0

    console.plain("\n".join(matches))
    console.success(f"Matched processes: {len(matches)}")
    return len(matches)


def user_processes(user: str) -> List[str]:
    """Return the process rows owned by user, without the header."""
    result = run_command(["ps", "-u", user, "-o", USER_PS_FORMAT, "--no-headers"], check=False)
    # ps exits 1 when the user has no processes
    return [line for line in result.stdout.splitlines() if line.strip()]


def process_manage(user: str, action: str) -> int:
    """Run one process management action for user."""
    user = require_user(user)
    action = (action or "").strip().lower()
    if action not in PROCESS_ACTIONS:
        raise ValidationError(f"Unknown action '{action}'. Choose one of: {', '.join(PROCESS_ACTIONS)}.")

    if action == "list":
        result = run_command(["ps", "-u", user, "-o", USER_PS_FORMAT], check=False)
        console.plain(result.stdout.rstrip("\n"))
        return 0

    if action == "count":
        count = len(user_processes(user))
        console.success(f"User '{user}' is running {count} process(es).")
        return count

    if action == "top":
        result = run_command(["ps", "-u", user, "-o", USER_PS_FORMAT, "--sort=-%cpu"], check=False)
        console.info(f"Heaviest processes for '{user}':")
        console.plain("\n".join(result.stdout.splitlines()[:6]))
        return 0

    # kill
    result = run_command(privileged(["pkill", "-u", user]), check=False)
    if result.returncode == 1:
        raise SyshealthError(f"No processes found for user '{user}'.")
    if result.returncode != 0:
        raise SyshealthError(f"pkill failed for user '{user}': {result.stderr.strip()}")
    logger.info(f"Signalled processes of {user}")
    console.success(f"Sent SIGTERM to all processes of '{user}'.")
    return 0
