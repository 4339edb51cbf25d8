#!/usr/bin/env python3
"""
Daily cron job setup for the current user.
"""

import os
import getpass
import logging
from typing import List

from .base import run_command, require_command, SyshealthError, ValidationError
from .validators import require_non_empty, validate_int_range
from ..ui import console

logger = logging.getLogger("syshealth.scheduler")


def cron_entry(script_path: str, minute: int, hour: int) -> str:
    return f"{minute} {hour} * * * {script_path} >/dev/null 2>&1"


def current_crontab() -> List[str]:
    """Return the installed crontab lines; a missing crontab reads as empty."""
    result = run_command(["crontab", "-l"], check=False)
    if result.returncode != 0:
        return []
    return result.stdout.splitlines()


def merge_crontab(lines: List[str], script_path: str, entry: str) -> str:
    """Replace any entry mentioning script_path with the new one."""
    kept = [line for line in lines if script_path not in line]
    return "\n".join(kept + [entry]) + "\n"


def schedule_cron(script_path: str, minute: str, hour: str) -> str:
    """Install a daily cron job running script_path at hour:minute."""
    script_path = (script_path or "").strip()
    if not script_path or not os.path.isfile(script_path):
        raise ValidationError("Script path is empty or not a file. Aborting.")
    script_path = os.path.abspath(script_path)

    minute = validate_int_range(require_non_empty(minute, "Minute"), 0, 59, "minute")
    hour = validate_int_range(require_non_empty(hour, "Hour"), 0, 23, "hour")

    if not require_command("crontab"):
        raise SyshealthError("crontab not available. Install cron to schedule tasks.")

    entry = cron_entry(script_path, minute, hour)
    console.info(f"Cron entry to add: {entry}")

    run_command(["crontab", "-"], input_text=merge_crontab(current_crontab(), script_path, entry))
    logger.info(f"Installed cron entry: {entry}")
    console.success(f"Cron job added for {getpass.getuser()} to run {script_path} at {hour}:{minute:02d} daily.")
    return entry
