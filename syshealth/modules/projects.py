#!/usr/bin/env python3
"""
Project scaffolding: numbered project directories with a README, owned by
the target user.
"""

import os
import pwd
import grp
import datetime
import logging
from typing import Dict, List

from .base import run_command, privileged, CommandError
from .validators import require_user, validate_int_range, validate_permissions
from ..ui import console

logger = logging.getLogger("syshealth.projects")

MAX_PROJECTS = 100

README_TEMPLATE = """# {name}

Owner: {user}
Created: {created}

Project workspace created by syshealth.
"""


def project_paths(home: str, projects_dir: str, count: int) -> List[str]:
    base = os.path.join(home, projects_dir)
    return [os.path.join(base, f"project{i}") for i in range(1, count + 1)]


def setup_projects(user: str, count: str, settings) -> Dict[str, List[str]]:
    """Create <count> project directories under the user's home."""
    user = require_user(user)
    total = validate_int_range(count, 1, MAX_PROJECTS, "project count")
    mode = validate_permissions(settings.projects_mode)

    account = pwd.getpwnam(user)
    group = grp.getgrgid(account.pw_gid).gr_name
    created_at = datetime.datetime.now().strftime("%Y-%m-%d %H:%M:%S")

    summary = {"created": [], "skipped": [], "failed": []}

    for path in project_paths(account.pw_dir, settings.projects_dir, total):
        name = os.path.basename(path)
        if os.path.isdir(path):
            console.warn(f"Project directory {path} already exists, skipping.")
            summary["skipped"].append(path)
            continue

        readme = README_TEMPLATE.format(name=name, user=user, created=created_at)
        try:
            run_command(privileged(["mkdir", "-p", path]))
            run_command(privileged(["tee", os.path.join(path, "README.md")]), input_text=readme)
            run_command(privileged(["chown", "-R", f"{user}:{group}", path]))
            run_command(privileged(["chmod", mode, path]))
        except CommandError as e:
            console.warn(f"Failed to set up {path}: {e}")
            summary["failed"].append(path)
            continue

        logger.info(f"Created project {path} for {user}")
        console.success(f"Created {path} (owner {user}:{group}, mode {mode})")
        summary["created"].append(path)

    console.info(
        f"Projects created: {len(summary['created'])}, skipped: {len(summary['skipped'])}, "
        f"failed: {len(summary['failed'])}"
    )
    return summary
