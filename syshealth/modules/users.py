#!/usr/bin/env python3
"""
User and group management: interactive single-user setup and batch creation
from a user list file.
"""

import os
import secrets
import string
import logging
from typing import Dict, List, Optional

from .base import run_command, privileged, is_root, CommandError, ValidationError
from .validators import validate_username, user_exists, group_exists
from ..ui import console

logger = logging.getLogger("syshealth.users")

PASSWORD_ALPHABET = string.ascii_letters + string.digits + "@#$%_-"
PASSWORD_LENGTH = 12
DEFAULT_SHELL = "/bin/bash"


def generate_password(length: int = PASSWORD_LENGTH) -> str:
    return "".join(secrets.choice(PASSWORD_ALPHABET) for _ in range(length))


def set_password(username: str, password: str):
    run_command(privileged(["chpasswd"]), input_text=f"{username}:{password}\n")


def expire_password(username: str) -> bool:
    """Force a password change on first login. Best effort."""
    result = run_command(privileged(["chage", "-d", "0", username]), check=False)
    if result.returncode != 0:
        logger.warning(f"chage failed for {username}: {result.stderr.strip()}")
        return False
    return True


def create_user_with_group(username: str, group: Optional[str] = None,
                           workdir: Optional[str] = None) -> Dict[str, str]:
    """
    Create a user with its own group, a random password and an owned test file.

    Args:
        username: Name of the account to create
        group: Primary group, created when missing (defaults to <username>_grp)
        workdir: Where the ownership test file is written (defaults to cwd)

    Returns:
        The username, group, generated password and test file path
    """
    username = validate_username(username)
    if user_exists(username):
        raise ValidationError(f"User '{username}' already exists.")

    if not is_root():
        console.warn("Creating users requires root privileges. This action will use sudo.")

    group = validate_username((group or "").strip() or f"{username}_grp", "group")

    if not group_exists(group):
        console.info(f"Creating group '{group}' ...")
        run_command(privileged(["groupadd", group]))
    else:
        console.warn(f"Group '{group}' already exists.")

    console.info(f"Creating user '{username}' and adding to group '{group}' ...")
    run_command(privileged(["useradd", "-m", "-s", DEFAULT_SHELL, "-g", group, username]))

    password = generate_password()
    set_password(username, password)
    console.success(f"User '{username}' created with default password: {password}")
    console.warn("Please force user to change password on first login:")
    expire_password(username)

    test_file = os.path.join(workdir or os.getcwd(), f"test_file_for_{username}.txt")
    with open(test_file, "w") as f:
        f.write(f"This is a test file owned by {username}\n")
    run_command(privileged(["chown", f"{username}:{group}", test_file]))
    console.success(f"Test file created and ownership changed: {test_file}")

    return {"username": username, "group": group, "password": password, "test_file": test_file}


def parse_user_list(text: str) -> List[str]:
    """One username per line; blank lines and '#' comments are ignored."""
    names = []
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        names.append(line)
    return names


def add_users(path: str) -> Dict[str, List[str]]:
    """
    Create every account listed in a user list file.

    Existing accounts and malformed names are skipped with a warning; a
    failure for one account does not stop the others.
    """
    if not os.path.isfile(path):
        raise ValidationError(f"User list file '{path}' not found.")

    try:
        with open(path, "r", encoding="utf-8") as f:
            names = parse_user_list(f.read())
    except (OSError, UnicodeDecodeError) as e:
        raise ValidationError(f"Could not read user list file '{path}': {e}") from e

    summary = {"created": [], "skipped": [], "failed": []}

    for name in names:
        try:
            validate_username(name)
        except ValidationError as e:
            console.warn(f"Skipping: {e}")
            summary["skipped"].append(name)
            continue

        if user_exists(name):
            console.warn(f"User '{name}' already exists, skipping.")
            summary["skipped"].append(name)
            continue

        try:
            run_command(privileged(["useradd", "-m", "-s", DEFAULT_SHELL, name]))
            password = generate_password()
            set_password(name, password)
            expire_password(name)
        except CommandError as e:
            console.error(f"Failed to create user '{name}': {e}")
            summary["failed"].append(name)
            continue

        console.success(f"User '{name}' created with default password: {password}")
        summary["created"].append(name)

    console.info(
        f"Users created: {len(summary['created'])}, skipped: {len(summary['skipped'])}, "
        f"failed: {len(summary['failed'])}"
    )
    return summary
