#!/usr/bin/env python3
"""
Input validation for usernames, permission modes, numeric ranges and
existence checks against the OS account databases.
"""

import os
import re
import pwd
import grp

from .base import ValidationError

USERNAME_PATTERN = re.compile(r"^[a-z_][a-z0-9_-]{0,31}$")
PERMISSIONS_PATTERN = re.compile(r"^[0-7]{3,4}$")
DIGITS_PATTERN = re.compile(r"^[0-9]+$")


def require_non_empty(value: str, label: str) -> str:
    value = (value or "").strip()
    if not value:
        raise ValidationError(f"{label} cannot be empty.")
    return value


def validate_username(name: str, label: str = "username") -> str:
    """Check a user (or group) name against the portable account name rules."""
    name = require_non_empty(name, label.capitalize())
    if not USERNAME_PATTERN.match(name):
        raise ValidationError(
            f"Invalid {label} format '{name}'. Use lowercase letters, digits, "
            f"dashes, underscores, max 32 chars."
        )
    return name


def validate_permissions(perms: str) -> str:
    perms = require_non_empty(perms, "Permissions")
    if not PERMISSIONS_PATTERN.match(perms):
        raise ValidationError(f"Invalid permissions '{perms}'. Use 3 or 4 octal digits, e.g. 755.")
    return perms


def validate_int_range(value: str, low: int, high: int, label: str) -> int:
    """Parse a plain decimal number and check it lies within [low, high]."""
    text = str(value).strip()
    if not DIGITS_PATTERN.match(text) or not low <= int(text) <= high:
        raise ValidationError(f"Invalid {label}. Enter a number {low}-{high}.")
    return int(text)


def user_exists(name: str) -> bool:
    try:
        pwd.getpwnam(name)
        return True
    except KeyError:
        return False


def group_exists(name: str) -> bool:
    try:
        grp.getgrnam(name)
        return True
    except KeyError:
        return False


def require_user(name: str) -> str:
    name = require_non_empty(name, "User")
    if not user_exists(name):
        raise ValidationError(f"User '{name}' does not exist.")
    return name


def require_group(name: str) -> str:
    name = require_non_empty(name, "Group")
    if not group_exists(name):
        raise ValidationError(f"Group '{name}' does not exist.")
    return name


def require_path(path: str) -> str:
    path = require_non_empty(path, "Path")
    if not os.path.exists(path):
        raise ValidationError(f"Path '{path}' does not exist.")
    return path
