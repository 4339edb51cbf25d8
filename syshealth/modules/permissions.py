#!/usr/bin/env python3
"""
Permission and ownership changes on a single path.
"""

import os
import pwd
import grp
import logging

from .base import run_command, privileged
from .validators import require_user, require_group, require_path, validate_permissions
from ..ui import console

logger = logging.getLogger("syshealth.permissions")


def describe_access(user: str, path: str) -> str:
    """Say how user relates to the path's owner and group."""
    st = os.stat(path)
    account = pwd.getpwnam(user)
    if account.pw_uid == st.st_uid:
        return f"'{user}' owns {path}"

    group = grp.getgrgid(st.st_gid)
    if account.pw_gid == st.st_gid or user in group.gr_mem:
        return f"'{user}' is a member of group '{group.gr_name}' on {path}"
    return f"'{user}' is neither owner nor group member of {path}"


def perm_owner(user: str, path: str, perms: str, owner: str, group: str) -> str:
    """Apply a numeric mode and owner:group to path, then show the result."""
    user = require_user(user)
    path = require_path(path)
    perms = validate_permissions(perms)
    owner = require_user(owner)
    group = require_group(group)

    console.info(f"Setting permissions {perms} on {path} ...")
    run_command(privileged(["chmod", perms, path]))

    console.info(f"Changing ownership of {path} to {owner}:{group} ...")
    run_command(privileged(["chown", f"{owner}:{group}", path]))
    logger.info(f"Set {path} to {perms} {owner}:{group}")

    listing = run_command(["ls", "-ld", path]).stdout.strip()
    console.plain(listing)

    access = describe_access(user, path)
    console.success(f"Permissions and ownership updated: {access}.")
    return listing
