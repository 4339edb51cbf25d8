#!/usr/bin/env python3
"""
File organizer: sorts the files of a directory into folders by extension.
"""

import os
import shutil
import logging
from typing import Dict, List

from .base import run_command, command_exists, ValidationError
from .validators import require_non_empty
from ..ui import console

logger = logging.getLogger("syshealth.organizer")

DEFAULT_RULES = {
    "images": ["jpg", "png"],
    "docs": ["txt", "md"],
    "scripts": ["sh"],
}


def move_by_extension(target: str, extension: str, destination: str) -> int:
    """Move visible top-level regular files with the extension; never overwrite."""
    moved = 0
    suffix = f".{extension}"
    for entry in sorted(os.listdir(target)):
        source = os.path.join(target, entry)
        if entry.startswith(".") or not entry.endswith(suffix) or not os.path.isfile(source):
            continue
        dest = os.path.join(destination, entry)
        if os.path.exists(dest):
            logger.info(f"Not overwriting {dest}")
            continue
        shutil.move(source, dest)
        moved += 1
    return moved


def list_tree(target: str, max_depth: int = 3) -> List[str]:
    """Walk target like `find target -maxdepth N -print`."""
    lines = [target]
    base_depth = target.rstrip(os.sep).count(os.sep)
    for root, dirs, files in os.walk(target):
        depth = root.rstrip(os.sep).count(os.sep) - base_depth
        if depth >= max_depth:
            dirs[:] = []
            continue
        dirs.sort()
        for name in sorted(dirs + files):
            lines.append(os.path.join(root, name))
    return lines


def show_tree(target: str):
    if command_exists("tree"):
        console.info(f"Directory tree for {target}:")
        console.plain(run_command(["tree", "-a", target]).stdout.rstrip("\n"))
    else:
        console.warn("'tree' not installed. Showing a simple recursive list instead:")
        console.plain("\n".join(list_tree(target)))


def organize_files(target: str, create: bool = False, rules: Dict[str, List[str]] = None) -> Dict[str, int]:
    """
    Sort the files of target into per-category subdirectories.

    Args:
        target: Directory to organize
        create: Create target when it does not exist
        rules: Map of subdirectory name to the extensions moved into it

    Returns:
        Number of files moved per extension
    """
    target = require_non_empty(target, "Directory path")
    rules = rules or DEFAULT_RULES

    if not os.path.isdir(target):
        if os.path.exists(target):
            raise ValidationError(f"'{target}' exists but is not a directory.")
        if not create:
            raise ValidationError("Aborting file organizer.")
        os.makedirs(target)

    for folder in rules:
        os.makedirs(os.path.join(target, folder), exist_ok=True)

    console.info("Moving files...")
    counts = {}
    for folder, extensions in rules.items():
        for ext in extensions:
            counts[ext] = move_by_extension(target, ext, os.path.join(target, folder))

    console.success("Moved: " + ", ".join(f"{ext}={n}" for ext, n in counts.items()))
    show_tree(target)
    return counts
