#!/usr/bin/env python3
"""
Colorized console output shared by the CLI modes and the interactive menu.
"""

from rich.console import Console
from rich.markup import escape
from rich.theme import Theme

theme = Theme({
    "info": "cyan",
    "ok": "green",
    "warn": "bold yellow",
    "error": "red",
    "title": "bold magenta",
    "option": "cyan",
    "emphasis": "bold",
})

console = Console(theme=theme, highlight=False, soft_wrap=True)


def info(message: str):
    console.print(f"[info]\\[INFO][/info] {escape(message)}")


def success(message: str):
    console.print(f"[ok]\\[OK][/ok] {escape(message)}")


def warn(message: str):
    console.print(f"[warn]\\[WARN][/warn] {escape(message)}")


def error(message: str):
    console.print(f"[error]\\[ERROR][/error] {escape(message)}")


def emphasis(message: str):
    console.print(escape(message), style="emphasis")


def plain(text: str):
    """Print command output verbatim, without markup or highlighting."""
    console.print(text, markup=False, highlight=False)


def page(text: str):
    """Show long output through the system pager."""
    with console.pager(styles=False):
        console.print(text, markup=False, highlight=False)


def head(path: str, lines: int = 10):
    """Print the first lines of a text file."""
    with open(path, "r", errors="replace") as f:
        for index, line in enumerate(f):
            if index >= lines:
                break
            plain(line.rstrip("\n"))


def tail(path: str, lines: int = 20):
    """Print the last lines of a text file."""
    with open(path, "r", errors="replace") as f:
        content = f.read().splitlines()
    for line in content[-lines:]:
        plain(line)
