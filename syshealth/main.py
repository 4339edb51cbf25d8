#!/usr/bin/env python3
"""
Main entry point for the System Health Toolkit.
"""

import os
import sys
import argparse
import logging
from typing import List, Optional

from .config import load_settings
from .errors import SyshealthError
from .modules.processes import PROCESS_ACTIONS, process_manage
from .modules.users import add_users
from .modules.projects import setup_projects
from .modules.permissions import perm_owner
from .modules.system import write_system_report
from .ui import console
from .ui.menu import HealthMenu, MENU_OPTIONS
from .ui.tui import CursesSelector

logger = logging.getLogger("syshealth")

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
PRIVILEGED_MODES = ("add_users", "setup_projects", "perm_owner")


class ModeParser(argparse.ArgumentParser):
    """Argument parser that reports usage errors with exit status 1."""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def build_parser() -> argparse.ArgumentParser:
    """Build the command line parser: one subcommand per mode."""
    parser = ModeParser(
        prog="syshealth",
        description="System health, user management and maintenance toolkit",
        epilog="Run without a mode to open the interactive menu.",
    )
    parser.add_argument("--config", help="Read settings from this INI file as well")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log every command that is run")
    parser.add_argument("--tui", action="store_true", help="Use a curses menu to pick options")
    parser.add_argument("--version", action="store_true", help="Show version information")

    subparsers = parser.add_subparsers(dest="mode", metavar="mode")

    add_parser = subparsers.add_parser("add_users", help="Create the users listed in a file")
    add_parser.add_argument("file", help="User list: one username per line, '#' comments allowed")

    projects_parser = subparsers.add_parser("setup_projects", help="Create numbered project directories for a user")
    projects_parser.add_argument("user", help="Owner of the projects")
    projects_parser.add_argument("count", help="Number of projects to create (1-100)")

    report_parser = subparsers.add_parser("sys_report", help="Write a system report to a file")
    report_parser.add_argument("file", help="Report output path")
    report_parser.add_argument("-f", "--format", choices=["txt", "json"], default="txt", help="Output format")

    process_parser = subparsers.add_parser("process_manage", help="Inspect or stop a user's processes")
    process_parser.add_argument("user", help="Process owner")
    process_parser.add_argument("action", help=f"One of: {', '.join(PROCESS_ACTIONS)}")

    perm_parser = subparsers.add_parser("perm_owner", help="Set permissions and ownership of a path")
    perm_parser.add_argument("user", help="User whose access is reported afterwards")
    perm_parser.add_argument("path", help="File or directory to change")
    perm_parser.add_argument("perms", help="Octal mode, e.g. 755")
    perm_parser.add_argument("owner", help="New owner")
    perm_parser.add_argument("group", help="New group")

    subparsers.add_parser("menu", help="Open the interactive health-check menu")
    subparsers.add_parser("help", help="Show this help message")

    return parser


def setup_logging(settings, verbose: bool = False):
    level = logging.INFO if verbose else getattr(logging, settings.log_level, logging.WARNING)
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        filename=settings.log_file,
    )


def check_root_privileges() -> bool:
    """Check if running with root privileges."""
    if os.geteuid() != 0:
        logger.warning("Not running as root; privileged commands will be run through sudo.")
        return False
    return True


def show_version():
    from . import __version__
    print(f"System Health Toolkit version {__version__}")


def dispatch(args, parser: argparse.ArgumentParser, settings) -> int:
    """Run the handler for the selected mode and map its result to an exit code."""
    mode = args.mode or "menu"

    if mode == "help":
        parser.print_help()
        return 0

    if mode in PRIVILEGED_MODES:
        check_root_privileges()

    if mode == "add_users":
        summary = add_users(args.file)
        return 1 if summary["failed"] else 0

    if mode == "setup_projects":
        summary = setup_projects(args.user, args.count, settings)
        return 1 if summary["failed"] else 0

    if mode == "sys_report":
        write_system_report(args.file, args.format)
        return 0

    if mode == "process_manage":
        process_manage(args.user, args.action)
        return 0

    if mode == "perm_owner":
        perm_owner(args.user, args.path, args.perms, args.owner, args.group)
        return 0

    selector = CursesSelector(MENU_OPTIONS) if args.tui else None
    return HealthMenu(settings, selector=selector).run()


def main(argv: Optional[List[str]] = None) -> int:
    """Main function."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.version:
        show_version()
        return 0

    try:
        settings = load_settings(args.config)
        setup_logging(settings, args.verbose)
        return dispatch(args, parser, settings)
    except SyshealthError as e:
        console.error(str(e))
        return 1
    except KeyboardInterrupt:
        console.warn("Operation cancelled by user.")
        return 1


if __name__ == "__main__":
    sys.exit(main())
