#!/usr/bin/env python3
"""
System Health Toolkit - Installation Manager

Sets up the system-wide pieces that pip does not install: the default
configuration file, bash completion for the modes and the log directory.

Usage:
    syshealth-install install [--root DIR]
    syshealth-install remove [--root DIR] [--yes]
    syshealth-install status [--root DIR]
"""

import os
import sys
import shutil
import argparse
import configparser
import logging

from .config import DEFAULTS

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger("syshealth-installer")

TOOL_NAME = "syshealth"
CONFIG_DIR = "/etc/syshealth"
COMPLETION_DIR = "/etc/bash_completion.d"
LOG_DIR = "/var/log/syshealth"
MODES = ["add_users", "setup_projects", "sys_report", "process_manage", "perm_owner", "menu", "help"]


class InstallPaths:
    """Install locations, optionally relocated under a staging root."""

    def __init__(self, root: str = "/"):
        self.root = root

    def _under_root(self, path: str) -> str:
        return os.path.join(self.root, path.lstrip("/"))

    @property
    def config_dir(self) -> str:
        return self._under_root(CONFIG_DIR)

    @property
    def config_file(self) -> str:
        return os.path.join(self.config_dir, f"{TOOL_NAME}.conf")

    @property
    def completion_file(self) -> str:
        return os.path.join(self._under_root(COMPLETION_DIR), f"{TOOL_NAME}-completion.bash")

    @property
    def log_dir(self) -> str:
        return self._under_root(LOG_DIR)


def check_root_privileges():
    """Check if the script is run with root privileges."""
    return os.geteuid() == 0


def default_config_text() -> str:
    """Render the default settings as an INI file, reports going to the log directory."""
    parser = configparser.ConfigParser()
    parser.read_dict(DEFAULTS)
    parser.set("output", "directory", LOG_DIR)

    lines = ["# Default configuration for the syshealth tool", ""]
    for section in parser.sections():
        lines.append(f"[{section}]")
        for key, value in parser.items(section):
            lines.append(f"{key} = {value}")
        lines.append("")
    return "\n".join(lines)


def bash_completion_text() -> str:
    return f"""# Bash completion for {TOOL_NAME}
_{TOOL_NAME}()
{{
    local cur
    COMPREPLY=()
    cur="${{COMP_WORDS[COMP_CWORD]}}"
    if [[ ${{COMP_CWORD}} -eq 1 ]] ; then
        COMPREPLY=( $(compgen -W "{' '.join(MODES)} --config --verbose --tui --version" -- ${{cur}}) )
        return 0
    fi
    if [[ "${{COMP_WORDS[1]}}" == "process_manage" && ${{COMP_CWORD}} -eq 3 ]] ; then
        COMPREPLY=( $(compgen -W "list count top kill" -- ${{cur}}) )
        return 0
    fi
    COMPREPLY=( $(compgen -f -- ${{cur}}) )
}}
complete -F _{TOOL_NAME} {TOOL_NAME}
"""


def write_file(path, content):
    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, 'w') as f:
        f.write(content)
    logger.info(f"Created file: {path}")


def install_tool(paths: InstallPaths, force: bool = False):
    """Write the default config (kept if present), bash completion and log directory."""
    if os.path.exists(paths.config_file) and not force:
        logger.info(f"Keeping existing configuration: {paths.config_file}")
    else:
        write_file(paths.config_file, default_config_text())

    write_file(paths.completion_file, bash_completion_text())

    os.makedirs(paths.log_dir, exist_ok=True)
    logger.info(f"Created directory: {paths.log_dir}")

    logger.info("Installation completed successfully!")


def remove_tool(paths: InstallPaths, remove_logs: bool = False):
    """Remove the completion script and configuration; logs only on request."""
    if os.path.exists(paths.completion_file):
        os.remove(paths.completion_file)
        logger.info(f"Removed: {paths.completion_file}")

    if os.path.isdir(paths.config_dir):
        shutil.rmtree(paths.config_dir)
        logger.info(f"Removed directory: {paths.config_dir}")

    if remove_logs and os.path.isdir(paths.log_dir):
        shutil.rmtree(paths.log_dir)
        logger.info(f"Removed log directory: {paths.log_dir}")

    logger.info("Tool removed successfully.")


def installation_status(paths: InstallPaths) -> dict:
    return {
        "Command": shutil.which(TOOL_NAME) or "not on PATH",
        "Configuration": "present" if os.path.isfile(paths.config_file) else "missing",
        "Bash completion": "present" if os.path.isfile(paths.completion_file) else "missing",
        "Log directory": "present" if os.path.isdir(paths.log_dir) else "missing",
    }


def main(argv=None):
    """Main function."""
    parser = argparse.ArgumentParser(description="System Health Toolkit - Installation Manager")
    parser.add_argument("--root", default="/", help="Install under this root (for packaging)")
    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    install_parser = subparsers.add_parser("install", help="Install configuration and completion")
    install_parser.add_argument("--force", action="store_true", help="Overwrite an existing configuration")

    remove_parser = subparsers.add_parser("remove", help="Remove configuration and completion")
    remove_parser.add_argument("--yes", action="store_true", help="Do not ask for confirmation")
    remove_parser.add_argument("--logs", action="store_true", help="Also remove the log directory")

    subparsers.add_parser("status", help="Check installation status")

    args = parser.parse_args(argv)
    paths = InstallPaths(args.root)

    if args.command in ("install", "remove") and args.root == "/" and not check_root_privileges():
        logger.error("This operation requires root privileges. Please run with sudo.")
        return 1

    if args.command == "install":
        install_tool(paths, args.force)
    elif args.command == "remove":
        if not args.yes:
            confirm = input("This will remove the syshealth configuration. Continue? [y/N]: ")
            if confirm.lower() != 'y':
                logger.info("Removal cancelled.")
                return 0
        remove_tool(paths, args.logs)
    elif args.command == "status":
        print(f"\n=== {TOOL_NAME} installation status ===")
        for key, value in installation_status(paths).items():
            print(f"{key}: {value}")
    else:
        parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
