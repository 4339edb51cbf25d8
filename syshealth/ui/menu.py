#!/usr/bin/env python3
"""
Interactive health-check menu: eight numbered options, repeated until Exit.
"""

import os
import getpass
import logging
from typing import Callable, Optional

from ..errors import SyshealthError
from ..modules.system import system_health_check
from ..modules.processes import list_processes, active_processes
from ..modules.users import create_user_with_group
from ..modules.organizer import organize_files
from ..modules.network import network_diagnostics
from ..modules.scheduler import schedule_cron
from ..modules.sshkeys import generate_ssh_key, key_exists
from . import console

logger = logging.getLogger("syshealth.menu")

MENU_OPTIONS = [
    ("1", "System Health Check"),
    ("2", "Active Processes"),
    ("3", "User & Group Management"),
    ("4", "File Organizer"),
    ("5", "Network Diagnostics"),
    ("6", "Scheduled Task Setup (cron)"),
    ("7", "SSH Key Setup"),
    ("8", "Exit"),
]
EXIT_CHOICE = "8"


class HealthMenu:
    """Menu loop dispatching each choice to its task."""

    def __init__(self, settings, prompt: Callable[[str], str] = input,
                 secret_prompt: Callable[[str], str] = getpass.getpass,
                 selector: Optional[Callable[[], str]] = None):
        self.settings = settings
        self.prompt = prompt
        self.secret_prompt = secret_prompt
        self.selector = selector or self.prompt_choice
        self.actions = {
            "1": self.system_health_check,
            "2": self.active_processes,
            "3": self.manage_user_group,
            "4": self.file_organizer,
            "5": self.network_diagnostics,
            "6": self.schedule_cron,
            "7": self.ssh_key_setup,
        }

    def show_menu(self):
        console.console.print("System Health Menu", style="title")
        for key, label in MENU_OPTIONS:
            console.console.print(f"{key}) {label}", style="option", markup=False)

    def prompt_choice(self) -> str:
        self.show_menu()
        return self.prompt("Choose an option [1-8]: ").strip()

    def confirm(self, question: str) -> bool:
        return self.prompt(question).strip().lower() in ("y", "yes")

    def run(self) -> int:
        """Loop until the user picks Exit or input ends."""
        labels = dict(MENU_OPTIONS)
        try:
            while True:
                choice = self.selector()
                if choice == EXIT_CHOICE:
                    console.success("Goodbye!")
                    return 0

                action = self.actions.get(choice)
                if action is None:
                    console.warn(f"Invalid option: {choice}. Please choose 1-8.")
                else:
                    try:
                        action()
                    except SyshealthError as e:
                        console.error(str(e))
                        console.warn(f"{labels[choice]} failed")
                    except OSError as e:
                        logger.error(f"Option {choice} failed: {e}")
                        console.error(str(e))
                        console.warn(f"{labels[choice]} failed")

                self.prompt("\nPress Enter to return to menu...")
                console.console.clear()
        except EOFError:
            console.success("Goodbye!")
            return 0

    # 1) System Health Check
    def system_health_check(self):
        system_health_check(self.settings)

    # 2) Active Processes
    def active_processes(self):
        console.info("Listing all active processes (ps aux).")
        table = list_processes()
        if console.console.is_terminal:
            console.page(table)
        else:
            console.plain(table.rstrip("\n"))
        keyword = self.prompt("Enter keyword to filter processes (leave empty to skip): ")
        active_processes(keyword, table)

    # 3) User & Group Management
    def manage_user_group(self):
        username = self.prompt("Enter new username to create: ").strip()
        default_group = f"{username}_grp" if username else "<username>_grp"
        group = self.prompt(f"Enter group name to create and add the user to (default: {default_group}): ")
        create_user_with_group(username, group)

    # 4) File Organizer
    def file_organizer(self):
        target = self.prompt("Enter target directory path (absolute or relative): ").strip()
        create = False
        if target and not os.path.isdir(target):
            create = self.confirm("Directory does not exist. Create it? (y/n): ")
        organize_files(target, create=create, rules=self.settings.organizer_rules)

    # 5) Network Diagnostics
    def network_diagnostics(self):
        network_diagnostics(self.settings)

    # 6) Scheduled Task Setup (cron)
    def schedule_cron(self):
        script_path = self.prompt("Enter absolute path to the script to schedule: ")
        minute = self.prompt("Enter minute (0-59): ")
        hour = self.prompt("Enter hour (0-23): ")
        schedule_cron(script_path, minute, hour)

    # 7) SSH Key Setup
    def ssh_key_setup(self):
        default_path = self.settings.ssh_key_path
        key_path = self.prompt(f"Enter key path (default: {default_path}): ").strip() or default_path
        key_path = os.path.expanduser(key_path)

        overwrite = False
        if key_exists(key_path):
            console.warn(f"Key file {key_path} or {key_path}.pub already exists.")
            if not self.confirm("Overwrite? (y/n): "):
                raise SyshealthError("Aborting key generation.")
            overwrite = True

        passphrase = self.secret_prompt("Enter passphrase for the key (leave empty for no passphrase): ")
        generate_ssh_key(key_path, passphrase, overwrite=overwrite, bits=self.settings.ssh_key_bits)
