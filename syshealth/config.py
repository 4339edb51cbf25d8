#!/usr/bin/env python3
"""
Configuration loading for the System Health Toolkit.

Settings are read from INI files, later files overriding earlier ones:

    /etc/syshealth/syshealth.conf
    ~/.config/syshealth/syshealth.conf
    $SYSHEALTH_CONFIG
    --config FILE

Missing files are ignored; every key has a default.
"""

import os
import configparser
import logging
from typing import Dict, List, Optional

from .errors import ConfigError

logger = logging.getLogger("syshealth.config")

SYSTEM_CONFIG = "/etc/syshealth/syshealth.conf"
USER_CONFIG = os.path.join("~", ".config", "syshealth", "syshealth.conf")
ENV_VAR = "SYSHEALTH_CONFIG"

DEFAULTS = {
    "output": {
        "directory": "reports",
    },
    "commands": {
        "timeout": "60",
        "use_sudo": "true",
    },
    "network": {
        "ping_host": "google.com",
        "dns_host": "google.com",
        "http_url": "https://example.com",
        "ping_count": "3",
    },
    "ssh": {
        "key_path": os.path.join("~", ".ssh", "id_rsa_system_health"),
        "key_bits": "4096",
    },
    "projects": {
        "directory": "projects",
        "mode": "750",
    },
    "organizer": {
        "images": "jpg, png",
        "docs": "txt, md",
        "scripts": "sh",
    },
    "logging": {
        "level": "WARNING",
        "file": "",
    },
}


class Settings:
    """Resolved settings, one attribute per configuration key."""

    def __init__(self, parser: configparser.ConfigParser):
        self.report_dir = os.path.abspath(os.path.expanduser(parser.get("output", "directory")))
        self.command_timeout = parser.getint("commands", "timeout")
        self.use_sudo = parser.getboolean("commands", "use_sudo")

        self.ping_host = parser.get("network", "ping_host")
        self.dns_host = parser.get("network", "dns_host")
        self.http_url = parser.get("network", "http_url")
        self.ping_count = parser.getint("network", "ping_count")

        self.ssh_key_path = os.path.expanduser(parser.get("ssh", "key_path"))
        self.ssh_key_bits = parser.getint("ssh", "key_bits")

        self.projects_dir = parser.get("projects", "directory")
        self.projects_mode = parser.get("projects", "mode")

        self.organizer_rules = self._parse_rules(parser["organizer"])

        self.log_level = parser.get("logging", "level").upper()
        self.log_file = parser.get("logging", "file") or None

    @staticmethod
    def _parse_rules(section) -> Dict[str, List[str]]:
        """Map each destination folder to the extensions moved into it."""
        rules = {}
        for folder, extensions in section.items():
            exts = [ext.strip().lstrip(".").lower() for ext in extensions.split(",")]
            rules[folder] = [ext for ext in exts if ext]
        return rules

    @property
    def system_report(self) -> str:
        return os.path.join(self.report_dir, "system_report.txt")

    @property
    def network_report(self) -> str:
        return os.path.join(self.report_dir, "network_report.txt")


def config_paths(extra: Optional[str] = None) -> List[str]:
    """Return the candidate configuration files in override order."""
    paths = [SYSTEM_CONFIG, os.path.expanduser(USER_CONFIG)]
    if os.environ.get(ENV_VAR):
        paths.append(os.environ[ENV_VAR])
    if extra:
        paths.append(extra)
    return paths


def load_settings(extra: Optional[str] = None) -> Settings:
    """Read all configuration files and install the result as current settings."""
    global _current

    parser = configparser.ConfigParser()
    parser.read_dict(DEFAULTS)

    if extra and not os.path.isfile(extra):
        logger.warning(f"Config file not found: {extra}")

    try:
        loaded = parser.read(config_paths(extra))
        _current = Settings(parser)
    except (configparser.Error, ValueError) as e:
        raise ConfigError(f"Invalid configuration: {e}") from e

    for path in loaded:
        logger.info(f"Loaded configuration from {path}")

    return _current


def get_settings() -> Settings:
    """Return the current settings, loading defaults on first use."""
    if _current is None:
        return load_settings()
    return _current


_current: Optional[Settings] = None
