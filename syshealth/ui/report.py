#!/usr/bin/env python3
"""
Report Generator for the System Health Toolkit.
"""

import os
import json
import datetime
import platform
import socket
import logging
import re
from typing import List, Dict

from ..errors import SyshealthError

logger = logging.getLogger("syshealth.report")

SECTION_PATTERN = re.compile(r"^=== (.+) ===$")

OS_RELEASE = "/etc/os-release"
PROC_UPTIME = "/proc/uptime"
PROC_MEMINFO = "/proc/meminfo"


class ReportGenerator:
    """Runs report sections and renders them into a plain-text report."""

    def __init__(self, modules: List, include_overview: bool = False):
        self.modules = modules
        self.include_overview = include_overview

    def generate(self) -> str:
        """Generate the report text."""
        timestamp = datetime.datetime.now().strftime("%Y-%m-%d %H:%M:%S")

        report = [
            "=" * 80,
            "SYSTEM HEALTH REPORT",
            f"Generated: {timestamp}",
            f"Hostname: {self.get_hostname()}",
            "=" * 80,
            ""
        ]

        if self.include_overview:
            report.append("=== System overview ===")
            for key, value in self.get_system_info().items():
                report.append(f"{key}: {value}")
            report.append("")

        for module in self.modules:
            if not module.enabled:
                continue
            logger.info(f"Running module: {module.name}")

            try:
                results = module.run()
            except Exception as e:
                logger.error(f"Error running module {module.name}: {e}")
                results = {module.description: f"Error: failed to collect this section: {e}"}

            for section, content in results.items():
                report.append(f"=== {section} ===")
                report.append(content.rstrip("\n") if content else "No output collected.")
                report.append("")

        return "\n".join(report)

    @staticmethod
    def get_hostname() -> str:
        return socket.gethostname() or "unknown-host"

    def get_system_info(self) -> Dict[str, str]:
        """Get basic system information."""
        info = {
            "Hostname": self.get_hostname(),
            "Kernel": platform.release(),
            "CPU Count": str(os.cpu_count() or "Unknown"),
        }

        try:
            if os.path.exists(OS_RELEASE):
                with open(OS_RELEASE, "r") as f:
                    for line in f:
                        if line.startswith("PRETTY_NAME="):
                            info["OS"] = line.split("=", 1)[1].strip().strip('"')
                            break

            if os.path.exists(PROC_UPTIME):
                with open(PROC_UPTIME, "r") as f:
                    uptime_seconds = float(f.read().split()[0])
                days, remainder = divmod(uptime_seconds, 86400)
                hours, remainder = divmod(remainder, 3600)
                minutes, seconds = divmod(remainder, 60)
                info["Uptime"] = f"{int(days)}d {int(hours)}h {int(minutes)}m {int(seconds)}s"

            if os.path.exists(PROC_MEMINFO):
                with open(PROC_MEMINFO, "r") as f:
                    for line in f:
                        if line.startswith("MemTotal"):
                            mem_gb = int(line.split()[1]) / 1024 / 1024
                            info["Memory"] = f"{mem_gb:.2f} GB"
                            break

        except (OSError, ValueError, IndexError) as e:
            logger.error(f"Error getting system info: {e}")
            info["Error"] = str(e)

        return info

    def save_to_file(self, report: str, filename: str) -> str:
        """Save the report to a file, creating parent directories."""
        try:
            os.makedirs(os.path.dirname(os.path.abspath(filename)), exist_ok=True)
            with open(filename, "w") as f:
                f.write(report)
                if not report.endswith("\n"):
                    f.write("\n")
        except OSError as e:
            raise SyshealthError(f"Could not write report {filename}: {e}") from e
        return filename

    def save_json(self, report: str, filename: str) -> str:
        return self.save_to_file(json.dumps(self.parse_report_to_json(report), indent=2), filename)

    @staticmethod
    def parse_report_to_json(report: str) -> Dict:
        """Parse a text report into {generated, hostname, sections}."""
        parsed = {"generated": None, "hostname": None, "sections": {}}
        current_section = None
        current_content = []

        def flush():
            if current_section is not None:
                parsed["sections"][current_section] = "\n".join(current_content).strip("\n")

        for line in report.splitlines():
            match = SECTION_PATTERN.match(line)
            if match:
                flush()
                current_section = match.group(1)
                current_content = []
            elif current_section is not None:
                current_content.append(line)
            elif line.startswith("Generated: "):
                parsed["generated"] = line[len("Generated: "):]
            elif line.startswith("Hostname: "):
                parsed["hostname"] = line[len("Hostname: "):]

        flush()
        return parsed
