#!/usr/bin/env python3
"""
System health report sections: disk, CPU, memory and top processes.
"""

import os
from typing import Dict

from .base import DiagnosticModule, command_exists
from ..ui import console
from ..ui.report import ReportGenerator


class DiskUsageModule(DiagnosticModule):
    """Module for filesystem usage."""

    def __init__(self):
        super().__init__(
            "disk_usage",
            "Disk usage (df -h)"
        )

    def run(self) -> Dict[str, str]:
        return {self.description: self.safe_run_command(["df", "-h"])}


class CpuInfoModule(DiagnosticModule):
    """Module for processor information."""

    def __init__(self):
        super().__init__(
            "cpu_info",
            "CPU info (lscpu || /proc/cpuinfo)"
        )

    def run(self) -> Dict[str, str]:
        if command_exists("lscpu"):
            output = self.safe_run_command(["lscpu"])
        else:
            console.warn("Command 'lscpu' not found; reading /proc/cpuinfo instead.")
            output = self.safe_read_file("/proc/cpuinfo", head_lines=1,
                                         filter_func=lambda line: line.startswith("model name"))
        return {self.description: output}


class MemoryModule(DiagnosticModule):
    """Module for memory usage."""

    def __init__(self):
        super().__init__(
            "memory",
            "Memory usage (free -h)"
        )

    def run(self) -> Dict[str, str]:
        if command_exists("free"):
            output = self.safe_run_command(["free", "-h"])
        else:
            console.warn("Command 'free' not found; reading /proc/meminfo instead.")
            output = self.safe_read_file("/proc/meminfo", head_lines=20)
        return {self.description: output}


class TopProcessesModule(DiagnosticModule):
    """Module for a one-shot snapshot of the busiest processes."""

    def __init__(self):
        super().__init__(
            "top_processes",
            "Top processes (top -b -n 1 | head -n 20)"
        )

    def run(self) -> Dict[str, str]:
        if not command_exists("top"):
            console.warn("Command 'top' not found; skipping process snapshot.")
            return {self.description: "top not available"}
        return {self.description: self.safe_run_command(["top", "-b", "-n", "1"], head_lines=20)}


def get_report_modules():
    """Return the sections of the system health report, in report order."""
    return [
        DiskUsageModule(),
        CpuInfoModule(),
        MemoryModule(),
        TopProcessesModule(),
    ]


def system_health_check(settings) -> str:
    """Write the health report into the report directory and preview it."""
    os.makedirs(settings.report_dir, exist_ok=True)
    console.info(f"Collecting system information and saving to {settings.system_report} ...")

    report_gen = ReportGenerator(get_report_modules())
    report_gen.save_to_file(report_gen.generate(), settings.system_report)

    console.success(f"System report saved to {settings.system_report}.")
    console.info("Showing first 10 lines of the report:")
    console.head(settings.system_report, 10)
    return settings.system_report


def write_system_report(path: str, output_format: str = "txt") -> str:
    """Write the full report, with the system overview, to an arbitrary file."""
    console.info(f"Collecting system information and saving to {path} ...")

    report_gen = ReportGenerator(get_report_modules(), include_overview=True)
    report = report_gen.generate()
    if output_format == "json":
        report_gen.save_json(report, path)
    else:
        report_gen.save_to_file(report, path)

    console.success(f"System report saved to {path}.")
    return path
