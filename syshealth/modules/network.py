#!/usr/bin/env python3
"""
Network connectivity diagnostics: ping, DNS lookup and HTTP headers.
"""

import os

from .base import run_command, require_command, CommandError
from ..ui import console


class NetworkReport:
    """Appends command output to the network report, one section at a time."""

    def __init__(self, path: str):
        self.path = path
        os.makedirs(os.path.dirname(os.path.abspath(path)), exist_ok=True)
        # Start every run from an empty report
        open(self.path, "w").close()

    def append(self, header: str, command) -> int:
        """Run a command, append its combined output under a header, return its exit code."""
        try:
            result = run_command(command, check=False)
            returncode = result.returncode
            output = result.stdout + result.stderr
        except CommandError as e:
            returncode = e.returncode if e.returncode is not None else 127
            output = f"{e}\n"

        with open(self.path, "a") as f:
            f.write(f"=== {header} ===\n")
            f.write(output)
            if output and not output.endswith("\n"):
                f.write("\n")
            f.write("\n")
        return returncode


def network_diagnostics(settings) -> str:
    """Run the connectivity checks and save them to the network report."""
    path = settings.network_report
    console.info(f"Running network diagnostics. Results will be saved to {path}")
    report = NetworkReport(path)

    host = settings.ping_host
    if require_command("ping"):
        count = str(settings.ping_count)
        if report.append(f"ping -c {count} {host}", ["ping", "-c", count, host]) == 0:
            console.success(f"Ping to {host} succeeded.")
        else:
            console.warn(f"Ping to {host} had issues (see {path}).")
    else:
        console.warn("ping command not available.")

    dns_host = settings.dns_host
    if require_command("dig"):
        report.append(f"dig {dns_host}", ["dig", dns_host, "+short"])
    else:
        console.warn("dig not available; install 'dnsutils' or 'bind-utils' depending on your distro for dig.")

    url = settings.http_url
    if require_command("curl"):
        report.append(f"curl -I {url}", ["curl", "-I", "--silent", "--max-time", "10", url])
    else:
        console.warn("curl not available.")

    console.success(f"Network diagnostics saved to {path}.")
    console.info("Tail of the network report:")
    console.tail(path, 20)
    return path
