#!/usr/bin/env python3
"""
System Health Toolkit

Menus and positional-argument modes that wrap standard Linux utilities for
health reports, user and project setup, permissions, process management,
file organization, network checks, cron scheduling and SSH key generation.
"""

__version__ = "1.0.0"
