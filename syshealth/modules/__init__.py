#!/usr/bin/env python3
"""
Task modules - one module per group of operations, plus the shared command layer.
"""

from .base import DiagnosticModule, run_command, privileged
from .system import get_report_modules
