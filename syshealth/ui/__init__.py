#!/usr/bin/env python3
"""
UI package for the System Health Toolkit: console output, reports and menus.
"""
