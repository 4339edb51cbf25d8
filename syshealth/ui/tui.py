#!/usr/bin/env python3
"""
Curses option selector for the interactive menu (--tui).
"""

import curses
import locale
from typing import List, Optional, Tuple

ENTER_KEYS = (10, 13, curses.KEY_ENTER)


class CursesSelector:
    """Pick one menu option with the arrow keys; returns its key like a typed choice."""

    def __init__(self, options: List[Tuple[str, str]], title: str = "System Health Menu",
                 exit_choice: str = "8"):
        self.options = options
        self.title = title
        self.exit_choice = exit_choice
        self.current_pos = 0
        self.use_unicode = self.check_unicode_support()

    @staticmethod
    def check_unicode_support() -> bool:
        """Check if the terminal encoding is UTF-8."""
        return locale.getpreferredencoding(False).lower() in ("utf-8", "utf8")

    def __call__(self) -> str:
        return curses.wrapper(self._run_ui)

    def _run_ui(self, stdscr) -> str:
        curses.curs_set(0)
        stdscr.timeout(-1)

        choice = None
        while choice is None:
            self.draw_menu(stdscr)
            choice = self.handle_key(stdscr.getch())
        return choice

    def handle_key(self, key: int) -> Optional[str]:
        """Apply one key press; return the chosen option key when a choice is made."""
        if key in (curses.KEY_UP, ord('k'), ord('K')):
            self.current_pos = max(0, self.current_pos - 1)
        elif key in (curses.KEY_DOWN, ord('j'), ord('J')):
            self.current_pos = min(len(self.options) - 1, self.current_pos + 1)
        elif key in ENTER_KEYS:
            return self.options[self.current_pos][0]
        elif key in (ord('q'), ord('Q')):
            return self.exit_choice
        elif 0 <= key < 256 and chr(key) in dict(self.options):
            return chr(key)
        return None

    def draw_menu(self, stdscr):
        """Draw the title, the options and the key help."""
        stdscr.clear()
        h, w = stdscr.getmaxyx()

        curses.start_color()
        curses.init_pair(1, curses.COLOR_WHITE, curses.COLOR_BLUE)  # Header
        curses.init_pair(5, curses.COLOR_CYAN, curses.COLOR_BLACK)  # Options

        header = f" {self.title} "
        stdscr.attron(curses.color_pair(1) | curses.A_BOLD)
        stdscr.addstr(1, max(0, (w - len(header)) // 2), header[:w - 1])
        stdscr.attroff(curses.color_pair(1) | curses.A_BOLD)

        if self.use_unicode:
            help_text = "↑/↓/j/k: Navigate | Enter: Select | 1-8: Jump | q: Exit"
        else:
            help_text = "Up/Down/j/k: Navigate | Enter: Select | 1-8: Jump | q: Exit"
        stdscr.addstr(3, 2, help_text[:w - 4])

        for i, (key, label) in enumerate(self.options):
            y_pos = 5 + i
            if y_pos >= h - 1:
                break
            attr = curses.color_pair(5)
            if i == self.current_pos:
                attr |= curses.A_REVERSE
            stdscr.attron(attr)
            stdscr.addstr(y_pos, 4, f"{key}) {label}"[:w - 6])
            stdscr.attroff(attr)

        stdscr.refresh()
