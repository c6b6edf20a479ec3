"""Curses terminal backend for progress bars."""
from __future__ import annotations

import curses
from typing import Callable

from loguru import logger

from ..exceptions import TerminalError
from .options import CursorPosition
from .terminal import Terminal


class CursesTerminal:
    """Terminal capability backed by a curses window."""

    def __init__(self, window):
        self.window = window

    def get_cursor_position(self) -> CursorPosition:
        row, col = self.window.getyx()
        return CursorPosition(row, col)

    def set_cursor_position(self, row: int, col: int) -> None:
        try:
            self.window.move(row, col)
        except curses.error as e:
            raise TerminalError(f"Cannot move cursor to ({row}, {col}): {e}") from e
        self.window.refresh()

    def write(self, text: str) -> None:
        try:
            self.window.addstr(text)
        except curses.error as e:
            # curses reports an error after filling the bottom-right cell,
            # because the cursor has nowhere left to go
            height, width = self.window.getmaxyx()
            if self.window.getyx() != (height - 1, width - 1):
                raise TerminalError(f"Cannot write {text!r}: {e}") from e
        self.window.refresh()

    def set_cursor_visible(self, visible: bool) -> None:
        try:
            curses.curs_set(1 if visible else 0)
        except curses.error as e:
            raise TerminalError(f"Terminal cannot change cursor visibility: {e}") from e


def run_tui(draw: Callable[[Terminal], None]):
    """Run ``draw`` against a full-screen curses terminal.

    Args:
        draw: Callback that receives the terminal and drives a progress bar.
              The screen is restored when it returns or raises.
    """
    def main_loop(stdscr):
        stdscr.clear()
        stdscr.refresh()
        terminal = CursesTerminal(stdscr)
        logger.debug("Curses screen ready: {}", stdscr.getmaxyx())
        draw(terminal)

        # Leave the finished bar on screen until a key is pressed
        stdscr.nodelay(False)
        stdscr.addstr("\n\nPress any key to exit")
        stdscr.refresh()
        stdscr.getch()

    curses.wrapper(main_loop)
