"""Terminal capability used by the progress renderer, plus two implementations.

The renderer only ever needs four things from a terminal: read the cursor,
move the cursor, write characters at the cursor and toggle cursor visibility.
``MemoryTerminal`` keeps a character grid in memory and is what the tests
draw on. ``AnsiTerminal`` drives a real VT100-compatible terminal through a
text stream using relative cursor movement, so it never has to query the
terminal for its absolute position.
"""
from __future__ import annotations

import shutil
import sys
from typing import List, Optional, Protocol, TextIO, runtime_checkable

from loguru import logger

from ..exceptions import TerminalError
from .options import CursorPosition

CSI = "\x1b["  # Control Sequence Introducer


@runtime_checkable
class Terminal(Protocol):
    """Minimal cursor-addressable character terminal."""

    def get_cursor_position(self) -> CursorPosition:
        ...

    def set_cursor_position(self, row: int, col: int) -> None:
        ...

    def write(self, text: str) -> None:
        ...

    def set_cursor_visible(self, visible: bool) -> None:
        ...


class MemoryTerminal:
    """In-memory terminal screen with standard line-wrap semantics.

    Writing into the last column moves the cursor to column 0 of the next
    row. Writing past the last row scrolls the whole grid up by one line.
    """

    def __init__(self, rows: int = 24, columns: int = 80, cursor: CursorPosition = CursorPosition(0, 0)):
        if rows <= 0 or columns <= 0:
            raise TerminalError(f"Invalid terminal size {rows}x{columns}")
        self.rows = rows
        self.columns = columns
        self._grid: List[List[str]] = [[' '] * columns for _ in range(rows)]
        self._row = 0
        self._col = 0
        self.cursor_visible = True
        self.write_count = 0
        self.set_cursor_position(*cursor)

    def get_cursor_position(self) -> CursorPosition:
        return CursorPosition(self._row, self._col)

    def set_cursor_position(self, row: int, col: int) -> None:
        if not (0 <= row < self.rows and 0 <= col < self.columns):
            raise TerminalError(
                f"Cursor position ({row}, {col}) outside {self.rows}x{self.columns} terminal"
            )
        self._row = row
        self._col = col

    def write(self, text: str) -> None:
        self.write_count += 1
        for char in text:
            if char == '\n':
                self._col = 0
                self._next_row()
                continue
            self._grid[self._row][self._col] = char
            self._col += 1
            if self._col == self.columns:
                self._col = 0
                self._next_row()

    def set_cursor_visible(self, visible: bool) -> None:
        self.cursor_visible = visible

    def _next_row(self):
        """Advance one row, scrolling when already on the last one."""
        if self._row == self.rows - 1:
            self._grid.pop(0)
            self._grid.append([' '] * self.columns)
        else:
            self._row += 1

    def line(self, row: int) -> str:
        """Contents of a row, trailing spaces included."""
        return ''.join(self._grid[row])

    def lines(self) -> List[str]:
        """All rows with trailing spaces stripped."""
        return [''.join(r).rstrip() for r in self._grid]

    def text_between(self, start: CursorPosition, end: CursorPosition) -> str:
        """Characters from ``start`` up to (not including) ``end`` in wrap order."""
        chars = []
        row, col = start
        while (row, col) != tuple(end):
            if row >= self.rows:
                raise TerminalError(f"End position {end} not reachable from {start}")
            chars.append(self._grid[row][col])
            col += 1
            if col == self.columns:
                row, col = row + 1, 0
        return ''.join(chars)


class AnsiTerminal:
    """Terminal driven by ANSI escape sequences written to a text stream.

    Coordinates are relative: row 0 is the line the cursor was on when the
    terminal was created, and ``start_col`` is the column it was in. Cursor
    moves are emitted as up/down and forward/back sequences from the tracked
    position, so text already on the line is never overwritten and previously
    drawn lines stay addressable even after the screen scrolls.
    """

    def __init__(self, stream: Optional[TextIO] = None, columns: Optional[int] = None, start_col: int = 0):
        self.stream = stream if stream is not None else sys.stdout
        if columns is None:
            columns = shutil.get_terminal_size().columns
        if columns <= 0:
            raise TerminalError(f"Invalid terminal width {columns}")
        if not 0 <= start_col < columns:
            raise TerminalError(f"Starting column {start_col} outside {columns}-column terminal")
        self.columns = columns
        self._row = 0
        self._col = start_col
        logger.debug("AnsiTerminal ready with {} columns", columns)

    def get_cursor_position(self) -> CursorPosition:
        return CursorPosition(self._row, self._col)

    def set_cursor_position(self, row: int, col: int) -> None:
        if row < 0 or not 0 <= col < self.columns:
            raise TerminalError(f"Cursor position ({row}, {col}) outside terminal")

        out = []
        delta = row - self._row
        if delta < 0:
            out.append(f"{CSI}{-delta}A")
        elif delta > 0:
            out.append(f"{CSI}{delta}B")
        shift = col - self._col
        if shift > 0:
            out.append(f"{CSI}{shift}C")
        elif shift < 0:
            out.append(f"{CSI}{-shift}D")

        self._emit(''.join(out))
        self._row = row
        self._col = col

    def write(self, text: str) -> None:
        out = []
        for char in text:
            if char == '\n':
                out.append("\r\n")
                self._row += 1
                self._col = 0
                continue
            out.append(char)
            self._col += 1
            if self._col == self.columns:
                # Force the wrap so the real cursor agrees with ours
                out.append("\r\n")
                self._row += 1
                self._col = 0
        self._emit(''.join(out))

    def set_cursor_visible(self, visible: bool) -> None:
        self._emit(f"{CSI}?25h" if visible else f"{CSI}?25l")

    def _emit(self, data: str):
        try:
            if data:
                self.stream.write(data)
            self.stream.flush()
        except (OSError, ValueError) as e:
            raise TerminalError(f"Failed to write to terminal: {e}") from e
