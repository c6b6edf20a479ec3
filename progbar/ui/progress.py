"""Progress bar rendering on a cursor-addressable terminal."""
from __future__ import annotations

from typing import Optional

from loguru import logger

from ..config import (
    DEFAULT_LABEL,
    DEFAULT_TICK_GLYPH,
    DEFAULT_WIDTH,
    MAX_PERCENT,
    MAX_WIDTH,
    PERCENT_GAP,
    PERCENT_PLACEHOLDER,
)
from ..exceptions import InvalidConfigurationError
from .options import CursorPosition, DisplayOptions, RenderState
from .terminal import Terminal


def _is_printable_ascii(text: str) -> bool:
    return all(' ' <= char <= '~' for char in text)


class ProgressRenderer:
    """Single-line progress bar that redraws only what changed.

    The empty bar is laid out once on construction. Each ``tick`` then writes
    at most one glyph at the tracked draw position and, when enabled, the
    percentage text in its reserved field, putting the cursor back where the
    next glyph belongs. When 100% is reached the finish pass runs once.

    Example:
        bar = ProgressRenderer(AnsiTerminal(), width=20, label="Copying",
                               options=DisplayOptions.default() | DisplayOptions.DISPLAY_LABEL)
        for chunk in chunks:
            copy(chunk)
            bar.tick()
    """

    def __init__(
        self,
        terminal: Terminal,
        width: int = DEFAULT_WIDTH,
        options: Optional[DisplayOptions] = None,
        tick_glyph: str = DEFAULT_TICK_GLYPH,
        label: str = DEFAULT_LABEL,
        initial_percent: int = 0,
    ):
        """Validate configuration and draw the empty bar.

        Args:
            terminal: Terminal to draw on
            width: Number of increments in the bar (1-100)
            options: Display options, defaults to bookend plus percentage
            tick_glyph: Character drawn for each filled increment
            label: Caption shown left of the bar when DISPLAY_LABEL is set
            initial_percent: Percentage complete when first drawn (0-100)

        Raises:
            InvalidConfigurationError: If any argument cannot be rendered
        """
        if options is None:
            options = DisplayOptions.default()
        self._validate(width, options, tick_glyph, label, initial_percent)

        self._terminal = terminal
        self._width = width
        self._options = options
        self._tick_glyph = tick_glyph
        self._label = label

        self._filled_count = 0
        self._percent_complete = 0
        self._state = RenderState.NOT_STARTED

        self._setup()

        # Bring the bar up to its starting value one point at a time
        self.tick(initial_percent)

    @staticmethod
    def _validate(width, options, tick_glyph, label, initial_percent):
        if isinstance(width, bool) or not isinstance(width, int):
            raise InvalidConfigurationError(f"width must be an integer, got {width!r}")
        if not 1 <= width <= MAX_WIDTH:
            raise InvalidConfigurationError(f"width must be between 1 and {MAX_WIDTH}, got {width}")
        if not isinstance(options, DisplayOptions):
            raise InvalidConfigurationError(f"options must be DisplayOptions, got {options!r}")
        if not isinstance(tick_glyph, str) or len(tick_glyph) != 1 or not _is_printable_ascii(tick_glyph):
            raise InvalidConfigurationError(
                f"tick_glyph must be a single printable ASCII character, got {tick_glyph!r}"
            )
        if not isinstance(label, str) or not _is_printable_ascii(label):
            raise InvalidConfigurationError(f"label must be printable ASCII on one line, got {label!r}")
        if isinstance(initial_percent, bool) or not isinstance(initial_percent, int):
            raise InvalidConfigurationError(f"initial_percent must be an integer, got {initial_percent!r}")
        if not 0 <= initial_percent <= MAX_PERCENT:
            raise InvalidConfigurationError(
                f"initial_percent must be between 0 and {MAX_PERCENT}, got {initial_percent}"
            )

    @property
    def percent_complete(self) -> int:
        return self._percent_complete

    @property
    def is_done(self) -> bool:
        return self._state is RenderState.DONE

    @property
    def state(self) -> RenderState:
        return self._state

    @property
    def filled_count(self) -> int:
        """Number of glyphs drawn so far."""
        return self._filled_count

    @property
    def width(self) -> int:
        return self._width

    @property
    def options(self) -> DisplayOptions:
        return self._options

    @property
    def tick_glyph(self) -> str:
        return self._tick_glyph

    @property
    def label(self) -> str:
        return self._label

    @property
    def bar_start(self) -> CursorPosition:
        """Top-left cell of the whole widget."""
        return self._bar_start

    @property
    def bar_end(self) -> CursorPosition:
        """Cell just past the last character of the widget."""
        return self._bar_end

    @property
    def percent_label_pos(self) -> Optional[CursorPosition]:
        """Where the percentage is written, or None when it is not displayed."""
        return self._percent_label_pos

    @property
    def next_draw_pos(self) -> CursorPosition:
        """Where the next glyph will be drawn."""
        return self._next_draw_pos

    def tick(self, count: int = 1) -> None:
        """Advance by ``count`` percentage points.

        Each point is applied and drawn on its own; non-positive counts do
        nothing, and ticks after completion are ignored.
        """
        if isinstance(count, bool) or not isinstance(count, int):
            raise TypeError(f"tick count must be an integer, got {count!r}")
        for _ in range(count):
            self._tick_once()

    def _tick_once(self):
        if self.is_done:
            return
        if self._percent_complete < MAX_PERCENT:
            self._percent_complete += 1
            self._write_incremental()
        if self._percent_complete == MAX_PERCENT:
            self._state = RenderState.DONE
            self._write_finish()

    def _has(self, option: DisplayOptions) -> bool:
        return bool(self._options & option)

    def _setup(self):
        """Draw the empty bar and park the cursor at the first drawable column."""
        term = self._terminal

        if self._has(DisplayOptions.HIDE_CURSOR):
            term.set_cursor_visible(False)

        # Stay on the current line, one column along
        if self._has(DisplayOptions.START_SAME_LINE):
            term.write(' ')

        self._bar_start = term.get_cursor_position()

        if self._has(DisplayOptions.DISPLAY_LABEL):
            term.write(self._label + ' ')

        if self._has(DisplayOptions.BOOKEND):
            term.write('[')

        # Blank the track so glyphs never land on leftover output
        origin = term.get_cursor_position()
        term.write(' ' * self._width)

        if self._has(DisplayOptions.BOOKEND):
            term.write(']')

        self._percent_label_pos: Optional[CursorPosition] = None
        if self._has(DisplayOptions.DISPLAY_PERCENTAGE):
            term.write(PERCENT_GAP)
            self._percent_label_pos = term.get_cursor_position()
            term.write(PERCENT_PLACEHOLDER)

        self._bar_end = term.get_cursor_position()

        term.set_cursor_position(origin.row, origin.col)
        self._next_draw_pos = term.get_cursor_position()
        self._state = RenderState.IN_PROGRESS

        logger.debug(
            "Progress bar laid out: start={} origin={} end={} percent_at={}",
            self._bar_start, origin, self._bar_end, self._percent_label_pos,
        )

    def _write_incremental(self):
        """Draw the next glyph if one is due, then refresh the percentage."""
        term = self._terminal

        # At most one glyph per point, even if the target moved further
        target = self._percent_complete * self._width // MAX_PERCENT
        if target > self._filled_count:
            term.write(self._tick_glyph)
            self._filled_count += 1
            self._next_draw_pos = term.get_cursor_position()

        if self._percent_label_pos is not None:
            term.set_cursor_position(*self._percent_label_pos)
            term.write(str(self._percent_complete))
            term.set_cursor_position(*self._next_draw_pos)

    def _write_finish(self):
        """Blank the widget and/or restore the cursor once 100% is reached."""
        term = self._terminal
        logger.debug("Progress bar finished at {} with {} glyphs", self._percent_complete, self._filled_count)

        if self._has(DisplayOptions.REMOVE_WHEN_DONE):
            term.set_cursor_position(*self._bar_start)
            # Follow the terminal's own wrapping until we land on the end cell
            while term.get_cursor_position() != self._bar_end:
                term.write(' ')
            term.set_cursor_position(*self._bar_start)

        if self._has(DisplayOptions.HIDE_CURSOR):
            term.set_cursor_visible(True)
