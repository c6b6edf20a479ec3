"""Display options, cursor coordinates and lifecycle states for progress bars."""
from __future__ import annotations

from enum import Enum, Flag, auto
from typing import Iterable, NamedTuple

from ..exceptions import InvalidConfigurationError


class CursorPosition(NamedTuple):
    """Zero-based terminal cell coordinates."""
    row: int
    col: int


class RenderState(Enum):
    """Lifecycle of a progress bar."""
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    DONE = "done"


class DisplayOptions(Flag):
    """Independent switches controlling how a progress bar is drawn."""
    NONE = 0
    DISPLAY_PERCENTAGE = auto()  # Percentage complete to the right of the bar
    DISPLAY_LABEL = auto()       # Caption to the left of the bar
    BOOKEND = auto()             # Square brackets around the track
    START_SAME_LINE = auto()     # Start one column after the current cursor
    REMOVE_WHEN_DONE = auto()    # Blank the bar once it reaches 100%
    HIDE_CURSOR = auto()         # Hide the cursor while drawing

    @classmethod
    def default(cls) -> "DisplayOptions":
        """Bookended bar with a percentage readout."""
        return cls.BOOKEND | cls.DISPLAY_PERCENTAGE

    @classmethod
    def from_names(cls, names: Iterable[str]) -> "DisplayOptions":
        """Combine options given by name, e.g. ``["bookend", "hide-cursor"]``."""
        result = cls.NONE
        for name in names:
            key = name.strip().upper().replace('-', '_')
            if not key:
                continue
            member = cls.__members__.get(key)
            if member is None:
                valid = ', '.join(n.lower() for n in cls.__members__ if n != 'NONE')
                raise InvalidConfigurationError(
                    f"Unknown display option '{name}' (expected one of: {valid})"
                )
            result |= member
        return result
