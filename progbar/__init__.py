"""Incrementally redrawn single-line progress bars for character terminals."""
from __future__ import annotations

from .exceptions import InvalidConfigurationError, ProgressBarError, TerminalError
from .ui import (
    AnsiTerminal,
    CursesTerminal,
    CursorPosition,
    DisplayOptions,
    MemoryTerminal,
    ProgressRenderer,
    RenderState,
    Terminal,
)

__version__ = "0.1.0"

__all__ = [
    'AnsiTerminal',
    'CursesTerminal',
    'CursorPosition',
    'DisplayOptions',
    'InvalidConfigurationError',
    'MemoryTerminal',
    'ProgressBarError',
    'ProgressRenderer',
    'RenderState',
    'Terminal',
    'TerminalError',
]
