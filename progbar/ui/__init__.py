"""Progress bar rendering and terminal backends."""
from __future__ import annotations

from .options import CursorPosition, DisplayOptions, RenderState
from .progress import ProgressRenderer
from .terminal import AnsiTerminal, MemoryTerminal, Terminal
from .tui import CursesTerminal, run_tui

__all__ = [
    'AnsiTerminal',
    'CursesTerminal',
    'CursorPosition',
    'DisplayOptions',
    'MemoryTerminal',
    'ProgressRenderer',
    'RenderState',
    'Terminal',
    'run_tui',
]
