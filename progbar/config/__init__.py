"""Configuration and constants for progbar."""
from __future__ import annotations

import os


def _env_float(name: str, default: float) -> float:
    """Read a float from the environment, falling back on bad values."""
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


# Renderer defaults
DEFAULT_WIDTH = 30
DEFAULT_TICK_GLYPH = '.'
DEFAULT_LABEL = ''

# Percentages are whole numbers, and each one may draw at most one glyph,
# so a bar can never be wider than the number of percentage points
MAX_PERCENT = 100
MAX_WIDTH = MAX_PERCENT

# Reserved field to the right of the bar, wide enough for "100" and a "%"
PERCENT_GAP = '  '
PERCENT_PLACEHOLDER = '     %'

# Demo / CLI defaults
DEFAULT_DELAY = _env_float('PROGBAR_DELAY', 0.05)
DEFAULT_STEP = 1
LOG_LEVEL = os.environ.get('PROGBAR_LOG_LEVEL', 'WARNING').upper()
