"""Exception types raised by progbar."""
from __future__ import annotations


class ProgressBarError(Exception):
    """Base class for all progbar errors."""


class InvalidConfigurationError(ProgressBarError, ValueError):
    """A progress bar was configured with values it cannot render."""


class TerminalError(ProgressBarError):
    """The terminal rejected a cursor move or write."""
