"""Pytest configuration and fixtures for progbar tests."""
from __future__ import annotations

import sys

import pytest
from loguru import logger

from progbar.ui import MemoryTerminal


@pytest.fixture
def terminal():
    """Blank 80-column in-memory terminal with the cursor at the origin."""
    return MemoryTerminal(rows=6, columns=80)


@pytest.fixture
def narrow_terminal():
    """Terminal narrow enough that a bar has to wrap onto a second row."""
    return MemoryTerminal(rows=6, columns=8)


@pytest.fixture
def restore_logging():
    """Put loguru back to its stock stderr handler after a test reconfigures it."""
    yield
    logger.remove()
    logger.add(sys.stderr)
