"""Pytest configuration and fixtures."""

import logging

import pytest


@pytest.fixture
def restore_root_logger():
    """Undo any handler/level changes a test makes to the root logger."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)
