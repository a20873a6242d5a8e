"""Shared pytest fixtures."""

import logging

import pytest


@pytest.fixture(autouse=True)
def _restore_root_logger():
    """Drop handlers cratepath installed during a test and restore the root level."""
    root = logging.getLogger()
    level = root.level
    handlers = list(root.handlers)
    yield
    for handler in list(root.handlers):
        if handler not in handlers and (
            isinstance(handler, logging.FileHandler) or handler.get_name() == "cratepath-stderr"
        ):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)
