"""Shared pytest fixtures."""

import logging
from typing import Iterator, List

import pytest


@pytest.fixture
def restore_logging() -> Iterator[None]:
    """Put the root logger back the way it was after setup_logging() ran."""
    root = logging.getLogger()
    handlers: List[logging.Handler] = list(root.handlers)
    level = root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)
