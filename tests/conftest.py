"""
Shared test fixtures and helpers for the scopestack test suite.
"""

import logging
import os
from pathlib import Path

import pytest

from scopestack import config as config_module
from scopestack.testing import ExitLog, RecordingContext


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def exit_log() -> ExitLog:
    """Fresh shared event recorder."""
    return ExitLog()


@pytest.fixture
def recorder(exit_log):
    """Factory building RecordingContexts bound to ``exit_log``."""
    def make(name: str, **kwargs) -> RecordingContext:
        return RecordingContext(name, exit_log, **kwargs)
    return make


@pytest.fixture
def restore_cwd():
    """Put the working directory back whatever the test did with it."""
    start = os.getcwd()
    yield Path(start)
    os.chdir(start)


@pytest.fixture
def tmp_dirs(tmp_path, restore_cwd):
    """Two distinct existing directories, resolved."""
    first = tmp_path / "first"
    second = tmp_path / "second"
    first.mkdir()
    second.mkdir()
    return first.resolve(), second.resolve()


@pytest.fixture(autouse=True)
def reset_config():
    """Keep the process-wide config isolated between tests."""
    saved = config_module._active
    logger = logging.getLogger("scopestack")
    level, handlers = logger.level, list(logger.handlers)
    yield
    config_module._active = saved
    logger.setLevel(level)
    logger.handlers[:] = handlers
