"""
Shared pytest fixtures for fnpipe tests.

Every test runs with a clean configuration: no FNPIPE_* environment
variables, no fnpipe.json in the working directory, and a freshly
configured trace logger.
"""

import logging

import pytest

from fnpipe.config import ConfigLoader, reset_config
from fnpipe.logging_config import TRACE_LOGGER_NAME, get_trace_logger, reset_trace_logger


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """
    Isolate configuration for all tests.

    Removes FNPIPE_* variables, moves CWD to an empty temp directory and
    drops cached config and logger state before and after each test.
    """
    for env_var in ConfigLoader.CONFIG_KEY_TO_ENV.values():
        monkeypatch.delenv(env_var, raising=False)
    monkeypatch.delenv("FNPIPE_PROJECT_ROOT", raising=False)
    monkeypatch.chdir(tmp_path)
    reset_config()
    reset_trace_logger()

    yield tmp_path

    reset_config()
    reset_trace_logger()


@pytest.fixture
def trace_records(caplog):
    """
    Capture records emitted on the trace logger.

    Returns:
        The caplog fixture, with the trace logger propagating at DEBUG.
    """
    get_trace_logger(propagate=True)
    caplog.set_level(logging.DEBUG, logger=TRACE_LOGGER_NAME)
    return caplog


@pytest.fixture
def calls():
    """A list stages can append to, to observe call order."""
    return []
