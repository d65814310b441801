"""
Logging Configuration for fnpipe.

Provides centralized setup for the trace logger used by the ``trace``
operator. Nothing here touches the root logger; applications that configure
logging themselves can call ``get_trace_logger(propagate=True)`` or attach
their own handlers to the ``fnpipe`` logger hierarchy.
"""

import logging
import sys
from typing import Any

from rich.pretty import pretty_repr

from .config import get_config

TRACE_LOGGER_NAME = "fnpipe.trace"

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


class FlushingStreamHandler(logging.StreamHandler):
    """StreamHandler that flushes after every emit.

    ::: This is-in-layer Infrastructure-Layer.
    ::: This is a handler.
    ::: This is stateless.
    """
    def emit(self, record):
        super().emit(record)
        self.flush()


def _create_stderr_handler() -> logging.StreamHandler:
    """Create a stderr handler for console output with auto-flush."""
    handler = FlushingStreamHandler(sys.stderr)
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    return handler


def get_trace_logger(propagate: bool = False) -> logging.Logger:
    """
    Get the trace logger for pipeline value tracing.

    The level comes from the ``log_level`` setting (FNPIPE_LOG_LEVEL).
    Output goes to stderr.

    Args:
        propagate: Whether records also reach ancestor loggers (applied
            only when the logger is first configured)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(TRACE_LOGGER_NAME)

    # Only configure once
    if not logger.handlers:
        logger.setLevel(get_config().log_level)
        logger.propagate = propagate
        logger.addHandler(_create_stderr_handler())

    return logger


def reset_trace_logger() -> None:
    """Remove the trace logger's handlers so the next call reconfigures it."""
    logger = logging.getLogger(TRACE_LOGGER_NAME)
    for handler in logger.handlers[:]:
        handler.close()
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


def format_value(value: Any) -> str:
    """Render a pipeline value for log output, bounded by the trace settings."""
    config = get_config()
    return pretty_repr(
        value,
        max_length=config.trace_max_length,
        max_string=config.trace_max_string,
    )
