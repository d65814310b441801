"""
fnpipe Exception Hierarchy

Contains the exception classes raised by fnpipe itself. Failures raised by
user-supplied stages are never wrapped in these types; they propagate as-is.
"""

from typing import Any


class FnPipeError(Exception):
    """
    Base exception for all fnpipe errors.

    ::: This is-in-layer Utility-Layer.
    ::: This is a exception.
    ::: This is stateless.
    """
    pass


class StageNotCallableError(FnPipeError, TypeError):
    """
    Raised when a stage supplied to a combinator is not callable.

    Raised eagerly, before any stage of the pipeline has run.

    ::: This is-in-layer Utility-Layer.
    ::: This is a exception.
    ::: This is stateless.
    """

    def __init__(self, stage: Any, position: int, combinator: str):
        self.stage = stage
        self.position = position
        self.combinator = combinator
        super().__init__(
            f"{combinator}: stage {position} is not callable "
            f"(got {type(stage).__name__}: {stage!r})"
        )


class ConfigError(FnPipeError, ValueError):
    """
    Raised when fnpipe.json or an FNPIPE_* environment variable is malformed.

    ::: This is-in-layer Utility-Layer.
    ::: This is a exception.
    ::: This is stateless.
    """
    pass


def ensure_callable(stage: Any, position: int, combinator: str) -> None:
    """Raise StageNotCallableError unless ``stage`` is callable."""
    if not callable(stage):
        raise StageNotCallableError(stage, position, combinator)


def ensure_stages(stages, combinator: str) -> None:
    """Validate every stage of a variadic call before any of them runs."""
    for position, stage in enumerate(stages):
        ensure_callable(stage, position, combinator)
