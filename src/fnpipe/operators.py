"""
fnpipe Operators - Conditional and Flow Control Combinators

This module provides stage factories for controlling what happens to a
value inside a pipeline:
- tap / tap_async: Run a side effect, pass the value through unchanged
- trace: Log the value passing through
- when: Transform only when a predicate holds
- unless: Transform only when a predicate does not hold
- branch: Choose between two transforms
- try_catch: Fall back to a handler when a transform raises

None of these swallow errors except try_catch, and try_catch only for the
exceptions it was asked to handle.
"""

import inspect
import logging
from typing import Any, Awaitable, Callable, Optional, Tuple, Type, TypeVar, Union

from .exceptions import ensure_callable
from .config import get_config
from .logging_config import format_value, get_trace_logger

logger = logging.getLogger(__name__)

T = TypeVar("T")
A = TypeVar("A")
B = TypeVar("B")
R = TypeVar("R")


# =============================================================================
# Side Effect Operators
# =============================================================================

def tap(fn: Callable[[T], Any]) -> Callable[[T], T]:
    """
    Create a tap stage for side effects.

    The function is called with the value; its return value is discarded
    and the value itself passes through unchanged.

    Example:
        pipe(
            data,
            transform,
            tap(print),  # prints the intermediate value
            format,
        )

    Args:
        fn: Function to call with the value

    Returns:
        Stage returning its input
    """
    ensure_callable(fn, 0, "tap")

    def tapped(value: T) -> T:
        fn(value)
        return value

    return tapped


def tap_async(fn: Callable[[T], Union[Any, Awaitable[Any]]]) -> Callable[[T], Awaitable[T]]:
    """
    Async tap: a side effect that may be a coroutine.

    The returned stage is a coroutine function, meant for ``pipe_async``.
    If ``fn`` returns an awaitable it is awaited before the value is passed on.
    """
    ensure_callable(fn, 0, "tap_async")

    async def tapped(value: T) -> T:
        result = fn(value)
        if inspect.isawaitable(result):
            await result
        return value

    return tapped


def trace(label: Optional[str] = None, level: int = logging.DEBUG) -> Callable[[T], T]:
    """
    Create a stage that logs the value passing through.

    Records go to the ``fnpipe.trace`` logger, rendered with rich's
    pretty printer and truncated per the trace settings. Nothing is logged
    when tracing is disabled (FNPIPE_TRACE_ENABLED=false).

    Configuration is read on the first traced call, not when the stage is
    built, so a malformed fnpipe.json raises ConfigError from inside the
    running pipeline.

    Example:
        pipe(rows, trace("raw"), filter(is_valid), trace("valid"))
    """
    prefix = f"{label}: " if label else ""

    def traced(value: T) -> T:
        if get_config().trace_enabled:
            trace_logger = get_trace_logger()
            if trace_logger.isEnabledFor(level):
                trace_logger.log(level, "%s%s", prefix, format_value(value))
        return value

    return traced


# =============================================================================
# Conditional Operators
# =============================================================================

def when(predicate: Callable[[T], Any], transform: Callable[[T], T]) -> Callable[[T], T]:
    """
    Conditionally apply a transform.

    Example:
        pipe(value, when(lambda x: x > 0, lambda x: x * 2))

    Args:
        predicate: Tested against the value (truthiness)
        transform: Applied only when the predicate holds

    Returns:
        Stage returning ``transform(value)`` or ``value``
    """
    ensure_callable(predicate, 0, "when")
    ensure_callable(transform, 1, "when")

    def conditional(value: T) -> T:
        if predicate(value):
            return transform(value)
        return value

    return conditional


def unless(predicate: Callable[[T], Any], transform: Callable[[T], T]) -> Callable[[T], T]:
    """
    Apply a transform only when the predicate does NOT hold.

    Example:
        pipe(name, unless(str.istitle, str.title))
    """
    ensure_callable(predicate, 0, "unless")
    ensure_callable(transform, 1, "unless")

    def conditional(value: T) -> T:
        if predicate(value):
            return value
        return transform(value)

    return conditional


def branch(
    predicate: Callable[[T], Any],
    if_true: Callable[[T], A],
    if_false: Callable[[T], B],
) -> Callable[[T], Union[A, B]]:
    """
    Apply one of two transforms depending on a predicate.

    The predicate is evaluated once and exactly one branch runs.

    Example:
        pipe(
            value,
            branch(
                lambda x: x > 0,
                lambda x: f"positive: {x}",
                lambda x: f"non-positive: {x}",
            ),
        )
    """
    ensure_callable(predicate, 0, "branch")
    ensure_callable(if_true, 1, "branch")
    ensure_callable(if_false, 2, "branch")

    def branched(value: T) -> Union[A, B]:
        if predicate(value):
            return if_true(value)
        return if_false(value)

    return branched


# =============================================================================
# Error Handling Operators
# =============================================================================

def try_catch(
    fn: Callable[[T], R],
    on_error: Callable[[BaseException, T], A],
    exceptions: Union[Type[BaseException], Tuple[Type[BaseException], ...]] = Exception,
) -> Callable[[T], Union[R, A]]:
    """
    Try a transform, falling back to a handler on error.

    Only exceptions raised by ``fn`` itself during this call, and matching
    ``exceptions``, are handled. Anything raised by ``on_error``
    propagates.

    Example:
        pipe(
            raw,
            try_catch(json.loads, lambda err, raw: {"error": True, "raw": raw}),
        )

    Args:
        fn: Primary transform
        on_error: Called as ``on_error(error, value)`` when ``fn`` raises
        exceptions: Exception type or tuple of types to handle

    Returns:
        Stage returning ``fn(value)`` or the handler's fallback
    """
    ensure_callable(fn, 0, "try_catch")
    ensure_callable(on_error, 1, "try_catch")

    def guarded(value: T) -> Union[R, A]:
        try:
            return fn(value)
        except exceptions as e:
            logger.debug("try_catch handled %s: %s", type(e).__name__, e)
            return on_error(e, value)

    return guarded
