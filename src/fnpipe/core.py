"""
fnpipe Core - Sequencing Primitives

This module provides the functions that thread a value through a flat list
of unary stages:

- pipe: eager, synchronous left-to-right application
- pipe_async: same, but any stage may return an awaitable
- compose: right-to-left composition, returns a function
- flow: left-to-right composition, returns a reusable Flow
- Flow: immutable, callable builder (``Flow().then(f).then(g)``)

The overloads below keep precise input/output types for the common arities.
The final, unannotated-by-overload implementation of each function is the
variadic path: it accepts any number of stages and erases types to ``Any``.

Example:
    >>> pipe(5, lambda x: x * 2, lambda x: x + 1)
    11
    >>> compose(str, lambda x: x + 1)(1)
    '2'
"""

from __future__ import annotations

import inspect
from typing import (
    Any,
    Awaitable,
    Callable,
    Generic,
    Iterable,
    Tuple,
    TypeVar,
    Union,
    overload,
)

from .exceptions import ensure_callable, ensure_stages

A = TypeVar("A")
B = TypeVar("B")
C = TypeVar("C")
D = TypeVar("D")
E = TypeVar("E")
F = TypeVar("F")
G = TypeVar("G")
H = TypeVar("H")
I = TypeVar("I")  # noqa: E741
J = TypeVar("J")

T = TypeVar("T")
U = TypeVar("U")

AsyncStage = Callable[[T], Union[U, Awaitable[U]]]

__all__ = ["pipe", "pipe_async", "compose", "flow", "Flow"]


# =============================================================================
# pipe
# =============================================================================

@overload
def pipe(value: A) -> A: ...
@overload
def pipe(value: A, f1: Callable[[A], B]) -> B: ...
@overload
def pipe(value: A, f1: Callable[[A], B], f2: Callable[[B], C]) -> C: ...
@overload
def pipe(value: A, f1: Callable[[A], B], f2: Callable[[B], C], f3: Callable[[C], D]) -> D: ...
@overload
def pipe(
    value: A, f1: Callable[[A], B], f2: Callable[[B], C], f3: Callable[[C], D],
    f4: Callable[[D], E],
) -> E: ...
@overload
def pipe(
    value: A, f1: Callable[[A], B], f2: Callable[[B], C], f3: Callable[[C], D],
    f4: Callable[[D], E], f5: Callable[[E], F],
) -> F: ...
@overload
def pipe(
    value: A, f1: Callable[[A], B], f2: Callable[[B], C], f3: Callable[[C], D],
    f4: Callable[[D], E], f5: Callable[[E], F], f6: Callable[[F], G],
) -> G: ...
@overload
def pipe(
    value: A, f1: Callable[[A], B], f2: Callable[[B], C], f3: Callable[[C], D],
    f4: Callable[[D], E], f5: Callable[[E], F], f6: Callable[[F], G],
    f7: Callable[[G], H],
) -> H: ...
@overload
def pipe(
    value: A, f1: Callable[[A], B], f2: Callable[[B], C], f3: Callable[[C], D],
    f4: Callable[[D], E], f5: Callable[[E], F], f6: Callable[[F], G],
    f7: Callable[[G], H], f8: Callable[[H], I],
) -> I: ...
@overload
def pipe(
    value: A, f1: Callable[[A], B], f2: Callable[[B], C], f3: Callable[[C], D],
    f4: Callable[[D], E], f5: Callable[[E], F], f6: Callable[[F], G],
    f7: Callable[[G], H], f8: Callable[[H], I], f9: Callable[[I], J],
) -> J: ...
@overload
def pipe(value: Any, *stages: Callable[[Any], Any]) -> Any: ...


def pipe(value: Any, *stages: Callable[[Any], Any]) -> Any:
    """
    Pipe a value through a series of functions, left to right.

    Each stage receives the previous stage's result. With no stages the
    value itself is returned. Exceptions raised by a stage propagate
    unchanged and no later stage runs.

    Example:
        pipe(
            5,
            lambda x: x * 2,
            lambda x: x + 1,
            lambda x: f"Result: {x}",
        )
        # "Result: 11"

    Raises:
        StageNotCallableError: If any stage is not callable (checked before
            the first stage runs)
    """
    ensure_stages(stages, "pipe")
    result = value
    for stage in stages:
        result = stage(result)
    return result


# =============================================================================
# pipe_async
# =============================================================================

async def _resolve(value: Any) -> Any:
    """Await ``value`` until it is no longer awaitable."""
    while inspect.isawaitable(value):
        value = await value
    return value


@overload
async def pipe_async(value: Union[A, Awaitable[A]]) -> A: ...
@overload
async def pipe_async(value: Union[A, Awaitable[A]], f1: AsyncStage[A, B]) -> B: ...
@overload
async def pipe_async(
    value: Union[A, Awaitable[A]], f1: AsyncStage[A, B], f2: AsyncStage[B, C],
) -> C: ...
@overload
async def pipe_async(
    value: Union[A, Awaitable[A]], f1: AsyncStage[A, B], f2: AsyncStage[B, C],
    f3: AsyncStage[C, D],
) -> D: ...
@overload
async def pipe_async(
    value: Union[A, Awaitable[A]], f1: AsyncStage[A, B], f2: AsyncStage[B, C],
    f3: AsyncStage[C, D], f4: AsyncStage[D, E],
) -> E: ...
@overload
async def pipe_async(
    value: Union[A, Awaitable[A]], f1: AsyncStage[A, B], f2: AsyncStage[B, C],
    f3: AsyncStage[C, D], f4: AsyncStage[D, E], f5: AsyncStage[E, F],
) -> F: ...
@overload
async def pipe_async(
    value: Union[A, Awaitable[A]], f1: AsyncStage[A, B], f2: AsyncStage[B, C],
    f3: AsyncStage[C, D], f4: AsyncStage[D, E], f5: AsyncStage[E, F],
    f6: AsyncStage[F, G],
) -> G: ...
@overload
async def pipe_async(
    value: Union[A, Awaitable[A]], f1: AsyncStage[A, B], f2: AsyncStage[B, C],
    f3: AsyncStage[C, D], f4: AsyncStage[D, E], f5: AsyncStage[E, F],
    f6: AsyncStage[F, G], f7: AsyncStage[G, H],
) -> H: ...
@overload
async def pipe_async(value: Any, *stages: Callable[[Any], Any]) -> Any: ...


async def pipe_async(value: Any, *stages: Callable[[Any], Any]) -> Any:
    """
    Pipe a value through sync or async functions, left to right.

    The initial value may itself be awaitable. Every stage result that is
    awaitable is awaited before the next stage is called, so stages never
    overlap. A failure raised by a stage, or by awaiting its result, ends
    the chain and propagates out of the coroutine.

    Example:
        user = await pipe_async(
            user_id,
            fetch_user,            # async
            lambda u: u.email,     # sync
            send_welcome_email,    # async
        )
    """
    ensure_stages(stages, "pipe_async")
    result = await _resolve(value)
    for stage in stages:
        result = await _resolve(stage(result))
    return result


# =============================================================================
# compose
# =============================================================================

@overload
def compose() -> Callable[[A], A]: ...
@overload
def compose(f1: Callable[[A], B]) -> Callable[[A], B]: ...
@overload
def compose(f2: Callable[[B], C], f1: Callable[[A], B]) -> Callable[[A], C]: ...
@overload
def compose(
    f3: Callable[[C], D], f2: Callable[[B], C], f1: Callable[[A], B],
) -> Callable[[A], D]: ...
@overload
def compose(
    f4: Callable[[D], E], f3: Callable[[C], D], f2: Callable[[B], C],
    f1: Callable[[A], B],
) -> Callable[[A], E]: ...
@overload
def compose(
    f5: Callable[[E], F], f4: Callable[[D], E], f3: Callable[[C], D],
    f2: Callable[[B], C], f1: Callable[[A], B],
) -> Callable[[A], F]: ...
@overload
def compose(*stages: Callable[[Any], Any]) -> Callable[[Any], Any]: ...


def compose(*stages: Callable[[Any], Any]) -> Callable[[Any], Any]:
    """
    Compose functions right-to-left (mathematical composition).

    ``compose(f, g, h)(x) == f(g(h(x)))``: the last function given is
    applied first. With no functions the result behaves like ``identity``.

    Example:
        transform = compose(
            lambda x: f"Result: {x}",
            lambda x: x + 1,
            lambda x: x * 2,
        )
        transform(5)  # "Result: 11"
    """
    ensure_stages(stages, "compose")
    ordered = tuple(reversed(stages))

    def composed(value: Any) -> Any:
        result = value
        for stage in ordered:
            result = stage(result)
        return result

    return composed


# =============================================================================
# flow / Flow
# =============================================================================

class Flow(Generic[A, B]):
    """
    A reusable left-to-right pipeline of unary stages.

    Flows are immutable: ``then`` (and its ``>>`` sugar) returns a new Flow
    and leaves the receiver untouched, so a Flow can be shared and extended
    freely. Calling a Flow is the same as ``pipe(value, *flow.stages)``.

    Example:
        normalize = Flow().then(str.strip).then(str.lower)
        slug = normalize >> (lambda s: s.replace(" ", "-"))

        slug("  Hello World ")  # "hello-world"
        normalize.stages        # (str.strip, str.lower)

    ::: This is-in-layer Domain-Specific-Language-Layer.
    ::: This is a builder.
    ::: This is stateless.
    """

    __slots__ = ("_stages",)

    def __init__(self, stages: Iterable[Callable[[Any], Any]] = ()):
        stages = tuple(stages)
        ensure_stages(stages, "Flow")
        self._stages: Tuple[Callable[[Any], Any], ...] = stages

    @property
    def stages(self) -> Tuple[Callable[[Any], Any], ...]:
        """The stages of this flow, in application order."""
        return self._stages

    def then(self, stage: Callable[[B], C]) -> "Flow[A, C]":
        """Return a new Flow that applies ``stage`` after this one."""
        ensure_callable(stage, len(self._stages), "Flow.then")
        return Flow(self._stages + (stage,))

    def __rshift__(self, stage: Callable[[B], C]) -> "Flow[A, C]":
        """Syntactic sugar: flow >> stage == flow.then(stage)"""
        return self.then(stage)

    def __call__(self, value: A) -> B:
        return pipe(value, *self._stages)

    def __len__(self) -> int:
        return len(self._stages)

    def __repr__(self) -> str:
        names = ", ".join(getattr(s, "__name__", repr(s)) for s in self._stages)
        return f"Flow({names})"


@overload
def flow() -> Flow[A, A]: ...
@overload
def flow(f1: Callable[[A], B]) -> Flow[A, B]: ...
@overload
def flow(f1: Callable[[A], B], f2: Callable[[B], C]) -> Flow[A, C]: ...
@overload
def flow(f1: Callable[[A], B], f2: Callable[[B], C], f3: Callable[[C], D]) -> Flow[A, D]: ...
@overload
def flow(
    f1: Callable[[A], B], f2: Callable[[B], C], f3: Callable[[C], D],
    f4: Callable[[D], E],
) -> Flow[A, E]: ...
@overload
def flow(
    f1: Callable[[A], B], f2: Callable[[B], C], f3: Callable[[C], D],
    f4: Callable[[D], E], f5: Callable[[E], F],
) -> Flow[A, F]: ...
@overload
def flow(
    f1: Callable[[A], B], f2: Callable[[B], C], f3: Callable[[C], D],
    f4: Callable[[D], E], f5: Callable[[E], F], f6: Callable[[F], G],
) -> Flow[A, G]: ...
@overload
def flow(
    f1: Callable[[A], B], f2: Callable[[B], C], f3: Callable[[C], D],
    f4: Callable[[D], E], f5: Callable[[E], F], f6: Callable[[F], G],
    f7: Callable[[G], H],
) -> Flow[A, H]: ...
@overload
def flow(*stages: Callable[[Any], Any]) -> Flow[Any, Any]: ...


def flow(*stages: Callable[[Any], Any]) -> Flow[Any, Any]:
    """
    Create a reusable pipeline function (left-to-right composition).

    ``flow(f, g, h)(x)`` behaves exactly like ``pipe(x, f, g, h)``.
    The returned Flow can be extended with ``.then`` or ``>>``.

    Example:
        process = flow(
            lambda x: x * 2,
            lambda x: x + 1,
            lambda x: f"Result: {x}",
        )
        process(5)  # "Result: 11"
    """
    ensure_stages(stages, "flow")
    return Flow(stages)
