"""
fnpipe Sequences - Collection Combinators

Lift per-element functions into stages over ordered sequences:
- map: apply a function to every element
- filter: keep elements matching a predicate
- reduce: left fold into a single value

Stages accept any iterable, never mutate it, and always build a new list
(map/filter) or accumulator (reduce). The names intentionally shadow the
builtins so pipelines read ``pipe(xs, filter(...), map(...))``.
"""

from typing import Any, Callable, Iterable, List, TypeVar

from .exceptions import ensure_callable

T = TypeVar("T")
U = TypeVar("U")
R = TypeVar("R")

__all__ = ["map", "filter", "reduce"]


def map(fn: Callable[[T], U]) -> Callable[[Iterable[T]], List[U]]:
    """
    Map over a sequence in a pipeline.

    Example:
        pipe([1, 2, 3], map(lambda x: x * 2))
        # [2, 4, 6]
    """
    ensure_callable(fn, 0, "map")

    def mapped(items: Iterable[T]) -> List[U]:
        return [fn(item) for item in items]

    return mapped


def filter(predicate: Callable[[T], Any]) -> Callable[[Iterable[T]], List[T]]:
    """
    Filter a sequence in a pipeline, preserving order.

    Example:
        pipe([1, 2, 3, 4, 5], filter(lambda x: x % 2 == 0))
        # [2, 4]
    """
    ensure_callable(predicate, 0, "filter")

    def filtered(items: Iterable[T]) -> List[T]:
        return [item for item in items if predicate(item)]

    return filtered


def reduce(fn: Callable[[R, T], R], initial: R) -> Callable[[Iterable[T]], R]:
    """Reduce a sequence in a pipeline (strict left fold from ``initial``)."""
    ensure_callable(fn, 0, "reduce")

    def reduced(items: Iterable[T]) -> R:
        acc = initial
        for item in items:
            acc = fn(acc, item)
        return acc

    return reduced
