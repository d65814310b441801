"""
fnpipe Accessors - Projection and Constant Helpers
"""

import copy
from collections.abc import Mapping
from typing import Any, Callable, Optional, TypeVar

T = TypeVar("T")

__all__ = ["prop", "identity", "constant"]


def prop(key: Any, default: Optional[Any] = None) -> Callable[[Any], Any]:
    """
    Property accessor for pipelines.

    Mappings are read by key, other objects by attribute for string keys
    and by subscript otherwise (tuple/list indices). A missing field
    yields ``default``.

    Example:
        pipe({"name": "Alice", "age": 30}, prop("name"))
        # "Alice"
        pipe(("x", "y"), prop(1))
        # "y"
    """
    def getter(obj: Any) -> Any:
        if isinstance(obj, Mapping):
            return obj.get(key, default)
        if isinstance(key, str):
            return getattr(obj, key, default)
        try:
            return obj[key]
        except LookupError:
            return default

    return getter


def identity(value: T) -> T:
    """Identity function - returns the value unchanged."""
    return value


def constant(value: T, snapshot: bool = False) -> Callable[..., T]:
    """
    Create a constant function.

    The returned function ignores its arguments and always returns
    ``value``. The value is captured by reference: rebinding the caller's
    variable has no effect, but in-place mutation of a mutable value is
    seen by later calls. Pass ``snapshot=True`` to deep-copy the value once
    at construction instead.

    Example:
        pipe(anything, constant(42))  # 42
    """
    captured = copy.deepcopy(value) if snapshot else value

    def constant_fn(*_args: Any, **_kwargs: Any) -> T:
        return captured

    return constant_fn
