"""
fnpipe - Function composition helpers for Python

Express a sequential data transformation as a flat list of unary
functions instead of nested calls.

Sequencing:
- pipe / pipe_async: thread a value through stages, left to right
- compose: right-to-left composition
- flow / Flow: reusable left-to-right composition

Combinators:
- tap, tap_async, trace, when, unless, branch, try_catch
- map, filter, reduce
- prop, identity, constant

Example:
    from fnpipe import pipe, filter, map, reduce

    pipe(
        range(1, 11),
        filter(lambda x: x % 2 == 0),
        map(lambda x: x * x),
        reduce(lambda total, x: total + x, 0),
    )
    # 220
"""

__version__ = "0.1.0"

from .core import pipe, pipe_async, compose, flow, Flow
from .operators import tap, tap_async, trace, when, unless, branch, try_catch
from .sequences import map, filter, reduce
from .accessors import prop, identity, constant
from .exceptions import FnPipeError, StageNotCallableError, ConfigError
from .config import FnPipeConfig, get_config, reset_config

__all__ = [
    # Sequencing
    "pipe",
    "pipe_async",
    "compose",
    "flow",
    "Flow",
    # Operators
    "tap",
    "tap_async",
    "trace",
    "when",
    "unless",
    "branch",
    "try_catch",
    # Sequences
    "map",
    "filter",
    "reduce",
    # Accessors
    "prop",
    "identity",
    "constant",
    # Errors
    "FnPipeError",
    "StageNotCallableError",
    "ConfigError",
    # Config
    "FnPipeConfig",
    "get_config",
    "reset_config",
]
