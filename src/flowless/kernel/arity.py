"""Call user callbacks with only as many positional arguments as they take."""

from __future__ import annotations

import inspect
from collections.abc import Callable
from typing import Any

_VARIADIC = -1


def positional_capacity(func: Callable[..., Any]) -> int:
    """Number of positional arguments func accepts, or -1 for *args.

    Callables without an inspectable signature (some builtins) are assumed
    to take a single argument.
    """
    try:
        signature = inspect.signature(func)
    except (TypeError, ValueError):
        return 1

    count = 0
    for param in signature.parameters.values():
        if param.kind is inspect.Parameter.VAR_POSITIONAL:
            return _VARIADIC
        if param.kind in (
            inspect.Parameter.POSITIONAL_ONLY,
            inspect.Parameter.POSITIONAL_OR_KEYWORD,
        ):
            count += 1
    return count


def required_positional(func: Callable[..., Any]) -> int:
    """Number of positional parameters without defaults (raises if uninspectable)."""
    signature = inspect.signature(func)
    return sum(
        1
        for param in signature.parameters.values()
        if param.kind
        in (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)
        and param.default is inspect.Parameter.empty
    )


def spread(func: Callable[..., Any]) -> Callable[..., Any]:
    """Wrap func so surplus positional arguments are dropped.

    Traversal callbacks are offered (value, key, container); a one-argument
    lambda only receives the value. The signature is inspected once.
    """
    capacity = positional_capacity(func)
    if capacity == _VARIADIC:
        return func

    def call(*args: Any) -> Any:
        return func(*args[:capacity])

    return call
