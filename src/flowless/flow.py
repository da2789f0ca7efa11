"""The flow() front door: curry a function or compose a pipeline."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from flowless.composition.compose import compose
from flowless.composition.curry import call_then, curry
from flowless.helpers import param
from flowless.kernel.stage import Stage


@call_then
def flow(*parts: Any) -> Callable[..., Any]:
    """Build a function from parts.

    A single callable is curried. Otherwise the parts are composed left to
    right, and parts that are not callable become property getters, so
    ``flow("user", "name")`` reads ``obj["user"]["name"]``.
    """
    if len(parts) == 1 and callable(parts[0]) and not isinstance(parts[0], Stage):
        return curry(parts[0])
    return compose(*(part if callable(part) else param(part) for part in parts))
