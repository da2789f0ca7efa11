"""Left-to-right composition with error-handler stages and transparent awaiting."""

from __future__ import annotations

import functools
import logging
from collections.abc import Callable, Sequence
from typing import Any

from flowless.kernel.deferred import any_deferred, await_all, is_deferred, resolve
from flowless.kernel.errors import InvalidArgumentError
from flowless.kernel.stage import Stage

logger = logging.getLogger(__name__)


def compose(*parts: Callable[..., Any] | Stage) -> Callable[..., Any]:
    """Compose functions left to right.

    The first function receives every argument of the call, the rest receive
    the previous result. Whenever a value (or an argument, positional or
    keyword) is awaitable the remaining stages run after it resolves and a
    coroutine is returned.

    Stages created with catch() run only when the pipeline holds an exception,
    normal stages only when it does not. An exception that no later handler
    recovers from is re-raised (or raised from the coroutine).

    Example:
        >>> inc_sq = compose(lambda a: a * 2, lambda a: a ** 2, lambda a: a + 1)
        >>> inc_sq(1)
        5

    Raises:
        InvalidArgumentError: No parts, or a part is neither callable nor a Stage
    """
    if not parts:
        raise InvalidArgumentError("compose() requires at least one function", parts)
    stages = tuple(Stage.of(part) for part in parts)
    first, rest = stages[0], stages[1:]

    def composed(*args: Any, **kwargs: Any) -> Any:
        if any_deferred([*args, *kwargs.values()]):
            return _continue(_apply_later(first, args, kwargs), False, rest)
        try:
            value = first.run(*args, **kwargs)
        except Exception as exc:
            return _run(exc, True, rest)
        return _run(value, False, rest)

    functools.update_wrapper(composed, first.run, updated=())
    return composed


def _run(value: Any, is_error: bool, stages: Sequence[Stage]) -> Any:
    """Synchronous stage loop; hands over to _continue once a value is deferred."""
    for index, stage in enumerate(stages):
        if is_deferred(value):
            return _continue(value, is_error, stages[index:])
        if is_error != stage.handles_errors:
            continue
        if is_error:
            logger.debug("Routing %r to error handler %r", value, stage.run)
        try:
            value = stage.run(value)
            is_error = False
        except Exception as exc:
            value, is_error = exc, True

    if is_deferred(value):
        return _continue(value, is_error, ())
    if is_error:
        raise value
    return value


async def _continue(value: Any, is_error: bool, stages: Sequence[Stage]) -> Any:
    """Asynchronous stage loop with the same skip rules as _run."""
    if not is_error:
        try:
            value = await resolve(value)
        except Exception as exc:
            value, is_error = exc, True

    for stage in stages:
        if is_error != stage.handles_errors:
            continue
        if is_error:
            logger.debug("Routing %r to error handler %r", value, stage.run)
        try:
            value = await resolve(stage.run(value))
            is_error = False
        except Exception as exc:
            value, is_error = exc, True

    if is_error:
        raise value
    return value


async def _apply_later(first: Stage, args: Sequence[Any], kwargs: dict[str, Any]) -> Any:
    names = list(kwargs)
    settled = await await_all([*args, *kwargs.values()])  # type: ignore[misc]
    keywords = dict(zip(names, settled[len(args):]))
    return await resolve(first.run(*settled[: len(args)], **keywords))
