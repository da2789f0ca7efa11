"""Awaitable detection and fan-in - the seam every combinator branches on."""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Awaitable, Iterable, Sequence
from typing import Any, TypeVar

T = TypeVar("T")

logger = logging.getLogger(__name__)


def is_deferred(value: Any) -> bool:
    """Return True if value is awaitable (coroutine, future, or __await__ object)."""
    return inspect.isawaitable(value)


def any_deferred(values: Sequence[Any]) -> bool:
    return any(is_deferred(value) for value in values)


async def resolve(value: Any) -> Any:
    """Await value until it is no longer awaitable.

    Coroutines returning coroutines are flattened, so a continuation can
    return either a plain value or another awaitable.
    """
    while is_deferred(value):
        value = await value
    return value


def await_all(values: Sequence[T]) -> Sequence[T] | Awaitable[list[T]]:
    """Fan-in a sequence of possibly deferred values.

    Returns values unchanged when nothing is deferred. Otherwise returns a
    coroutine resolving to a list in the original positional order. The first
    failure propagates and the remaining pending values are cancelled.
    """
    if not any_deferred(values):
        return values
    return _gather(values)


async def _gather(values: Sequence[T]) -> list[T]:
    tasks = {
        index: asyncio.ensure_future(resolve(value))
        for index, value in enumerate(values)
        if is_deferred(value)
    }
    try:
        settled = await asyncio.gather(*tasks.values())
    except BaseException:
        for task in tasks.values():
            task.cancel()
        raise

    result = list(values)
    for index, value in zip(tasks, settled):
        result[index] = value
    return result


def discard(values: Sequence[Any]) -> None:
    """Drop pending values that will never be awaited.

    Coroutines that never started are closed so they do not leak a
    "never awaited" warning. Futures are left alone; they belong to the caller.
    """
    for value in values:
        if inspect.iscoroutine(value):
            value.close()


def not_(value: Any) -> Any:
    """Boolean negation, mapped over a deferred value."""
    if is_deferred(value):
        return _negate(value)
    return not value


async def _negate(value: Any) -> bool:
    return not await resolve(value)


async def any_truthy(values: Sequence[Any]) -> bool:
    """Resolve values concurrently; True as soon as one resolves truthy.

    False once every value resolved falsy. The first failure propagates.
    Values still pending when the outcome is known are cancelled.
    """
    tasks = [asyncio.ensure_future(resolve(value)) for value in values]
    try:
        for settled in asyncio.as_completed(tasks):
            if await settled:
                return True
        return False
    finally:
        for task in tasks:
            task.cancel()


def disjunction(results: Iterable[Any]) -> Any:
    """Short-circuiting OR over lazily produced, possibly deferred results.

    A synchronous truthy result answers True at once and pending results
    are discarded. Otherwise pending results are raced with any_truthy.
    """
    pending: list[Any] = []
    try:
        for result in results:
            if is_deferred(result):
                pending.append(result)
            elif result:
                if pending:
                    logger.debug("Discarding %d pending results", len(pending))
                    discard(pending)
                return True
    except Exception:
        discard(pending)
        raise
    if pending:
        return any_truthy(pending)
    return False


def conjunction(results: Iterable[Any]) -> Any:
    """Short-circuiting AND, the dual of disjunction."""
    return not_(disjunction(not_(result) for result in results))
