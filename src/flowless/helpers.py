"""Small helpers built on the core: property access, merging, ranges, effects."""

from __future__ import annotations

import asyncio
import copy
from collections.abc import AsyncIterator, Callable, Iterable, Iterator, Mapping, Sequence
from typing import Any, TypeVar

from flowless.composition.curry import call_then, curried
from flowless.kernel.deferred import any_deferred, await_all, is_deferred, resolve
from flowless.kernel.errors import InvalidArgumentError

T = TypeVar("T")


@curried(2)
def param(key: Any, base: Any) -> Any:
    """Safely read key from base.

    Mappings and sequences are indexed, other objects are read by attribute.
    Missing keys and a None base give None.
    """
    if base is None:
        return None
    if isinstance(base, Mapping):
        return base.get(key)
    if isinstance(base, Sequence):
        try:
            return base[key]
        except (IndexError, TypeError):
            return None
    if isinstance(key, str):
        return getattr(base, key, None)
    return None


@call_then
def args(*values: Any) -> list[Any]:
    """List of the given arguments, awaitable ones resolved."""
    return list(values)


@call_then
def range_(start: int, stop: int | None = None) -> Iterator[int]:
    """Inclusive range, ascending or descending.

    ``range_(3)`` yields 0..3, ``range_(-2)`` yields 0..-2, ``range_(5, 1)``
    yields 5..1.
    """
    if stop is None:
        start, stop = 0, start
    if start <= stop:
        return iter(range(start, stop + 1))
    return iter(range(start, stop - 1, -1))


@curried(2)
def merge(a: Any, b: Any) -> Any:
    """Shallow merge of two mappings into a new dict; b wins on conflicts.

    Callable operands are called without arguments and their results merged.
    """
    a = a() if callable(a) else a
    b = b() if callable(b) else b
    if any_deferred([a, b]):
        return _merge_later(a, b)
    return {**a, **b}


async def _merge_later(a: Any, b: Any) -> dict[Any, Any]:
    a, b = await await_all([a, b])  # type: ignore[misc]
    return {**a, **b}


@curried(3)
def assoc(key: Any, value: Any, obj: Any) -> Any:
    """Copy of obj with key set to value.

    A callable value is called with obj first; an awaitable value is awaited.
    """
    if callable(value):
        value = value(obj)
    if is_deferred(value):
        return _assoc_later(key, value, obj)
    return _assoc(key, value, obj)


async def _assoc_later(key: Any, value: Any, obj: Any) -> Any:
    return _assoc(key, await resolve(value), obj)


def _assoc(key: Any, value: Any, obj: Any) -> Any:
    if obj is None or isinstance(obj, Mapping):
        return {**(obj or {}), key: value}
    updated = copy.copy(obj)
    setattr(updated, key, value)
    return updated


def effect(func: Callable[..., Any]) -> Callable[..., Any]:
    """Run func for its side effect and pass the first argument through.

    Awaitable arguments are resolved before func runs and an awaitable result
    of func is awaited before the first argument is returned. Errors propagate.
    """
    if not callable(func):
        raise InvalidArgumentError(f"effect() expects a callable, got {type(func).__name__}", func)

    @call_then
    def run(*values: Any, **kwargs: Any) -> Any:
        result = func(*values, **kwargs)
        first = values[0] if values else None
        if is_deferred(result):
            return _pass_after(result, first)
        return first

    return run


async def _pass_after(result: Any, value: T) -> T:
    await resolve(result)
    return value


async def stream_of(items: Iterable[T]) -> AsyncIterator[T]:
    """Async stream of items, yielding control to the loop between chunks."""
    for item in items:
        await asyncio.sleep(0)
        yield item
