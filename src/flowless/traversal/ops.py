"""Shape-preserving traversals with transparent awaiting.

Every traversal detects the container kind once (or takes it from ``kind=``)
and runs the algorithm through that kind's adapter. Callbacks are offered
``(value, key, container)``. When no callback result is awaitable the
traversal returns synchronously; otherwise it returns a coroutine.

All public traversals are curried, so ``map_(double)`` is a reusable function
of a container, and an awaitable callback or container is awaited first.
"""

from __future__ import annotations

import itertools
from collections.abc import Callable, Iterator, Sequence
from typing import Any

from flowless.composition.curry import curried
from flowless.containers.adapters import Adapter, ContainerKind, Entry
from flowless.containers.registry import get_adapter, resolve_kind
from flowless.kernel.arity import spread
from flowless.kernel.functions import identity
from flowless.kernel.deferred import (
    any_deferred,
    await_all,
    discard,
    disjunction,
    is_deferred,
    not_,
    resolve,
)
from flowless.matching.match import predicate
from flowless.traversal import streams


@curried(2)
def for_each(proc: Callable[..., Any], container: Any, kind: ContainerKind | None = None) -> Any:
    """Call proc(value, key, container) for every entry, for its side effects.

    Returns None, or a coroutine resolving to None once every awaitable proc
    result (or, for streams, every chunk) has been handled.
    """
    call = spread(proc)
    kind = resolve_kind(container, kind)
    if kind is ContainerKind.STREAM:
        return streams.for_each_stream(call, container)

    pending: list[Any] = []
    try:
        for key, value in get_adapter(kind).entries(container):
            result = call(value, key, container)
            if is_deferred(result):
                pending.append(result)
    except Exception:
        discard(pending)
        raise
    if pending:
        return _settle(pending)
    return None


@curried(2)
def map_(proc: Callable[..., Any], container: Any, kind: ContainerKind | None = None) -> Any:
    """Apply proc to every entry, producing a container of the same kind.

    Example:
        >>> map_(lambda v: v * 2, {"a": 1, "b": 2})
        {'a': 2, 'b': 4}

    Returns:
        The mapped container, or a coroutine resolving to it once every
        awaitable result has settled. Output order follows input order.
    """
    call = spread(proc)
    kind = resolve_kind(container, kind)
    if kind is ContainerKind.STREAM:
        return streams.map_stream(call, container)

    adapter = get_adapter(kind)
    keys: list[Any] = []
    results: list[Any] = []
    try:
        for key, value in adapter.entries(container):
            keys.append(key)
            results.append(call(value, key, container))
    except Exception:
        discard(results)
        raise
    if any_deferred(results):
        return _build_later(adapter, container, keys, results)
    return _build(adapter, container, keys, results)


@curried(2)
def filter_(pred: Any, container: Any, kind: ContainerKind | None = None) -> Any:
    """Keep the entries for which pred is truthy, in container order.

    pred is called as-is when callable, otherwise compiled as a pattern
    (see match). Awaitable predicate results are awaited together before
    the result is built.
    """
    test = spread(predicate(pred))
    kind = resolve_kind(container, kind)
    if kind is ContainerKind.STREAM:
        return streams.filter_stream(test, container)

    adapter = get_adapter(kind)
    candidates: list[Entry] = []
    conditions: list[Any] = []
    try:
        for key, value in adapter.entries(container):
            condition = test(value, key, container)
            if is_deferred(condition) or condition:
                candidates.append((key, value))
                conditions.append(condition)
    except Exception:
        discard(conditions)
        raise
    if any_deferred(conditions):
        return _select_later(adapter, container, candidates, conditions)
    keys = [key for key, _ in candidates]
    return _build(adapter, container, keys, [value for _, value in candidates])


@curried(3)
def reduce_(proc: Callable[..., Any], seed: Any, container: Any, kind: ContainerKind | None = None) -> Any:
    """Fold the container with proc(accumulator, value, key, container).

    A callable seed is a factory: it is called with the container to create
    a fresh accumulator for every reduction. Steps run strictly in order; an
    awaitable accumulator suspends the remaining steps until it resolves.
    """
    call = spread(proc)
    accumulator = spread(seed)(container) if callable(seed) else seed
    kind = resolve_kind(container, kind)
    if kind is ContainerKind.STREAM:
        return streams.reduce_stream(call, accumulator, container)

    entries = get_adapter(kind).entries(container)
    for key, value in entries:
        if is_deferred(accumulator):
            remaining = itertools.chain([(key, value)], entries)
            return _reduce_later(call, accumulator, container, remaining)
        accumulator = call(accumulator, value, key, container)
    if is_deferred(accumulator):
        return resolve(accumulator)
    return accumulator


@curried(2)
def find(pred: Any, container: Any, kind: ContainerKind | None = None) -> Any:
    """First value, in iteration order, for which pred is truthy (else None).

    After the first awaitable predicate result the remaining entries are
    tested one by one once the earlier ones have settled, so a later entry
    never wins over an earlier one that resolves more slowly.
    """
    test = spread(predicate(pred))
    kind = resolve_kind(container, kind)
    if kind is ContainerKind.STREAM:
        return streams.find_stream(test, container)

    entries = get_adapter(kind).entries(container)
    for key, value in entries:
        condition = test(value, key, container)
        if is_deferred(condition):
            return _find_later(test, container, value, condition, entries)
        if condition:
            return value
    return None


@curried(2)
def some(pred: Any, container: Any, kind: ContainerKind | None = None) -> Any:
    """True if pred is truthy for any entry.

    A synchronous truthy result answers immediately. Awaitable results are
    raced once every entry has been tested: True on the first truthy one,
    False when all settle falsy.
    """
    test = spread(predicate(pred))
    kind = resolve_kind(container, kind)
    if kind is ContainerKind.STREAM:
        return streams.some_stream(test, container)

    return disjunction(
        test(value, key, container) for key, value in get_adapter(kind).entries(container)
    )


@curried(2)
def every(pred: Any, container: Any, kind: ContainerKind | None = None) -> Any:
    """True if pred is truthy for all entries; defined as not some(not pred)."""
    test = spread(predicate(pred))

    def fails(*entry: Any) -> Any:
        return not_(test(*entry))

    return not_(some(fails, container, kind=kind))


sync = map_(identity)
"""Turn a container of awaitables into an awaitable container of values."""


def _build(adapter: Adapter, source: Any, keys: Sequence[Any], values: Sequence[Any]) -> Any:
    result = adapter.create()
    for key, value in zip(keys, values):
        adapter.store(result, value, key)
    return adapter.finish(result, source)


async def _build_later(
    adapter: Adapter, source: Any, keys: Sequence[Any], results: Sequence[Any]
) -> Any:
    return _build(adapter, source, keys, await await_all(results))  # type: ignore[misc]


async def _select_later(
    adapter: Adapter, source: Any, candidates: Sequence[Entry], conditions: Sequence[Any]
) -> Any:
    settled = await await_all(conditions)  # type: ignore[misc]
    kept = [entry for entry, condition in zip(candidates, settled) if condition]
    return _build(adapter, source, [key for key, _ in kept], [value for _, value in kept])


async def _reduce_later(
    call: Callable[..., Any],
    accumulator: Any,
    container: Any,
    remaining: Iterator[Entry],
) -> Any:
    accumulator = await resolve(accumulator)
    for key, value in remaining:
        accumulator = await resolve(call(accumulator, value, key, container))
    return accumulator


async def _find_later(
    test: Callable[..., Any],
    container: Any,
    value: Any,
    condition: Any,
    remaining: Iterator[Entry],
) -> Any:
    if await resolve(condition):
        return value
    for key, value in remaining:
        if await resolve(test(value, key, container)):
            return value
    return None


async def _settle(pending: Sequence[Any]) -> None:
    await await_all(pending)  # type: ignore[misc]

