"""Traversals over async iterables (push streams).

Output streams are async generators pulling from the source, so a pending
per-chunk result holds back consumption of the next chunk. The source
iterator is closed on completion, short-circuit and failure alike.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterable, AsyncIterator, Callable
from typing import Any

from flowless.kernel.deferred import resolve

logger = logging.getLogger(__name__)


async def _release(iterator: AsyncIterator[Any]) -> None:
    aclose = getattr(iterator, "aclose", None)
    if aclose is not None:
        logger.debug("Closing stream %r", iterator)
        await aclose()


async def for_each_stream(proc: Callable[..., Any], stream: AsyncIterable[Any]) -> None:
    iterator = aiter(stream)
    try:
        index = 0
        async for chunk in iterator:
            await resolve(proc(chunk, index, stream))
            index += 1
    finally:
        await _release(iterator)


async def map_stream(proc: Callable[..., Any], stream: AsyncIterable[Any]) -> AsyncIterator[Any]:
    iterator = aiter(stream)
    try:
        index = 0
        async for chunk in iterator:
            yield await resolve(proc(chunk, index, stream))
            index += 1
    finally:
        await _release(iterator)


async def filter_stream(pred: Callable[..., Any], stream: AsyncIterable[Any]) -> AsyncIterator[Any]:
    iterator = aiter(stream)
    try:
        index = 0
        async for chunk in iterator:
            if await resolve(pred(chunk, index, stream)):
                yield chunk
            index += 1
    finally:
        await _release(iterator)


async def reduce_stream(proc: Callable[..., Any], seed: Any, stream: AsyncIterable[Any]) -> Any:
    """Fold the stream strictly in order, awaiting each step before the next chunk."""
    iterator = aiter(stream)
    try:
        accumulator = await resolve(seed)
        index = 0
        async for chunk in iterator:
            accumulator = await resolve(proc(accumulator, chunk, index, stream))
            index += 1
        return accumulator
    finally:
        await _release(iterator)


async def find_stream(pred: Callable[..., Any], stream: AsyncIterable[Any]) -> Any:
    iterator = aiter(stream)
    try:
        index = 0
        async for chunk in iterator:
            if await resolve(pred(chunk, index, stream)):
                return chunk
            index += 1
        return None
    finally:
        await _release(iterator)


async def some_stream(pred: Callable[..., Any], stream: AsyncIterable[Any]) -> bool:
    iterator = aiter(stream)
    try:
        index = 0
        async for chunk in iterator:
            if await resolve(pred(chunk, index, stream)):
                return True
            index += 1
        return False
    finally:
        await _release(iterator)
