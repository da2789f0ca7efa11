"""Argument accumulation with transparent awaiting of deferred arguments."""

from __future__ import annotations

import functools
import inspect
from collections.abc import Callable, Sequence
from typing import Any

from flowless.kernel.arity import required_positional
from flowless.kernel.deferred import any_deferred, await_all, resolve
from flowless.kernel.errors import InvalidArgumentError


class _Placeholder:
    """Marks an argument slot to be filled by a later call."""

    _instance: _Placeholder | None = None

    def __new__(cls) -> _Placeholder:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "__"


__ = _Placeholder()


def is_placeholder(value: Any) -> bool:
    return value is __


def curry_n(n: int, func: Callable[..., Any]) -> Callable[..., Any]:
    """Curry func to n positional arguments.

    The returned function collects arguments over as many calls as needed.
    Placeholder (``__``) slots are filled by later calls in order. Once n real
    arguments are present func is called; if any of them is awaitable the
    call is made after all of them resolve and a coroutine is returned.

    Raises:
        InvalidArgumentError: n is not a non-negative int or func is not callable
    """
    if isinstance(n, bool) or not isinstance(n, int) or n < 0:
        raise InvalidArgumentError(f"Arity must be a non-negative integer, got {n!r}", n)
    if not callable(func):
        raise InvalidArgumentError(
            f"curry_n() expects a callable, got {type(func).__name__}", func
        )
    return _accumulate(n, func, (), {})


def curry(func: Callable[..., Any]) -> Callable[..., Any]:
    """Curry func to the number of its required positional parameters."""
    if not callable(func):
        raise InvalidArgumentError(f"curry() expects a callable, got {type(func).__name__}", func)
    try:
        n = required_positional(func)
    except (TypeError, ValueError) as exc:
        raise InvalidArgumentError(f"Cannot determine arity of {func!r}: {exc}", func) from exc
    return curry_n(n, func)


def _combine(received: Sequence[Any], args: Sequence[Any]) -> list[Any]:
    combined: list[Any] = []
    pending = iter(args)
    for value in received:
        if is_placeholder(value):
            value = next(pending, value)
        combined.append(value)
    combined.extend(pending)
    return combined


def _filled(args: Sequence[Any]) -> int:
    return sum(1 for value in args if not is_placeholder(value))


def _accumulate(
    n: int,
    func: Callable[..., Any],
    received: Sequence[Any],
    received_kwargs: dict[str, Any],
) -> Callable[..., Any]:
    @functools.wraps(func)
    def step(*args: Any, **kwargs: Any) -> Any:
        combined = _combine(received, args)
        merged_kwargs = {**received_kwargs, **kwargs}
        if _filled(combined) >= n:
            return _invoke(func, combined, merged_kwargs)
        return _accumulate(n, func, combined, merged_kwargs)

    step.__signature__ = _remaining_signature(n, func, received)  # type: ignore[attr-defined]
    return step


def _remaining_signature(n: int, func: Callable[..., Any], received: Sequence[Any]) -> inspect.Signature:
    """Signature listing only the slots still open, so arity inspection sees them."""
    try:
        names = [
            param.name
            for param in inspect.signature(func).parameters.values()
            if param.kind
            in (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)
        ]
    except (TypeError, ValueError):
        names = []

    open_slots = [index for index, value in enumerate(received) if is_placeholder(value)]
    open_slots.extend(range(len(received), n))
    open_slots = open_slots[: max(n - _filled(received), 0)]
    return inspect.Signature(
        [
            inspect.Parameter(
                names[index] if index < len(names) else f"arg{index}",
                inspect.Parameter.POSITIONAL_ONLY,
            )
            for index in open_slots
        ]
    )


def _invoke(func: Callable[..., Any], args: list[Any], kwargs: dict[str, Any]) -> Any:
    if any_deferred(args) or any_deferred(list(kwargs.values())):
        return _invoke_later(func, args, kwargs)
    return func(*args, **kwargs)


async def _invoke_later(func: Callable[..., Any], args: list[Any], kwargs: dict[str, Any]) -> Any:
    names = list(kwargs)
    settled = await await_all([*args, *kwargs.values()])  # type: ignore[misc]
    positional = settled[: len(args)]
    keywords = dict(zip(names, settled[len(args):]))
    return await resolve(func(*positional, **keywords))


def call_then(func: Callable[..., Any]) -> Callable[..., Any]:
    """Wrap func so awaitable arguments are resolved before it runs."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        return _invoke(func, list(args), kwargs)

    return wrapper


def curried(n: int) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Decorator form of curry_n."""

    def decorate(func: Callable[..., Any]) -> Callable[..., Any]:
        return curry_n(n, func)

    return decorate
