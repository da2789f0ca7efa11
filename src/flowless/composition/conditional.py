"""if / elif / else chains over possibly asynchronous predicates."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import Any

from flowless.kernel.deferred import is_deferred, resolve
from flowless.kernel.errors import InvalidArgumentError
from flowless.kernel.functions import resolver
from flowless.matching.match import predicate

Branch = tuple[Callable[[Any], Any], Callable[[Any], Any]]


def if_else(*parts: Any) -> Callable[[Any], Any]:
    """Build a conditional: ``pred, then[, pred, then...][, otherwise]``.

    Callable predicates are called as-is, other predicates are compiled as
    patterns with match(); branch values that are not callable are returned
    as constants. Predicates are tried in order and the first truthy
    one selects its branch. Once a predicate returns an awaitable, the rest of
    the chain is evaluated in order inside a coroutine, still stopping at the
    first truthy predicate.

    Example:
        >>> sgn = if_else(lambda x: x > 0, 1, lambda x: x < 0, -1, 0)
        >>> sgn(5), sgn(-0.5), sgn(0)
        (1, -1, 0)

    Returns:
        Function of one value returning the selected branch result, or None
        when nothing matched and no else branch was given.
    """
    if len(parts) < 2:
        raise InvalidArgumentError("if_else() requires at least a predicate and a branch", parts)

    branches: list[Branch] = [
        (predicate(parts[i]), _as_branch(parts[i + 1]))
        for i in range(0, len(parts) - 1, 2)
    ]
    otherwise = _as_branch(parts[-1]) if len(parts) % 2 else None

    def conditional(value: Any) -> Any:
        remaining = iter(branches)
        for pred, then in remaining:
            condition = pred(value)
            if is_deferred(condition):
                return _select_later(value, condition, then, remaining, otherwise)
            if condition:
                return then(value)
        if otherwise is not None:
            return otherwise(value)
        return None

    return conditional


async def _select_later(
    value: Any,
    condition: Any,
    then: Callable[[Any], Any],
    remaining: Iterator[Branch],
    otherwise: Callable[[Any], Any] | None,
) -> Any:
    if await resolve(condition):
        return await resolve(then(value))
    for pred, then in remaining:
        if await resolve(pred(value)):
            return await resolve(then(value))
    if otherwise is not None:
        return await resolve(otherwise(value))
    return None


def _as_branch(part: Any) -> Callable[[Any], Any]:
    return part if callable(part) else resolver(part)
