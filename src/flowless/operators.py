"""Boolean and comparison operators that understand patterns and awaitables."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from flowless.composition.curry import curried
from flowless.kernel.deferred import conjunction, disjunction
from flowless.matching.match import match, predicate
from flowless.traversal.ops import every


def and_(*preds: Any) -> Callable[[Any], Any]:
    """Predicate true when every pred (or pattern) holds for the target.

    Preds are tried in order and stop at the first synchronous falsy result.
    """
    tests = tuple(predicate(pred) for pred in preds)

    def conjoined(target: Any) -> Any:
        return conjunction(test(target) for test in tests)

    return conjoined


def or_(*preds: Any) -> Callable[[Any], Any]:
    """Predicate true when any pred (or pattern) holds for the target."""
    tests = tuple(predicate(pred) for pred in preds)

    def disjoined(target: Any) -> Any:
        return disjunction(test(target) for test in tests)

    return disjoined


@curried(2)
def eq(a: Any, b: Any) -> bool:
    return a == b


@curried(2)
def gt(a: Any, b: Any) -> bool:
    """``gt(3)`` reads "greater than 3": true when b > a."""
    return b > a


@curried(2)
def gte(a: Any, b: Any) -> bool:
    return b >= a


@curried(2)
def lt(a: Any, b: Any) -> bool:
    return b < a


@curried(2)
def lte(a: Any, b: Any) -> bool:
    return b <= a


def match_keys(pattern: Any) -> Callable[[Any], Any]:
    """Predicate true when every key of a container matches pattern."""
    test = match(pattern)

    def keys_match(container: Any) -> Any:
        return every(lambda _value, key: test(key), container)

    return keys_match
