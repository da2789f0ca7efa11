"""Tests for reduce_."""

import asyncio
import inspect

import pytest

from flowless import range_, reduce_
from fakes import fail, later


def add(a, b):
    return a + b


def push(items, item):
    items.append(item)
    return items


def test_reduce_sum() -> None:
    assert reduce_(add, 0, range_(1, 10)) == 55


def test_reduce_sum_with_deferred_steps() -> None:
    result = reduce_(lambda a, b: later(a + b), 0, range_(1, 10))
    assert inspect.iscoroutine(result)
    assert asyncio.run(result) == 55


def test_reduce_dict_values() -> None:
    numbers = {"one": 1, "two": 2, "three": 3}
    assert reduce_(add, 0, numbers) == 6
    assert asyncio.run(reduce_(lambda a, b: later(a + b), 0, numbers)) == 6


def test_reduce_with_keys() -> None:
    pairs = [["a", 1], ["b", 2]]
    assert reduce_(lambda acc, pair: {**acc, pair[0]: pair[1]}, {}, pairs) == {"a": 1, "b": 2}
    assert reduce_(lambda acc, v, k: {**acc, v: k}, {}, {"x": "y"}) == {"y": "x"}


def test_seed_factory_creates_fresh_accumulators() -> None:
    copy_list = reduce_(push, lambda: [])
    source = [1, 2, 3, 4, 5]
    first = copy_list(source)
    second = copy_list(source)
    assert first == source
    assert second == source
    assert first is not second


def test_seed_factory_receives_container() -> None:
    assert reduce_(push, lambda c: [c[0]], [1, 2, 3]) == [1, 1, 2, 3]


def test_deferred_seed() -> None:
    copy_list = reduce_(push, lambda: later([]))
    result = asyncio.run(copy_list([1, 2, 3]))
    assert result == [1, 2, 3]


def test_steps_run_strictly_in_order() -> None:
    log = []

    async def step(acc, value):
        await asyncio.sleep((5 - value) * 0.005)
        log.append(value)
        return acc + value

    assert asyncio.run(reduce_(step, 0, [1, 2, 3, 4, 5])) == 15
    assert log == [1, 2, 3, 4, 5]


def test_empty_container_gives_seed() -> None:
    assert reduce_(add, 10, []) == 10
    assert asyncio.run(reduce_(add, later(10), [])) == 10


def test_reduce_failure_propagates() -> None:
    result = reduce_(lambda a, b: fail(ValueError("step")) if b == 3 else later(a + b), 0, [1, 2, 3, 4])
    with pytest.raises(ValueError, match="step"):
        asyncio.run(result)
