"""Tests for map_, for_each and sync."""

import asyncio
import inspect
from types import SimpleNamespace

import pytest

from flowless import ContainerKind, for_each, identity, kind_of, map_, range_, stream_of, sync
from fakes import collect, fail, later


def double(x):
    return x * 2


def test_map_list_by_value_and_key() -> None:
    assert map_(double, [1, 2, 3]) == [2, 4, 6]
    assert map_(lambda v, k: k, ["a", "b"]) == [0, 1]
    assert map_(lambda v, k, c: len(c), ["a", "b"]) == [2, 2]


def test_map_dict_keeps_keys() -> None:
    assert map_(double, {"a": 1, "b": 2}) == {"a": 2, "b": 4}
    assert map_(lambda v, k: k.upper(), {"a": 1}) == {"a": "A"}


def test_map_record_gives_namespace() -> None:
    assert map_(double, SimpleNamespace(a=1, b=2)) == SimpleNamespace(a=2, b=4)


def test_map_set_gives_set() -> None:
    assert map_(lambda v: v * 10, {1, 2, 3}) == {10, 20, 30}


def test_map_tuple_gives_tuple() -> None:
    assert map_(double, (1, 2)) == (2, 4)
    assert asyncio.run(map_(lambda x: later(x * 2), (1, 2))) == (2, 4)


def test_map_other_iterables_give_lists() -> None:
    assert map_(double, (x for x in range(3))) == [0, 2, 4]
    assert map_(double, range_(1, 3)) == [2, 4, 6]


def test_map_is_curried() -> None:
    doubler = map_(double)
    assert doubler([4]) == [8]
    assert doubler({"x": 4}) == {"x": 8}


def test_map_deferred_results() -> None:
    result = map_(lambda x: later(x * 2), [1, 2, 3, 4, 5])
    assert inspect.iscoroutine(result)
    assert asyncio.run(result) == [2, 4, 6, 8, 10]


def test_map_keeps_order_when_completions_race() -> None:
    result = map_(lambda x: later(x, delay=(5 - x) * 0.01), [1, 2, 3, 4, 5])
    assert asyncio.run(result) == [1, 2, 3, 4, 5]


def test_map_mixed_sync_and_deferred_results() -> None:
    result = map_(lambda x: later(x) if x % 2 else -x, [1, 2, 3, 4])
    assert asyncio.run(result) == [1, -2, 3, -4]


@pytest.mark.parametrize(
    ("container", "expected"),
    [
        ({"one": 1, "two": 2}, {"one": 2, "two": 4}),
        ({1, 2}, {2, 4}),
        (SimpleNamespace(a=1), SimpleNamespace(a=2)),
    ],
)
def test_map_deferred_results_keep_shape(container, expected) -> None:
    assert asyncio.run(map_(lambda x: later(x * 2), container)) == expected


def test_map_deferred_proc_and_container() -> None:
    result = map_(later(double), later({"one": 1}))
    assert asyncio.run(result) == {"one": 2}


def test_map_fails_fast() -> None:
    result = map_(lambda x: fail(ValueError("two")) if x == 2 else later(x, 0.05), [1, 2, 3])
    with pytest.raises(ValueError, match="two"):
        asyncio.run(result)


def test_map_sync_error_raises_immediately() -> None:
    def explode(x):
        raise KeyError(x)

    with pytest.raises(KeyError):
        map_(explode, [1])


@pytest.mark.parametrize(
    "container",
    [[1, 2, 3], (1, 2, 3), {1, 2, 3}, {"a": 1, "b": 2}, SimpleNamespace(a=1, b=2)],
)
def test_map_identity_preserves_container(container) -> None:
    result = map_(identity, container)
    assert result == container
    assert result is not container
    assert kind_of(result) is kind_of(container)


def test_map_identity_replays_stream() -> None:
    chunks = ["a", "b", "c"]
    assert asyncio.run(collect(map_(identity, stream_of(chunks)))) == chunks


def test_sync_settles_awaitables_in_place() -> None:
    assert asyncio.run(sync([later("one"), "two", later("three")])) == ["one", "two", "three"]
    assert asyncio.run(sync({"a": later(1), "b": 2})) == {"a": 1, "b": 2}
    assert sync(["one", "two"]) == ["one", "two"]


def test_for_each_visits_every_entry() -> None:
    seen = []
    assert for_each(lambda v, k: seen.append((k, v)), ["a", "b"]) is None
    assert seen == [(0, "a"), (1, "b")]

    seen.clear()
    for_each(lambda v, k: seen.append((k, v)), {"x": 1, "y": 2})
    assert seen == [("x", 1), ("y", 2)]

    seen.clear()
    for_each(seen.append, range_(1, 3))
    assert seen == [1, 2, 3]


def test_for_each_waits_for_deferred_effects() -> None:
    seen = []

    async def record(value):
        await asyncio.sleep(0.01)
        seen.append(value)

    result = for_each(record, [1, 2, 3])
    assert inspect.iscoroutine(result)
    assert asyncio.run(result) is None
    assert sorted(seen) == [1, 2, 3]


def test_for_each_with_kind_override() -> None:
    seen = []
    for_each(lambda v, k: seen.append(k), {"a": 1}, kind=ContainerKind.SEQUENCE)
    assert seen == [0]
