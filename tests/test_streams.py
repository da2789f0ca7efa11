"""Tests for traversals over async iterables."""

import asyncio

import pytest

from flowless import ContainerKind, every, filter_, find, for_each, kind_of, map_, reduce_, some, stream_of
from fakes import FakeStream, collect, fail, later

DIGITS = ["1", "2", "3", "4", "5", "6"]


def test_map_stream_returns_a_stream() -> None:
    output = map_(lambda x: int(x) * 2, stream_of(["1", "2", "3"]))
    assert kind_of(output) is ContainerKind.STREAM
    assert asyncio.run(collect(output)) == [2, 4, 6]


def test_map_stream_awaits_deferred_results() -> None:
    output = map_(lambda x, i: later(f"{i}:{x}"), stream_of(["a", "b"]))
    assert asyncio.run(collect(output)) == ["0:a", "1:b"]


def test_map_stream_error_closes_source() -> None:
    source = FakeStream(DIGITS)

    def parse(chunk):
        if chunk == "3":
            raise ValueError(chunk)
        return int(chunk)

    with pytest.raises(ValueError):
        asyncio.run(collect(map_(parse, source)))
    assert source.closed
    assert source.pulled == 3


def test_source_error_propagates_through_map() -> None:
    source = FakeStream(DIGITS, error_at=2)
    with pytest.raises(RuntimeError, match="stream failed"):
        asyncio.run(collect(map_(lambda x: int(x), source)))
    assert source.closed


def test_pending_result_holds_back_the_source() -> None:
    source = FakeStream(DIGITS[:3])
    observed = []

    async def slow(chunk):
        before = source.pulled
        await asyncio.sleep(0.01)
        observed.append((before, source.pulled))
        return chunk

    assert asyncio.run(collect(map_(slow, source))) == DIGITS[:3]
    assert observed == [(1, 1), (2, 2), (3, 3)]


def test_filter_stream() -> None:
    even = filter_(lambda x: int(x) % 2 == 0)
    assert asyncio.run(collect(even(stream_of(DIGITS)))) == ["2", "4", "6"]
    assert asyncio.run(collect(filter_(lambda x: later(x > "4"), stream_of(DIGITS)))) == ["5", "6"]


def test_filter_stream_failure_closes_source() -> None:
    source = FakeStream(DIGITS)
    output = filter_(lambda x: fail(ValueError(x)) if x == "2" else later(True), source)
    with pytest.raises(ValueError):
        asyncio.run(collect(output))
    assert source.closed


def test_reduce_stream() -> None:
    total = reduce_(lambda acc, x: acc + int(x), 0, stream_of(["1", "2", "5", "7"]))
    assert asyncio.run(total) == 15


def test_reduce_over_filtered_stream() -> None:
    evens = filter_(lambda x: int(x) % 2 == 0, stream_of(DIGITS))
    result = reduce_(lambda acc, x: later([*acc, x]), [], evens)
    assert asyncio.run(result) == ["2", "4", "6"]


def test_find_stream_closes_source_early() -> None:
    source = FakeStream(DIGITS)
    assert asyncio.run(find(lambda x: int(x) > 2.5, source)) == "3"
    assert source.pulled == 3
    assert source.closed


def test_find_stream_with_deferred_predicate() -> None:
    assert asyncio.run(find(lambda x: later(x == "5"), stream_of(DIGITS))) == "5"
    assert asyncio.run(find(lambda x: later(x == "9"), stream_of(DIGITS))) is None


def test_find_stream_failure_propagates() -> None:
    source = FakeStream(DIGITS)
    with pytest.raises(ValueError, match="bad chunk"):
        asyncio.run(find(lambda x: fail(ValueError("bad chunk")), source))
    assert source.closed


def test_some_and_every_stream() -> None:
    assert asyncio.run(some(lambda x: x == "4", stream_of(DIGITS))) is True
    assert asyncio.run(some(lambda x: later(x == "9"), stream_of(DIGITS))) is False
    assert asyncio.run(every(lambda x: x.isdigit(), stream_of(DIGITS))) is True
    assert asyncio.run(every(lambda x: x < "3", stream_of(DIGITS))) is False


@pytest.mark.asyncio
async def test_for_each_stream_sees_every_chunk() -> None:
    source = FakeStream(DIGITS[:3])
    seen = []
    await for_each(lambda x, i: seen.append((i, x)), source)
    assert seen == [(0, "1"), (1, "2"), (2, "3")]
    assert source.closed
