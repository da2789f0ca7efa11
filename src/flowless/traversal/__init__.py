"""Polymorphic traversals over sequences, records, sets, maps and streams."""

from flowless.traversal.ops import every, filter_, find, for_each, map_, reduce_, some, sync

__all__ = [
    "for_each",
    "map_",
    "filter_",
    "reduce_",
    "find",
    "some",
    "every",
    "sync",
]
