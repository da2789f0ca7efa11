"""Container adapters - one per container kind.

An adapter knows how to build an empty result of its kind, store a keyed
value into it, and enumerate (key, value) entries. Traversals are written
once against this interface.
"""

from __future__ import annotations

from collections.abc import AsyncIterable, Callable, Iterable, Iterator, Mapping, Set
from dataclasses import dataclass
from enum import Enum
from types import SimpleNamespace
from typing import Any


class ContainerKind(Enum):
    """Sealed set of container shapes the traversals are polymorphic over."""

    SEQUENCE = "sequence"
    RECORD = "record"
    SET = "set"
    MAP = "map"
    STREAM = "stream"


Entry = tuple[Any, Any]


def _as_built(result: Any, _source: Any) -> Any:
    return result


@dataclass(frozen=True)
class Adapter:
    """Construction and enumeration protocol for one container kind.

    Attributes:
        kind: The container kind served
        create: Builds an empty result container
        store: Stores value under key into a result container
        entries: Yields (key, value) pairs of a container in iteration order
        finish: Turns a filled result into its final form, given the source
    """

    kind: ContainerKind
    create: Callable[[], Any]
    store: Callable[[Any, Any, Any], None]
    entries: Callable[[Any], Iterator[Entry]]
    finish: Callable[[Any, Any], Any] = _as_built


def _indexed(container: Iterable[Any]) -> Iterator[Entry]:
    return enumerate(container)


def _mapping_entries(container: Mapping[Any, Any]) -> Iterator[Entry]:
    return iter(container.items())


def record_fields(obj: Any) -> dict[str, Any]:
    """Public attributes of an object, in definition order."""
    if obj is None:
        return {}
    try:
        attributes = vars(obj)
    except TypeError:
        attributes = {}
        for cls in reversed(type(obj).__mro__):
            slots = cls.__dict__.get("__slots__", ())
            if isinstance(slots, str):
                slots = (slots,)
            for name in slots:
                if hasattr(obj, name):
                    attributes[name] = getattr(obj, name)
    return {name: value for name, value in attributes.items() if not name.startswith("_")}


def _record_entries(obj: Any) -> Iterator[Entry]:
    return iter(record_fields(obj).items())


def _append(target: list[Any], value: Any, _key: Any) -> None:
    target.append(value)


def _add(target: set[Any], value: Any, _key: Any) -> None:
    target.add(value)


def _set_item(target: dict[Any, Any], value: Any, key: Any) -> None:
    target[key] = value


def _set_attr(target: SimpleNamespace, value: Any, key: Any) -> None:
    setattr(target, key, value)


def _like_source(result: list[Any], source: Any) -> Any:
    return tuple(result) if isinstance(source, tuple) else result


SEQUENCE = Adapter(
    ContainerKind.SEQUENCE, create=list, store=_append, entries=_indexed, finish=_like_source
)
RECORD = Adapter(ContainerKind.RECORD, create=SimpleNamespace, store=_set_attr, entries=_record_entries)
SET = Adapter(ContainerKind.SET, create=set, store=_add, entries=_indexed)
MAP = Adapter(ContainerKind.MAP, create=dict, store=_set_item, entries=_mapping_entries)


def kind_of(container: Any) -> ContainerKind:
    """Detect the container kind.

    Probed in a fixed order because some shapes satisfy several checks:
    stream, set, map, iterable, and anything else is a record.
    """
    if isinstance(container, AsyncIterable):
        return ContainerKind.STREAM
    if isinstance(container, Set):
        return ContainerKind.SET
    if isinstance(container, Mapping):
        return ContainerKind.MAP
    if isinstance(container, Iterable):
        return ContainerKind.SEQUENCE
    return ContainerKind.RECORD
