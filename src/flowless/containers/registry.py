"""Adapter table - maps each synchronous container kind to its adapter."""

from __future__ import annotations

from types import MappingProxyType
from typing import Any

from flowless.containers.adapters import MAP, RECORD, SEQUENCE, SET, Adapter, ContainerKind, kind_of

ADAPTERS = MappingProxyType(
    {
        ContainerKind.SEQUENCE: SEQUENCE,
        ContainerKind.RECORD: RECORD,
        ContainerKind.SET: SET,
        ContainerKind.MAP: MAP,
    }
)
"""Read-only; streams are consumed asynchronously and have no entry."""


def get_adapter(kind: ContainerKind) -> Adapter:
    """Get the adapter for kind."""
    if kind not in ADAPTERS:
        raise KeyError(f"No adapter for container kind '{kind.value}'")
    return ADAPTERS[kind]


def resolve_kind(container: Any, kind: ContainerKind | None = None) -> ContainerKind:
    """Explicit kind wins over detection."""
    return kind if kind is not None else kind_of(container)
