"""Container adapters and kind detection."""

from flowless.containers.adapters import Adapter, ContainerKind, kind_of, record_fields
from flowless.containers.registry import ADAPTERS, get_adapter, resolve_kind

__all__ = [
    "Adapter",
    "ContainerKind",
    "kind_of",
    "record_fields",
    "ADAPTERS",
    "get_adapter",
    "resolve_kind",
]
