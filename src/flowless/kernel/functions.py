"""Tiny function constructors used across the package."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, NoReturn, TypeVar

T = TypeVar("T")


def identity(value: T) -> T:
    return value


def resolver(value: T) -> Callable[..., T]:
    """Function ignoring its arguments and returning value."""

    def resolve_constant(*_args: Any, **_kwargs: Any) -> T:
        return value

    return resolve_constant


def rejector(error: BaseException) -> Callable[..., NoReturn]:
    """Function ignoring its arguments and raising error."""

    def reject(*_args: Any, **_kwargs: Any) -> NoReturn:
        raise error

    return reject
