"""Error types raised by flowless itself."""

from __future__ import annotations


class FlowlessError(Exception):
    """Base class for errors raised by the library (never for user errors)."""


class InvalidArgumentError(FlowlessError, TypeError):
    """Error raised when a combinator is constructed with a bad argument.

    Construction errors are always raised synchronously, even when other
    arguments are awaitable. The offending value is preserved for debugging.
    """

    def __init__(self, message: str, argument: object) -> None:
        self.argument = argument
        super().__init__(message)

    def __repr__(self) -> str:
        return f"InvalidArgumentError({super().__repr__()}, argument={self.argument!r})"
