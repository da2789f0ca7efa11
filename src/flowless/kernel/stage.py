"""Pipeline stages and the error-handler marker."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any

from flowless.kernel.errors import InvalidArgumentError


class Role(Enum):
    """Which pipeline state a stage runs in."""

    NORMAL = "normal"
    ERROR_HANDLER = "error_handler"


@dataclass(frozen=True)
class Stage:
    """A single pipeline function together with its role.

    A normal stage runs while the pipeline holds a value, an error handler
    runs while it holds an exception. Stages are callable so a marked handler
    can still be used on its own.
    """

    run: Callable[..., Any]
    role: Role = Role.NORMAL

    @property
    def handles_errors(self) -> bool:
        return self.role is Role.ERROR_HANDLER

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        return self.run(*args, **kwargs)

    @staticmethod
    def of(part: Any) -> Stage:
        """Lift a callable into a normal stage; stages pass through unchanged."""
        if isinstance(part, Stage):
            return part
        if not callable(part):
            raise InvalidArgumentError(
                f"Pipeline stage must be callable, got {type(part).__name__}", part
            )
        return Stage(run=part)


def catch(handler: Callable[[BaseException], Any]) -> Stage:
    """Mark handler as an error-handling stage for use inside compose.

    The handler receives the raised exception (or the failure of an awaited
    value) and its return value resumes the pipeline.
    """
    if isinstance(handler, Stage):
        handler = handler.run
    if not callable(handler):
        raise InvalidArgumentError(
            f"catch() expects a callable handler, got {type(handler).__name__}", handler
        )
    return Stage(run=handler, role=Role.ERROR_HANDLER)
