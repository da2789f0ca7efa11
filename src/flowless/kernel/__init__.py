"""Kernel layer - awaitable handling, stages and errors."""

from flowless.kernel.arity import positional_capacity, required_positional, spread
from flowless.kernel.deferred import (
    any_deferred,
    any_truthy,
    await_all,
    conjunction,
    disjunction,
    discard,
    is_deferred,
    not_,
    resolve,
)
from flowless.kernel.errors import FlowlessError, InvalidArgumentError
from flowless.kernel.stage import Role, Stage, catch

__all__ = [
    "is_deferred",
    "any_deferred",
    "any_truthy",
    "await_all",
    "conjunction",
    "disjunction",
    "resolve",
    "discard",
    "not_",
    # Stages
    "Stage",
    "Role",
    "catch",
    # Arity
    "spread",
    "positional_capacity",
    "required_positional",
    # Errors
    "FlowlessError",
    "InvalidArgumentError",
]
