"""Structural matching - compile a declarative pattern into a predicate."""

from __future__ import annotations

import functools
import re
from collections.abc import Callable, Mapping
from typing import Any

from pydantic import BaseModel, ValidationError

from flowless.containers.adapters import record_fields
from flowless.kernel.deferred import conjunction, disjunction

Predicate = Callable[[Any], Any]

_SCALARS = (str, bytes, int, float, complex)


def match(pattern: Any) -> Predicate:
    """Compile pattern into a predicate.

    Patterns:
        - class: isinstance check (``bool`` only matches booleans, ``int`` and
          ``float`` never match booleans); a pydantic model class also matches
          values that validate against the model
        - other callable: used as the predicate itself
        - compiled regex: searched in ``str(value)``
        - list / tuple: any alternative matches
        - mapping: every key's sub-pattern matches the candidate's item or
          attribute, and the candidate carries no keys outside the pattern
        - anything else: equality

    Sub-patterns returning awaitables make the predicate return a coroutine
    resolving to the final bool.
    """
    return _compile(pattern, strict=True)


def match_loose(pattern: Any) -> Predicate:
    """Like match, but mapping patterns ignore extra keys on the candidate."""
    return _compile(pattern, strict=False)


def predicate(pred: Any) -> Predicate:
    """Use a callable (classes included) as-is; compile anything else with match.

    This is how traversals and conditionals read their predicate argument, so
    ``filter_(bool, xs)`` filters by truthiness while ``filter_([int], xs)``
    or ``filter_(match(int), xs)`` filters by type.
    """
    return pred if callable(pred) else match(pred)


def _compile(pattern: Any, strict: bool) -> Predicate:
    if isinstance(pattern, type):
        return _instance_of(pattern)
    if callable(pattern):
        return pattern
    if isinstance(pattern, re.Pattern):
        return functools.partial(_search, pattern)
    if isinstance(pattern, (list, tuple)):
        alternatives = tuple(_compile(sub, strict) for sub in pattern)
        return functools.partial(_match_any, alternatives)
    if isinstance(pattern, Mapping):
        fields = {key: _compile(sub, strict) for key, sub in pattern.items()}
        return functools.partial(_match_fields, fields, strict)
    if pattern is None:
        return _is_none
    return functools.partial(_equals, pattern)


def _instance_of(cls: type) -> Predicate:
    if cls is bool:
        return lambda value: isinstance(value, bool)
    if cls in (int, float):
        return lambda value: isinstance(value, cls) and not isinstance(value, bool)
    if issubclass(cls, BaseModel):
        return functools.partial(_validates, cls)
    return lambda value: isinstance(value, cls)


def _validates(model: type[BaseModel], value: Any) -> bool:
    if isinstance(value, model):
        return True
    try:
        model.model_validate(value)
    except ValidationError:
        return False
    return True


def _search(pattern: re.Pattern[str], value: Any) -> bool:
    return pattern.search(str(value)) is not None


def _match_any(alternatives: tuple[Predicate, ...], value: Any) -> Any:
    return disjunction(alternative(value) for alternative in alternatives)


def _match_fields(fields: dict[Any, Predicate], strict: bool, value: Any) -> Any:
    if value is None or isinstance(value, _SCALARS):
        return False

    if isinstance(value, Mapping):
        present = value.keys()
        lookup: Callable[[Any], Any] = value.get
    else:
        present = record_fields(value).keys()

        def lookup(key: Any) -> Any:
            return getattr(value, key, None) if isinstance(key, str) else None

    if strict and any(key not in fields for key in present):
        return False
    return conjunction(sub(lookup(key)) for key, sub in fields.items())


def _is_none(value: Any) -> bool:
    return value is None


def _equals(pattern: Any, value: Any) -> bool:
    return value == pattern
