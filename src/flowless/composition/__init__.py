"""Composition engine - compose, catch, curry and if_else."""

from flowless.composition.compose import compose
from flowless.composition.conditional import if_else
from flowless.composition.curry import __, call_then, curried, curry, curry_n, is_placeholder

__all__ = [
    "compose",
    "if_else",
    "curry",
    "curry_n",
    "curried",
    "call_then",
    "is_placeholder",
    "__",
]
