from .composition import __, compose, curry, curry_n, if_else
from .containers import ContainerKind, kind_of
from .flow import flow
from .helpers import args, assoc, effect, merge, param, range_, stream_of
from .kernel import (
    FlowlessError,
    InvalidArgumentError,
    Role,
    Stage,
    await_all,
    catch,
    is_deferred,
    not_,
)
from .kernel.functions import identity, rejector, resolver
from .matching import match, match_loose, predicate
from .operators import and_, eq, gt, gte, lt, lte, match_keys, or_
from .traversal import every, filter_, find, for_each, map_, reduce_, some, sync

__all__ = [
    # Composition
    "flow",
    "compose",
    "catch",
    "curry",
    "curry_n",
    "if_else",
    "__",
    "Stage",
    "Role",
    # Awaitables
    "is_deferred",
    "await_all",
    "not_",
    # Traversal
    "for_each",
    "map_",
    "filter_",
    "reduce_",
    "find",
    "some",
    "every",
    "sync",
    # Containers
    "ContainerKind",
    "kind_of",
    # Matching & operators
    "match",
    "match_loose",
    "predicate",
    "match_keys",
    "and_",
    "or_",
    "eq",
    "gt",
    "gte",
    "lt",
    "lte",
    # Helpers
    "identity",
    "resolver",
    "rejector",
    "param",
    "args",
    "range_",
    "merge",
    "assoc",
    "effect",
    "stream_of",
    # Errors
    "FlowlessError",
    "InvalidArgumentError",
]
