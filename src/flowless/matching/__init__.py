"""Structural matchers compiled from declarative patterns."""

from flowless.matching.match import match, match_loose, predicate

__all__ = ["match", "match_loose", "predicate"]
