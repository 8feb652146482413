"""Combinators - aggregate several futures into one."""

from .aggregate import WhenFuture
from .ops import normalize_children, when

__all__ = ["WhenFuture", "normalize_children", "when"]
