"""Combinator primitives: when."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from pledge.config import FutureConfig
from pledge.kernel import Future, Trace

from .aggregate import WhenFuture


def normalize_children(args: Sequence[Any]) -> list[Future]:
    """Flatten both call shapes of when() into a list of futures.

    A list or tuple in first position stands for the whole argument list.
    Anything that is not a Future is dropped.
    """
    if args and isinstance(args[0], (list, tuple)):
        args = args[0]
    return [item for item in args if isinstance(item, Future)]


def when(
    *futures: Any,
    config: FutureConfig | None = None,
    trace: Trace | None = None,
) -> WhenFuture:
    """Synchronize several futures into one.

    Semantics:
        - when(a, b, c) and when([a, b, c]) are equivalent
        - Resolves once all futures resolve, with one tuple of completion
          arguments per future, in argument order
        - Rejects with the arguments of the first future to reject
        - With no futures, resolves with no arguments as soon as a callback
          is registered

    Args:
        *futures: Futures, or a single list/tuple of futures
        config: Config for the derived future, defaults to the first child's
        trace: Optional trace receiving aggregation events

    Returns:
        WhenFuture: The derived future. Wiring happens at its first registration.
    """
    return WhenFuture(normalize_children(futures), config=config, trace=trace)
