"""Derived future produced by when()."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from pledge.config import FutureConfig
from pledge.kernel import Future, InternalError, Trace
from pledge.kernel.future import Callback

logger = logging.getLogger(__name__)


class WhenFuture(Future):
    """Future that resolves once every child resolves, and rejects on the first child rejection.

    Semantics:
        - Wiring onto the children happens at the first registration call
        - Results are delivered in child order, one tuple of completion
          arguments per child, regardless of completion order
        - Children are observed through ordinary callbacks, never modified
        - Later child completions do not touch an already completed aggregate

    Trace behavior:
        - Records "when_begin" when wiring
        - Records "child_<i>" for each resolved child
        - Records "when_end" with the outcome
    """

    def __init__(
        self,
        children: Sequence[Future],
        config: FutureConfig | None = None,
        trace: Trace | None = None,
    ) -> None:
        if config is None and children:
            config = children[0].config
        super().__init__(config, trace)
        self._children: tuple[Future, ...] = tuple(children)
        self._slots: list[tuple[Any, ...] | None] = [None] * len(self._children)
        # Child identity -> slot indices; a future passed twice owns two slots
        self._positions: dict[int, list[int]] = {}
        for index, child in enumerate(self._children):
            self._positions.setdefault(id(child), []).append(index)
        self._wired = False
        self._begin_id: int | None = None

    @property
    def children(self) -> tuple[Future, ...]:
        return self._children

    @property
    def result_slots(self) -> tuple[tuple[Any, ...] | None, ...]:
        return tuple(self._slots)

    def register(
        self,
        on_resolve: Callback | None = None,
        on_reject: Callback | None = None,
        on_progress: Callback | None = None,
    ) -> Future:
        if not self._wired:
            self._wired = True
            self._wire()
        return super().register(on_resolve, on_reject, on_progress)

    def _wire(self) -> None:
        self._begin_id = self._trace_event("when_begin", {"children": len(self._children)})
        logger.debug("%r: waiting on %d future(s)", self, len(self._children))

        if not self._children:
            if self.is_pending:
                self._finish("resolved")
                self.resolve()
            return

        for child in self._children:
            child.register(
                on_resolve=lambda *args, child=child: self._on_child_resolved(child, args),
                on_reject=self._on_child_rejected,
            )

    def _on_child_resolved(self, child: Future, args: tuple[Any, ...]) -> None:
        positions = self._positions.get(id(child))
        if not positions:
            raise InternalError("Could not find promise", child)

        # Keeps the arguments in input order
        for index in positions:
            self._slots[index] = args
            self._trace_event(f"child_{index}", {"args": len(args)}, parent_id=self._begin_id)

        if not self.is_pending:
            return
        if all(c.is_resolved for c in self._children) and all(s is not None for s in self._slots):
            self._finish("resolved")
            self.resolve(*self._slots)

    def _on_child_rejected(self, *args: Any) -> None:
        if not self.is_pending:
            return
        logger.debug("%r: child rejected, failing aggregate", self)
        self._finish("rejected")
        self.reject(*args)

    def _finish(self, outcome: str) -> None:
        self._trace_event("when_end", {"outcome": outcome}, parent_id=self._begin_id)

    def _trace_event(
        self,
        action: str,
        info: dict[str, Any],
        parent_id: int | None = None,
    ) -> int | None:
        if self.trace is None or not self.config.trace_enabled:
            return None
        return self.trace.record(action, info=info, parent_id=parent_id)
