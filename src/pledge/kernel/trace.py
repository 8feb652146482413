"""Runtime trace of future lifecycle events.

Trace is runtime infrastructure: it observes transitions but never takes
part in them. Tree relationships are reconstructed only on demand via as_tree().
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any


@dataclass(frozen=True)
class Evidence:
    """A single recorded lifecycle event.

    Attributes:
        action: What happened ("future_resolve", "when_begin", ...)
        id: Sequential event id within its Trace
        parent_id: Id of the enclosing event, if any
        timestamp: When the event was recorded
        info: Additional context (argument counts, outcome, slot index)
    """

    action: str
    id: int = 0
    parent_id: int | None = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))
    info: dict[str, Any] = field(default_factory=dict)

    def matches(self, **criteria: Any) -> bool:
        return all(
            self.info.get(k) == v or getattr(self, k, None) == v
            for k, v in criteria.items()
        )


class Trace:
    """Append-only recorder for lifecycle events.

    Performance guarantees:
    - Trace disabled → single flag check overhead
    - Evidence append is O(1)
    - No tree construction while recording
    """

    def __init__(self, enabled: bool = True) -> None:
        self.enabled = enabled
        self._events: list[Evidence] = []
        self._next_id: int = 0

    def record(
        self,
        action: str,
        info: dict[str, Any] | None = None,
        parent_id: int | None = None,
    ) -> int | None:
        """Record an evidence event.

        Args:
            action: What happened
            info: Additional context
            parent_id: Explicit parent event id for tree relationships

        Returns:
            Event id for linking child events, or None if tracing disabled
        """
        if not self.enabled:
            return None

        event_id = self._next_id
        self._next_id += 1
        self._events.append(
            Evidence(
                action=action,
                id=event_id,
                parent_id=parent_id,
                info=info or {},
            )
        )
        return event_id

    def get_events(self) -> list[Evidence]:
        """Get all recorded events in recording order."""
        return list(self._events)

    def find_all(self, **criteria: Any) -> list[Evidence]:
        """Find recorded events matching every criterion.

        A criterion matches either an Evidence attribute or a key in its info,
        e.g. find_all(action="future_resolve") or find_all(outcome="rejected").
        """
        return [ev for ev in self._events if ev.matches(**criteria)]

    def as_tree(self) -> dict[int | None, list[int]]:
        """Reconstruct parent-child relationships.

        Returns:
            Dict mapping parent_id to list of child ids
        """
        tree: dict[int | None, list[int]] = {}
        for ev in self._events:
            tree.setdefault(ev.parent_id, []).append(ev.id)
        return tree

    def __len__(self) -> int:
        return len(self._events)

    def clear(self) -> None:
        """Clear all events (for reuse)."""
        self._events.clear()
        self._next_id = 0
