"""Future lifecycle states."""

from __future__ import annotations

from enum import StrEnum


class FutureState(StrEnum):
    """
    Lifecycle of a Future.

    States:
    - unfulfilled: Initial state, callbacks are queued
    - resolved: Terminal, the operation completed normally
    - rejected: Terminal, the operation failed
    """

    UNFULFILLED = "unfulfilled"
    RESOLVED = "resolved"
    REJECTED = "rejected"

    @property
    def terminal(self) -> bool:
        return self is not FutureState.UNFULFILLED
