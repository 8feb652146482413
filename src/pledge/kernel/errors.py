"""Error types raised by futures and aggregations."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from pledge.kernel.state import FutureState


class FutureError(Exception):
    """Base class for every error raised by pledge."""


class InvalidStateError(FutureError):
    """Error raised when a completion trigger hits a future that is not unfulfilled.

    The future keeps its earlier terminal state; the error only reports
    the misuse to the caller of the offending operation.
    """

    def __init__(self, operation: str, state: FutureState) -> None:
        self.operation = operation
        self.state = state
        super().__init__(f"Cannot {operation} a promise unless it is unfulfilled")

    def __repr__(self) -> str:
        return f"InvalidStateError({super().__repr__()}, state={self.state.value!r})"


class InternalError(FutureError):
    """Error raised when an aggregation loses track of one of its children."""

    def __init__(self, message: str, future: Any) -> None:
        self.future = future
        super().__init__(message)

    def __repr__(self) -> str:
        return f"InternalError({super().__repr__()}, future={self.future!r})"
