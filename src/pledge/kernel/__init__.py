"""Kernel layer - the Future state machine and its supporting types."""

from pledge.kernel.errors import FutureError, InternalError, InvalidStateError
from pledge.kernel.future import Future
from pledge.kernel.state import FutureState
from pledge.kernel.trace import Evidence, Trace

__all__ = [
    "Future",
    "FutureState",
    # Errors
    "FutureError",
    "InvalidStateError",
    "InternalError",
    # Tracing
    "Evidence",
    "Trace",
]
