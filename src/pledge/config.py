"""Configuration shared by futures."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict

CallbackOrder = Literal["lifo", "fifo"]


class FutureConfig(BaseModel):
    """Behavioural knobs for a Future.

    Attributes:
        callback_order: "lifo" invokes the most recently registered callback
            first, "fifo" invokes callbacks in registration order.
        trace_enabled: Record lifecycle events when the future has a Trace.
    """

    model_config = ConfigDict(frozen=True)

    callback_order: CallbackOrder = "lifo"
    trace_enabled: bool = True


DEFAULT_CONFIG = FutureConfig()
