from .combinators import WhenFuture, when
from .config import DEFAULT_CONFIG, FutureConfig
from .kernel import (
    Evidence,
    Future,
    FutureError,
    FutureState,
    InternalError,
    InvalidStateError,
    Trace,
)

__version__ = "0.1.0"

__all__ = [
    # Core
    "Future",
    "FutureState",
    "when",
    "WhenFuture",
    # Config
    "FutureConfig",
    "DEFAULT_CONFIG",
    # Errors
    "FutureError",
    "InvalidStateError",
    "InternalError",
    # Tracing
    "Trace",
    "Evidence",
]
