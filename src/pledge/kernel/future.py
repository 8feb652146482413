"""Future - single-fire completion signal with progress events."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import Any

from pledge.config import DEFAULT_CONFIG, FutureConfig
from pledge.kernel.errors import InvalidStateError
from pledge.kernel.state import FutureState
from pledge.kernel.trace import Trace

logger = logging.getLogger(__name__)

Callback = Callable[..., Any]


class Future:
    """Eventual outcome of an asynchronous operation.

    The owner of the asynchronous work drives the future through exactly one
    of resolve() or reject(), optionally preceded by any number of
    update_progress() calls. Consumers attach callbacks with register() (or
    then/done/fail/progress). Callbacks run synchronously inside the
    triggering call, in the order selected by FutureConfig.callback_order.

    Registering after completion invokes the matching callback immediately
    with the original completion arguments; the callback is not retained.
    """

    def __init__(
        self,
        config: FutureConfig | None = None,
        trace: Trace | None = None,
    ) -> None:
        self.config = config or DEFAULT_CONFIG
        self.trace = trace
        self._state = FutureState.UNFULFILLED
        self._arguments: tuple[Any, ...] | None = None
        self._resolve_callbacks: list[Callback] = []
        self._reject_callbacks: list[Callback] = []
        self._progress_callbacks: list[Callback] = []

    @property
    def state(self) -> FutureState:
        return self._state

    @property
    def completion_arguments(self) -> tuple[Any, ...] | None:
        """Arguments passed to resolve/reject, or None while unfulfilled."""
        return self._arguments

    @property
    def is_pending(self) -> bool:
        return self._state is FutureState.UNFULFILLED

    @property
    def is_resolved(self) -> bool:
        return self._state is FutureState.RESOLVED

    @property
    def is_rejected(self) -> bool:
        return self._state is FutureState.REJECTED

    def register(
        self,
        on_resolve: Callback | None = None,
        on_reject: Callback | None = None,
        on_progress: Callback | None = None,
    ) -> Future:
        """Attach callbacks for resolution, rejection and progress.

        Args:
            on_resolve: Called with the resolve arguments
            on_reject: Called with the reject arguments
            on_progress: Called with each update_progress call's arguments

        Returns:
            The future itself, for fluent registration

        Non-callable arguments are ignored. Once the outcome is decided only
        the matching callback is used, and it is invoked right away.
        """
        if self._state is FutureState.RESOLVED:
            if callable(on_resolve):
                on_resolve(*self._arguments)
        elif self._state is FutureState.REJECTED:
            if callable(on_reject):
                on_reject(*self._arguments)
        else:
            if callable(on_resolve):
                self._resolve_callbacks.append(on_resolve)
            if callable(on_reject):
                self._reject_callbacks.append(on_reject)
            if callable(on_progress):
                self._progress_callbacks.append(on_progress)
        return self

    def then(
        self,
        on_resolve: Callback | None = None,
        on_reject: Callback | None = None,
        on_progress: Callback | None = None,
    ) -> Future:
        """Alias of register()."""
        return self.register(on_resolve, on_reject, on_progress)

    def done(self, on_resolve: Callback) -> Future:
        return self.register(on_resolve=on_resolve)

    def fail(self, on_reject: Callback) -> Future:
        return self.register(on_reject=on_reject)

    def progress(self, on_progress: Callback) -> Future:
        return self.register(on_progress=on_progress)

    def resolve(self, *args: Any) -> None:
        """Move to the resolved state and call every resolve callback with args.

        Raises:
            InvalidStateError: If the future is not unfulfilled
        """
        self._complete(FutureState.RESOLVED, "resolve", args)

    def reject(self, *args: Any) -> None:
        """Move to the rejected state and call every reject callback with args.

        Raises:
            InvalidStateError: If the future is not unfulfilled
        """
        self._complete(FutureState.REJECTED, "reject", args)

    def update_progress(self, *args: Any) -> None:
        """Report progress to every progress callback.

        Progress callbacks are kept, so this may be called repeatedly until
        the future completes.

        Raises:
            InvalidStateError: If the future is not unfulfilled
        """
        self._require_unfulfilled("update progress of")
        callbacks = list(self._progress_callbacks)
        self._record("future_progress", args, len(callbacks))
        for callback in self._ordered(callbacks):
            # A progress callback may complete the future
            if self._state.terminal:
                break
            callback(*args)

    def _complete(self, state: FutureState, operation: str, args: tuple[Any, ...]) -> None:
        self._require_unfulfilled(operation)
        self._arguments = args
        self._state = state

        if state is FutureState.RESOLVED:
            callbacks = self._resolve_callbacks
        else:
            callbacks = self._reject_callbacks
        # Lists are emptied before any callback runs
        self._resolve_callbacks = []
        self._reject_callbacks = []
        self._progress_callbacks = []

        logger.debug("%r: %s with %d callback(s)", self, state.value, len(callbacks))
        self._record(f"future_{operation}", args, len(callbacks))
        self._invoke(callbacks, args)

    def _require_unfulfilled(self, operation: str) -> None:
        if self._state.terminal:
            raise InvalidStateError(operation, self._state)

    def _ordered(self, callbacks: list[Callback]) -> Iterable[Callback]:
        if self.config.callback_order == "lifo":
            return reversed(callbacks)
        return callbacks

    def _invoke(self, callbacks: list[Callback], args: tuple[Any, ...]) -> None:
        for callback in self._ordered(callbacks):
            callback(*args)

    def _record(self, action: str, args: tuple[Any, ...], callbacks: int) -> None:
        if self.trace is not None and self.config.trace_enabled:
            self.trace.record(action, info={"args": len(args), "callbacks": callbacks})

    def __repr__(self) -> str:
        if self._state is FutureState.UNFULFILLED:
            detail = "(unfulfilled)"
        else:
            detail = f"{self._arguments!r} ({self._state.value})"
        return f"<{type(self).__name__} {detail}>"
