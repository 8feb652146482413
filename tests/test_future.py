import asyncio

import pytest

from pledge import Future, FutureConfig, FutureState, InvalidStateError
from fakes import PASS_ARGS, Spy, later, wait_for


def test_new_future_is_unfulfilled() -> None:
    future = Future()
    spy = Spy()
    future.register(spy, spy, spy)

    assert future.state is FutureState.UNFULFILLED
    assert future.state == "unfulfilled"
    assert str(FutureState.RESOLVED) == "resolved"
    assert future.is_pending
    assert future.completion_arguments is None
    assert not spy.called


def test_resolve_async_passes_all_arguments() -> None:
    future = Future()
    spy = Spy()
    not_called = Spy()

    async def run():
        future.register(spy, not_called)
        later(0.001, future.resolve, *PASS_ARGS)
        await wait_for(lambda: spy.called or not_called.called)

    asyncio.run(run())
    assert future.state is FutureState.RESOLVED
    assert spy.last_args == PASS_ARGS
    assert future.completion_arguments == PASS_ARGS
    assert not not_called.called


def test_resolve_without_callback_is_silent() -> None:
    future = Future()
    not_called = Spy()
    future.register(None, not_called)

    future.resolve("Something", "Anything")

    assert future.is_resolved
    assert not not_called.called


def test_late_resolve_registration_called_immediately() -> None:
    future = Future()
    future.resolve(6)

    spy = Spy()
    not_called = Spy()
    future.register(spy, not_called)

    assert spy.last_args == (6,)
    assert not not_called.called


def test_reject_async_passes_all_arguments() -> None:
    future = Future()
    spy = Spy()
    not_called = Spy()

    async def run():
        future.register(not_called, spy)
        later(0.001, future.reject, *PASS_ARGS)
        await wait_for(lambda: spy.called or not_called.called)

    asyncio.run(run())
    assert future.state is FutureState.REJECTED
    assert spy.last_args == PASS_ARGS
    assert not not_called.called


def test_reject_without_callback_is_silent() -> None:
    future = Future()
    not_called = Spy()
    future.register(not_called)

    future.reject("Something", "Anything")

    assert future.is_rejected
    assert not not_called.called


def test_late_reject_registration_called_immediately() -> None:
    future = Future()
    future.reject(6)

    spy = Spy()
    not_called = Spy()
    future.register(not_called, spy, not_called)

    assert spy.last_args == (6,)
    assert not not_called.called


def test_progress_passes_all_arguments() -> None:
    future = Future()
    spy = Spy()
    not_called = Spy()

    async def run():
        future.register(not_called, not_called, spy)
        later(0.001, future.update_progress, *PASS_ARGS)
        await wait_for(lambda: spy.called or not_called.called)

    asyncio.run(run())
    assert future.state is FutureState.UNFULFILLED
    assert spy.last_args == PASS_ARGS
    assert not not_called.called


def test_progress_can_repeat_and_keeps_listeners() -> None:
    future = Future()
    spy = Spy()
    future.progress(spy)

    future.update_progress(10)
    future.update_progress(50)
    future.update_progress(90)

    assert spy.calls == [(10,), (50,), (90,)]
    assert future.is_pending


def test_progress_stops_once_a_listener_completes_the_future() -> None:
    future = Future(FutureConfig(callback_order="fifo"))
    late = Spy()
    future.progress(lambda pct: future.resolve("done"))
    future.progress(late)

    future.update_progress(50)

    assert future.is_resolved
    assert future.completion_arguments == ("done",)
    assert not late.called


def test_progress_without_callback_is_silent() -> None:
    future = Future()
    not_called = Spy()
    future.register(not_called, not_called)

    future.update_progress("Something", "Anything")

    assert future.is_pending
    assert not not_called.called


def test_every_listener_receives_resolution() -> None:
    future = Future()
    first, second, third = Spy(), Spy(), Spy()
    future.register(first).done(second).then(third)

    future.resolve("value")

    for spy in (first, second, third):
        assert spy.calls == [("value",)]


def test_reject_and_progress_never_fire_after_resolve() -> None:
    future = Future()
    on_reject, on_progress = Spy(), Spy()
    future.fail(on_reject).progress(on_progress)

    future.resolve()

    with pytest.raises(InvalidStateError):
        future.update_progress(1)
    with pytest.raises(InvalidStateError):
        future.reject()
    assert not on_reject.called
    assert not on_progress.called


def test_late_registration_is_not_retained() -> None:
    future = Future()
    future.resolve(1)
    spy = Spy()
    future.done(spy)
    future.done(spy)

    assert spy.calls == [(1,), (1,)]


def test_non_callable_arguments_are_ignored() -> None:
    future = Future()
    spy = Spy()
    future.register("not a callback", 42, spy)

    future.update_progress(1)
    future.resolve()

    assert spy.calls == [(1,)]


def test_register_returns_the_future() -> None:
    future = Future()
    assert future.register() is future
    assert future.then() is future
    assert future.done(Spy()) is future
    assert future.fail(Spy()) is future
    assert future.progress(Spy()) is future


class TestCallbackOrder:
    def _collect(self, config: FutureConfig | None) -> list[str]:
        order: list[str] = []
        future = Future(config)
        for name in ("a", "b", "c"):
            future.done(lambda name=name: order.append(name))
        future.resolve()
        return order

    def test_default_is_most_recent_first(self):
        assert self._collect(None) == ["c", "b", "a"]

    def test_fifo_uses_registration_order(self):
        assert self._collect(FutureConfig(callback_order="fifo")) == ["a", "b", "c"]

    def test_progress_follows_same_order(self):
        order: list[str] = []
        future = Future(FutureConfig(callback_order="fifo"))
        future.progress(lambda: order.append("first"))
        future.progress(lambda: order.append("second"))

        future.update_progress()

        assert order == ["first", "second"]


class TestStateErrors:
    def test_resolve_twice(self):
        future = Future()
        spy = Spy()
        future.register(spy)
        future.resolve()

        assert future.is_resolved
        assert spy.called
        with pytest.raises(InvalidStateError, match="Cannot resolve a promise unless it is unfulfilled"):
            future.resolve()

    def test_resolve_after_reject(self):
        future = Future()
        spy = Spy()
        future.register(None, spy)
        future.reject()

        assert future.is_rejected
        assert spy.called
        with pytest.raises(InvalidStateError, match="Cannot resolve a promise unless it is unfulfilled"):
            future.resolve()

    def test_reject_after_resolve(self):
        future = Future()
        future.resolve()
        with pytest.raises(InvalidStateError, match="Cannot reject a promise unless it is unfulfilled"):
            future.reject()

    def test_reject_twice(self):
        future = Future()
        future.reject()
        with pytest.raises(InvalidStateError, match="Cannot reject a promise unless it is unfulfilled"):
            future.reject()

    def test_progress_after_resolve(self):
        future = Future()
        future.resolve()
        with pytest.raises(
            InvalidStateError,
            match="Cannot update progress of a promise unless it is unfulfilled",
        ):
            future.update_progress()

    def test_progress_after_reject(self):
        future = Future()
        future.reject()
        with pytest.raises(
            InvalidStateError,
            match="Cannot update progress of a promise unless it is unfulfilled",
        ):
            future.update_progress()

    def test_failed_trigger_keeps_original_outcome(self):
        future = Future()
        future.resolve("first")

        with pytest.raises(InvalidStateError) as exc_info:
            future.resolve("second")

        assert exc_info.value.state is FutureState.RESOLVED
        assert exc_info.value.operation == "resolve"
        assert future.state is FutureState.RESOLVED
        assert future.completion_arguments == ("first",)


def test_callback_errors_propagate_to_trigger() -> None:
    future = Future()
    never = Spy()

    def boom(*_):
        raise RuntimeError("callback failed")

    future.register(boom)
    future.register(on_reject=never)

    with pytest.raises(RuntimeError, match="callback failed"):
        future.resolve()

    assert future.is_resolved
    assert not never.called


def test_repr_shows_state() -> None:
    future = Future()
    assert repr(future) == "<Future (unfulfilled)>"
    future.resolve(1, "x")
    assert repr(future) == "<Future (1, 'x') (resolved)>"
