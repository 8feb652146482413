from __future__ import annotations

import asyncio
import random

from pledge import Future, Trace, when


def fetch(name: str, delay: float, fail: bool = False) -> Future:
    """Pretend network call that completes on a later loop turn."""
    loop = asyncio.get_running_loop()
    future = Future()

    loop.call_later(delay / 2, future.update_progress, name, 50)
    if fail:
        loop.call_later(delay, future.reject, f"{name}: connection reset")
    else:
        loop.call_later(delay, future.resolve, f"<{name} payload>", delay)
    return future


async def main(fail: bool = False) -> None:
    trace = Trace()
    finished = asyncio.Event()

    pages = [fetch(name, random.uniform(0.01, 0.1), fail and name == "b") for name in "abc"]
    for page in pages:
        page.progress(lambda name, pct: print(f"  {name}: {pct}%"))

    def on_resolve(*results):
        for payload, delay in results:
            print(f"  {payload} after {delay:.3f}s")
        finished.set()

    def on_reject(reason):
        print(f"  failed: {reason}")
        finished.set()

    when(pages, trace=trace).then(on_resolve, on_reject)
    await finished.wait()

    for event in trace.get_events():
        print(f"  [{event.id}] {event.action} {event.info}")


if __name__ == "__main__":
    print("All succeed:")
    asyncio.run(main())
    print("One fails:")
    asyncio.run(main(fail=True))
