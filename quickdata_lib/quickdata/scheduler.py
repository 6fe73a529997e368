"""Schedulers that run a callback once at the next scheduling opportunity.

The store only needs "run this later, once". What "later" means is up to
the host: the next event-loop iteration, a short timer, or an explicit
tick driven by the caller.
"""
from __future__ import annotations
import asyncio
import threading
from collections import deque
from typing import Callable, Deque, Optional, Protocol, runtime_checkable


Callback = Callable[[], None]


@runtime_checkable
class Scheduler(Protocol):
    def schedule(self, callback: Callback) -> None: ...


class ManualScheduler:
    """Queue callbacks until the owner calls `run_pending()`.

    A host loop calls `run_pending()` once per tick; tests use it to decide
    exactly when deferred work happens.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._queue: Deque[Callback] = deque()

    def schedule(self, callback: Callback) -> None:
        with self._lock:
            self._queue.append(callback)

    @property
    def pending(self) -> int:
        with self._lock:
            return len(self._queue)

    def run_pending(self) -> int:
        """Run callbacks queued before this call. Returns how many ran.

        Callbacks scheduled while running wait for the next call. An exception
        from a callback propagates; callbacks behind it stay queued.
        """
        with self._lock:
            batch = len(self._queue)
        ran = 0
        while ran < batch:
            with self._lock:
                callback = self._queue.popleft()
            ran += 1
            callback()
        return ran


class AsyncioScheduler:
    """Run callbacks on the next iteration of an asyncio event loop.

    Safe to call from any thread once a loop is bound. Without an explicit
    loop (or `bind`), the loop running at the first `schedule` call is used.
    """

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
        self._loop = loop

    def bind(self, loop: asyncio.AbstractEventLoop) -> None:
        self._loop = loop

    def schedule(self, callback: Callback) -> None:
        if self._loop is None or self._loop.is_closed():
            # raises RuntimeError when called off-loop with nothing bound
            self._loop = asyncio.get_running_loop()
        self._loop.call_soon_threadsafe(callback)


class TimerScheduler:
    """Run callbacks on a daemon timer thread after `delay` seconds."""

    def __init__(self, delay: float = 0.0) -> None:
        self.delay = delay
        self._lock = threading.Lock()
        self._timers: list[threading.Timer] = []

    def schedule(self, callback: Callback) -> None:
        timer = threading.Timer(self.delay, self._run, args=(callback,))
        timer.daemon = True
        with self._lock:
            self._timers.append(timer)
        timer.start()

    def _run(self, callback: Callback) -> None:
        try:
            callback()
        finally:
            with self._lock:
                self._timers = [t for t in self._timers if t.is_alive() and t is not threading.current_thread()]

    def join(self, timeout: Optional[float] = None) -> None:
        """Wait for timers started so far to finish."""
        with self._lock:
            timers = list(self._timers)
        for t in timers:
            t.join(timeout)


def create_scheduler(name: str, *, delay: float = 0.0, loop: Optional[asyncio.AbstractEventLoop] = None) -> Scheduler:
    """Return a scheduler by name ('manual', 'asyncio' or 'timer')."""
    if name == "manual":
        return ManualScheduler()
    if name == "asyncio":
        return AsyncioScheduler(loop)
    if name == "timer":
        return TimerScheduler(delay)
    raise ValueError(f"Unknown scheduler: {name!r}")
