import asyncio
import threading

import pytest

from quickdata_lib.quickdata.scheduler import (
    AsyncioScheduler,
    ManualScheduler,
    Scheduler,
    TimerScheduler,
    create_scheduler,
)


def test_manual_scheduler_runs_only_when_ticked():
    s = ManualScheduler()
    calls = []
    s.schedule(lambda: calls.append(1))
    s.schedule(lambda: calls.append(2))
    assert calls == [] and s.pending == 2
    assert s.run_pending() == 2
    assert calls == [1, 2] and s.pending == 0
    assert s.run_pending() == 0


def test_manual_scheduler_defers_callbacks_scheduled_during_tick():
    s = ManualScheduler()
    calls = []

    def first():
        calls.append("first")
        s.schedule(lambda: calls.append("second"))

    s.schedule(first)
    assert s.run_pending() == 1
    assert calls == ["first"]
    assert s.pending == 1
    s.run_pending()
    assert calls == ["first", "second"]


def test_manual_scheduler_propagates_errors_and_keeps_rest():
    s = ManualScheduler()
    calls = []

    def boom():
        raise OSError("disk full")

    s.schedule(boom)
    s.schedule(lambda: calls.append("after"))
    with pytest.raises(OSError):
        s.run_pending()
    assert s.pending == 1
    s.run_pending()
    assert calls == ["after"]


def test_timer_scheduler_runs_on_background_thread():
    s = TimerScheduler(0.0)
    done = threading.Event()
    seen = {}

    def cb():
        seen["thread"] = threading.current_thread()
        done.set()

    s.schedule(cb)
    assert done.wait(5)
    s.join(5)
    assert seen["thread"] is not threading.main_thread()


def test_asyncio_scheduler_uses_running_loop():
    calls = []

    async def scenario():
        s = AsyncioScheduler()
        s.schedule(lambda: calls.append("ran"))
        assert calls == []
        await asyncio.sleep(0)
        await asyncio.sleep(0)

    asyncio.run(scenario())
    assert calls == ["ran"]


def test_asyncio_scheduler_without_loop_raises():
    with pytest.raises(RuntimeError):
        AsyncioScheduler().schedule(lambda: None)


def test_create_scheduler_by_name():
    assert isinstance(create_scheduler("manual"), ManualScheduler)
    assert isinstance(create_scheduler("timer", delay=0.5), TimerScheduler)
    assert isinstance(create_scheduler("asyncio"), AsyncioScheduler)
    assert isinstance(create_scheduler("manual"), Scheduler)
    with pytest.raises(ValueError):
        create_scheduler("frame")
