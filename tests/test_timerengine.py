import threading
import time
from datetime import timedelta

import pytest

from kate.timerengine import TimerEngine


@pytest.fixture
def engine():
    te = TimerEngine("timer", tick=0.01)
    te.start()
    yield te
    te.stop()


def test_name():
    te = TimerEngine("my-timer")
    assert te.name == "my-timer"


def test_invalid_tick_raises():
    with pytest.raises(ValueError):
        TimerEngine("t", tick=0)


def test_zero_delay_runs_immediately(engine):
    done = threading.Event()
    task = engine.schedule(lambda ctx: done.set(), 0)
    assert done.wait(2)
    assert task.started


def test_delayed_task_runs_after_delay(engine):
    done = threading.Event()
    begin = time.monotonic()
    engine.schedule(lambda ctx: done.set(), 0.05)
    assert done.wait(3)
    assert time.monotonic() - begin >= 0.04


def test_timedelta_delay(engine):
    done = threading.Event()
    engine.schedule(lambda ctx: done.set(), timedelta(milliseconds=20))
    assert done.wait(3)


def test_cancel_before_fire(engine):
    ran = threading.Event()
    task = engine.schedule(lambda ctx: ran.set(), 0.1)
    assert task.cancel() is True
    assert task.cancelled
    time.sleep(0.4)
    assert not ran.is_set()
    assert not task.started


def test_cancel_after_start_fails(engine):
    started = threading.Event()
    release = threading.Event()

    def work(ctx):
        started.set()
        release.wait(5)

    task = engine.schedule(work, 0)
    assert started.wait(2)
    assert task.cancel() is False
    release.set()


def test_task_ids_increase(engine):
    first = engine.schedule(None, 10)
    second = engine.schedule(None, 10)
    assert second.id > first.id


def test_schedule_after_stop_returns_none():
    te = TimerEngine("t", tick=0.01)
    te.start()
    te.stop()
    assert te.schedule(lambda ctx: None, 1) is None


def test_failing_task_does_not_stop_engine(engine, caplog):
    done = threading.Event()

    def boom(ctx):
        raise RuntimeError("bad")

    engine.schedule(boom, 0.02)
    engine.schedule(lambda ctx: done.set(), 0.05)
    assert done.wait(3)
    assert "got panic" in caplog.text


def test_stop_signals_running_tasks():
    te = TimerEngine("t", tick=0.01)
    te.start()
    started = threading.Event()
    seen = []

    def waiter(ctx):
        started.set()
        seen.append(ctx.wait(5))

    task = te.schedule(waiter, 0)
    assert started.wait(2)
    assert task.started is True
    te.stop()
    assert seen == [True]
    assert te.schedule(lambda ctx: None, 1) is None