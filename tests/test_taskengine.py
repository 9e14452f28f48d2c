import threading
import time

import pytest

from kate.taskengine import Task, TaskEngine


def test_runs_callable_tasks():
    engine = TaskEngine("t")
    results = []
    lock = threading.Lock()

    def work(ctx):
        with lock:
            results.append(1)

    for _ in range(5):
        assert engine.schedule(work) is True
    engine.shutdown()
    assert len(results) == 5


def test_runs_task_subclass():
    done = threading.Event()

    class Mark(Task):
        def run(self, ctx):
            done.set()

    engine = TaskEngine("t")
    assert engine.schedule(Mark()) is True
    engine.shutdown()
    assert done.is_set()


def test_schedule_after_shutdown_returns_false():
    engine = TaskEngine("t")
    engine.shutdown()
    assert engine.schedule(lambda ctx: None) is False


def test_shutdown_twice_raises():
    engine = TaskEngine("twice")
    engine.shutdown()
    with pytest.raises(RuntimeError, match="twice"):
        engine.shutdown()


def test_concurrency_limit_is_respected():
    engine = TaskEngine("limited", concurrency_level=2)
    lock = threading.Lock()
    state = {"running": 0, "peak": 0, "done": 0}

    def work(ctx):
        with lock:
            state["running"] += 1
            state["peak"] = max(state["peak"], state["running"])
        time.sleep(0.05)
        with lock:
            state["running"] -= 1
            state["done"] += 1

    scheduled = [engine.schedule(work) for _ in range(6)]
    engine.shutdown()
    assert scheduled == [True] * 6
    assert state["done"] == 6
    assert 1 <= state["peak"] <= 2


def test_failing_task_is_logged_and_engine_continues(caplog):
    engine = TaskEngine("t")
    done = threading.Event()

    def boom(ctx):
        raise ValueError("bad")

    engine.schedule(boom)
    engine.schedule(lambda ctx: done.set())
    engine.shutdown()
    assert done.is_set()
    assert "task panic" in caplog.text


def test_shutdown_signals_context_and_waits():
    engine = TaskEngine("t")
    started = threading.Event()
    seen = []

    def waiter(ctx):
        started.set()
        seen.append(ctx.wait(5))

    engine.schedule(waiter)
    assert started.wait(5)
    assert not engine.ctx.is_set()
    engine.shutdown()
    assert seen == [True]
    assert engine.ctx.is_set()