"""A hashed timing wheel that runs delayed tasks on a task engine."""

from __future__ import annotations

import itertools
import logging
import threading
from datetime import timedelta
from typing import Callable, Union

from .taskengine import Task, TaskEngine

__all__ = ["RING_SIZE", "TimerTask", "TimerEngine"]

RING_SIZE = 3600
"""Number of buckets in the wheel."""

TaskLike = Union[Task, Callable[[threading.Event], None], None]


class TimerTask:
    """A task waiting in the wheel; it can be cancelled until it starts."""

    def __init__(self, engine: TimerEngine, cycle_num: int, task: TaskLike) -> None:
        self.id = engine._next_task_id()
        self._task = task
        self._cycle_num = cycle_num
        self._engine = engine
        self._started = False
        self._cancelled = False
        self._lock = threading.Lock()

    @property
    def started(self) -> bool:
        with self._lock:
            return self._started

    @property
    def cancelled(self) -> bool:
        with self._lock:
            return self._cancelled

    def cancel(self) -> bool:
        """Cancel the task if it has not started; return whether it is cancelled."""
        with self._lock:
            if not self._started:
                self._cancelled = True
            return self._cancelled

    def _ready(self) -> bool:
        with self._lock:
            if self._cancelled:
                return True
            self._cycle_num -= 1
            return self._cycle_num <= 0

    def _dispose(self) -> None:
        with self._lock:
            if not self._cancelled:
                self._started = True
            ok = self._started
        if ok:
            self._engine._execute(self._run)

    def _run(self, ctx: threading.Event) -> None:
        if self._task is None:
            return
        try:
            runner = self._task.run if hasattr(self._task, "run") else self._task
            runner(ctx)
        except Exception:
            self._engine._logger.exception("timerengine %s: got panic", self._engine.name)


class TimerEngine:
    """Runs tasks after a delay, measured in ticks of `tick` seconds."""

    def __init__(
        self,
        name: str,
        concurrency_level: int = 0,
        logger: logging.Logger | None = None,
        tick: float = 1.0,
    ) -> None:
        if tick <= 0:
            raise ValueError("tick must be positive")
        self._name = name
        self._tick = tick
        self._buckets: list[list[TimerTask]] = [[] for _ in range(RING_SIZE)]
        self._tick_index = 0
        self._lock = threading.Lock()
        self._ids = itertools.count(1)
        self._id_lock = threading.Lock()
        self._ctx = threading.Event()
        self._logger = logger or logging.getLogger(__name__)
        self._executors = TaskEngine(name, concurrency_level, self._logger, ctx=self._ctx)
        self._thread: threading.Thread | None = None

    @property
    def name(self) -> str:
        return self._name

    def start(self) -> None:
        """Start the ticking thread."""
        if self._thread is not None:
            raise RuntimeError(f"timer engine {self._name} already started")
        self._thread = threading.Thread(
            target=self._loop, name=f"{self._name}-timer", daemon=True
        )
        self._thread.start()

    def stop(self) -> None:
        """Stop ticking and wait for running tasks to finish."""
        self._ctx.set()
        if self._thread is not None:
            self._thread.join()

    def _loop(self) -> None:
        self._logger.info("timerengine %s: loop started", self._name)
        try:
            while not self._ctx.wait(self._tick):
                self._on_tick()
        except Exception:
            self._logger.critical("timerengine %s: panic", self._name, exc_info=True)
        finally:
            self._ctx.set()
            self._executors.shutdown()
            self._logger.info("timerengine %s: main loop stopped", self._name)

    def _on_tick(self) -> None:
        with self._lock:
            self._tick_index += 1
            index = self._tick_index % RING_SIZE
            pending: list[TimerTask] = []
            due: list[TimerTask] = []
            for task in self._buckets[index]:
                (due if task._ready() else pending).append(task)
            self._buckets[index] = pending
        for task in due:
            task._dispose()

    def _next_task_id(self) -> int:
        with self._id_lock:
            return next(self._ids)

    def _execute(self, func: Callable[[threading.Event], None]) -> None:
        self._executors.schedule(func)

    def schedule(self, task: TaskLike, delay: float | timedelta) -> TimerTask | None:
        """Run `task` after `delay` seconds; a non-positive delay runs it now.

        Returns None if the engine has been stopped.
        """
        seconds = delay.total_seconds() if isinstance(delay, timedelta) else float(delay)
        if seconds <= 0:
            timer_task = TimerTask(self, 0, task)
            timer_task._dispose()
            return timer_task
        if self._ctx.is_set():
            return None
        ticks = int(round(seconds / self._tick, 6))
        with self._lock:
            offset = ticks + self._tick_index % RING_SIZE
            cycle_num, index = divmod(offset, RING_SIZE)
            timer_task = TimerTask(self, cycle_num, task)
            self._buckets[index].append(timer_task)
        return timer_task