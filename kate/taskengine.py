"""Run tasks on background threads with an optional concurrency limit."""

from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod
from typing import Callable, Union

__all__ = ["Task", "TaskEngine"]


class Task(ABC):
    """A unit of work; `ctx` is set once the engine is shutting down."""

    @abstractmethod
    def run(self, ctx: threading.Event) -> None:
        """Do the work."""


TaskLike = Union[Task, Callable[[threading.Event], None]]


class TaskEngine:
    """Runs each scheduled task on its own thread.

    With a positive `concurrency_level`, at most that many tasks run at once
    and `schedule` blocks until a slot is free. `ctx` is the cancellation
    event handed to every task; a fresh one is created when omitted.
    """

    def __init__(
        self,
        name: str,
        concurrency_level: int = 0,
        logger: logging.Logger | None = None,
        ctx: threading.Event | None = None,
    ) -> None:
        self.name = name
        self._ctx = ctx if ctx is not None else threading.Event()
        self._tokens = (
            threading.BoundedSemaphore(concurrency_level) if concurrency_level > 0 else None
        )
        self._logger = logger or logging.getLogger(__name__)
        self._lock = threading.Lock()
        self._idle = threading.Condition(self._lock)
        self._pending = 0
        self._shutdown = False

    @property
    def ctx(self) -> threading.Event:
        """The cancellation event passed to tasks."""
        return self._ctx

    def schedule(self, task: TaskLike) -> bool:
        """Start `task`; return False if the engine has been shut down."""
        with self._lock:
            if self._shutdown:
                self._logger.error(
                    "taskengine %s: already stopped, should not schedule new task", self.name
                )
                return False
            self._pending += 1
        if self._tokens is not None:
            self._tokens.acquire()
        threading.Thread(
            target=self._run, args=(task,), name=f"{self.name}-task", daemon=True
        ).start()
        return True

    def _run(self, task: TaskLike) -> None:
        try:
            runner = task.run if hasattr(task, "run") else task
            runner(self._ctx)
        except Exception:
            self._logger.exception("taskengine %s: task panic", self.name)
        finally:
            if self._tokens is not None:
                self._tokens.release()
            with self._idle:
                self._pending -= 1
                if self._pending == 0:
                    self._idle.notify_all()

    def shutdown(self) -> None:
        """Signal cancellation and wait for every running task to finish.

        Raises RuntimeError when called a second time.
        """
        with self._lock:
            if self._shutdown:
                raise RuntimeError(f"task engine {self.name} shutdown twice")
            self._shutdown = True
        self._logger.info("taskengine %s: stopping", self.name)
        self._ctx.set()
        with self._idle:
            self._idle.wait_for(lambda: self._pending == 0)
        self._logger.info("taskengine %s: stopped", self.name)