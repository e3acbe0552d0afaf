"""
RenderScheduler - Debounced single-shot trigger.

Bursts of notifications (data updates, resize drags, scroll ticks)
collapse into one trailing call. The first trigger arms the timer; later
triggers are ignored until it fires.
"""
import asyncio
import inspect
from typing import Any, Callable, Optional

from PySide6.QtCore import QObject, QTimer
from loguru import logger

DATA_DEBOUNCE_MS = 250
RESIZE_DEBOUNCE_MS = 100
SCROLL_DEBOUNCE_MS = 16


class RenderScheduler:
    """
    Arm-if-idle, run-once-on-fire timer.

    The callback may be a coroutine function; its coroutine is handed to
    the running asyncio loop (qasync in the application).

    Example:
        scheduler = RenderScheduler(250, view.render, parent=view, name="data")
        scheduler.schedule()   # arms
        scheduler.schedule()   # no-op, already pending
        scheduler.cancel()     # on detach
    """

    def __init__(
        self,
        delay_ms: int,
        callback: Callable[[], Any],
        parent: Optional[QObject] = None,
        name: str = "render"
    ):
        self._callback = callback
        self._name = name
        self._timer = QTimer(parent)
        self._timer.setSingleShot(True)
        self._timer.setInterval(delay_ms)
        self._timer.timeout.connect(self._fire)
        self._tasks: set[asyncio.Future] = set()

    @property
    def delay_ms(self) -> int:
        return self._timer.interval()

    @property
    def pending(self) -> bool:
        return self._timer.isActive()

    def schedule(self) -> bool:
        """
        Arm the timer unless it is already pending.

        Returns:
            True if this call armed the timer
        """
        if self._timer.isActive():
            return False
        self._timer.start()
        return True

    def cancel(self):
        """Disarm a pending timer and cancel still-running coroutines."""
        if self._timer.isActive():
            self._timer.stop()
            logger.trace(f"Scheduler '{self._name}' cancelled")
        for task in list(self._tasks):
            task.cancel()
        self._tasks.clear()

    @property
    def running(self) -> int:
        """Number of callback coroutines still in flight."""
        return len(self._tasks)

    def _fire(self):
        result = self._callback()
        if inspect.isawaitable(result):
            task = asyncio.ensure_future(result)
            self._tasks.add(task)
            task.add_done_callback(self._on_task_done)

    def _on_task_done(self, task: asyncio.Future):
        self._tasks.discard(task)
        log_task_failure(task, f"Scheduler '{self._name}'")


def log_task_failure(task: asyncio.Future, owner: str):
    """Retrieve a finished task's exception and report it through loguru."""
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        logger.opt(exception=exc).error(f"{owner}: callback failed: {exc!r}")
