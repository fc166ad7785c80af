"""Task execution — worker tasks with cooperative cancellation.

``ThreadedTaskRunner`` owns a private event loop in a daemon thread and
runs each submitted task on that loop's default executor via
``asyncio.to_thread``.  Callers block on the returned :class:`TaskHandle`;
cancellation is cooperative: :meth:`TaskHandle.cancel` flips the task's
:class:`TaskMonitor`, and the task is expected to poll
:meth:`TaskMonitor.check_cancelled` between units of work.
"""

from __future__ import annotations

import asyncio
import logging
import threading
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from cohort.exceptions import TaskCancelledError

if TYPE_CHECKING:
    from concurrent.futures import Future

logger = logging.getLogger(__name__)


class TaskMonitor:
    """Progress and cancellation channel shared by a task and its submitter."""

    def __init__(self) -> None:
        self._cancelled = threading.Event()
        self._lock = threading.Lock()
        self._status = ""
        self._progress: float | None = None

    # ------------------------------------------------------------------
    # Cancellation
    # ------------------------------------------------------------------

    def cancel(self) -> None:
        """Request cancellation.  Idempotent."""
        self._cancelled.set()

    @property
    def cancelled(self) -> bool:
        """Whether cancellation has been requested."""
        return self._cancelled.is_set()

    def check_cancelled(self) -> None:
        """Raise ``TaskCancelledError`` if cancellation has been requested."""
        if self._cancelled.is_set():
            raise TaskCancelledError(self._status or "task cancelled")

    # ------------------------------------------------------------------
    # Progress reporting
    # ------------------------------------------------------------------

    def set_status(self, message: str) -> None:
        """Record a human-readable status line."""
        with self._lock:
            self._status = message
        logger.debug("Task status: %s", message)

    def set_progress(self, percent: float | None) -> None:
        """Record completion percentage (0-100), or ``None`` if unknown."""
        if percent is not None:
            percent = min(max(percent, 0.0), 100.0)
        with self._lock:
            self._progress = percent

    @property
    def status(self) -> str:
        with self._lock:
            return self._status

    @property
    def progress(self) -> float | None:
        with self._lock:
            return self._progress


@runtime_checkable
class Task(Protocol):
    """Unit of work executed by a ``TaskRunner``."""

    title: str

    def run(self, monitor: TaskMonitor) -> Any: ...


class TaskHandle:
    """Handle to a submitted task."""

    def __init__(self, future: Future[Any], monitor: TaskMonitor) -> None:
        self._future = future
        self.monitor = monitor

    def cancel(self) -> None:
        """Ask the task to stop at its next cancellation check."""
        self.monitor.cancel()

    @property
    def cancelled(self) -> bool:
        return self.monitor.cancelled

    def done(self) -> bool:
        return self._future.done()

    def result(self, timeout: float | None = None) -> Any:
        """Block until the task finishes and return its result.

        Raises ``TaskCancelledError`` if the task stopped because of a
        cancellation request, and re-raises any other task failure.
        """
        return self._future.result(timeout)


@runtime_checkable
class TaskRunner(Protocol):
    """Submits tasks for execution off the caller's thread."""

    def submit(self, task: Task) -> TaskHandle: ...


class ThreadedTaskRunner:
    """Runs tasks on a private event loop living in a daemon thread.

    Usage::

        with ThreadedTaskRunner() as runner:
            handle = runner.submit(task)
            results = handle.result()
    """

    def __init__(self) -> None:
        self._closed = False
        self._loop = asyncio.new_event_loop()
        self._thread = threading.Thread(
            target=self._loop.run_forever, name="cohort-tasks", daemon=True
        )
        self._thread.start()

    def submit(self, task: Task) -> TaskHandle:
        """Schedule *task* and return a handle to it."""
        if self._closed:
            msg = "ThreadedTaskRunner is closed"
            raise RuntimeError(msg)
        monitor = TaskMonitor()
        future = asyncio.run_coroutine_threadsafe(self._execute(task, monitor), self._loop)
        return TaskHandle(future, monitor)

    async def _execute(self, task: Task, monitor: TaskMonitor) -> Any:
        logger.debug("Starting task %r", task.title)
        monitor.set_status(task.title)
        result = await asyncio.to_thread(task.run, monitor)
        # A task that notices cancellation late may still return normally.
        monitor.check_cancelled()
        logger.debug("Finished task %r", task.title)
        return result

    def close(self) -> None:
        """Stop the event loop and join the thread."""
        if self._closed:
            return
        self._closed = True
        self._loop.call_soon_threadsafe(self._loop.stop)
        self._thread.join(timeout=5)

    def __enter__(self) -> ThreadedTaskRunner:
        return self

    def __exit__(self, exc_type: object, exc_val: object, exc_tb: object) -> None:
        self.close()


class InlineTaskRunner:
    """Runs tasks synchronously on the calling thread.

    The returned handle is already complete; useful for headless hosts and
    tests where no worker thread is wanted.
    """

    def submit(self, task: Task) -> TaskHandle:
        from concurrent.futures import Future

        monitor = TaskMonitor()
        future: Future[Any] = Future()
        try:
            result = task.run(monitor)
            monitor.check_cancelled()
        except Exception as exc:
            future.set_exception(exc)
        else:
            future.set_result(result)
        return TaskHandle(future, monitor)
