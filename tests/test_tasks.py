"""Tests for task monitors and runners."""

from __future__ import annotations

import threading

import pytest

from cohort.exceptions import TaskCancelledError
from cohort.tasks import InlineTaskRunner, TaskMonitor, TaskRunner, ThreadedTaskRunner

# ======================================================================
# Helpers
# ======================================================================


class _ReturningTask:
    title = "returning"

    def __init__(self, value: object) -> None:
        self.value = value

    def run(self, monitor: TaskMonitor) -> object:
        monitor.set_progress(50.0)
        return self.value


class _FailingTask:
    title = "failing"

    def run(self, monitor: TaskMonitor) -> object:
        raise RuntimeError("kaboom")


class _WaitingTask:
    """Blocks until released, then honours cancellation."""

    title = "waiting"

    def __init__(self) -> None:
        self.started = threading.Event()
        self.release = threading.Event()

    def run(self, monitor: TaskMonitor) -> str:
        self.started.set()
        self.release.wait(timeout=5)
        monitor.check_cancelled()
        return "finished"


# ======================================================================
# TaskMonitor
# ======================================================================


class TestTaskMonitor:
    def test_initial_state(self) -> None:
        monitor = TaskMonitor()
        assert not monitor.cancelled
        assert monitor.status == ""
        assert monitor.progress is None
        monitor.check_cancelled()

    def test_cancel(self) -> None:
        monitor = TaskMonitor()
        monitor.set_status("growing")
        monitor.cancel()
        monitor.cancel()
        assert monitor.cancelled
        with pytest.raises(TaskCancelledError, match="growing"):
            monitor.check_cancelled()

    def test_progress_is_clamped(self) -> None:
        monitor = TaskMonitor()
        monitor.set_progress(150.0)
        assert monitor.progress == 100.0
        monitor.set_progress(-3.0)
        assert monitor.progress == 0.0


# ======================================================================
# InlineTaskRunner
# ======================================================================


class TestInlineTaskRunner:
    def test_satisfies_protocol(self) -> None:
        assert isinstance(InlineTaskRunner(), TaskRunner)

    def test_result(self) -> None:
        handle = InlineTaskRunner().submit(_ReturningTask([1, 2]))
        assert handle.done()
        assert handle.result() == [1, 2]
        assert handle.monitor.progress == 50.0

    def test_failure_propagates(self) -> None:
        handle = InlineTaskRunner().submit(_FailingTask())
        with pytest.raises(RuntimeError, match="kaboom"):
            handle.result()


# ======================================================================
# ThreadedTaskRunner
# ======================================================================


class TestThreadedTaskRunner:
    def test_satisfies_protocol(self) -> None:
        with ThreadedTaskRunner() as runner:
            assert isinstance(runner, TaskRunner)

    def test_result(self) -> None:
        with ThreadedTaskRunner() as runner:
            assert runner.submit(_ReturningTask("ok")).result(timeout=5) == "ok"

    def test_runs_off_the_calling_thread(self) -> None:
        seen: list[int] = []

        class _ThreadTask:
            title = "thread"

            def run(self, monitor: TaskMonitor) -> None:
                seen.append(threading.get_ident())

        with ThreadedTaskRunner() as runner:
            runner.submit(_ThreadTask()).result(timeout=5)
        assert seen and seen[0] != threading.get_ident()

    def test_failure_propagates(self) -> None:
        with ThreadedTaskRunner() as runner:
            handle = runner.submit(_FailingTask())
            with pytest.raises(RuntimeError, match="kaboom"):
                handle.result(timeout=5)

    def test_cancellation(self) -> None:
        task = _WaitingTask()
        with ThreadedTaskRunner() as runner:
            handle = runner.submit(task)
            assert task.started.wait(timeout=5)
            handle.cancel()
            task.release.set()
            with pytest.raises(TaskCancelledError):
                handle.result(timeout=5)
            assert handle.cancelled

    def test_submit_after_close(self) -> None:
        runner = ThreadedTaskRunner()
        runner.close()
        runner.close()
        with pytest.raises(RuntimeError, match="closed"):
            runner.submit(_ReturningTask(None))
