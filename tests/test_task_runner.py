import threading

import pytest

from finalpic.services.task_runner import TaskRunner


class FakeScheduler:
    """Stands in for the Tk window: queues `after` callbacks until pumped."""

    def __init__(self):
        self.pending = []

    def after(self, ms, func):
        self.pending.append(func)

    def pump(self):
        while self.pending:
            self.pending.pop(0)()


@pytest.fixture
def runner_and_scheduler():
    scheduler = FakeScheduler()
    runner = TaskRunner(scheduler, poll_ms=1)
    yield runner, scheduler
    runner.shutdown()


def test_result_delivered_on_calling_thread(runner_and_scheduler):
    runner, scheduler = runner_and_scheduler
    seen = {}

    def on_done(future):
        seen["value"] = future.result()
        seen["thread"] = threading.current_thread()

    future = runner.submit(lambda: threading.current_thread().name, on_done)
    future.result(timeout=5)
    assert "value" not in seen

    scheduler.pump()
    assert seen["value"].startswith("finalpic-worker")
    assert seen["thread"] is threading.main_thread()


def test_exception_is_kept_in_future(runner_and_scheduler):
    runner, scheduler = runner_and_scheduler
    errors = []

    def boom():
        raise OSError("disk full")

    future = runner.submit(boom, lambda f: errors.append(f.exception()))
    with pytest.raises(OSError):
        future.result(timeout=5)

    scheduler.pump()
    assert len(errors) == 1
    assert str(errors[0]) == "disk full"
