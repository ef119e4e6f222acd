import threading
import time

import pytest

from verletkit.worker import UpdateThread


class Counter(UpdateThread):
    def __init__(self):
        super().__init__(interval=0.001)
        self.count = 0

    def update_thread(self):
        self.count += 1


def _wait_until(predicate, timeout=2.0):
    deadline = time.monotonic() + timeout
    while not predicate():
        if time.monotonic() > deadline:
            return False
        time.sleep(0.001)
    return True


def test_requires_target_or_override():
    with pytest.raises(TypeError):
        UpdateThread()


def test_update_once_runs_exactly_once():
    calls = []
    worker = UpdateThread(target=lambda: calls.append(1), interval=0.001)
    worker.start_paused()
    try:
        worker.update_once()
        worker.wait_to_finish()
        assert len(calls) == 1
        time.sleep(0.05)
        assert len(calls) == 1
    finally:
        worker.stop()


def test_subclass_override_is_used():
    worker = Counter()
    UpdateThread.start_paused(worker)
    try:
        UpdateThread.update_once(worker)
        UpdateThread.wait_to_finish(worker)
        assert worker.count == 1
    finally:
        UpdateThread.stop(worker)


def test_repeated_update_once_counts_each_call():
    calls = []
    worker = UpdateThread(target=lambda: calls.append(1), interval=0.001)
    worker.start_paused()
    try:
        for _ in range(3):
            worker.update_once()
            worker.wait_to_finish()
        assert len(calls) == 3
    finally:
        worker.stop()


def test_paused_start_does_not_update():
    calls = []
    worker = UpdateThread(target=lambda: calls.append(1), interval=0.001)
    worker.start_paused()
    try:
        time.sleep(0.05)
        assert calls == []
    finally:
        worker.stop()


def test_begin_and_pause_update():
    calls = []
    worker = UpdateThread(target=lambda: calls.append(1), interval=0.001)
    worker.start()
    try:
        assert _wait_until(lambda: len(calls) >= 3)
        worker.pause_update()
        settled = len(calls)
        time.sleep(0.05)
        assert len(calls) == settled
        worker.begin_update()
        assert _wait_until(lambda: len(calls) > settled)
    finally:
        worker.stop()


def test_target_callable_is_used():
    calls = []
    worker = UpdateThread(target=lambda: calls.append(1), interval=0.001)
    worker.start_paused()
    try:
        worker.update_once()
        worker.wait_to_finish()
        assert calls == [1]
    finally:
        worker.stop()


def test_is_updating_while_step_in_progress():
    started = threading.Event()
    release = threading.Event()

    def step():
        started.set()
        release.wait(2.0)

    worker = UpdateThread(target=step, interval=0.001)
    worker.start_paused()
    try:
        assert not worker.is_updating()
        worker.update_once()
        assert started.wait(2.0)
        assert worker.is_updating()
        release.set()
        worker.wait_to_finish()
        assert not worker.is_updating()
    finally:
        release.set()
        worker.stop()


def test_stop_ends_thread():
    worker = UpdateThread(target=lambda: None, interval=0.001)
    worker.start()
    assert worker.running
    worker.stop()
    assert not worker.running


def test_start_twice_raises():
    worker = UpdateThread(target=lambda: None, interval=0.001)
    worker.start_paused()
    try:
        with pytest.raises(RuntimeError):
            worker.start()
    finally:
        worker.stop()


def test_context_manager_stops_thread():
    with UpdateThread(target=lambda: None, interval=0.001) as worker:
        worker.start()
        assert worker.running
    assert not worker.running