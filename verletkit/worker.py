"""A background thread that runs an update step continuously or on demand."""

from __future__ import annotations

import threading
from typing import Callable, Optional


class UpdateThread:
    """Runs update_thread() in a background loop, gated by a run flag.

    Either pass a target callable or subclass and override update_thread().
    """

    def __init__(self, target: Optional[Callable[[], object]] = None, interval: float = 0.01) -> None:
        if target is None and type(self).update_thread is UpdateThread.update_thread:
            raise TypeError("provide a target or override update_thread()")
        self._target = target
        self._interval = interval
        self._cond = threading.Condition(threading.Lock())
        self._ok_to_run = False
        self._run_once = False
        self._halt = threading.Event()
        self._thread: Optional[threading.Thread] = None

    def __enter__(self) -> UpdateThread:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.stop()

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        """Start the thread and begin updating continuously."""
        self._launch(True)

    def start_paused(self) -> None:
        """Start the thread without updating until asked to."""
        self._launch(False)

    def _launch(self, run: bool) -> None:
        if self.running:
            raise RuntimeError("thread already running")
        self._halt.clear()
        with self._cond:
            self._ok_to_run = run
            self._run_once = False
        self._thread = threading.Thread(target=self._loop, daemon=True)
        self._thread.start()

    def stop(self) -> None:
        """Stop the thread and wait for it to exit."""
        self._halt.set()
        with self._cond:
            self._cond.notify_all()
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join()

    def update_once(self) -> None:
        """Run update_thread() exactly once."""
        with self._cond:
            self._ok_to_run = True
            self._run_once = True

    def begin_update(self) -> None:
        """Run update_thread() repeatedly until paused."""
        with self._cond:
            self._ok_to_run = True

    def pause_update(self) -> None:
        """Stop calling update_thread(); returns once no call is in progress."""
        with self._cond:
            self._ok_to_run = False

    def is_updating(self) -> bool:
        """True while update_thread() is being executed."""
        acquired = self._cond.acquire(blocking=False)
        if acquired:
            self._cond.release()
        return not acquired

    def wait_to_finish(self) -> None:
        """Block until the thread is no longer asked to update."""
        with self._cond:
            self._cond.wait_for(lambda: not self._ok_to_run or self._halt.is_set())

    def update_thread(self) -> None:
        """The work done on each step; calls the target by default."""
        assert self._target is not None
        self._target()

    def _loop(self) -> None:
        while not self._halt.is_set():
            with self._cond:
                if self._ok_to_run:
                    try:
                        self.update_thread()
                    except BaseException:
                        self._ok_to_run = False
                        self._run_once = False
                        self._cond.notify_all()
                        raise
                    if self._run_once:
                        self._run_once = False
                        self._ok_to_run = False
                        self._cond.notify_all()
            self._halt.wait(self._interval)