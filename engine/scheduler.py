"""
scheduler.py — Periodic Tick Scheduling
=======================================
Abstracts the fixed-interval timer that drives playback, so the player
can run on real threads in the web app and on virtual time in tests.

Production code uses TimerScheduler.
Tests inject ManualScheduler and advance time without sleeping.

Both implement the same two-method contract:

    task = scheduler.call_every(interval, callback)
    task.cancel()
"""

import logging
import threading
import time
from typing import Callable, List, Protocol

logger = logging.getLogger(__name__)


class ScheduledTask(Protocol):
    """Handle for a periodic callback."""

    def cancel(self) -> None:
        """Stop future ticks.  Idempotent."""
        ...


class Scheduler(Protocol):
    """Something that can call a function every `interval` seconds."""

    def call_every(self, interval: float, callback: Callable[[], None]) -> ScheduledTask:
        ...


# ---------------------------------------------------------------------------
# Wall-clock implementation
# ---------------------------------------------------------------------------
class _ThreadTask:

    def __init__(self, interval: float, callback: Callable[[], None]):
        self.interval = interval
        self.callback = callback
        self._stopped = threading.Event()
        self._thread = threading.Thread(target=self._run, name="playback-tick", daemon=True)

    def start(self) -> None:
        self._thread.start()

    def cancel(self) -> None:
        self._stopped.set()

    @property
    def cancelled(self) -> bool:
        return self._stopped.is_set()

    def _run(self) -> None:
        # deadlines are fixed multiples of the interval from the start
        next_due = time.monotonic() + self.interval
        while not self._stopped.wait(max(0.0, next_due - time.monotonic())):
            try:
                self.callback()
            except Exception:
                logger.exception("Playback tick failed; stopping timer")
                self._stopped.set()
                return
            next_due += self.interval


class TimerScheduler:
    """One daemon thread per scheduled task."""

    def call_every(self, interval: float, callback: Callable[[], None]) -> _ThreadTask:
        task = _ThreadTask(interval, callback)
        task.start()
        return task


# ---------------------------------------------------------------------------
# Virtual-time implementation
# ---------------------------------------------------------------------------
class ManualTask:

    def __init__(self, interval: float, callback: Callable[[], None], now: float):
        self.interval = interval
        self.callback = callback
        self.next_due = now + interval
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """
    Controllable scheduler for deterministic testing.

    Example:
        scheduler = ManualScheduler()
        player = StepPlayer(scheduler=scheduler, interval=1.0)
        player.start(trace, on_highlight=seen.append)

        scheduler.advance(1.0)   # exactly one tick
        scheduler.advance(2.0)   # two more ticks
    """

    def __init__(self, start: float = 0.0):
        self._now = start
        self._tasks: List[ManualTask] = []

    def call_every(self, interval: float, callback: Callable[[], None]) -> ManualTask:
        if interval <= 0:
            raise ValueError(f"Interval must be positive: {interval}")
        task = ManualTask(interval, callback, self._now)
        self._tasks.append(task)
        return task

    @property
    def now(self) -> float:
        return self._now

    @property
    def active_tasks(self) -> List[ManualTask]:
        return [t for t in self._tasks if not t.cancelled]

    def advance(self, seconds: float) -> None:
        """
        Move virtual time forward, firing every tick that falls due, in
        deadline order.

        Raises:
            ValueError: If seconds is negative.
        """
        if seconds < 0:
            raise ValueError(f"Cannot advance time by negative amount: {seconds}")
        target = self._now + seconds
        while True:
            due = [t for t in self.active_tasks if t.next_due <= target]
            if not due:
                break
            task = min(due, key=lambda t: t.next_due)
            self._now = task.next_due
            task.next_due += task.interval
            task.callback()
        self._now = target
        self._tasks = self.active_tasks
