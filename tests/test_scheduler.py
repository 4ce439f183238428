"""Unit tests for the tick schedulers."""

import threading

import pytest

from engine import ManualScheduler, TimerScheduler


class TestManualScheduler:

    def test_fires_once_per_interval(self):
        sched = ManualScheduler()
        calls = []
        sched.call_every(1.0, lambda: calls.append(sched.now))
        sched.advance(3.0)
        assert calls == [1.0, 2.0, 3.0]

    def test_partial_advance_accumulates(self):
        sched = ManualScheduler()
        calls = []
        sched.call_every(1.0, lambda: calls.append(1))
        sched.advance(0.6)
        assert calls == []
        sched.advance(0.6)
        assert calls == [1]

    def test_cancel_stops_ticks(self):
        sched = ManualScheduler()
        calls = []
        task = sched.call_every(1.0, lambda: calls.append(1))
        sched.advance(1.0)
        task.cancel()
        sched.advance(5.0)
        assert calls == [1]
        assert sched.active_tasks == []

    def test_tasks_fire_in_deadline_order(self):
        sched = ManualScheduler()
        calls = []
        sched.call_every(2.0, lambda: calls.append("slow"))
        sched.call_every(1.0, lambda: calls.append("fast"))
        sched.advance(2.0)
        # equal deadlines fire in registration order
        assert calls == ["fast", "slow", "fast"]

    def test_negative_advance_rejected(self):
        with pytest.raises(ValueError):
            ManualScheduler().advance(-1)

    def test_non_positive_interval_rejected(self):
        with pytest.raises(ValueError):
            ManualScheduler().call_every(0, lambda: None)


class TestTimerScheduler:

    def test_ticks_until_cancelled(self):
        done = threading.Event()
        calls = []

        def tick():
            calls.append(1)
            if len(calls) >= 3:
                done.set()

        task = TimerScheduler().call_every(0.01, tick)
        try:
            assert done.wait(timeout=5)
        finally:
            task.cancel()
        assert task.cancelled

    def test_failing_callback_stops_timer(self):
        calls = []

        def tick():
            calls.append(1)
            raise RuntimeError("tick failed")

        task = TimerScheduler().call_every(0.01, tick)
        task._thread.join(timeout=5)
        assert not task._thread.is_alive()
        assert task.cancelled
        assert calls == [1]
