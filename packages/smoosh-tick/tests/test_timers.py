"""Tests for TimerQueue scheduling, firing order and cancellation."""
import pytest

from smoosh_tick import Timer, TimerQueue


class TestTimerBasics:
    """Basic one-shot behavior."""

    def test_timer_fires_at_due_time(self):
        queue = TimerQueue()
        fired = []
        queue.schedule(100, lambda: fired.append(queue.now_ms), name="spawn")

        queue.fire_until(99)
        assert fired == []

        queue.fire_until(100)
        assert fired == [100]

    def test_timer_fires_exactly_once(self):
        queue = TimerQueue()
        fired = []
        queue.schedule(10, lambda: fired.append(1))

        queue.fire_until(50)
        queue.fire_until(500)
        assert fired == [1]
        assert len(queue) == 0

    def test_zero_delay_fires_on_next_flush(self):
        queue = TimerQueue()
        fired = []
        queue.schedule(0, lambda: fired.append(1))
        queue.fire_until(0)
        assert fired == [1]

    def test_negative_delay_rejected(self):
        queue = TimerQueue()
        with pytest.raises(ValueError):
            queue.schedule(-1, lambda: None)

    def test_ids_are_unique(self):
        queue = TimerQueue()
        ids = {queue.schedule(5, lambda: None) for _ in range(100)}
        assert len(ids) == 100


class TestTimerOrdering:
    def test_fires_in_due_order(self):
        queue = TimerQueue()
        order = []
        queue.schedule(300, lambda: order.append("c"))
        queue.schedule(100, lambda: order.append("a"))
        queue.schedule(200, lambda: order.append("b"))

        queue.fire_until(1000)
        assert order == ["a", "b", "c"]

    def test_same_due_fires_in_schedule_order(self):
        queue = TimerQueue()
        order = []
        for label in "xyz":
            queue.schedule(50, lambda label=label: order.append(label))

        queue.fire_until(50)
        assert order == ["x", "y", "z"]

    def test_rescheduling_is_relative_to_fire_time(self):
        """A follow-up scheduled from a callback counts from its own due time."""
        queue = TimerQueue()
        times = []

        def first():
            times.append(queue.now_ms)
            queue.schedule(40, lambda: times.append(queue.now_ms))

        queue.schedule(30, first)
        queue.fire_until(100)
        assert times == [30, 70]

    def test_chained_timer_beyond_window_waits(self):
        queue = TimerQueue()
        fired = []
        queue.schedule(30, lambda: queue.schedule(100, lambda: fired.append(1)))

        queue.fire_until(50)
        assert fired == []
        assert queue.now_ms == 50

        queue.fire_until(130)
        assert fired == [1]


class TestTimerCancellation:
    def test_cancelled_timer_never_fires(self):
        queue = TimerQueue()
        fired = []
        tid = queue.schedule(10, lambda: fired.append(1))

        assert queue.cancel(tid) is True
        queue.fire_until(100)
        assert fired == []

    def test_cancel_is_idempotent(self):
        queue = TimerQueue()
        tid = queue.schedule(10, lambda: None)
        assert queue.cancel(tid) is True
        assert queue.cancel(tid) is False

    def test_cancel_none_or_unknown_is_safe(self):
        queue = TimerQueue()
        assert queue.cancel(None) is False
        assert queue.cancel(12345) is False

    def test_cancel_after_fire_is_noop(self):
        queue = TimerQueue()
        tid = queue.schedule(10, lambda: None)
        queue.fire_until(10)
        assert queue.active(tid) is False
        assert queue.cancel(tid) is False

    def test_callback_can_cancel_sibling(self):
        queue = TimerQueue()
        fired = []
        later = queue.schedule(20, lambda: fired.append("later"))
        queue.schedule(10, lambda: queue.cancel(later))

        queue.fire_until(100)
        assert fired == []

    def test_clear_drops_everything(self):
        queue = TimerQueue()
        fired = []
        for delay in (1, 2, 3):
            queue.schedule(delay, lambda: fired.append(1))
        queue.clear()
        queue.fire_until(10)
        assert fired == []
        assert len(queue) == 0


class TestTimerQueries:
    def test_pending_filters_by_name(self):
        queue = TimerQueue()
        queue.schedule(30, lambda: None, name="spawn")
        queue.schedule(10, lambda: None, name="despawn")
        queue.schedule(20, lambda: None, name="despawn")

        names = [t.name for t in queue.pending()]
        assert names == ["despawn", "despawn", "spawn"]
        assert len(queue.pending("spawn")) == 1
        assert all(isinstance(t, Timer) for t in queue.pending("despawn"))

    def test_next_due_skips_cancelled(self):
        queue = TimerQueue()
        first = queue.schedule(10, lambda: None)
        queue.schedule(25, lambda: None)
        queue.cancel(first)
        assert queue.next_due_ms() == 25

    def test_next_due_empty(self):
        assert TimerQueue().next_due_ms() is None
