"""One-shot, cancelable timers on a virtual millisecond timeline."""
from __future__ import annotations

import heapq
from dataclasses import dataclass, field

from smoosh_tick.types import TimerCallback, TimerId


@dataclass
class Timer:
    """One-shot countdown. Fires once at ``due_ms``, then leaves the queue."""

    timer_id: TimerId
    name: str
    due_ms: int
    callback: TimerCallback = field(repr=False, compare=False)
    cancelled: bool = False


class TimerQueue:
    """Heap of pending timers fired strictly one at a time in ``(due_ms, id)`` order.

    Delays are relative to the queue's own notion of "now", which moves to each
    timer's due time while it fires. A callback that schedules a follow-up is
    therefore measured from the moment it fired, not from the end of the tick.
    """

    def __init__(self) -> None:
        self._heap: list[tuple[int, TimerId, Timer]] = []
        self._live: dict[TimerId, Timer] = {}
        self._next_id: TimerId = 0
        self._now_ms = 0

    @property
    def now_ms(self) -> int:
        return self._now_ms

    def schedule(
        self, delay_ms: int, callback: TimerCallback, name: str = "timer"
    ) -> TimerId:
        if delay_ms < 0:
            raise ValueError("delay_ms must not be negative")
        timer_id = self._next_id
        self._next_id += 1
        timer = Timer(
            timer_id=timer_id,
            name=name,
            due_ms=self._now_ms + int(delay_ms),
            callback=callback,
        )
        heapq.heappush(self._heap, (timer.due_ms, timer_id, timer))
        self._live[timer_id] = timer
        return timer_id

    def cancel(self, timer_id: TimerId | None) -> bool:
        """Cancel a pending timer. Unknown, fired or ``None`` ids are ignored."""
        if timer_id is None:
            return False
        timer = self._live.pop(timer_id, None)
        if timer is None:
            return False
        timer.cancelled = True
        return True

    def active(self, timer_id: TimerId | None) -> bool:
        return timer_id is not None and timer_id in self._live

    def pending(self, name: str | None = None) -> list[Timer]:
        timers = sorted(self._live.values(), key=lambda t: (t.due_ms, t.timer_id))
        if name is None:
            return timers
        return [t for t in timers if t.name == name]

    def next_due_ms(self) -> int | None:
        while self._heap and self._heap[0][2].cancelled:
            heapq.heappop(self._heap)
        if not self._heap:
            return None
        return self._heap[0][0]

    def fire_until(self, until_ms: int) -> int:
        """Fire every timer due at or before ``until_ms``. Returns the count fired."""
        fired = 0
        while self._heap and self._heap[0][0] <= until_ms:
            due_ms, _, timer = heapq.heappop(self._heap)
            if timer.cancelled:
                continue
            del self._live[timer.timer_id]
            self._now_ms = max(self._now_ms, due_ms)
            timer.callback()
            fired += 1
        self._now_ms = max(self._now_ms, until_ms)
        return fired

    def clear(self) -> None:
        for timer in self._live.values():
            timer.cancelled = True
        self._live.clear()
        self._heap.clear()

    def __len__(self) -> int:
        return len(self._live)
