"""Clock and TickContext for the fixed-step millisecond engine."""

import random
from typing import Callable

from smoosh_tick.types import TickContext


class Clock:
    def __init__(self, tick_ms: int) -> None:
        if tick_ms <= 0:
            raise ValueError("tick_ms must be positive")
        self._tick_ms = tick_ms
        self._tick_number = 0
        self._now_ms = 0

    @property
    def tick_ms(self) -> int:
        return self._tick_ms

    @property
    def tick_number(self) -> int:
        return self._tick_number

    @property
    def now_ms(self) -> int:
        return self._now_ms

    def advance(self, dt_ms: int | None = None) -> int:
        """Move forward one tick of ``dt_ms`` (default: one full tick)."""
        if dt_ms is None:
            dt_ms = self._tick_ms
        if dt_ms < 0:
            raise ValueError("dt_ms must not be negative")
        self._tick_number += 1
        self._now_ms += dt_ms
        return self._tick_number

    def context(
        self, dt_ms: int, stop_fn: Callable[[], None], rng: random.Random
    ) -> TickContext:
        return TickContext(
            tick_number=self._tick_number,
            dt_ms=dt_ms,
            now_ms=self._now_ms,
            request_stop=stop_fn,
            random=rng,
        )

    def reset(self, tick_number: int = 0, now_ms: int = 0) -> None:
        self._tick_number = tick_number
        self._now_ms = now_ms
