"""Engine - core loop, pacing, timers and lifecycle hooks."""

import os
import random
import time
from typing import Callable

from smoosh_tick.clock import Clock
from smoosh_tick.timers import TimerQueue
from smoosh_tick.types import System, TickContext, TimerCallback, TimerId


class Engine:
    def __init__(self, tick_ms: int = 50, seed: int | None = None) -> None:
        self._clock = Clock(tick_ms)
        self._timers = TimerQueue()
        self._systems: list[System] = []
        self._start_hooks: list[Callable[[TickContext], None]] = []
        self._stop_hooks: list[Callable[[TickContext], None]] = []
        self._stop_requested: bool = False

        if seed is None:
            seed = int.from_bytes(os.urandom(8))
        self._seed = seed
        self._rng = random.Random(seed)

    @property
    def clock(self) -> Clock:
        return self._clock

    @property
    def timers(self) -> TimerQueue:
        return self._timers

    @property
    def seed(self) -> int:
        return self._seed

    @property
    def random(self) -> random.Random:
        return self._rng

    @property
    def now_ms(self) -> int:
        return self._timers.now_ms

    def schedule(
        self, delay_ms: int, callback: TimerCallback, name: str = "timer"
    ) -> TimerId:
        return self._timers.schedule(delay_ms, callback, name)

    def cancel(self, timer_id: TimerId | None) -> bool:
        return self._timers.cancel(timer_id)

    def add_system(self, system: System) -> None:
        self._systems.append(system)

    def on_start(self, hook: Callable[[TickContext], None]) -> None:
        self._start_hooks.append(hook)

    def on_stop(self, hook: Callable[[TickContext], None]) -> None:
        self._stop_hooks.append(hook)

    def _request_stop(self) -> None:
        self._stop_requested = True

    def _tick(self, dt_ms: int) -> None:
        self._clock.advance(dt_ms)
        self._timers.fire_until(self._clock.now_ms)
        ctx = self._clock.context(dt_ms, self._request_stop, self._rng)
        for system in self._systems:
            system(ctx)
            if self._stop_requested:
                break

    def _run_hooks(self, hooks: list[Callable[[TickContext], None]]) -> None:
        ctx = self._clock.context(0, self._request_stop, self._rng)
        for hook in hooks:
            hook(ctx)

    def step(self) -> None:
        self._stop_requested = False
        self._tick(self._clock.tick_ms)

    def advance(self, ms: int) -> None:
        """Advance virtual time by ``ms``, in ticks no longer than ``tick_ms``."""
        if ms < 0:
            raise ValueError("ms must not be negative")
        self._stop_requested = False
        remaining = ms
        while remaining > 0:
            dt = min(self._clock.tick_ms, remaining)
            self._tick(dt)
            remaining -= dt
            if self._stop_requested:
                break

    def run(self, n: int) -> None:
        self._stop_requested = False
        self._run_hooks(self._start_hooks)

        for _ in range(n):
            self._tick(self._clock.tick_ms)
            if self._stop_requested:
                break

        self._run_hooks(self._stop_hooks)

    def run_forever(self) -> None:
        self._stop_requested = False
        self._run_hooks(self._start_hooks)

        dt = self._clock.tick_ms / 1000.0
        while not self._stop_requested:
            start = time.monotonic()
            self._tick(self._clock.tick_ms)
            if self._stop_requested:
                break
            elapsed = time.monotonic() - start
            sleep_time = dt - elapsed
            if sleep_time > 0:
                time.sleep(sleep_time)

        self._run_hooks(self._stop_hooks)
