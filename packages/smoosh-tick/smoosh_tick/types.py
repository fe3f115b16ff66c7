"""Shared type aliases and context objects for the timer engine."""

from __future__ import annotations

import random as _random
from dataclasses import dataclass
from typing import Callable

TimerId = int

TimerCallback = Callable[[], None]


@dataclass(frozen=True, slots=True)
class TickContext:
    tick_number: int
    dt_ms: int
    now_ms: int
    request_stop: Callable[[], None]
    random: _random.Random


System = Callable[[TickContext], None]
