"""smoosh-tick - A fixed-step millisecond engine with one-shot timers."""

from smoosh_tick.clock import Clock
from smoosh_tick.engine import Engine
from smoosh_tick.timers import Timer, TimerQueue
from smoosh_tick.types import System, TickContext, TimerCallback, TimerId

__all__ = [
    "Engine",
    "Clock",
    "Timer",
    "TimerQueue",
    "TickContext",
    "TimerId",
    "TimerCallback",
    "System",
]
