"""Game notifications: a queued pub/sub bus flushed at callback boundaries.

Handlers never run in the middle of a state mutation. Signals published while
the core resolves a hit or a timer are delivered when the bus is flushed,
which happens at the end of every public ``Game`` call and once per engine
tick.
"""
from __future__ import annotations

from typing import Any, Callable

from smoosh_tick import System, TickContext

SPAWNED = "spawned"
HIT = "hit"
SMOOSHED = "smooshed"
DESPAWNED = "despawned"
MISSED = "missed"
STAGE_STARTED = "stage_started"
STAGE_COMPLETE = "stage_complete"

Handler = Callable[[str, dict[str, Any]], None]


class SignalBus:

    def __init__(self) -> None:
        self._subscribers: dict[str, list[Handler]] = {}
        self._queue: list[tuple[str, dict[str, Any]]] = []

    def subscribe(self, signal_name: str, handler: Handler) -> None:
        self._subscribers.setdefault(signal_name, []).append(handler)

    def unsubscribe(self, signal_name: str, handler: Handler) -> None:
        handlers = self._subscribers.get(signal_name)
        if handlers is None:
            return
        try:
            handlers.remove(handler)
        except ValueError:
            pass

    def publish(self, signal_name: str, **data: Any) -> None:
        self._queue.append((signal_name, data))

    @property
    def pending(self) -> int:
        return len(self._queue)

    def flush(self) -> None:
        # Handlers may publish or flush again; they see a fresh queue.
        snapshot = self._queue
        self._queue = []
        for signal_name, data in snapshot:
            for handler in list(self._subscribers.get(signal_name, [])):
                handler(signal_name, data)

    def clear(self) -> None:
        self._queue.clear()


def make_signal_system(bus: SignalBus) -> System:
    def signal_system(ctx: TickContext) -> None:
        bus.flush()

    return signal_system
