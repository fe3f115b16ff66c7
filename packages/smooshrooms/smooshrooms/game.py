"""Game - the surface the presentation layer talks to."""
from __future__ import annotations

from typing import Any

from smoosh_tick import Engine

from smooshrooms.arena import BoundsLike
from smooshrooms.combat import CombatResolver
from smooshrooms.config import GameConfig
from smooshrooms.entity import Entity
from smooshrooms.ledger import adjust_score, record_miss
from smooshrooms.scheduler import SpawnScheduler
from smooshrooms.signals import MISSED, STAGE_COMPLETE, Handler, SignalBus, make_signal_system
from smooshrooms.stage import StageController, StageSummary
from smooshrooms.state import GameState, Host, HostBinding
from smooshrooms.types import EntityId


class Game:
    """Wires the scheduler, resolver and stage controller to one host.

    Every public call flushes the signal bus before returning, and the engine
    flushes it once per tick, so host handlers always observe settled state.
    """

    def __init__(
        self,
        engine: Engine | None = None,
        host: Host | None = None,
        config: GameConfig | None = None,
        bus: SignalBus | None = None,
    ) -> None:
        self._engine = engine if engine is not None else Engine()
        self._config = config or GameConfig()
        self._bus = bus if bus is not None else SignalBus()
        self._binding = HostBinding()
        self._resolver = CombatResolver(self._binding, self._engine, self._bus, self._config)
        self._scheduler = SpawnScheduler(
            self._binding, self._engine, self._resolver, self._bus, self._config
        )
        self._stages = StageController(
            self._binding, self._scheduler, self._resolver, self._bus, self._config
        )
        self._stage_hook: Handler | None = None
        self._engine.add_system(make_signal_system(self._bus))
        if host is not None:
            self.configure(host)

    @property
    def engine(self) -> Engine:
        return self._engine

    @property
    def bus(self) -> SignalBus:
        return self._bus

    @property
    def config(self) -> GameConfig:
        return self._config

    @property
    def scheduler(self) -> SpawnScheduler:
        return self._scheduler

    @property
    def resolver(self) -> CombatResolver:
        return self._resolver

    @property
    def state(self) -> GameState:
        return self._binding.state()

    def configure(self, host: Host) -> None:
        """Bind the host. Rebinding replaces the previous host's hook."""
        if self._stage_hook is not None:
            self._bus.unsubscribe(STAGE_COMPLETE, self._stage_hook)
            self._stage_hook = None
        self._binding.bind(host)

        on_stage_complete = getattr(host, "on_stage_complete", None)
        if callable(on_stage_complete):
            def relay(signal_name: str, data: dict[str, Any]) -> None:
                on_stage_complete(data["summary"])

            self._stage_hook = relay
            self._bus.subscribe(STAGE_COMPLETE, relay)

    def start_stage(self, bounds: BoundsLike | None = None) -> int:
        stage = self._stages.start_stage(bounds)
        self._bus.flush()
        return stage

    def stop_spawning(self) -> None:
        self._scheduler.stop()

    def apply_hit(self, entity_id: EntityId, power: int | None = None) -> bool:
        hit = self._resolver.apply_hit(entity_id, power)
        self._bus.flush()
        return hit

    def spawn_once(self, bounds: BoundsLike | None = None) -> Entity | None:
        shroom = self._scheduler.spawn_once(bounds)
        self._bus.flush()
        return shroom

    def miss(self) -> None:
        """A click that landed on the arena instead of a mushroom."""
        host = self._binding.host
        record_miss(host)
        adjust_score(host, -self._config.miss_penalty)
        self._bus.publish(MISSED, miss_count=host.get_state().miss_count)
        self._bus.flush()

    def summary(self) -> StageSummary:
        return self._stages.summary()

    def reset(self) -> None:
        self._stages.reset()
        self._bus.flush()

    def advance(self, ms: int) -> None:
        self._engine.advance(ms)
