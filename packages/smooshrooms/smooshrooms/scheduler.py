"""Spawn scheduler: a self-rearming one-shot timer that feeds the arena."""
from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

from loguru import logger

from smooshrooms.arena import Bounds, BoundsLike, resolve_bounds
from smooshrooms.config import GameConfig
from smooshrooms.entity import Entity, EntityFactory, SpawnContext
from smooshrooms.signals import SPAWNED, SignalBus
from smooshrooms.species import species_for_stage

if TYPE_CHECKING:
    from smoosh_tick import Engine, TimerId

    from smooshrooms.combat import CombatResolver
    from smooshrooms.state import HostBinding


class SchedulerState(str, Enum):
    IDLE = "idle"
    SCHEDULED = "scheduled"
    STOPPED = "stopped"


class SpawnScheduler:
    """Creates entities at random intervals until the stage quota runs out.

    At most one spawn timer is outstanding at any time: ``start`` and ``stop``
    both cancel the current one before doing anything else.
    """

    def __init__(
        self,
        binding: HostBinding,
        engine: Engine,
        resolver: CombatResolver,
        bus: SignalBus,
        config: GameConfig | None = None,
    ) -> None:
        self._binding = binding
        self._engine = engine
        self._resolver = resolver
        self._bus = bus
        self._config = config or GameConfig()
        self._factory = EntityFactory(engine.random, lambda: engine.now_ms, self._config)
        self._state = SchedulerState.IDLE
        self._timer_id: TimerId | None = None
        self._bounds = Bounds(*self._config.default_bounds)

    @property
    def state(self) -> SchedulerState:
        return self._state

    @property
    def bounds(self) -> Bounds:
        return self._bounds

    @property
    def armed(self) -> bool:
        return self._engine.timers.active(self._timer_id)

    def start(self, bounds: Bounds | None = None) -> None:
        self._cancel()
        if bounds is not None:
            self._bounds = bounds
        self._state = SchedulerState.SCHEDULED
        self._arm()

    def stop(self) -> None:
        self._cancel()
        self._state = SchedulerState.STOPPED

    def spawn_once(self, bounds: BoundsLike | None = None) -> Entity | None:
        """Insert one entity now, or return None when capacity says no."""
        host = self._binding.host
        state = host.get_state()
        cfg = self._config

        live = len(state.shrooms)
        if live >= cfg.max_live or live >= state.shrooms_remaining:
            logger.debug(
                "Spawn skipped: {} live, {} remaining", live, state.shrooms_remaining
            )
            return None

        species = species_for_stage(state.stage, self._engine.random)
        arena = (
            resolve_bounds(bounds, cfg.default_bounds)
            if bounds is not None
            else self._bounds
        )
        context = SpawnContext(taken=state.taken_slots(), bounds=arena)
        shroom = self._factory.create(species, context, state.live_ids())

        host.apply_patch({"shrooms": [*state.shrooms, shroom]})
        self._resolver.arm_expiry(shroom)
        self._bus.publish(
            SPAWNED, entity_id=shroom.id, name=shroom.name, kind=shroom.kind.value
        )
        return shroom

    def _cancel(self) -> None:
        self._engine.cancel(self._timer_id)
        self._timer_id = None

    def _arm(self) -> None:
        if self._binding.state().shrooms_remaining <= 0:
            self._state = SchedulerState.STOPPED
            return
        low, high = self._config.spawn_delay_ms
        delay = int(low + self._engine.random.random() * (high - low))
        self._timer_id = self._engine.schedule(delay, self._fire, name="spawn")

    def _fire(self) -> None:
        self._timer_id = None
        if self._state is not SchedulerState.SCHEDULED:
            return
        if self._binding.state().shrooms_remaining > 0:
            self.spawn_once()
        self._arm()
