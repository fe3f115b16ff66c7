"""Combat resolver: damage, defeat, and every way an entity leaves play.

Each entity is counted against the stage quota exactly once, either when it
is defeated or when its own despawn timer expires, never both. Timer
callbacks re-check that their entity is still present before touching state,
so a timer that outlives a stage reset is a harmless no-op.
"""
from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING, Callable

from loguru import logger

from smooshrooms.config import GameConfig
from smooshrooms.ledger import adjust_score, decrement_remaining, record_smoosh
from smooshrooms.signals import DESPAWNED, HIT, SMOOSHED, SignalBus
from smooshrooms.types import EntityId, UnknownEntityError

if TYPE_CHECKING:
    from smoosh_tick import Engine, TimerId

    from smooshrooms.entity import Entity
    from smooshrooms.state import HostBinding


class CombatResolver:

    def __init__(
        self,
        binding: HostBinding,
        engine: Engine,
        bus: SignalBus,
        config: GameConfig | None = None,
    ) -> None:
        self._binding = binding
        self._engine = engine
        self._bus = bus
        self._config = config or GameConfig()
        self._expiry: dict[EntityId, TimerId] = {}
        self._poofs: dict[EntityId, TimerId] = {}
        self.on_quota_exhausted: Callable[[], None] | None = None

    def pending_timers(self) -> int:
        return len(self._expiry) + len(self._poofs)

    def apply_hit(self, entity_id: EntityId, power: int | None = None) -> bool:
        """Damage an entity. Returns False when the hit had no effect."""
        host = self._binding.host
        state = host.get_state()
        try:
            shroom = state.entity(entity_id)
        except UnknownEntityError:
            logger.warning("No shroom found by id {}", entity_id)
            return False
        if shroom.disabled:
            logger.debug("Ignoring hit on disabled shroom {}", entity_id)
            return False

        if power is None:
            power = state.smoosh_power
        if power < 0:
            raise ValueError("power must not be negative")

        hit_points = shroom.hit_points - power
        hit = replace(shroom, hit_points=hit_points, disabled=hit_points <= 0)
        host.apply_patch({
            "shrooms": [hit if s.id == entity_id else s for s in state.shrooms],
        })
        self._bus.publish(HIT, entity_id=entity_id, hit_points=hit_points)

        if hit.defeated:
            adjust_score(host, self._config.smoosh_reward)
            record_smoosh(host, 1)
            self._bus.publish(SMOOSHED, entity_id=entity_id, name=hit.name)
            self.resolve_despawn(entity_id)
        return True

    def resolve_despawn(self, entity_id: EntityId) -> None:
        """Take an entity out of play and count it against the quota.

        A still-standing entity leaves at once. A defeated one stays visible
        (disabled) for ``poof_delay_ms`` before it is removed.
        """
        host = self._binding.host
        shroom = host.get_state().find(entity_id)
        if shroom is None or entity_id in self._poofs:
            logger.debug("Shroom {} already resolved", entity_id)
            return

        self._engine.cancel(self._expiry.pop(entity_id, None))
        if shroom.hit_points > 0:
            self._remove(entity_id, reason="expired")
        else:
            self._schedule(
                self._poofs,
                self._config.poof_delay_ms,
                entity_id,
                "poof",
                lambda: self._remove(entity_id, reason="smooshed"),
            )

        if decrement_remaining(host) and self.on_quota_exhausted is not None:
            self.on_quota_exhausted()

    def expire(self, entity_id: EntityId) -> None:
        """Natural expiration: no score, no miss, one quota decrement."""
        shroom = self._binding.state().find(entity_id)
        if shroom is None:
            logger.debug("Despawn timer for {} fired after it left play", entity_id)
            return
        if shroom.disabled:
            return
        logger.debug("Shroom {} expired", entity_id)
        self.resolve_despawn(entity_id)

    def arm_expiry(self, shroom: Entity) -> None:
        self._schedule(
            self._expiry,
            shroom.despawn_delay_ms,
            shroom.id,
            "despawn",
            lambda: self.expire(shroom.id),
        )

    def reset(self) -> None:
        """Cancel every outstanding entity timer."""
        for timers in (self._expiry, self._poofs):
            for timer_id in timers.values():
                self._engine.cancel(timer_id)
            timers.clear()

    def _schedule(
        self,
        registry: dict[EntityId, TimerId],
        delay_ms: int,
        entity_id: EntityId,
        name: str,
        action: Callable[[], None],
    ) -> None:
        def fire() -> None:
            if registry.get(entity_id) == timer_id:
                del registry[entity_id]
            action()

        timer_id = self._engine.schedule(delay_ms, fire, name=name)
        registry[entity_id] = timer_id

    def _remove(self, entity_id: EntityId, reason: str) -> None:
        host = self._binding.host
        shrooms = host.get_state().shrooms
        remaining = [s for s in shrooms if s.id != entity_id]
        if len(remaining) == len(shrooms):
            return
        host.apply_patch({"shrooms": remaining})
        self._bus.publish(DESPAWNED, entity_id=entity_id, reason=reason)
