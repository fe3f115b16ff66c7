"""Game configuration dataclass."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class GameConfig:
    """Immutable tuning for a stage.

    Attributes:
        stage_quota: Mushrooms to account for before a stage completes.
        max_live: Most entities alive in the arena at once.
        slot_count: Size of the stationary placement slot space.
        spawn_delay_ms: ``[low, high)`` range for the spawn re-arm delay.
        poof_delay_ms: Delay between defeat and removal of an entity.
        default_despawn_ms: Expiry delay when a species does not give one.
        default_hit_points: Hit points when a species does not give them.
        default_bounds: Arena ``(width, height)`` used when none is usable.
        footprint: Entity ``(width, height)`` kept inside the arena on spawn.
        smoosh_reward: Score added for each defeated entity.
        miss_penalty: Score removed for each miss click.
    """

    stage_quota: int = 25
    max_live: int = 10
    slot_count: int = 10
    spawn_delay_ms: tuple[int, int] = (1000, 4000)
    poof_delay_ms: int = 400
    default_despawn_ms: int = 3000
    default_hit_points: int = 1
    default_bounds: tuple[float, float] = (1024.0, 768.0)
    footprint: tuple[float, float] = (150.0, 100.0)
    smoosh_reward: int = 1
    miss_penalty: int = 1

    def __post_init__(self) -> None:
        if self.stage_quota <= 0:
            raise ValueError("stage_quota must be positive")
        if self.max_live <= 0:
            raise ValueError("max_live must be positive")
        if self.slot_count <= 0:
            raise ValueError("slot_count must be positive")
        low, high = self.spawn_delay_ms
        if low < 0 or high <= low:
            raise ValueError("spawn_delay_ms must be a non-negative [low, high) range")
        if self.poof_delay_ms < 0:
            raise ValueError("poof_delay_ms must not be negative")
        if self.default_despawn_ms < 0:
            raise ValueError("default_despawn_ms must not be negative")
        width, height = self.default_bounds
        if width <= 0 or height <= 0:
            raise ValueError("default_bounds must be positive")
