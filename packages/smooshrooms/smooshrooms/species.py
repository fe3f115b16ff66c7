"""Species descriptors and the per-stage spawn table."""
from __future__ import annotations

import random as _random_mod
from dataclasses import dataclass

from smooshrooms.entity import Kind


@dataclass(frozen=True)
class Species:
    """Spawn descriptor. ``None`` fields fall back to configured defaults."""

    name: str
    img: int = 1
    kind: Kind = Kind.STATIONARY
    hit_points: float | None = None
    despawn_delay_ms: float | None = None
    slot: int | None = None


BASIC_SHROOM = Species(name="BasicShroom", img=1, hit_points=1)
TUFF_SHROOM = Species(name="TuffShroom", img=2, hit_points=2)
SKITTER_SHROOM = Species(
    name="SkitterShroom",
    img=3,
    kind=Kind.MOBILE,
    hit_points=1,
    despawn_delay_ms=10000,
)

# Stage number (1-indexed) -> equally weighted pool.
STAGE_SPECIES: dict[int, tuple[Species, ...]] = {
    1: (BASIC_SHROOM,),
    2: (BASIC_SHROOM, TUFF_SHROOM),
    3: (SKITTER_SHROOM,),
}
DEFAULT_POOL: tuple[Species, ...] = (BASIC_SHROOM,)


def species_for_stage(stage: int, rng: _random_mod.Random) -> Species:
    pool = STAGE_SPECIES.get(stage, DEFAULT_POOL)
    if len(pool) == 1:
        return pool[0]
    return rng.choice(pool)
