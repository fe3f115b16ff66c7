"""Entity model: spawned mushrooms and the rules for constructing them."""
from __future__ import annotations

import math
import random as _random_mod
import string
from collections.abc import Collection
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable

from smooshrooms.arena import Bounds
from smooshrooms.config import GameConfig
from smooshrooms.types import EntityId

if TYPE_CHECKING:
    from smooshrooms.species import Species

_BASE36 = string.digits + string.ascii_uppercase


class Kind(str, Enum):
    STATIONARY = "stationary"
    MOBILE = "mobile"


@dataclass
class Axis:
    """Movement along one axis. ``max`` is the furthest reachable coordinate."""

    speed: int
    positive: bool
    coordinate: float
    max: float


@dataclass
class Movement:
    x: Axis
    y: Axis


@dataclass
class Entity:
    """A spawned mushroom.

    Stationary entities occupy a ``slot``; mobile ones carry a ``movement``
    profile instead. Only the combat resolver changes an entity after it is
    created, and it does so by replacing it in the collection.
    """

    id: EntityId
    name: str
    kind: Kind
    hit_points: int
    despawn_delay_ms: int
    img: int = 1
    slot: int | None = None
    movement: Movement | None = None
    disabled: bool = False

    @property
    def defeated(self) -> bool:
        return self.hit_points <= 0


@dataclass(frozen=True)
class SpawnContext:
    """Where a new entity may go: occupied slots and the arena size."""

    taken: frozenset[int]
    bounds: Bounds


def _is_finite(value: Any) -> bool:
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and math.isfinite(value)
    )


def _to_base36(n: int) -> str:
    if n == 0:
        return "0"
    digits = []
    while n:
        n, rem = divmod(n, 36)
        digits.append(_BASE36[rem])
    return "".join(reversed(digits))


def find_open_slot(
    taken: Collection[int], rng: _random_mod.Random, slot_count: int = 10
) -> int:
    """Pick a free slot uniformly; when every slot is taken, pick any slot."""
    every = range(slot_count)
    available = [n for n in every if n not in taken]
    return rng.choice(available or list(every))


def initial_movement(
    bounds: Bounds, footprint: tuple[float, float], rng: _random_mod.Random
) -> Movement:
    """Random speed 1..4 and sign per axis, starting fully inside the arena."""

    def axis(extent: float, size: float) -> Axis:
        reach = max(0.0, extent - size)
        return Axis(
            speed=rng.randint(1, 4),
            positive=rng.random() > 0.5,
            coordinate=rng.random() * reach,
            max=reach,
        )

    foot_w, foot_h = footprint
    return Movement(x=axis(bounds.width, foot_w), y=axis(bounds.height, foot_h))


class EntityFactory:
    """Builds entities from species descriptors.

    Ids combine the virtual clock, a per-factory serial and a random suffix,
    so an id is never issued twice by the same factory.
    """

    def __init__(
        self,
        rng: _random_mod.Random,
        clock: Callable[[], int],
        config: GameConfig | None = None,
    ) -> None:
        self._rng = rng
        self._clock = clock
        self._config = config or GameConfig()
        self._serial = 0

    def generate_id(self) -> EntityId:
        self._serial += 1
        suffix = "".join(self._rng.choice(_BASE36) for _ in range(6))
        return f"{_to_base36(self._clock())}{_to_base36(self._serial)}{suffix}"

    def create(
        self,
        descriptor: Species,
        context: SpawnContext,
        live_ids: Collection[EntityId] = (),
    ) -> Entity:
        cfg = self._config
        entity_id = self.generate_id()
        while entity_id in live_ids:
            entity_id = self.generate_id()

        hit_points = (
            int(descriptor.hit_points)
            if _is_finite(descriptor.hit_points)
            else cfg.default_hit_points
        )
        despawn_delay_ms = (
            int(descriptor.despawn_delay_ms)
            if _is_finite(descriptor.despawn_delay_ms)
            else cfg.default_despawn_ms
        )

        slot: int | None = None
        movement: Movement | None = None
        if descriptor.kind is Kind.MOBILE:
            movement = initial_movement(context.bounds, cfg.footprint, self._rng)
        elif _is_finite(descriptor.slot):
            slot = int(descriptor.slot)
        else:
            slot = find_open_slot(context.taken, self._rng, cfg.slot_count)

        return Entity(
            id=entity_id,
            name=descriptor.name,
            kind=descriptor.kind,
            hit_points=hit_points,
            despawn_delay_ms=despawn_delay_ms,
            img=descriptor.img,
            slot=slot,
            movement=movement,
        )
