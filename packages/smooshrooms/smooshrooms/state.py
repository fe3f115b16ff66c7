"""GameState, the host capability it lives behind, and an in-memory host.

API rule: the host owns the ``GameState`` record, but only the core writes to
it, and only through ``Host.apply_patch``. Presentation code reads state and
raises intents (hit, miss, next stage) through ``smooshrooms.Game``; it must
never assign state fields or edit entities in place. Nothing in the language
enforces this, the invariants (score floors, quota accounting, unique ids)
depend on it.
"""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from typing import Any, Callable, Protocol

from smooshrooms.arena import BoundsLike
from smooshrooms.entity import Entity
from smooshrooms.types import EntityId, NotConfiguredError, UnknownEntityError


@dataclass
class GameState:
    shrooms: list[Entity] = field(default_factory=list)
    shrooms_remaining: int = 25
    stage_score: int = 0
    total_score: int = 0
    smooshed_count: int = 0
    miss_count: int = 0
    stage: int = 0
    smoosh_power: int = 1

    def find(self, entity_id: EntityId) -> Entity | None:
        for shroom in self.shrooms:
            if shroom.id == entity_id:
                return shroom
        return None

    def entity(self, entity_id: EntityId) -> Entity:
        shroom = self.find(entity_id)
        if shroom is None:
            raise UnknownEntityError(entity_id, f"No shroom with id {entity_id!r}")
        return shroom

    def taken_slots(self) -> frozenset[int]:
        return frozenset(s.slot for s in self.shrooms if s.slot is not None)

    def live_ids(self) -> frozenset[EntityId]:
        return frozenset(s.id for s in self.shrooms)


STATE_FIELDS = frozenset(f.name for f in fields(GameState))


class Host(Protocol):
    """What the core needs from its host.

    Hosts may also provide ``on_stage_complete(summary)`` and
    ``get_bounds()``; both are optional and looked up by name.
    """

    def get_state(self) -> GameState: ...

    def apply_patch(self, patch: Mapping[str, Any]) -> None: ...


class GameStore:
    """Default in-memory host. ``apply_patch`` merges a partial update."""

    def __init__(
        self,
        state: GameState | None = None,
        on_stage_complete: Callable[[Any], None] | None = None,
        bounds: BoundsLike | None = None,
    ) -> None:
        self._state = state if state is not None else GameState()
        self.on_stage_complete = on_stage_complete
        self._bounds = bounds

    def get_state(self) -> GameState:
        return self._state

    def apply_patch(self, patch: Mapping[str, Any]) -> None:
        unknown = set(patch) - STATE_FIELDS
        if unknown:
            raise ValueError(f"Unknown GameState fields: {sorted(unknown)}")
        for name, value in patch.items():
            setattr(self._state, name, value)

    def get_bounds(self) -> BoundsLike | None:
        return self._bounds


class HostBinding:
    """Late-bound reference to the host shared by every core component."""

    def __init__(self, host: Host | None = None) -> None:
        self._host = host

    def bind(self, host: Host) -> None:
        self._host = host

    @property
    def bound(self) -> bool:
        return self._host is not None

    @property
    def host(self) -> Host:
        if self._host is None:
            raise NotConfiguredError(
                "smooshrooms core not configured. Call configure(host) first."
            )
        return self._host

    def state(self) -> GameState:
        return self.host.get_state()
