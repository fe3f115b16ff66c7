"""Tests for GameState lookups, the in-memory host and bounds resolution."""
import math

import pytest

from smooshrooms import (
    Bounds,
    GameState,
    GameStore,
    HostBinding,
    InvalidBoundsError,
    NotConfiguredError,
    UnknownEntityError,
    resolve_bounds,
)
from smooshrooms.entity import Entity, Kind


def _shroom(entity_id: str, slot: int | None = 0) -> Entity:
    return Entity(
        id=entity_id,
        name="BasicShroom",
        kind=Kind.STATIONARY,
        hit_points=1,
        despawn_delay_ms=3000,
        slot=slot,
    )


class TestGameState:
    def test_defaults(self):
        state = GameState()
        assert state.shrooms == []
        assert state.shrooms_remaining == 25
        assert state.stage == 0
        assert state.smoosh_power == 1

    def test_entity_lookup(self):
        state = GameState(shrooms=[_shroom("A"), _shroom("B", slot=3)])
        assert state.entity("B").slot == 3
        assert state.find("Z") is None

    def test_unknown_entity_raises(self):
        with pytest.raises(UnknownEntityError) as excinfo:
            GameState().entity("nope")
        assert excinfo.value.entity_id == "nope"
        assert isinstance(excinfo.value, KeyError)

    def test_taken_slots_ignores_mobile(self):
        state = GameState(shrooms=[_shroom("A", 1), _shroom("B", None), _shroom("C", 4)])
        assert state.taken_slots() == frozenset({1, 4})
        assert state.live_ids() == frozenset({"A", "B", "C"})


class TestGameStore:
    def test_apply_patch_merges(self):
        store = GameStore()
        store.apply_patch({"stage_score": 3, "miss_count": 1})
        state = store.get_state()
        assert state.stage_score == 3
        assert state.miss_count == 1
        assert state.total_score == 0

    def test_apply_patch_rejects_unknown_fields(self):
        store = GameStore()
        with pytest.raises(ValueError, match="spinDeg"):
            store.apply_patch({"spinDeg": 360})

    def test_optional_capabilities(self):
        calls = []
        store = GameStore(on_stage_complete=calls.append, bounds=(800, 600))
        assert store.get_bounds() == (800, 600)
        store.on_stage_complete("done")
        assert calls == ["done"]


class TestHostBinding:
    def test_unbound_raises_not_configured(self):
        binding = HostBinding()
        assert binding.bound is False
        with pytest.raises(NotConfiguredError, match="configure"):
            binding.host

    def test_bind(self):
        store = GameStore()
        binding = HostBinding()
        binding.bind(store)
        assert binding.bound
        assert binding.state() is store.get_state()


class TestBounds:
    @pytest.mark.parametrize(
        "width,height", [(math.nan, 10), (10, math.inf), (0, 10), (-5, 10), ("wide", 10)]
    )
    def test_invalid_bounds_raise(self, width, height):
        with pytest.raises(InvalidBoundsError):
            Bounds(width, height)

    def test_resolve_accepts_mapping_and_tuple(self):
        default = (1024.0, 768.0)
        assert resolve_bounds({"width": 640, "height": 480}, default) == Bounds(640, 480)
        assert resolve_bounds((300, 200), default) == Bounds(300, 200)

    def test_resolve_passes_bounds_through(self):
        bounds = Bounds(10, 20)
        assert resolve_bounds(bounds, (1, 1)) is bounds

    @pytest.mark.parametrize(
        "raw", [None, {"width": math.nan, "height": 480}, {"height": 480}, (1, 2, 3), 42]
    )
    def test_resolve_falls_back_to_default(self, raw):
        assert resolve_bounds(raw, (1024, 768)) == Bounds(1024, 768)
