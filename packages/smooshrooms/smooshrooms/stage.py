"""Stage controller: quota resets, stage advance and stage completion."""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from loguru import logger

from smooshrooms.arena import Bounds, BoundsLike, resolve_bounds
from smooshrooms.config import GameConfig
from smooshrooms.signals import STAGE_COMPLETE, STAGE_STARTED, SignalBus

if TYPE_CHECKING:
    from smooshrooms.combat import CombatResolver
    from smooshrooms.scheduler import SpawnScheduler
    from smooshrooms.state import Host, HostBinding


@dataclass(frozen=True)
class StageSummary:
    stage: int
    smooshed: int
    missed: int
    stage_score: int
    total_score: int

    @property
    def projected_total(self) -> int:
        """Total once this stage's score rolls over on the next start."""
        return self.total_score + self.stage_score


class StageController:
    """Owns the transitions between stages.

    Completion is an edge, reported once when the quota reaches zero. State
    is left untouched until the host explicitly starts the next stage.
    """

    def __init__(
        self,
        binding: HostBinding,
        scheduler: SpawnScheduler,
        resolver: CombatResolver,
        bus: SignalBus,
        config: GameConfig | None = None,
    ) -> None:
        self._binding = binding
        self._scheduler = scheduler
        self._resolver = resolver
        self._bus = bus
        self._config = config or GameConfig()
        resolver.on_quota_exhausted = self.complete_stage

    def start_stage(self, bounds: BoundsLike | None = None) -> int:
        self._scheduler.stop()
        self._resolver.reset()

        host = self._binding.host
        state = host.get_state()
        stage = state.stage + 1
        host.apply_patch({
            "miss_count": 0,
            "smooshed_count": 0,
            "total_score": state.total_score + state.stage_score,
            "stage_score": 0,
            "shrooms_remaining": self._config.stage_quota,
            "stage": stage,
            "shrooms": [],
        })

        self._scheduler.start(self._arena(host, bounds))
        logger.info("Stage {} started with a quota of {}", stage, self._config.stage_quota)
        self._bus.publish(STAGE_STARTED, stage=stage)
        return stage

    def complete_stage(self) -> StageSummary:
        self._scheduler.stop()
        summary = self.summary()
        logger.info(
            "Stage {} complete: {} smooshed, {} missed, score {}",
            summary.stage,
            summary.smooshed,
            summary.missed,
            summary.stage_score,
        )
        self._bus.publish(STAGE_COMPLETE, summary=summary)
        return summary

    def summary(self) -> StageSummary:
        state = self._binding.state()
        return StageSummary(
            stage=state.stage,
            smooshed=state.smooshed_count,
            missed=state.miss_count,
            stage_score=state.stage_score,
            total_score=state.total_score,
        )

    def reset(self) -> None:
        """Stop play and zero every counter. The stage number is kept."""
        self._scheduler.stop()
        self._resolver.reset()
        self._binding.host.apply_patch({
            "shrooms": [],
            "shrooms_remaining": self._config.stage_quota,
            "stage_score": 0,
            "total_score": 0,
            "smooshed_count": 0,
            "miss_count": 0,
        })
        logger.info("Game state reset")

    def _arena(self, host: Host, bounds: BoundsLike | None) -> Bounds:
        if bounds is None:
            get_bounds = getattr(host, "get_bounds", None)
            if callable(get_bounds):
                bounds = get_bounds()
        return resolve_bounds(bounds, self._config.default_bounds)
