"""smooshrooms - Spawn scheduling, combat and stage flow for a whack-a-mushroom game."""

from loguru import logger

from smooshrooms.arena import Bounds, resolve_bounds
from smooshrooms.combat import CombatResolver
from smooshrooms.config import GameConfig
from smooshrooms.entity import Axis, Entity, EntityFactory, Kind, Movement, SpawnContext
from smooshrooms.game import Game
from smooshrooms.ledger import adjust_score, decrement_remaining, record_miss, record_smoosh
from smooshrooms.scheduler import SchedulerState, SpawnScheduler
from smooshrooms.signals import SignalBus, make_signal_system
from smooshrooms.species import STAGE_SPECIES, Species, species_for_stage
from smooshrooms.stage import StageController, StageSummary
from smooshrooms.state import GameState, GameStore, Host, HostBinding
from smooshrooms.types import (
    EntityId,
    InvalidBoundsError,
    NotConfiguredError,
    UnknownEntityError,
)

# Library code stays quiet until the host opts in with logger.enable("smooshrooms").
logger.disable("smooshrooms")

__all__ = [
    "Game",
    "GameConfig",
    "GameState",
    "GameStore",
    "Host",
    "HostBinding",
    "Bounds",
    "resolve_bounds",
    "Entity",
    "EntityFactory",
    "EntityId",
    "Kind",
    "Axis",
    "Movement",
    "SpawnContext",
    "Species",
    "STAGE_SPECIES",
    "species_for_stage",
    "SpawnScheduler",
    "SchedulerState",
    "CombatResolver",
    "StageController",
    "StageSummary",
    "SignalBus",
    "make_signal_system",
    "adjust_score",
    "record_miss",
    "record_smoosh",
    "decrement_remaining",
    "NotConfiguredError",
    "UnknownEntityError",
    "InvalidBoundsError",
]
