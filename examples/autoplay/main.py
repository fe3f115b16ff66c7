"""Autoplay - headless Smooshrooms run with a simulated player.

A bot reacts to every spawned mushroom after a short human-ish delay and
either smooshes it or clicks the arena and misses. Stages are played back to
back on virtual time, so a full run finishes in well under a second.

Run:
    uv run python examples/autoplay/main.py
    uv run python examples/autoplay/main.py --seed 7 --stages 5 --accuracy 0.6
    uv run python examples/autoplay/main.py --verbose
"""
from __future__ import annotations

import argparse
import sys

from loguru import logger

from smoosh_tick import Engine
from smooshrooms import Game, GameState, GameStore, StageSummary
from smooshrooms.signals import SPAWNED

REACTION_MS = (250, 2500)
STAGE_TIMEOUT_MS = 600_000


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Smooshrooms autoplay demo")
    p.add_argument("--seed", type=int, default=42, help="Random seed (default: 42)")
    p.add_argument("--stages", type=int, default=3, help="Stages to play (default: 3)")
    p.add_argument("--accuracy", type=float, default=0.8,
                   help="Chance a reaction lands on the mushroom (0-1, default: 0.8)")
    p.add_argument("--verbose", action="store_true", help="Log every spawn and hit")
    args = p.parse_args()
    args.stages = max(1, args.stages)
    args.accuracy = max(0.0, min(1.0, args.accuracy))
    return args


class Player:
    """Clicks each new mushroom once, after a random reaction delay."""

    def __init__(self, game: Game, accuracy: float) -> None:
        self.game = game
        self.accuracy = accuracy
        self.clicks = 0
        game.bus.subscribe(SPAWNED, self._on_spawned)

    def _on_spawned(self, signal_name: str, data: dict) -> None:
        rng = self.game.engine.random
        delay = rng.randint(*REACTION_MS)
        entity_id = data["entity_id"]
        self.game.engine.schedule(delay, lambda: self._click(entity_id), name="player")

    def _click(self, entity_id: str) -> None:
        # The mushroom may have expired while we were reacting
        if self.game.state.find(entity_id) is None:
            return
        self.clicks += 1
        if self.game.engine.random.random() < self.accuracy:
            self.game.apply_hit(entity_id)
        else:
            self.game.miss()


def main() -> None:
    args = parse_args()

    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if args.verbose else "INFO")
    logger.enable("smooshrooms")

    summaries: list[StageSummary] = []
    store = GameStore(GameState(), on_stage_complete=summaries.append)
    game = Game(Engine(seed=args.seed), store)
    player = Player(game, args.accuracy)

    for _ in range(args.stages):
        played = len(summaries)
        game.start_stage()
        elapsed = 0
        while len(summaries) == played and elapsed < STAGE_TIMEOUT_MS:
            game.advance(1000)
            elapsed += 1000
        if len(summaries) == played:
            logger.error("Stage {} did not finish within {} ms", store.get_state().stage, elapsed)
            sys.exit(1)

    print(f"\n{'stage':>5} {'smooshed':>9} {'missed':>7} {'score':>6} {'total':>6}")
    for s in summaries:
        print(f"{s.stage:>5} {s.smooshed:>9} {s.missed:>7} {s.stage_score:>6} {s.projected_total:>6}")
    print(f"\nseed={args.seed} clicks={player.clicks} final score={summaries[-1].projected_total}")


if __name__ == "__main__":
    main()
