from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path
import logging
import math
import numpy as np

from asteroid_arena.core import Game, GameConfig, InputSignals, EntityKind, Phase
from asteroid_arena.utils.preset_loader import load_preset
from asteroid_arena.utils.random import make_rng

logger = logging.getLogger(__name__)


def load_config(preset: str | Path | None = None, overrides: dict | None = None) -> GameConfig:
    """Defaults, then the preset (with its includes), then explicit overrides."""
    cfg = GameConfig()
    if preset is not None:
        loaded = load_preset(preset)
        logger.info("preset %s resolved from %s", loaded.preset_path.name,
                    [p.name for p in loaded.loaded_files])
        cfg = GameConfig.from_dict(loaded.resolved)
    if overrides:
        cfg = cfg.with_overrides(overrides)
    return cfg


def make_game(config: GameConfig | None = None, seed: int | None = None, start: bool = False) -> Game:
    game = Game(config=config if config is not None else GameConfig(), rng=make_rng(seed, "game"))
    if start:
        game.start()
    return game


# --------- Automated pilots (stand-ins for keyboard polling) ---------

@dataclass
class IdlePilot:
    """Presses start whenever the game waits for it, otherwise does nothing."""
    _toggle: bool = False

    def __call__(self, game: Game) -> InputSignals:
        if game.progression.accepts_start:
            # release between presses so the start edge is seen again
            self._toggle = not self._toggle
            return InputSignals(start=self._toggle)
        return InputSignals()


@dataclass
class RandomPilot:
    """
    Turns toward the nearest asteroid, fires constantly, thrusts and jumps
    now and then. Draws from its own generator so the game's stream is
    unaffected by the pilot.
    """
    rng: np.random.Generator = field(default_factory=lambda: make_rng(None, "pilot"))
    thrust_probability: float = 0.15
    hyperspace_probability: float = 0.002
    aim_tolerance_deg: float = 6.0
    _start_toggle: bool = False

    def __call__(self, game: Game) -> InputSignals:
        if game.progression.accepts_start:
            self._start_toggle = not self._start_toggle
            return InputSignals(start=self._start_toggle)
        ship = game.ship
        if ship is None:
            return InputSignals()

        turn_left = turn_right = False
        target = game.arena.nearest(ship.pos, EntityKind.ASTEROID)
        if target is not None:
            delta = target.pos - ship.pos
            desired = math.degrees(math.atan2(delta[1], delta[0])) % 360.0
            diff = (desired - ship.data.heading + 180.0) % 360.0 - 180.0
            turn_left = diff < -self.aim_tolerance_deg
            turn_right = diff > self.aim_tolerance_deg

        return InputSignals(
            thrust=bool(self.rng.random() < self.thrust_probability),
            turn_left=turn_left,
            turn_right=turn_right,
            fire=game.phase is Phase.PLAYING,
            hyperspace=bool(self.rng.random() < self.hyperspace_probability),
        )


PILOTS = {
    "idle": IdlePilot,
    "random": RandomPilot,
}
