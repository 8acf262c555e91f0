# src/asteroid_arena/core/spawning.py

from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, TYPE_CHECKING
import logging
import math
import numpy as np

from .entities import (
    AsteroidSize,
    Entity,
    EntityKind,
    SaucerKind,
    create_asteroid,
    create_saucer,
    create_ship,
)
from .timers import Countdown

if TYPE_CHECKING:
    from .arena import Arena
    from .config import GameConfig

logger = logging.getLogger(__name__)


@dataclass
class SpawnPlanner:
    """
    Decides how many asteroids a wave gets and where new entities appear.

    Placement never blocks: the safe search degrades to the last sample
    tried when nothing far enough from the ship turns up.
    """
    config: GameConfig
    saucer_timer: Countdown = field(default_factory=Countdown)

    # --------- Budgets ---------

    def wave_budget(self, wave: int) -> int:
        """Large-asteroid count for `wave` (1-based), growing geometrically."""
        cfg = self.config
        # halves round up
        budget = max(1, int(math.floor(cfg.base_large_count * cfg.wave_growth ** (wave - 1) + 0.5)))
        return max(cfg.min_large_per_wave, budget)

    # --------- Safe placement ---------

    def is_safe(self, arena: Arena, pos: np.ndarray, radius: float | None = None) -> bool:
        ship = arena.first(EntityKind.SHIP)
        if ship is None:
            return True
        r = self.config.safe_spawn_radius if radius is None else radius
        delta = pos - ship.pos
        return float(delta @ delta) >= r * r

    def edge_candidates(self, arena: Arena, gen: np.random.Generator) -> List[np.ndarray]:
        """Top, bottom, left and right edges at a random coordinate, then one free point."""
        w, h = arena.width, arena.height
        return [
            np.array([gen.uniform(0.0, w), 0.0]),
            np.array([gen.uniform(0.0, w), h - 1.0]),
            np.array([0.0, gen.uniform(0.0, h)]),
            np.array([w - 1.0, gen.uniform(0.0, h)]),
            arena.sample_position(gen),
        ]

    def find_safe_position(
        self,
        arena: Arena,
        gen: np.random.Generator,
        seed_pos: np.ndarray | None = None,
    ) -> np.ndarray:
        """
        Random search for a point at least `safe_spawn_radius` from the ship.
        `seed_pos` is tried first; if every sample fails, the last one is used.
        """
        if seed_pos is not None and self.is_safe(arena, seed_pos):
            return np.asarray(seed_pos, dtype=float).copy()
        best = None if seed_pos is None else np.asarray(seed_pos, dtype=float).copy()
        for _ in range(self.config.safe_spawn_candidates):
            pos = arena.sample_position(gen)
            if self.is_safe(arena, pos):
                return pos
            best = pos
        logger.warning(
            "frame %d: no safe spawn point in %d samples; using an unsafe one",
            arena.frame, self.config.safe_spawn_candidates,
        )
        return best if best is not None else arena.center()

    def asteroid_position(self, arena: Arena, gen: np.random.Generator) -> np.ndarray:
        for pos in self.edge_candidates(arena, gen):
            if self.is_safe(arena, pos):
                return pos
        logger.debug("frame %d: edge candidates unsafe, falling back to random search", arena.frame)
        return self.find_safe_position(arena, gen)

    # --------- Spawning ---------

    def spawn_wave(self, arena: Arena, wave: int, gen: np.random.Generator) -> List[Entity]:
        n_large = self.wave_budget(wave)
        spawned = []
        for _ in range(n_large):
            pos = self.asteroid_position(arena, gen)
            asteroid = create_asteroid(pos, AsteroidSize.LARGE, self.config, gen)
            spawned.append(arena.add(asteroid, reason="wave"))
        return spawned

    def spawn_ship(self, arena: Arena, gen: np.random.Generator, reason: str = "spawn") -> Entity:
        """
        Ship at the arena center, or wherever the safe search lands.
        Existing ships are not checked here; the caller guarantees there is none.
        """
        pos = self.find_safe_position(arena, gen, seed_pos=arena.center())
        ship = create_ship(pos, self.config)
        return arena.add(ship, reason=reason)

    # --------- Saucer schedule ---------

    def small_saucer_probability(self, wave: int) -> float:
        sc = self.config.saucer
        p = sc.small_probability + sc.small_probability_per_wave * max(0, wave - 1)
        return min(sc.max_small_probability, p)

    def reset_saucer_timer(self) -> None:
        interval = self.config.saucer.spawn_interval
        if interval is None:
            self.saucer_timer.cancel()
        else:
            self.saucer_timer.start(interval)

    def tick_saucer(self, arena: Arena, wave: int, gen: np.random.Generator) -> Entity | None:
        """
        Run the optional saucer schedule for one frame. The countdown only
        runs while no saucer is alive; on expiry one saucer enters.
        """
        if self.config.saucer.spawn_interval is None:
            return None
        if arena.first(EntityKind.SAUCER) is not None:
            return None
        self.saucer_timer.tick()
        if not self.saucer_timer.expired():
            return None
        saucer = self.spawn_saucer(arena, wave, gen)
        self.reset_saucer_timer()
        return saucer

    def spawn_saucer(
        self,
        arena: Arena,
        wave: int,
        gen: np.random.Generator,
        kind: SaucerKind | None = None,
        accuracy: float | None = None,
    ) -> Entity:
        sc = self.config.saucer
        if kind is None:
            kind = SaucerKind.SMALL if gen.random() < self.small_saucer_probability(wave) else SaucerKind.LARGE
        if accuracy is None:
            accuracy = float(gen.uniform(*sc.accuracy_range))
        saucer = create_saucer(kind, accuracy, self.config, gen)
        logger.debug("frame %d: %s saucer enters (accuracy %.2f)", arena.frame, kind.value, accuracy)
        return arena.add(saucer, reason="saucer")
