# src/asteroid_arena/core/split.py

from __future__ import annotations
from dataclasses import dataclass
from typing import List, TYPE_CHECKING
import numpy as np

from .entities import Entity, EntityKind, create_asteroid
from asteroid_arena.utils.physics_utils import normalize, random_velocity

if TYPE_CHECKING:
    from .arena import Arena
    from .config import GameConfig


@dataclass
class SplitEngine:
    """
    Turns a destroyed asteroid into its descendants.

    Each child gets three velocity contributions:
      1. a fresh random drift from the child size's speed range
      2. a separation kick of fixed magnitude along the impact direction,
         opposite signs for the two siblings
      3. a fraction of the parent's velocity
    """
    config: GameConfig

    def impact_normal(self, impact_vel: np.ndarray | None, gen: np.random.Generator) -> np.ndarray:
        """Unit impact direction; a uniformly random one when the impactor is (nearly) still."""
        n = normalize(impact_vel) if impact_vel is not None else None
        if n is None:
            ang = gen.uniform(0.0, 2 * np.pi)
            n = np.array([np.cos(ang), np.sin(ang)], dtype=float)
        return n

    def split(
        self,
        parent: Entity,
        impact_vel: np.ndarray | None,
        gen: np.random.Generator,
    ) -> List[Entity]:
        """
        Build (but do not register) the children of `parent`.

        SMALL asteroids, and anything that is not an asteroid, produce no children.
        """
        if parent.kind is not EntityKind.ASTEROID:
            return []
        child_size = parent.data.size.child
        if child_size is None:
            return []

        ac = self.config.asteroid
        n = self.impact_normal(impact_vel, gen)
        children: List[Entity] = []
        for sign in (1.0, -1.0):
            base = random_velocity(gen, ac.speed_range[child_size.value])
            kick = n * ac.split_impulse * sign
            vel = base + kick + parent.vel * ac.inherit_factor
            child = create_asteroid(parent.pos.copy(), child_size, self.config, gen, vel=vel)
            children.append(child)
        return children

    def split_into(
        self,
        arena: Arena,
        parent: Entity,
        impact_vel: np.ndarray | None,
        gen: np.random.Generator,
    ) -> List[Entity]:
        """Split `parent` and register the children in `arena`."""
        return [arena.add(child, reason="split") for child in self.split(parent, impact_vel, gen)]
