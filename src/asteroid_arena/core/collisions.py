# src/asteroid_arena/core/collisions.py

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Callable, Dict, Tuple, TYPE_CHECKING
import logging

from .arena import overlaps
from .entities import Entity, EntityKind
from .events import Explosion
from .split import SplitEngine

if TYPE_CHECKING:
    from .context import FrameContext

logger = logging.getLogger(__name__)

Reaction = Callable[[Entity, Entity, "FrameContext"], None]
Guard = Callable[[Entity, Entity, "FrameContext"], bool]

# burst sizes handed to the presentation layer
EXPLOSION_SCALE = {
    "LARGE": 20,
    "MEDIUM": 14,
    "SMALL": 10,
    "ship": 16,
    "saucer_LARGE": 18,
    "saucer_SMALL": 14,
    "saucer_rammed": 16,
}


@dataclass(frozen=True)
class InteractionRule:
    name: str
    kinds: Tuple[EntityKind, EntityKind]
    react: Reaction
    guard: Guard | None = None


def ship_vulnerable(other: Entity, ship: Entity, ctx: FrameContext) -> bool:
    return not ship.data.invulnerable


@dataclass
class CollisionResolver:
    """
    Applies the interaction rules, in priority order, to every overlapping pair.

    Rules are looked up by (kindA, kindB). Within one rule each entity reacts
    at most once, and an entity destroyed by an earlier rule (or earlier in the
    same rule) is skipped for the rest of the frame.
    """
    split_engine: SplitEngine
    rules: Tuple[InteractionRule, ...] = field(init=False)
    table: Dict[Tuple[EntityKind, EntityKind], InteractionRule] = field(init=False)

    def __post_init__(self):
        self.rules = (
            InteractionRule("player_bullet_vs_asteroid",
                            (EntityKind.PLAYER_BULLET, EntityKind.ASTEROID), self._bullet_hits_asteroid),
            InteractionRule("player_bullet_vs_saucer",
                            (EntityKind.PLAYER_BULLET, EntityKind.SAUCER), self._bullet_hits_saucer),
            InteractionRule("enemy_bullet_vs_ship",
                            (EntityKind.ENEMY_BULLET, EntityKind.SHIP), self._enemy_bullet_hits_ship,
                            guard=ship_vulnerable),
            InteractionRule("asteroid_vs_ship",
                            (EntityKind.ASTEROID, EntityKind.SHIP), self._asteroid_hits_ship,
                            guard=ship_vulnerable),
            InteractionRule("asteroid_vs_saucer",
                            (EntityKind.ASTEROID, EntityKind.SAUCER), self._asteroid_hits_saucer),
        )
        self.table = {rule.kinds: rule for rule in self.rules}

    def rule_for(self, kind_a: EntityKind, kind_b: EntityKind) -> InteractionRule | None:
        """Rule governing a pair of kinds in either order, or None if they pass through each other."""
        return self.table.get((kind_a, kind_b)) or self.table.get((kind_b, kind_a))

    # --------- Resolution ---------

    def can_collide(self, entity: Entity, ctx: FrameContext) -> bool:
        if not entity.alive:
            return False
        # age already includes this frame's update
        if entity.is_bullet and entity.age - 1 <= ctx.config.bullet.grace_frames:
            return False
        return True

    def resolve(self, ctx: FrameContext) -> int:
        """Run every rule once over the current field. Returns the number of reactions applied."""
        applied = 0
        for rule in self.rules:
            kind_a, kind_b = rule.kinds
            firsts = ctx.arena.live(kind_a)
            seconds = ctx.arena.live(kind_b)
            for a in firsts:
                if not self.can_collide(a, ctx):
                    continue
                for b in seconds:
                    if not self.can_collide(b, ctx) or not overlaps(a, b):
                        continue
                    if rule.guard is not None and not rule.guard(a, b, ctx):
                        continue
                    rule.react(a, b, ctx)
                    applied += 1
                    break
        return applied

    # --------- Reactions ---------

    def _explode(self, ctx: FrameContext, entity: Entity, key: str) -> None:
        ctx.emit(Explosion(frame=ctx.frame, pos=entity.pos.copy(), scale=EXPLOSION_SCALE[key]))

    def _bullet_hits_asteroid(self, bullet: Entity, asteroid: Entity, ctx: FrameContext) -> None:
        size = asteroid.data.size.value
        ctx.arena.remove(bullet, reason="hit")
        ctx.arena.remove(asteroid, reason="shot")
        ctx.progression.add_score(ctx.arena, ctx.config.asteroid.points[size], reason=f"asteroid_{size}")
        self.split_engine.split_into(ctx.arena, asteroid, bullet.vel, ctx.rng)
        self._explode(ctx, asteroid, size)

    def _bullet_hits_saucer(self, bullet: Entity, saucer: Entity, ctx: FrameContext) -> None:
        kind = saucer.data.kind.value
        ctx.arena.remove(bullet, reason="hit")
        ctx.arena.remove(saucer, reason="shot")
        ctx.progression.add_score(ctx.arena, ctx.config.saucer.points[kind], reason=f"saucer_{kind}")
        self._explode(ctx, saucer, f"saucer_{kind}")

    def _enemy_bullet_hits_ship(self, bullet: Entity, ship: Entity, ctx: FrameContext) -> None:
        ctx.arena.remove(bullet, reason="hit")
        self._destroy_ship(ship, ctx, reason="shot")

    def _asteroid_hits_ship(self, asteroid: Entity, ship: Entity, ctx: FrameContext) -> None:
        self._destroy_ship(ship, ctx, reason="rammed")

    def _asteroid_hits_saucer(self, asteroid: Entity, saucer: Entity, ctx: FrameContext) -> None:
        # no split and no score
        ctx.arena.remove(asteroid, reason="rammed")
        ctx.arena.remove(saucer, reason="rammed")
        self._explode(ctx, saucer, "saucer_rammed")

    def _destroy_ship(self, ship: Entity, ctx: FrameContext, reason: str) -> None:
        if ctx.arena.remove(ship, reason=reason):
            self._explode(ctx, ship, "ship")
            ctx.progression.on_ship_destroyed(ctx.arena)
