# src/asteroid_arena/core/behaviors.py

from __future__ import annotations
from typing import Callable, Dict, TYPE_CHECKING
import logging
import math
import numpy as np

from .entities import (
    Entity,
    EntityKind,
    create_enemy_bullet,
    create_player_bullet,
    saucer_fire_interval,
)
from asteroid_arena.utils.physics_utils import clamp_speed, heading_vector

if TYPE_CHECKING:
    from .context import FrameContext

logger = logging.getLogger(__name__)

UpdateFn = Callable[[Entity, "FrameContext"], None]


def update_entities(ctx: FrameContext) -> None:
    """
    Advance every live entity one frame.

    Iterates over a snapshot, so anything spawned during the pass (bullets)
    first moves on the next frame.
    """
    for entity in ctx.arena.live():
        if not entity.alive:
            continue
        UPDATERS[entity.kind](entity, ctx)


# --------- Ship ---------

def update_ship(ship: Entity, ctx: FrameContext) -> None:
    s = ship.data
    cfg = ctx.config.ship
    inputs = ctx.inputs

    if inputs.turn_left:
        s.heading = (s.heading - cfg.turn_rate) % 360.0
    if inputs.turn_right:
        s.heading = (s.heading + cfg.turn_rate) % 360.0

    s.thrusting = inputs.thrust
    if inputs.thrust:
        ship.vel += heading_vector(s.heading) * cfg.thrust

    s.fire_cooldown.tick()
    if inputs.fire and s.fire_cooldown.expired() and can_fire(ctx):
        fire_player_bullet(ship, ctx)
        s.fire_cooldown.start(cfg.fire_cooldown)

    s.hyperspace_cooldown.tick()
    if inputs.hyperspace and s.hyperspace_cooldown.expired():
        hyperspace(ship, ctx)
        s.hyperspace_cooldown.start(cfg.hyperspace_cooldown)

    ship.vel *= cfg.drag
    clamp_speed(ship.vel, cfg.max_speed)
    ship.pos += ship.vel

    s.invulnerability.tick()
    ship.age += 1


def can_fire(ctx: FrameContext) -> bool:
    return ctx.arena.count(EntityKind.PLAYER_BULLET) < ctx.config.ship.max_player_bullets


def fire_player_bullet(ship: Entity, ctx: FrameContext) -> Entity:
    """Spawn a bullet at the ship's nose carrying the ship's velocity."""
    direction = heading_vector(ship.data.heading)
    nose = ship.pos + direction * (ship.radius + ctx.config.ship.muzzle_offset)
    vel = ship.vel + direction * ctx.config.bullet.player_speed
    bullet = create_player_bullet(nose, vel, ctx.config, owner_id=ship.id)
    return ctx.arena.add(bullet, reason="fired")


def hyperspace(ship: Entity, ctx: FrameContext) -> None:
    """Teleport to a random point. Not guaranteed safe; a short shield covers the landing."""
    cfg = ctx.config.ship
    ship.pos = ctx.arena.sample_position(ctx.rng)
    ship.vel *= cfg.hyperspace_speed_retention
    ship.data.invulnerability.extend_to(cfg.hyperspace_invulnerability)
    logger.debug("frame %d: ship #%d hyperspace to (%.1f, %.1f)", ctx.frame, ship.id, *ship.pos)


# --------- Asteroid ---------

def update_asteroid(asteroid: Entity, ctx: FrameContext) -> None:
    asteroid.pos += asteroid.vel
    a = asteroid.data
    a.heading = (a.heading + a.spin) % 360.0
    asteroid.age += 1


# --------- Bullets ---------

def update_bullet(bullet: Entity, ctx: FrameContext) -> None:
    bullet.pos += bullet.vel
    bullet.age += 1
    if bullet.data.ttl.tick() or bullet.data.ttl.expired():
        ctx.arena.remove(bullet, reason="expired")


# --------- Saucer ---------

def update_saucer(saucer: Entity, ctx: FrameContext) -> None:
    s = saucer.data
    sc = ctx.config.saucer

    saucer.pos += saucer.vel
    if saucer.pos[1] < sc.vertical_margin or saucer.pos[1] > ctx.config.height - sc.vertical_margin:
        saucer.vel[1] = -saucer.vel[1]

    s.fire_cooldown.tick()
    if s.fire_cooldown.expired():
        fire_at_ship(saucer, ctx)
        s.fire_cooldown.start(saucer_fire_interval(ctx.rng, ctx.config))

    saucer.age += 1
    if s.ttl.tick():
        ctx.arena.remove(saucer, reason="expired")


def aim_noise_degrees(saucer: Entity, ctx: FrameContext) -> float:
    """noise = base_noise(kind) * (1 - accuracy)"""
    s = saucer.data
    return ctx.config.saucer.base_noise_deg[s.kind.value] * (1.0 - s.accuracy)


def fire_at_ship(saucer: Entity, ctx: FrameContext) -> Entity | None:
    ship = ctx.arena.first(EntityKind.SHIP)
    if ship is None:
        return None
    delta = ship.pos - saucer.pos
    angle = math.atan2(delta[1], delta[0])
    noise_deg = aim_noise_degrees(saucer, ctx)
    angle += math.radians(ctx.rng.uniform(-noise_deg, noise_deg))
    vel = np.array([math.cos(angle), math.sin(angle)]) * ctx.config.bullet.enemy_speed
    bullet = create_enemy_bullet(saucer.pos.copy(), vel, ctx.config, owner_id=saucer.id)
    return ctx.arena.add(bullet, reason="fired")


UPDATERS: Dict[EntityKind, UpdateFn] = {
    EntityKind.SHIP: update_ship,
    EntityKind.ASTEROID: update_asteroid,
    EntityKind.PLAYER_BULLET: update_bullet,
    EntityKind.ENEMY_BULLET: update_bullet,
    EntityKind.SAUCER: update_saucer,
}
