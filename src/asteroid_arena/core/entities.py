# src/asteroid_arena/core/entities.py

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Union, TYPE_CHECKING
import numpy as np

from .timers import Countdown
from asteroid_arena.utils.physics_utils import clamp01, random_velocity

if TYPE_CHECKING:
    from .config import GameConfig


class EntityKind(str, Enum):
    SHIP = "ship"
    ASTEROID = "asteroid"
    PLAYER_BULLET = "player_bullet"
    ENEMY_BULLET = "enemy_bullet"
    SAUCER = "saucer"


class AsteroidSize(str, Enum):
    LARGE = "LARGE"
    MEDIUM = "MEDIUM"
    SMALL = "SMALL"

    @property
    def child(self) -> "AsteroidSize | None":
        """Next-smaller size produced by a split, or None for SMALL."""
        return _CHILD_SIZE[self]


_CHILD_SIZE = {
    AsteroidSize.LARGE: AsteroidSize.MEDIUM,
    AsteroidSize.MEDIUM: AsteroidSize.SMALL,
    AsteroidSize.SMALL: None,
}


class SaucerKind(str, Enum):
    LARGE = "LARGE"
    SMALL = "SMALL"


# --------- Per-kind payloads ---------

@dataclass
class ShipState:
    heading: float                # degrees
    fire_cooldown: Countdown = field(default_factory=Countdown)
    hyperspace_cooldown: Countdown = field(default_factory=Countdown)
    invulnerability: Countdown = field(default_factory=Countdown)
    thrusting: bool = False

    @property
    def invulnerable(self) -> bool:
        return self.invulnerability.active


@dataclass
class AsteroidState:
    size: AsteroidSize
    spin: float                   # degrees/frame
    heading: float = 0.0


@dataclass
class BulletState:
    ttl: Countdown
    owner_id: int | None = None


@dataclass
class SaucerState:
    kind: SaucerKind
    accuracy: float
    ttl: Countdown
    fire_cooldown: Countdown = field(default_factory=Countdown)
    left_to_right: bool = True


Payload = Union[ShipState, AsteroidState, BulletState, SaucerState]

_PAYLOAD_TYPES = {
    EntityKind.SHIP: ShipState,
    EntityKind.ASTEROID: AsteroidState,
    EntityKind.PLAYER_BULLET: BulletState,
    EntityKind.ENEMY_BULLET: BulletState,
    EntityKind.SAUCER: SaucerState,
}


@dataclass
class Entity:
    """
    A simulated object in the arena.

    The `kind` tag selects the payload type in `data`, the update behavior and
    the collision rules that apply. `alive` flips to False when the entity is
    marked defunct; it stays registered until the arena reaps it at frame end.
    """
    kind: EntityKind
    pos: np.ndarray               # shape (2,)
    vel: np.ndarray               # shape (2,)
    radius: float
    data: Payload
    id: int | None = None
    age: int = 0
    alive: bool = True

    def __post_init__(self):
        if self.radius <= 0:
            raise ValueError(f"{self.kind.value} radius must be positive, got {self.radius}")
        expected = _PAYLOAD_TYPES[self.kind]
        if not isinstance(self.data, expected):
            raise TypeError(f"{self.kind.value} needs a {expected.__name__} payload, got {type(self.data).__name__}")

    @property
    def heading(self) -> float:
        return float(getattr(self.data, "heading", 0.0))

    @property
    def is_bullet(self) -> bool:
        return self.kind in (EntityKind.PLAYER_BULLET, EntityKind.ENEMY_BULLET)


# --------- Factories ---------

def _vec(v) -> np.ndarray:
    return np.array(v, dtype=float).reshape(2)


def random_spin(gen: np.random.Generator, cfg: "GameConfig") -> float:
    """Spin uniform in the configured range, pushed out to the magnitude floor."""
    spin = float(gen.uniform(*cfg.asteroid.spin_range))
    floor = cfg.asteroid.min_spin
    if abs(spin) < floor:
        spin = -floor if spin < 0 else floor
    return spin


def create_ship(pos, cfg: "GameConfig", invulnerable_frames: int | None = None) -> Entity:
    state = ShipState(heading=cfg.ship.spawn_heading)
    frames = cfg.invulnerability_frames if invulnerable_frames is None else invulnerable_frames
    state.invulnerability.start(frames)
    return Entity(
        kind=EntityKind.SHIP,
        pos=_vec(pos),
        vel=np.zeros(2),
        radius=cfg.ship.radius,
        data=state,
    )


def create_asteroid(
    pos,
    size: AsteroidSize,
    cfg: "GameConfig",
    gen: np.random.Generator,
    vel=None,
) -> Entity:
    """Asteroid with a random drift from its size's speed range unless `vel` is given."""
    size = AsteroidSize(size)
    if vel is None:
        vel = random_velocity(gen, cfg.asteroid.speed_range[size.value])
    return Entity(
        kind=EntityKind.ASTEROID,
        pos=_vec(pos),
        vel=_vec(vel),
        radius=cfg.asteroid.radius[size.value],
        data=AsteroidState(
            size=size,
            spin=random_spin(gen, cfg),
            heading=float(gen.uniform(0.0, 360.0)),
        ),
    )


def create_player_bullet(pos, vel, cfg: "GameConfig", owner_id: int | None = None) -> Entity:
    return Entity(
        kind=EntityKind.PLAYER_BULLET,
        pos=_vec(pos),
        vel=_vec(vel),
        radius=cfg.bullet.player_radius,
        data=BulletState(ttl=Countdown(cfg.bullet.player_ttl), owner_id=owner_id),
    )


def create_enemy_bullet(pos, vel, cfg: "GameConfig", owner_id: int | None = None) -> Entity:
    return Entity(
        kind=EntityKind.ENEMY_BULLET,
        pos=_vec(pos),
        vel=_vec(vel),
        radius=cfg.bullet.enemy_radius,
        data=BulletState(ttl=Countdown(cfg.bullet.enemy_ttl), owner_id=owner_id),
    )


def saucer_fire_interval(gen: np.random.Generator, cfg: "GameConfig") -> int:
    lo, hi = cfg.saucer.fire_interval
    return int(gen.integers(lo, hi + 1))


def create_saucer(
    kind: SaucerKind,
    accuracy: float,
    cfg: "GameConfig",
    gen: np.random.Generator,
    left_to_right: bool | None = None,
) -> Entity:
    """
    Saucer entering from the left or right edge at a random height, drifting
    horizontally toward the far side.
    """
    kind = SaucerKind(kind)
    sc = cfg.saucer
    if left_to_right is None:
        left_to_right = bool(gen.integers(0, 2))
    x = 1.0 if left_to_right else cfg.width - 2.0
    span = max(1, int(cfg.height - 2 * sc.entry_margin))
    y = sc.entry_margin + float(gen.integers(0, span))
    vx = sc.speed_x if left_to_right else -sc.speed_x
    vy = float(gen.uniform(-sc.drift_y, sc.drift_y))

    state = SaucerState(
        kind=kind,
        accuracy=clamp01(accuracy),
        ttl=Countdown(sc.ttl),
        left_to_right=left_to_right,
    )
    state.fire_cooldown.start(saucer_fire_interval(gen, cfg))
    return Entity(
        kind=EntityKind.SAUCER,
        pos=_vec((x, y)),
        vel=_vec((vx, vy)),
        radius=sc.radius[kind.value],
        data=state,
    )
