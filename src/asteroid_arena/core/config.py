# src/asteroid_arena/core/config.py

from __future__ import annotations
from dataclasses import dataclass, field, fields, is_dataclass, replace
import copy
from typing import Any, Mapping
import logging

logger = logging.getLogger(__name__)

SIZE_NAMES = ("LARGE", "MEDIUM", "SMALL")
SAUCER_NAMES = ("LARGE", "SMALL")


def _check_range(name: str, lo_hi: tuple[float, float]) -> None:
    lo, hi = lo_hi
    if lo > hi:
        raise ValueError(f"{name} range is inverted: ({lo}, {hi})")


def _check_table(name: str, table: Mapping[str, Any], keys: tuple[str, ...]) -> None:
    missing = [k for k in keys if k not in table]
    if missing:
        raise ValueError(f"{name} is missing entries for {missing}")


@dataclass
class ShipConfig:
    radius: float = 16.0
    thrust: float = 0.35          # px/frame^2
    drag: float = 0.992           # velocity multiplier per frame (1 = no drag)
    max_speed: float = 8.5        # px/frame
    turn_rate: float = 4.0        # degrees/frame
    spawn_heading: float = 270.0  # pointing up in y-down screen space
    fire_cooldown: int = 15
    max_player_bullets: int = 4
    muzzle_offset: float = 10.0   # beyond the hull radius
    hyperspace_cooldown: int = 120
    hyperspace_speed_retention: float = 0.3
    hyperspace_invulnerability: int = 24

    def __post_init__(self):
        if self.radius <= 0:
            raise ValueError("ship radius must be positive")
        if self.max_player_bullets < 0 or self.fire_cooldown < 0:
            raise ValueError("ship fire limits must be non-negative")


@dataclass
class AsteroidConfig:
    radius: dict[str, float] = field(default_factory=lambda: {"LARGE": 46.0, "MEDIUM": 28.0, "SMALL": 16.0})
    speed_range: dict[str, tuple[float, float]] = field(default_factory=lambda: {
        "LARGE": (1.2, 2.0),
        "MEDIUM": (1.8, 2.8),
        "SMALL": (2.3, 3.5),
    })
    points: dict[str, int] = field(default_factory=lambda: {"LARGE": 20, "MEDIUM": 50, "SMALL": 100})
    spin_range: tuple[float, float] = (-2.0, 2.0)  # degrees/frame
    min_spin: float = 0.2
    split_impulse: float = 1.2
    inherit_factor: float = 0.2

    def __post_init__(self):
        for name in ("radius", "speed_range", "points"):
            _check_table(f"asteroid {name}", getattr(self, name), SIZE_NAMES)
        self.speed_range = {k: tuple(v) for k, v in self.speed_range.items()}
        self.spin_range = tuple(self.spin_range)
        if any(r <= 0 for r in self.radius.values()):
            raise ValueError("asteroid radii must be positive")
        for k, v in self.speed_range.items():
            _check_range(f"asteroid {k} speed", v)
        _check_range("asteroid spin", self.spin_range)


@dataclass
class BulletConfig:
    player_radius: float = 4.0
    player_speed: float = 12.0
    player_ttl: int = 72
    enemy_radius: float = 3.0
    enemy_speed: float = 7.0
    enemy_ttl: int = 120
    grace_frames: int = 6

    def __post_init__(self):
        if self.player_radius <= 0 or self.enemy_radius <= 0:
            raise ValueError("bullet radii must be positive")


@dataclass
class SaucerConfig:
    radius: dict[str, float] = field(default_factory=lambda: {"LARGE": 20.0, "SMALL": 14.0})
    points: dict[str, int] = field(default_factory=lambda: {"LARGE": 200, "SMALL": 1000})
    base_noise_deg: dict[str, float] = field(default_factory=lambda: {"LARGE": 25.0, "SMALL": 8.0})
    speed_x: float = 3.0
    drift_y: float = 0.8
    ttl: int = 12 * 60
    fire_interval: tuple[int, int] = (45, 95)
    vertical_margin: float = 20.0
    entry_margin: float = 40.0
    spawn_interval: int | None = 20 * 60   # None disables the schedule
    small_probability: float = 0.25
    small_probability_per_wave: float = 0.05
    max_small_probability: float = 0.75
    accuracy_range: tuple[float, float] = (0.3, 0.7)

    def __post_init__(self):
        for name in ("radius", "points", "base_noise_deg"):
            _check_table(f"saucer {name}", getattr(self, name), SAUCER_NAMES)
        self.fire_interval = tuple(int(v) for v in self.fire_interval)
        self.accuracy_range = tuple(self.accuracy_range)
        if any(r <= 0 for r in self.radius.values()):
            raise ValueError("saucer radii must be positive")
        _check_range("saucer fire interval", self.fire_interval)
        _check_range("saucer accuracy", self.accuracy_range)
        if self.spawn_interval is not None and self.spawn_interval <= 0:
            raise ValueError("saucer spawn_interval must be positive or None")


@dataclass
class GameConfig:
    width: float = 900.0
    height: float = 700.0
    initial_lives: int = 3
    base_large_count: int = 5
    min_large_per_wave: int = 3
    wave_growth: float = 1.25
    safe_spawn_radius: float = 140.0
    safe_spawn_candidates: int = 80
    respawn_delay: int = 45
    invulnerability_frames: int = 120
    wave_clear_delay: int = 60
    ship: ShipConfig = field(default_factory=ShipConfig)
    asteroid: AsteroidConfig = field(default_factory=AsteroidConfig)
    bullet: BulletConfig = field(default_factory=BulletConfig)
    saucer: SaucerConfig = field(default_factory=SaucerConfig)

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"arena must have a positive size, got {self.width}x{self.height}")
        if self.initial_lives < 1:
            raise ValueError("initial_lives must be at least 1")
        for name in ("respawn_delay", "invulnerability_frames", "wave_clear_delay", "safe_spawn_radius"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be non-negative")
        if self.wave_growth < 1.0:
            logger.warning("wave_growth=%.3f < 1: wave budgets will shrink over time", self.wave_growth)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "GameConfig":
        """Build from a (possibly nested) mapping such as a resolved YAML preset."""
        return _build(cls, data, base=cls())

    def with_overrides(self, data: Mapping[str, Any]) -> "GameConfig":
        """Return an independent copy with nested overrides applied; `self` is left untouched."""
        return _build(type(self), data, base=copy.deepcopy(self))

    @classmethod
    def from_args(cls, args, base: "GameConfig | None" = None) -> "GameConfig":
        """
        Apply CLI overrides. `args.config` carries a JSON mapping of nested
        overrides; a few common knobs have their own flags.
        """
        cfg = base if base is not None else cls()
        overrides = dict(getattr(args, "config", None) or {})
        if getattr(args, "saucer_interval", None) is not None:
            interval = args.saucer_interval
            saucer = dict(overrides.get("saucer", {}))
            saucer["spawn_interval"] = interval if interval > 0 else None
            overrides["saucer"] = saucer
        return cfg.with_overrides(overrides) if overrides else cfg


def _build(cls, data: Mapping[str, Any], base):
    """Merge `data` onto `base` recursively; nested dataclasses and tables merge, scalars replace."""
    if not isinstance(data, Mapping):
        raise ValueError(f"expected a mapping for {cls.__name__}, got {type(data).__name__}")
    known = {f.name for f in fields(cls)}
    unknown = set(data) - known
    if unknown:
        raise ValueError(f"unknown {cls.__name__} keys: {sorted(unknown)}")
    kwargs = {}
    for name, value in data.items():
        current = getattr(base, name)
        if is_dataclass(current):
            kwargs[name] = _build(type(current), value, base=current)
        elif isinstance(current, dict) and isinstance(value, Mapping):
            kwargs[name] = {**current, **value}
        else:
            kwargs[name] = value
    return replace(base, **kwargs)
