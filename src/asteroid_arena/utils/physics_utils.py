from __future__ import annotations
import math
import numpy as np

EPS = 1e-4


def heading_vector(heading_deg: float) -> np.ndarray:
    """Unit vector for a heading in degrees (0 = +x, 90 = +y, y grows downward)."""
    rad = math.radians(heading_deg)
    return np.array([math.cos(rad), math.sin(rad)], dtype=float)


def normalize(vec: np.ndarray, eps: float = EPS) -> np.ndarray | None:
    """Return vec / |vec|, or None when |vec| is negligible."""
    norm = float(np.linalg.norm(vec))
    if norm <= eps:
        return None
    return np.asarray(vec, dtype=float) / norm


def clamp_speed(vel: np.ndarray, max_speed: float) -> np.ndarray:
    speed = float(np.linalg.norm(vel))
    if speed > max_speed:
        vel *= max_speed / speed
    return vel


def random_velocity(gen: np.random.Generator, speed_range: tuple[float, float]) -> np.ndarray:
    """Velocity with speed uniform in speed_range and a uniform random direction."""
    speed = gen.uniform(*speed_range)
    ang = gen.uniform(0.0, 2 * np.pi)
    return np.array([np.cos(ang) * speed, np.sin(ang) * speed], dtype=float)


def clamp01(v: float) -> float:
    return max(0.0, min(1.0, float(v)))
