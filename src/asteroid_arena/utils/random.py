# asteroid_arena/utils/random.py

from __future__ import annotations

from typing import Dict
import numpy as np

_master_seed: int | None = None
_streams: Dict[str, np.random.Generator] = {}


def seed_all(seed: int | None) -> None:
    """
    Set the master seed for every named stream and forget cached streams.
    None means entropy-seeded, non-reproducible runs.
    """
    global _master_seed
    _master_seed = seed
    _streams.clear()


def rng(name: str = "game") -> np.random.Generator:
    """
    Named stream derived from the master seed, created on first use.

    The simulation draws every spawn, split and saucer-aim decision from
    "game", so entity creation order is reproducible. Automated pilots use
    "pilot" and never shift the game's sequence.
    """
    if name not in _streams:
        _streams[name] = make_rng(_master_seed, name)
    return _streams[name]


def make_rng(seed: int | None, name: str = "game") -> np.random.Generator:
    """Fresh generator for (seed, name), independent of the cached streams."""
    if seed is None:
        return np.random.default_rng()
    return np.random.default_rng(np.random.SeedSequence([seed, _stream_key(name)]))


def _stream_key(name: str) -> int:
    """32-bit FNV-1a of the stream name; stable across processes, unlike hash()."""
    h = 2166136261
    for b in name.encode("utf-8"):
        h = ((h ^ b) * 16777619) & 0xFFFFFFFF
    return h
