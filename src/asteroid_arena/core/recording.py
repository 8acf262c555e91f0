# src/asteroid_arena/core/recording.py

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Iterator, Sequence, Tuple
import numpy as np

if TYPE_CHECKING:
    from .game import Game
    from .events import BaseEvent
    from .entities import Entity


@dataclass
class EntitySnapshot:
    """Per-frame view of one entity: just what a renderer needs."""
    id: int
    kind: str
    pos: Tuple[float, float]
    vel: Tuple[float, float]
    radius: float
    heading: float = 0.0
    size: str | None = None       # asteroid size or saucer kind
    invulnerable: bool = False
    thrusting: bool = False


@dataclass
class EventSnapshot:
    frame: int
    type: str               # e.g. "EntityDestroyed", "ScoreChanged", ...
    payload: dict[str, Any] = field(default_factory=dict)


@dataclass
class FrameSnapshot:
    frame: int
    phase: str
    score: int
    lives: int
    wave: int
    entities: dict[int, EntitySnapshot]
    events: list[EventSnapshot] = field(default_factory=list)

    def of_kind(self, kind: str) -> list[EntitySnapshot]:
        return [e for e in self.entities.values() if e.kind == kind]


@dataclass
class GameRecording:
    """
    In-memory record of a run, frame by frame.

    `meta` holds config, seed, etc.
    """
    frames: list[FrameSnapshot] = field(default_factory=list)
    meta: dict[str, Any] = field(default_factory=dict)

    def add_frame(self, frame: FrameSnapshot) -> None:
        self.frames.append(frame)

    @property
    def t_end(self) -> int | None:
        """Frame number of the last snapshot, or None if nothing was recorded."""
        if not self.frames:
            return None
        return self.frames[-1].frame

    def iter_events(self) -> Iterator[EventSnapshot]:
        """Iterate over all EventSnapshots in frame order."""
        for frame in self.frames:
            for ev in frame.events:
                yield ev

    def event_counts(self) -> Counter:
        return Counter(ev.type for ev in self.iter_events())


def make_entity_snapshot(entity: "Entity") -> EntitySnapshot:
    pos = np.asarray(entity.pos, dtype=float)
    vel = np.asarray(entity.vel, dtype=float)
    data = entity.data
    size = getattr(data, "size", None) or getattr(data, "kind", None)
    return EntitySnapshot(
        id=entity.id,
        kind=entity.kind.value,
        pos=(float(pos[0]), float(pos[1])),
        vel=(float(vel[0]), float(vel[1])),
        radius=float(entity.radius),
        heading=entity.heading,
        size=size.value if size is not None else None,
        invulnerable=bool(getattr(data, "invulnerable", False)),
        thrusting=bool(getattr(data, "thrusting", False)),
    )


def snapshot_game(game: "Game", events: Sequence["BaseEvent"]) -> FrameSnapshot:
    entities: dict[int, EntitySnapshot] = {}
    for entity in game.arena.live():
        if entity.id is None:
            raise ValueError("All entities must have an id before snapshotting")
        entities[entity.id] = make_entity_snapshot(entity)

    event_snaps = [
        EventSnapshot(frame=e.frame, type=type(e).__name__, payload=e.to_payload_dict())
        for e in events
    ]
    return FrameSnapshot(
        frame=game.frame,
        phase=game.phase.value,
        score=game.score,
        lives=game.lives,
        wave=game.wave,
        entities=entities,
        events=event_snaps,
    )
