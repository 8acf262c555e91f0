# src/asteroid_arena/core/arena.py

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Iterable, List
import logging
import numpy as np

from .entities import Entity, EntityKind
from .events import EntityCreated, EntityDestroyed, EventSink

logger = logging.getLogger(__name__)


def overlaps(a: Entity, b: Entity) -> bool:
    """Circle overlap: center distance <= sum of radii."""
    delta = a.pos - b.pos
    rr = a.radius + b.radius
    return float(delta @ delta) <= rr * rr


@dataclass
class Arena:
    """
    Toroidal playfield and live-entity registry.

    Removal is two-phase: `remove()` marks an entity defunct and emits the
    destroyed notification, `reap()` drops defunct entities at frame end.
    Entities removed mid-frame stay readable until then.
    """
    width: float
    height: float
    sink: EventSink = field(default_factory=EventSink)
    entities: dict[int, Entity] = field(default_factory=dict)
    frame: int = 0
    _next_id: int = 0

    @property
    def n_entities(self) -> int:
        return len(self.entities)

    def new_id(self) -> int:
        nid = self._next_id
        self._next_id += 1
        return nid

    # --------- Registry ---------

    def add(self, entity: Entity, reason: str = "spawn") -> Entity:
        if entity.id is None:
            entity.id = self.new_id()
        elif entity.id in self.entities:
            raise ValueError(f"Entity id {entity.id} already exists in arena")
        self.wrap_entity(entity)
        self.entities[entity.id] = entity
        logger.debug("frame %d: + %s #%d (%s)", self.frame, entity.kind.value, entity.id, reason)
        self.sink.emit(EntityCreated(
            frame=self.frame,
            entity_id=entity.id,
            kind=entity.kind.value,
            pos=entity.pos.copy(),
            reason=reason,
        ))
        return entity

    def remove(self, entity: Entity, reason: str = "unknown") -> bool:
        """
        Mark `entity` defunct. Idempotent: entities that are already defunct
        or not registered here are ignored and False is returned.
        """
        if entity.id is None or self.entities.get(entity.id) is not entity or not entity.alive:
            return False
        entity.alive = False
        logger.debug("frame %d: - %s #%d (%s)", self.frame, entity.kind.value, entity.id, reason)
        self.sink.emit(EntityDestroyed(
            frame=self.frame,
            entity_id=entity.id,
            kind=entity.kind.value,
            pos=entity.pos.copy(),
            reason=reason,
        ))
        return True

    def reap(self) -> List[Entity]:
        """Physically drop every defunct entity; returns what was dropped."""
        dead = [e for e in self.entities.values() if not e.alive]
        for e in dead:
            del self.entities[e.id]
        return dead

    def clear(self, reason: str = "reset") -> None:
        for e in list(self.entities.values()):
            self.remove(e, reason=reason)
        self.reap()

    # --------- Queries ---------

    def live(self, kind: EntityKind | None = None) -> List[Entity]:
        """Snapshot list of live entities, optionally of one kind, in creation order."""
        return [e for e in self.entities.values() if e.alive and (kind is None or e.kind is kind)]

    def count(self, kind: EntityKind) -> int:
        return sum(1 for e in self.entities.values() if e.alive and e.kind is kind)

    def first(self, kind: EntityKind) -> Entity | None:
        for e in self.entities.values():
            if e.alive and e.kind is kind:
                return e
        return None

    def query_overlapping(self, entity: Entity, kind: EntityKind) -> Entity | None:
        """Return some live entity of `kind` overlapping `entity`, or None."""
        for other in self.entities.values():
            if other is entity or not other.alive or other.kind is not kind:
                continue
            if overlaps(entity, other):
                return other
        return None

    def nearest(self, pos: np.ndarray, kind: EntityKind) -> Entity | None:
        best, best_d2 = None, float("inf")
        for other in self.live(kind):
            delta = other.pos - pos
            d2 = float(delta @ delta)
            if d2 < best_d2:
                best, best_d2 = other, d2
        return best

    # --------- Geometry ---------

    def wrap(self, pos: np.ndarray) -> np.ndarray:
        """
        Map a position into [0,width) x [0,height) with at most one wrap per
        axis. Assumes per-frame displacement is smaller than the arena.
        """
        if pos[0] < 0.0:
            pos[0] += self.width
        if pos[0] >= self.width:
            pos[0] -= self.width
        if pos[1] < 0.0:
            pos[1] += self.height
        if pos[1] >= self.height:
            pos[1] -= self.height
        return pos

    def wrap_entity(self, entity: Entity) -> None:
        self.wrap(entity.pos)

    def wrap_all(self, entities: Iterable[Entity] | None = None) -> None:
        for e in (self.live() if entities is None else entities):
            self.wrap(e.pos)

    def contains(self, pos: np.ndarray) -> bool:
        return 0.0 <= pos[0] < self.width and 0.0 <= pos[1] < self.height

    def center(self) -> np.ndarray:
        return np.array([self.width / 2, self.height / 2], dtype=float)

    def sample_position(self, gen: np.random.Generator) -> np.ndarray:
        x = gen.uniform(0.0, self.width)
        y = gen.uniform(0.0, self.height)
        return np.array([x, y], dtype=float)

    def bounds(self) -> tuple[float, float, float, float]:
        return 0.0, self.width, 0.0, self.height
