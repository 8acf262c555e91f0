# src/asteroid_arena/core/events.py

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Callable, List
from abc import ABC
import numpy as np


@dataclass(kw_only=True)
class BaseEvent(ABC):
    """Marker base class so you can type on 'list[BaseEvent]'."""
    frame: int  # frame number when this event occurred

    def to_payload_dict(self) -> dict:
        """Convert event-specific data to a serializable dict."""
        return {}


@dataclass(kw_only=True)
class EntityCreated(BaseEvent):
    entity_id: int
    kind: str
    pos: np.ndarray
    reason: str = "unknown"

    def to_payload_dict(self) -> dict:
        return {
            "entity_id": self.entity_id,
            "kind": self.kind,
            "pos": np.asarray(self.pos).tolist(),
            "reason": self.reason,
        }


@dataclass(kw_only=True)
class EntityDestroyed(BaseEvent):
    entity_id: int
    kind: str
    pos: np.ndarray
    reason: str = "unknown"

    def to_payload_dict(self) -> dict:
        return {
            "entity_id": self.entity_id,
            "kind": self.kind,
            "pos": np.asarray(self.pos).tolist(),
            "reason": self.reason,
        }


@dataclass(kw_only=True)
class ScoreChanged(BaseEvent):
    score: int
    delta: int
    reason: str = ""

    def to_payload_dict(self) -> dict:
        return {"score": self.score, "delta": self.delta, "reason": self.reason}


@dataclass(kw_only=True)
class LifeLost(BaseEvent):
    lives_remaining: int

    def to_payload_dict(self) -> dict:
        return {"lives_remaining": self.lives_remaining}


@dataclass(kw_only=True)
class WaveStarted(BaseEvent):
    wave: int
    n_large: int

    def to_payload_dict(self) -> dict:
        return {"wave": self.wave, "n_large": self.n_large}


@dataclass(kw_only=True)
class WaveCleared(BaseEvent):
    wave: int

    def to_payload_dict(self) -> dict:
        return {"wave": self.wave}


@dataclass(kw_only=True)
class GameOver(BaseEvent):
    score: int
    wave: int

    def to_payload_dict(self) -> dict:
        return {"score": self.score, "wave": self.wave}


@dataclass(kw_only=True)
class RoundStarted(BaseEvent):
    lives: int

    def to_payload_dict(self) -> dict:
        return {"lives": self.lives}


@dataclass(kw_only=True)
class PhaseChanged(BaseEvent):
    old: str
    new: str

    def to_payload_dict(self) -> dict:
        return {"old": self.old, "new": self.new}


@dataclass(kw_only=True)
class Explosion(BaseEvent):
    """Purely presentational: where a burst should be drawn and how big."""
    pos: np.ndarray
    scale: int

    def to_payload_dict(self) -> dict:
        return {"pos": np.asarray(self.pos).tolist(), "scale": self.scale}


Listener = Callable[[BaseEvent], None]


@dataclass
class EventSink:
    """
    Fire-and-forget notification channel from the simulation to its
    presentation layer.

    Subscribers are called synchronously as each event is emitted. The
    sink also keeps the current frame's events so `Game.step()` can hand
    them back; draining never touches game state.
    """
    listeners: List[Listener] = field(default_factory=list)
    _pending: List[BaseEvent] = field(default_factory=list)

    def subscribe(self, listener: Listener) -> None:
        self.listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        if listener in self.listeners:
            self.listeners.remove(listener)

    def emit(self, event: BaseEvent) -> None:
        self._pending.append(event)
        for listener in list(self.listeners):
            listener(event)

    def drain(self) -> List[BaseEvent]:
        events, self._pending = self._pending, []
        return events
