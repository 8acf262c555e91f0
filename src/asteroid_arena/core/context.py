# src/asteroid_arena/core/context.py

from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING
import numpy as np

from .events import BaseEvent
from .inputs import InputSignals

if TYPE_CHECKING:
    from .arena import Arena
    from .config import GameConfig
    from .progression import ProgressionStateMachine


@dataclass
class FrameContext:
    """Everything an update or collision reaction may touch during one frame."""
    arena: Arena
    rng: np.random.Generator
    config: GameConfig
    progression: ProgressionStateMachine
    inputs: InputSignals
    frame: int = 0

    def emit(self, event: BaseEvent) -> None:
        self.arena.sink.emit(event)
