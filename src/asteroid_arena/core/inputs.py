# src/asteroid_arena/core/inputs.py

from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True)
class InputSignals:
    """
    Per-frame player intents supplied by whatever polls the device.

    thrust/turn/fire/hyperspace are level-triggered (held = active every
    frame, the ship's own cooldowns pace them). start is read as an edge by
    `StartLatch`.
    """
    thrust: bool = False
    turn_left: bool = False
    turn_right: bool = False
    fire: bool = False
    hyperspace: bool = False
    start: bool = False


IDLE = InputSignals()


@dataclass
class StartLatch:
    """Turns the level-triggered start signal into a rising-edge event."""
    _was_down: bool = False

    def pressed(self, inputs: InputSignals) -> bool:
        edge = inputs.start and not self._was_down
        self._was_down = inputs.start
        return edge

    def reset(self) -> None:
        self._was_down = False
