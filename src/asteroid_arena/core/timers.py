# src/asteroid_arena/core/timers.py

from __future__ import annotations
from dataclasses import dataclass


@dataclass
class Countdown:
    """
    Frame-counted timer shared by cooldowns, TTLs and state-machine delays.

    - start(n): arm with n frames remaining
    - tick(): consume one frame, never below zero
    - expired(): True once the remaining count is zero

    A fresh Countdown() is already expired, which is what cooldowns want.
    """
    remaining: int = 0

    def start(self, frames: int) -> None:
        self.remaining = max(0, int(frames))

    def extend_to(self, frames: int) -> None:
        """Keep whichever is longer: the current remainder or `frames`."""
        self.remaining = max(self.remaining, int(frames))

    def cancel(self) -> None:
        self.remaining = 0

    def tick(self) -> bool:
        """Advance one frame. Returns True if this tick made the timer expire."""
        if self.remaining <= 0:
            return False
        self.remaining -= 1
        return self.remaining == 0

    def expired(self) -> bool:
        return self.remaining <= 0

    @property
    def active(self) -> bool:
        return self.remaining > 0
