# src/asteroid_arena/core/progression.py

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING
import logging
import numpy as np

from .entities import Entity, EntityKind
from .events import (
    GameOver,
    LifeLost,
    PhaseChanged,
    RoundStarted,
    ScoreChanged,
    WaveCleared,
    WaveStarted,
)
from .spawning import SpawnPlanner
from .timers import Countdown

if TYPE_CHECKING:
    from .arena import Arena
    from .config import GameConfig

logger = logging.getLogger(__name__)


class Phase(str, Enum):
    TITLE = "title"
    PLAYING = "playing"
    WAVE_CLEARED_PAUSE = "wave_cleared_pause"
    GAME_OVER = "game_over"


@dataclass
class ProgressionStateMachine:
    """
    Score, lives, wave counter and the timers between them.

        TITLE --start--> PLAYING <--> WAVE_CLEARED_PAUSE
                            |
                  last life lost
                            v
                        GAME_OVER --start--> PLAYING

    Intended usage, once per frame:
        psm.tick_timers(arena, rng)   # respawn countdown
        ... entity updates and collisions, which may call add_score / on_ship_destroyed ...
        psm.evaluate(arena, rng)      # wave clear, next wave, saucer schedule
    """
    config: GameConfig
    planner: SpawnPlanner
    phase: Phase = Phase.TITLE
    score: int = 0
    lives: int = 0
    wave: int = 0
    respawn_timer: Countdown = field(default_factory=Countdown)
    pause_timer: Countdown = field(default_factory=Countdown)
    _respawn_pending: bool = False

    # --------- Queries ---------

    @property
    def respawn_pending(self) -> bool:
        return self._respawn_pending

    @property
    def accepts_start(self) -> bool:
        return self.phase in (Phase.TITLE, Phase.GAME_OVER)

    @property
    def in_round(self) -> bool:
        """True while the player can still score."""
        return self.phase in (Phase.PLAYING, Phase.WAVE_CLEARED_PAUSE)

    # --------- Transitions ---------

    def _set_phase(self, arena: Arena, new: Phase) -> None:
        if new is self.phase:
            return
        old, self.phase = self.phase, new
        arena.sink.emit(PhaseChanged(frame=arena.frame, old=old.value, new=new.value))

    def start_round(self, arena: Arena, gen: np.random.Generator) -> None:
        """Full reset: clear the field, spawn the ship, then wave 1."""
        arena.clear(reason="reset")
        self.score = 0
        self.lives = self.config.initial_lives
        self.wave = 0
        self.respawn_timer.cancel()
        self.pause_timer.cancel()
        self._respawn_pending = False
        self._set_phase(arena, Phase.PLAYING)
        arena.sink.emit(RoundStarted(frame=arena.frame, lives=self.lives))
        arena.sink.emit(ScoreChanged(frame=arena.frame, score=0, delta=0, reason="reset"))
        logger.info("frame %d: round started with %d lives", arena.frame, self.lives)

        self.planner.spawn_ship(arena, gen)
        self.spawn_next_wave(arena, gen)
        self.planner.reset_saucer_timer()

    def spawn_next_wave(self, arena: Arena, gen: np.random.Generator) -> None:
        self.wave += 1
        spawned = self.planner.spawn_wave(arena, self.wave, gen)
        arena.sink.emit(WaveStarted(frame=arena.frame, wave=self.wave, n_large=len(spawned)))
        logger.info("frame %d: wave %d with %d large asteroids", arena.frame, self.wave, len(spawned))

    def add_score(self, arena: Arena, delta: int, reason: str = "") -> int:
        """Add points while a round is running. The score never drops below zero."""
        if not self.in_round:
            return self.score
        new_score = max(0, self.score + int(delta))
        if new_score != self.score:
            applied = new_score - self.score
            self.score = new_score
            arena.sink.emit(ScoreChanged(frame=arena.frame, score=self.score, delta=applied, reason=reason))
        return self.score

    def on_ship_destroyed(self, arena: Arena) -> None:
        """Lose a life; arm the respawn delay, or end the game on the last one."""
        if self.lives <= 0:
            return
        self.lives -= 1
        arena.sink.emit(LifeLost(frame=arena.frame, lives_remaining=self.lives))
        if self.lives > 0:
            self.respawn_timer.start(self.config.respawn_delay)
            self._respawn_pending = True
            logger.info("frame %d: life lost, %d left", arena.frame, self.lives)
            return
        self.respawn_timer.cancel()
        self._respawn_pending = False
        self.pause_timer.cancel()
        self._set_phase(arena, Phase.GAME_OVER)
        arena.sink.emit(GameOver(frame=arena.frame, score=self.score, wave=self.wave))
        logger.info("frame %d: game over, score %d at wave %d", arena.frame, self.score, self.wave)

    # --------- Per-frame ---------

    def tick_timers(self, arena: Arena, gen: np.random.Generator) -> Entity | None:
        """Advance the respawn delay; returns the new ship if one spawned."""
        if not self._respawn_pending:
            return None
        self.respawn_timer.tick()
        if not self.respawn_timer.expired():
            return None
        self._respawn_pending = False
        if self.lives > 0 and arena.first(EntityKind.SHIP) is None:
            return self.planner.spawn_ship(arena, gen, reason="respawn")
        return None

    def evaluate(self, arena: Arena, gen: np.random.Generator) -> None:
        if self.phase is Phase.PLAYING:
            if arena.count(EntityKind.ASTEROID) == 0 and not self._respawn_pending:
                self.pause_timer.start(self.config.wave_clear_delay)
                self._set_phase(arena, Phase.WAVE_CLEARED_PAUSE)
                arena.sink.emit(WaveCleared(frame=arena.frame, wave=self.wave))
                logger.info("frame %d: wave %d cleared", arena.frame, self.wave)
            else:
                self.planner.tick_saucer(arena, self.wave, gen)
        elif self.phase is Phase.WAVE_CLEARED_PAUSE:
            if self._respawn_pending:
                return
            self.pause_timer.tick()
            if self.pause_timer.expired():
                self._set_phase(arena, Phase.PLAYING)
                self.spawn_next_wave(arena, gen)
