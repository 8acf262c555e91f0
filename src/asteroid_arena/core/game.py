# src/asteroid_arena/core/game.py

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Callable, List
import logging
import numpy as np

from .arena import Arena
from .behaviors import update_entities
from .collisions import CollisionResolver
from .config import GameConfig
from .context import FrameContext
from .entities import Entity, EntityKind
from .events import BaseEvent, EventSink, Listener
from .inputs import IDLE, InputSignals, StartLatch
from .progression import Phase, ProgressionStateMachine
from .recording import GameRecording, snapshot_game
from .spawning import SpawnPlanner
from .split import SplitEngine
from asteroid_arena.utils.random import rng as named_rng

logger = logging.getLogger(__name__)


@dataclass
class Game:
    """
    One arena, one progression state machine, one RNG stream.

    `step(inputs)` advances exactly one frame:
      1. start edge (TITLE / GAME_OVER) resets the round
      2. progression timers (respawn)
      3. entity updates
      4. toroidal wrap
      5. collision rules
      6. progression evaluation (wave clear, next wave, saucer schedule)
      7. reap defunct entities
    and returns the events emitted during it.
    """
    config: GameConfig = field(default_factory=GameConfig)
    rng: np.random.Generator = field(default_factory=lambda: named_rng("game"))
    sink: EventSink = field(default_factory=EventSink)
    frame: int = 0
    arena: Arena = field(init=False)
    planner: SpawnPlanner = field(init=False)
    progression: ProgressionStateMachine = field(init=False)
    resolver: CollisionResolver = field(init=False)
    _start_latch: StartLatch = field(default_factory=StartLatch)

    def __post_init__(self):
        self.arena = Arena(width=self.config.width, height=self.config.height, sink=self.sink)
        self.planner = SpawnPlanner(self.config)
        self.progression = ProgressionStateMachine(self.config, self.planner)
        self.resolver = CollisionResolver(SplitEngine(self.config))

    # --------- Convenience views ---------

    @property
    def phase(self) -> Phase:
        return self.progression.phase

    @property
    def score(self) -> int:
        return self.progression.score

    @property
    def lives(self) -> int:
        return self.progression.lives

    @property
    def wave(self) -> int:
        return self.progression.wave

    @property
    def ship(self) -> Entity | None:
        return self.arena.first(EntityKind.SHIP)

    def subscribe(self, listener: Listener) -> None:
        self.sink.subscribe(listener)

    def context(self, inputs: InputSignals = IDLE) -> FrameContext:
        return FrameContext(
            arena=self.arena,
            rng=self.rng,
            config=self.config,
            progression=self.progression,
            inputs=inputs,
            frame=self.frame,
        )

    # --------- Lifecycle ---------

    def start(self) -> None:
        """Begin (or restart) a round immediately, without waiting for a start signal."""
        self.progression.start_round(self.arena, self.rng)

    def step(self, inputs: InputSignals = IDLE) -> List[BaseEvent]:
        self.frame += 1
        self.arena.frame = self.frame

        if self._start_latch.pressed(inputs) and self.progression.accepts_start:
            self.start()

        if self.phase is not Phase.TITLE:
            ctx = self.context(inputs)
            self.progression.tick_timers(self.arena, self.rng)
            update_entities(ctx)
            self.arena.wrap_all()
            self.resolver.resolve(ctx)
            self.progression.evaluate(self.arena, self.rng)
            self.arena.reap()

        return self.sink.drain()


InputSource = Callable[[Game], InputSignals]


def run_game(
    game: Game,
    n_frames: int,
    inputs: InputSource | None = None,
    log_interval: int = 600,
    *,
    record: bool = True,
) -> GameRecording:
    """
    Step `game` for n_frames, pulling inputs from `inputs(game)` each frame,
    and keep a snapshot of every frame for a presentation layer.
    """
    recording = GameRecording()
    for _ in range(n_frames):
        signals = inputs(game) if inputs is not None else IDLE
        events = game.step(signals)
        if record:
            recording.add_frame(snapshot_game(game, events))
        if log_interval and game.frame % log_interval == 0:
            logger.info(
                "frame %d: phase=%s score=%d lives=%d wave=%d entities=%d",
                game.frame, game.phase.value, game.score, game.lives, game.wave, game.arena.n_entities,
            )
    return recording
