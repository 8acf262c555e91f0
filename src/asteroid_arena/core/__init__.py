# src/asteroid_arena/core/__init__.py

from .config import GameConfig, ShipConfig, AsteroidConfig, BulletConfig, SaucerConfig
from .timers import Countdown
from .entities import (
    Entity,
    EntityKind,
    AsteroidSize,
    SaucerKind,
    create_ship,
    create_asteroid,
    create_player_bullet,
    create_enemy_bullet,
    create_saucer,
)
from .arena import Arena, overlaps
from .inputs import InputSignals, IDLE
from .split import SplitEngine
from .spawning import SpawnPlanner
from .collisions import CollisionResolver, InteractionRule
from .progression import Phase, ProgressionStateMachine
from .game import Game, run_game
from .recording import FrameSnapshot, GameRecording, snapshot_game
from .events import (
    BaseEvent,
    EventSink,
    EntityCreated,
    EntityDestroyed,
    ScoreChanged,
    LifeLost,
    WaveStarted,
    WaveCleared,
    GameOver,
    RoundStarted,
    PhaseChanged,
    Explosion,
)

__all__ = [
    "GameConfig",
    "ShipConfig",
    "AsteroidConfig",
    "BulletConfig",
    "SaucerConfig",
    "Countdown",
    "Entity",
    "EntityKind",
    "AsteroidSize",
    "SaucerKind",
    "create_ship",
    "create_asteroid",
    "create_player_bullet",
    "create_enemy_bullet",
    "create_saucer",
    "Arena",
    "overlaps",
    "InputSignals",
    "IDLE",
    "SplitEngine",
    "SpawnPlanner",
    "CollisionResolver",
    "InteractionRule",
    "Phase",
    "ProgressionStateMachine",
    "Game",
    "run_game",
    "FrameSnapshot",
    "GameRecording",
    "snapshot_game",
    "BaseEvent",
    "EventSink",
    "EntityCreated",
    "EntityDestroyed",
    "ScoreChanged",
    "LifeLost",
    "WaveStarted",
    "WaveCleared",
    "GameOver",
    "RoundStarted",
    "PhaseChanged",
    "Explosion",
]
