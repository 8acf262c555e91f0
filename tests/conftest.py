"""Pytest configuration and fixtures for the asteroid arena tests."""

import numpy as np
import pytest

from asteroid_arena.core import Arena, Game, GameConfig


@pytest.fixture
def gen():
    """Provide a deterministic RNG for tests."""
    return np.random.default_rng(42)


@pytest.fixture
def config():
    """Default configuration with the saucer schedule switched off."""
    return GameConfig.from_dict({"saucer": {"spawn_interval": None}})


@pytest.fixture
def arena(config):
    return Arena(width=config.width, height=config.height)


@pytest.fixture
def game(config):
    """A game sitting on the title screen."""
    return Game(config=config, rng=np.random.default_rng(7))


@pytest.fixture
def started_game(game):
    """A game with a round in progress: one ship at the center plus wave 1."""
    game.start()
    return game
