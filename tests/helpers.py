"""Shared helpers for building test scenarios."""

from asteroid_arena.core import InputSignals, create_player_bullet


def clear_kind(game, kind):
    """Remove every live entity of `kind` and reap immediately."""
    for e in game.arena.live(kind):
        game.arena.remove(e, reason="test")
    game.arena.reap()


def armed_bullet(pos, config, vel=(0.0, 0.0)):
    """A player bullet already past its muzzle grace window, counting this frame's update."""
    bullet = create_player_bullet(pos, vel, config)
    bullet.age = config.bullet.grace_frames + 2
    return bullet


def ctx_for(game, **inputs):
    return game.context(InputSignals(**inputs))
