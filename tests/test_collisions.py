import numpy as np
import pytest

from asteroid_arena.core import (
    AsteroidSize,
    EntityKind,
    Explosion,
    SaucerKind,
    ScoreChanged,
    create_asteroid,
    create_enemy_bullet,
    create_player_bullet,
)
from helpers import armed_bullet, clear_kind


def _rock(game, pos, size):
    rock = create_asteroid(pos, size, game.config, game.rng, vel=(0.0, 0.0))
    return game.arena.add(rock)


def _resolve(game):
    return game.resolver.resolve(game.context())


class TestRuleTable:
    def test_lookup_in_either_order(self, game):
        rule = game.resolver.rule_for(EntityKind.SHIP, EntityKind.ASTEROID)
        assert rule.name == "asteroid_vs_ship"
        assert game.resolver.rule_for(EntityKind.ASTEROID, EntityKind.PLAYER_BULLET).name == \
            "player_bullet_vs_asteroid"

    def test_unlisted_pairs_pass_through(self, game):
        assert game.resolver.rule_for(EntityKind.PLAYER_BULLET, EntityKind.SHIP) is None
        assert game.resolver.rule_for(EntityKind.ASTEROID, EntityKind.ASTEROID) is None
        assert game.resolver.rule_for(EntityKind.ENEMY_BULLET, EntityKind.SAUCER) is None

    def test_priority_order(self, game):
        assert [r.name for r in game.resolver.rules] == [
            "player_bullet_vs_asteroid",
            "player_bullet_vs_saucer",
            "enemy_bullet_vs_ship",
            "asteroid_vs_ship",
            "asteroid_vs_saucer",
        ]


class TestPlayerBullets:
    def test_each_size_scores_and_splits(self, started_game):
        game = started_game
        clear_kind(game, EntityKind.ASTEROID)
        targets = [
            _rock(game, (100.0, 100.0), AsteroidSize.LARGE),
            _rock(game, (300.0, 600.0), AsteroidSize.MEDIUM),
            _rock(game, (800.0, 100.0), AsteroidSize.SMALL),
        ]
        for rock in targets:
            game.arena.add(armed_bullet(rock.pos.copy(), game.config))
        game.sink.drain()

        assert _resolve(game) == 3

        assert game.score == 170
        assert all(not rock.alive for rock in targets)
        assert game.arena.count(EntityKind.PLAYER_BULLET) == 0
        sizes = sorted(r.data.size.value for r in game.arena.live(EntityKind.ASTEROID))
        assert sizes == ["MEDIUM", "MEDIUM", "SMALL", "SMALL"]

        events = game.sink.drain()
        assert [e.delta for e in events if isinstance(e, ScoreChanged)] == [20, 50, 100]
        assert sorted(e.scale for e in events if isinstance(e, Explosion)) == [10, 14, 20]

    def test_fresh_bullets_are_harmless(self, started_game):
        game = started_game
        clear_kind(game, EntityKind.ASTEROID)
        rock = _rock(game, (100.0, 100.0), AsteroidSize.SMALL)
        bullet = game.arena.add(armed_bullet(rock.pos.copy(), game.config))
        bullet.age = game.config.bullet.grace_frames + 1

        assert _resolve(game) == 0
        assert rock.alive and bullet.alive

        bullet.age += 1
        assert _resolve(game) == 1
        assert not rock.alive

    def test_first_hit_on_the_eighth_frame_after_firing(self, started_game):
        game = started_game
        clear_kind(game, EntityKind.ASTEROID)
        rock = _rock(game, (100.0, 100.0), AsteroidSize.SMALL)
        game.arena.add(create_player_bullet(rock.pos.copy(), (0.0, 0.0), game.config))

        for _ in range(game.config.bullet.grace_frames + 1):
            game.step()
        assert rock.alive

        game.step()
        assert not rock.alive
        assert game.score == 100

    def test_one_bullet_destroys_one_asteroid(self, started_game):
        game = started_game
        clear_kind(game, EntityKind.ASTEROID)
        _rock(game, (100.0, 100.0), AsteroidSize.SMALL)
        _rock(game, (110.0, 100.0), AsteroidSize.SMALL)
        game.arena.add(armed_bullet((105.0, 100.0), game.config))

        _resolve(game)

        assert game.arena.count(EntityKind.ASTEROID) == 1
        assert game.score == 100

    def test_split_children_are_not_hit_the_same_frame(self, started_game):
        game = started_game
        clear_kind(game, EntityKind.ASTEROID)
        rock = _rock(game, (100.0, 100.0), AsteroidSize.LARGE)
        game.arena.add(armed_bullet(rock.pos.copy(), game.config))
        game.arena.add(armed_bullet(rock.pos.copy(), game.config))

        assert _resolve(game) == 1
        assert game.arena.count(EntityKind.PLAYER_BULLET) == 1
        assert game.arena.count(EntityKind.ASTEROID) == 2

    def test_saucer_hit_scores_by_kind(self, started_game):
        game = started_game
        clear_kind(game, EntityKind.ASTEROID)
        saucer = game.planner.spawn_saucer(game.arena, 1, game.rng, kind=SaucerKind.SMALL, accuracy=0.5)
        game.arena.add(armed_bullet(saucer.pos.copy(), game.config))

        _resolve(game)

        assert not saucer.alive
        assert game.score == 1000


class TestShipHits:
    def test_invulnerable_ship_survives_then_dies(self, started_game):
        game = started_game
        clear_kind(game, EntityKind.ASTEROID)
        _rock(game, game.ship.pos.copy(), AsteroidSize.SMALL)

        for _ in range(game.config.invulnerability_frames - 1):
            game.step()
        assert game.ship is not None
        assert game.lives == 3

        game.step()
        assert game.ship is None
        assert game.lives == 2

    def test_enemy_bullet_destroys_ship(self, started_game):
        game = started_game
        ship = game.ship
        ship.data.invulnerability.cancel()
        bullet = create_enemy_bullet(ship.pos.copy(), (0.0, 0.0), game.config)
        bullet.age = game.config.bullet.grace_frames + 2
        game.arena.add(bullet)

        _resolve(game)

        assert not ship.alive
        assert not bullet.alive
        assert game.lives == 2
        assert game.progression.respawn_pending

    def test_two_rocks_cost_one_life(self, started_game):
        game = started_game
        ship = game.ship
        ship.data.invulnerability.cancel()
        _rock(game, ship.pos.copy(), AsteroidSize.SMALL)
        _rock(game, ship.pos + np.array([5.0, 0.0]), AsteroidSize.SMALL)

        _resolve(game)

        assert game.lives == 2
        assert game.arena.count(EntityKind.ASTEROID) == 7


class TestSaucerVsAsteroid:
    def test_both_vanish_without_score_or_split(self, started_game):
        game = started_game
        clear_kind(game, EntityKind.ASTEROID)
        saucer = game.planner.spawn_saucer(game.arena, 1, game.rng, kind=SaucerKind.LARGE, accuracy=0.5)
        rock = _rock(game, saucer.pos.copy(), AsteroidSize.LARGE)

        _resolve(game)

        assert not saucer.alive and not rock.alive
        assert game.arena.count(EntityKind.ASTEROID) == 0
        assert game.score == 0

    @pytest.mark.parametrize("kind", [SaucerKind.LARGE, SaucerKind.SMALL])
    def test_collision_burst_ignores_saucer_kind(self, started_game, kind):
        game = started_game
        clear_kind(game, EntityKind.ASTEROID)
        saucer = game.planner.spawn_saucer(game.arena, 1, game.rng, kind=kind, accuracy=0.5)
        _rock(game, saucer.pos.copy(), AsteroidSize.SMALL)
        game.sink.drain()

        _resolve(game)

        assert [e.scale for e in game.sink.drain() if isinstance(e, Explosion)] == [16]


@pytest.mark.parametrize("size, points", [("LARGE", 20), ("MEDIUM", 50), ("SMALL", 100)])
def test_points_table(started_game, size, points):
    game = started_game
    clear_kind(game, EntityKind.ASTEROID)
    rock = _rock(game, (200.0, 200.0), AsteroidSize(size))
    game.arena.add(armed_bullet(rock.pos.copy(), game.config))
    _resolve(game)
    assert game.score == points
