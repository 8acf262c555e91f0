import numpy as np
import pytest

from asteroid_arena.core import (
    AsteroidSize,
    EntityCreated,
    EntityDestroyed,
    EntityKind,
    create_asteroid,
    create_player_bullet,
    create_ship,
    overlaps,
)


def test_wrap_maps_into_half_open_bounds(arena):
    assert arena.wrap(np.array([-5.0, 710.0])).tolist() == [895.0, 10.0]
    assert arena.wrap(np.array([900.0, 0.0])).tolist() == [0.0, 0.0]
    assert arena.wrap(np.array([899.5, 699.5])).tolist() == [899.5, 699.5]
    assert arena.wrap(np.array([-0.0, 700.0])).tolist() == [0.0, 0.0]


def test_add_wraps_position_and_assigns_ids(arena, config):
    a = arena.add(create_ship((950.0, -10.0), config))
    b = arena.add(create_player_bullet((10.0, 10.0), (0.0, 0.0), config))
    assert a.id != b.id
    assert a.pos.tolist() == [50.0, 690.0]
    assert arena.contains(a.pos)


def test_add_rejects_duplicate_ids(arena, config):
    ship = arena.add(create_ship((100.0, 100.0), config))
    clash = create_ship((200.0, 200.0), config)
    clash.id = ship.id
    with pytest.raises(ValueError):
        arena.add(clash)


def test_add_emits_created_event(arena, config):
    ship = arena.add(create_ship((100.0, 100.0), config), reason="spawn")
    events = arena.sink.drain()
    assert len(events) == 1
    assert isinstance(events[0], EntityCreated)
    assert events[0].entity_id == ship.id
    assert events[0].kind == "ship"
    assert events[0].reason == "spawn"


def test_remove_is_idempotent(arena, config, gen):
    rock = arena.add(create_asteroid((100.0, 100.0), AsteroidSize.LARGE, config, gen))
    arena.sink.drain()

    assert arena.remove(rock, reason="shot") is True
    assert arena.remove(rock, reason="shot") is False

    destroyed = [e for e in arena.sink.drain() if isinstance(e, EntityDestroyed)]
    assert len(destroyed) == 1
    assert destroyed[0].reason == "shot"


def test_removed_entities_stay_until_reaped(arena, config, gen):
    rock = arena.add(create_asteroid((100.0, 100.0), AsteroidSize.LARGE, config, gen))
    arena.remove(rock)

    assert rock.id in arena.entities
    assert arena.live(EntityKind.ASTEROID) == []
    assert arena.count(EntityKind.ASTEROID) == 0

    assert arena.reap() == [rock]
    assert rock.id not in arena.entities


def test_remove_ignores_unregistered_entity(arena, config):
    stray = create_ship((10.0, 10.0), config)
    assert arena.remove(stray) is False
    assert arena.sink.drain() == []


def test_overlap_includes_touching_circles(config):
    ship = create_ship((0.0, 0.0), config)                                  # r = 16
    touching = create_player_bullet((20.0, 0.0), (0.0, 0.0), config)       # r = 4
    apart = create_player_bullet((20.5, 0.0), (0.0, 0.0), config)
    assert overlaps(ship, touching)
    assert not overlaps(ship, apart)


def test_queries_filter_by_kind(arena, config, gen):
    ship = arena.add(create_ship((450.0, 350.0), config))
    near = arena.add(create_asteroid((500.0, 350.0), AsteroidSize.SMALL, config, gen))
    arena.add(create_asteroid((50.0, 50.0), AsteroidSize.SMALL, config, gen))

    assert arena.first(EntityKind.SHIP) is ship
    assert arena.nearest(ship.pos, EntityKind.ASTEROID) is near
    assert arena.query_overlapping(ship, EntityKind.ASTEROID) is None
    assert arena.count(EntityKind.ASTEROID) == 2
    assert arena.first(EntityKind.SAUCER) is None


def test_clear_empties_the_registry(arena, config, gen):
    arena.add(create_ship((450.0, 350.0), config))
    arena.add(create_asteroid((50.0, 50.0), AsteroidSize.SMALL, config, gen))
    arena.clear()
    assert arena.n_entities == 0
