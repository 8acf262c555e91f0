import logging

import pytest

from asteroid_arena.core import GameConfig
from asteroid_arena.presets.basic import load_config
from asteroid_arena.utils.cli import build_parser
from asteroid_arena.utils.preset_loader import load_preset


class TestGameConfig:
    def test_defaults(self):
        cfg = GameConfig()
        assert (cfg.width, cfg.height) == (900.0, 700.0)
        assert cfg.initial_lives == 3
        assert cfg.asteroid.points == {"LARGE": 20, "MEDIUM": 50, "SMALL": 100}
        assert cfg.saucer.points == {"LARGE": 200, "SMALL": 1000}

    def test_nested_overrides_merge(self):
        cfg = GameConfig.from_dict({"ship": {"max_speed": 10}, "asteroid": {"points": {"SMALL": 500}}})
        assert cfg.ship.max_speed == 10
        assert cfg.ship.thrust == 0.35
        assert cfg.asteroid.points == {"LARGE": 20, "MEDIUM": 50, "SMALL": 500}

    def test_with_overrides_keeps_the_base(self):
        base = GameConfig.from_dict({"initial_lives": 5})
        cfg = base.with_overrides({"respawn_delay": 10})
        assert (cfg.initial_lives, cfg.respawn_delay) == (5, 10)
        assert base.respawn_delay == 45

    def test_with_overrides_does_not_share_nested_state(self):
        base = GameConfig()
        cfg = base.with_overrides({"initial_lives": 5})

        cfg.ship.max_speed = 1.0
        cfg.asteroid.points["SMALL"] = 1

        assert cfg.ship is not base.ship
        assert base.ship.max_speed == 8.5
        assert base.asteroid.points["SMALL"] == 100

    @pytest.mark.parametrize("data", [
        {"bogus": 1},
        {"ship": {"bogus": 1}},
        {"width": -1},
        {"initial_lives": 0},
        {"asteroid": {"speed_range": {"LARGE": [3.0, 1.0]}}},
        {"saucer": {"spawn_interval": 0}},
        {"ship": 3},
        {"asteroid": {"children_per_split": 3}},
    ])
    def test_invalid_values_raise(self, data):
        with pytest.raises(ValueError):
            GameConfig.from_dict(data)

    def test_shrinking_waves_only_warn(self, caplog):
        with caplog.at_level(logging.WARNING, logger="asteroid_arena.core.config"):
            cfg = GameConfig.from_dict({"wave_growth": 0.9})
        assert cfg.wave_growth == 0.9
        assert "wave_growth" in caplog.text


class TestPresets:
    def test_include_chain(self):
        loaded = load_preset("arcade_hard")
        assert [p.name for p in loaded.loaded_files] == ["classic.yaml", "arcade_hard.yaml"]
        assert loaded.resolved["base_large_count"] == 6
        assert loaded.resolved["ship"]["max_speed"] == 8.5
        assert "include" not in loaded.resolved

    def test_load_config_from_preset(self):
        cfg = load_config("arcade_hard", overrides={"initial_lives": 4})
        assert cfg.saucer.spawn_interval == 600
        assert cfg.asteroid.speed_range["LARGE"] == (1.6, 2.6)
        assert cfg.asteroid.speed_range["MEDIUM"] == (1.8, 2.8)
        assert cfg.initial_lives == 4

    def test_classic_matches_defaults(self):
        assert load_config("classic") == GameConfig()

    def test_missing_preset(self):
        with pytest.raises(ValueError):
            load_preset("no_such_preset")

    def test_non_mapping_root(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ValueError):
            load_preset(path)

    def test_include_must_be_a_list(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("include: classic.yaml\n")
        with pytest.raises(ValueError):
            load_preset(path)

    def test_include_cycle(self, tmp_path):
        (tmp_path / "a.yaml").write_text("include:\n  - b.yaml\nwidth: 800\n")
        (tmp_path / "b.yaml").write_text("include:\n  - a.yaml\n")
        with pytest.raises(ValueError):
            load_preset(tmp_path / "a.yaml")

    def test_local_include_overrides(self, tmp_path):
        (tmp_path / "base.yaml").write_text("width: 800\nship:\n  thrust: 0.5\n")
        (tmp_path / "top.yaml").write_text("include:\n  - base.yaml\nship:\n  turn_rate: 6\n")
        cfg = GameConfig.from_dict(load_preset(tmp_path / "top.yaml").resolved)
        assert cfg.width == 800
        assert (cfg.ship.thrust, cfg.ship.turn_rate) == (0.5, 6)


class TestCli:
    def test_from_args(self):
        args = build_parser().parse_args(["--config", '{"initial_lives": 5}', "--saucer_interval", "0"])
        cfg = GameConfig.from_args(args)
        assert cfg.initial_lives == 5
        assert cfg.saucer.spawn_interval is None

    def test_defaults_leave_config_alone(self):
        args = build_parser().parse_args([])
        base = load_config(args.preset)
        assert GameConfig.from_args(args, base=base) is base
