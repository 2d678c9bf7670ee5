from __future__ import annotations

from pathlib import Path

import pytest

from gridcrawl.config import GameConfig, LivingStats, load_config, save_config
from gridcrawl.engine.commands import Command
from gridcrawl.exceptions import ConfigError


def test_packaged_defaults_match_dataclass_defaults():
    assert load_config() == GameConfig()


def test_user_file_is_deep_merged(tmp_path: Path):
    user = tmp_path / "user.yaml"
    user.write_text(
        "session:\n"
        "  seed: 42\n"
        "generation:\n"
        "  enemies: 3\n"
        "livings:\n"
        "  player:\n"
        "    health: 5\n",
        encoding="utf-8",
    )
    cfg = load_config(user)
    assert cfg.seed == 42
    assert cfg.enemy_count == 3
    assert cfg.player == LivingStats(health=5, damage=1)
    # Untouched keys keep their defaults
    assert cfg.sword_count == 2
    assert cfg.room_size_range == (3, 8)


def test_missing_user_file_is_an_error(tmp_path: Path):
    with pytest.raises(ConfigError):
        load_config(tmp_path / "nope.yaml")


def test_invalid_yaml_is_an_error(tmp_path: Path):
    bad = tmp_path / "bad.yaml"
    bad.write_text("grid: [1, 2\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(bad)


def test_non_mapping_yaml_is_an_error(tmp_path: Path):
    bad = tmp_path / "list.yaml"
    bad.write_text("- 1\n- 2\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(bad)


@pytest.mark.parametrize(
    "kwargs",
    [
        {"width": 0},
        {"room_count_range": (5, 2)},
        {"room_size_range": (3, 30)},
        {"enemy_count": -1},
        {"player": LivingStats(health=0, damage=1)},
        {"key_bindings": (("X", "jump"),)},
        {"tile_px": 0},
    ],
)
def test_validation_rejects_bad_values(kwargs):
    with pytest.raises(ConfigError):
        GameConfig(**kwargs)


def test_malformed_values_raise_config_error():
    with pytest.raises(ConfigError):
        GameConfig.from_dict({"grid": {"width": "wide"}})
    with pytest.raises(ConfigError):
        GameConfig.from_dict({"generation": {"room_count": 5}})


def test_bindings_resolve_to_commands():
    cfg = GameConfig()
    assert cfg.bindings() == {
        "W": Command.UP,
        "S": Command.DOWN,
        "A": Command.LEFT,
        "D": Command.RIGHT,
        "SPACE": Command.ATTACK,
    }


def test_save_then_load(tmp_path: Path):
    cfg = GameConfig(seed=9, width=30, height=20, enemy_count=4)
    path = tmp_path / "nested" / "cfg.yaml"
    save_config(cfg, path)
    assert path.exists()
    assert load_config(path) == cfg
