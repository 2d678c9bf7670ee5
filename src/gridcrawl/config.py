from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple

import yaml

from .engine.commands import Command
from .exceptions import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_RESOURCE = "default_config.yaml"

DEFAULT_KEY_BINDINGS: Tuple[Tuple[str, str], ...] = (
    ("W", "up"),
    ("S", "down"),
    ("A", "left"),
    ("D", "right"),
    ("SPACE", "attack"),
)


@dataclass(frozen=True)
class LivingStats:
    health: int
    damage: int


@dataclass(frozen=True)
class GameConfig:
    """Immutable game configuration passed to the generator, session and input layer.

    Ranges are inclusive ``(min, max)`` pairs.
    """

    seed: int = 1

    width: int = 40
    height: int = 24

    tunnel_count_range: Tuple[int, int] = (3, 5)
    room_count_range: Tuple[int, int] = (5, 10)
    room_size_range: Tuple[int, int] = (3, 8)

    sword_count: int = 2
    health_potion_count: int = 10
    enemy_count: int = 10

    damage_increment: int = 1
    health_increment: int = 1

    player: LivingStats = LivingStats(health=3, damage=1)
    enemy: LivingStats = LivingStats(health=1, damage=1)

    key_bindings: Tuple[Tuple[str, str], ...] = DEFAULT_KEY_BINDINGS

    tile_px: int = 24

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ConfigError(f"Grid size must be positive, got {self.width}x{self.height}")
        for name in ("tunnel_count_range", "room_count_range", "room_size_range"):
            lo, hi = getattr(self, name)
            if lo < 0 or lo > hi:
                raise ConfigError(f"{name} must satisfy 0 <= min <= max, got ({lo}, {hi})")
        _, max_room = self.room_size_range
        if max_room > min(self.width, self.height):
            raise ConfigError(f"Rooms up to {max_room} tiles do not fit a {self.width}x{self.height} grid")
        for name in ("sword_count", "health_potion_count", "enemy_count"):
            if getattr(self, name) < 0:
                raise ConfigError(f"{name} must not be negative")
        for name in ("player", "enemy"):
            stats: LivingStats = getattr(self, name)
            if stats.health <= 0 or stats.damage < 0:
                raise ConfigError(f"Invalid {name} stats: {stats}")
        for key, command in self.key_bindings:
            if Command.parse(command) is None:
                raise ConfigError(f"Key {key!r} bound to unknown command {command!r}")
        if self.tile_px <= 0:
            raise ConfigError("tile_px must be positive")

    def bindings(self) -> Dict[str, Command]:
        return {key: Command.parse(command) for key, command in self.key_bindings}  # type: ignore[misc]

    # ---- Dict / YAML mapping ---------------------------------------------
    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "GameConfig":
        """Build a config from the nested YAML layout (see default_config.yaml).

        Missing sections fall back to dataclass defaults.
        """
        defaults = cls()
        try:
            session = data.get("session") or {}
            grid = data.get("grid") or {}
            gen = data.get("generation") or {}
            items = data.get("items") or {}
            livings = data.get("livings") or {}
            bindings = (data.get("input") or {}).get("bindings")
            display = data.get("display") or {}
            return cls(
                seed=int(session.get("seed", defaults.seed)),
                width=int(grid.get("width", defaults.width)),
                height=int(grid.get("height", defaults.height)),
                tunnel_count_range=_pair(gen.get("tunnel_count", defaults.tunnel_count_range)),
                room_count_range=_pair(gen.get("room_count", defaults.room_count_range)),
                room_size_range=_pair(gen.get("room_size", defaults.room_size_range)),
                sword_count=int(gen.get("swords", defaults.sword_count)),
                health_potion_count=int(gen.get("health_potions", defaults.health_potion_count)),
                enemy_count=int(gen.get("enemies", defaults.enemy_count)),
                damage_increment=int(items.get("damage_increment", defaults.damage_increment)),
                health_increment=int(items.get("health_increment", defaults.health_increment)),
                player=_stats(livings.get("player"), defaults.player),
                enemy=_stats(livings.get("enemy"), defaults.enemy),
                key_bindings=(
                    tuple((str(k).upper(), str(v)) for k, v in bindings.items())
                    if bindings
                    else defaults.key_bindings
                ),
                tile_px=int(display.get("tile_px", defaults.tile_px)),
            )
        except (TypeError, ValueError, AttributeError) as exc:
            raise ConfigError(f"Malformed configuration: {exc}") from exc

    def to_dict(self) -> Dict[str, Any]:
        return {
            "session": {"seed": self.seed},
            "grid": {"width": self.width, "height": self.height},
            "generation": {
                "tunnel_count": list(self.tunnel_count_range),
                "room_count": list(self.room_count_range),
                "room_size": list(self.room_size_range),
                "swords": self.sword_count,
                "health_potions": self.health_potion_count,
                "enemies": self.enemy_count,
            },
            "items": {
                "damage_increment": self.damage_increment,
                "health_increment": self.health_increment,
            },
            "livings": {
                "player": dataclasses.asdict(self.player),
                "enemy": dataclasses.asdict(self.enemy),
            },
            "input": {"bindings": dict(self.key_bindings)},
            "display": {"tile_px": self.tile_px},
        }


def _pair(value: Any) -> Tuple[int, int]:
    lo, hi = value
    return int(lo), int(hi)


def _stats(value: Optional[Mapping[str, Any]], default: LivingStats) -> LivingStats:
    value = value or {}
    return LivingStats(
        health=int(value.get("health", default.health)),
        damage=int(value.get("damage", default.damage)),
    )


def _deep_merge(base: dict, overlay: dict) -> dict:
    merged = dict(base)
    for k, v in (overlay or {}).items():
        if isinstance(v, dict) and isinstance(base.get(k), dict):
            merged[k] = _deep_merge(base[k], v)
        else:
            merged[k] = v
    return merged


def _load_yaml(path: Path) -> dict:
    try:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Top-level YAML in {path} must be a mapping")
    return data


def load_config(user_path: Optional[Path] = None) -> GameConfig:
    """Load built-in defaults and overlay an optional user YAML file.

    A user_path that does not exist is an error: it was asked for explicitly.
    """
    try:
        with resources.files("gridcrawl").joinpath(DEFAULT_CONFIG_RESOURCE).open("r", encoding="utf-8") as f:
            default_data = yaml.safe_load(f) or {}
    except FileNotFoundError:
        logger.warning("Default config resource not found; falling back to dataclass defaults.")
        default_data = GameConfig().to_dict()

    user_data: dict = {}
    if user_path is not None:
        if not user_path.exists():
            raise ConfigError(f"Config file not found: {user_path}")
        user_data = _load_yaml(user_path)
        logger.info("Loaded user config from %s", user_path)

    merged = _deep_merge(default_data, user_data)
    config = GameConfig.from_dict(merged)
    logger.debug("Config merged: %s", config)
    return config


def save_config(config: GameConfig, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        yaml.safe_dump(config.to_dict(), f, sort_keys=False)
    logger.info("Saved config to %s", path)


__all__ = ["GameConfig", "LivingStats", "load_config", "save_config"]
