from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import List, Mapping, Optional, Tuple

from ..dungeon.grid import Point
from ..dungeon.tiles import Tile
from .level import Level


@dataclass(frozen=True)
class Snapshot:
    """Read-only view of the session after a turn, consumed by renderers.

    ``health`` maps every PLAYER/ENEMY cell to that entity's health percentage.
    """

    level_index: int
    tiles: Tuple[Tuple[Tile, ...], ...]
    health: Mapping[Point, int]
    player_health: int
    player_max_health: int
    player_damage: int
    enemies_left: int

    @classmethod
    def from_level(cls, level: Level) -> "Snapshot":
        health = {living.position: living.health_percentage for living in level.livings()}
        player = level.player
        return cls(
            level_index=level.index,
            tiles=level.grid.snapshot(),
            health=MappingProxyType(health),
            player_health=player.health if player else 0,
            player_max_health=player.max_health if player else 0,
            player_damage=player.damage if player else 0,
            enemies_left=len(level.enemies),
        )

    @property
    def width(self) -> int:
        return len(self.tiles[0]) if self.tiles else 0

    @property
    def height(self) -> int:
        return len(self.tiles)

    def tile_at(self, x: int, y: int) -> Tile:
        return self.tiles[y][x]

    def health_at(self, x: int, y: int) -> Optional[int]:
        return self.health.get(Point(x, y))

    @property
    def player_health_percentage(self) -> int:
        if not self.player_max_health:
            return 0
        return max(0, min(100, int(self.player_health / self.player_max_health * 100)))

    def to_lines(self) -> List[str]:
        return ["".join(t.glyph for t in row) for row in self.tiles]
