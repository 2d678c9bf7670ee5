from enum import Enum, auto
from typing import Dict, Optional, Tuple


class Tile(Enum):
    """Grid cell types.

    - GROUND: open floor, the only tile enemies may step onto
    - WALL: solid rock
    - PLAYER / ENEMY: occupied by a living entity (mirrors its position)
    - SWORD / HEALTH_POTION: items, consumed when the player walks over them
    """

    GROUND = auto()
    WALL = auto()
    PLAYER = auto()
    ENEMY = auto()
    SWORD = auto()
    HEALTH_POTION = auto()

    @property
    def is_passable(self) -> bool:
        """Whether the player may move onto this tile."""
        return self in PASSABLE_TILES

    @property
    def is_item(self) -> bool:
        return self in ITEM_TILES

    @property
    def glyph(self) -> str:
        """Single-character form used by the text renderer, logs and tests."""
        return _GLYPHS[self]

    @property
    def color(self) -> Tuple[int, int, int]:
        """Default RGB color for the Arcade renderer."""
        return _COLORS[self]

    @classmethod
    def from_glyph(cls, ch: str) -> Optional["Tile"]:
        return _BY_GLYPH.get(ch)


PASSABLE_TILES = frozenset({Tile.GROUND, Tile.SWORD, Tile.HEALTH_POTION})
ITEM_TILES = frozenset({Tile.SWORD, Tile.HEALTH_POTION})
LIVING_TILES = frozenset({Tile.PLAYER, Tile.ENEMY})

_GLYPHS: Dict[Tile, str] = {
    Tile.GROUND: ".",
    Tile.WALL: "#",
    Tile.PLAYER: "@",
    Tile.ENEMY: "e",
    Tile.SWORD: "/",
    Tile.HEALTH_POTION: "!",
}

_BY_GLYPH: Dict[str, Tile] = {glyph: tile for tile, glyph in _GLYPHS.items()}

_COLORS: Dict[Tile, Tuple[int, int, int]] = {
    Tile.GROUND: (180, 180, 170),
    Tile.WALL: (40, 40, 48),
    Tile.PLAYER: (60, 180, 255),
    Tile.ENEMY: (200, 60, 60),
    Tile.SWORD: (220, 200, 90),
    Tile.HEALTH_POTION: (90, 200, 110),
}
