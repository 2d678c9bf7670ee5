from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator, List, Optional, Sequence, Tuple

from .tiles import Tile

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Point:
    x: int
    y: int

    def __add__(self, other: "Point") -> "Point":
        return Point(self.x + other.x, self.y + other.y)

    def neighbors_4(self) -> Tuple["Point", "Point", "Point", "Point"]:
        """Orthogonal neighbours in fixed order: west, east, north, south.

        The order feeds random picks during enemy movement, so it is part of
        the deterministic contract.
        """
        return (
            Point(self.x - 1, self.y),
            Point(self.x + 1, self.y),
            Point(self.x, self.y - 1),
            Point(self.x, self.y + 1),
        )

    def manhattan(self, other: "Point") -> int:
        return abs(self.x - other.x) + abs(self.y - other.y)


@dataclass(frozen=True)
class Rect:
    x: int
    y: int
    w: int
    h: int

    def right(self) -> int:
        return self.x + self.w

    def bottom(self) -> int:
        return self.y + self.h

    def center(self) -> Point:
        return Point(self.x + self.w // 2, self.y + self.h // 2)

    def contains(self, p: Point) -> bool:
        return (self.x <= p.x < self.right()) and (self.y <= p.y < self.bottom())


class Grid:
    """Fixed-size, bounds-checked 2D tile matrix (``tiles[y][x]``).

    Strict accessors (get/set) raise IndexError on off-grid coordinates to make
    misuse obvious. Generation code uses carve(), which silently drops
    off-grid writes.
    """

    __slots__ = ("_w", "_h", "_tiles")

    def __init__(self, width: int, height: int, fill: Tile = Tile.WALL) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("Grid dimensions must be positive")
        self._w = int(width)
        self._h = int(height)
        self._tiles: List[List[Tile]] = [[fill for _ in range(self._w)] for _ in range(self._h)]

    @property
    def width(self) -> int:
        return self._w

    @property
    def height(self) -> int:
        return self._h

    # ---- Safety / Bounds -------------------------------------------------
    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self._w and 0 <= y < self._h

    def get(self, x: int, y: int) -> Tile:
        if not self.in_bounds(x, y):
            raise IndexError(f"Tile out of bounds: ({x},{y}) not in [0,{self._w})x[0,{self._h})")
        return self._tiles[y][x]

    def safe_get(self, x: int, y: int) -> Optional[Tile]:
        if not self.in_bounds(x, y):
            return None
        return self._tiles[y][x]

    def set(self, x: int, y: int, tile: Tile) -> None:
        if not isinstance(tile, Tile):
            raise TypeError("tile must be a Tile enum member")
        if not self.in_bounds(x, y):
            raise IndexError(f"Tile out of bounds: ({x},{y}) not in [0,{self._w})x[0,{self._h})")
        self._tiles[y][x] = tile

    def carve(self, x: int, y: int, tile: Tile = Tile.GROUND) -> bool:
        """Write a tile if in bounds; off-grid writes are dropped."""
        if not self.in_bounds(x, y):
            return False
        self._tiles[y][x] = tile
        return True

    # ---- Carving helpers -------------------------------------------------
    def fill_row(self, y: int, tile: Tile = Tile.GROUND) -> None:
        if not 0 <= y < self._h:
            logger.debug("Skipping fill of off-grid row %d", y)
            return
        self._tiles[y] = [tile] * self._w

    def fill_column(self, x: int, tile: Tile = Tile.GROUND) -> None:
        if not 0 <= x < self._w:
            logger.debug("Skipping fill of off-grid column %d", x)
            return
        for row in self._tiles:
            row[x] = tile

    def fill_rect(self, rect: Rect, tile: Tile = Tile.GROUND) -> None:
        for yy in range(rect.y, rect.bottom()):
            if not 0 <= yy < self._h:
                break
            for xx in range(rect.x, rect.right()):
                self.carve(xx, yy, tile)

    # ---- Query -----------------------------------------------------------
    def rows_containing(self, tile: Tile) -> List[int]:
        return [y for y, row in enumerate(self._tiles) if tile in row]

    def columns_in_row(self, y: int, tile: Tile) -> List[int]:
        return [x for x, t in enumerate(self._tiles[y]) if t is tile]

    def positions_of(self, tile: Tile) -> List[Point]:
        return [Point(x, y) for y, x in self._scan() if self._tiles[y][x] is tile]

    def count(self, tile: Tile) -> int:
        return sum(row.count(tile) for row in self._tiles)

    def _scan(self) -> Iterator[Tuple[int, int]]:
        # Row-major order; generation depends on it for tie-breaking.
        for y in range(self._h):
            for x in range(self._w):
                yield y, x

    def cells(self) -> Iterator[Tuple[Point, Tile]]:
        for y, x in self._scan():
            yield Point(x, y), self._tiles[y][x]

    # ---- Export / Compare -----------------------------------------------
    def snapshot(self) -> Tuple[Tuple[Tile, ...], ...]:
        """Hashable, immutable copy of the tiles for equality tests and renderers."""
        return tuple(tuple(row) for row in self._tiles)

    def to_lines(self) -> List[str]:
        return ["".join(t.glyph for t in row) for row in self._tiles]

    @classmethod
    def from_lines(cls, lines: Sequence[str]) -> "Grid":
        """Build a grid from glyph rows (see Tile.glyph). Rows must be equal width."""
        if not lines:
            raise ValueError("lines must not be empty")
        width = len(lines[0])
        for i, row in enumerate(lines):
            if len(row) != width:
                raise ValueError(f"All rows must have equal width; row 0 has {width}, row {i} has {len(row)}")
        grid = cls(width, len(lines))
        for y, row in enumerate(lines):
            for x, ch in enumerate(row):
                tile = Tile.from_glyph(ch)
                if tile is None:
                    raise ValueError(f"Unknown glyph {ch!r} at ({x},{y})")
                grid._tiles[y][x] = tile
        return grid

    def __str__(self) -> str:
        return "\n".join(self.to_lines())

    def __repr__(self) -> str:
        return f"Grid(width={self._w}, height={self._h})"
