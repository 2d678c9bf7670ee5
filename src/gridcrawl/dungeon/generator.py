from __future__ import annotations

import logging
from enum import Enum, auto
from typing import List, Optional

from ..config import GameConfig
from ..core.rng import SeededRandom
from .grid import Grid, Point, Rect
from .tiles import Tile

logger = logging.getLogger(__name__)


class TunnelOrientation(Enum):
    HORIZONTAL = auto()
    VERTICAL = auto()


def find_spawn_place(grid: Grid, rng: SeededRandom) -> Optional[Point]:
    """Pick a random GROUND cell in two stages: a row, then a column within it.

    Rows are chosen uniformly among rows that hold any GROUND, so cells in
    sparse rows are more likely than cells in dense ones. Returns None when
    the grid has no GROUND left.
    """
    y = rng.pick_one(grid.rows_containing(Tile.GROUND))
    if y is None:
        return None
    x = rng.pick_one(grid.columns_in_row(y, Tile.GROUND))
    if x is None:
        return None
    return Point(x, y)


def place_tile(grid: Grid, rng: SeededRandom, tile: Tile) -> Optional[Point]:
    """Write ``tile`` at a random spawn place; None if there was no room."""
    position = find_spawn_place(grid, rng)
    if position is None:
        logger.debug("No spawn place left for %s", tile.name)
        return None
    grid.set(position.x, position.y, tile)
    return position


class LevelGenerator:
    """
    Tunnel + room carving generator.

    Guarantees:
    - Deterministic layout for a given RNG seed (draw order is fixed)
    - Never writes outside the grid
    - Every room after the first one that finds GROUND outside itself is
      linked to it by an L-shaped corridor
    """

    def __init__(self, config: Optional[GameConfig] = None) -> None:
        self.config = config or GameConfig()

    def generate(self, rng: SeededRandom) -> Grid:
        """Carve a full level (terrain plus items) and return its grid."""
        cfg = self.config
        grid = Grid(cfg.width, cfg.height, fill=Tile.WALL)
        logger.debug("Generating level: rng=%r size=%dx%d", rng, cfg.width, cfg.height)

        self.carve_tunnels(grid, rng)
        rooms = self.carve_rooms(grid, rng)
        self.place_items(grid, rng)

        logger.info(
            "Generated level: %d rooms, %d ground, %d swords, %d potions",
            len(rooms),
            grid.count(Tile.GROUND),
            grid.count(Tile.SWORD),
            grid.count(Tile.HEALTH_POTION),
        )
        return grid

    # ---- Tunnels ---------------------------------------------------------
    def carve_tunnels(self, grid: Grid, rng: SeededRandom) -> None:
        for orientation in (TunnelOrientation.HORIZONTAL, TunnelOrientation.VERTICAL):
            count = rng.range_int(*self.config.tunnel_count_range)
            logger.debug("Carving %d %s tunnels", count, orientation.name.lower())
            for _ in range(count):
                self._carve_tunnel(grid, rng, orientation)

    def _carve_tunnel(self, grid: Grid, rng: SeededRandom, orientation: TunnelOrientation) -> None:
        if orientation is TunnelOrientation.HORIZONTAL:
            grid.fill_row(rng.range_int(0, grid.height - 1))
            return
        # The column is the index of a random row holding GROUND, reused as an x coordinate.
        column = rng.pick_one(grid.rows_containing(Tile.GROUND))
        if column is None:
            return
        grid.fill_column(column)

    # ---- Rooms -----------------------------------------------------------
    def carve_rooms(self, grid: Grid, rng: SeededRandom) -> List[Rect]:
        count = rng.range_int(*self.config.room_count_range)
        rooms: List[Rect] = []
        for _ in range(count):
            rooms.append(self._carve_room(grid, rng))
        return rooms

    def _carve_room(self, grid: Grid, rng: SeededRandom) -> Rect:
        size_lo, size_hi = self.config.room_size_range
        w = rng.range_int(size_lo, size_hi)
        h = rng.range_int(size_lo, size_hi)
        x = rng.range_int(0, grid.width - w)
        y = rng.range_int(0, grid.height - h)
        room = Rect(x, y, w, h)
        grid.fill_rect(room)

        target = self.closest_ground_outside(grid, room)
        logger.debug("Room %s -> corridor target %s", room, target)
        if target is not None:
            self.carve_corridor(grid, room.center(), target)
        return room

    @staticmethod
    def closest_ground_outside(grid: Grid, room: Rect) -> Optional[Point]:
        """Nearest GROUND cell outside ``room`` by Manhattan distance from its top-left corner.

        Ties go to the first cell in row-major order.
        """
        corner = Point(room.x, room.y)
        closest: Optional[Point] = None
        best = None
        for p, tile in grid.cells():
            if tile is not Tile.GROUND or room.contains(p):
                continue
            d = p.manhattan(corner)
            if best is None or d < best:
                best = d
                closest = p
        return closest

    @staticmethod
    def carve_corridor(grid: Grid, start: Point, target: Point) -> None:
        """Carve an L corridor: along start's row to target.x, then along target's column to target.y.

        The target column and target row are excluded from their respective
        legs (the target is already GROUND). Off-grid cells are dropped.
        """
        step_x = 1 if target.x > start.x else -1
        x = start.x
        while x != target.x:
            grid.carve(x, start.y)
            x += step_x

        step_y = 1 if target.y > start.y else -1
        y = start.y
        while y != target.y:
            grid.carve(target.x, y)
            y += step_y

    # ---- Items -----------------------------------------------------------
    def place_items(self, grid: Grid, rng: SeededRandom) -> None:
        for tile, count in (
            (Tile.SWORD, self.config.sword_count),
            (Tile.HEALTH_POTION, self.config.health_potion_count),
        ):
            for _ in range(count):
                place_tile(grid, rng, tile)


__all__ = ["LevelGenerator", "TunnelOrientation", "find_spawn_place", "place_tile"]
