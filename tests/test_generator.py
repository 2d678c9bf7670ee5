from __future__ import annotations

import pytest

from gridcrawl.config import GameConfig
from gridcrawl.core.rng import SeededRandom
from gridcrawl.dungeon.generator import LevelGenerator
from gridcrawl.dungeon.grid import Grid, Point, Rect
from gridcrawl.dungeon.tiles import Tile

# Tunnels and rooms only, seed 1, default 40x24 config.
SEED_1_TERRAIN = [
    "############..####.#####################",
    "############..####.#####################",
    "############...###.#####################",
    "############...###.....#################",
    "############...........#################",
    "############...........#################",
    "############...........#################",
    "############...........#################",
    "........................................",
    "############...........#################",
    "############..####.#####################",
    "############..####.#####################",
    "........................................",
    "############........####################",
    "############........####################",
    "############........####################",
    "........................................",
    "############..####.#############.#######",
    "############..####.#############........",
    "############..####.#############........",
    "############..####.#############........",
    "############..####.#############........",
    "############..####.#####################",
    "############..####.#####################",
]


def _terrain(seed: int, config: GameConfig = GameConfig()) -> Grid:
    gen = LevelGenerator(config)
    rng = SeededRandom(seed)
    grid = Grid(config.width, config.height)
    gen.carve_tunnels(grid, rng)
    gen.carve_rooms(grid, rng)
    return grid


def test_terrain_for_seed_1_matches_known_layout():
    assert _terrain(1).to_lines() == SEED_1_TERRAIN


def test_generate_places_configured_items():
    grid = LevelGenerator().generate(SeededRandom(1))
    assert grid.count(Tile.GROUND) > 0
    assert grid.count(Tile.SWORD) == 2
    assert grid.count(Tile.HEALTH_POTION) == 10
    assert grid.count(Tile.PLAYER) == 0
    assert grid.count(Tile.ENEMY) == 0


@pytest.mark.parametrize("seed", [0, 1, 2, 7, 42, 1000, 2**31])
def test_generation_is_deterministic(seed):
    a = LevelGenerator().generate(SeededRandom(seed))
    b = LevelGenerator().generate(SeededRandom(seed))
    assert a.snapshot() == b.snapshot()


def test_different_seeds_give_different_levels():
    a = LevelGenerator().generate(SeededRandom(1))
    b = LevelGenerator().generate(SeededRandom(2))
    assert a.snapshot() != b.snapshot()


@pytest.mark.parametrize(
    "width,height,room_size",
    [(10, 8, (3, 5)), (8, 8, (3, 8)), (60, 30, (3, 8)), (5, 40, (2, 4))],
)
def test_other_grid_sizes_stay_in_bounds(width, height, room_size):
    config = GameConfig(width=width, height=height, room_size_range=room_size)
    for seed in range(25):
        grid = LevelGenerator(config).generate(SeededRandom(seed))
        assert (grid.width, grid.height) == (width, height)
        assert len(grid.to_lines()) == height
        assert all(len(line) == width for line in grid.to_lines())


def test_closest_ground_outside_prefers_row_major_on_ties():
    g = Grid.from_lines([
        "##.##",
        "#####",
        ".###.",
        "#####",
        "#####",
    ])
    room = Rect(2, 2, 1, 1)
    # (2,0), (0,2) and (4,2) are all two steps from the corner; (2,0) comes first.
    assert LevelGenerator.closest_ground_outside(g, room) == Point(2, 0)


def test_closest_ground_outside_none_when_room_is_only_ground():
    g = Grid(6, 6)
    room = Rect(1, 1, 3, 3)
    g.fill_rect(room)
    assert LevelGenerator.closest_ground_outside(g, room) is None


def test_corridor_runs_along_row_then_column_excluding_target_row():
    g = Grid(6, 5)
    LevelGenerator.carve_corridor(g, Point(1, 1), Point(4, 3))
    assert g.to_lines() == [
        "######",
        "#....#",
        "####.#",
        "######",
        "######",
    ]


def test_corridor_drops_off_grid_cells():
    g = Grid(3, 3)
    LevelGenerator.carve_corridor(g, Point(5, 1), Point(1, -2))
    # Row leg: x=5..2 on y=1, only x=2 is on the grid. Column leg: x=1, y=1..-1.
    assert g.to_lines() == [
        "#.#",
        "#..",
        "###",
    ]
