from __future__ import annotations

import pytest

from gridcrawl.config import GameConfig, LivingStats
from gridcrawl.dungeon.grid import Grid
from gridcrawl.dungeon.tiles import Tile
from gridcrawl.engine.commands import Command
from gridcrawl.engine.events import GameEvent
from gridcrawl.engine.session import GameSession
from gridcrawl.entities import NO_BEHAVIOR, BehaviorSlot
from gridcrawl.exceptions import LevelGenerationError

# Known level-0 layouts with the default config.
SEED_1_LEVEL_0 = [
    "############ee####!#####################",
    "############.e####.#####################",
    "############...###.#####################",
    "############...###!.!e.#################",
    "############.../.......#################",
    "############.........@.#################",
    "############...........#################",
    "############...........#################",
    "...........................!............",
    "############.e.....e...#################",
    "############..####.#####################",
    "############..####.#####################",
    "........................................",
    "############...!....####################",
    "############......e.####################",
    "############........####################",
    "........................................",
    "############..####.#############!#######",
    "############..####.#############.e...../",
    "############..####.#############........",
    "############..####.#############!.......",
    "############e.####.#############........",
    "############..####e#####################",
    "############!!####!#####################",
]
SEED_1_ENEMIES = [(12, 0), (13, 1), (21, 3), (13, 9), (18, 14), (12, 21), (13, 0), (33, 18), (19, 9), (18, 22)]

SEED_7_LEVEL_0 = [
    "#.######.#############e#################",
    "#.######.#############.#################",
    "#/######.#############.############..!..",
    "#.######.#############.############...!.",
    "#.######.#############!###########......",
    "#.######.#############.###########......",
    "#.######.#############.###########.#####",
    "#.######.########.....!..#####.....#####",
    "#.######.########........#####.....#####",
    "#.######.########..........e.......#####",
    "#.######.########e.../...#####.....#####",
    "#.######.########e.......#####.e...#####",
    "#.######.########........###############",
    "#.######.########.....e..###############",
    ".............!................!.........",
    "#.######.#############.###!......#######",
    "#.######.#############.###.......#######",
    "#.######.#############.###!......#######",
    "#.######e#############.###.......#######",
    "#.######.#############.###..e....#######",
    "#.######.#############.###.....#########",
    "..............e.........................",
    "..........!..e.........@................",
    "#.######!#############.#################",
]
SEED_7_ENEMIES = [(17, 11), (17, 10), (22, 0), (8, 18), (22, 13), (14, 21), (27, 9), (28, 19), (31, 11), (13, 22)]

# Seed 1 after UP, RIGHT, ATTACK, LEFT, DOWN, DOWN, RIGHT, ATTACK.
SEED_1_AFTER_SCRIPT = [
    "############..####!#####################",
    "############.e####.#####################",
    "############...###.#####################",
    "############..e###!.!..#################",
    "############..e/.......#################",
    "############.......e...#################",
    "############..........@#################",
    "############...........#################",
    "............e.......e......!............",
    "############...........#################",
    "############..####.#####################",
    "############..####.#####################",
    "....................e...................",
    "############...!....####################",
    "############........####################",
    "############........####################",
    "........................................",
    "############..####.#############!#######",
    "############..####.#############......./",
    "############e.####.#############..e.....",
    "############..####e#############!.......",
    "############..####.#############........",
    "############..####.#####################",
    "############!!####!#####################",
]


def _enemy_positions(session):
    return [(e.position.x, e.position.y) for e in session.enemies.values()]


@pytest.mark.parametrize(
    "seed,lines,player,enemies",
    [
        (1, SEED_1_LEVEL_0, (21, 5), SEED_1_ENEMIES),
        (7, SEED_7_LEVEL_0, (23, 22), SEED_7_ENEMIES),
    ],
)
def test_level_zero_matches_known_layout(seed, lines, player, enemies):
    session = GameSession(seed=seed)
    assert session.grid.to_lines() == lines
    assert (session.player.position.x, session.player.position.y) == player
    assert _enemy_positions(session) == enemies


def test_fresh_level_contents():
    session = GameSession(seed=1)
    grid = session.grid
    assert grid.count(Tile.GROUND) > 0
    assert grid.count(Tile.SWORD) == 2
    assert grid.count(Tile.HEALTH_POTION) == 10
    assert grid.count(Tile.ENEMY) == 10
    assert grid.count(Tile.PLAYER) == 1
    assert session.level.occupancy_errors() == []


def test_scripted_play_is_reproducible():
    session = GameSession(seed=1)
    script = [
        Command.UP,
        Command.RIGHT,
        Command.ATTACK,
        Command.LEFT,
        Command.DOWN,
        Command.DOWN,
        Command.RIGHT,
        Command.ATTACK,
    ]
    for command in script:
        session.apply(command)

    assert session.grid.to_lines() == SEED_1_AFTER_SCRIPT
    player = session.player
    assert (player.position.x, player.position.y) == (22, 6)
    assert (player.health, player.damage) == (2, 1)
    assert session.level_index == 0
    assert len(session.enemies) == 10


def test_killing_last_enemy_advances_level_and_new_enemies_act():
    session = GameSession(seed=1)
    level_zero = session.grid.snapshot()
    session.load_grid(Grid.from_lines([
        "#####",
        "#.e.#",
        "#.@.#",
        "#####",
    ]))
    events = []
    session.add_listener(lambda event, _s: events.append(event))

    result = session.apply(Command.ATTACK)

    assert result.level_changed and result.enemies_acted
    assert session.level_index == 1
    assert session.level.seed == 2
    assert session.grid.snapshot() != level_zero

    # Level n of seed s is level 0 of seed s + n, after its enemies took one step.
    expected = GameSession(seed=2)
    for enemy in list(expected.enemies.values()):
        enemy.move()
        enemy.attack()
    assert session.grid.snapshot() == expected.grid.snapshot()
    assert session.level.rng.state == expected.level.rng.state
    assert session.player.health == expected.player.health
    assert session.level.occupancy_errors() == []

    assert events[:3] == [GameEvent.ENEMY_KILLED, GameEvent.LEVEL_CLEARED, GameEvent.LEVEL_STARTED]
    assert events[-1] is GameEvent.TURN_RESOLVED


def test_player_death_resets_to_level_zero():
    config = GameConfig(enemy=LivingStats(health=10, damage=1))
    session = GameSession(config)
    session.load_grid(Grid.from_lines([
        "#####",
        "#@e##",
        "#.###",
        "#####",
    ]))
    events = []
    session.add_listener(lambda event, _s: events.append(event))

    session.apply(Command.ATTACK)
    session.apply(Command.ATTACK)
    result = session.apply(Command.ATTACK)

    assert result.level_changed
    assert session.level_index == 0
    assert session.player.health == session.player.max_health
    assert session.grid.snapshot() == GameSession(config).grid.snapshot()
    assert GameEvent.PLAYER_DIED in events
    # Only the two survivable hits are reported as damage
    assert events.count(GameEvent.PLAYER_DAMAGED) == 2
    assert events[-2:] == [GameEvent.LEVEL_STARTED, GameEvent.TURN_RESOLVED]


def test_reset_after_advancing_regenerates_level_zero():
    session = GameSession(seed=5)
    original = session.grid.snapshot()
    session.advance()
    session.advance()
    assert session.level_index == 2
    session.reset()
    assert session.level_index == 0
    assert session.grid.snapshot() == original


def test_disposed_level_drops_entities():
    session = GameSession(seed=1)
    old_level = session.level
    old_enemies = list(old_level.enemies.values())
    session.advance()
    assert old_level.player is None
    assert old_level.enemies == {}
    assert all(e.behavior(slot) is NO_BEHAVIOR for e in old_enemies for slot in BehaviorSlot)


def test_snapshot_reports_health_percentages():
    session = GameSession(seed=1)
    snap = session.snapshot()
    assert snap.level_index == 0
    assert snap.enemies_left == 10
    assert snap.player_health_percentage == 100
    assert snap.health_at(21, 5) == 100
    assert snap.health_at(0, 0) is None
    assert len(dict(snap.health)) == 11
    assert snap.to_lines() == SEED_1_LEVEL_0


def test_listener_errors_do_not_break_turns():
    session = GameSession(seed=1)

    def broken(event, _session):
        raise RuntimeError("boom")

    seen = []
    session.add_listener(broken)
    session.add_listener(lambda event, _s: seen.append(event))
    session.apply(Command.ATTACK)
    assert seen[-1] is GameEvent.TURN_RESOLVED

    session.remove_listener(broken)
    session.remove_listener(broken)


def test_load_grid_requires_one_player():
    session = GameSession(seed=1)
    with pytest.raises(LevelGenerationError):
        session.load_grid(Grid.from_lines(["..e"]))


def test_no_ground_for_player_raises():
    config = GameConfig(width=3, height=3, tunnel_count_range=(0, 0), room_count_range=(0, 0), room_size_range=(1, 1))
    with pytest.raises(LevelGenerationError):
        GameSession(config)


# Seed 1 with one enemy per level, attacking every turn: level 0 is cleared
# on turn 252, then level 1's enemy keeps wandering.
ONE_ENEMY_CLEARED_AT = 252
ONE_ENEMY_LEVEL_1_AT_CLEAR = [
    "####.######.!###.#######################",
    "####.######..###.#######################",
    "####.######..###.#######################",
    "####......#..###.#######################",
    "........................................",
    "####...../#..###.############.##########",
    "####......#.!###.############.##########",
    "####.######..###.############.##########",
    "####.######..###.############...########",
    "####.######..###.############...########",
    "####.######.!###.############...########",
    ".....!..................................",
    "####.######......#######............####",
    "####.######......#######............####",
    "####.######..###.#######......!.!...####",
    "####.######..###.#######..........e.####",
    "####.######..###.####...............####",
    "........................................",
    "####..!......###.###.!..............####",
    "####.........###.####.............######",
    "####.........###.#######################",
    "####!@........./.#######################",
    "####.######......#######################",
    "####.######!.....#######################",
]


def test_attack_play_through_crosses_level_boundary():
    session = GameSession(GameConfig(enemy_count=1), seed=1)
    assert _enemy_positions(session) == [(12, 0)]

    for _ in range(ONE_ENEMY_CLEARED_AT - 1):
        session.apply(Command.ATTACK)
    assert session.level_index == 0

    result = session.apply(Command.ATTACK)
    assert result.level_changed
    assert session.level_index == 1
    assert session.grid.to_lines() == ONE_ENEMY_LEVEL_1_AT_CLEAR
    assert (session.player.position.x, session.player.position.y) == (5, 21)
    assert _enemy_positions(session) == [(34, 15)]

    for _ in range(300 - ONE_ENEMY_CLEARED_AT):
        session.apply(Command.ATTACK)
    assert session.level_index == 1
    assert session.player.health == 3
    assert _enemy_positions(session) == [(38, 11)]
    assert session.grid.get(38, 11) is Tile.ENEMY
    assert session.grid.get(34, 15) is Tile.GROUND
