from __future__ import annotations

import itertools
import logging
from typing import Callable, Dict, List, Optional

from ..config import GameConfig
from ..core.rng import SeededRandom
from ..dungeon.generator import LevelGenerator, place_tile
from ..dungeon.grid import Grid, Point
from ..dungeon.tiles import Tile
from ..entities.behaviors import BehaviorSlot
from ..entities.living import Enemy, Player
from ..exceptions import LevelGenerationError
from .commands import Command
from .events import GameEvent
from .level import Level
from .snapshot import Snapshot
from .strategies import EnemyDeath, EnemyStrike, EnemyWander, PlayerAttack, PlayerDeath
from .turns import TurnEngine, TurnResult

logger = logging.getLogger(__name__)

Listener = Callable[[GameEvent, "GameSession"], None]


class GameSession:
    """Holds the run state: base seed, level index and the current Level.

    Every level is generated from ``SeededRandom(seed + level_index)``.
    Clearing the last enemy advances to the next level; the player dying
    resets to level 0. Both rebuild the level from scratch after disposing
    the old entities.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None,
        generator: Optional[LevelGenerator] = None,
    ) -> None:
        self.config = config or GameConfig()
        self._seed = self.config.seed if seed is None else int(seed)
        self._generator = generator or LevelGenerator(self.config)
        self._listeners: List[Listener] = []
        self._turns = TurnEngine(self)
        self._level_index = 0
        self.level: Level = self._build_level(self._level_index)
        logger.info("Session started with seed %d", self._seed)

    # ---- State -----------------------------------------------------------
    @property
    def seed(self) -> int:
        return self._seed

    @property
    def level_index(self) -> int:
        return self._level_index

    @property
    def grid(self) -> Grid:
        return self.level.grid

    @property
    def player(self) -> Optional[Player]:
        return self.level.player

    @property
    def enemies(self) -> Dict[int, Enemy]:
        return self.level.enemies

    def snapshot(self) -> Snapshot:
        return Snapshot.from_level(self.level)

    # ---- Observers -------------------------------------------------------
    def add_listener(self, listener: Listener) -> None:
        """Subscribe to game events (turns, kills, level changes)."""
        self._listeners.append(listener)

    def remove_listener(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def emit(self, event: GameEvent) -> None:
        for listener in list(self._listeners):
            try:
                listener(event, self)
            except Exception as ex:  # pragma: no cover - listeners shouldn't crash the engine
                logger.exception("Listener errored on %s: %s", event, ex)

    # ---- Turns -----------------------------------------------------------
    def apply(self, command: Command) -> TurnResult:
        """Resolve one command into a full turn and notify listeners."""
        result = self._turns.resolve(command)
        if not result.ignored:
            logger.debug("Turn resolved: %s", result)
            self.emit(GameEvent.TURN_RESOLVED)
        return result

    # ---- Level lifecycle -------------------------------------------------
    def advance(self) -> None:
        self._level_index += 1
        logger.info("Level cleared; advancing to level %d", self._level_index)
        self._restart()

    def reset(self) -> None:
        self._level_index = 0
        logger.info("Player died; restarting at level 0")
        self._restart()

    def _restart(self) -> None:
        self.level.dispose()
        self.level = self._build_level(self._level_index)
        self.emit(GameEvent.LEVEL_STARTED)

    def _build_level(self, index: int) -> Level:
        level_seed = self._seed + index
        rng = SeededRandom(level_seed)
        grid = self._generator.generate(rng)
        level = Level(index=index, seed=level_seed, rng=rng, grid=grid)
        self._spawn_player(level)
        self._spawn_enemies(level)
        logger.info("Level %d ready (seed %d, %d enemies)", index, level_seed, len(level.enemies))
        return level

    def load_grid(self, grid: Grid) -> Level:
        """Replace the current level with a hand-made grid.

        A player is created on the PLAYER tile and an enemy on every ENEMY
        tile (row-major order). The level keeps the current index and its
        derived seed. Used for custom maps and scripted tests.
        """
        players = grid.positions_of(Tile.PLAYER)
        if len(players) != 1:
            raise LevelGenerationError(f"Grid must hold exactly one player tile, found {len(players)}")
        level_seed = self._seed + self._level_index
        self.level.dispose()
        level = Level(index=self._level_index, seed=level_seed, rng=SeededRandom(level_seed), grid=grid)
        self._add_player(level, players[0])
        for ident, position in enumerate(grid.positions_of(Tile.ENEMY)):
            self._add_enemy(level, ident, position)
        self.level = level
        logger.info("Loaded custom grid %dx%d with %d enemies", grid.width, grid.height, len(level.enemies))
        self.emit(GameEvent.LEVEL_STARTED)
        return level

    def _spawn_player(self, level: Level) -> None:
        position = place_tile(level.grid, level.rng, Tile.PLAYER)
        if position is None:
            raise LevelGenerationError(f"No ground left to place the player on level {level.index}")
        self._add_player(level, position)

    def _spawn_enemies(self, level: Level) -> None:
        idents = itertools.count()
        for _ in range(self.config.enemy_count):
            position = place_tile(level.grid, level.rng, Tile.ENEMY)
            if position is None:
                continue
            self._add_enemy(level, next(idents), position)

    def _add_player(self, level: Level, position: Point) -> None:
        player = Player(position, self.config.player)
        player.set_behavior(BehaviorSlot.ATTACK, PlayerAttack(level))
        player.set_behavior(BehaviorSlot.DIE, PlayerDeath(self._on_player_died))
        level.player = player

    def _add_enemy(self, level: Level, ident: int, position: Point) -> None:
        enemy = Enemy(ident, position, self.config.enemy)
        enemy.set_behavior(BehaviorSlot.MOVE, EnemyWander(level))
        enemy.set_behavior(BehaviorSlot.ATTACK, EnemyStrike(level, self._on_player_hit))
        enemy.set_behavior(BehaviorSlot.DIE, EnemyDeath(level, self._on_enemy_killed))
        level.enemies[enemy.ident] = enemy

    # ---- Behaviour callbacks ---------------------------------------------
    def _on_player_hit(self, player: Player, damage: int) -> None:
        logger.debug("Player hit for %d", damage)
        self.emit(GameEvent.PLAYER_DAMAGED)

    def _on_enemy_killed(self, enemy: Enemy) -> None:
        self.emit(GameEvent.ENEMY_KILLED)
        if not self.level.enemies:
            self.emit(GameEvent.LEVEL_CLEARED)
            self.advance()

    def _on_player_died(self, player: Player) -> None:
        self.emit(GameEvent.PLAYER_DIED)
        self.reset()


__all__ = ["GameSession", "Listener"]
