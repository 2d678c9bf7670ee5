from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Tuple

from ..dungeon.grid import Grid, Point
from ..dungeon.tiles import Tile
from ..entities.living import Player
from .commands import Command
from .events import GameEvent
from .level import Level

if TYPE_CHECKING:
    from .session import GameSession

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CollisionResult:
    movable: bool
    tile: Optional[Tile] = None


@dataclass(frozen=True)
class TurnResult:
    """Outcome of one command.

    Attributes:
        command: The command that was resolved.
        ignored: True when no player could act (nothing changed).
        moved: True if the player changed cells.
        enemies_acted: True if the enemy phase ran.
        level_changed: True if the level was cleared or reset during the turn.
        picked_up: Item tile consumed by the player this turn, if any.
    """

    command: Command
    ignored: bool = False
    moved: bool = False
    enemies_acted: bool = False
    level_changed: bool = False
    picked_up: Optional[Tile] = None


def check_collision(grid: Grid, target: Point) -> CollisionResult:
    """The player may enter in-bounds GROUND, SWORD or HEALTH_POTION cells only."""
    tile = grid.safe_get(target.x, target.y)
    if tile is None:
        return CollisionResult(movable=False)
    return CollisionResult(movable=tile.is_passable, tile=tile)


class TurnEngine:
    """Resolves one command into a full tick: player phase, then enemy phase.

    A move that bumps into something ends the turn before enemies act; an
    attack always lets them act. The enemy phase runs on whatever level is
    current once the player phase is over, so clearing a level with an
    attack lets the next level's enemies act once on the same turn. If the
    player dies during the enemy phase, the remaining enemies of that level
    do not act and the freshly reset level stays as generated.
    """

    def __init__(self, session: "GameSession") -> None:
        self._session = session

    def resolve(self, command: Command) -> TurnResult:
        session = self._session
        level = session.level
        player = level.player
        if player is None or not player.is_alive:
            logger.debug("Ignoring %s: no living player", command.name)
            return TurnResult(command=command, ignored=True)

        start = player.position
        hit, picked = self._update_player(level, player, command)
        moved = player.position != start

        if command.is_move and not hit.movable:
            logger.debug("Move %s blocked by %s", command.name, hit.tile.name if hit.tile else "edge")
            session.emit(GameEvent.MOVE_BLOCKED)
            return TurnResult(command=command)

        current = session.level
        if current is not level:
            logger.debug("Level changed during player phase; level %d enemies act", current.index)
        for enemy in list(current.enemies.values()):
            enemy.move()
            enemy.attack()
            if session.level is not current:
                return TurnResult(
                    command=command,
                    moved=moved,
                    enemies_acted=True,
                    level_changed=True,
                    picked_up=picked,
                )

        return TurnResult(
            command=command,
            moved=moved,
            enemies_acted=True,
            level_changed=current is not level,
            picked_up=picked,
        )

    def _update_player(self, level: Level, player: Player, command: Command) -> Tuple[CollisionResult, Optional[Tile]]:
        grid = level.grid
        cfg = self._session.config
        grid.carve(player.position.x, player.position.y, Tile.GROUND)

        candidate = player.position + command.delta
        hit = check_collision(grid, candidate)
        picked: Optional[Tile] = None
        if hit.movable:
            player.position = candidate
            if hit.tile is not None and hit.tile.is_item:
                player.pick_up(hit.tile, cfg.damage_increment, cfg.health_increment)
                picked = hit.tile
                self._session.emit(GameEvent.ITEM_PICKED_UP)

        grid.carve(player.position.x, player.position.y, Tile.PLAYER)

        if command is Command.ATTACK:
            player.attack()
        return hit, picked


__all__ = ["CollisionResult", "TurnResult", "TurnEngine", "check_collision"]
