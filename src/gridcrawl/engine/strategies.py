"""Concrete behaviours plugged into player and enemy slots.

Each strategy holds the Level it acts on plus, where needed, a callback into
the session. Disposing an entity swaps these out for NO_BEHAVIOR, which
drops those references.
"""
from __future__ import annotations

import logging
from typing import Callable, Optional

from ..dungeon.tiles import Tile
from ..entities.behaviors import Behavior
from ..entities.living import Enemy, Living, Player
from .level import Level

logger = logging.getLogger(__name__)


class PlayerAttack(Behavior):
    """Hit every enemy on the four orthogonal neighbours for the player's damage."""

    def __init__(self, level: Level) -> None:
        self.level = level

    def perform(self, actor: Living) -> None:
        around = set(actor.position.neighbors_4())
        targets = [enemy for enemy in self.level.enemies.values() if enemy.position in around]
        logger.debug("%r attacks %d adjacent enemies", actor, len(targets))
        for enemy in targets:
            enemy.change_health(-actor.damage)


class EnemyWander(Behavior):
    """Step onto a uniformly random adjacent GROUND cell, or stay put if none."""

    def __init__(self, level: Level) -> None:
        self.level = level

    def perform(self, actor: Living) -> None:
        grid = self.level.grid
        options = [p for p in actor.position.neighbors_4() if grid.safe_get(p.x, p.y) is Tile.GROUND]
        target = self.level.rng.pick_one(options)
        if target is None:
            return
        grid.set(actor.position.x, actor.position.y, Tile.GROUND)
        grid.set(target.x, target.y, Tile.ENEMY)
        actor.position = target


class EnemyStrike(Behavior):
    """Damage the player when it stands on one of the four neighbours.

    ``on_hit`` runs after the damage is applied, and only if the player
    survived it; a lethal hit is reported through the player's death instead.
    """

    def __init__(self, level: Level, on_hit: Optional[Callable[[Player, int], None]] = None) -> None:
        self.level = level
        self.on_hit = on_hit

    def perform(self, actor: Living) -> None:
        player = self.level.player
        if player is None or player.position not in actor.position.neighbors_4():
            return
        player.change_health(-actor.damage)
        # A lethal hit resets the session, which detaches the player from this level.
        if self.on_hit is not None and self.level.player is player:
            self.on_hit(player, actor.damage)


class EnemyDeath(Behavior):
    """Clear the enemy's cell, dispose it and drop it from the live set."""

    def __init__(self, level: Level, on_killed: Callable[[Enemy], None]) -> None:
        self.level = level
        self.on_killed = on_killed

    def perform(self, actor: Living) -> None:
        assert isinstance(actor, Enemy)
        self.level.grid.set(actor.position.x, actor.position.y, Tile.GROUND)
        actor.dispose()
        removed = self.level.enemies.pop(actor.ident, None)
        assert removed is actor, f"{actor!r} was not in the live enemy set"
        logger.debug("%r died; %d enemies left", actor, len(self.level.enemies))
        self.on_killed(actor)


class PlayerDeath(Behavior):
    def __init__(self, on_death: Callable[[Player], None]) -> None:
        self.on_death = on_death

    def perform(self, actor: Living) -> None:
        assert isinstance(actor, Player)
        self.on_death(actor)


__all__ = ["PlayerAttack", "EnemyWander", "EnemyStrike", "EnemyDeath", "PlayerDeath"]
