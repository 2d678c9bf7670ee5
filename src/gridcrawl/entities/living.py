from __future__ import annotations

import logging
from typing import Dict, Optional

from ..config import LivingStats
from ..dungeon.grid import Point
from ..dungeon.tiles import Tile
from .behaviors import NO_BEHAVIOR, Behavior, BehaviorSlot

logger = logging.getLogger(__name__)


class Living:
    """Shared entity model: position, health, damage and three behaviour slots.

    Health never exceeds max_health. When a health change leaves it at 0 or
    below, the die behaviour runs once, synchronously, inside that call.
    """

    tile: Tile = Tile.GROUND

    def __init__(self, position: Point, stats: LivingStats) -> None:
        self.position = Point(position.x, position.y)
        self.health = stats.health
        self.damage = stats.damage
        self._max_health = stats.health
        self._died = False
        self._behaviors: Dict[BehaviorSlot, Behavior] = {slot: NO_BEHAVIOR for slot in BehaviorSlot}

    @property
    def max_health(self) -> int:
        return self._max_health

    @property
    def is_alive(self) -> bool:
        return self.health > 0

    @property
    def health_percentage(self) -> int:
        """Health as an integer percentage of max, floored and clamped to 0..100."""
        return max(0, min(100, int(self.health / self._max_health * 100)))

    # ---- Parameters ------------------------------------------------------
    def change_health(self, delta: int) -> None:
        self.health = min(self.health + delta, self._max_health)
        logger.debug("%r health %+d -> %d", self, delta, self.health)
        if self.health <= 0 and not self._died:
            self._died = True
            self._behaviors[BehaviorSlot.DIE].perform(self)

    def change_damage(self, delta: int) -> None:
        self.damage += delta

    # ---- Behaviours ------------------------------------------------------
    def set_behavior(self, slot: BehaviorSlot, behavior: Optional[Behavior]) -> None:
        self._behaviors[slot] = behavior if behavior is not None else NO_BEHAVIOR

    def behavior(self, slot: BehaviorSlot) -> Behavior:
        return self._behaviors[slot]

    def attack(self) -> None:
        self._behaviors[BehaviorSlot.ATTACK].perform(self)

    def move(self) -> None:
        self._behaviors[BehaviorSlot.MOVE].perform(self)

    def dispose(self) -> None:
        """Drop every behaviour so nothing keeps a reference to session state."""
        for slot in BehaviorSlot:
            self._behaviors[slot] = NO_BEHAVIOR

    def __repr__(self) -> str:
        return f"{type(self).__name__}(pos=({self.position.x},{self.position.y}), hp={self.health}/{self._max_health})"


class Player(Living):
    tile = Tile.PLAYER

    def pick_up(self, item: Tile, damage_increment: int = 1, health_increment: int = 1) -> None:
        if item is Tile.SWORD:
            self.change_damage(damage_increment)
        elif item is Tile.HEALTH_POTION:
            self.change_health(health_increment)
        else:
            return
        logger.debug("Player picked up %s (damage=%d, health=%d)", item.name, self.damage, self.health)


class Enemy(Living):
    tile = Tile.ENEMY

    def __init__(self, ident: int, position: Point, stats: LivingStats) -> None:
        super().__init__(position, stats)
        self.ident = ident

    def __repr__(self) -> str:
        return f"Enemy#{self.ident}(pos=({self.position.x},{self.position.y}), hp={self.health}/{self.max_health})"


__all__ = ["Living", "Player", "Enemy"]
