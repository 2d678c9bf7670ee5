from __future__ import annotations

from enum import Enum
from typing import Optional

from ..dungeon.grid import Point


class Command(Enum):
    """Discrete player commands; each one resolves a full turn.

    Values are the names used in configuration key bindings.
    """

    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    ATTACK = "attack"

    @property
    def delta(self) -> Point:
        return _DELTAS[self]

    @property
    def is_move(self) -> bool:
        return self is not Command.ATTACK

    @classmethod
    def parse(cls, name: str) -> Optional["Command"]:
        try:
            return cls(name.strip().lower())
        except ValueError:
            return None


_DELTAS = {
    Command.UP: Point(0, -1),
    Command.DOWN: Point(0, 1),
    Command.LEFT: Point(-1, 0),
    Command.RIGHT: Point(1, 0),
    Command.ATTACK: Point(0, 0),
}

__all__ = ["Command"]
