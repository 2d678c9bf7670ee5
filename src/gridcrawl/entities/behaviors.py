from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .living import Living


class BehaviorSlot(Enum):
    ATTACK = "attack"
    MOVE = "move"
    DIE = "die"


class Behavior:
    """Strategy object plugged into one of a Living's behaviour slots.

    Subclasses implement perform(); the acting entity is passed in so one
    behaviour class can serve many entities.
    """

    def perform(self, actor: "Living") -> None:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class NoBehavior(Behavior):
    """Explicit do-nothing variant; also what disposed entities fall back to."""

    def perform(self, actor: "Living") -> None:
        return None


NO_BEHAVIOR = NoBehavior()

__all__ = ["Behavior", "BehaviorSlot", "NoBehavior", "NO_BEHAVIOR"]
