"""Living entities (player and enemies) and their pluggable behaviours."""
from .behaviors import NO_BEHAVIOR, Behavior, BehaviorSlot
from .living import Enemy, Living, Player

__all__ = ["Behavior", "BehaviorSlot", "NO_BEHAVIOR", "Living", "Player", "Enemy"]
