from enum import Enum, auto


class GameEvent(Enum):
    """Events emitted by GameSession to notify renderers or other observers."""

    LEVEL_STARTED = auto()
    TURN_RESOLVED = auto()
    MOVE_BLOCKED = auto()
    ITEM_PICKED_UP = auto()
    ENEMY_KILLED = auto()
    PLAYER_DAMAGED = auto()
    LEVEL_CLEARED = auto()
    PLAYER_DIED = auto()
