from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional

from ..core.rng import SeededRandom
from ..dungeon.grid import Grid, Point
from ..dungeon.tiles import LIVING_TILES, Tile
from ..entities.living import Enemy, Living, Player

logger = logging.getLogger(__name__)


@dataclass
class Level:
    """One generated grid plus the entities living on it.

    ``enemies`` is keyed by Enemy.ident; dict insertion order is the order
    enemies act in during a turn.
    """

    index: int
    seed: int
    rng: SeededRandom
    grid: Grid
    player: Optional[Player] = None
    enemies: Dict[int, Enemy] = field(default_factory=dict)

    def livings(self) -> Iterator[Living]:
        if self.player is not None:
            yield self.player
        yield from self.enemies.values()

    def occupancy_errors(self) -> List[str]:
        """List mismatches between PLAYER/ENEMY tiles and tracked entity positions.

        An empty list means the grid and the entities agree exactly.
        """
        errors: List[str] = []
        tracked: Dict[Point, Tile] = {}
        for living in self.livings():
            if living.position in tracked:
                errors.append(f"two entities tracked at {living.position}")
            tracked[living.position] = living.tile
        for p, tile in self.grid.cells():
            expected = tracked.get(p)
            if tile in LIVING_TILES and expected is not tile:
                errors.append(f"{tile.name} tile at {p} has no matching entity")
            elif expected is not None and tile is not expected:
                errors.append(f"{expected.name} tracked at {p} but grid holds {tile.name}")
        return errors

    def dispose(self) -> None:
        """Clear every entity's behaviours and drop them."""
        for living in self.livings():
            living.dispose()
        self.enemies = {}
        self.player = None
        logger.debug("Disposed level %d", self.index)
