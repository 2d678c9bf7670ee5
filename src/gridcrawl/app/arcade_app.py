from __future__ import annotations

import logging

import arcade

from ..dungeon.tiles import LIVING_TILES
from ..engine.events import GameEvent
from ..engine.session import GameSession
from ..input.mapping import InputMapper

logger = logging.getLogger(__name__)

MARGIN = 2
STATUS_BAR_PX = 28
HEALTH_BAR_PX = 4


class GridWindow(arcade.Window):
    """Arcade window drawing the session grid and forwarding key presses as commands.

    Rendering only reads session snapshots; every accepted key resolves one
    full turn before the next draw.
    """

    def __init__(self, session: GameSession, mapper: InputMapper) -> None:
        self.session = session
        self.mapper = mapper
        self.tile_px = session.config.tile_px
        width = session.config.width * self.tile_px
        height = session.config.height * self.tile_px + STATUS_BAR_PX
        super().__init__(width, height, title=self._caption())
        self.background_color = arcade.color.BLACK
        for name in mapper.bound_keys:
            code = getattr(arcade.key, name, None)
            if code is not None:
                mapper.set_alias(code, name)
        session.add_listener(self._on_event)
        logger.info("Arcade window initialized (%dx%d)", width, height)

    def _caption(self) -> str:
        return f"gridcrawl - level {self.session.level_index}"

    def _on_event(self, event: GameEvent, session: GameSession) -> None:
        if event is GameEvent.LEVEL_STARTED:
            self.set_caption(self._caption())

    def on_draw(self) -> None:
        self.clear()
        snapshot = self.session.snapshot()
        ts = self.tile_px
        rows = snapshot.height
        for y, row in enumerate(snapshot.tiles):
            bottom = STATUS_BAR_PX + (rows - 1 - y) * ts
            for x, tile in enumerate(row):
                left = x * ts
                arcade.draw_lrbt_rectangle_filled(
                    left + MARGIN / 2, left + ts - MARGIN / 2, bottom + MARGIN / 2, bottom + ts - MARGIN / 2, tile.color
                )
                if tile in LIVING_TILES:
                    pct = snapshot.health_at(x, y) or 0
                    top = bottom + ts - MARGIN / 2
                    arcade.draw_lrbt_rectangle_filled(
                        left + MARGIN / 2, left + MARGIN / 2 + (ts - MARGIN) * pct / 100, top - HEALTH_BAR_PX, top, (80, 220, 120)
                    )
        arcade.draw_text(
            f"Level {snapshot.level_index}   HP {snapshot.player_health_percentage}%   "
            f"Damage {snapshot.player_damage}   Enemies {snapshot.enemies_left}",
            8,
            8,
            arcade.color.WHITE,
            14,
        )

    def on_key_press(self, symbol: int, modifiers: int) -> None:
        if symbol == arcade.key.ESCAPE:
            self.close()
            return
        command = self.mapper.on_key_event(symbol)
        if command is not None:
            self.session.apply(command)
