from __future__ import annotations

import sys
from typing import Optional, Protocol, TextIO

from ..engine.snapshot import Snapshot


class Renderer(Protocol):
    def render(self, snapshot: Snapshot) -> None:
        ...


class TextRenderer:
    """Console renderer: one glyph per cell plus a status line."""

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        self.stream = stream or sys.stdout

    @staticmethod
    def status_line(snapshot: Snapshot) -> str:
        return (
            f"Level {snapshot.level_index} | "
            f"HP {snapshot.player_health_percentage}% ({snapshot.player_health}/{snapshot.player_max_health}) | "
            f"Damage {snapshot.player_damage} | "
            f"Enemies {snapshot.enemies_left}"
        )

    def format(self, snapshot: Snapshot) -> str:
        return "\n".join(snapshot.to_lines() + [self.status_line(snapshot)])

    def render(self, snapshot: Snapshot) -> None:
        self.stream.write(self.format(snapshot) + "\n\n")
        self.stream.flush()
