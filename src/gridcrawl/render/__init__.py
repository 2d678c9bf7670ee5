"""Renderers consume session snapshots; they never mutate game state."""
from .text import Renderer, TextRenderer

__all__ = ["Renderer", "TextRenderer"]
