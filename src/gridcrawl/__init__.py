"""
gridcrawl package root.

A small turn-based roguelike: a seeded grid dungeon generator and a
turn-resolution engine. Rendering backends (text, Arcade) live outside the
pure domain modules and only consume session snapshots.
"""

__version__ = "0.1.0"

__all__ = [
    "__version__",
]
