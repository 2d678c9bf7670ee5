"""Core primitives shared by generation and gameplay."""
from .rng import SeededRandom

__all__ = ["SeededRandom"]
