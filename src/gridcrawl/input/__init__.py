"""
Input abstraction layer for gridcrawl.

Exposes:
- InputMapper: rebindable mapping from physical keys to turn commands.
"""
from ..engine.commands import Command
from .mapping import InputMapper

__all__ = [
    "Command",
    "InputMapper",
]
