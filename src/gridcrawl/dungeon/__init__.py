"""
Dungeon systems for gridcrawl.

Contains the tile/grid model and the seeded tunnel + room level generator.
"""
