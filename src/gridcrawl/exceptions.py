class GridcrawlError(Exception):
    """Base exception for the gridcrawl project."""


class ConfigError(GridcrawlError):
    """Raised when a configuration file or value is invalid."""


class LevelGenerationError(GridcrawlError):
    """Raised when a generated level cannot host the player."""
