import logging
import os


def configure_logging(verbosity: int = 0) -> None:
    """Configure the root logger.

    -v maps to INFO, -vv to DEBUG; the GRIDCRAWL_LOG_LEVEL env var, if set,
    wins over both.
    """
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    level_name = os.getenv("GRIDCRAWL_LOG_LEVEL")
    if level_name:
        level = getattr(logging, level_name.upper(), level)
    logging.basicConfig(
        level=level,
        format="[%(asctime)s] %(levelname)s %(name)s: %(message)s",
    )
