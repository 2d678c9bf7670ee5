from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path

from . import __version__
from .app.runner import run_auto, run_gui, run_headless
from .config import load_config
from .engine.session import GameSession
from .exceptions import ConfigError, GridcrawlError
from .logging_config import configure_logging

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="gridcrawl",
        description="gridcrawl - seeded turn-based dungeon crawler",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--seed", type=int, default=None, help="Base seed (default: from config)")
    parser.add_argument("--config", type=Path, default=None, help="YAML file overlaid on the defaults")
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--gui", action="store_true", help="Force GUI mode (Arcade)")
    mode.add_argument("--headless", action="store_true", help="Force headless mode (console, keys from stdin)")
    parser.add_argument("--max-turns", type=int, default=None, help="Stop after N turns (headless)")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Increase log verbosity (-v, -vv)")

    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    try:
        config = load_config(args.config)
        session = GameSession(config, seed=args.seed)
    except ConfigError as exc:
        logger.error("Configuration error: %s", exc)
        return 2
    except GridcrawlError as exc:
        logger.error("Could not start session: %s", exc)
        return 1

    # Honor CLI over env vars
    if args.gui:
        os.environ.pop("GRIDCRAWL_HEADLESS", None)
        return run_gui(session)

    if args.headless:
        os.environ["GRIDCRAWL_HEADLESS"] = "1"
        return run_headless(session, max_turns=args.max_turns)

    return run_auto(session, max_turns=args.max_turns)


if __name__ == "__main__":
    sys.exit(main())
