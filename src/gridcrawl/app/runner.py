from __future__ import annotations

import logging
import os
import sys
from typing import Optional, TextIO

from ..engine.session import GameSession
from ..input.mapping import InputMapper
from ..render.text import TextRenderer

logger = logging.getLogger(__name__)

QUIT_KEY = "q"


def _arcade_available() -> bool:
    try:
        import arcade  # noqa: F401
        return True
    except Exception:
        return False


def run_gui(session: GameSession, mapper: Optional[InputMapper] = None) -> int:
    """Run the Arcade front end if available, otherwise fall back to headless.

    Returns:
        Process exit code (0 on success).
    """
    if not _arcade_available():
        logger.warning("Arcade not available; falling back to headless mode")
        return run_headless(session, mapper)

    import arcade

    from .arcade_app import GridWindow

    GridWindow(session, mapper or InputMapper.from_config(session.config))
    try:
        logger.info("Launching Arcade window")
        arcade.run()
        logger.info("Arcade loop finished")
        return 0
    except Exception:
        logger.exception("Unhandled exception in GUI loop; exiting with code 1")
        return 1


def run_headless(
    session: GameSession,
    mapper: Optional[InputMapper] = None,
    stdin: Optional[TextIO] = None,
    stdout: Optional[TextIO] = None,
    max_turns: Optional[int] = None,
) -> int:
    """Console loop: every character read from stdin is one key press.

    Bound keys resolve a turn and re-render; ``q`` quits; other characters
    are ignored. Stops at end of input or after ``max_turns`` turns.
    """
    mapper = mapper or InputMapper.from_config(session.config)
    stdin = stdin or sys.stdin
    renderer = TextRenderer(stdout or sys.stdout)
    renderer.render(session.snapshot())

    turns = 0
    try:
        for line in stdin:
            for ch in line.rstrip("\r\n"):
                if ch.lower() == QUIT_KEY:
                    logger.info("Quit after %d turns", turns)
                    return 0
                command = mapper.on_key_event(ch)
                if command is None:
                    continue
                session.apply(command)
                turns += 1
                renderer.render(session.snapshot())
                if max_turns is not None and turns >= max_turns:
                    logger.info("Stopping after max_turns=%d", max_turns)
                    return 0
    except KeyboardInterrupt:
        return 130
    logger.info("Input exhausted after %d turns", turns)
    return 0


def run_auto(session: GameSession, max_turns: Optional[int] = None) -> int:
    """Run GUI if available and not overridden, else headless.

    Honors environment overrides:
      - GRIDCRAWL_HEADLESS=1 forces headless.
    """
    if os.getenv("GRIDCRAWL_HEADLESS") == "1" or max_turns is not None:
        return run_headless(session, max_turns=max_turns)
    return run_gui(session)
