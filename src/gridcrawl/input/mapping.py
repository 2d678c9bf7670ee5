from __future__ import annotations

import logging
from typing import Dict, Iterable, Mapping, Optional

from ..config import GameConfig
from ..engine.commands import Command

logger = logging.getLogger(__name__)


class InputMapper:
    """Rebindable mapping from physical keys to turn commands.

    The mapper is agnostic to the input backend. Keys are represented as strings
    that are normalized internally (case-insensitive); backend key codes can be
    aliased to those names. Only trusted events for bound keys produce a
    command; everything else is dropped.

    Example usage:
        mapper = InputMapper.from_config(GameConfig())
        mapper.translate_key("w")                  # -> Command.UP
        mapper.on_key_event("space", trusted=True)  # -> Command.ATTACK
    """

    def __init__(self, bindings: Optional[Mapping[str, Command]] = None) -> None:
        self._bindings: Dict[str, Command] = {}
        self._aliases: Dict[str, str] = {}
        if bindings:
            for key, command in bindings.items():
                self.bind(key, command)

    # ---------- Canonicalization ----------
    @staticmethod
    def _normalize(key: str | int | None) -> Optional[str]:
        """Normalize a key into a canonical uppercase string.

        Ints are converted to strings (register an alias to give them a
        name). Returns None for unsupported/empty inputs.
        """
        if key is None:
            return None
        if isinstance(key, int):
            return str(key)
        if not isinstance(key, str):
            return None
        k = key.strip()
        if not k:
            # A literal space is the space bar, not an empty key.
            return "SPACE" if key == " " else None
        return k.upper()

    # ---------- Binding API ----------
    def bind(self, key: str | int, command: Command) -> None:
        nk = self._normalize(key)
        if nk is None:
            logger.warning("Attempted to bind invalid key: %r", key)
            return
        self._bindings[nk] = command

    def bind_many(self, keys: Iterable[str | int], command: Command) -> None:
        for k in keys:
            self.bind(k, command)

    def unbind(self, key: str | int) -> None:
        nk = self._normalize(key)
        if nk is not None:
            self._bindings.pop(nk, None)

    def set_alias(self, physical: str | int, canonical_name: str) -> None:
        """Map a backend-specific key (e.g. an Arcade key code) to a canonical name."""
        nk = self._normalize(physical)
        cn = self._normalize(canonical_name)
        if nk and cn:
            self._aliases[nk] = cn

    @property
    def bound_keys(self) -> Dict[str, Command]:
        return dict(self._bindings)

    # ---------- Translation ----------
    def translate_key(self, key: str | int | None) -> Optional[Command]:
        nk = self._normalize(key)
        if nk is None:
            return None
        canonical = self._aliases.get(nk, nk)
        return self._bindings.get(canonical)

    def on_key_event(self, key: str | int | None, trusted: bool = True) -> Optional[Command]:
        """Return the command for one key press, or None if it must be dropped."""
        if not trusted:
            logger.debug("Dropping untrusted key event: %r", key)
            return None
        command = self.translate_key(key)
        if command is None:
            logger.debug("Unbound key: %r", key)
        return command

    # ---------- Defaults ----------
    @classmethod
    def from_config(cls, config: GameConfig) -> "InputMapper":
        return cls(config.bindings())

    @classmethod
    def default(cls) -> "InputMapper":
        """W/S/A/D move, Space attacks."""
        return cls.from_config(GameConfig())


__all__ = ["InputMapper"]
