"""Translate raw curses key codes into commands for the active mode."""

import curses
import logging
import os
from enum import Enum
from typing import Dict, Optional, Union

logger = logging.getLogger("pomoclock.keys")

Key = Union[int, str, None]


class Mode(str, Enum):
    TIMER = "timer"
    CONFIG = "config"


class Command(str, Enum):
    START_PAUSE = "start_pause"
    RESET = "reset"
    RESTART = "restart"
    SKIP = "skip"
    OPEN_CONFIG = "open_config"
    QUIT = "quit"
    NAV_UP = "nav_up"
    NAV_DOWN = "nav_down"
    VALUE_DOWN = "value_down"
    VALUE_UP = "value_up"
    CONFIRM = "confirm"
    CANCEL = "cancel"
    NOOP = "noop"


TIMER_KEYS: Dict[str, Command] = {
    " ": Command.START_PAUSE,
    "r": Command.RESET,
    "R": Command.RESTART,
    "s": Command.SKIP,
    "c": Command.OPEN_CONFIG,
    "q": Command.QUIT,
}

CONFIG_KEYS: Dict[str, Command] = {
    "k": Command.NAV_UP,
    "j": Command.NAV_DOWN,
    "h": Command.VALUE_DOWN,
    "l": Command.VALUE_UP,
    "q": Command.CONFIRM,
    "\n": Command.CONFIRM,
    "\r": Command.CONFIRM,
    "\x1b": Command.CANCEL,
    "up": Command.NAV_UP,
    "down": Command.NAV_DOWN,
    "left": Command.VALUE_DOWN,
    "right": Command.VALUE_UP,
    "enter": Command.CONFIRM,
}

_SPECIAL_KEYS: Dict[int, str] = {
    curses.KEY_UP: "up",
    curses.KEY_DOWN: "down",
    curses.KEY_LEFT: "left",
    curses.KEY_RIGHT: "right",
    curses.KEY_ENTER: "enter",
}


def _keydebug_enabled() -> bool:
    return os.environ.get("POMOCLOCK_KEYDEBUG") == "1"


def key_name(key: Key) -> Optional[str]:
    """Normalise a getch()/get_wch() result to a lookup token."""
    if key is None:
        return None
    if isinstance(key, str):
        return key if len(key) == 1 else None
    if not isinstance(key, int) or key < 0:
        return None
    special = _SPECIAL_KEYS.get(key)
    if special is not None:
        return special
    if 0 <= key <= 255:
        return chr(key)
    return None


def map_key(mode: Mode, key: Key) -> Command:
    name = key_name(key)
    if _keydebug_enabled() and key not in (None, -1):
        logger.debug("key raw=%r type=%s name=%r mode=%s", key, type(key).__name__, name, mode.value)
    if name is None:
        return Command.NOOP
    table = TIMER_KEYS if mode is Mode.TIMER else CONFIG_KEYS
    command = table.get(name)
    if command is None and len(name) == 1 and name.isupper():
        command = table.get(name.lower())
    return command or Command.NOOP
