"""
Keyboard input.
"""

import logging
from enum import Enum, auto
from typing import Callable, Optional

from .config import FRAME_STEP_MS, MAX_FRAME_MS, MIN_FRAME_MS
from .snake import Direction

logger = logging.getLogger(__name__)

# Ctrl-C arrives as a plain character because the terminal is in raw mode.
CTRL_C = "\x03"


class Command(Enum):
    """Player commands."""
    NOOP = auto()          # no key within the poll window
    TURN_UP = auto()
    TURN_DOWN = auto()
    TURN_LEFT = auto()
    TURN_RIGHT = auto()
    TOGGLE_PAUSE = auto()
    RESTART = auto()
    SPEED_UP = auto()
    SLOW_DOWN = auto()
    QUIT = auto()
    IGNORE = auto()        # a key we don't use


TURN_DIRECTIONS = {
    Command.TURN_UP: Direction.UP,
    Command.TURN_DOWN: Direction.DOWN,
    Command.TURN_LEFT: Direction.LEFT,
    Command.TURN_RIGHT: Direction.RIGHT,
}

VIM_KEYS = {
    "k": Command.TURN_UP,
    "j": Command.TURN_DOWN,
    "h": Command.TURN_LEFT,
    "l": Command.TURN_RIGHT,
}

# Disabled in vim mode.
ARROW_KEYS = {
    "KEY_UP": Command.TURN_UP,
    "KEY_DOWN": Command.TURN_DOWN,
    "KEY_LEFT": Command.TURN_LEFT,
    "KEY_RIGHT": Command.TURN_RIGHT,
}

WASD_KEYS = {
    "w": Command.TURN_UP,
    "s": Command.TURN_DOWN,
    "a": Command.TURN_LEFT,
    "d": Command.TURN_RIGHT,
}

CONTROL_KEYS = {
    " ": Command.TOGGLE_PAUSE,
    "r": Command.RESTART,
    "n": Command.SPEED_UP,
    "m": Command.SLOW_DOWN,
    CTRL_C: Command.QUIT,
}


def translate_key(key, vim_mode: bool = False) -> Command:
    """
    Maps a keystroke to a command.

    Args:
        key: blessed Keystroke (a str with a `name` for special keys),
            or an empty string when nothing was pressed
        vim_mode: accept only h/j/k/l for movement

    Returns:
        Command
    """
    if not key:
        return Command.NOOP

    name = getattr(key, "name", None)
    if name in ARROW_KEYS:
        return Command.IGNORE if vim_mode else ARROW_KEYS[name]

    char = str(key)
    if char in CONTROL_KEYS:
        return CONTROL_KEYS[char]
    if char in VIM_KEYS:
        return VIM_KEYS[char]
    if char in WASD_KEYS and not vim_mode:
        return WASD_KEYS[char]
    return Command.IGNORE


def adjust_frame_ms(frame_ms: int, command: Command) -> int:
    """Applies SPEED_UP / SLOW_DOWN to the frame duration."""
    if command is Command.SPEED_UP:
        return max(MIN_FRAME_MS, frame_ms - FRAME_STEP_MS)
    if command is Command.SLOW_DOWN:
        return min(MAX_FRAME_MS, frame_ms + FRAME_STEP_MS)
    return frame_ms


class InputController:
    """Polls the keyboard once per frame."""

    def __init__(self, read_key: Callable[[float], object],
                 vim_mode: bool = False):
        """
        Args:
            read_key: blocks up to the given number of seconds and returns a
                keystroke (empty when the timeout expires)
            vim_mode: accept only h/j/k/l for movement
        """
        self.read_key = read_key
        self.vim_mode = vim_mode

    def poll(self, frame_ms: int) -> Command:
        """Waits at most half a frame for one key."""
        key = self.read_key(frame_ms * 0.5 / 1000.0)
        command = translate_key(key, self.vim_mode)
        if command is not Command.NOOP:
            logger.debug("key %r -> %s", str(key), command.name)
        return command

    @staticmethod
    def direction_for(command: Command) -> Optional[Direction]:
        return TURN_DIRECTIONS.get(command)
