"""
Game configuration.

The configuration is an immutable bundle built once at startup (from the
defaults, an optional YAML file and the command line) and reused verbatim
when a round is restarted.
"""

from dataclasses import dataclass, fields, replace
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from .exceptions import ConfigurationError


U16_MAX = 65535

MIN_FRAME_MS = 20
MAX_FRAME_MS = 500
FRAME_STEP_MS = 10

FRUIT_SAMPLING = ("uniform", "clamped")


class Mode(Enum):
    """Self-collision policy."""
    REGULAR = "Regular"  # biting yourself ends the round
    TRIM = "Trim"        # biting yourself cuts off the rest of the body

    def __str__(self) -> str:
        return self.value


MODE_TOKENS = {
    "TRIM": Mode.TRIM,
    "T": Mode.TRIM,
    "REGULAR": Mode.REGULAR,
    "R": Mode.REGULAR,
}


def parse_mode(token: str) -> Mode:
    """Maps a case-sensitive mode token (TRIM, T, REGULAR, R) to a Mode."""
    try:
        return MODE_TOKENS[token]
    except KeyError:
        raise ConfigurationError(f"Invalid mode: {token!r}") from None


def parse_u16(value: Any, name: str) -> int:
    """Parses a non-negative 16-bit integer."""
    try:
        number = int(str(value), 10)
    except ValueError:
        raise ConfigurationError(
            f"Cannot parse provided {name} as u16: {value!r}"
        ) from None
    if not 0 <= number <= U16_MAX:
        raise ConfigurationError(
            f"Cannot parse provided {name} as u16: {value!r}"
        )
    return number


@dataclass(frozen=True)
class GameConfig:
    """Settings for one game session."""
    width: int = 50
    height: int = 23
    length: int = 2
    mode: Mode = Mode.REGULAR
    vim_mode: bool = False
    frame_ms: int = 60
    fruit_sampling: str = "uniform"

    def validate(self) -> "GameConfig":
        """
        Checks the board geometry and ranges.

        Returns:
            self, so calls can be chained

        Raises:
            ConfigurationError: if any value is out of range
        """
        if self.length < 1:
            raise ConfigurationError(f"Length({self.length}) must be at least 1.")
        if self.length > self.width - 2:
            raise ConfigurationError(
                f"Length({self.length}) cannot be greater than "
                f"width - 2({self.width - 2})."
            )
        # Fruit rows are 2..height-1 and columns 1..width-2.
        if (self.width - 2) * (self.height - 2) < 2:
            raise ConfigurationError(
                f"Board {self.width}x{self.height} is too small to place a fruit."
            )
        if not MIN_FRAME_MS <= self.frame_ms <= MAX_FRAME_MS:
            raise ConfigurationError(
                f"Frame duration({self.frame_ms}ms) must be between "
                f"{MIN_FRAME_MS}ms and {MAX_FRAME_MS}ms."
            )
        if self.fruit_sampling not in FRUIT_SAMPLING:
            raise ConfigurationError(
                f"Invalid fruit sampling: {self.fruit_sampling!r}"
            )
        return self

    def clamp_to(self, columns: int, rows: int) -> "GameConfig":
        """
        Shrinks the board to fit a terminal of the given size.

        Row 0 holds the status line and the bottom border sits on row
        `height`, so the board needs `height + 1` rows.
        """
        return replace(
            self,
            width=min(self.width, columns),
            height=min(self.height, rows - 1),
        )

    def override(self, **values) -> "GameConfig":
        """Returns a copy with the non-None values replaced."""
        return replace(self, **{k: v for k, v in values.items() if v is not None})


def config_from_dict(data: Dict[str, Any],
                     base: Optional[GameConfig] = None) -> GameConfig:
    """
    Builds a config from a mapping such as a parsed YAML file.

    Args:
        data: {"width": 40, "mode": "TRIM", ...}
        base: config supplying the values missing from data

    Raises:
        ConfigurationError: on unknown keys or unparsable values
    """
    base = base or GameConfig()
    known = {f.name for f in fields(GameConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigurationError(f"Unknown config keys: {', '.join(unknown)}")

    values: Dict[str, Any] = {}
    for key, value in data.items():
        if key in ("width", "height", "length", "frame_ms"):
            values[key] = parse_u16(value, key)
        elif key == "mode":
            values[key] = value if isinstance(value, Mode) else parse_mode(str(value))
        elif key == "vim_mode":
            if not isinstance(value, bool):
                raise ConfigurationError(f"vim_mode must be true or false, got {value!r}")
            values[key] = value
        else:
            values[key] = str(value)

    return replace(base, **values)


def load_config(path: Union[str, Path]) -> GameConfig:
    """Loads a YAML config file on top of the defaults."""
    try:
        with open(path, "r") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigurationError(f"Cannot read config file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Cannot parse config file {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file {path} must contain a mapping")

    return config_from_dict(data)
