"""
Drawing surfaces: the real terminal and an in-memory grid.
"""

import sys
from collections import deque
from contextlib import contextmanager
from typing import Iterable, Iterator, Optional, Tuple

import numpy as np
import blessed

from .exceptions import TerminalIOError
from .palette import Palette


class Surface:
    """Character grid with styled cells."""

    def size(self) -> Tuple[int, int]:
        """(columns, rows)"""
        raise NotImplementedError

    def move(self, x: int, y: int) -> None:
        raise NotImplementedError

    def write(self, text: str, style: Optional[Palette] = None) -> None:
        raise NotImplementedError

    def clear(self) -> None:
        raise NotImplementedError

    def flush(self) -> None:
        raise NotImplementedError

    def read_key(self, timeout: float):
        """Waits up to `timeout` seconds for a key; returns "" if none."""
        raise NotImplementedError


class TerminalSurface(Surface):
    """ANSI terminal through blessed. Output is buffered until flush()."""

    # Palette -> blessed formatting attribute
    STYLES = {
        Palette.BORDER: "on_white",
        Palette.SNAKE_HEAD: "on_green",
        Palette.SNAKE_BODY: "on_white",
        Palette.FRUIT: "on_bright_red",
        Palette.STATUS: "normal",
    }

    def __init__(self, term: Optional[blessed.Terminal] = None):
        self.term = term or blessed.Terminal()
        self._buffer = []

    def size(self) -> Tuple[int, int]:
        try:
            return self.term.width, self.term.height
        except OSError as e:
            raise TerminalIOError(f"cannot query terminal size: {e}") from e

    def move(self, x: int, y: int) -> None:
        self._buffer.append(self.term.move_xy(x, y))

    def write(self, text: str, style: Optional[Palette] = None) -> None:
        if style is None:
            self._buffer.append(text)
            return
        fmt = getattr(self.term, self.STYLES[style])
        self._buffer.append(fmt + text + self.term.normal)

    def clear(self) -> None:
        self._buffer.append(self.term.home + self.term.clear)

    def flush(self) -> None:
        data = "".join(self._buffer)
        self._buffer = []
        stream = self.term.stream or sys.stdout
        try:
            stream.write(data)
            stream.flush()
        except OSError as e:
            raise TerminalIOError(f"cannot write to terminal: {e}") from e

    def read_key(self, timeout: float):
        try:
            return self.term.inkey(timeout=timeout)
        except OSError as e:
            raise TerminalIOError(f"cannot read from terminal: {e}") from e

    @contextmanager
    def session(self) -> Iterator["TerminalSurface"]:
        """
        Raw mode, alternate screen and hidden cursor for the duration of the
        block. All three are restored however the block exits.
        """
        try:
            with self.term.raw(), self.term.fullscreen(), self.term.hidden_cursor():
                yield self
        except TerminalIOError:
            raise
        except OSError as e:
            raise TerminalIOError(f"terminal session failed: {e}") from e
        finally:
            self._buffer = []


class ArraySurface(Surface):
    """
    Headless surface backed by numpy arrays.

    `chars` holds one character per cell and `styles` the Palette value of
    the cell ("" when unstyled). Keys are served from a script.
    """

    def __init__(self, columns: int, rows: int, keys: Iterable = ()):
        self.columns = columns
        self.rows = rows
        self.chars = np.full((rows, columns), " ", dtype="<U1")
        self.styles = np.full((rows, columns), "", dtype="<U16")
        self.keys = deque(keys)
        self.cursor = (0, 0)
        self.flushes = 0
        self.timeouts = []

    def size(self) -> Tuple[int, int]:
        return self.columns, self.rows

    def move(self, x: int, y: int) -> None:
        self.cursor = (x, y)

    def write(self, text: str, style: Optional[Palette] = None) -> None:
        x, y = self.cursor
        value = style.value if style is not None else ""
        for char in text:
            # Off-screen writes are clipped like a real terminal would.
            if 0 <= x < self.columns and 0 <= y < self.rows:
                self.chars[y, x] = char
                self.styles[y, x] = value
            x += 1
        self.cursor = (x, y)

    def clear(self) -> None:
        self.chars[:] = " "
        self.styles[:] = ""
        self.cursor = (0, 0)

    def flush(self) -> None:
        self.flushes += 1

    def read_key(self, timeout: float):
        self.timeouts.append(timeout)
        if self.keys:
            return self.keys.popleft()
        return ""

    def snapshot(self) -> Tuple[np.ndarray, np.ndarray]:
        """Copies of (chars, styles)."""
        return self.chars.copy(), self.styles.copy()

    def row_text(self, y: int) -> str:
        return "".join(self.chars[y]).rstrip()

    def cells_with(self, style: Palette) -> set:
        """Positions (x, y) of all cells drawn with the given style."""
        ys, xs = np.nonzero(self.styles == style.value)
        return {(int(x), int(y)) for x, y in zip(xs, ys)}
