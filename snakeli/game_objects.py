"""
Module with the board and fruit classes.
"""

import random
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from .palette import Palette


STATUS_ROW = 0
TOP_BORDER_ROW = 1


@dataclass(frozen=True)
class Board:
    """
    Playing field geometry.

    Row 0 is the status line, row 1 the top border and row `height` the
    bottom border. Columns 0 and `width - 1` are the side borders.
    """
    width: int
    height: int

    @property
    def bottom_border_row(self) -> int:
        return self.height

    def is_border(self, position: Tuple[int, int]) -> bool:
        x, y = position
        return (
            x == 0
            or x == self.width - 1
            or y == TOP_BORDER_ROW
            or y == self.bottom_border_row
        )

    def fruit_cells(self) -> List[Tuple[int, int]]:
        """All cells a fruit may be placed on."""
        return [
            (x, y)
            for y in range(TOP_BORDER_ROW + 1, self.height)
            for x in range(1, self.width - 1)
        ]


@dataclass
class Fruit:
    """The fruit the snake is chasing."""
    x: int
    y: int
    style: Palette = Palette.FRUIT

    @property
    def position(self) -> Tuple[int, int]:
        return (self.x, self.y)


class FruitFactory:
    """Places fruit on the board."""

    def __init__(self, board: Board, sampling: str = "uniform",
                 rng: Optional[random.Random] = None):
        """
        Args:
            board: field geometry
            sampling: "uniform" or "clamped"
            rng: random source (module-level random by default)
        """
        if sampling not in ("uniform", "clamped"):
            raise ValueError(f"unknown fruit sampling: {sampling}")
        self.board = board
        self.sampling = sampling
        self.rng = rng or random

    def spawn(self, occupied: Iterable[Tuple[int, int]] = (),
              previous: Optional[Fruit] = None) -> Fruit:
        """
        Creates a fruit at a random valid position.

        Args:
            occupied: positions to avoid (the snake)
            previous: the fruit being replaced, never reused

        Returns:
            Fruit
        """
        if self.sampling == "clamped":
            return self._spawn_clamped(previous)
        return self._spawn_uniform(set(occupied), previous)

    def _spawn_uniform(self, occupied: set,
                       previous: Optional[Fruit]) -> Fruit:
        cells = self.board.fruit_cells()
        if previous is not None:
            cells = [c for c in cells if c != previous.position]

        free_positions = [c for c in cells if c not in occupied]
        # A snake filling the whole board still gets a fruit under its body.
        x, y = self.rng.choice(free_positions or cells)
        return Fruit(x=x, y=y)

    def _spawn_clamped(self, previous: Optional[Fruit]) -> Fruit:
        # Classic draw: scale a float, clamp low values up to the first
        # valid column/row. Column 1 and row 2 are slightly favoured.
        while True:
            x = int(self.rng.random() * (self.board.width - 1))
            if x == 0:
                x = 1
            y = int(self.rng.random() * self.board.height)
            if y < TOP_BORDER_ROW + 1:
                y = TOP_BORDER_ROW + 1
            if previous is None or (x, y) != previous.position:
                return Fruit(x=x, y=y)
