"""
Module with the Snake class.
"""

from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Deque, List, Optional, Tuple

from .palette import Palette


Position = Tuple[int, int]

# Row the snake is laid out on at the start of a round.
START_ROW = 2


class Direction(Enum):
    """Movement directions."""
    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def delta(self) -> Tuple[int, int]:
        return self.value

    @property
    def opposite(self) -> "Direction":
        dx, dy = self.value
        return Direction((-dx, -dy))


@dataclass
class Segment:
    """One cell of the snake's body."""
    x: int
    y: int
    style: Palette = Palette.SNAKE_BODY

    @property
    def position(self) -> Position:
        return (self.x, self.y)


class Snake:
    """Snake class."""

    def __init__(self, body: List[Position],
                 direction: Direction = Direction.RIGHT):
        """
        Args:
            body: segment positions, head first
            direction: initial direction
        """
        if not body:
            raise ValueError("snake needs at least one segment")

        self.direction = direction

        # Body as deque: [head, ..., tail]
        self.body: Deque[Segment] = deque(Segment(x, y) for x, y in body)
        self.body[0].style = Palette.SNAKE_HEAD

    @classmethod
    def new(cls, length: int) -> "Snake":
        """
        Lays out a fresh snake horizontally on the start row, facing right,
        with the head at the rightmost cell.
        """
        return cls(
            [(length - 1 - i, START_ROW) for i in range(length)],
            Direction.RIGHT,
        )

    @property
    def head(self) -> Position:
        """Head position."""
        return self.body[0].position

    @property
    def tail(self) -> Position:
        """Tail position."""
        return self.body[-1].position

    @property
    def length(self) -> int:
        """Snake length."""
        return len(self.body)

    @property
    def positions(self) -> List[Position]:
        return [segment.position for segment in self.body]

    def get_body_set(self) -> set:
        """Returns set of body positions (for fast collision checks)."""
        return {segment.position for segment in self.body}

    def turn(self, direction: Direction) -> bool:
        """
        Changes direction unless it would reverse the snake into itself.

        Returns:
            True if the direction changed
        """
        if direction is self.direction.opposite or direction is self.direction:
            return False
        self.direction = direction
        return True

    def move(self) -> Segment:
        """
        Moves the snake one step.

        Returns:
            The tail segment that was removed
        """
        hx, hy = self.head
        dx, dy = self.direction.delta

        self.body[0].style = Palette.SNAKE_BODY
        self.body.appendleft(Segment(hx + dx, hy + dy, Palette.SNAKE_HEAD))

        return self.body.pop()

    def grow(self, tail: Segment) -> None:
        """Puts back a tail segment removed by move()."""
        tail.style = Palette.SNAKE_BODY
        self.body.append(tail)

    def self_collision_index(self) -> Optional[int]:
        """Index of the first body segment the head overlaps, if any."""
        head = self.head
        for i in range(1, len(self.body)):
            if self.body[i].position == head:
                return i
        return None

    def check_self_collision(self) -> bool:
        """Checks if head collided with body."""
        return self.self_collision_index() is not None

    def truncate(self, length: int) -> List[Segment]:
        """
        Keeps the first `length` segments. Minimum length = 1 (head only).

        Returns:
            The segments that were cut off, nearest to the head first
        """
        cut = []
        while len(self.body) > max(length, 1):
            cut.append(self.body.pop())
        cut.reverse()
        return cut
