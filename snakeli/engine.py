"""
Movement and collision resolution for one frame.
"""

import logging
from dataclasses import dataclass
from enum import Enum, auto

from .config import Mode
from .game_objects import Board, Fruit, FruitFactory
from .snake import Snake

logger = logging.getLogger(__name__)


class Outcome(Enum):
    """What happened during a step."""
    MOVED = auto()
    ATE = auto()
    TRIMMED = auto()
    LOST = auto()


@dataclass
class StepResult:
    outcome: Outcome
    fruit: Fruit
    trimmed: int = 0  # segments cut off in Trim mode

    @property
    def lost(self) -> bool:
        return self.outcome is Outcome.LOST


def advance(snake: Snake, fruit: Fruit, board: Board, mode: Mode,
            fruit_factory: FruitFactory) -> StepResult:
    """
    Moves the snake one cell and resolves collisions.

    Checks run in a fixed order: border, self, fruit. A border hit, or a
    self hit in Regular mode, ends the step with LOST and leaves the moved
    snake as it is. In Trim mode a self hit at index i cuts the snake down to
    i segments and skips the fruit check for this step.

    Growth puts back the tail segment removed by this step's move, which is
    the same as not removing it.

    Args:
        snake: mutated in place
        fruit: current fruit
        board: field geometry
        mode: self-collision policy
        fruit_factory: source of the replacement fruit

    Returns:
        StepResult with the fruit to keep using
    """
    tail = snake.move()
    head = snake.head

    # Check wall collision
    if board.is_border(head):
        logger.info("hit the border at %s", head)
        return StepResult(Outcome.LOST, fruit)

    # Check body collision
    index = snake.self_collision_index()
    if index is not None:
        if mode is Mode.REGULAR:
            logger.info("bit itself at %s", head)
            return StepResult(Outcome.LOST, fruit)
        cut = snake.truncate(index)
        logger.info("trimmed %d segments at %s", len(cut), head)
        return StepResult(Outcome.TRIMMED, fruit, trimmed=len(cut))

    # Check fruit collision
    if head == fruit.position:
        snake.grow(tail)
        new_fruit = fruit_factory.spawn(snake.get_body_set(), previous=fruit)
        logger.debug("ate fruit at %s, length %d", head, snake.length)
        return StepResult(Outcome.ATE, new_fruit)

    return StepResult(Outcome.MOVED, fruit)
