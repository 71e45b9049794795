"""
Unit tests for the per-frame movement and collision resolution.
"""

import random

import pytest

from snakeli.config import Mode
from snakeli.engine import Outcome, advance
from snakeli.game_objects import Board, Fruit, FruitFactory
from snakeli.snake import Direction, Snake


def is_contiguous(snake):
    positions = snake.positions
    return all(
        abs(ax - bx) + abs(ay - by) == 1
        for (ax, ay), (bx, by) in zip(positions, positions[1:])
    )


class TestAdvance:
    def setup_method(self):
        random.seed(42)
        self.board = Board(50, 23)
        self.factory = FruitFactory(self.board)
        self.far_fruit = Fruit(40, 20)

    def step(self, snake, fruit=None, mode=Mode.REGULAR):
        return advance(snake, fruit or self.far_fruit, self.board, mode,
                       self.factory)

    def test_first_step_from_default_layout(self):
        snake = Snake.new(2)
        assert snake.positions == [(1, 2), (0, 2)]

        result = self.step(snake)

        assert result.outcome is Outcome.MOVED
        assert snake.head == (2, 2)
        assert snake.positions == [(2, 2), (1, 2)]
        assert result.fruit is self.far_fruit

    def test_n_steps_translate_head(self):
        snake = Snake([(10, 10), (9, 10), (8, 10)], Direction.RIGHT)
        for _ in range(7):
            assert self.step(snake).outcome is Outcome.MOVED
        assert snake.head == (17, 10)
        assert snake.length == 3

    @pytest.mark.parametrize("mode", list(Mode))
    @pytest.mark.parametrize("body, direction", [
        ([(1, 10), (2, 10)], Direction.LEFT),     # left column
        ([(48, 10), (47, 10)], Direction.RIGHT),  # right column
        ([(10, 2), (10, 3)], Direction.UP),       # top border row
        ([(10, 22), (10, 21)], Direction.DOWN),   # bottom border row
    ])
    def test_border_is_fatal(self, body, direction, mode):
        snake = Snake(body, direction)
        result = self.step(snake, mode=mode)
        assert result.outcome is Outcome.LOST
        assert result.lost
        assert self.board.is_border(snake.head)

    def test_border_suppresses_fruit(self):
        snake = Snake([(48, 10), (47, 10)], Direction.RIGHT)
        fruit = Fruit(49, 10)
        result = self.step(snake, fruit)
        assert result.outcome is Outcome.LOST
        assert snake.length == 2
        assert result.fruit is fruit

    def looping_snake(self):
        # Head at (4, 4) heading down into its own body at (4, 5).
        return Snake(
            [(4, 4), (3, 4), (3, 5), (4, 5), (5, 5), (6, 5)],
            Direction.DOWN,
        )

    def test_regular_self_collision_is_fatal(self):
        snake = self.looping_snake()
        result = self.step(snake, mode=Mode.REGULAR)
        assert result.outcome is Outcome.LOST
        # Moved, but neither trimmed nor grown.
        assert snake.positions == [(4, 5), (4, 4), (3, 4), (3, 5), (4, 5), (5, 5)]

    def test_trim_self_collision_truncates(self):
        snake = self.looping_snake()
        result = self.step(snake, mode=Mode.TRIM)
        assert result.outcome is Outcome.TRIMMED
        assert result.trimmed == 2
        assert snake.positions == [(4, 5), (4, 4), (3, 4), (3, 5)]
        assert len(snake.get_body_set()) == snake.length

    def test_trim_length_equals_collision_index(self):
        snake = self.looping_snake()
        snake.move()
        index = snake.self_collision_index()
        assert index == 4

        snake = self.looping_snake()
        self.step(snake, mode=Mode.TRIM)
        assert snake.length == index

    def test_trim_skips_fruit_check(self):
        snake = self.looping_snake()
        fruit = Fruit(4, 5)
        result = self.step(snake, fruit, mode=Mode.TRIM)
        assert result.outcome is Outcome.TRIMMED
        assert result.fruit is fruit

    def test_eat_fruit(self):
        snake = Snake.new(3)
        fruit = Fruit(3, 2)

        result = self.step(snake, fruit)

        assert result.outcome is Outcome.ATE
        assert snake.length == 4
        assert snake.positions == [(3, 2), (2, 2), (1, 2), (0, 2)]
        assert result.fruit.position != fruit.position
        assert result.fruit.position not in snake.get_body_set()
        assert not self.board.is_border(result.fruit.position)

    def test_growth_reuses_vacated_tail_after_turn(self):
        # Growth puts back the exact cell the tail just left instead of
        # extending the new tail against the current direction, so a turn
        # right before eating keeps the body in one piece.
        snake = Snake([(5, 5), (4, 5), (3, 5)], Direction.RIGHT)
        snake.turn(Direction.DOWN)

        result = self.step(snake, Fruit(5, 6))

        assert result.outcome is Outcome.ATE
        assert snake.positions == [(5, 6), (5, 5), (4, 5), (3, 5)]
        assert is_contiguous(snake)

    def test_eating_repeatedly(self):
        snake = Snake([(10, 10), (9, 10)], Direction.RIGHT)
        for x in range(11, 16):
            result = self.step(snake, Fruit(x, 10))
            assert result.outcome is Outcome.ATE
        assert snake.length == 7
        assert is_contiguous(snake)
