"""
Unit tests for game logic (game_objects and snake).
"""

import random

import pytest

from snakeli.game_objects import Board, Fruit, FruitFactory
from snakeli.palette import Palette
from snakeli.snake import Direction, Snake


class TestDirection:
    def test_direction_values(self):
        assert Direction.UP.value == (0, -1)
        assert Direction.DOWN.value == (0, 1)
        assert Direction.LEFT.value == (-1, 0)
        assert Direction.RIGHT.value == (1, 0)

    @pytest.mark.parametrize("direction, opposite", [
        (Direction.UP, Direction.DOWN),
        (Direction.DOWN, Direction.UP),
        (Direction.LEFT, Direction.RIGHT),
        (Direction.RIGHT, Direction.LEFT),
    ])
    def test_opposite(self, direction, opposite):
        assert direction.opposite is opposite


class TestSnake:
    def test_new_layout(self):
        snake = Snake.new(4)
        assert snake.positions == [(3, 2), (2, 2), (1, 2), (0, 2)]
        assert snake.direction == Direction.RIGHT

    @pytest.mark.parametrize("length", [1, 2, 5, 48])
    def test_new_length_and_distinct(self, length):
        snake = Snake.new(length)
        assert snake.length == length
        assert len(snake.get_body_set()) == length
        assert all(0 <= x <= length - 1 and y == 2 for x, y in snake.positions)

    def test_head_is_tagged(self):
        snake = Snake.new(3)
        assert snake.body[0].style == Palette.SNAKE_HEAD
        assert all(s.style == Palette.SNAKE_BODY for s in list(snake.body)[1:])

    def test_empty_body_rejected(self):
        with pytest.raises(ValueError):
            Snake([])

    def test_move_right(self):
        snake = Snake.new(3)
        tail = snake.move()
        assert snake.head == (3, 2)
        assert tail.position == (0, 2)
        assert snake.length == 3

    def test_move_retags_head(self):
        snake = Snake.new(3)
        snake.move()
        assert snake.body[0].style == Palette.SNAKE_HEAD
        assert snake.body[1].style == Palette.SNAKE_BODY

    def test_move_n_steps(self):
        snake = Snake([(10, 10), (9, 10), (8, 10)], Direction.DOWN)
        for _ in range(5):
            snake.move()
        assert snake.head == (10, 15)
        assert snake.length == 3

    @pytest.mark.parametrize("direction", list(Direction))
    def test_reverse_turn_rejected(self, direction):
        snake = Snake([(10, 10), (9, 10)], direction)
        assert not snake.turn(direction.opposite)
        assert snake.direction is direction
        # Rejection is idempotent.
        assert not snake.turn(direction.opposite)
        assert snake.direction is direction

    def test_turn(self):
        snake = Snake.new(3)
        assert snake.turn(Direction.UP)
        assert snake.direction == Direction.UP

    def test_grow(self):
        snake = Snake.new(3)
        tail = snake.move()
        snake.grow(tail)
        assert snake.length == 4
        assert snake.tail == (0, 2)
        assert snake.body[-1].style == Palette.SNAKE_BODY

    def test_truncate(self):
        snake = Snake([(5, 5), (4, 5), (3, 5), (2, 5)])
        cut = snake.truncate(2)
        assert snake.positions == [(5, 5), (4, 5)]
        assert [s.position for s in cut] == [(3, 5), (2, 5)]

    def test_truncate_minimum_length(self):
        snake = Snake([(5, 5), (4, 5), (3, 5)])
        snake.truncate(0)
        assert snake.length == 1

    def test_self_collision_false(self):
        snake = Snake.new(3)
        assert not snake.check_self_collision()
        assert snake.self_collision_index() is None

    def test_self_collision_index(self):
        snake = Snake([(5, 5), (5, 6), (6, 6), (6, 5), (5, 5)])
        assert snake.check_self_collision()
        assert snake.self_collision_index() == 4

    def test_get_body_set(self):
        snake = Snake.new(3)
        assert snake.get_body_set() == {(2, 2), (1, 2), (0, 2)}


class TestBoard:
    def test_borders(self):
        board = Board(50, 23)
        assert board.is_border((0, 10))
        assert board.is_border((49, 10))
        assert board.is_border((10, 1))
        assert board.is_border((10, 23))
        assert not board.is_border((1, 2))
        assert not board.is_border((48, 22))

    def test_fruit_cells(self):
        board = Board(5, 5)
        cells = board.fruit_cells()
        assert len(cells) == 3 * 3
        assert all(1 <= x <= 3 and 2 <= y <= 4 for x, y in cells)


class TestFruitFactory:
    def setup_method(self):
        random.seed(42)
        self.board = Board(20, 10)

    def test_uniform_inside_border(self):
        factory = FruitFactory(self.board)
        for _ in range(200):
            fruit = factory.spawn()
            assert 1 <= fruit.x <= 18
            assert 2 <= fruit.y <= 9
            assert not self.board.is_border(fruit.position)

    def test_uniform_avoids_occupied(self):
        factory = FruitFactory(self.board)
        occupied = set(self.board.fruit_cells()[:-1])
        fruit = factory.spawn(occupied)
        assert fruit.position == self.board.fruit_cells()[-1]

    def test_uniform_never_reuses_previous(self):
        board = Board(4, 3)  # two fruit cells: (1, 2) and (2, 2)
        factory = FruitFactory(board)
        previous = Fruit(1, 2)
        for _ in range(20):
            assert factory.spawn(previous=previous).position == (2, 2)

    def test_full_board_still_places_fruit(self):
        factory = FruitFactory(self.board)
        occupied = set(self.board.fruit_cells())
        fruit = factory.spawn(occupied)
        assert fruit.position in occupied

    def test_clamped_inside_border(self):
        factory = FruitFactory(self.board, sampling="clamped")
        for _ in range(500):
            fruit = factory.spawn()
            assert 1 <= fruit.x <= 18
            assert 2 <= fruit.y <= 9

    def test_clamped_low_draw_goes_to_first_cell(self):
        class Zero:
            def random(self):
                return 0.0

        factory = FruitFactory(self.board, sampling="clamped", rng=Zero())
        assert factory.spawn().position == (1, 2)

    def test_unknown_sampling(self):
        with pytest.raises(ValueError):
            FruitFactory(self.board, sampling="gaussian")

    def test_fruit_style(self):
        assert FruitFactory(self.board).spawn().style == Palette.FRUIT
