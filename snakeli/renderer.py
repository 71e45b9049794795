"""
Frame renderer.
"""

from .game_objects import Board, Fruit, STATUS_ROW, TOP_BORDER_ROW
from .palette import Palette
from .snake import Snake
from .terminal import Surface


CELL = " "


class Renderer:
    """Redraws the whole frame from the current game state."""

    def __init__(self, surface: Surface, board: Board):
        """
        Args:
            surface: where to draw
            board: field geometry
        """
        self.surface = surface
        self.board = board

    def render(self, snake: Snake, fruit: Fruit, message: str = "") -> None:
        """
        Renders current game state. Reads the model, never changes it.

        Args:
            snake: drawn tail first so the head ends up on top
            fruit: drawn last
            message: shown after the score ("PAUSED", loss message, ...)
        """
        # Clear screen
        self.surface.clear()

        # Draw info panel
        self._draw_status(snake.length, message)

        # Draw border
        self._draw_border()

        # Draw snake
        for segment in reversed(snake.body):
            self._draw_cell(segment.x, segment.y, segment.style)

        # Draw fruit
        self._draw_cell(fruit.x, fruit.y, fruit.style)

        self.surface.flush()

    def _draw_status(self, score: int, message: str):
        """Score is the snake's length."""
        self.surface.move(0, STATUS_ROW)
        self.surface.write(CELL * self.board.width)
        self.surface.move(0, STATUS_ROW)
        self.surface.write(f"Score: {score}   {message}".rstrip(), Palette.STATUS)

    def _draw_border(self):
        """Full rows at the top and bottom, one column on each side."""
        width = self.board.width
        bottom = self.board.bottom_border_row

        self.surface.move(0, TOP_BORDER_ROW)
        self.surface.write(CELL * width, Palette.BORDER)

        for y in range(TOP_BORDER_ROW + 1, bottom):
            self._draw_cell(0, y, Palette.BORDER)
            self._draw_cell(width - 1, y, Palette.BORDER)

        self.surface.move(0, bottom)
        self.surface.write(CELL * width, Palette.BORDER)

    def _draw_cell(self, x: int, y: int, style: Palette):
        """Draws a filled cell."""
        self.surface.move(x, y)
        self.surface.write(CELL, style)
