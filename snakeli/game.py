"""
Game loop and state machine.
"""

import logging
import time
from enum import Enum, auto
from typing import Callable, Optional

from .config import GameConfig
from .controls import Command, InputController, adjust_frame_ms
from .engine import Outcome, advance
from .game_objects import Board, Fruit, FruitFactory
from .renderer import Renderer
from .snake import Snake
from .terminal import Surface

logger = logging.getLogger(__name__)

PAUSED_MESSAGE = "PAUSED"
LOST_MESSAGE = "YOU HAVE LOST :( press r to restart"


class GameState(Enum):
    PLAYING = auto()
    PAUSED = auto()
    LOST = auto()


class Game:
    """
    One interactive session.

    Owns the snake, the fruit and the state. Each frame polls one command,
    applies it, advances the snake while playing, redraws, then sleeps out
    the rest of the frame.
    """

    def __init__(
        self,
        config: GameConfig,
        surface: Surface,
        controller: Optional[InputController] = None,
        fruit_factory: Optional[FruitFactory] = None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """
        Args:
            config: validated settings, already fitted to the surface
            surface: where frames are drawn and keys are read
            controller: input source (reads from the surface by default)
            fruit_factory: fruit placement (built from config by default)
            clock: monotonic time in seconds
            sleep: blocks for the given number of seconds
        """
        self.config = config
        self.board = Board(config.width, config.height)
        self.surface = surface
        self.controller = controller or InputController(
            surface.read_key, config.vim_mode
        )
        self.fruit_factory = fruit_factory or FruitFactory(
            self.board, config.fruit_sampling
        )
        self.renderer = Renderer(surface, self.board)
        self.clock = clock
        self.sleep = sleep

        self.frame_ms = config.frame_ms
        self.frames = 0

        # Game state (initialized in reset)
        self.snake: Optional[Snake] = None
        self.fruit: Optional[Fruit] = None
        self.state = GameState.PLAYING
        self.message = ""
        self.frame_start = 0.0

        self.reset()

    def reset(self) -> None:
        """Starts a new round with a fresh snake and fruit."""
        self.snake = Snake.new(self.config.length)
        self.fruit = self.fruit_factory.spawn(self.snake.get_body_set())
        self.state = GameState.PLAYING
        self.message = ""
        self.frame_start = self.clock()

    @property
    def score(self) -> int:
        return self.snake.length

    def handle(self, command: Command) -> bool:
        """
        Applies one command.

        Returns:
            False if the player asked to quit
        """
        if command is Command.QUIT:
            logger.info("quit with score %d", self.score)
            return False

        if command is Command.RESTART:
            logger.info("restart (score was %d)", self.score)
            self.reset()
        elif command is Command.TOGGLE_PAUSE:
            self._toggle_pause()
        elif command in (Command.SPEED_UP, Command.SLOW_DOWN):
            frame_ms = adjust_frame_ms(self.frame_ms, command)
            if frame_ms != self.frame_ms:
                logger.debug("frame duration %dms -> %dms", self.frame_ms, frame_ms)
            self.frame_ms = frame_ms
        else:
            direction = InputController.direction_for(command)
            if direction is not None and self.state is GameState.PLAYING:
                self.snake.turn(direction)

        return True

    def _toggle_pause(self) -> None:
        if self.state is GameState.PLAYING:
            self.state = GameState.PAUSED
            self.message = PAUSED_MESSAGE
        elif self.state is GameState.PAUSED:
            self.state = GameState.PLAYING
            self.message = ""

    def update(self) -> Optional[Outcome]:
        """Advances the snake if playing."""
        if self.state is not GameState.PLAYING:
            return None

        result = advance(
            self.snake, self.fruit, self.board, self.config.mode,
            self.fruit_factory,
        )
        self.fruit = result.fruit
        if result.lost:
            self.state = GameState.LOST
            self.message = LOST_MESSAGE
            logger.info("lost with score %d", self.score)
        return result.outcome

    def tick(self) -> Optional[Outcome]:
        """Update then render one frame."""
        outcome = self.update()
        self.renderer.render(self.snake, self.fruit, self.message)
        return outcome

    def step(self) -> bool:
        """
        Runs one full frame: input, update, render, sleep.

        Returns:
            False once the player has quit
        """
        self.frame_start = self.clock()
        self.frames += 1

        command = self.controller.poll(self.frame_ms)
        if not self.handle(command):
            return False

        self.tick()

        elapsed = self.clock() - self.frame_start
        remaining = self.frame_ms / 1000.0 - elapsed
        if remaining > 0:
            self.sleep(remaining)
        return True

    def run(self) -> int:
        """
        Plays until the player quits.

        Returns:
            Number of frames played
        """
        logger.info(
            "starting %dx%d, length %d, mode %s",
            self.config.width, self.config.height, self.config.length,
            self.config.mode,
        )
        self.surface.clear()
        self.surface.flush()

        while self.step():
            pass

        return self.frames
