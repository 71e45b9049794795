import logging

from .config import GameConfig, Mode
from .controls import Command, InputController
from .engine import Outcome, StepResult, advance
from .exceptions import ConfigurationError, TerminalIOError
from .game import Game, GameState
from .game_objects import Board, Fruit, FruitFactory
from .palette import Palette
from .renderer import Renderer
from .snake import Direction, Segment, Snake
from .terminal import ArraySurface, Surface, TerminalSurface

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "1.0.0"
