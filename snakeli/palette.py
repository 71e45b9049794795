"""
Named display attributes used by the renderer.
"""

from enum import Enum


class Palette(Enum):
    """Cell styles. The surface decides how each one looks."""
    BORDER = "border"
    SNAKE_HEAD = "snake_head"
    SNAKE_BODY = "snake_body"
    FRUIT = "fruit"
    STATUS = "status"
