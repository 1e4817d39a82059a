"""
Player Module
==============
Directional input state and creation of player-side projectiles.
"""

from enum import Enum, auto
from typing import Dict, Tuple
import math

from .components import Interceptor, PlayerMissile
from .geometry import direction_to, heading


# Launch pad sits this far above the bottom edge, centered horizontally
LAUNCH_OFFSET = 100.0

PLAYER_SPEED = 5.0
INTERCEPTOR_SPEED = 6.0

DIAGONAL_SCALE = 1 / math.sqrt(2)


class Direction(Enum):
    """Directional inputs for the keyboard-steered missile."""
    UP = auto()
    DOWN = auto()
    LEFT = auto()
    RIGHT = auto()


class KeyState:
    """
    Held/released flags for the four directions.

    Input handlers only flip flags here; the player control system
    reads them once per frame.
    """

    def __init__(self):
        self.held: Dict[Direction, bool] = {d: False for d in Direction}

    def press(self, direction: Direction) -> None:
        self.held[direction] = True

    def release(self, direction: Direction) -> None:
        self.held[direction] = False

    def release_all(self) -> None:
        for direction in Direction:
            self.held[direction] = False

    def is_held(self, direction: Direction) -> bool:
        return self.held[direction]

    def velocity(self, speed: float) -> Tuple[float, float]:
        """
        Axis-aligned velocity for the held keys.

        When opposing keys are both held, right
        overrides left and down overrides up. Diagonals are scaled by
        1/sqrt(2) so the speed magnitude stays constant.
        """
        vx, vy = 0.0, 0.0
        if self.held[Direction.LEFT]:
            vx = -speed
        if self.held[Direction.RIGHT]:
            vx = speed
        if self.held[Direction.UP]:
            vy = -speed
        if self.held[Direction.DOWN]:
            vy = speed

        horizontal = self.held[Direction.LEFT] or self.held[Direction.RIGHT]
        vertical = self.held[Direction.UP] or self.held[Direction.DOWN]
        if horizontal and vertical:
            vx *= DIAGONAL_SCALE
            vy *= DIAGONAL_SCALE

        return vx, vy


def launch_point(width: float, height: float) -> Tuple[float, float]:
    return width / 2, height - LAUNCH_OFFSET


def create_player_missile(width: float, height: float) -> PlayerMissile:
    """Create the steerable missile on the launch pad, nose up."""
    x, y = launch_point(width, height)
    return PlayerMissile(x=x, y=y, speed=PLAYER_SPEED)


def create_interceptor(width: float, height: float,
                       target_x: float, target_y: float) -> Interceptor:
    """Create an interceptor flying from the launch pad toward the target."""
    x, y = launch_point(width, height)
    dir_x, dir_y = direction_to(x, y, target_x, target_y)
    return Interceptor(
        x=x, y=y,
        target_x=target_x, target_y=target_y,
        vx=dir_x * INTERCEPTOR_SPEED,
        vy=dir_y * INTERCEPTOR_SPEED,
        angle=heading(target_x - x, target_y - y),
    )
