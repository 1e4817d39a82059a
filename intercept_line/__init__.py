"""INTERCEPT LINE - terminal missile-defense arcade game."""

from .modes import ControlMode, GameMode
from .session import GameSession

__all__ = ['ControlMode', 'GameMode', 'GameSession']
