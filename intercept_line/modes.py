"""
Game Modes
===========
Session modes, control schemes and the mode transition table.
"""

from enum import Enum, auto
from typing import Dict, Optional, Tuple


class GameMode(Enum):
    MENU = auto()
    PLAYING = auto()
    PAUSED = auto()
    GAME_OVER = auto()
    VICTORY = auto()

    @property
    def is_terminal(self) -> bool:
        """True for the modes that end a match."""
        return self in (GameMode.GAME_OVER, GameMode.VICTORY)


class ControlMode(Enum):
    """Mutually exclusive input schemes."""
    KEYBOARD = 'keyboard'   # one steerable missile
    POINTER = 'pointer'     # aimed interceptors, any number


class Trigger(Enum):
    """Commands and simulation outcomes that move the session between modes."""
    START = auto()
    TOGGLE_PAUSE = auto()
    RESTART = auto()
    DEFEAT = auto()
    VICTORY = auto()


class InvalidTransition(ValueError):
    """Raised when a mode change outside TRANSITIONS is forced."""

    def __init__(self, mode: GameMode, trigger: Trigger):
        super().__init__(f'No transition from {mode.name} on {trigger.name}')
        self.mode = mode
        self.trigger = trigger


TRANSITIONS: Dict[Tuple[GameMode, Trigger], GameMode] = {
    (GameMode.MENU, Trigger.START): GameMode.PLAYING,
    (GameMode.PLAYING, Trigger.TOGGLE_PAUSE): GameMode.PAUSED,
    (GameMode.PAUSED, Trigger.TOGGLE_PAUSE): GameMode.PLAYING,
    (GameMode.PLAYING, Trigger.DEFEAT): GameMode.GAME_OVER,
    (GameMode.PLAYING, Trigger.VICTORY): GameMode.VICTORY,
    (GameMode.PLAYING, Trigger.RESTART): GameMode.MENU,
    (GameMode.PAUSED, Trigger.RESTART): GameMode.MENU,
    (GameMode.GAME_OVER, Trigger.RESTART): GameMode.MENU,
    (GameMode.VICTORY, Trigger.RESTART): GameMode.MENU,
}

# Modes in which the control scheme may be switched
CONTROL_SWITCH_MODES = (GameMode.MENU, GameMode.GAME_OVER, GameMode.VICTORY)


def next_mode(mode: GameMode, trigger: Trigger) -> Optional[GameMode]:
    """Target mode for a trigger, or None when the trigger does not apply."""
    return TRANSITIONS.get((mode, trigger))
