"""
Terminal Controls
==================
Translates blessed keystrokes into session commands and input events.

Terminals report key presses but not releases, so a direction stays
held for a few frames after its last repeat and is then released.
"""

from typing import Dict, Optional, Tuple

from .geometry import clamp
from .modes import ControlMode, GameMode
from .player import Direction


KEY_DIRECTIONS: Dict[str, Direction] = {
    'KEY_UP': Direction.UP,
    'KEY_DOWN': Direction.DOWN,
    'KEY_LEFT': Direction.LEFT,
    'KEY_RIGHT': Direction.RIGHT,
    'w': Direction.UP,
    's': Direction.DOWN,
    'a': Direction.LEFT,
    'd': Direction.RIGHT,
}

# Frames a direction stays held after its last repeat (200 ms at 60 FPS)
HOLD_FRAMES = 12

# World units the crosshair moves per key repeat
CROSSHAIR_STEP = 25.0

CROSSHAIR_OFFSETS: Dict[Direction, Tuple[float, float]] = {
    Direction.UP: (0.0, -CROSSHAIR_STEP),
    Direction.DOWN: (0.0, CROSSHAIR_STEP),
    Direction.LEFT: (-CROSSHAIR_STEP, 0.0),
    Direction.RIGHT: (CROSSHAIR_STEP, 0.0),
}


class InputHandler:
    """
    Feeds one session from terminal keystrokes.

    Keyboard mode: directions become key_down events, and key_up once
    the hold timer runs out. Pointer mode: directions move a crosshair
    and SPACE aims at it.
    """

    def __init__(self, session, hold_duration: int = HOLD_FRAMES):
        self.session = session
        self.hold_duration = hold_duration
        self.keys_held: Dict[Direction, int] = {}  # direction -> frames remaining
        self.crosshair: Tuple[float, float] = (session.width / 2, session.height / 2)

        self._quit_triggered = False
        self._toggle_fps = False

    def process_key(self, key) -> None:
        """Process a single key press from blessed's inkey()."""
        if key is None or not key:
            return

        key_str = key.lower() if not key.is_sequence else ''
        name = key.name or ''

        if key_str == 'q' or name == 'KEY_ESCAPE':
            self._quit_triggered = True
        elif name == 'KEY_ENTER' or key_str in ('\n', '\r'):
            self.primary_action()
        elif key_str == 'p':
            self.session.toggle_pause()
        elif key_str == 'r':
            self.session.restart()
        elif key_str == '1':
            self.session.set_control_mode(ControlMode.KEYBOARD)
        elif key_str == '2':
            self.session.set_control_mode(ControlMode.POINTER)
        elif key_str == 'f':
            self._toggle_fps = True
        elif key_str == ' ':
            self.session.aim(*self.crosshair)
        else:
            direction = KEY_DIRECTIONS.get(name) or KEY_DIRECTIONS.get(key_str)
            if direction is not None:
                self._press(direction)

    def primary_action(self) -> None:
        """The banner's action button: start, resume or play again."""
        mode = self.session.mode
        if mode is GameMode.MENU:
            self.session.start()
        elif mode is GameMode.PAUSED:
            self.session.toggle_pause()
        elif mode.is_terminal:
            self.session.restart()
            self.session.start()

    def _press(self, direction: Direction) -> None:
        if self.session.control_mode is ControlMode.POINTER:
            dx, dy = CROSSHAIR_OFFSETS[direction]
            x, y = self.crosshair
            self.crosshair = (
                clamp(x + dx, 0.0, self.session.width),
                clamp(y + dy, 0.0, self.session.height),
            )
            return

        self.keys_held[direction] = self.hold_duration
        self.session.key_down(direction)

    def update(self) -> None:
        """Tick hold timers (call once per frame) and release expired keys."""
        expired = []
        for direction, frames in self.keys_held.items():
            self.keys_held[direction] = frames - 1
            if frames - 1 <= 0:
                expired.append(direction)
        for direction in expired:
            del self.keys_held[direction]
            self.session.key_up(direction)

    def get_crosshair(self) -> Optional[Tuple[float, float]]:
        if self.session.control_mode is not ControlMode.POINTER:
            return None
        return self.crosshair

    def consume_quit(self) -> bool:
        """Check and consume quit trigger."""
        triggered = self._quit_triggered
        self._quit_triggered = False
        return triggered

    def consume_toggle_fps(self) -> bool:
        """Check and consume FPS toggle trigger."""
        triggered = self._toggle_fps
        self._toggle_fps = False
        return triggered
