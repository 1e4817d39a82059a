"""
Game Session
=============
The match context: counters, entity sets, mode and input state.

Every system receives the session explicitly. There is no module-level
game state, so tests can run any number of independent sessions.
"""

from collections import deque
from typing import Deque, Optional, Tuple
import logging
import random

from .events import AudioCue, AudioSink, Banner, UISink
from .geometry import is_finite
from .modes import (
    CONTROL_SWITCH_MODES, ControlMode, GameMode, InvalidTransition,
    Trigger, next_mode
)
from .particles import explosion_system
from .player import Direction, KeyState
from .pools import SingleSlot, Swarm
from .snapshot import RenderSnapshot, build_snapshot
from .spawner import SpawnSchedule, spawner_system
from .systems import (
    collision_system, enemy_missile_system, interceptor_launch_system,
    interceptor_system, player_control_system
)


LOGGER = logging.getLogger(__name__)


# =============================================================================
# CONSTANTS
# =============================================================================

DEFAULT_WIDTH = 1000.0
DEFAULT_HEIGHT = 700.0

# Ground line sits this far above the bottom edge
GROUND_OFFSET = 80.0

MAX_HITS = 5
TARGET_INTERCEPTS = 20
SCORE_PER_INTERCEPT = 100

# Collision radii
KEYBOARD_HIT_RADIUS = 55.0
KEYBOARD_HIT_RADIUS_SPRITE = 65.0
POINTER_HIT_RADIUS = 45.0

TITLE = 'INTERCEPT LINE'

INSTRUCTIONS = {
    ControlMode.KEYBOARD: (
        'Steer your interceptor with the arrow keys.',
        'Crash into enemy missiles before they reach the cities.',
    ),
    ControlMode.POINTER: (
        'Aim anywhere to launch interceptor missiles.',
        'Intercept enemy missiles before they reach the cities.',
    ),
}


class GameSession:
    """
    One match of the game and its state machine.

    Input methods (key_down, key_up, aim) only record intent; entity
    sets change exclusively inside update().
    """

    def __init__(
        self,
        width: float = DEFAULT_WIDTH,
        height: float = DEFAULT_HEIGHT,
        control_mode: ControlMode = ControlMode.KEYBOARD,
        sprite_hitbox: bool = False,
        rng: Optional[random.Random] = None,
        audio: Optional[AudioSink] = None,
        ui: Optional[UISink] = None,
    ):
        self.width = float(width)
        self.height = float(height)
        self.control_mode = control_mode
        self.sprite_hitbox = sprite_hitbox
        self.rng = rng if rng is not None else random.Random()
        self.audio = audio if audio is not None else AudioSink()
        self.ui = ui if ui is not None else UISink()

        self.max_hits = MAX_HITS
        self.target_intercepts = TARGET_INTERCEPTS

        self.mode = GameMode.MENU
        self.score = 0
        self.hits = 0
        self.intercepts = 0

        self.enemies: Swarm = Swarm()
        self.players: SingleSlot = SingleSlot()
        self.interceptors: Swarm = Swarm()
        self.explosions: Swarm = Swarm()

        self.spawn = SpawnSchedule()
        self.keys = KeyState()
        self.aim_queue: Deque[Tuple[float, float]] = deque()

        self.show_menu()

    # -------------------------------------------------------------------------
    # Derived state
    # -------------------------------------------------------------------------

    @property
    def ground_y(self) -> float:
        return self.height - GROUND_OFFSET

    @property
    def is_playing(self) -> bool:
        return self.mode is GameMode.PLAYING

    @property
    def defenders(self):
        """The active projectile set for the current control mode."""
        if self.control_mode is ControlMode.KEYBOARD:
            return self.players
        return self.interceptors

    @property
    def collision_radius(self) -> float:
        if self.control_mode is ControlMode.POINTER:
            return POINTER_HIT_RADIUS
        if self.sprite_hitbox:
            return KEYBOARD_HIT_RADIUS_SPRITE
        return KEYBOARD_HIT_RADIUS

    # -------------------------------------------------------------------------
    # Commands
    # -------------------------------------------------------------------------

    def start(self) -> bool:
        """Begin a fresh match from the menu."""
        if next_mode(self.mode, Trigger.START) is None:
            return False
        self._reset()
        self._enter(Trigger.START)
        return True

    def toggle_pause(self) -> bool:
        """Pause a running match or resume a paused one."""
        if next_mode(self.mode, Trigger.TOGGLE_PAUSE) is None:
            return False
        self._enter(Trigger.TOGGLE_PAUSE)
        return True

    def restart(self) -> bool:
        """Abandon or close the current match and return to the menu."""
        if next_mode(self.mode, Trigger.RESTART) is None:
            return False
        self._enter(Trigger.RESTART)
        return True

    def set_control_mode(self, control_mode: ControlMode) -> bool:
        """Switch input scheme. Only allowed outside a running match."""
        if self.mode not in CONTROL_SWITCH_MODES:
            LOGGER.debug('Control mode change ignored while %s', self.mode.name)
            return False
        self.control_mode = ControlMode(control_mode)
        LOGGER.info('Control mode set to %s', self.control_mode.value)
        self.show_menu()
        return True

    def show_menu(self) -> bool:
        """Push the title banner and current stats to the UI while in the menu."""
        if self.mode is not GameMode.MENU:
            return False
        self.ui.set_pause_label('Pause')
        self.ui.show_banner(self._menu_banner())
        self._push_stats()
        return True

    # -------------------------------------------------------------------------
    # Input
    # -------------------------------------------------------------------------

    def key_down(self, direction: Direction) -> None:
        if not self.is_playing or self.control_mode is not ControlMode.KEYBOARD:
            return
        self.keys.press(direction)

    def key_up(self, direction: Direction) -> None:
        if self.control_mode is not ControlMode.KEYBOARD:
            return
        self.keys.release(direction)

    def aim(self, x: float, y: float) -> bool:
        """
        Queue an interceptor launch at canvas point (x, y).

        Returns False, and queues nothing, outside a running pointer
        match or for coordinates that are not finite or off the canvas.
        """
        if not self.is_playing or self.control_mode is not ControlMode.POINTER:
            return False
        if not is_finite(x, y):
            LOGGER.debug('Rejected non-finite aim point (%r, %r)', x, y)
            return False
        if not (0 <= x <= self.width and 0 <= y <= self.height):
            LOGGER.debug('Rejected off-canvas aim point (%.1f, %.1f)', x, y)
            return False
        self.aim_queue.append((float(x), float(y)))
        return True

    # -------------------------------------------------------------------------
    # Simulation
    # -------------------------------------------------------------------------

    def update(self, dt_ms: float) -> None:
        """
        Advance the match by one frame.

        dt_ms drives spawn timing and explosion decay; motion advances
        one frame per call. Does nothing outside PLAYING.
        """
        if not self.is_playing:
            return
        if not is_finite(dt_ms) or dt_ms < 0:
            dt_ms = 0.0

        player_control_system(self)
        interceptor_launch_system(self)
        interceptor_system(self)
        spawner_system(self, dt_ms)

        enemy_missile_system(self)
        if not self.is_playing:
            return

        collision_system(self)
        if not self.is_playing:
            return

        explosion_system(self.explosions, dt_ms)

    def register_ground_impact(self) -> None:
        """Count an enemy missile reaching the ground and check for defeat."""
        self.hits += 1
        self.audio.play(AudioCue.IMPACT)
        self._push_stats()
        LOGGER.debug('Ground impact %d/%d', self.hits, self.max_hits)

        if self.hits >= self.max_hits:
            self._enter(Trigger.DEFEAT)

    def register_intercept(self) -> None:
        """Score an intercept and check for victory."""
        self.intercepts += 1
        self.score += SCORE_PER_INTERCEPT
        self.audio.play(AudioCue.INTERCEPT)
        self._push_stats()

        if self.intercepts >= self.target_intercepts:
            self._enter(Trigger.VICTORY)

    def snapshot(self) -> RenderSnapshot:
        return build_snapshot(self)

    # -------------------------------------------------------------------------
    # State machine internals
    # -------------------------------------------------------------------------

    def _enter(self, trigger: Trigger) -> None:
        """Apply a transition from the table and run its entry effects."""
        previous = self.mode
        target = next_mode(previous, trigger)
        if target is None:
            raise InvalidTransition(previous, trigger)

        self.mode = target
        LOGGER.info('Mode %s -> %s (%s)', previous.name, target.name, trigger.name)

        if target is GameMode.PLAYING:
            self.ui.hide_banner()
            self.ui.set_pause_label('Pause')
        elif target is GameMode.PAUSED:
            self.ui.set_pause_label('Resume')
            self.ui.show_banner(Banner('Game Paused', ('Resume to continue',), 'Resume'))
        elif target is GameMode.GAME_OVER:
            self.audio.play(AudioCue.DEFEAT)
            self.ui.show_banner(Banner(
                'Game Over!',
                ('Your cities were destroyed!',
                 f'Score: {self.score}',
                 f'Intercepts: {self.intercepts}'),
                'Try Again',
            ))
        elif target is GameMode.VICTORY:
            self.audio.play(AudioCue.VICTORY)
            self.ui.show_banner(Banner(
                'Victory!',
                ('You defended the cities!',
                 f'Score: {self.score}',
                 f'Intercepts: {self.intercepts}'),
                'Play Again',
            ))
        elif target is GameMode.MENU:
            self.show_menu()

    def _menu_banner(self) -> Banner:
        return Banner(TITLE, INSTRUCTIONS[self.control_mode], 'Start Game')

    def _reset(self) -> None:
        """Clear counters, entities, timers and input for a new match."""
        self.score = 0
        self.hits = 0
        self.intercepts = 0
        self.enemies.clear()
        self.players.clear()
        self.interceptors.clear()
        self.explosions.clear()
        self.spawn.reset()
        self.keys.release_all()
        self.aim_queue.clear()
        self._push_stats()

    def _push_stats(self) -> None:
        self.ui.update_stats(self.score, self.hits, self.intercepts)
