"""
Enemy Spawner
==============
Timed enemy missile creation with a monotonic difficulty ramp.
"""

import logging
import random
from dataclasses import dataclass

from .components import EnemyMissile
from .geometry import direction_to


LOGGER = logging.getLogger(__name__)


# =============================================================================
# RAMP CONSTANTS
# =============================================================================

INITIAL_SPAWN_INTERVAL_MS = 2000.0
SPAWN_INTERVAL_DECREMENT_MS = 50.0
MIN_SPAWN_INTERVAL_MS = 800.0

# Enemy speed range in units per frame, [min, max)
ENEMY_SPEED_MIN = 1.0
ENEMY_SPEED_MAX = 3.0


@dataclass
class SpawnSchedule:
    """Spawn timer and the shrinking interval between spawns."""
    interval: float = INITIAL_SPAWN_INTERVAL_MS
    timer: float = 0.0

    def advance(self, dt_ms: float) -> bool:
        """
        Accumulate elapsed time. Returns True when a spawn is due.

        A due spawn resets the timer to zero and tightens the interval,
        never below MIN_SPAWN_INTERVAL_MS.
        """
        self.timer += dt_ms
        if self.timer < self.interval:
            return False
        self.timer = 0.0
        self.interval = max(MIN_SPAWN_INTERVAL_MS,
                            self.interval - SPAWN_INTERVAL_DECREMENT_MS)
        return True

    def reset(self) -> None:
        self.interval = INITIAL_SPAWN_INTERVAL_MS
        self.timer = 0.0


def create_enemy_missile(width: float, height: float,
                         rng: random.Random) -> EnemyMissile:
    """
    Create a missile on the top edge aimed at a random ground point.

    Speed is drawn uniformly from [ENEMY_SPEED_MIN, ENEMY_SPEED_MAX).
    """
    x = rng.random() * width
    target_x = rng.random() * width
    speed = rng.random() * (ENEMY_SPEED_MAX - ENEMY_SPEED_MIN) + ENEMY_SPEED_MIN

    dir_x, dir_y = direction_to(x, 0.0, target_x, height)
    return EnemyMissile(x=x, y=0.0, vx=dir_x * speed, vy=dir_y * speed)


def spawner_system(session, dt_ms: float) -> None:
    """Advance the spawn schedule and add an enemy missile when due."""
    if not session.spawn.advance(dt_ms):
        return

    missile = create_enemy_missile(session.width, session.height, session.rng)
    session.enemies.add(missile)
    LOGGER.debug(
        'Enemy spawned at x=%.1f, next interval %.0f ms',
        missile.x, session.spawn.interval
    )
