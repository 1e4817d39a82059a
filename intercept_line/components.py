"""
Entity Definitions
===================
All entities are plain dataclasses. Systems own the behavior.
"""

from dataclasses import dataclass, field
from typing import List, Tuple


# =============================================================================
# TINTS
# =============================================================================
# RGB tuples. The renderer maps them onto its own palette.

Tint = Tuple[int, int, int]

TINT_GROUND_IMPACT: Tint = (255, 68, 68)     # #ff4444
TINT_SELF_DESTRUCT: Tint = (68, 68, 255)     # #4444ff
TINT_INTERCEPT: Tint = (255, 255, 68)        # #ffff44


# =============================================================================
# TRAIL LENGTHS
# =============================================================================

ENEMY_TRAIL_LENGTH = 10
PLAYER_TRAIL_LENGTH = 12
INTERCEPTOR_TRAIL_LENGTH = 8


# =============================================================================
# SHARED COMPONENTS
# =============================================================================

@dataclass
class Trail:
    """Bounded FIFO of recent positions. Oldest point first."""
    max_length: int
    points: List[Tuple[float, float]] = field(default_factory=list)

    def record(self, x: float, y: float) -> None:
        """Append the freshest point, then drop the oldest on overflow."""
        self.points.append((x, y))
        if len(self.points) > self.max_length:
            del self.points[0]

    def __len__(self) -> int:
        return len(self.points)


# =============================================================================
# PROJECTILES
# =============================================================================

@dataclass(eq=False)
class EnemyMissile:
    """Incoming missile on a fixed straight-line course."""
    x: float
    y: float
    vx: float
    vy: float
    trail: Trail = field(default_factory=lambda: Trail(ENEMY_TRAIL_LENGTH))
    alive: bool = True


@dataclass(eq=False)
class PlayerMissile:
    """Keyboard-steered missile. At most one exists at a time."""
    x: float
    y: float
    vx: float = 0.0
    vy: float = 0.0
    speed: float = 5.0
    angle: float = 0.0
    width: float = 50.0
    height: float = 100.0
    trail: Trail = field(default_factory=lambda: Trail(PLAYER_TRAIL_LENGTH))
    alive: bool = True


@dataclass(eq=False)
class Interceptor:
    """Pointer-aimed missile flying straight at its target point."""
    x: float
    y: float
    target_x: float
    target_y: float
    vx: float
    vy: float
    angle: float = 0.0
    width: float = 35.0
    height: float = 70.0
    trail: Trail = field(default_factory=lambda: Trail(INTERCEPTOR_TRAIL_LENGTH))
    alive: bool = True


# =============================================================================
# EFFECTS
# =============================================================================

@dataclass
class Particle:
    """Single spark in an explosion."""
    x: float
    y: float
    vx: float
    vy: float
    alpha: float = 1.0
    tint: Tint = TINT_INTERCEPT


@dataclass(eq=False)
class Explosion:
    """Particle burst. Particles live and die with the group."""
    particles: List[Particle] = field(default_factory=list)
    life: float = 1.0  # seconds
    alive: bool = True
