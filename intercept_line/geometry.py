"""
Geometry Helpers
=================
Distance, direction and clamping used by every system.
"""

import math
from typing import Tuple


def clamp(value: float, lo: float, hi: float) -> float:
    """Clamp value between low and high bounds."""
    return lo if value < lo else hi if value > hi else value


def distance(ax: float, ay: float, bx: float, by: float) -> float:
    """Euclidean distance between two points."""
    return math.hypot(ax - bx, ay - by)


def normalize(x: float, y: float, eps: float = 1e-9) -> Tuple[float, float]:
    """Normalize a vector to unit length. Zero-length input gives (0, 0)."""
    length = math.hypot(x, y)
    if length < eps:
        return 0.0, 0.0
    return x / length, y / length


def direction_to(from_x: float, from_y: float,
                 to_x: float, to_y: float) -> Tuple[float, float]:
    """Unit vector pointing from one point to another."""
    return normalize(to_x - from_x, to_y - from_y)


def midpoint(ax: float, ay: float, bx: float, by: float) -> Tuple[float, float]:
    return (ax + bx) / 2, (ay + by) / 2


def heading(vx: float, vy: float) -> float:
    """
    Facing angle for a sprite whose nose points up the screen.

    An upward-moving missile (vy < 0) has heading 0.
    """
    return math.atan2(vy, vx) + math.pi / 2


def is_finite(*values: float) -> bool:
    """True when every value is a real, finite number."""
    try:
        return all(math.isfinite(v) for v in values)
    except TypeError:
        return False
