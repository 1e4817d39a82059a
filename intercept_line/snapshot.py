"""
Render Snapshot
================
Immutable per-frame view of the session handed to the render sink.

Shape:
    RenderSnapshot.entities maps a category name to a tuple of views,
    in the order the session holds them:

        'enemy_missiles'   -> MissileView...
        'player_missiles'  -> MissileView... (zero or one)
        'interceptors'     -> MissileView...
        'explosions'       -> ExplosionView...
"""

from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

from .components import Tint
from .geometry import heading
from .modes import ControlMode, GameMode


ENEMY_MISSILES = 'enemy_missiles'
PLAYER_MISSILES = 'player_missiles'
INTERCEPTORS = 'interceptors'
EXPLOSIONS = 'explosions'

CATEGORIES = (ENEMY_MISSILES, PLAYER_MISSILES, INTERCEPTORS, EXPLOSIONS)


@dataclass(frozen=True)
class MissileView:
    x: float
    y: float
    angle: float
    trail: Tuple[Tuple[float, float], ...]
    width: float = 0.0
    height: float = 0.0


@dataclass(frozen=True)
class ParticleView:
    x: float
    y: float
    alpha: float  # clamped to [0, 1]
    tint: Tint


@dataclass(frozen=True)
class ExplosionView:
    life: float
    particles: Tuple[ParticleView, ...]


@dataclass(frozen=True)
class RenderSnapshot:
    width: float
    height: float
    ground_y: float
    mode: GameMode
    control_mode: ControlMode
    score: int
    hits: int
    intercepts: int
    max_hits: int
    target_intercepts: int
    entities: Dict[str, tuple] = field(default_factory=dict)

    def category(self, name: str) -> tuple:
        return self.entities.get(name, ())


def _missile_view(missile, angle: Optional[float] = None) -> MissileView:
    if angle is None:
        angle = getattr(missile, 'angle', None)
    return MissileView(
        x=missile.x,
        y=missile.y,
        angle=angle,
        trail=tuple(missile.trail.points),
        width=getattr(missile, 'width', 0.0),
        height=getattr(missile, 'height', 0.0),
    )


def _explosion_view(explosion) -> ExplosionView:
    return ExplosionView(
        life=max(0.0, explosion.life),
        particles=tuple(
            ParticleView(p.x, p.y, min(1.0, max(0.0, p.alpha)), p.tint)
            for p in explosion.particles
        ),
    )


def build_snapshot(session) -> RenderSnapshot:
    """Capture the session's entities and counters for one frame."""
    return RenderSnapshot(
        width=session.width,
        height=session.height,
        ground_y=session.ground_y,
        mode=session.mode,
        control_mode=session.control_mode,
        score=session.score,
        hits=session.hits,
        intercepts=session.intercepts,
        max_hits=session.max_hits,
        target_intercepts=session.target_intercepts,
        entities={
            ENEMY_MISSILES: tuple(
                _missile_view(m, heading(m.vx, m.vy)) for m in session.enemies
            ),
            PLAYER_MISSILES: tuple(_missile_view(m) for m in session.players),
            INTERCEPTORS: tuple(_missile_view(m) for m in session.interceptors),
            EXPLOSIONS: tuple(_explosion_view(e) for e in session.explosions),
        },
    )
