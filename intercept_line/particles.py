"""
Particle System
================
Radial explosion bursts and their per-frame physics.
"""

import math
import random
from typing import Optional

from .components import Explosion, Particle, Tint, TINT_INTERCEPT
from .pools import Swarm


PARTICLE_COUNT = 15
PARTICLE_SPEED_MIN = 1.0
PARTICLE_SPEED_MAX = 4.0
PARTICLE_GRAVITY = 0.1  # units per frame^2
EXPLOSION_LIFE = 1.0    # seconds


def spawn_explosion(
    explosions: Swarm,
    x: float, y: float,
    tint: Tint = TINT_INTERCEPT,
    rng: Optional[random.Random] = None,
    count: int = PARTICLE_COUNT,
) -> Explosion:
    """
    Spawn a burst of particles evenly spaced around (x, y).

    Each particle flies outward at a random speed in
    [PARTICLE_SPEED_MIN, PARTICLE_SPEED_MAX).
    """
    if rng is None:
        rng = random.Random()

    particles = []
    for i in range(count):
        angle = (math.pi * 2 * i) / count
        speed = rng.random() * (PARTICLE_SPEED_MAX - PARTICLE_SPEED_MIN) + PARTICLE_SPEED_MIN
        particles.append(Particle(
            x=x, y=y,
            vx=math.cos(angle) * speed,
            vy=math.sin(angle) * speed,
            alpha=1.0,
            tint=tint,
        ))

    explosion = Explosion(particles=particles, life=EXPLOSION_LIFE)
    explosions.add(explosion)
    return explosion


def explosion_system(explosions: Swarm, dt_ms: float) -> None:
    """
    Move particles, apply gravity and fade.

    Life and alpha fall linearly with elapsed time. A spent explosion
    is discarded with all of its particles at once.
    """
    dt_s = dt_ms / 1000.0

    for explosion in explosions:
        explosion.life -= dt_s
        for particle in explosion.particles:
            particle.x += particle.vx
            particle.y += particle.vy
            particle.vy += PARTICLE_GRAVITY
            particle.alpha -= dt_s

        if explosion.life <= 0:
            explosions.destroy(explosion)

    explosions.process_dead()
