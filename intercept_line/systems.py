"""
Simulation Systems
===================
Functions that advance one frame of the session.

Positions integrate once per frame (velocities are in units per frame).
Every system removes entities in two phases: destroy() during the scan,
process_dead() after it.
"""

import logging

from .components import (
    TINT_GROUND_IMPACT, TINT_SELF_DESTRUCT, TINT_INTERCEPT
)
from .events import AudioCue
from .geometry import clamp, distance, heading, midpoint
from .modes import ControlMode
from .particles import spawn_explosion
from .player import create_interceptor, create_player_missile


LOGGER = logging.getLogger(__name__)


# Interceptors detonate when this close to their aim point
INTERCEPTOR_ARRIVAL_RADIUS = 20.0


# =============================================================================
# PLAYER SYSTEMS
# =============================================================================

def player_control_system(session) -> None:
    """
    Keep the player slot filled and steer its missile from held keys.

    The missile keeps its last heading while stationary and is clamped
    so its whole footprint stays on the canvas.
    """
    if session.control_mode is not ControlMode.KEYBOARD:
        return

    if session.players.has_room():
        session.players.add(create_player_missile(session.width, session.height))
        session.audio.play(AudioCue.LAUNCH)

    missile = session.players.occupant
    if missile is None:
        return

    missile.vx, missile.vy = session.keys.velocity(missile.speed)
    if missile.vx != 0 or missile.vy != 0:
        missile.angle = heading(missile.vx, missile.vy)

    missile.x += missile.vx
    missile.y += missile.vy

    half_w = missile.width / 2
    half_h = missile.height / 2
    missile.x = clamp(missile.x, half_w, session.width - half_w)
    missile.y = clamp(missile.y, half_h, session.height - half_h)

    missile.trail.record(missile.x, missile.y)


def interceptor_launch_system(session) -> None:
    """Turn queued aim points into interceptors (pointer mode only)."""
    if session.control_mode is not ControlMode.POINTER:
        session.aim_queue.clear()
        return

    while session.aim_queue:
        target_x, target_y = session.aim_queue.popleft()
        session.interceptors.add(
            create_interceptor(session.width, session.height, target_x, target_y)
        )
        session.audio.play(AudioCue.LAUNCH)


def interceptor_system(session) -> None:
    """
    Fly interceptors toward their aim points.

    An interceptor that arrives or leaves the canvas self-destructs
    with a blue burst. That burst scores nothing.
    """
    for interceptor in session.interceptors:
        interceptor.trail.record(interceptor.x, interceptor.y)

        interceptor.x += interceptor.vx
        interceptor.y += interceptor.vy

        arrived = distance(
            interceptor.x, interceptor.y,
            interceptor.target_x, interceptor.target_y
        ) < INTERCEPTOR_ARRIVAL_RADIUS
        out_of_bounds = (
            interceptor.x < 0 or interceptor.x > session.width or
            interceptor.y < 0 or interceptor.y > session.height
        )

        if arrived or out_of_bounds:
            session.interceptors.destroy(interceptor)
            spawn_explosion(
                session.explosions, interceptor.x, interceptor.y,
                TINT_SELF_DESTRUCT, session.rng
            )

    session.interceptors.process_dead()


# =============================================================================
# ENEMY SYSTEMS
# =============================================================================

def enemy_missile_system(session) -> None:
    """
    Move enemy missiles and resolve ground impacts.

    Stops as soon as an impact ends the match, so the impact count
    never overshoots the defeat threshold.
    """
    for missile in session.enemies:
        if not session.is_playing:
            break

        missile.trail.record(missile.x, missile.y)

        missile.x += missile.vx
        missile.y += missile.vy

        if missile.y >= session.ground_y:
            session.enemies.destroy(missile)
            spawn_explosion(
                session.explosions, missile.x, missile.y,
                TINT_GROUND_IMPACT, session.rng
            )
            session.register_ground_impact()

    session.enemies.process_dead()


# =============================================================================
# COLLISION
# =============================================================================

def collision_system(session) -> int:
    """
    Match enemy missiles against the active defenders.

    Enemies and defenders are both scanned newest first. Each enemy is
    destroyed together with the first live defender within the
    collision radius. Destroyed entities are skipped for the rest of
    the pass. With the single player slot this allows one kill
    per frame; with interceptors any number of disjoint pairs.

    Returns the number of intercepts scored.
    """
    defenders = session.defenders
    radius = session.collision_radius
    kills = 0

    for enemy in reversed(session.enemies):
        if not session.is_playing:
            break

        for defender in reversed(defenders):
            if distance(enemy.x, enemy.y, defender.x, defender.y) >= radius:
                continue

            session.enemies.destroy(enemy)
            defenders.destroy(defender)

            mx, my = midpoint(enemy.x, enemy.y, defender.x, defender.y)
            spawn_explosion(session.explosions, mx, my, TINT_INTERCEPT, session.rng)

            kills += 1
            session.register_intercept()
            break

    session.enemies.process_dead()
    defenders.process_dead()

    if kills:
        LOGGER.debug('%d intercept(s) this frame', kills)
    return kills
