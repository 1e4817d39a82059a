"""Tests for explosion bursts and particle physics."""

import math
import random
import unittest

from intercept_line.components import TINT_GROUND_IMPACT
from intercept_line.particles import (
    PARTICLE_COUNT, PARTICLE_GRAVITY, explosion_system, spawn_explosion
)
from intercept_line.pools import Swarm


class TestSpawnExplosion(unittest.TestCase):

    def setUp(self):
        self.explosions = Swarm()
        self.explosion = spawn_explosion(
            self.explosions, 100, 200, TINT_GROUND_IMPACT, random.Random(5)
        )

    def test_fifteen_particles_evenly_spaced(self):
        particles = self.explosion.particles
        self.assertEqual(len(particles), PARTICLE_COUNT)
        self.assertEqual(PARTICLE_COUNT, 15)

        step = 2 * math.pi / 15
        for i, p in enumerate(particles):
            angle = math.atan2(p.vy, p.vx) % (2 * math.pi)
            self.assertAlmostEqual(angle, (i * step) % (2 * math.pi), places=9)

    def test_particle_speed_alpha_and_tint(self):
        for p in self.explosion.particles:
            speed = math.hypot(p.vx, p.vy)
            self.assertGreaterEqual(speed, 1.0 - 1e-9)
            self.assertLess(speed, 4.0)
            self.assertEqual(p.alpha, 1.0)
            self.assertEqual(p.tint, TINT_GROUND_IMPACT)
            self.assertEqual((p.x, p.y), (100, 200))

    def test_added_with_full_life(self):
        self.assertEqual(len(self.explosions), 1)
        self.assertEqual(self.explosion.life, 1.0)

    def test_rng_is_optional(self):
        explosion = spawn_explosion(self.explosions, 0, 0, rng=None)
        self.assertEqual(len(explosion.particles), PARTICLE_COUNT)
        self.assertEqual(len(self.explosions), 2)


class TestExplosionSystem(unittest.TestCase):

    def test_motion_gravity_and_fade(self):
        explosions = Swarm()
        explosion = spawn_explosion(explosions, 0, 0, rng=random.Random(1))
        before = [(p.x, p.y, p.vx, p.vy) for p in explosion.particles]

        explosion_system(explosions, 100)

        self.assertAlmostEqual(explosion.life, 0.9)
        for (x, y, vx, vy), p in zip(before, explosion.particles):
            self.assertAlmostEqual(p.x, x + vx)
            self.assertAlmostEqual(p.y, y + vy)
            self.assertAlmostEqual(p.vy, vy + PARTICLE_GRAVITY)
            self.assertAlmostEqual(p.alpha, 0.9)

    def test_group_discarded_when_life_runs_out(self):
        explosions = Swarm()
        spawn_explosion(explosions, 0, 0, rng=random.Random(1))
        explosion_system(explosions, 600)
        self.assertEqual(len(explosions), 1)
        explosion_system(explosions, 500)
        self.assertEqual(len(explosions), 0)

    def test_particles_never_pruned_individually(self):
        explosions = Swarm()
        explosion = spawn_explosion(explosions, 0, 0, rng=random.Random(1))
        explosion.particles[0].alpha = -5.0

        explosion_system(explosions, 16)

        self.assertEqual(len(explosions), 1)
        self.assertEqual(len(explosion.particles), PARTICLE_COUNT)


if __name__ == '__main__':
    unittest.main()
