"""Tests for per-frame motion: player steering, interceptors, enemy missiles."""

import math
import unittest

from intercept_line.components import (
    TINT_GROUND_IMPACT, TINT_SELF_DESTRUCT
)
from intercept_line.events import AudioCue
from intercept_line.modes import ControlMode
from intercept_line.player import Direction, KeyState
from tests.fakes import add_enemy, add_interceptor, add_player, make_session


class TestKeyState(unittest.TestCase):

    def test_single_axis(self):
        keys = KeyState()
        keys.press(Direction.LEFT)
        self.assertEqual(keys.velocity(5), (-5, 0.0))

    def test_diagonal_keeps_speed(self):
        for horizontal in (Direction.LEFT, Direction.RIGHT):
            for vertical in (Direction.UP, Direction.DOWN):
                keys = KeyState()
                keys.press(horizontal)
                keys.press(vertical)
                vx, vy = keys.velocity(5)
                self.assertAlmostEqual(math.hypot(vx, vy), 5.0)

    def test_release_all(self):
        keys = KeyState()
        keys.press(Direction.UP)
        keys.release_all()
        self.assertEqual(keys.velocity(5), (0.0, 0.0))


class TestPlayerControl(unittest.TestCase):

    def setUp(self):
        self.session = make_session(ControlMode.KEYBOARD)

    def test_missile_created_on_launch_pad(self):
        self.session.update(0)
        missile = self.session.players.occupant
        self.assertIsNotNone(missile)
        self.assertEqual((missile.x, missile.y), (500.0, 600.0))
        self.assertIn(AudioCue.LAUNCH, self.session.audio.cues)

    def test_only_one_player_missile(self):
        for _ in range(5):
            self.session.update(0)
        self.assertEqual(len(self.session.players), 1)
        self.assertEqual(self.session.audio.cues.count(AudioCue.LAUNCH), 1)

    def test_steering_and_heading(self):
        self.session.update(0)
        self.session.key_down(Direction.RIGHT)
        self.session.update(0)
        missile = self.session.players.occupant
        self.assertEqual(missile.x, 505.0)
        self.assertAlmostEqual(missile.angle, math.pi / 2)

    def test_diagonal_speed_matches_single_axis(self):
        self.session.update(0)
        missile = self.session.players.occupant
        start = (missile.x, missile.y)

        self.session.key_down(Direction.UP)
        self.session.key_down(Direction.RIGHT)
        self.session.update(0)

        moved = math.hypot(missile.x - start[0], missile.y - start[1])
        self.assertAlmostEqual(moved, missile.speed)

    def test_stationary_missile_keeps_heading(self):
        self.session.update(0)
        self.session.key_down(Direction.LEFT)
        self.session.update(0)
        self.session.key_up(Direction.LEFT)
        self.session.update(0)
        missile = self.session.players.occupant
        self.assertAlmostEqual(missile.angle, 3 * math.pi / 2)
        self.assertEqual((missile.vx, missile.vy), (0.0, 0.0))

    def test_footprint_stays_on_canvas(self):
        missile = add_player(self.session, 26, 648)
        self.session.key_down(Direction.LEFT)
        self.session.key_down(Direction.DOWN)
        for _ in range(3):
            self.session.update(0)
        self.assertEqual(missile.x, missile.width / 2)
        self.assertEqual(missile.y, 700 - missile.height / 2)

    def test_trail_capped_with_freshest_point_last(self):
        self.session.update(0)
        self.session.key_down(Direction.UP)
        for _ in range(50):
            self.session.update(0)
        missile = self.session.players.occupant
        self.assertEqual(len(missile.trail), 12)
        self.assertEqual(missile.trail.points[-1], (missile.x, missile.y))

    def test_no_player_missile_in_pointer_mode(self):
        session = make_session(ControlMode.POINTER)
        session.update(0)
        self.assertEqual(len(session.players), 0)


class TestInterceptors(unittest.TestCase):

    def setUp(self):
        self.session = make_session(ControlMode.POINTER)

    def test_launch_from_pad_at_fixed_speed(self):
        self.assertTrue(self.session.aim(800, 200))
        self.session.update(0)

        interceptor = self.session.interceptors.as_list()[0]
        self.assertAlmostEqual(math.hypot(interceptor.vx, interceptor.vy), 6.0)
        self.assertAlmostEqual(interceptor.x, 500 + interceptor.vx)
        self.assertAlmostEqual(interceptor.y, 600 + interceptor.vy)
        self.assertEqual(interceptor.trail.points[0], (500.0, 600.0))
        self.assertEqual(self.session.audio.cues, [AudioCue.LAUNCH])

    def test_self_destruct_on_arrival(self):
        self.session.aim(500, 300)
        updates = 0
        while self.session.interceptors or updates == 0:
            self.session.update(0)
            updates += 1
            self.assertLess(updates, 100)

        # 300 units at 6 per frame: within 20 units after 47 frames
        self.assertEqual(updates, 47)
        explosion = self.session.explosions.as_list()[0]
        self.assertEqual(explosion.particles[0].tint, TINT_SELF_DESTRUCT)
        self.assertEqual(self.session.score, 0)
        self.assertEqual(self.session.intercepts, 0)

    def test_self_destruct_off_canvas(self):
        interceptor = add_interceptor(self.session, 995, 100)
        interceptor.vx = 10.0
        self.session.update(0)
        self.assertEqual(len(self.session.interceptors), 0)
        self.assertEqual(len(self.session.explosions), 1)

    def test_trail_capped(self):
        self.session.aim(0, 0)
        for _ in range(40):
            self.session.update(0)
        for interceptor in self.session.interceptors:
            self.assertLessEqual(len(interceptor.trail), 8)


class TestEnemyMissiles(unittest.TestCase):

    def test_ground_impact(self):
        """Missile falling straight down from (100, 0) hits the ground once."""
        session = make_session(ControlMode.KEYBOARD)
        add_enemy(session, 100, 0, vx=0.0, vy=2.0)

        ticks = 0
        while session.enemies:
            session.update(0)
            ticks += 1
            self.assertLessEqual(ticks, 400)

        self.assertEqual(ticks, 310)  # y reaches 620 = 700 - 80
        self.assertEqual(session.hits, 1)
        explosion = session.explosions.as_list()[0]
        self.assertEqual(explosion.particles[0].tint, TINT_GROUND_IMPACT)
        self.assertIn(AudioCue.IMPACT, session.audio.cues)
        self.assertEqual(session.ui.stats[-1], (0, 1, 0))

    def test_impact_explosion_at_impact_point(self):
        session = make_session(ControlMode.POINTER)
        add_enemy(session, 100, 618, vx=0.0, vy=2.0)
        session.update(0)
        # Particles have taken one step since the burst
        explosion = session.explosions.as_list()[0]
        centre_x = sum(p.x - p.vx for p in explosion.particles) / 15
        self.assertAlmostEqual(centre_x, 100.0)

    def test_trail_records_position_before_move(self):
        session = make_session(ControlMode.POINTER)
        missile = add_enemy(session, 300, 10, vx=1.0, vy=1.0)
        session.update(0)
        self.assertEqual(missile.trail.points, [(300, 10)])
        self.assertEqual((missile.x, missile.y), (301, 11))

        for _ in range(30):
            session.update(0)
        self.assertEqual(len(missile.trail), 10)


if __name__ == '__main__':
    unittest.main()
