"""Tests for the terminal engine, render sink and terminal collaborators."""

import io
import math
import unittest

from intercept_line.engine import (
    BrailleCanvas, DoubleBuffer, GameRenderer, make_renderer, rgb_to_ansi
)
from intercept_line.events import AudioCue, Banner
from intercept_line.main import TerminalAudio, build_parser
from intercept_line.modes import ControlMode
from intercept_line.render import TerminalRenderSink, TerminalUI, heading_glyph
from tests.fakes import add_enemy, make_session


class FakeTerm:
    """Just enough of blessed.Terminal for the renderer."""

    def __init__(self, width=80, height=24):
        self.width = width
        self.height = height
        self.normal = ''

    def move_xy(self, x, y):
        return f'<{x},{y}>'

    def color(self, c):
        return ''

    def on_color(self, c):
        return ''


def screen_rows(renderer):
    return [''.join(cell[0] for cell in row) for row in renderer.buffer.front]


class TestEngine(unittest.TestCase):

    def test_rgb_to_ansi(self):
        self.assertEqual(rgb_to_ansi((255, 0, 0)), 196)
        self.assertEqual(rgb_to_ansi((0, 0, 0)), 16)
        self.assertEqual(rgb_to_ansi((255, 255, 255), alpha=0.0), 16)

    def test_double_buffer_only_emits_changes(self):
        buffer = DoubleBuffer(FakeTerm(), 10, 3)
        buffer.put(2, 1, 'X')
        self.assertEqual(buffer.present(), '<2,1>X')

        buffer.clear_back()
        buffer.put(2, 1, 'X')
        self.assertEqual(buffer.present(), '')

    def test_put_outside_is_ignored(self):
        buffer = DoubleBuffer(FakeTerm(), 4, 2)
        buffer.put(10, 10, 'X')
        buffer.put(-1, 0, 'X')
        self.assertEqual(buffer.present(), '')

    def test_braille_layer_fills_empty_cells_only(self):
        buffer = DoubleBuffer(FakeTerm(), 4, 2)
        canvas = BrailleCanvas(4, 2)
        canvas.set_pixel(0, 0)
        canvas.set_pixel(1, 3)
        canvas.set_pixel(2, 0)
        buffer.put(1, 0, '#')

        canvas.blit_to_buffer(buffer)

        self.assertEqual(buffer.back[0][0][0], chr(0x2800 + 0x01 + 0x80))
        self.assertEqual(buffer.back[0][1][0], '#')

    def test_world_to_cell_mapping(self):
        renderer = GameRenderer(FakeTerm(80, 24), 1000, 700)
        self.assertEqual(renderer.game_height, 21)
        self.assertEqual(renderer.to_cell(500, 350), (40, 10))
        self.assertEqual(renderer.to_pixel(0, 0), (0, 0))

    def test_too_small_terminal_rejected(self):
        with self.assertRaises(ValueError):
            make_renderer(FakeTerm(40, 10), 1000, 700, min_size=(60, 20))


class TestRenderSink(unittest.TestCase):

    def setUp(self):
        self.renderer = GameRenderer(FakeTerm(), 1000, 700)
        self.ui = TerminalUI()
        self.written = []
        self.sink = TerminalRenderSink(self.renderer, self.ui, write=self.written.append)

    def test_heading_glyphs(self):
        self.assertEqual(heading_glyph(0.0), '↑')
        self.assertEqual(heading_glyph(math.pi / 2), '→')
        self.assertEqual(heading_glyph(math.pi), '↓')
        self.assertEqual(heading_glyph(None), '↑')

    def test_draws_entities_and_hud(self):
        session = make_session(ControlMode.KEYBOARD)
        session.update(0)
        self.sink(session.snapshot())

        rows = screen_rows(self.renderer)
        self.assertTrue(self.written)
        self.assertIn('INTERCEPT LINE', rows[self.renderer.game_height])
        self.assertIn('HITS: 0/5', rows[self.renderer.game_height + 1])
        self.assertTrue(any('↑' in row for row in rows))

    def test_banner_overlay(self):
        self.ui.show_banner(Banner('Victory!', ('Score: 2000',), 'Play Again'))
        self.sink(make_session().snapshot())
        rows = screen_rows(self.renderer)
        self.assertTrue(any('Victory!' in row for row in rows))
        self.assertTrue(any('PLAY AGAIN' in row for row in rows))

    def test_same_size_is_not_a_resize(self):
        self.assertFalse(self.sink.sync_size(80, 24))

    def test_resize_rebuilds_buffers_and_starfield(self):
        self.assertTrue(self.sink.sync_size(120, 40))

        self.assertEqual((self.renderer.width, self.renderer.height), (120, 40))
        self.assertEqual(self.renderer.game_height, 37)
        self.assertEqual(self.renderer.braille.pixel_width, 240)
        self.assertEqual(len(self.renderer.buffer.front), 40)
        self.assertTrue(all(0 <= x < 120 and 0 <= y < 37
                            for x, y, _, _ in self.sink.starfield))

        self.sink(make_session().snapshot())
        rows = screen_rows(self.renderer)
        self.assertEqual(len(rows[0]), 120)
        self.assertIn('INTERCEPT LINE', rows[37])

    def test_ground_impact_shakes_screen(self):
        session = make_session(ControlMode.POINTER)
        self.sink(session.snapshot())
        add_enemy(session, 100, 619, vy=2.0)
        session.update(0)
        self.sink(session.snapshot())
        self.assertGreater(self.renderer.shake_frames, 0)


class TestTerminalUI(unittest.TestCase):

    def test_tracks_pushed_state(self):
        ui = TerminalUI()
        ui.update_stats(300, 2, 3)
        ui.set_pause_label('Resume')
        ui.show_banner(Banner('Game Paused'))
        self.assertEqual((ui.score, ui.hits, ui.intercepts), (300, 2, 3))
        self.assertEqual(ui.pause_label, 'Resume')
        ui.hide_banner()
        self.assertIsNone(ui.banner)


class TestTerminalAudio(unittest.TestCase):

    def test_bell_for_important_cues_only(self):
        stream = io.StringIO()
        audio = TerminalAudio(stream)
        audio.play(AudioCue.LAUNCH)
        audio.play(AudioCue.INTERCEPT)
        audio.play(AudioCue.IMPACT)
        audio.play(AudioCue.VICTORY)
        self.assertEqual(stream.getvalue(), '\a\a')

    def test_muted(self):
        stream = io.StringIO()
        TerminalAudio(stream, enabled=False).play(AudioCue.DEFEAT)
        self.assertEqual(stream.getvalue(), '')

    def test_broken_stream_falls_back_to_silence(self):
        stream = io.StringIO()
        stream.close()
        audio = TerminalAudio(stream)
        audio.play(AudioCue.DEFEAT)
        self.assertFalse(audio.enabled)


class TestCommandLine(unittest.TestCase):

    def test_defaults(self):
        args = build_parser().parse_args([])
        self.assertEqual(args.control, 'keyboard')
        self.assertEqual((args.width, args.height), (1000.0, 700.0))
        self.assertFalse(args.sprite_hitbox)
        self.assertIsNone(args.log_file)

    def test_pointer_and_seed(self):
        args = build_parser().parse_args(['--control', 'pointer', '--seed', '7', '--sprite-hitbox'])
        self.assertEqual(ControlMode(args.control), ControlMode.POINTER)
        self.assertEqual(args.seed, 7)
        self.assertTrue(args.sprite_hitbox)


if __name__ == '__main__':
    unittest.main()
