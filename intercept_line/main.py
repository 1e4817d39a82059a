#!/usr/bin/env python3
"""
INTERCEPT LINE - Terminal Missile Defense
==========================================
Stop the falling missiles before they reach the cities.

Controls:
    ENTER        - Start / Resume / Play again
    ARROWS, WASD - Steer missile (keyboard mode) or move crosshair (pointer mode)
    SPACE        - Launch interceptor at crosshair (pointer mode)
    P            - Pause / Resume
    R            - Restart to menu
    1 / 2        - Keyboard / pointer control (menu and end screens)
    F            - Toggle FPS display
    Q/ESC        - Quit
"""

import argparse
import logging
import random
import sys

try:
    from blessed import Terminal
except ImportError:
    print("ERROR: 'blessed' library required. Install with: pip install blessed")
    sys.exit(1)

from .controls import InputHandler
from .driver import FrameDriver
from .engine import make_renderer
from .events import AudioCue, AudioSink
from .modes import ControlMode
from .render import TerminalRenderSink, TerminalUI
from .session import DEFAULT_HEIGHT, DEFAULT_WIDTH, GameSession


LOGGER = logging.getLogger(__name__)


MIN_WIDTH = 60
MIN_HEIGHT = 20

# Cues loud enough to ring the terminal bell
BELL_CUES = (AudioCue.IMPACT, AudioCue.DEFEAT, AudioCue.VICTORY)


class TerminalAudio(AudioSink):
    """
    Rings the terminal bell for important cues.

    Falls back to silence for good if the terminal refuses the write.
    """

    def __init__(self, stream=None, enabled: bool = True):
        self.stream = stream if stream is not None else sys.stdout
        self.enabled = enabled

    def play(self, cue: AudioCue) -> None:
        if not self.enabled or cue not in BELL_CUES:
            return
        try:
            self.stream.write('\a')
            self.stream.flush()
        except (OSError, ValueError) as exc:
            LOGGER.warning('Audio disabled: %s', exc)
            self.enabled = False


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='intercept-line',
        description='Terminal missile-defense arcade game',
    )
    parser.add_argument(
        '--control',
        choices=[mode.value for mode in ControlMode],
        default=ControlMode.KEYBOARD.value,
        help='Input scheme at start-up (default: keyboard)',
    )
    parser.add_argument('--width', type=float, default=DEFAULT_WIDTH,
                        help='Canvas width in world units')
    parser.add_argument('--height', type=float, default=DEFAULT_HEIGHT,
                        help='Canvas height in world units')
    parser.add_argument('--sprite-hitbox', action='store_true',
                        help='Use the larger sprite-sized hitbox in keyboard mode')
    parser.add_argument('--seed', type=int, default=None,
                        help='Seed for spawn and particle randomness')
    parser.add_argument('--mute', action='store_true',
                        help='Disable the terminal bell')
    parser.add_argument('--log-file', default=None,
                        help='Write logs to this file (the screen belongs to the game)')
    parser.add_argument('--log-level', default='INFO',
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'])
    return parser


def configure_logging(log_file, level: str) -> None:
    """Log to a file only. Without one, records are discarded."""
    if log_file is None:
        logging.getLogger('intercept_line').addHandler(logging.NullHandler())
        return
    logging.basicConfig(
        filename=log_file,
        level=getattr(logging, level),
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )


def main(argv=None):
    """Entry point. Sets up terminal and runs the 60 FPS game loop."""
    args = build_parser().parse_args(argv)
    configure_logging(args.log_file, args.log_level)

    if args.width <= 0 or args.height <= 0:
        print('Canvas width and height must be positive')
        sys.exit(2)

    term = Terminal()
    try:
        renderer = make_renderer(term, args.width, args.height,
                                 min_size=(MIN_WIDTH, MIN_HEIGHT))
    except ValueError as exc:
        print(exc)
        sys.exit(1)

    ui = TerminalUI()
    session = GameSession(
        width=args.width,
        height=args.height,
        control_mode=ControlMode(args.control),
        sprite_hitbox=args.sprite_hitbox,
        rng=random.Random(args.seed),
        audio=TerminalAudio(enabled=not args.mute),
        ui=ui,
    )
    controls = InputHandler(session)
    sink = TerminalRenderSink(renderer, ui, crosshair=controls.get_crosshair)
    driver = FrameDriver(session, sink)

    running = [True]

    def handle_input():
        key = term.inkey(timeout=0)
        while key:
            controls.process_key(key)
            key = term.inkey(timeout=0)
        controls.update()

        if sink.sync_size(term.width, term.height):
            LOGGER.info('Terminal resized to %dx%d', term.width, term.height)
            print(term.home + term.clear, end='', flush=True)

        if controls.consume_quit():
            running[0] = False
        if controls.consume_toggle_fps():
            renderer.show_fps = not renderer.show_fps
        renderer.current_fps = driver.current_fps

    LOGGER.info('Starting %s mode on %.0fx%.0f canvas',
                session.control_mode.value, session.width, session.height)

    with term.fullscreen(), term.cbreak(), term.hidden_cursor():
        # Initial clear (only time we clear the whole screen)
        print(term.home + term.clear, end='', flush=True)
        try:
            driver.run(lambda: running[0], before_frame=handle_input)
        except KeyboardInterrupt:
            pass
        finally:
            # Restore terminal
            print(term.normal, end='', flush=True)

    LOGGER.info('Exited with score %d', session.score)


if __name__ == '__main__':
    main()
