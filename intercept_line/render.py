"""
Terminal Render Sink
=====================
Draws a RenderSnapshot: background, ground, missiles, particles, HUD
and banners. Also holds the UI text state the session pushes.
"""

from typing import Callable, List, Optional, Tuple
import math
import random

from .engine import (
    GameRenderer, rgb_to_ansi,
    NEON_CYAN, NEON_BLUE, NEON_YELLOW, NEON_GREEN, NEON_RED, NEON_ORANGE,
    GRAY_LIGHT, GRAY_MED, GRAY_DARK, GRAY_DARKER, WHITE
)
from .events import Banner, UISink
from .modes import ControlMode, GameMode
from .snapshot import (
    ENEMY_MISSILES, EXPLOSIONS, INTERCEPTORS, PLAYER_MISSILES,
    MissileView, RenderSnapshot
)


# Eight headings, clockwise from "nose up"
HEADING_GLYPHS = ['↑', '↗', '→', '↘',
                  '↓', '↙', '←', '↖']

ENEMY_TRAIL_COLORS = [NEON_RED, NEON_ORANGE, 130, 88]
PLAYER_TRAIL_COLORS = [WHITE, NEON_CYAN, 38, 24]
INTERCEPTOR_TRAIL_COLORS = [WHITE, NEON_BLUE, 61, 17]


class TerminalUI(UISink):
    """UI sink that keeps the latest readouts for the HUD to draw."""

    def __init__(self):
        self.score = 0
        self.hits = 0
        self.intercepts = 0
        self.banner: Optional[Banner] = None
        self.pause_label = 'Pause'

    def update_stats(self, score: int, hits: int, intercepts: int) -> None:
        self.score = score
        self.hits = hits
        self.intercepts = intercepts

    def show_banner(self, banner: Banner) -> None:
        self.banner = banner

    def hide_banner(self) -> None:
        self.banner = None

    def set_pause_label(self, label: str) -> None:
        self.pause_label = label


def heading_glyph(angle: Optional[float]) -> str:
    if angle is None:
        return HEADING_GLYPHS[0]
    index = int(round(angle / (math.pi / 4))) % 8
    return HEADING_GLYPHS[index]


def generate_starfield(width: int, height: int, density: float = 0.01) -> list:
    """
    Random background stars as (x, y, char, color) cell tuples.

    Stars stay above the lowest third so the city skyline reads clearly.
    """
    stars = []
    star_chars = ['.', '·', '+', '*']
    star_weights = [50, 30, 15, 5]
    star_colors = [GRAY_DARKER, GRAY_DARK, 236, 237]

    for _ in range(int(width * height * density)):
        x = random.randint(0, max(0, width - 1))
        y = random.randint(0, max(0, int(height * 0.66)))
        char = random.choices(star_chars, weights=star_weights, k=1)[0]
        stars.append((x, y, char, random.choice(star_colors)))
    return stars


class TerminalRenderSink:
    """
    Callable render sink for the frame driver.

    crosshair is a zero-argument callable returning the pointer-mode
    aim point in world units (or None).
    """

    def __init__(
        self,
        renderer: GameRenderer,
        ui: TerminalUI,
        crosshair: Callable[[], Optional[Tuple[float, float]]] = lambda: None,
        write: Callable[[str], None] = None,
    ):
        self.renderer = renderer
        self.ui = ui
        self.crosshair = crosshair
        self.write = write if write is not None else _print_flush
        self.starfield = generate_starfield(renderer.width, renderer.game_height)
        self.frame = 0
        self._last_hits = 0

    def sync_size(self, width: int, height: int) -> bool:
        """
        Follow a terminal resize. Returns True when the size changed and
        the screen needs a full clear before the next frame.
        """
        renderer = self.renderer
        if (width, height) == (renderer.width, renderer.height):
            return False
        renderer.resize(width, height)
        self.starfield = generate_starfield(renderer.width, renderer.game_height)
        return True

    def __call__(self, snapshot: RenderSnapshot) -> None:
        self.frame += 1
        renderer = self.renderer

        # Shake the play field whenever a city is hit
        if snapshot.hits > self._last_hits:
            renderer.trigger_shake(intensity=2, frames=8)
        self._last_hits = snapshot.hits

        renderer.begin_frame()
        render_starfield(renderer, self.starfield)
        render_ground(renderer, snapshot)

        for view in snapshot.category(ENEMY_MISSILES):
            render_missile(renderer, view, NEON_RED, ENEMY_TRAIL_COLORS)
        for view in snapshot.category(INTERCEPTORS):
            render_missile(renderer, view, NEON_BLUE, INTERCEPTOR_TRAIL_COLORS)
        for view in snapshot.category(PLAYER_MISSILES):
            render_missile(renderer, view, NEON_CYAN, PLAYER_TRAIL_COLORS)

        render_explosions(renderer, snapshot)

        if snapshot.control_mode is ControlMode.POINTER and snapshot.mode is GameMode.PLAYING:
            aim = self.crosshair()
            if aim is not None:
                renderer.put_world(aim[0], aim[1], '+', NEON_GREEN)

        render_hud(renderer, snapshot, self.ui)
        if self.ui.banner is not None:
            render_banner(renderer, self.ui.banner, self.frame)

        output = renderer.end_frame()
        if output:
            self.write(output)


def _print_flush(output: str) -> None:
    print(output, end='', flush=True)


# =============================================================================
# DRAWING
# =============================================================================

def render_starfield(renderer: GameRenderer, stars: list) -> None:
    for x, y, char, color in stars:
        if 0 <= y < renderer.game_height:
            renderer.buffer.put(x, y, char, color)


def render_ground(renderer: GameRenderer, snapshot: RenderSnapshot) -> None:
    """Ground line with a simple city skyline sitting on it."""
    _, ground_row = renderer.to_cell(0, snapshot.ground_y)
    ground_row = min(ground_row, renderer.game_height - 1)

    renderer.put_string(0, ground_row, '_' * renderer.width, GRAY_MED)

    # Skyline rows below the ground line, lit windows at fixed intervals
    for row in range(ground_row + 1, renderer.game_height):
        for x in range(renderer.width):
            if (x // 4) % 3 == 2:
                continue
            lit = (x * 7 + row * 13) % 5 == 0
            renderer.buffer.put(x, row, ':' if lit else '#',
                                NEON_YELLOW if lit else GRAY_DARKER)


def render_missile(renderer: GameRenderer, view: MissileView,
                   color: int, trail_colors: List[int]) -> None:
    """Braille trail (freshest brightest) behind a heading glyph."""
    count = len(view.trail)
    for i, (tx, ty) in enumerate(view.trail):
        age = count - 1 - i
        shade = trail_colors[min(len(trail_colors) - 1, age * len(trail_colors) // max(1, count))]
        renderer.put_world_pixel(tx, ty, shade)

    renderer.put_world(view.x, view.y, heading_glyph(view.angle), color)


def render_explosions(renderer: GameRenderer, snapshot: RenderSnapshot) -> None:
    """
    Particles draw as characters while bright, then as braille dots.
    """
    for explosion in snapshot.category(EXPLOSIONS):
        for particle in explosion.particles:
            if particle.alpha <= 0:
                continue
            color = rgb_to_ansi(particle.tint, 0.4 + 0.6 * particle.alpha)
            if particle.alpha > 0.6:
                renderer.put_world(particle.x, particle.y, '*', color)
            else:
                renderer.put_world_pixel(particle.x, particle.y, color)


def render_hud(renderer: GameRenderer, snapshot: RenderSnapshot, ui: TerminalUI) -> None:
    """Score readout and controls in the bottom rows."""
    ui_y = renderer.game_height
    width = renderer.width

    renderer.put_string(0, ui_y, '=' * width, GRAY_DARK)
    renderer.put_string(2, ui_y, ' INTERCEPT LINE ', NEON_CYAN)

    mode_text = f' {snapshot.control_mode.value.upper()} '
    renderer.put_string(width - len(mode_text) - 2, ui_y, mode_text, NEON_YELLOW)

    row = ui_y + 1
    renderer.put_string(2, row, f'SCORE: {ui.score:<6}', WHITE)

    hits_color = NEON_RED if ui.hits >= snapshot.max_hits - 1 else GRAY_LIGHT
    renderer.put_string(18, row, f'HITS: {ui.hits}/{snapshot.max_hits}', hits_color)
    renderer.put_string(
        32, row, f'INTERCEPTS: {ui.intercepts}/{snapshot.target_intercepts}', NEON_GREEN
    )

    if snapshot.control_mode is ControlMode.KEYBOARD:
        controls = 'ARROWS/WASD:Steer'
    else:
        controls = 'ARROWS/WASD:Aim  SPACE:Launch'
    controls += f'  P:{ui.pause_label}  R:Restart  1/2:Mode  Q:Quit'
    renderer.put_string(2, ui_y + 2, controls, GRAY_MED)

    if renderer.show_fps:
        fps_text = f'FPS:{renderer.current_fps:.0f}'
        renderer.put_string(width - len(fps_text) - 2, 0, fps_text, GRAY_MED)


def render_banner(renderer: GameRenderer, banner: Banner, frame: int) -> None:
    """Centered modal panel: title, body lines, blinking action prompt."""
    lines = list(banner.lines)
    prompt = f'[ ENTER - {banner.action.upper()} ]'
    inner = max([len(banner.title), len(prompt)] + [len(line) for line in lines]) + 4

    box_w = min(renderer.width, inner + 2)
    box_h = len(lines) + 6
    x = max(0, renderer.width // 2 - box_w // 2)
    y = max(0, renderer.game_height // 2 - box_h // 2)

    renderer.fill_box(x, y, box_w, box_h)
    renderer.draw_box(x, y, box_w, box_h, GRAY_DARK, '.')

    title_color = {
        'Game Over!': NEON_RED,
        'Victory!': NEON_GREEN,
    }.get(banner.title, NEON_CYAN)
    renderer.put_centered(y + 1, banner.title, title_color)

    for i, line in enumerate(lines):
        renderer.put_centered(y + 3 + i, line, GRAY_LIGHT)

    if (frame // 30) % 2 == 0:
        renderer.put_centered(y + box_h - 2, prompt, NEON_YELLOW)
