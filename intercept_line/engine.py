"""
Terminal Engine
================
Double-buffered blessed renderer with a braille sub-pixel layer.

The simulation works in world units on a fixed canvas; this module maps
world coordinates onto terminal cells (and braille dots, 2x4 per cell).
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple
import random

try:
    from blessed import Terminal
except ImportError:
    raise ImportError("'blessed' library required. Install with: pip install blessed")


# ANSI 256 color constants
NEON_CYAN = 51
NEON_BLUE = 63
NEON_YELLOW = 226
NEON_GREEN = 46
NEON_RED = 196
NEON_ORANGE = 208

GRAY_LIGHT = 252
GRAY_MED = 245
GRAY_DARK = 238
GRAY_DARKER = 235

WHITE = 255

# Rows reserved below the play field for the HUD
HUD_ROWS = 3

# (char, fg, bg). bg -1 is the terminal default.
Cell = Tuple[str, int, int]
EMPTY_CELL: Cell = (' ', 7, -1)


def rgb_to_ansi(rgb: Tuple[int, int, int], alpha: float = 1.0) -> int:
    """
    Nearest xterm-256 color cube entry for an RGB tint.

    Alpha dims the tint toward black, used for fading particles.
    """
    alpha = max(0.0, min(1.0, alpha))
    r, g, b = (int(c * alpha) for c in rgb)
    levels = [round(c / 255 * 5) for c in (r, g, b)]
    return 16 + 36 * levels[0] + 6 * levels[1] + levels[2]


class DoubleBuffer:
    """
    Back buffer for drawing, front buffer for what the terminal shows.

    present() emits escape sequences only for cells that changed.
    """

    def __init__(self, term: Terminal, width: int, height: int):
        self.term = term
        self.width = width
        self.height = height
        self.front: List[List[Cell]] = self._blank()
        self.back: List[List[Cell]] = self._blank()

    def _blank(self) -> List[List[Cell]]:
        return [[EMPTY_CELL] * self.width for _ in range(self.height)]

    def resize(self, width: int, height: int) -> None:
        self.width = width
        self.height = height
        self.front = self._blank()
        self.back = self._blank()

    def clear_back(self) -> None:
        for row in self.back:
            row[:] = [EMPTY_CELL] * self.width

    def put(self, x: int, y: int, char: str, fg_color: int = 7, bg_color: int = -1) -> None:
        if 0 <= x < self.width and 0 <= y < self.height:
            self.back[y][x] = (char, fg_color, bg_color)

    def put_string(self, x: int, y: int, text: str, fg_color: int = 7, bg_color: int = -1) -> None:
        for i, char in enumerate(text):
            self.put(x + i, y, char, fg_color, bg_color)

    def is_empty(self, x: int, y: int) -> bool:
        return self.back[y][x][0] == ' '

    def present(self) -> str:
        """Swap buffers and return the output for changed cells."""
        parts = []
        normal = self.term.normal

        for y in range(self.height):
            back_row = self.back[y]
            front_row = self.front[y]
            for x in range(self.width):
                cell = back_row[x]
                if cell == front_row[x]:
                    continue
                char, fg, bg = cell
                parts.append(self.term.move_xy(x, y))
                parts.append(normal)
                if bg >= 0:
                    parts.append(self.term.on_color(bg))
                parts.append(self.term.color(fg))
                parts.append(char or ' ')

        self.front, self.back = self.back, self.front
        return ''.join(parts)


class BrailleCanvas:
    """
    Sub-pixel layer using Unicode braille patterns (2x4 dots per cell).

    Used for trails and particles so they move smoother than whole cells.
    """

    # Dot bit for (column, row) inside a cell
    DOT_BITS = {
        (0, 0): 0x01, (0, 1): 0x02, (0, 2): 0x04, (0, 3): 0x40,
        (1, 0): 0x08, (1, 1): 0x10, (1, 2): 0x20, (1, 3): 0x80,
    }
    BASE = 0x2800

    def __init__(self, char_width: int, char_height: int):
        self.char_width = char_width
        self.char_height = char_height
        self.pixel_width = char_width * 2
        self.pixel_height = char_height * 4
        self.bits: List[List[int]] = []
        self.colors: List[List[int]] = []
        self.clear()

    def clear(self) -> None:
        self.bits = [[0] * self.char_width for _ in range(self.char_height)]
        self.colors = [[WHITE] * self.char_width for _ in range(self.char_height)]

    def set_pixel(self, px: int, py: int, color: int = WHITE) -> None:
        if 0 <= px < self.pixel_width and 0 <= py < self.pixel_height:
            cx, cy = px // 2, py // 4
            self.bits[cy][cx] |= self.DOT_BITS[(px % 2, py % 4)]
            self.colors[cy][cx] = color

    def blit_to_buffer(self, buffer: DoubleBuffer) -> None:
        """Draw dots into cells the character layer left empty."""
        for cy in range(min(self.char_height, buffer.height)):
            for cx in range(min(self.char_width, buffer.width)):
                pattern = self.bits[cy][cx]
                if pattern and buffer.is_empty(cx, cy):
                    buffer.put(cx, cy, chr(self.BASE + pattern), self.colors[cy][cx])


@dataclass
class GameRenderer:
    """
    Terminal surface for one world canvas.

    Game-area drawing goes through world coordinates and picks up screen
    shake; HUD drawing uses cell coordinates and does not shake.
    """
    term: Terminal
    world_width: float
    world_height: float
    buffer: DoubleBuffer = field(init=False)
    braille: BrailleCanvas = field(init=False)

    shake_x: int = 0
    shake_y: int = 0
    shake_frames: int = 0
    shake_intensity: int = 1

    show_fps: bool = False
    current_fps: float = 60.0

    def __post_init__(self):
        self.buffer = DoubleBuffer(self.term, self.term.width, self.term.height)
        self.braille = BrailleCanvas(self.term.width, self.game_height)

    @property
    def width(self) -> int:
        return self.buffer.width

    @property
    def height(self) -> int:
        return self.buffer.height

    @property
    def game_height(self) -> int:
        """Rows available to the play field (HUD excluded)."""
        return max(1, self.buffer.height - HUD_ROWS)

    def resize(self, width: int, height: int) -> None:
        self.buffer.resize(width, height)
        self.braille = BrailleCanvas(width, self.game_height)

    # -------------------------------------------------------------------------
    # Coordinate mapping
    # -------------------------------------------------------------------------

    def to_cell(self, wx: float, wy: float) -> Tuple[int, int]:
        """World point to cell, including shake."""
        cx = int(wx / self.world_width * self.width) + self.shake_x
        cy = int(wy / self.world_height * self.game_height) + self.shake_y
        return cx, cy

    def to_pixel(self, wx: float, wy: float) -> Tuple[int, int]:
        """World point to braille dot, including shake."""
        px = int(wx / self.world_width * self.braille.pixel_width) + self.shake_x * 2
        py = int(wy / self.world_height * self.braille.pixel_height) + self.shake_y * 4
        return px, py

    # -------------------------------------------------------------------------
    # Frame lifecycle
    # -------------------------------------------------------------------------

    def trigger_shake(self, intensity: int = 1, frames: int = 4) -> None:
        self.shake_intensity = intensity
        self.shake_frames = max(self.shake_frames, frames)

    def _update_shake(self) -> None:
        if self.shake_frames > 0:
            self.shake_x = random.randint(-self.shake_intensity, self.shake_intensity)
            self.shake_y = random.randint(-1, 1) if self.shake_intensity > 1 else 0
            self.shake_frames -= 1
        else:
            self.shake_x = 0
            self.shake_y = 0

    def begin_frame(self) -> None:
        self.buffer.clear_back()
        self.braille.clear()

    def end_frame(self) -> str:
        """Composite the braille layer and return changed-cell output."""
        self.braille.blit_to_buffer(self.buffer)
        self._update_shake()
        return self.buffer.present()

    # -------------------------------------------------------------------------
    # Drawing
    # -------------------------------------------------------------------------

    def put_world(self, wx: float, wy: float, char: str, color: int = 7) -> None:
        cx, cy = self.to_cell(wx, wy)
        if 0 <= cy < self.game_height:
            self.buffer.put(cx, cy, char, color)

    def put_world_pixel(self, wx: float, wy: float, color: int = WHITE) -> None:
        px, py = self.to_pixel(wx, wy)
        self.braille.set_pixel(px, py, color)

    def put_string(self, x: int, y: int, text: str, fg_color: int = 7) -> None:
        """Cell-space text, unaffected by shake."""
        self.buffer.put_string(x, y, text, fg_color)

    def put_centered(self, y: int, text: str, fg_color: int = 7) -> None:
        self.put_string(max(0, self.width // 2 - len(text) // 2), y, text, fg_color)

    def draw_box(self, x: int, y: int, w: int, h: int,
                 color: int = GRAY_DARK, char: str = '#') -> None:
        for i in range(w):
            self.buffer.put(x + i, y, char, color)
            self.buffer.put(x + i, y + h - 1, char, color)
        for j in range(1, h - 1):
            self.buffer.put(x, y + j, char, color)
            self.buffer.put(x + w - 1, y + j, char, color)

    def fill_box(self, x: int, y: int, w: int, h: int) -> None:
        """Blank a rectangle so overlay text sits on a clean panel."""
        for j in range(h):
            for i in range(w):
                self.buffer.put(x + i, y + j, ' ')


def make_renderer(term: Terminal, world_width: float, world_height: float,
                  min_size: Optional[Tuple[int, int]] = None) -> GameRenderer:
    """Build a renderer, refusing terminals below min_size (cols, rows)."""
    if min_size is not None:
        min_w, min_h = min_size
        if term.width < min_w or term.height < min_h:
            raise ValueError(
                f'Terminal too small: {term.width}x{term.height}. '
                f'Minimum: {min_w}x{min_h}'
            )
    return GameRenderer(term, world_width, world_height)
