"""
Frame Driver
=============
Wallclock loop: measure elapsed time, update, render, wait for next frame.
"""

from typing import Callable, Optional
import math
import time

from .snapshot import RenderSnapshot


TARGET_FPS = 60
FRAME_TIME = 1.0 / TARGET_FPS

# Longest frame the simulation will accept, in milliseconds. A stall
# (suspended process, slow terminal) must not replay seconds of spawns.
MAX_FRAME_DELTA_MS = 100.0


def sanitize_delta(delta_ms: float) -> float:
    """Clamp a frame delta to [0, MAX_FRAME_DELTA_MS]; garbage becomes 0."""
    if not math.isfinite(delta_ms) or delta_ms < 0:
        return 0.0
    return min(delta_ms, MAX_FRAME_DELTA_MS)


class FrameDriver:
    """
    Runs update then render once per tick, strictly in sequence.

    The clock returns seconds (time.perf_counter by default) so tests
    can drive the loop with a fake clock.
    """

    def __init__(
        self,
        session,
        render: Callable[[RenderSnapshot], None],
        clock: Callable[[], float] = time.perf_counter,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.session = session
        self.render = render
        self.clock = clock
        self.sleep = sleep
        self.last_time: Optional[float] = None
        self.frame_count = 0
        self.current_fps = float(TARGET_FPS)

    def tick(self, now: Optional[float] = None) -> float:
        """Run one frame. Returns the delta (ms) handed to the session."""
        if now is None:
            now = self.clock()

        if self.last_time is None:
            delta_ms = 0.0
        else:
            delta_ms = sanitize_delta((now - self.last_time) * 1000.0)
        self.last_time = now

        self.session.update(delta_ms)
        self.render(self.session.snapshot())
        self.frame_count += 1
        return delta_ms

    def run(
        self,
        should_continue: Callable[[], bool],
        before_frame: Optional[Callable[[], None]] = None,
    ) -> None:
        """Tick at TARGET_FPS until should_continue() returns False."""
        fps_timer = 0.0
        fps_frames = 0

        while should_continue():
            frame_start = self.clock()

            # Drain input before the update so flags apply this frame
            if before_frame is not None:
                before_frame()

            delta_ms = self.tick(frame_start)

            fps_timer += delta_ms / 1000.0
            fps_frames += 1
            if fps_timer >= 0.5:
                self.current_fps = fps_frames / fps_timer
                fps_timer = 0.0
                fps_frames = 0

            # Sleep for remaining frame time
            elapsed = self.clock() - frame_start
            sleep_time = FRAME_TIME - elapsed
            if sleep_time > 0.001:
                self.sleep(sleep_time * 0.9)
