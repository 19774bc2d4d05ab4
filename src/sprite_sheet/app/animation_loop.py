"""Fixed-rate loop that drives a manual clock from wall time."""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Callable, Optional

from sprite_sheet.engine import ManualClock

logger = logging.getLogger(__name__)


class AnimationLoop:
    """Advances a :class:`ManualClock` once per frame.

    Controllers created with the loop's clock get their ticks from
    here, so a game can run every animation from its own frame loop
    instead of from asyncio timers.
    """

    def __init__(
        self,
        clock: Optional[ManualClock] = None,
        target_fps: int = 30,
        max_dt: float = 0.25,
    ):
        """Initialize the loop.

        Args:
            clock: Clock to advance. A new one is created if omitted.
            target_fps: Target frames per second.
            max_dt: Largest delta applied in one frame.
        """
        if target_fps <= 0:
            raise ValueError(f"target_fps must be positive, got {target_fps}.")

        self.clock = clock if clock is not None else ManualClock()
        self.target_fps = target_fps
        self.target_frame_time = 1.0 / target_fps
        self.max_dt = max_dt
        self.on_frame: Optional[Callable[[float], None]] = None

        self._running = False
        self._last_time = 0.0
        self._window_start = self.clock.time
        self._window_frames = 0
        self._fps = 0.0

    def tick(self, dt: float) -> None:
        """Advance the clock by ``dt`` and run the frame callback.

        Args:
            dt: Delta time in seconds.
        """
        self.clock.advance(dt)
        if self.on_frame is not None:
            self.on_frame(dt)

        self._window_frames += 1
        elapsed = self.clock.time - self._window_start
        if elapsed >= 1.0:
            self._fps = self._window_frames / elapsed
            self._window_start = self.clock.time
            self._window_frames = 0

    def start(self) -> None:
        """Mark the loop running and reset the wall-clock reference."""
        self._running = True
        self._last_time = time.perf_counter()

    def stop(self) -> None:
        """Ask a running loop to exit after the current frame."""
        self._running = False

    @property
    def is_running(self) -> bool:
        """True between start() and stop()."""
        return self._running

    @property
    def fps(self) -> float:
        """Frames per second over the last second of clock time."""
        return self._fps

    def process_frame(self) -> float:
        """Advance by the wall time since the previous frame, capped at ``max_dt``.

        Returns:
            The delta time applied this frame.
        """
        now = time.perf_counter()
        elapsed, self._last_time = now - self._last_time, now

        dt = min(elapsed, self.max_dt)
        if dt < elapsed:
            logger.debug("Stalled %.3fs; advancing %.3fs", elapsed, dt)

        self.tick(dt)
        return dt

    async def run_async(self, duration: Optional[float] = None) -> None:
        """Run until stopped, or for ``duration`` seconds if given."""
        self.start()
        deadline = None if duration is None else self._last_time + duration
        next_frame = self._last_time

        while self._running:
            self.process_frame()

            next_frame += self.target_frame_time
            now = time.perf_counter()
            if deadline is not None and now >= deadline:
                break
            # Drop the backlog rather than run frames back to back
            if next_frame < now:
                next_frame = now
            await asyncio.sleep(next_frame - now)

        self._running = False
