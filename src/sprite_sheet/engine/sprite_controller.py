"""Sprite animation controller."""

from __future__ import annotations

import logging
from collections import deque
from types import MappingProxyType
from typing import Generic, Hashable, Mapping, Optional, TypeVar, Union

from sprite_sheet.types import AnimationDirection, AnimationSheet, FrameOffset, ORIGIN

from .notifier import ChangeNotifier
from .ticker import AsyncioClock, Clock, Ticker

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=Hashable)


class NoAnimationError(RuntimeError):
    """Raised when play() has no animation to play."""


class SpriteController(ChangeNotifier, Generic[T]):
    """Drives frame playback for a set of animation sheets.

    Animations are keyed by any hashable value, typically an enum or a
    string. The controller owns one repeating ticker while playing and
    notifies listeners after every change of frame, playback state or
    flip flags.

    Example::

        controller = SpriteController({
            CharState.IDLE: AnimationSheet(image=idle, columns=6, rows=1),
            CharState.RUN: AnimationSheet(image=run, columns=4, rows=1),
        })
        controller.play(animation=CharState.RUN)
        controller.is_flipped_x = True
    """

    def __init__(self, animations: Mapping[T, AnimationSheet], clock: Optional[Clock] = None):
        """Initialize the controller.

        Args:
            animations: Sheets keyed by animation identifier. Must not be empty.
            clock: Ticker factory. Defaults to the running asyncio loop.

        Raises:
            ValueError: If ``animations`` is empty.
        """
        if not animations:
            raise ValueError("Animations map cannot be empty.")
        super().__init__()

        self.animations: Mapping[T, AnimationSheet] = MappingProxyType(dict(animations))
        self._clock: Clock = clock if clock is not None else AsyncioClock()

        self._ticker: Optional[Ticker] = None
        self._current_frame = ORIGIN
        self._current_animation: Optional[T] = None

        self._is_playing = False
        self._is_flipped_x = False
        self._is_flipped_y = False
        self._is_reversing = False
        self._disposed = False

        self._queue: deque[T] = deque()

    @property
    def current_animation(self) -> Optional[T]:
        """Key of the active animation, or None before the first play."""
        return self._current_animation

    @property
    def current_animation_sheet(self) -> Optional[AnimationSheet]:
        """The sheet of the active animation, if any."""
        if self._current_animation is None:
            return None
        return self.animations.get(self._current_animation)

    @property
    def offset_frame(self) -> FrameOffset:
        """Current frame as a (column, row) coordinate."""
        return self._current_frame

    @property
    def frame(self) -> int:
        """Current frame as a row-major linear index."""
        sheet = self.current_animation_sheet
        if sheet is None:
            return 0
        return self._current_frame.column + self._current_frame.row * sheet.columns

    @property
    def is_playing(self) -> bool:
        """True while the ticker is advancing frames."""
        return self._is_playing

    @property
    def is_flipped_x(self) -> bool:
        """Mirror the frame horizontally when drawn."""
        return self._is_flipped_x

    @is_flipped_x.setter
    def is_flipped_x(self, value: bool) -> None:
        if self._is_flipped_x != value:
            self._is_flipped_x = value
            self.notify_listeners()

    @property
    def is_flipped_y(self) -> bool:
        """Flip the frame upside down when drawn."""
        return self._is_flipped_y

    @is_flipped_y.setter
    def is_flipped_y(self, value: bool) -> None:
        if self._is_flipped_y != value:
            self._is_flipped_y = value
            self.notify_listeners()

    @property
    def queue(self) -> tuple[T, ...]:
        """Animations waiting to play, front first."""
        return tuple(self._queue)

    def play(self, animation: Optional[T] = None) -> None:
        """Start the given animation, or resume the current one.

        Switching to a different animation resets the frame to the
        origin; resuming the current one keeps the frame. Reverse
        directions always start from the last frame.

        Args:
            animation: Key of the animation to play.

        Raises:
            NoAnimationError: If no animation was given and none is active.
        """
        if self._disposed:
            raise RuntimeError("SpriteController has been disposed.")

        if animation is not None and animation != self._current_animation:
            if animation in self.animations:
                self._current_animation = animation
                self._current_frame = ORIGIN
            else:
                logger.warning("Animation %r is not registered; ignoring", animation)

        sheet = self.current_animation_sheet
        if sheet is None:
            raise NoAnimationError("No animation is set to play.")

        self._cancel_ticker()
        self._ticker = self._clock.create_ticker(sheet.frame_duration, self._on_tick)

        if sheet.is_reversed:
            self._is_reversing = True
            self._current_frame = sheet.last_offset
        else:
            self._is_reversing = False

        self._is_playing = True
        logger.debug("Playing %r (%s)", self._current_animation, sheet.direction.value)
        self.notify_listeners()

    def pause(self) -> None:
        """Pause on the current frame."""
        self._is_playing = False
        self._cancel_ticker()
        self.notify_listeners()

    def stop(self) -> None:
        """Stop and rewind to the first frame of the playback direction."""
        self._is_playing = False
        sheet = self.current_animation_sheet
        self._current_frame = sheet.last_offset if sheet is not None and sheet.is_reversed else ORIGIN
        self._cancel_ticker()
        logger.debug("Stopped %r", self._current_animation)
        self.notify_listeners()

    def add_to_queue(self, animation: T) -> None:
        """Queue an animation to start when the current one finishes."""
        self._queue.append(animation)

    def clear_queue(self) -> None:
        """Drop every queued animation."""
        self._queue.clear()

    def seek(self, offset: Union[FrameOffset, tuple[int, int]]) -> None:
        """Jump to a grid coordinate, wrapping out-of-range values."""
        sheet = self.current_animation_sheet
        columns = sheet.columns if sheet is not None else 1
        rows = sheet.rows if sheet is not None else 1

        column, row = FrameOffset.of(offset)
        self._current_frame = FrameOffset(column % columns, row % rows)
        self.notify_listeners()

    def seek_frame(self, index: int) -> None:
        """Jump to a row-major linear frame index.

        The column wraps; the row does not.
        """
        sheet = self.current_animation_sheet
        columns = sheet.columns if sheet is not None else 1

        self._current_frame = FrameOffset(index % columns, index // columns)
        self.notify_listeners()

    def dispose(self) -> None:
        """Cancel the ticker and drop all listeners."""
        self._is_playing = False
        self._cancel_ticker()
        self.clear_listeners()
        self._disposed = True

    def _cancel_ticker(self) -> None:
        if self._ticker is not None:
            self._ticker.cancel()
            self._ticker = None

    def _on_tick(self, ticker: Ticker) -> None:
        """Advance one frame according to the active direction."""
        sheet = self.current_animation_sheet
        if not self._is_playing or sheet is None:
            ticker.cancel()
            return

        columns, rows = sheet.columns, sheet.rows
        direction = sheet.direction

        if direction is AnimationDirection.FORWARD:
            self._increment_frame(columns, rows)
        elif direction is AnimationDirection.REVERSE:
            self._decrement_frame(columns, rows)
        elif direction is AnimationDirection.PING_PONG:
            self._bounce_frame(columns, rows, home=ORIGIN)
        else:
            self._bounce_frame(columns, rows, home=sheet.last_offset)

        self.notify_listeners()

    def _increment_frame(self, columns: int, rows: int, check_queue: bool = True) -> None:
        column = (self._current_frame.column + 1) % columns
        row = self._current_frame.row
        if column == 0:
            row += 1
        self._current_frame = FrameOffset(column, row)

        if row >= rows:
            if check_queue and self._play_next_in_queue():
                return
            if self.current_animation_sheet.is_looping:
                self._current_frame = ORIGIN
            else:
                self.stop()

    def _decrement_frame(self, columns: int, rows: int, check_queue: bool = True) -> None:
        if self._current_frame == ORIGIN:
            if check_queue and self._play_next_in_queue():
                return
            if self.current_animation_sheet.is_looping:
                self._current_frame = FrameOffset(columns - 1, rows - 1)
            else:
                self.stop()
            return

        column = (self._current_frame.column - 1) % columns
        row = self._current_frame.row
        if column == columns - 1:
            row -= 1
        self._current_frame = FrameOffset(column, row)

    def _bounce_frame(self, columns: int, rows: int, home: FrameOffset) -> None:
        """Sweep back and forth between the first and last frame.

        The queue is only consulted on arriving back at ``home``, the
        end the animation started from, i.e. once per full cycle.
        """
        last = FrameOffset(columns - 1, rows - 1)
        if last == ORIGIN:
            self._play_next_in_queue()
            return

        # seek_frame can park the frame past the last row
        if self._current_frame.row >= rows:
            self._current_frame = last

        # Turn around if we were seeked onto an end
        if self._is_reversing and self._current_frame == ORIGIN:
            self._is_reversing = False
        elif not self._is_reversing and self._current_frame == last:
            self._is_reversing = True

        if self._is_reversing:
            self._decrement_frame(columns, rows, check_queue=False)
        else:
            self._increment_frame(columns, rows, check_queue=False)

        if self._current_frame in (ORIGIN, last):
            self._is_reversing = self._current_frame == last
            if self._current_frame == home:
                self._play_next_in_queue()

    def _play_next_in_queue(self) -> bool:
        while self._queue:
            next_animation = self._queue.popleft()
            if next_animation not in self.animations:
                logger.warning("Queued animation %r is not registered; skipping", next_animation)
                continue

            logger.debug("Handing off from %r to queued %r", self._current_animation, next_animation)
            if next_animation == self._current_animation:
                # Same key would resume instead of restart
                self._current_frame = ORIGIN
            self.play(animation=next_animation)
            return True

        return False
