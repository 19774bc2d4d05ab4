"""Animation sheet types."""

from __future__ import annotations

from dataclasses import InitVar, dataclass
from enum import Enum
from typing import Iterator, Optional, Protocol, Union

# Seconds each frame stays on screen unless a sheet says otherwise
DEFAULT_FRAME_DURATION = 0.1


class AnimationDirection(Enum):
    """Direction in which a sheet's frames are played."""

    FORWARD = "forward"
    REVERSE = "reverse"
    PING_PONG = "ping_pong"
    REVERSE_PING_PONG = "reverse_ping_pong"


class Axis(Enum):
    """Direction along which frames are laid out in the image."""

    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


class ImageSource(Protocol):
    """Anything with pixel dimensions, e.g. a loaded PIL image."""

    width: int
    height: int


@dataclass(frozen=True)
class FrameOffset:
    """Grid coordinate of a frame (column, row), zero-based."""

    column: int = 0
    row: int = 0

    def __iter__(self) -> Iterator[int]:
        yield self.column
        yield self.row

    @classmethod
    def of(cls, value: Union["FrameOffset", tuple[int, int]]) -> "FrameOffset":
        """Coerce a (column, row) tuple into a FrameOffset."""
        if isinstance(value, FrameOffset):
            return value
        column, row = value
        return cls(int(column), int(row))


ORIGIN = FrameOffset(0, 0)


@dataclass(frozen=True, eq=False)
class AnimationSheet:
    """A grid of equally sized frames cut from one image.

    Either ``columns`` or ``frame_width`` must be given, and either
    ``rows`` or ``frame_height``. A missing count is derived from the
    image size, e.g. ``columns = image.width // frame_width``.

    Example::

        AnimationSheet(
            image=Image.open("eyes.png"),
            frame_width=64,
            frame_height=64,
            direction=AnimationDirection.PING_PONG,
        )

    Raises:
        ValueError: If a dimension can't be resolved or is smaller than one.
    """

    image: ImageSource
    columns: Optional[int] = None
    rows: Optional[int] = None
    frame_duration: float = DEFAULT_FRAME_DURATION
    is_looping: bool = True
    axis: Axis = Axis.HORIZONTAL
    direction: AnimationDirection = AnimationDirection.FORWARD
    frame_width: InitVar[Optional[float]] = None
    frame_height: InitVar[Optional[float]] = None

    def __post_init__(self, frame_width: Optional[float], frame_height: Optional[float]):
        columns = self._resolve("columns", self.columns, frame_width, self.image.width, "frame_width")
        rows = self._resolve("rows", self.rows, frame_height, self.image.height, "frame_height")
        if self.frame_duration <= 0:
            raise ValueError(f"frame_duration must be positive, got {self.frame_duration}.")

        object.__setattr__(self, "columns", columns)
        object.__setattr__(self, "rows", rows)

    @staticmethod
    def _resolve(
        name: str,
        count: Optional[int],
        frame_size: Optional[float],
        image_size: int,
        size_name: str,
    ) -> int:
        if count is None:
            if frame_size is None:
                raise ValueError(f"Either {size_name} or {name} must be provided.")
            if frame_size <= 0:
                raise ValueError(f"{size_name} must be positive, got {frame_size}.")
            count = int(image_size // frame_size)
        if count < 1:
            raise ValueError(f"{name} must be at least 1, got {count}.")
        return count

    @property
    def width(self) -> float:
        """Width of a single frame in pixels."""
        return self.image.width / self.columns

    @property
    def height(self) -> float:
        """Height of a single frame in pixels."""
        return self.image.height / self.rows

    @property
    def total_frames(self) -> int:
        """Number of cells in the grid."""
        return self.columns * self.rows

    @property
    def is_reversed(self) -> bool:
        """True for directions that start from the last frame."""
        return self.direction in (
            AnimationDirection.REVERSE,
            AnimationDirection.REVERSE_PING_PONG,
        )

    @property
    def last_offset(self) -> FrameOffset:
        """Coordinate of the bottom-right frame."""
        return FrameOffset(self.columns - 1, self.rows - 1)
