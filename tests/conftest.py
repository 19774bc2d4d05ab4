"""Pytest configuration and fixtures."""

from __future__ import annotations

import pytest
from PIL import Image

from sprite_sheet.engine import ManualClock, SpriteController
from sprite_sheet.types import AnimationDirection, AnimationSheet


@pytest.fixture
def image() -> Image.Image:
    """Create a 60x20 test image."""
    return Image.new("RGBA", (60, 20), (0, 0, 0, 0))


@pytest.fixture
def grid_image() -> Image.Image:
    """Create a 120x80 test image with a distinct color per 20x20 cell."""
    img = Image.new("RGBA", (120, 80))
    for row in range(4):
        for column in range(6):
            color = (column * 40, row * 60, 100, 255)
            for x in range(column * 20, column * 20 + 20):
                for y in range(row * 20, row * 20 + 20):
                    img.putpixel((x, y), color)
    return img


@pytest.fixture
def clock() -> ManualClock:
    """Create a manual clock."""
    return ManualClock()


@pytest.fixture
def make_controller(image, clock):
    """Build a single-animation controller on the manual clock."""

    def factory(
        columns: int = 3,
        rows: int = 1,
        direction: AnimationDirection = AnimationDirection.FORWARD,
        is_looping: bool = True,
        frame_duration: float = 0.25,
    ) -> SpriteController:
        sheet = AnimationSheet(
            image=image,
            columns=columns,
            rows=rows,
            direction=direction,
            is_looping=is_looping,
            frame_duration=frame_duration,
        )
        return SpriteController({"anim": sheet}, clock=clock)

    return factory
