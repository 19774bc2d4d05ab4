"""Type definitions for sprite sheet animations."""

from .animation_sheet import (
    AnimationDirection,
    AnimationSheet,
    Axis,
    DEFAULT_FRAME_DURATION,
    FrameOffset,
    ImageSource,
    ORIGIN,
)
from .glow import (
    Color,
    GlowColorCallback,
    SpriteGlow,
    hue_cycle,
)

__all__ = [
    # Sheets
    "AnimationDirection",
    "AnimationSheet",
    "Axis",
    "DEFAULT_FRAME_DURATION",
    "FrameOffset",
    "ImageSource",
    "ORIGIN",
    # Glow
    "Color",
    "GlowColorCallback",
    "SpriteGlow",
    "hue_cycle",
]
