"""Glow overlay configuration."""

from __future__ import annotations

import colorsys
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from .animation_sheet import AnimationSheet

# RGBA, 0-255 per channel
Color = tuple[int, int, int, int]

GlowColorCallback = Callable[["AnimationSheet", int], Color]


@dataclass(frozen=True)
class SpriteGlow:
    """Glow drawn behind a sprite.

    ``color`` receives the active sheet and the linear frame index and
    returns the glow color for that frame. Use :meth:`static` for a
    constant color and :meth:`dynamic` for a per-frame one.

    If both blur and thickness are zero the glow is not visible.
    """

    color: GlowColorCallback
    blur_x: float = 0.0
    blur_y: float = 0.0
    thickness_x: float = 0.0
    thickness_y: float = 0.0

    @classmethod
    def static(cls, color: Color, **kwargs: float) -> "SpriteGlow":
        """Create a glow with one color for every frame."""
        return cls(color=lambda sheet, frame: color, **kwargs)

    @classmethod
    def dynamic(cls, callback: GlowColorCallback, **kwargs: float) -> "SpriteGlow":
        """Create a glow whose color is computed per frame."""
        return cls(color=callback, **kwargs)

    def color_for(self, sheet: AnimationSheet, frame: int) -> Color:
        """Get the glow color for a frame of a sheet."""
        return self.color(sheet, frame)

    @property
    def is_visible(self) -> bool:
        """True if any blur or thickness is set."""
        return any((self.blur_x, self.blur_y, self.thickness_x, self.thickness_y))


def hue_cycle(lightness: float = 0.5, alpha: int = 255) -> GlowColorCallback:
    """Build a callback that sweeps the hue wheel once per animation.

    Args:
        lightness: HSL lightness in [0, 1].
        alpha: Alpha channel for every color.

    Returns:
        A color callback suitable for :meth:`SpriteGlow.dynamic`.
    """

    def callback(sheet: AnimationSheet, frame: int) -> Color:
        hue = (frame / sheet.total_frames) % 1.0
        r, g, b = colorsys.hls_to_rgb(hue, lightness, 1.0)
        return (round(r * 255), round(g * 255), round(b * 255), alpha)

    return callback
