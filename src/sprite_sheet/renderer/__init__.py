"""Renderer package for sprite sheets."""

from __future__ import annotations

from .sprite_renderer import SpriteRenderer

__all__ = [
    "SpriteRenderer",
]
