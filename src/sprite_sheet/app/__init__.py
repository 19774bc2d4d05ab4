"""Application helpers for running animations."""

from .animation_loop import AnimationLoop

__all__ = ["AnimationLoop"]
