"""Playback engine for sprite sheet animations."""

from __future__ import annotations

from .notifier import ChangeNotifier
from .ticker import Ticker, Clock, AsyncioClock, AsyncioTicker, ManualClock, ManualTicker
from .sprite_controller import SpriteController, NoAnimationError

__all__ = [
    "ChangeNotifier",
    "Ticker",
    "Clock",
    "AsyncioClock",
    "AsyncioTicker",
    "ManualClock",
    "ManualTicker",
    "SpriteController",
    "NoAnimationError",
]
