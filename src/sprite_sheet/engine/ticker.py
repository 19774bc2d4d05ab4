"""Repeating timers that drive frame advancement."""

from __future__ import annotations

import asyncio
from typing import Callable, Optional, Protocol

# Slack when comparing accumulated float time against fire times
_TIME_EPSILON = 1e-9


class Ticker:
    """Handle to a repeating timer.

    The callback receives the ticker itself and first fires one
    interval after the ticker is created.
    """

    def __init__(self, interval: float, callback: Callable[["Ticker"], None]):
        if interval <= 0:
            raise ValueError(f"Ticker interval must be positive, got {interval}.")
        self.interval = interval
        self._callback = callback
        self._active = True
        self.tick_count = 0

    @property
    def is_active(self) -> bool:
        """False once cancelled."""
        return self._active

    def cancel(self) -> None:
        """Stop the timer. Safe to call more than once."""
        self._active = False

    def _fire(self) -> None:
        self.tick_count += 1
        self._callback(self)


class Clock(Protocol):
    """Factory for tickers."""

    def create_ticker(self, interval: float, callback: Callable[[Ticker], None]) -> Ticker:
        ...


class AsyncioTicker(Ticker):
    """Ticker scheduled on an asyncio event loop."""

    def __init__(
        self,
        loop: asyncio.AbstractEventLoop,
        interval: float,
        callback: Callable[[Ticker], None],
    ):
        super().__init__(interval, callback)
        self._loop = loop
        self._handle: Optional[asyncio.TimerHandle] = loop.call_later(interval, self._run)

    def _run(self) -> None:
        if not self._active:
            return
        # Reschedule first so the callback can cancel the next run
        self._handle = self._loop.call_later(self.interval, self._run)
        self._fire()

    def cancel(self) -> None:
        super().cancel()
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None


class AsyncioClock:
    """Clock backed by the running asyncio event loop."""

    def create_ticker(self, interval: float, callback: Callable[[Ticker], None]) -> Ticker:
        """Create a ticker on the running loop.

        Raises:
            RuntimeError: If called outside a running event loop.
        """
        loop = asyncio.get_running_loop()
        return AsyncioTicker(loop, interval, callback)


class ManualTicker(Ticker):
    """Ticker fired by :class:`ManualClock`."""

    def __init__(self, interval: float, callback: Callable[[Ticker], None], start: float):
        super().__init__(interval, callback)
        self.next_fire = start + interval

    def _fire(self) -> None:
        self.next_fire += self.interval
        super()._fire()


class ManualClock:
    """Clock advanced explicitly, e.g. from a game loop or a test.

    Tickers fire in time order; tickers created or cancelled by a
    callback take effect within the same :meth:`advance` call.
    """

    def __init__(self):
        self.time = 0.0
        self._tickers: list[ManualTicker] = []

    def create_ticker(self, interval: float, callback: Callable[[Ticker], None]) -> Ticker:
        """Create a ticker that first fires one interval from now."""
        ticker = ManualTicker(interval, callback, self.time)
        self._tickers = self.active_tickers
        self._tickers.append(ticker)
        return ticker

    @property
    def active_tickers(self) -> list[ManualTicker]:
        """Tickers that have not been cancelled."""
        return [t for t in self._tickers if t.is_active]

    def advance(self, dt: float) -> int:
        """Move time forward and fire every due ticker.

        Args:
            dt: Seconds to advance.

        Returns:
            Number of ticker callbacks fired.
        """
        if dt < 0:
            raise ValueError(f"Cannot advance a clock backwards ({dt}).")

        target = self.time + dt
        fired = 0
        while True:
            self._tickers = self.active_tickers
            due = [t for t in self._tickers if t.next_fire <= target + _TIME_EPSILON]
            if not due:
                break
            ticker = min(due, key=lambda t: t.next_fire)
            # Tickers created by the callback start from this moment
            self.time = max(self.time, min(ticker.next_fire, target))
            ticker._fire()
            fired += 1

        self.time = target
        return fired
