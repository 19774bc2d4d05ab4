"""Tests for tickers and clocks."""

from __future__ import annotations

import asyncio

import pytest

from sprite_sheet.engine import AsyncioClock, ManualClock, SpriteController
from sprite_sheet.types import AnimationSheet


class TestManualClock:
    """Tests for ManualClock."""

    def test_fires_after_interval(self):
        """Test a ticker fires once per interval."""
        clock = ManualClock()
        calls = []
        clock.create_ticker(0.5, calls.append)

        clock.advance(0.25)
        assert calls == []
        clock.advance(0.25)
        assert len(calls) == 1

    def test_fires_multiple_times_in_one_advance(self):
        """Test a large advance fires every due interval."""
        clock = ManualClock()
        calls = []
        ticker = clock.create_ticker(0.1, calls.append)
        assert clock.advance(1.0) == 10
        assert ticker.tick_count == 10

    def test_float_accumulation(self):
        """Test repeated small advances don't drop ticks."""
        clock = ManualClock()
        ticker = clock.create_ticker(0.1, lambda t: None)
        for _ in range(30):
            clock.advance(0.1)
        assert ticker.tick_count == 30

    def test_cancel_stops_firing(self):
        """Test a cancelled ticker never fires."""
        clock = ManualClock()
        calls = []
        ticker = clock.create_ticker(0.1, calls.append)
        ticker.cancel()
        clock.advance(1.0)
        assert calls == []
        assert clock.active_tickers == []

    def test_cancelled_tickers_are_pruned_on_create(self):
        """Test replacing a ticker without advancing doesn't pile up cancelled ones."""
        clock = ManualClock()
        for _ in range(50):
            clock.create_ticker(0.1, lambda t: None).cancel()
        clock.create_ticker(0.1, lambda t: None)
        assert len(clock._tickers) == 1

    def test_callback_can_cancel_itself(self):
        """Test cancelling from inside the callback."""
        clock = ManualClock()
        calls = []

        def callback(ticker):
            calls.append(ticker)
            ticker.cancel()

        clock.create_ticker(0.1, callback)
        clock.advance(1.0)
        assert len(calls) == 1

    def test_ticker_created_in_callback_fires_in_same_advance(self):
        """Test tickers created mid-advance are scheduled from that moment."""
        clock = ManualClock()
        fired_at = []

        def second(ticker):
            fired_at.append(("second", clock.time))

        def first(ticker):
            ticker.cancel()
            clock.create_ticker(0.5, second)

        clock.create_ticker(0.25, first)
        clock.advance(1.0)
        assert fired_at == [("second", 0.75)]

    def test_tickers_fire_in_time_order(self):
        """Test interleaved tickers fire in order."""
        clock = ManualClock()
        order = []
        clock.create_ticker(0.3, lambda t: order.append("slow"))
        clock.create_ticker(0.2, lambda t: order.append("fast"))
        clock.advance(0.5)
        assert order == ["fast", "slow", "fast"]

    def test_invalid_interval_raises(self):
        """Test intervals must be positive."""
        with pytest.raises(ValueError):
            ManualClock().create_ticker(0, lambda t: None)

    def test_negative_advance_raises(self):
        """Test time can't go backwards."""
        with pytest.raises(ValueError):
            ManualClock().advance(-1)


class TestAsyncioClock:
    """Tests for AsyncioClock."""

    def test_requires_running_loop(self):
        """Test creating a ticker outside a loop fails."""
        with pytest.raises(RuntimeError):
            AsyncioClock().create_ticker(0.1, lambda t: None)

    def test_controller_play_requires_running_loop(self, image):
        """Test the default clock surfaces the missing loop on play."""
        controller = SpriteController({"idle": AnimationSheet(image=image, columns=3, rows=1)})
        with pytest.raises(RuntimeError):
            controller.play(animation="idle")

    @pytest.mark.asyncio
    async def test_fires_repeatedly(self):
        """Test the asyncio ticker repeats until cancelled."""
        calls = []
        ticker = AsyncioClock().create_ticker(0.01, calls.append)
        await asyncio.sleep(0.1)
        ticker.cancel()
        count = len(calls)
        assert count >= 2

        await asyncio.sleep(0.05)
        assert len(calls) == count

    @pytest.mark.asyncio
    async def test_cancel_inside_callback(self):
        """Test a callback can cancel its own ticker."""
        calls = []

        def callback(ticker):
            calls.append(ticker)
            ticker.cancel()

        AsyncioClock().create_ticker(0.01, callback)
        await asyncio.sleep(0.1)
        assert len(calls) == 1


@pytest.mark.asyncio
class TestControllerOnAsyncio:
    """Controller tests driven by real asyncio timers."""

    async def test_advances_frame(self, image):
        """Test frames advance on the event loop."""
        controller = SpriteController(
            {"run": AnimationSheet(image=image, columns=3, rows=1, frame_duration=0.05, is_looping=False)}
        )
        controller.play(animation="run")
        await asyncio.sleep(0.07)
        assert controller.frame > 0
        controller.dispose()

    async def test_queue_hands_off(self, image):
        """Test a one-shot hands off to the queued animation."""
        controller = SpriteController(
            {
                "run": AnimationSheet(
                    image=image, columns=2, rows=1, is_looping=False, frame_duration=0.01
                ),
                "idle": AnimationSheet(image=image, columns=2, rows=1),
            }
        )
        controller.play(animation="run")
        controller.add_to_queue("idle")

        await asyncio.sleep(0.5)
        assert controller.current_animation == "idle"
        controller.dispose()

    async def test_no_ticks_after_dispose(self, image):
        """Test dispose cancels the pending timer."""
        controller = SpriteController(
            {"run": AnimationSheet(image=image, columns=3, rows=1, frame_duration=0.01)}
        )
        controller.play(animation="run")
        controller.dispose()
        await asyncio.sleep(0.05)
        assert controller.frame == 0
