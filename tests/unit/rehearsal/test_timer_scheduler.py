"""Unit tests for TimerScheduler."""

import asyncio

import pytest

from scenepartner.rehearsal.timers import TimerScheduler


class TestTimerScheduler:
    """Test named cancellable timers."""

    @pytest.mark.asyncio
    async def test_fires_once(self):
        """Test that an armed timer calls back after its delay."""
        scheduler = TimerScheduler()
        fired = []

        scheduler.arm("silence", 10, lambda: fired.append("silence"))
        assert scheduler.is_armed("silence")
        await asyncio.sleep(0.05)

        assert fired == ["silence"]
        assert not scheduler.is_armed("silence")

    @pytest.mark.asyncio
    async def test_rearm_replaces_previous(self):
        """Test that arming the same name cancels the older timer."""
        scheduler = TimerScheduler()
        fired = []

        scheduler.arm("silence", 10, lambda: fired.append("first"))
        scheduler.arm("silence", 10, lambda: fired.append("second"))
        await asyncio.sleep(0.05)

        assert fired == ["second"]

    @pytest.mark.asyncio
    async def test_cancel(self):
        """Test cancelling a pending timer."""
        scheduler = TimerScheduler()
        fired = []

        scheduler.arm("hold", 10, lambda: fired.append("hold"))
        assert scheduler.cancel("hold") is True
        assert scheduler.cancel("hold") is False
        await asyncio.sleep(0.05)

        assert fired == []

    @pytest.mark.asyncio
    async def test_cancel_all(self):
        """Test cancelling every timer at once."""
        scheduler = TimerScheduler()
        fired = []

        scheduler.arm("silence", 10, lambda: fired.append("silence"))
        scheduler.arm("hold", 10, lambda: fired.append("hold"))
        assert scheduler.pending == frozenset({"silence", "hold"})

        scheduler.cancel_all()
        await asyncio.sleep(0.05)

        assert fired == []
        assert scheduler.pending == frozenset()

    @pytest.mark.asyncio
    async def test_callback_can_rearm_itself(self):
        """Test that a firing timer may schedule the same name again."""
        scheduler = TimerScheduler()
        fired = []

        def tick():
            fired.append(len(fired))
            if len(fired) < 3:
                scheduler.arm("tick", 5, tick)

        scheduler.arm("tick", 5, tick)
        await asyncio.sleep(0.1)

        assert fired == [0, 1, 2]

    def test_explicit_loop(self):
        """Test scheduling on a loop that is not running yet."""
        loop = asyncio.new_event_loop()
        try:
            scheduler = TimerScheduler(loop=loop)
            fired = []
            scheduler.arm("post_speech", 1, lambda: fired.append(True))
            loop.run_until_complete(asyncio.sleep(0.03))
            assert fired == [True]
        finally:
            loop.close()


class TestCrossThreadScheduling:
    """Test arming and cancelling from threads other than the loop's."""

    @pytest.mark.asyncio
    async def test_arm_from_worker_thread(self):
        """Test that arming off the loop thread still fires on the loop."""
        loop = asyncio.get_running_loop()
        scheduler = TimerScheduler(loop=loop)
        fired = []

        await asyncio.to_thread(scheduler.arm, "silence", 10, lambda: fired.append(1))
        await asyncio.sleep(0.05)

        assert fired == [1]

    @pytest.mark.asyncio
    async def test_cancel_from_worker_thread(self):
        """Test that cancelling off the loop thread prevents the callback."""
        scheduler = TimerScheduler()
        fired = []

        scheduler.arm("hold", 20, lambda: fired.append("hold"))
        assert await asyncio.to_thread(scheduler.cancel, "hold") is True
        await asyncio.sleep(0.05)

        assert fired == []
        assert scheduler.pending == frozenset()
