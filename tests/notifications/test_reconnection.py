"""
Tests for the reconnection backoff strategy.
"""

import asyncio

import pytest

from sdkwa.notifications.reconnection import ReconnectionConfig, ReconnectionStrategy


class TestReconnectionStrategy:
    """Test attempt accounting and delay calculation."""

    def test_exponential_progression_is_capped(self):
        strategy = ReconnectionStrategy(
            config=ReconnectionConfig(base_delay=5.0, max_delay=300.0)
        )
        delays = [strategy.calculate_delay()]
        for _ in range(8):
            strategy.record_failure()
            delays.append(strategy.calculate_delay())

        assert delays == [5.0, 5.0, 10.0, 20.0, 40.0, 80.0, 160.0, 300.0, 300.0]

    def test_reset_restores_base_delay(self):
        strategy = ReconnectionStrategy(config=ReconnectionConfig(base_delay=1.0))
        strategy.record_failure()
        strategy.record_failure()
        strategy.reset()

        assert strategy.attempt_count == 0
        assert strategy.calculate_delay() == 1.0

    def test_unlimited_attempts(self):
        strategy = ReconnectionStrategy()
        for _ in range(100):
            strategy.record_failure()
        assert strategy.should_retry()

    def test_max_attempts(self):
        strategy = ReconnectionStrategy(config=ReconnectionConfig(max_attempts=2))
        strategy.record_failure()
        assert strategy.should_retry()
        strategy.record_failure()
        assert not strategy.should_retry()


@pytest.mark.asyncio
class TestReconnectionWait:
    """Test the interruptible backoff wait."""

    async def test_wait_elapses(self):
        strategy = ReconnectionStrategy(config=ReconnectionConfig(base_delay=0.01))
        assert await strategy.wait(asyncio.Event()) is False

    async def test_wait_interrupted_by_stop(self):
        strategy = ReconnectionStrategy(config=ReconnectionConfig(base_delay=10))
        stop = asyncio.Event()
        asyncio.get_running_loop().call_later(0.02, stop.set)

        assert await asyncio.wait_for(strategy.wait(stop), timeout=1) is True
