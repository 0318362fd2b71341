"""
Backoff policy for the realtime listener.

The channel never reconnects on its own; the listener asks this strategy
whether to try again and how long to wait first.
"""

import asyncio
from dataclasses import dataclass, field

from sdkwa.core.logging.logger import get_logger

logger = get_logger(__name__)


@dataclass
class ReconnectionConfig:
    """Backoff bounds, in seconds; ``max_attempts=None`` retries forever."""

    base_delay: float = 5.0
    max_delay: float = 300.0
    max_attempts: int | None = None


@dataclass
class ReconnectionStrategy:
    """
    Consecutive-failure counter with capped exponential delays.

    Algorithm:
        wait_time = min(base_delay * (2 ^ (attempt - 1)), max_delay)

    Example progression (base_delay=5, max_delay=300):
        Attempt 1: 5s
        Attempt 2: 10s
        Attempt 3: 20s
        ...
        Attempt 7+: 300s (capped)
    """

    config: ReconnectionConfig = field(default_factory=ReconnectionConfig)
    _attempt_count: int = field(default=0, init=False)

    @property
    def attempt_count(self) -> int:
        return self._attempt_count

    def record_failure(self) -> None:
        self._attempt_count += 1

    def reset(self) -> None:
        """Forget past failures once a connection succeeds."""
        if self._attempt_count > 0:
            logger.debug(f"Connected after {self._attempt_count} failed attempts")
        self._attempt_count = 0

    def should_retry(self) -> bool:
        """False once ``max_attempts`` consecutive failures were recorded."""
        if self.config.max_attempts is None:
            return True
        return self._attempt_count < self.config.max_attempts

    def calculate_delay(self) -> float:
        """Delay for the next attempt, exponential and capped at max_delay."""
        if self._attempt_count == 0:
            return self.config.base_delay

        exponential = self.config.base_delay * (2 ** (self._attempt_count - 1))
        return min(exponential, self.config.max_delay)

    async def wait(self, stop_event: asyncio.Event | None = None) -> bool:
        """
        Wait before the next attempt.

        Returns:
            True if ``stop_event`` was set while waiting
        """
        delay = self.calculate_delay()
        logger.info(f"Reconnecting in {delay:g} seconds...")

        if stop_event is None:
            await asyncio.sleep(delay)
            return False

        try:
            await asyncio.wait_for(stop_event.wait(), timeout=delay)
        except asyncio.TimeoutError:
            return False
        return True
