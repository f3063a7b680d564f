"""Background driver that keeps the reflection reminder ticking."""

import asyncio
import logging

from goaltrio.engine.reflection_reminder import ReflectionReminder
from goaltrio.utils.constants import DEFAULT_CHECK_INTERVAL

logger = logging.getLogger(__name__)


class BackgroundChecker:
    """Runs `ReflectionReminder.check()` every `interval` seconds.

    A failed check is logged and the loop carries on; the next tick
    starts from scratch.
    """

    def __init__(self, reminder: ReflectionReminder, interval: float = DEFAULT_CHECK_INTERVAL):
        self.reminder = reminder
        self.interval = interval
        self._stop = asyncio.Event()

    async def tick(self) -> bool:
        """Run one check, never raising. Returns False if the check failed."""
        try:
            await self.reminder.check()
            return True
        except Exception as e:
            logger.error(f"Reflection reminder check failed: {e}", exc_info=True)
            return False

    async def run_forever(self, catch_up: bool = True) -> None:
        """Loop until `stop()` is called.

        With `catch_up`, one check runs immediately so a process resumed
        after a long sleep doesn't wait a full interval.
        """
        logger.info(f"Background checker started (interval: {self.interval}s)")
        if catch_up:
            await self.tick()

        while not self._stop.is_set():
            try:
                await asyncio.wait_for(self._stop.wait(), timeout=self.interval)
            except asyncio.TimeoutError:
                logger.debug("Running periodic reflection check")
                await self.tick()

        logger.info("Background checker stopped")

    def stop(self) -> None:
        self._stop.set()
