"""Reflection reminder - prompts once per week/month transition."""

import asyncio
import logging
from datetime import tzinfo
from typing import Callable

from goaltrio.db.reminder_state import ReminderStateStore, Settings
from goaltrio.engine.detector import detect
from goaltrio.engine.notifier import Notifier, PeriodChangeEvent
from goaltrio.engine.periods import PeriodLevel, period_key
from goaltrio.errors import StorageUnavailable
from goaltrio.utils.time_utils import now_millis

logger = logging.getLogger(__name__)


class ReflectionReminder:
    """Detects period transitions and emits at most one prompt per period.

    The durable "last shown" keys, not in-memory flags, decide whether a
    prompt was already shown, so repeated ticks and restarts inside one
    period stay quiet. Calls to `check()` are serialized.
    """

    def __init__(
        self,
        state: ReminderStateStore,
        settings: Settings,
        notifier: Notifier,
        clock: Callable[[], int] = now_millis,
        tz: tzinfo | None = None,
    ):
        self.state = state
        self.settings = settings
        self.notifier = notifier
        self.clock = clock
        self.tz = tz
        self._lock = asyncio.Lock()

    async def check(self) -> PeriodChangeEvent | None:
        """Run one check cycle. Returns the emitted event, if any."""
        async with self._lock:
            return await self._check()

    async def _check(self) -> PeriodChangeEvent | None:
        if not await self.state.is_enabled():
            logger.debug("Reflection prompts disabled, skipping check")
            return None

        last_checked_at = await self.state.last_checked_at()
        now = self.clock()
        week_start = await self.settings.week_start()

        change = detect(last_checked_at, now, week_start, self.tz)
        logger.debug(f"Period check at {now}: {change}")

        event = None
        if change.any:
            week_key = period_key(now, PeriodLevel.WEEKLY, week_start, self.tz)
            month_key = period_key(now, PeriodLevel.MONTHLY, week_start, self.tz)

            show_weekly = change.weekly_changed and (
                await self.state.last_shown_key(PeriodLevel.WEEKLY) != str(week_key)
            )
            show_monthly = change.monthly_changed and (
                await self.state.last_shown_key(PeriodLevel.MONTHLY) != str(month_key)
            )

            if show_weekly or show_monthly:
                event = PeriodChangeEvent(
                    has_weekly_change=show_weekly,
                    has_monthly_change=show_monthly,
                    current_week_key=week_key.value,
                    current_month_key=month_key.value,
                )
                logger.info(f"Emitting reflection prompt: {event}")
                await self._deliver(event)

                try:
                    if show_weekly:
                        await self.state.mark_shown(week_key)
                    if show_monthly:
                        await self.state.mark_shown(month_key)
                except StorageUnavailable as e:
                    logger.error(f"Failed to record shown reflection prompt: {e}")
                    raise

        await self.state.set_last_checked_at(now)
        return event

    async def _deliver(self, event: PeriodChangeEvent) -> None:
        try:
            await self.notifier.emit(event)
            await self.notifier.present()
        except Exception as e:
            logger.error(f"Failed to deliver reflection prompt: {e}")
