"""Typed accessors over the settings table.

`Settings` is the single read path for user configuration shared by the
goal quota check and the reflection reminder, so both always see the
same week start. Nothing is cached: every call reads storage, so a
changed setting applies on the next check without a restart.
"""

from goaltrio.db.models import ReminderState
from goaltrio.db.repository import Repository
from goaltrio.engine.periods import PeriodKey, PeriodLevel
from goaltrio.errors import InvalidLevel, InvalidTimestamp
from goaltrio.utils.constants import (
    DEFAULT_WEEK_START,
    LAST_MONTHLY_PROMPT_KEY,
    LAST_PERIOD_CHECK_KEY,
    LAST_WEEKLY_PROMPT_KEY,
    NEVER_CHECKED,
    OWNER_CHAT_ID_KEY,
    REFLECTION_PROMPT_ENABLED_KEY,
    WEEK_START_KEY,
)
from goaltrio.utils.time_utils import validate_week_start

_SHOWN_KEYS = {
    PeriodLevel.WEEKLY: LAST_WEEKLY_PROMPT_KEY,
    PeriodLevel.MONTHLY: LAST_MONTHLY_PROMPT_KEY,
}


class Settings:
    """Read-through access to user settings."""

    def __init__(self, repo: Repository, default_week_start: int = DEFAULT_WEEK_START):
        self.repo = repo
        self.default_week_start = validate_week_start(default_week_start)

    async def week_start(self) -> int:
        """Configured week-start day (1=Sunday .. 7=Saturday)."""
        value = await self.repo.get_setting(WEEK_START_KEY)
        if value is None:
            return self.default_week_start
        return validate_week_start(value)

    async def set_week_start(self, value: int | str) -> int:
        week_start = validate_week_start(value)
        await self.repo.set_setting(WEEK_START_KEY, str(week_start))
        return week_start

    async def owner_chat_id(self) -> int | None:
        value = await self.repo.get_setting(OWNER_CHAT_ID_KEY)
        return int(value) if value else None

    async def set_owner_chat_id(self, chat_id: int) -> None:
        await self.repo.set_setting(OWNER_CHAT_ID_KEY, str(chat_id))


class ReminderStateStore:
    """The four durable fields owned by the reflection reminder."""

    def __init__(self, repo: Repository):
        self.repo = repo

    async def is_enabled(self) -> bool:
        return await self.repo.get_setting(REFLECTION_PROMPT_ENABLED_KEY) == "true"

    async def set_enabled(self, enabled: bool) -> None:
        await self.repo.set_setting(
            REFLECTION_PROMPT_ENABLED_KEY, "true" if enabled else "false"
        )

    async def last_checked_at(self) -> int:
        """Epoch ms of the previous check, 0 if it never ran."""
        value = await self.repo.get_setting(LAST_PERIOD_CHECK_KEY)
        if not value:
            return NEVER_CHECKED
        try:
            return int(value)
        except ValueError:
            raise InvalidTimestamp(value) from None

    async def set_last_checked_at(self, timestamp: int) -> None:
        await self.repo.set_setting(LAST_PERIOD_CHECK_KEY, str(timestamp))

    async def last_shown_key(self, level: PeriodLevel) -> str:
        """Full PeriodKey string of the last prompt shown for `level`, or ""."""
        return await self.repo.get_setting(self._shown_setting(level)) or ""

    async def mark_shown(self, key: PeriodKey) -> None:
        await self.repo.set_setting(self._shown_setting(key.level), str(key))

    async def load(self) -> ReminderState:
        return ReminderState(
            enabled=await self.is_enabled(),
            last_checked_at=await self.last_checked_at(),
            last_shown_weekly_key=await self.last_shown_key(PeriodLevel.WEEKLY),
            last_shown_monthly_key=await self.last_shown_key(PeriodLevel.MONTHLY),
        )

    @staticmethod
    def _shown_setting(level: PeriodLevel) -> str:
        try:
            return _SHOWN_KEYS[level]
        except KeyError:
            raise InvalidLevel(level) from None
