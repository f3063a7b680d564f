"""Period levels, period keys and period membership checks."""

from dataclasses import dataclass
from datetime import tzinfo
from enum import Enum
from functools import total_ordering

from goaltrio.errors import InvalidLevel
from goaltrio.utils.time_utils import (
    day_start,
    month_start,
    same_day,
    same_month,
    same_week,
    to_local,
    validate_week_start,
    week_start,
    week_start_date,
)


@total_ordering
class PeriodLevel(Enum):
    """Goal horizon, ordered by granularity: DAILY < WEEKLY < MONTHLY."""

    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"

    @property
    def granularity(self) -> int:
        return _GRANULARITY[self]

    def __lt__(self, other):
        if not isinstance(other, PeriodLevel):
            return NotImplemented
        return self.granularity < other.granularity

    @classmethod
    def parse(cls, value: "str | PeriodLevel") -> "PeriodLevel":
        """Parse a level from user input, ignoring case and surrounding spaces."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        raise InvalidLevel(value)

    @classmethod
    def from_stored(cls, value: str) -> "PeriodLevel":
        """Parse a level read from storage. Only the exact stored form is accepted."""
        try:
            return cls(value)
        except ValueError:
            raise InvalidLevel(value) from None


_GRANULARITY = {
    PeriodLevel.DAILY: 0,
    PeriodLevel.WEEKLY: 1,
    PeriodLevel.MONTHLY: 2,
}


@dataclass(frozen=True)
class PeriodKey:
    """Canonical identity of one period instance at one level.

    `value` is the level-local part ("2025-12-26", "2025-W52", "2025-12");
    str() gives the full key, e.g. "weekly:2025-W52".
    """

    level: PeriodLevel
    value: str

    def __str__(self) -> str:
        return f"{self.level.value}:{self.value}"

    @classmethod
    def parse(cls, text: str) -> "PeriodKey":
        level, sep, value = text.partition(":")
        if not sep or not value:
            raise InvalidLevel(text)
        return cls(PeriodLevel.parse(level), value)


def period_key(
    t: int, level: "PeriodLevel | str", week_start_day: int, tz: tzinfo | None = None
) -> PeriodKey:
    """Derive the PeriodKey of the period containing `t`.

    Weekly keys use the ISO week of the configured week's first day, so a
    week straddling New Year gets a single key.
    """
    level = PeriodLevel.parse(level)
    week_start_day = validate_week_start(week_start_day)
    dt = to_local(t, tz)

    if level is PeriodLevel.DAILY:
        value = dt.date().isoformat()
    elif level is PeriodLevel.WEEKLY:
        iso_year, iso_week, _ = week_start_date(dt, week_start_day).isocalendar()
        value = f"{iso_year}-W{iso_week:02d}"
    else:
        value = f"{dt.year}-{dt.month:02d}"

    return PeriodKey(level, value)


def is_in_period(
    period_start_ms: int,
    level: "PeriodLevel | str",
    target_ms: int,
    week_start_day: int,
    tz: tzinfo | None = None,
) -> bool:
    """Check whether `target_ms` falls in the period that began at `period_start_ms`."""
    level = PeriodLevel.parse(level)

    if level is PeriodLevel.DAILY:
        return same_day(period_start_ms, target_ms, tz)
    elif level is PeriodLevel.WEEKLY:
        return same_week(period_start_ms, target_ms, week_start_day, tz)
    return same_month(period_start_ms, target_ms, tz)


def get_period_start(
    date_ms: int,
    level: "PeriodLevel | str",
    week_start_day: int,
    tz: tzinfo | None = None,
) -> int:
    """Canonical start (epoch ms) of the period containing `date_ms`."""
    level = PeriodLevel.parse(level)

    if level is PeriodLevel.DAILY:
        return day_start(date_ms, tz)
    elif level is PeriodLevel.WEEKLY:
        return week_start(date_ms, week_start_day, tz)
    return month_start(date_ms, tz)
