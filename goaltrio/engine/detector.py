"""Week/month boundary detection between two observations."""

from datetime import tzinfo
from typing import NamedTuple

from goaltrio.utils.constants import NEVER_CHECKED
from goaltrio.utils.time_utils import same_month, same_week


class BoundaryChange(NamedTuple):
    weekly_changed: bool
    monthly_changed: bool

    @property
    def any(self) -> bool:
        return self.weekly_changed or self.monthly_changed


def detect(
    last_checked_at: int, now: int, week_start_day: int, tz: tzinfo | None = None
) -> BoundaryChange:
    """Compare the previous check time against now.

    A `last_checked_at` of 0 means the check has never run; the first
    observation never reports a change. Only weekly and monthly
    boundaries are reported.
    """
    if last_checked_at == NEVER_CHECKED:
        return BoundaryChange(False, False)

    return BoundaryChange(
        weekly_changed=not same_week(last_checked_at, now, week_start_day, tz),
        monthly_changed=not same_month(last_checked_at, now, tz),
    )
