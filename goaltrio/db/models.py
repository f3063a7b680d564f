"""Data models."""

import uuid
from dataclasses import dataclass, field

from goaltrio.engine.periods import PeriodLevel


@dataclass
class Goal:
    """A goal set for one period at one level."""

    title: str
    level: PeriodLevel
    period_start: int  # epoch ms, canonical start of the goal's period
    created_at: int  # epoch ms
    is_completed: bool = False
    completed_at: int | None = None  # epoch ms
    parent_goal_id: str | None = None
    note: str | None = None
    id: str = field(default_factory=lambda: str(uuid.uuid4()))


@dataclass
class Reflection:
    """Up to three insights written at the end of a period."""

    level: PeriodLevel
    period_key: str  # level-local key, e.g. "2025-W52"
    created_at: int  # epoch ms
    insight_1: str | None = None
    insight_2: str | None = None
    insight_3: str | None = None
    id: int | None = None

    @property
    def insights(self) -> list[str]:
        return [i for i in (self.insight_1, self.insight_2, self.insight_3) if i]


@dataclass
class ReminderState:
    """Durable state of the reflection reminder."""

    enabled: bool
    last_checked_at: int  # epoch ms, 0 = never checked
    last_shown_weekly_key: str = ""
    last_shown_monthly_key: str = ""
