"""Goal creation and listing scoped to the active period."""

import logging
from datetime import tzinfo
from typing import Callable, List

from goaltrio.db.models import Goal, Reflection
from goaltrio.db.reminder_state import Settings
from goaltrio.db.repository import Repository
from goaltrio.engine.periods import PeriodLevel, get_period_start, is_in_period, period_key
from goaltrio.errors import GoalTrioError, GoalLimitReached
from goaltrio.utils.constants import (
    MAX_GOALS_PER_PERIOD,
    MAX_INSIGHT_LENGTH,
    MAX_INSIGHTS,
    MAX_TITLE_LENGTH,
)
from goaltrio.utils.time_utils import now_millis

logger = logging.getLogger(__name__)


class GoalService:
    """Goal and reflection operations for the bot handlers."""

    def __init__(
        self,
        repo: Repository,
        settings: Settings,
        clock: Callable[[], int] = now_millis,
        tz: tzinfo | None = None,
    ):
        self.repo = repo
        self.settings = settings
        self.clock = clock
        self.tz = tz

    async def current_goals(
        self, level: PeriodLevel | str, now: int | None = None
    ) -> List[Goal]:
        """Goals of `level` belonging to the period that contains `now`."""
        level = PeriodLevel.parse(level)
        now = self.clock() if now is None else now
        return await self._goals_in_period(level, now, await self.settings.week_start())

    async def _goals_in_period(
        self, level: PeriodLevel, now: int, week_start: int
    ) -> List[Goal]:
        goals = await self.repo.get_goals(level)
        return [
            goal
            for goal in goals
            if is_in_period(goal.period_start, level, now, week_start, self.tz)
        ]

    async def add_goal(
        self,
        title: str,
        level: PeriodLevel | str,
        now: int | None = None,
        parent_goal_id: str | None = None,
    ) -> Goal:
        """Create a goal in the active period, enforcing the per-period limit."""
        level = PeriodLevel.parse(level)
        title = _clean_title(title)

        now = self.clock() if now is None else now
        # Quota and stamped period share one week-start read
        week_start = await self.settings.week_start()
        existing = await self._goals_in_period(level, now, week_start)
        if len(existing) >= MAX_GOALS_PER_PERIOD:
            raise GoalLimitReached(level.value, MAX_GOALS_PER_PERIOD)

        goal = Goal(
            title=title,
            level=level,
            period_start=get_period_start(now, level, week_start, self.tz),
            created_at=now,
            parent_goal_id=parent_goal_id,
        )
        await self.repo.add_goal(goal)
        logger.info(f"Added {level.value} goal {goal.id}")
        return goal

    async def rename_goal(self, goal_id: str, title: str) -> Goal | None:
        """Change a goal's title. Returns None if the goal is gone."""
        title = _clean_title(title)
        if await self.repo.get_goal(goal_id) is None:
            return None
        await self.repo.update_goal_title(goal_id, title)
        return await self.repo.get_goal(goal_id)

    async def toggle_goal(self, goal_id: str) -> Goal | None:
        return await self.repo.toggle_goal_completion(goal_id, self.clock())

    async def delete_goal(self, goal_id: str) -> None:
        await self.repo.delete_goal(goal_id)

    async def reflections(self, level: PeriodLevel | str) -> List[Reflection]:
        """Stored reflections for `level`, newest first."""
        return await self.repo.get_reflections_by_level(PeriodLevel.parse(level))

    async def previous_period_key(self, level: PeriodLevel | str, now: int | None = None) -> str:
        """Level-local key of the period just before the active one.

        Reflection prompts are about the period that just ended.
        """
        level = PeriodLevel.parse(level)
        now = self.clock() if now is None else now
        week_start = await self.settings.week_start()
        start = get_period_start(now, level, week_start, self.tz)
        return period_key(start - 1, level, week_start, self.tz).value

    async def save_reflection(
        self, level: PeriodLevel | str, period_key_value: str, insights: List[str]
    ) -> Reflection:
        """Store up to three insights for a period, replacing earlier ones."""
        level = PeriodLevel.parse(level)
        insights = [i.strip() for i in insights if i and i.strip()]
        if not insights:
            raise GoalTrioError("Write at least one insight")
        if len(insights) > MAX_INSIGHTS:
            raise GoalTrioError(f"At most {MAX_INSIGHTS} insights per reflection")
        if any(len(i) > MAX_INSIGHT_LENGTH for i in insights):
            raise GoalTrioError(f"Insight too long (max {MAX_INSIGHT_LENGTH} characters)")

        padded = insights + [None] * (MAX_INSIGHTS - len(insights))
        reflection = Reflection(
            level=level,
            period_key=period_key_value,
            created_at=self.clock(),
            insight_1=padded[0],
            insight_2=padded[1],
            insight_3=padded[2],
        )
        return await self.repo.save_reflection(reflection)


def _clean_title(title: str) -> str:
    title = title.strip()
    if not title:
        raise GoalTrioError("Goal title cannot be empty")
    if len(title) > MAX_TITLE_LENGTH:
        raise GoalTrioError(f"Goal title too long (max {MAX_TITLE_LENGTH} characters)")
    return title
