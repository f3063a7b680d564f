"""Tests for goal creation limits and reflections."""

import pytest

from conftest import TZ, FakeClock, at
from goaltrio.db.reminder_state import Settings
from goaltrio.engine.goals import GoalService
from goaltrio.engine.periods import PeriodLevel
from goaltrio.errors import GoalLimitReached, GoalTrioError, InvalidLevel


@pytest.fixture
def clock():
    return FakeClock(at(2025, 12, 24, 10))  # Wednesday


@pytest.fixture
def goals(repo, settings, clock):
    return GoalService(repo, settings, clock=clock, tz=TZ)


@pytest.mark.asyncio
async def test_goal_stamped_with_period_start(goals):
    goal = await goals.add_goal("  Write report  ", "weekly")

    assert goal.title == "Write report"
    assert goal.level is PeriodLevel.WEEKLY
    assert goal.period_start == at(2025, 12, 22, 0)
    assert goal.created_at == at(2025, 12, 24, 10)


@pytest.mark.asyncio
async def test_three_goals_per_period(goals, clock):
    for title in ("one", "two", "three"):
        await goals.add_goal(title, PeriodLevel.DAILY)

    with pytest.raises(GoalLimitReached):
        await goals.add_goal("four", PeriodLevel.DAILY)

    # Other levels have their own quota
    await goals.add_goal("weekly one", PeriodLevel.WEEKLY)

    # A new day opens a fresh quota
    clock.now = at(2025, 12, 25, 9)
    await goals.add_goal("tomorrow", PeriodLevel.DAILY)
    assert [g.title for g in await goals.current_goals("daily")] == ["tomorrow"]


@pytest.mark.asyncio
async def test_quota_follows_week_start(goals, settings, clock):
    """Quota and reminder share the same week boundaries."""
    for title in ("a", "b", "c"):
        await goals.add_goal(title, "weekly")  # week of Mon Dec 22

    clock.now = at(2025, 12, 27, 10)  # Saturday
    with pytest.raises(GoalLimitReached):
        await goals.add_goal("d", "weekly")

    await settings.set_week_start(7)  # Saturday weeks
    await goals.add_goal("d", "weekly")
    assert [g.title for g in await goals.current_goals("weekly")] == ["d"]


@pytest.mark.asyncio
async def test_add_goal_validation(goals):
    with pytest.raises(GoalTrioError):
        await goals.add_goal("   ", "daily")

    with pytest.raises(GoalTrioError):
        await goals.add_goal("x" * 201, "daily")

    with pytest.raises(InvalidLevel):
        await goals.add_goal("ok", "yearly")


@pytest.mark.asyncio
async def test_toggle_and_delete(goals):
    goal = await goals.add_goal("Read", "monthly")

    toggled = await goals.toggle_goal(goal.id)
    assert toggled.is_completed
    assert toggled.completed_at == at(2025, 12, 24, 10)

    await goals.delete_goal(goal.id)
    assert await goals.current_goals("monthly") == []


@pytest.mark.asyncio
async def test_previous_period_key(goals, settings):
    assert await goals.previous_period_key("weekly") == "2025-W51"
    assert await goals.previous_period_key("monthly") == "2025-11"
    assert await goals.previous_period_key("daily") == "2025-12-23"

    await settings.set_week_start(1)
    # Sunday weeks: current week starts Sun Dec 21, previous Sun Dec 14
    assert await goals.previous_period_key("weekly") == "2025-W50"


@pytest.mark.asyncio
async def test_save_reflection(goals):
    reflection = await goals.save_reflection(
        "weekly", "2025-W51", ["Mornings work", " ", "Fewer meetings"]
    )
    assert reflection.insights == ["Mornings work", "Fewer meetings"]
    assert reflection.insight_3 is None

    with pytest.raises(GoalTrioError):
        await goals.save_reflection("weekly", "2025-W51", ["", "  "])

    with pytest.raises(GoalTrioError):
        await goals.save_reflection("weekly", "2025-W51", ["a", "b", "c", "d"])


@pytest.mark.asyncio
async def test_rename_goal(goals):
    goal = await goals.add_goal("Draft", "daily")

    renamed = await goals.rename_goal(goal.id, "  Finish the draft ")
    assert renamed.title == "Finish the draft"
    assert renamed.period_start == goal.period_start

    with pytest.raises(GoalTrioError):
        await goals.rename_goal(goal.id, "   ")

    await goals.delete_goal(goal.id)
    assert await goals.rename_goal(goal.id, "Gone") is None


@pytest.mark.asyncio
async def test_add_goal_reads_week_start_once(repo, clock):
    """The quota check and the stamped period come from the same read."""
    reads = []

    class CountingSettings(Settings):
        async def week_start(self):
            reads.append(1)
            return await super().week_start()

    service = GoalService(repo, CountingSettings(repo), clock=clock, tz=TZ)
    await service.add_goal("Plan", "weekly")

    assert len(reads) == 1


@pytest.mark.asyncio
async def test_reflections_listing(goals):
    await goals.save_reflection("monthly", "2025-11", ["Slept more"])

    assert [r.period_key for r in await goals.reflections("monthly")] == ["2025-11"]
    assert await goals.reflections(PeriodLevel.WEEKLY) == []
