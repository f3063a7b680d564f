"""Message text formatters."""

from html import escape
from typing import List

from goaltrio.db.models import Goal, Reflection
from goaltrio.engine.notifier import PeriodChangeEvent
from goaltrio.engine.periods import PeriodLevel
from goaltrio.utils.constants import MAX_GOALS_PER_PERIOD, WEEKDAY_NAMES

LEVEL_TITLES = {
    PeriodLevel.DAILY: "Today",
    PeriodLevel.WEEKLY: "This week",
    PeriodLevel.MONTHLY: "This month",
}


def format_goal_list(level: PeriodLevel, goals: List[Goal], period: str) -> str:
    """Format the goals of one level for the active period."""
    header = (
        f"<b>{LEVEL_TITLES[level]}</b> ({escape(period)}) "
        f"- {len(goals)}/{MAX_GOALS_PER_PERIOD}"
    )
    if not goals:
        return f"{header}\n\nNo goals yet. Add one with /add {level.value} &lt;title&gt;"

    lines = [header, ""]
    for i, goal in enumerate(goals, start=1):
        mark = "✅" if goal.is_completed else "⬜"
        title = f"<s>{escape(goal.title)}</s>" if goal.is_completed else escape(goal.title)
        lines.append(f"{mark} {i}. {title}")

    done = sum(1 for goal in goals if goal.is_completed)
    if done == len(goals):
        lines.append("\n🎉 All done!")
    return "\n".join(lines)


def format_reflection_prompt(event: PeriodChangeEvent) -> str:
    """Format the prompt sent when a week and/or month has ended."""
    lines = ["🪞 <b>Time to reflect</b>\n"]
    if event.has_monthly_change:
        lines.append(f"A new month has started ({escape(event.current_month_key)}).")
    if event.has_weekly_change:
        lines.append(f"A new week has started ({escape(event.current_week_key)}).")
    lines.append("\nLook back at what you set out to do and note up to three insights.")
    return "\n".join(lines)


def format_reflection(reflection: Reflection) -> str:
    """Format a stored reflection."""
    lines = [f"<b>{reflection.level.value.title()} {escape(reflection.period_key)}</b>"]
    for i, insight in enumerate(reflection.insights, start=1):
        lines.append(f"{i}. {escape(insight)}")
    return "\n".join(lines)


def format_reflection_history(level: PeriodLevel, reflections: List[Reflection]) -> str:
    if not reflections:
        return f"No {level.value} reflections yet."
    return "\n\n".join(format_reflection(r) for r in reflections)


def format_settings(week_start: int, reminders_enabled: bool) -> str:
    return (
        "<b>Settings</b>\n\n"
        f"Week starts on: <b>{WEEKDAY_NAMES[week_start]}</b> ({week_start})\n"
        f"Reflection prompts: <b>{'on' if reminders_enabled else 'off'}</b>"
    )


def format_welcome_message() -> str:
    """Format the welcome message for /start."""
    return """
<b>Welcome to GoalTrio!</b> 🎯

Three goals a day, three a week, three a month. That's it.

<b>Quick Start:</b>
• /add daily Finish the report
• /goals - See this period's goals
• /reminders on - Get a nudge to reflect when a week or month ends
• /help - Full command list
""".strip()


def format_help_message() -> str:
    """Format the help message."""
    return """
<b>GoalTrio Commands 🎯</b>

<b>Goals:</b>
/goals [daily|weekly|monthly] - Goals for the active period
/add &lt;level&gt; &lt;title&gt; - Add a goal (max 3 per period)
/done &lt;level&gt; &lt;n&gt; - Toggle goal n as done
/delete &lt;level&gt; &lt;n&gt; - Delete goal n
/rename &lt;level&gt; &lt;n&gt; &lt;title&gt; - Rename goal n

<b>Reflection:</b>
/reflect &lt;weekly|monthly&gt; insight | insight | insight - Reflect on the period that just ended
/history &lt;level&gt; - Past reflections
/reminders [on|off] - Prompt me when a week or month ends
/check - Check for a new period now

<b>Settings:</b>
/settings - View settings
/weekstart &lt;1-7&gt; - First day of the week (1=Sunday, 2=Monday, ... 7=Saturday)
""".strip()
