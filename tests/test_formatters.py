"""Tests for message formatting."""

from goaltrio.bot.formatters import (
    format_goal_list,
    format_reflection_history,
    format_settings,
)
from goaltrio.bot.keyboards import goal_toggle_keyboard
from goaltrio.db.models import Goal, Reflection
from goaltrio.engine.periods import PeriodLevel


def make_goal(title, done=False):
    return Goal(title=title, level=PeriodLevel.DAILY, period_start=0, created_at=0,
                is_completed=done)


def test_goal_list_escapes_titles():
    text = format_goal_list(PeriodLevel.DAILY, [make_goal("<b>fix</b> & ship")], "2025-12-26")

    assert "&lt;b&gt;fix&lt;/b&gt; &amp; ship" in text
    assert "1/3" in text


def test_goal_list_all_done():
    goals = [make_goal("a", done=True), make_goal("b", done=True)]
    text = format_goal_list(PeriodLevel.DAILY, goals, "2025-12-26")

    assert "<s>a</s>" in text
    assert "All done" in text


def test_empty_goal_list():
    text = format_goal_list(PeriodLevel.WEEKLY, [], "2025-W52")
    assert "No goals yet" in text
    assert goal_toggle_keyboard([]) is None


def test_toggle_keyboard_uses_goal_ids():
    goal = make_goal("a")
    buttons = goal_toggle_keyboard([goal]).inline_keyboard[0]
    assert buttons[0].callback_data == f"toggle:{goal.id}"


def test_reflection_history():
    assert format_reflection_history(PeriodLevel.MONTHLY, []) == "No monthly reflections yet."

    reflection = Reflection(level=PeriodLevel.MONTHLY, period_key="2025-11", created_at=0,
                            insight_1="Less <email>")
    text = format_reflection_history(PeriodLevel.MONTHLY, [reflection])
    assert "Monthly 2025-11" in text
    assert "1. Less &lt;email&gt;" in text


def test_settings_names_the_weekday():
    text = format_settings(2, True)
    assert "Monday" in text
    assert "on" in text
