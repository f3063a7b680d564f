"""Inline keyboard builders."""

from typing import List

from telegram import InlineKeyboardButton, InlineKeyboardMarkup

from goaltrio.db.models import Goal
from goaltrio.engine.notifier import PeriodChangeEvent


def goal_toggle_keyboard(goals: List[Goal]) -> InlineKeyboardMarkup | None:
    """One toggle button per goal, numbered like the list."""
    if not goals:
        return None
    return InlineKeyboardMarkup(
        [
            [
                InlineKeyboardButton(
                    f"{'↺' if goal.is_completed else '✓'} {i}",
                    callback_data=f"toggle:{goal.id}",
                )
                for i, goal in enumerate(goals, start=1)
            ]
        ]
    )


def reflection_prompt_keyboard(event: PeriodChangeEvent) -> InlineKeyboardMarkup:
    """Keyboard for reflection prompts: one button per ended period."""
    buttons = []
    if event.has_weekly_change:
        buttons.append(InlineKeyboardButton("📝 Reflect on last week", callback_data="reflect:weekly"))
    if event.has_monthly_change:
        buttons.append(InlineKeyboardButton("📝 Reflect on last month", callback_data="reflect:monthly"))
    return InlineKeyboardMarkup([buttons])
