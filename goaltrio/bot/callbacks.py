"""Callback query handlers for inline buttons."""

import logging
from html import escape

from telegram import Update
from telegram.ext import ContextTypes

from goaltrio.bot.auth import owner_only
from goaltrio.engine.goals import GoalService
from goaltrio.engine.periods import PeriodLevel
from goaltrio.errors import GoalTrioError

logger = logging.getLogger(__name__)


async def handle_toggle_callback(
    update: Update, context: ContextTypes.DEFAULT_TYPE, goal_id: str
) -> None:
    """Handle a goal's toggle button."""
    query = update.callback_query
    goal_service: GoalService = context.bot_data["goals"]

    goal = await goal_service.toggle_goal(goal_id)
    if goal is None:
        await query.answer("Goal not found.")
        return

    if goal.is_completed:
        await query.answer(f"✅ {goal.title}")
    else:
        await query.answer(f"↺ {goal.title}")


async def handle_reflect_callback(
    update: Update, context: ContextTypes.DEFAULT_TYPE, level: str
) -> None:
    """Handle a reflection prompt button: explain how to reflect."""
    query = update.callback_query
    goal_service: GoalService = context.bot_data["goals"]

    level_enum = PeriodLevel.parse(level)
    key = await goal_service.previous_period_key(level_enum)
    await query.answer()

    if query.message:
        await query.message.reply_html(
            f"📝 <b>Reflecting on {escape(key)}</b>\n\n"
            f"Send up to three insights separated by <code>|</code>:\n"
            f"<code>/reflect {level_enum.value} What worked | What didn't | What's next</code>"
        )


@owner_only
async def callback_router(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Route callback queries to appropriate handlers."""
    if not update.callback_query:
        return

    query = update.callback_query
    data = query.data

    if not data:
        return

    # Parse callback data
    action, _, arg = data.partition(":")

    try:
        if action == "toggle":
            await handle_toggle_callback(update, context, arg)
        elif action == "reflect":
            await handle_reflect_callback(update, context, arg)
        else:
            await query.answer("Unknown action")
    except GoalTrioError as e:
        await query.answer(f"❌ {e}")
