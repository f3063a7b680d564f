"""Command handlers."""

import logging
from html import escape

from telegram import Update
from telegram.ext import ContextTypes

from goaltrio.bot.auth import NOT_AUTHORISED, owner_only
from goaltrio.bot.formatters import (
    format_goal_list,
    format_help_message,
    format_reflection,
    format_reflection_history,
    format_settings,
    format_welcome_message,
)
from goaltrio.bot.keyboards import goal_toggle_keyboard
from goaltrio.db.reminder_state import ReminderStateStore, Settings
from goaltrio.engine.goals import GoalService
from goaltrio.engine.periods import PeriodLevel, period_key
from goaltrio.engine.reflection_reminder import ReflectionReminder
from goaltrio.errors import GoalTrioError
from goaltrio.utils.constants import WEEKDAY_NAMES

logger = logging.getLogger(__name__)


async def start_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /start command - the first chat to start the bot owns it."""
    if not update.effective_chat or not update.message:
        return

    settings: Settings = context.bot_data["settings"]
    chat_id = update.effective_chat.id
    owner = await settings.owner_chat_id()

    if owner is None:
        await settings.set_owner_chat_id(chat_id)
        logger.info(f"Owner chat registered: {chat_id}")
    elif owner != chat_id:
        logger.warning(f"Rejected /start from chat {chat_id}")
        await update.message.reply_text(NOT_AUTHORISED)
        return

    await update.message.reply_html(format_welcome_message())


@owner_only
async def help_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /help command."""
    if not update.message:
        return

    await update.message.reply_html(format_help_message())


@owner_only
async def goals_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /goals [level] - show goals for the active period."""
    if not update.message:
        return

    goal_service: GoalService = context.bot_data["goals"]
    settings: Settings = context.bot_data["settings"]

    try:
        levels = (
            [PeriodLevel.parse(context.args[0])] if context.args else list(PeriodLevel)
        )
        week_start = await settings.week_start()
        now = goal_service.clock()

        for level in levels:
            goals = await goal_service.current_goals(level, now)
            key = period_key(now, level, week_start, goal_service.tz)
            await update.message.reply_html(
                format_goal_list(level, goals, key.value),
                reply_markup=goal_toggle_keyboard(goals),
            )
    except GoalTrioError as e:
        await update.message.reply_text(f"❌ {e}")


@owner_only
async def add_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /add <level> <title>."""
    if not update.message:
        return

    if not context.args or len(context.args) < 2:
        await update.message.reply_text(
            "Usage: /add <daily|weekly|monthly> <title>\n\n"
            "Example: /add weekly Run three times"
        )
        return

    goal_service: GoalService = context.bot_data["goals"]

    try:
        goal = await goal_service.add_goal(" ".join(context.args[1:]), context.args[0])
    except GoalTrioError as e:
        await update.message.reply_text(f"❌ {e}")
        return

    await update.message.reply_html(
        f"🎯 Added {goal.level.value} goal: <b>{escape(goal.title)}</b>"
    )


async def _goal_by_position(
    context: ContextTypes.DEFAULT_TYPE, usage: str, trailing: bool = False
):
    """Resolve leading `<level> <n>` args to a goal in the active period."""
    if not context.args or len(context.args) < 2 or (
        not trailing and len(context.args) != 2
    ):
        raise GoalTrioError(usage)

    goal_service: GoalService = context.bot_data["goals"]
    level = PeriodLevel.parse(context.args[0])
    try:
        position = int(context.args[1])
    except ValueError:
        raise GoalTrioError("Goal number must be a number.") from None

    goals = await goal_service.current_goals(level)
    if not 1 <= position <= len(goals):
        raise GoalTrioError("Goal not found.")
    return goals[position - 1]


@owner_only
async def done_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /done <level> <n> - toggle completion."""
    if not update.message:
        return

    goal_service: GoalService = context.bot_data["goals"]

    try:
        goal = await _goal_by_position(context, "Usage: /done <level> <n>")
        toggled = await goal_service.toggle_goal(goal.id)
    except GoalTrioError as e:
        await update.message.reply_text(f"❌ {e}")
        return

    if toggled and toggled.is_completed:
        await update.message.reply_html(f"✅ Done: <b>{escape(toggled.title)}</b>")
    else:
        await update.message.reply_html(f"↺ Reopened: <b>{escape(goal.title)}</b>")


@owner_only
async def delete_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /delete <level> <n>."""
    if not update.message:
        return

    goal_service: GoalService = context.bot_data["goals"]

    try:
        goal = await _goal_by_position(context, "Usage: /delete <level> <n>")
        await goal_service.delete_goal(goal.id)
    except GoalTrioError as e:
        await update.message.reply_text(f"❌ {e}")
        return

    await update.message.reply_html(f"🗑 Deleted: <b>{escape(goal.title)}</b>")


@owner_only
async def rename_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /rename <level> <n> <title>."""
    if not update.message:
        return

    if not context.args or len(context.args) < 3:
        await update.message.reply_text(
            "Usage: /rename <level> <n> <new title>\n\n"
            "Example: /rename daily 2 Finish the draft"
        )
        return

    goal_service: GoalService = context.bot_data["goals"]

    try:
        goal = await _goal_by_position(
            context, "Usage: /rename <level> <n> <new title>", trailing=True
        )
        renamed = await goal_service.rename_goal(goal.id, " ".join(context.args[2:]))
    except GoalTrioError as e:
        await update.message.reply_text(f"❌ {e}")
        return

    if renamed is None:
        await update.message.reply_text("❌ Goal not found.")
        return

    await update.message.reply_html(f"✏️ Renamed: <b>{escape(renamed.title)}</b>")


@owner_only
async def settings_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /settings command."""
    if not update.message:
        return

    settings: Settings = context.bot_data["settings"]
    state: ReminderStateStore = context.bot_data["reminder_state"]

    await update.message.reply_html(
        format_settings(await settings.week_start(), await state.is_enabled())
    )


@owner_only
async def weekstart_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /weekstart <1-7> command."""
    if not update.message:
        return

    settings: Settings = context.bot_data["settings"]

    if not context.args:
        current = await settings.week_start()
        await update.message.reply_html(
            f"Week starts on <b>{WEEKDAY_NAMES[current]}</b>.\n\n"
            "To change: <code>/weekstart 2</code> (1=Sunday ... 7=Saturday)"
        )
        return

    try:
        week_start = await settings.set_week_start(context.args[0])
    except GoalTrioError as e:
        await update.message.reply_text(f"❌ {e}")
        return

    await update.message.reply_html(
        f"✓ Week now starts on <b>{WEEKDAY_NAMES[week_start]}</b>"
    )


@owner_only
async def reminders_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /reminders [on|off] command."""
    if not update.message:
        return

    state: ReminderStateStore = context.bot_data["reminder_state"]

    if not context.args:
        enabled = await state.is_enabled()
        await update.message.reply_html(
            f"Reflection prompts are <b>{'on' if enabled else 'off'}</b>.\n\n"
            "To change: <code>/reminders on</code> or <code>/reminders off</code>"
        )
        return

    choice = context.args[0].lower()
    if choice not in ("on", "off"):
        await update.message.reply_text("Usage: /reminders <on|off>")
        return

    await state.set_enabled(choice == "on")
    await update.message.reply_html(
        f"✓ Reflection prompts turned <b>{choice}</b>"
    )


@owner_only
async def reflect_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /reflect <weekly|monthly> insight | insight | insight."""
    if not update.message:
        return

    if not context.args or len(context.args) < 2:
        await update.message.reply_text(
            "Usage: /reflect <weekly|monthly> insight | insight | insight\n\n"
            "Example: /reflect weekly Mornings work best | Too many meetings"
        )
        return

    goal_service: GoalService = context.bot_data["goals"]

    try:
        level = PeriodLevel.parse(context.args[0])
        insights = " ".join(context.args[1:]).split("|")
        key = await goal_service.previous_period_key(level)
        reflection = await goal_service.save_reflection(level, key, insights)
    except GoalTrioError as e:
        await update.message.reply_text(f"❌ {e}")
        return

    await update.message.reply_html("✓ Reflection saved\n\n" + format_reflection(reflection))


@owner_only
async def history_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /history <level>."""
    if not update.message:
        return

    if not context.args:
        await update.message.reply_text("Usage: /history <daily|weekly|monthly>")
        return

    goal_service: GoalService = context.bot_data["goals"]

    try:
        level = PeriodLevel.parse(context.args[0])
        reflections = await goal_service.reflections(level)
    except GoalTrioError as e:
        await update.message.reply_text(f"❌ {e}")
        return

    await update.message.reply_html(format_reflection_history(level, reflections))


@owner_only
async def check_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /check - run the reflection check now."""
    if not update.message:
        return

    reminder: ReflectionReminder = context.bot_data["reflection_reminder"]

    try:
        event = await reminder.check()
    except GoalTrioError as e:
        await update.message.reply_text(f"❌ {e}")
        return

    if event is None:
        await update.message.reply_text("No new period to reflect on.")
