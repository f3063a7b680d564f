"""Main entry point for the GoalTrio bot."""

import logging
import sys

from telegram.ext import (
    Application,
    CallbackQueryHandler,
    CommandHandler,
    ContextTypes,
)

from goaltrio.bot.callbacks import callback_router
from goaltrio.bot.handlers import (
    add_command,
    check_command,
    delete_command,
    done_command,
    goals_command,
    help_command,
    history_command,
    reflect_command,
    reminders_command,
    rename_command,
    settings_command,
    start_command,
    weekstart_command,
)
from goaltrio.bot.surface import TelegramSurface
from goaltrio.config import Config
from goaltrio.db.migrations import default_settings, run_migrations
from goaltrio.db.reminder_state import ReminderStateStore, Settings
from goaltrio.db.repository import Repository
from goaltrio.engine.background import BackgroundChecker
from goaltrio.engine.goals import GoalService
from goaltrio.engine.notifier import Notifier
from goaltrio.engine.reflection_reminder import ReflectionReminder
from goaltrio.utils.error_handler import error_handler

# Configure logging
logging.basicConfig(
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    level=getattr(logging, Config.LOG_LEVEL),
    stream=sys.stdout,
)

logger = logging.getLogger(__name__)


async def reflection_check_job(context: "ContextTypes.DEFAULT_TYPE") -> None:
    """Job callback for the periodic reflection check."""
    checker: BackgroundChecker = context.bot_data["background_checker"]
    await checker.tick()


async def post_init(application: Application) -> None:
    """Initialize bot resources after application is created."""
    week_start = int(Config.DEFAULT_WEEK_START)

    # Initialize database
    await run_migrations(
        Config.DATABASE_PATH,
        default_settings(week_start, Config.REFLECTION_PROMPT_DEFAULT),
    )

    repo = Repository(Config.DATABASE_PATH)
    await repo.connect()

    # One settings accessor shared by the goal quota and the reminder
    settings = Settings(repo, default_week_start=week_start)
    state = ReminderStateStore(repo)

    notifier = Notifier()
    notifier.subscribe(TelegramSurface(application.bot, settings))

    reminder = ReflectionReminder(state, settings, notifier)
    checker = BackgroundChecker(reminder, interval=Config.REFLECTION_CHECK_INTERVAL)

    application.bot_data.update(
        repo=repo,
        settings=settings,
        reminder_state=state,
        goals=GoalService(repo, settings),
        notifier=notifier,
        reflection_reminder=reminder,
        background_checker=checker,
    )

    # Catch up immediately in case we were suspended past a boundary
    await checker.tick()

    # Start the periodic check
    job_queue = application.job_queue
    if job_queue:
        job_queue.run_repeating(
            reflection_check_job,
            interval=Config.REFLECTION_CHECK_INTERVAL,
            first=Config.REFLECTION_CHECK_INTERVAL,
            name="reflection_check",
        )
        logger.info(
            f"Reflection check scheduled (interval: {Config.REFLECTION_CHECK_INTERVAL}s)"
        )
    else:
        logger.warning("Job queue unavailable, reflection prompts run only via /check")

    logger.info("GoalTrio initialized successfully")


async def post_shutdown(application: Application) -> None:
    """Cleanup resources on shutdown."""
    repo: Repository = application.bot_data.get("repo")
    if repo:
        await repo.close()

    logger.info("GoalTrio shut down")


def main() -> None:
    """Start the bot."""
    # Validate configuration
    try:
        Config.validate()
    except ValueError as e:
        logger.error(f"Configuration error: {e}")
        sys.exit(1)

    # Create application
    application = (
        Application.builder()
        .token(Config.TELEGRAM_BOT_TOKEN)
        .post_init(post_init)
        .post_shutdown(post_shutdown)
        .build()
    )

    # Commands
    application.add_handler(CommandHandler("start", start_command))
    application.add_handler(CommandHandler("help", help_command))
    application.add_handler(CommandHandler("goals", goals_command))
    application.add_handler(CommandHandler("add", add_command))
    application.add_handler(CommandHandler("done", done_command))
    application.add_handler(CommandHandler("delete", delete_command))
    application.add_handler(CommandHandler("rename", rename_command))

    # Reflection commands
    application.add_handler(CommandHandler("reflect", reflect_command))
    application.add_handler(CommandHandler("history", history_command))
    application.add_handler(CommandHandler("reminders", reminders_command))
    application.add_handler(CommandHandler("check", check_command))

    # Settings commands
    application.add_handler(CommandHandler("settings", settings_command))
    application.add_handler(CommandHandler("weekstart", weekstart_command))

    # Callback queries (buttons)
    application.add_handler(CallbackQueryHandler(callback_router))

    # Error handler
    application.add_error_handler(error_handler)

    # Start the bot
    logger.info("Starting GoalTrio bot...")
    application.run_polling(allowed_updates=["message", "callback_query"])


if __name__ == "__main__":
    main()
