"""Global error handler for the bot."""

import logging
import traceback

from telegram import Update
from telegram.ext import ContextTypes

from goaltrio.errors import StorageUnavailable

logger = logging.getLogger(__name__)


def user_error_message(error: BaseException | None) -> str:
    """Pick the message shown to the user for an unhandled error."""
    if isinstance(error, StorageUnavailable):
        return (
            "💾 I couldn't reach my storage just now.\n\n"
            "Please try again in a moment."
        )
    if "Timeout" in str(error):
        return "⏱️ Request timed out.\n\nPlease try again in a moment."
    if "Network" in str(error):
        return "🌐 Network error.\n\nPlease check your connection and try again."
    return (
        "😅 Oops! Something went wrong.\n\n"
        "The error has been logged. Please try again or use /help for assistance."
    )


async def error_handler(update: object, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle errors in the bot."""
    logger.error("Exception while handling an update:", exc_info=context.error)

    tb_list = traceback.format_exception(None, context.error, context.error.__traceback__)
    logger.error(f"Traceback:\n{''.join(tb_list)}")

    if isinstance(update, Update) and update.effective_message:
        try:
            await update.effective_message.reply_text(user_error_message(context.error))
        except Exception as e:
            logger.error(f"Failed to send error message to user: {e}")
