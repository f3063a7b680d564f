"""Restrict the bot to the chat that registered with /start."""

import functools
import logging

from telegram import Update
from telegram.ext import ContextTypes

from goaltrio.db.reminder_state import Settings

logger = logging.getLogger(__name__)

NOT_REGISTERED = "Please /start the bot first."
NOT_AUTHORISED = "⛔ Not authorised. This bot belongs to another chat."


def owner_only(handler):
    """Reject updates from any chat other than the registered owner."""

    @functools.wraps(handler)
    async def wrapper(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        settings: Settings = context.bot_data["settings"]
        owner = await settings.owner_chat_id()
        chat_id = update.effective_chat.id if update.effective_chat else None

        if owner is not None and chat_id == owner:
            return await handler(update, context)

        logger.warning(f"Rejected {handler.__name__} from chat {chat_id}")
        reply = NOT_REGISTERED if owner is None else NOT_AUTHORISED

        if update.callback_query:
            await update.callback_query.answer(reply)
        elif update.effective_message:
            await update.effective_message.reply_text(reply)

    return wrapper
