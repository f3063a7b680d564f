"""Telegram chat as a reflection prompt surface."""

import logging

from telegram import Bot

from goaltrio.bot.formatters import format_reflection_prompt
from goaltrio.bot.keyboards import reflection_prompt_keyboard
from goaltrio.db.reminder_state import Settings
from goaltrio.engine.notifier import PeriodChangeEvent

logger = logging.getLogger(__name__)


class TelegramSurface:
    """Sends reflection prompts to the owner's chat and pins them."""

    def __init__(self, bot: Bot, settings: Settings):
        self.bot = bot
        self.settings = settings
        self._pending: tuple[int, int] | None = None

    async def on_period_change(self, event: PeriodChangeEvent) -> None:
        chat_id = await self.settings.owner_chat_id()
        if chat_id is None:
            logger.info("No owner chat registered, reflection prompt not sent")
            return

        message = await self.bot.send_message(
            chat_id=chat_id,
            text=format_reflection_prompt(event),
            parse_mode="HTML",
            reply_markup=reflection_prompt_keyboard(event),
        )
        self._pending = (chat_id, message.message_id)

    async def present(self) -> None:
        """Pin the last prompt so it stays on top of the chat."""
        if self._pending is None:
            return
        chat_id, message_id = self._pending
        self._pending = None
        await self.bot.pin_chat_message(
            chat_id=chat_id, message_id=message_id, disable_notification=True
        )
