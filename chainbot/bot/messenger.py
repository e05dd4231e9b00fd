"""Outbound calls to the Telegram Bot API.

Wraps python-telegram-bot's ``Bot`` for the two calls the dispatcher makes:
sending a message (optionally with an inline keyboard) and acknowledging a
callback query. Failures are logged and reported as ``False``; nothing is
retried.
"""

import logging

from telegram import Bot, InlineKeyboardButton, InlineKeyboardMarkup, WebAppInfo
from telegram.error import TelegramError

from ..models import Button, OutboundMessage
from .response_formatter import ResponseFormatter

logger = logging.getLogger(__name__)


def build_reply_markup(keyboard: list[list[Button]] | None) -> InlineKeyboardMarkup | None:
    """Convert keyboard rows into a Telegram inline keyboard.

    Args:
        keyboard: Rows of buttons, or None.

    Returns:
        InlineKeyboardMarkup, or None when there is nothing to attach.
    """
    if not keyboard:
        return None

    rows = []
    for row in keyboard:
        buttons = []
        for button in row:
            if button.web_app_url is not None:
                buttons.append(
                    InlineKeyboardButton(button.label, web_app=WebAppInfo(url=button.web_app_url))
                )
            else:
                buttons.append(InlineKeyboardButton(button.label, callback_data=button.callback_data))
        rows.append(buttons)
    return InlineKeyboardMarkup(rows)


class TelegramMessenger:
    """Sends formatted messages and callback acknowledgements."""

    def __init__(self, bot: Bot, formatter: ResponseFormatter) -> None:
        """Initialize messenger.

        Args:
            bot: python-telegram-bot client.
            formatter: Formatter applied to every outgoing text.
        """
        self.bot = bot
        self.formatter = formatter

    async def send(self, message: OutboundMessage) -> bool:
        """Send a message to a chat.

        Args:
            message: Message with unescaped text and optional keyboard.

        Returns:
            True if Telegram accepted the message, False otherwise.
        """
        text = self.formatter.format_text(message.text)
        try:
            sent = await self.bot.send_message(
                chat_id=message.chat_id,
                text=text,
                parse_mode=self.formatter.parse_mode,
                reply_markup=build_reply_markup(message.keyboard),
            )
        except TelegramError as e:
            logger.error(f"Error sending message to chat {message.chat_id}: {e}")
            return False

        logger.info(f"Message {getattr(sent, 'message_id', None)} sent to chat {message.chat_id}")
        return True

    async def acknowledge(self, callback_id: str) -> bool:
        """Acknowledge a callback query so the client stops its spinner.

        Args:
            callback_id: Identifier of the callback query.

        Returns:
            True on success, False if the call failed.
        """
        try:
            await self.bot.answer_callback_query(callback_query_id=callback_id)
        except TelegramError as e:
            logger.warning(f"Failed to answer callback query {callback_id}: {e}")
            return False
        return True
