"""Data models for the chain bot application.

Defines Pydantic models for the inbound Telegram update payload, the two
update variants the dispatcher understands, wallet records and outbound
messages with their inline keyboards. Inbound models ignore unknown fields so
any Telegram update shape validates.
"""

from pydantic import BaseModel, ConfigDict, model_validator


class TextMessage(BaseModel):
    """Plain text message sent to the bot.

    Attributes:
        chat_id: Chat the message came from.
        text: Raw message text.
    """

    chat_id: int
    text: str


class CallbackQuery(BaseModel):
    """Inline keyboard button press.

    Attributes:
        chat_id: Chat of the message carrying the keyboard.
        data: Opaque callback data attached to the pressed button.
        callback_id: Identifier that must be acknowledged.
    """

    chat_id: int
    data: str
    callback_id: str


class WalletRecord(BaseModel):
    """Throwaway wallet generated for a chat.

    Attributes:
        address: Checksummed public address.
        private_key: Hex encoded private key with 0x prefix.
    """

    address: str
    private_key: str


class Button(BaseModel):
    """Inline keyboard button.

    Exactly one of ``callback_data`` and ``web_app_url`` is set.

    Attributes:
        label: Text shown on the button.
        callback_data: Data sent back in a callback query when pressed.
        web_app_url: Mini App opened when pressed.
    """

    label: str
    callback_data: str | None = None
    web_app_url: str | None = None

    @model_validator(mode="after")
    def _check_single_target(self) -> "Button":
        if (self.callback_data is None) == (self.web_app_url is None):
            raise ValueError("Button needs exactly one of callback_data or web_app_url")
        return self


class OutboundMessage(BaseModel):
    """Message queued for the Telegram sendMessage call.

    Attributes:
        chat_id: Destination chat.
        text: Unescaped message text.
        keyboard: Rows of inline buttons, None for no keyboard.
    """

    chat_id: int
    text: str
    keyboard: list[list[Button]] | None = None


# Inbound Telegram payload


class _TelegramModel(BaseModel):
    model_config = ConfigDict(extra="ignore")


class TelegramChat(_TelegramModel):
    id: int


class TelegramMessage(_TelegramModel):
    chat: TelegramChat
    text: str | None = None


class TelegramCallbackQuery(_TelegramModel):
    id: str
    data: str | None = None
    message: TelegramMessage | None = None


class TelegramUpdate(_TelegramModel):
    """Subset of a Telegram Update the bot reacts to.

    Attributes:
        update_id: Sequential update identifier.
        message: New incoming message, if any.
        callback_query: New incoming callback query, if any.
    """

    update_id: int | None = None
    message: TelegramMessage | None = None
    callback_query: TelegramCallbackQuery | None = None

    def to_event(self) -> TextMessage | CallbackQuery | None:
        """Convert the payload into the variant the dispatcher handles.

        Returns:
            TextMessage for text messages, CallbackQuery for button presses
            carrying data and a chat, None for everything else.
        """
        if self.message is not None and self.message.text is not None:
            return TextMessage(chat_id=self.message.chat.id, text=self.message.text)

        query = self.callback_query
        if query is not None and query.data is not None and query.message is not None:
            return CallbackQuery(
                chat_id=query.message.chat.id,
                data=query.data,
                callback_id=query.id,
            )

        return None
