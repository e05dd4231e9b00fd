"""Webhook update dispatcher.

Classifies each inbound update as a text message or a callback query and
routes it to the matching handler: built-in commands answer with a keyboard,
free text goes to the AI completion service. Exceptions raised inside a
handler are logged and answered with a generic failure message; callback
queries are always acknowledged once.
"""

import logging

from ..models import CallbackQuery, OutboundMessage, TelegramUpdate, TextMessage
from ..services.completion import CompletionService
from ..services.session_store import SessionStore
from ..services.wallet import WalletService
from .commands import CallbackAction, CallbackKind, Command
from .keyboards import chain_keyboard, dock_keyboard, wallet_keyboard
from .messages import (
    CHAIN_SET_MESSAGE,
    CHOOSE_CHAIN_MESSAGE,
    DOCK_MESSAGE,
    DOCK_UNAVAILABLE_MESSAGE,
    GENERIC_ERROR_MESSAGE,
    NO_WALLET_MESSAGE,
    PRIVATE_KEY_MESSAGE,
    UNKNOWN_CHAIN_MESSAGE,
    WALLET_CREATED_FOOTER,
    WALLET_CREATED_KEY_LINE,
    WALLET_CREATED_MESSAGE,
    WALLET_DELETED_MESSAGE,
    WELCOME_MESSAGE,
)
from .messenger import TelegramMessenger

logger = logging.getLogger(__name__)


class UpdateDispatcher:
    """Routes Telegram updates to command, callback and AI handlers."""

    def __init__(
        self,
        messenger: TelegramMessenger,
        session_store: SessionStore,
        wallet_service: WalletService,
        completion_service: CompletionService,
        chains: dict[str, str],
        mini_app_url: str | None = None,
        chain_keyboard_enabled: bool = True,
        wallets_enabled: bool = True,
        show_key_on_start: bool = False,
    ) -> None:
        """Initialize dispatcher.

        Args:
            messenger: Outbound Telegram client.
            session_store: Wallet storage keyed by chat id.
            wallet_service: Wallet generator used by /start.
            completion_service: AI backend for free-form text.
            chains: Chain key to display name mapping for /setchain.
            mini_app_url: Mini App opened by /dock, None if not deployed.
            chain_keyboard_enabled: Whether /setchain is a built-in command.
            wallets_enabled: Whether /start creates a wallet.
            show_key_on_start: Whether the /start reply includes the private key.
        """
        self.messenger = messenger
        self.session_store = session_store
        self.wallet_service = wallet_service
        self.completion_service = completion_service
        self.chains = dict(chains)
        self.mini_app_url = mini_app_url
        self.chain_keyboard_enabled = chain_keyboard_enabled
        self.wallets_enabled = wallets_enabled
        self.show_key_on_start = show_key_on_start

    async def dispatch(self, payload: dict) -> None:
        """Handle one raw webhook payload.

        Payloads that are neither a text message nor a callback query with
        data are ignored. Callback queries are acknowledged even when they
        cannot be routed.

        Args:
            payload: Decoded JSON body of the webhook request.
        """
        try:
            update = TelegramUpdate.model_validate(payload)
        except ValueError as e:
            logger.info(f"Ignoring unrecognised update: {e}")
            return

        event = update.to_event()
        if isinstance(event, TextMessage):
            await self.handle_text(event)
        elif isinstance(event, CallbackQuery):
            await self.handle_callback(event)
        elif update.callback_query is not None:
            # Inline-mode and game button presses carry no routable chat or data
            logger.debug(f"Acknowledging unroutable callback query {update.callback_query.id}")
            await self.messenger.acknowledge(update.callback_query.id)
        else:
            logger.debug(f"Ignoring update {update.update_id} without text or callback data")

    # === TEXT MESSAGES ===

    async def handle_text(self, message: TextMessage) -> None:
        """Answer a text message from a chat."""
        command = Command.parse(message.text)
        if command is Command.SET_CHAIN and not self.chain_keyboard_enabled:
            command = None

        try:
            if command is Command.START:
                reply = await self._start(message.chat_id)
            elif command is Command.SET_CHAIN:
                reply = self._set_chain(message.chat_id)
            elif command is Command.DOCK:
                reply = self._dock(message.chat_id)
            else:
                text = await self.completion_service.reply(message.text)
                reply = OutboundMessage(chat_id=message.chat_id, text=text)
        except Exception as e:
            logger.error(f"Error handling message in chat {message.chat_id}: {e}", exc_info=True)
            reply = OutboundMessage(chat_id=message.chat_id, text=GENERIC_ERROR_MESSAGE)

        await self.messenger.send(reply)

    async def _start(self, chat_id: int) -> OutboundMessage:
        if not self.wallets_enabled:
            return OutboundMessage(chat_id=chat_id, text=WELCOME_MESSAGE)

        async with self.session_store.lock(chat_id):
            wallet = self.wallet_service.create_wallet()
            await self.session_store.put(chat_id, wallet)
        logger.info(f"Created wallet for chat {chat_id}")

        text = WALLET_CREATED_MESSAGE.format(address=wallet.address)
        if self.show_key_on_start:
            text += WALLET_CREATED_KEY_LINE.format(private_key=wallet.private_key)
        text += WALLET_CREATED_FOOTER

        return OutboundMessage(chat_id=chat_id, text=text, keyboard=wallet_keyboard())

    def _set_chain(self, chat_id: int) -> OutboundMessage:
        return OutboundMessage(
            chat_id=chat_id,
            text=CHOOSE_CHAIN_MESSAGE,
            keyboard=chain_keyboard(self.chains),
        )

    def _dock(self, chat_id: int) -> OutboundMessage:
        if not self.mini_app_url:
            return OutboundMessage(chat_id=chat_id, text=DOCK_UNAVAILABLE_MESSAGE)
        return OutboundMessage(
            chat_id=chat_id,
            text=DOCK_MESSAGE,
            keyboard=dock_keyboard(self.mini_app_url),
        )

    # === CALLBACK QUERIES ===

    async def handle_callback(self, query: CallbackQuery) -> None:
        """Answer an inline button press and acknowledge it."""
        action = CallbackAction.parse(query.data)

        try:
            reply = await self._callback_reply(query.chat_id, action)
        except Exception as e:
            logger.error(f"Error handling callback in chat {query.chat_id}: {e}", exc_info=True)
            reply = OutboundMessage(chat_id=query.chat_id, text=GENERIC_ERROR_MESSAGE)

        if reply is not None:
            await self.messenger.send(reply)
        else:
            logger.debug(f"No reply for callback data {query.data!r}")

        await self.messenger.acknowledge(query.callback_id)

    async def _callback_reply(
        self, chat_id: int, action: CallbackAction | None
    ) -> OutboundMessage | None:
        if action is None:
            return None

        if action.kind is CallbackKind.SHOW_KEY:
            wallet = await self.session_store.get(chat_id)
            if wallet is None:
                return OutboundMessage(chat_id=chat_id, text=NO_WALLET_MESSAGE)
            return OutboundMessage(
                chat_id=chat_id,
                text=PRIVATE_KEY_MESSAGE.format(private_key=wallet.private_key),
            )

        if action.kind is CallbackKind.DELETE_WALLET:
            async with self.session_store.lock(chat_id):
                deleted = await self.session_store.delete(chat_id)
            if not deleted:
                return OutboundMessage(chat_id=chat_id, text=NO_WALLET_MESSAGE)
            logger.info(f"Deleted wallet for chat {chat_id}")
            return OutboundMessage(chat_id=chat_id, text=WALLET_DELETED_MESSAGE)

        chain_name = self.chains.get(action.argument)
        if chain_name is None:
            return OutboundMessage(chat_id=chat_id, text=UNKNOWN_CHAIN_MESSAGE)
        logger.info(f"Chat {chat_id} selected chain {action.argument}")
        return OutboundMessage(chat_id=chat_id, text=CHAIN_SET_MESSAGE.format(chain=chain_name))
