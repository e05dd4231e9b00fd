"""Global test configuration and fixtures.

Provides shared fixtures for all test levels: environment setup, Telegram
update payload builders, and a dispatcher wired to mocked outbound clients.
No test talks to the network.
"""

import os
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

from chainbot.bot.dispatcher import UpdateDispatcher
from chainbot.bot.messenger import TelegramMessenger
from chainbot.bot.response_formatter import ResponseFormatter
from chainbot.config import DEFAULT_CHAINS, EscapeMode
from chainbot.services.completion import CompletionService
from chainbot.services.session_store import InMemorySessionStore
from chainbot.services.wallet import WalletService

# Test constants
TEST_BOT_TOKEN = os.getenv("TEST_BOT_TOKEN", "123456:TEST-token-placeholder")
TEST_CHAT_ID = 4242
TEST_MINI_APP_URL = "https://dock.example.com"


@pytest.fixture(autouse=True)
def test_environment():
    """Setup test environment variables for all tests."""
    test_env = {
        "TELEGRAM_BOT_TOKEN": TEST_BOT_TOKEN,
        "OPENAI_API_KEY": "sk-test",
        "LOG_LEVEL": "DEBUG",
    }

    # Store original values
    original_env = {}
    for key, value in test_env.items():
        original_env[key] = os.environ.get(key)
        os.environ[key] = value

    yield

    # Restore original values
    for key, original_value in original_env.items():
        if original_value is None:
            os.environ.pop(key, None)
        else:
            os.environ[key] = original_value


def make_text_update(text: str, chat_id: int = TEST_CHAT_ID, update_id: int = 1) -> dict:
    """Telegram update payload for a text message."""
    return {
        "update_id": update_id,
        "message": {
            "message_id": 10,
            "date": 1700000000,
            "from": {"id": chat_id, "is_bot": False, "first_name": "Test"},
            "chat": {"id": chat_id, "type": "private"},
            "text": text,
        },
    }


def make_callback_update(
    data: str, chat_id: int = TEST_CHAT_ID, callback_id: str = "cb-1", update_id: int = 2
) -> dict:
    """Telegram update payload for an inline button press."""
    return {
        "update_id": update_id,
        "callback_query": {
            "id": callback_id,
            "from": {"id": chat_id, "is_bot": False, "first_name": "Test"},
            "chat_instance": "instance",
            "data": data,
            "message": {
                "message_id": 11,
                "date": 1700000000,
                "chat": {"id": chat_id, "type": "private"},
                "text": "Please choose a chain:",
            },
        },
    }


@pytest.fixture
def mock_bot():
    """Mock python-telegram-bot Bot with async API methods."""
    bot = MagicMock()
    bot.send_message = AsyncMock(return_value=SimpleNamespace(message_id=99))
    bot.answer_callback_query = AsyncMock(return_value=True)
    return bot


@pytest.fixture
def messenger(mock_bot):
    """Messenger using the default escaping mode and the mocked bot."""
    return TelegramMessenger(bot=mock_bot, formatter=ResponseFormatter(EscapeMode.MARKDOWN_V2))


@pytest.fixture
def session_store():
    """Empty in-memory session store."""
    return InMemorySessionStore()


@pytest.fixture
def completion_service():
    """Completion service with its reply method mocked."""
    service = MagicMock(spec=CompletionService)
    service.reply = AsyncMock(return_value="AI says hi")
    return service


@pytest.fixture
def make_dispatcher(messenger, session_store, completion_service):
    """Factory building a dispatcher with mocked outbound clients."""

    def _make(**overrides) -> UpdateDispatcher:
        options = {
            "messenger": messenger,
            "session_store": session_store,
            "wallet_service": WalletService(),
            "completion_service": completion_service,
            "chains": dict(DEFAULT_CHAINS),
            "mini_app_url": TEST_MINI_APP_URL,
        }
        options.update(overrides)
        return UpdateDispatcher(**options)

    return _make


def sent_texts(mock_bot) -> list[str]:
    """Texts passed to every send_message call, in order."""
    return [call.kwargs["text"] for call in mock_bot.send_message.await_args_list]


@pytest.fixture
def text_update():
    """Builder for text message payloads."""
    return make_text_update


@pytest.fixture
def callback_update():
    """Builder for callback query payloads."""
    return make_callback_update


@pytest.fixture
def sent_messages(mock_bot):
    """Callable returning texts sent through the mocked bot so far."""
    return lambda: sent_texts(mock_bot)
