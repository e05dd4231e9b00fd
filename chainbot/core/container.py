"""Dependency-injection container.

This module defines a dependency-injection (DI) container that wires together
the application's components: external clients, services, the dispatcher and
the aiohttp web application serving the webhook.
"""

from dependency_injector import containers, providers
from openai import AsyncOpenAI
from telegram import Bot

from chainbot.bot.dispatcher import UpdateDispatcher
from chainbot.bot.messenger import TelegramMessenger
from chainbot.bot.response_formatter import ResponseFormatter
from chainbot.bot.webhook import create_web_app
from chainbot.services.completion import CompletionService
from chainbot.services.price import PriceService
from chainbot.services.session_store import InMemorySessionStore
from chainbot.services.wallet import WalletService


class Container(containers.DeclarativeContainer):
    """DI container for the application.

    Fill ``config`` with ``Config.as_dict()`` before resolving providers.
    """

    config = providers.Configuration()

    # External clients
    telegram_bot = providers.Singleton(Bot, token=config.bot.telegram_bot_token)
    openai_client = providers.Singleton(
        AsyncOpenAI, api_key=config.ai.api_key, base_url=config.ai.base_url
    )

    # Services
    session_store = providers.Singleton(InMemorySessionStore)
    wallet_service = providers.Singleton(WalletService)
    price_service = providers.Singleton(
        PriceService, base_url=config.price.base_url, timeout=config.price.timeout
    )
    completion_service = providers.Singleton(
        CompletionService,
        client=openai_client,
        price_service=price_service,
        model=config.ai.model,
        tools_enabled=config.features.tool_calling,
    )

    # Bot components
    response_formatter = providers.Singleton(ResponseFormatter, mode=config.features.escape_mode)
    messenger = providers.Singleton(
        TelegramMessenger, bot=telegram_bot, formatter=response_formatter
    )
    dispatcher = providers.Singleton(
        UpdateDispatcher,
        messenger=messenger,
        session_store=session_store,
        wallet_service=wallet_service,
        completion_service=completion_service,
        chains=config.chains,
        mini_app_url=config.bot.mini_app_url,
        chain_keyboard_enabled=config.features.chain_keyboard,
        wallets_enabled=config.features.wallets,
        show_key_on_start=config.features.show_key_on_start,
    )

    web_app = providers.Factory(
        create_web_app, dispatcher=dispatcher, webhook_path=config.bot.webhook_path
    )
