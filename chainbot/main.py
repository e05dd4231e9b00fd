"""Application entry point.

Main module that validates configuration, wires the application container
and serves the Telegram webhook endpoint with aiohttp. Webhook registration
is a separate step, see ``chainbot.cli``.
"""

import logging
import os

from aiohttp import web

from .config import config
from .core.container import Container

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    """Configure root logging from the LOG_LEVEL environment variable."""
    logging.basicConfig(
        format="%(asctime)s - %(levelname)s - %(message)s",
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )
    # httpx logs every Bot API request URL, which contains the token
    logging.getLogger("httpx").setLevel(logging.WARNING)


def build_container() -> Container:
    """Create the container filled from the global configuration."""
    container = Container()
    container.config.from_dict(config.as_dict())
    return container


def create_app(container: Container) -> web.Application:
    """Build the web application and hook client lifecycles into it.

    Args:
        container: Configured application container.

    Returns:
        aiohttp application ready for ``web.run_app``.
    """
    app = container.web_app()

    async def on_startup(application: web.Application) -> None:
        await container.telegram_bot().initialize()
        logger.info("Telegram bot client initialized")

    async def on_cleanup(application: web.Application) -> None:
        await container.telegram_bot().shutdown()
        await container.openai_client().close()
        logger.info("External clients closed")

    app.on_startup.append(on_startup)
    app.on_cleanup.append(on_cleanup)
    return app


def main() -> None:
    """Main application entry point.

    Raises:
        RuntimeError: If TELEGRAM_BOT_TOKEN or OPENAI_API_KEY is not set.
    """
    configure_logging()

    if not config.bot.telegram_bot_token:
        raise RuntimeError("Set TELEGRAM_BOT_TOKEN environment variable")
    if not config.ai.api_key:
        raise RuntimeError("Set OPENAI_API_KEY environment variable")

    container = build_container()
    app = create_app(container)

    logger.info(
        f"Listening for webhooks on {config.bot.listen_host}:{config.bot.port}{config.bot.webhook_path}"
    )
    web.run_app(app, host=config.bot.listen_host, port=config.bot.port)


if __name__ == "__main__":
    main()
