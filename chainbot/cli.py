"""Webhook registration command line tool.

Points Telegram at the deployed webhook endpoint or prints the current
webhook state:

    chainbot-webhook --env prod
    chainbot-webhook --url https://example.com/api/telegram-webhook
    chainbot-webhook --info
"""

import argparse
import asyncio
import logging
import sys

from telegram import Bot
from telegram.error import TelegramError

from .config import BotConfig

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(description="Manage the Telegram webhook of the chain bot")
    parser.add_argument("-e", "--env", help="Set environment (dev/prod)")
    parser.add_argument("-u", "--url", help="Set custom webhook URL")
    parser.add_argument("-i", "--info", action="store_true", help="Get current webhook info")
    return parser


def resolve_webhook_url(args: argparse.Namespace, bot_config: BotConfig) -> str | None:
    """Pick the webhook URL from the arguments.

    Args:
        args: Parsed command line arguments.
        bot_config: Bot settings holding the dev/prod URLs.

    Returns:
        The URL to register, or None if no target was given.

    Raises:
        ValueError: If ``--env`` is neither dev nor prod.
    """
    if args.url:
        return args.url
    if args.env:
        env = args.env.lower()
        if env == "dev":
            return bot_config.dev_webhook_url
        if env == "prod":
            return bot_config.prod_webhook_url
        raise ValueError('Invalid environment. Use "dev" or "prod".')
    return None


async def print_webhook_info(bot: Bot) -> None:
    """Log the webhook Telegram currently delivers to."""
    try:
        info = await bot.get_webhook_info()
    except TelegramError as e:
        logger.error(f"Error getting webhook info: {e}")
        return
    logger.info(f"Current webhook info: {info.to_dict()}")


async def set_webhook(bot: Bot, url: str) -> bool:
    """Register the webhook URL.

    Returns:
        True if Telegram accepted the URL.
    """
    try:
        result = await bot.set_webhook(url=url)
    except TelegramError as e:
        logger.error(f"Error setting webhook: {e}")
        return False
    logger.info(f"Webhook set successfully: {result}")
    return bool(result)


async def run(args: argparse.Namespace, bot_config: BotConfig) -> int:
    """Execute the requested action.

    Returns:
        Process exit code.
    """
    if not bot_config.telegram_bot_token:
        logger.error("TELEGRAM_BOT_TOKEN is not set")
        return 1

    try:
        url = None if args.info else resolve_webhook_url(args, bot_config)
    except ValueError as e:
        logger.error(str(e))
        return 1

    if not args.info and not url:
        logger.error("No URL or environment specified. Use --help for usage information.")
        return 1

    async with Bot(token=bot_config.telegram_bot_token) as bot:
        if url:
            logger.info(f"Setting webhook to: {url}")
            await set_webhook(bot, url)
            logger.info("Updated webhook info:")
        await print_webhook_info(bot)

    return 0


def main(argv: list[str] | None = None) -> int:
    """Console script entry point."""
    logging.basicConfig(format="%(asctime)s - %(levelname)s - %(message)s", level=logging.INFO)
    logging.getLogger("httpx").setLevel(logging.WARNING)

    args = build_parser().parse_args(argv)
    return asyncio.run(run(args, BotConfig()))


if __name__ == "__main__":
    sys.exit(main())
