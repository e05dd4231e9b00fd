"""Configuration management for the chain bot.

Handles all application configuration including environment variables, the
YAML config file, and default settings. Provides structured configuration
classes for the webhook server, the AI completion backend, the price API and
the feature switches that select between handler variants.
"""

from enum import Enum
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field
from pydantic_settings import BaseSettings

DEFAULT_CHAINS: dict[str, str] = {
    "ethereum": "Ethereum",
    "polygon": "Polygon",
    "linea": "Linea",
    "airdao": "AirDAO",
}


class EscapeMode(str, Enum):
    """How outgoing text is prepared for Telegram.

    Attributes:
        PLAIN: Send text untouched without a parse mode.
        MARKDOWN_V2: Escape reserved MarkdownV2 characters.
        MARKDOWN_V2_COLLAPSE_DASHES: Same as MARKDOWN_V2, then unescape dash runs.
    """

    PLAIN = "plain"
    MARKDOWN_V2 = "markdown_v2"
    MARKDOWN_V2_COLLAPSE_DASHES = "markdown_v2_collapse_dashes"


class BotConfig(BaseSettings):
    """Telegram bot and webhook server configuration.

    Attributes:
        telegram_bot_token: Telegram bot API token from environment.
        port: Server port for the webhook listener.
        listen_host: Interface the webhook listener binds to.
        webhook_path: HTTP path Telegram posts updates to.
        mini_app_url: URL of the Telegram Mini App opened by /dock.
        dev_webhook_url: Public webhook URL of the development deployment.
        prod_webhook_url: Public webhook URL of the production deployment.
    """

    telegram_bot_token: str = Field(default="", validation_alias="TELEGRAM_BOT_TOKEN")
    port: int = Field(default=8000, validation_alias="PORT")
    listen_host: str = Field(default="127.0.0.1", validation_alias="BOT_LISTEN_HOST")
    webhook_path: str = Field(default="/api/telegram-webhook", validation_alias="WEBHOOK_PATH")
    mini_app_url: str | None = Field(default=None, validation_alias="MINI_APP_URL")
    dev_webhook_url: str | None = Field(default=None, validation_alias="DEV_WEBHOOK_URL")
    prod_webhook_url: str | None = Field(default=None, validation_alias="PROD_WEBHOOK_URL")


class AIConfig(BaseSettings):
    """OpenAI-compatible completion backend settings.

    Attributes:
        api_key: API key for the completion endpoint.
        base_url: Base URL of the OpenAI-compatible API.
        model: Model identifier sent with every completion request.
    """

    api_key: str = Field(default="", validation_alias="OPENAI_API_KEY")
    base_url: str = Field(default="https://api.red-pill.ai/v1", validation_alias="OPENAI_BASE_URL")
    model: str = Field(default="gpt-3.5-turbo", validation_alias="OPENAI_MODEL")


class PriceConfig(BaseSettings):
    """Price lookup API settings.

    Attributes:
        base_url: Base URL of the CoinGecko-compatible API.
        timeout: HTTP request timeout in seconds.
    """

    base_url: str = Field(default="https://api.coingecko.com/api/v3", validation_alias="PRICE_API_URL")
    timeout: int = Field(default=20, validation_alias="HTTP_TIMEOUT")


class FeatureConfig(BaseSettings):
    """Feature switches selecting between handler variants.

    Attributes:
        escape_mode: Markup escaping applied to every outgoing message.
        chain_keyboard: Whether /setchain shows the chain keyboard.
        tool_calling: Whether the AI may call the price lookup tool.
        wallets: Whether /start generates a wallet.
        show_key_on_start: Whether the /start reply includes the private key.
    """

    escape_mode: EscapeMode = Field(
        default=EscapeMode.MARKDOWN_V2_COLLAPSE_DASHES, validation_alias="ESCAPE_MODE"
    )
    chain_keyboard: bool = Field(default=True, validation_alias="CHAIN_KEYBOARD_ENABLED")
    tool_calling: bool = Field(default=True, validation_alias="TOOL_CALLING_ENABLED")
    wallets: bool = Field(default=True, validation_alias="WALLETS_ENABLED")
    show_key_on_start: bool = Field(default=False, validation_alias="SHOW_KEY_ON_START")


class Config:
    """Application configuration manager.

    Centralizes loading of environment variables, the YAML chain table and
    default values. Provides typed access to configuration sections for the
    different application components.
    """

    def __init__(self, config_dir: Path | None = None):
        """Initialize configuration manager.

        Args:
            config_dir: Path to configuration directory, defaults to chainbot/config.
        """
        if config_dir is None:
            config_dir = Path(__file__).parent / "config"

        self.config_dir = Path(config_dir)

        self.bot = BotConfig()
        self.ai = AIConfig()
        self.price = PriceConfig()
        self.features = FeatureConfig()

        # Chain table, falls back to the built-in list
        chains_data = self._load_yaml("chains.yml")
        chains = chains_data.get("chains") or {}
        self.chains: dict[str, str] = (
            {str(key): str(name) for key, name in chains.items()} if chains else dict(DEFAULT_CHAINS)
        )

    def _load_yaml(self, filename: str) -> dict[str, Any]:
        """Load a YAML mapping from the configuration directory.

        Args:
            filename: File name inside the configuration directory.

        Returns:
            Parsed mapping, empty when the file is missing or empty.
        """
        path = self.config_dir / filename
        if not path.exists():
            return {}

        with open(path) as f:
            data = yaml.safe_load(f)

        return data or {}

    def as_dict(self) -> dict[str, Any]:
        """Dump all sections for the dependency-injection container.

        Returns:
            Nested dictionary keyed by section name.
        """
        return {
            "bot": self.bot.model_dump(),
            "ai": self.ai.model_dump(),
            "price": self.price.model_dump(),
            "features": self.features.model_dump(mode="json"),
            "chains": dict(self.chains),
        }


# Global configuration instance
config = Config()
