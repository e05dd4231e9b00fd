"""AI chat completion service.

Forwards user text to an OpenAI-compatible chat completion endpoint. With
tool calling enabled the model is offered a single ``get_crypto_price`` tool;
when the model asks for it, the price lookup result replaces the model text.
Every failure turns into a fixed apology, nothing is raised to the caller.
"""

import json
import logging
from decimal import Decimal
from typing import Any

from openai import AsyncOpenAI, OpenAIError

from ..bot.messages import AI_ERROR_MESSAGE, PRICE_MESSAGE, PRICE_NOT_FOUND_MESSAGE
from .price import PriceLookupError, PriceService

logger = logging.getLogger(__name__)

PRICE_TOOL_NAME = "get_crypto_price"

PRICE_TOOL: dict[str, Any] = {
    "type": "function",
    "function": {
        "name": PRICE_TOOL_NAME,
        "description": "Get the current price of a cryptocurrency in USD",
        "parameters": {
            "type": "object",
            "properties": {
                "crypto": {
                    "type": "string",
                    "description": "The cryptocurrency id, e.g. bitcoin or ethereum",
                },
            },
            "required": ["crypto"],
        },
    },
}


def format_price(price: Decimal) -> str:
    """Render a USD price without exponent notation."""
    if price >= 1:
        return f"{price:.2f}"
    return format(price.normalize(), "f")


class CompletionService:
    """Chat completion client with optional price tool."""

    def __init__(
        self,
        client: AsyncOpenAI,
        price_service: PriceService,
        model: str = "gpt-3.5-turbo",
        tools_enabled: bool = True,
    ) -> None:
        """Initialize completion service.

        Args:
            client: OpenAI-compatible async client.
            price_service: Price lookup used to answer tool calls.
            model: Model identifier sent with each request.
            tools_enabled: Whether to advertise the price tool.
        """
        self.client = client
        self.price_service = price_service
        self.model = model
        self.tools_enabled = tools_enabled

    async def reply(self, text: str) -> str:
        """Get the AI answer for a user message.

        Args:
            text: User message, forwarded verbatim.

        Returns:
            Model text, formatted price for tool calls, or the apology text.
        """
        request: dict[str, Any] = {
            "model": self.model,
            "messages": [{"role": "user", "content": text}],
        }
        if self.tools_enabled:
            request["tools"] = [PRICE_TOOL]
            request["tool_choice"] = "auto"

        try:
            completion = await self.client.chat.completions.create(**request)
            if not completion.choices:
                logger.error("AI response had no choices")
                return AI_ERROR_MESSAGE
            message = completion.choices[0].message

            tool_call = self._find_price_tool_call(message)
            if tool_call is not None:
                return await self._answer_price_call(tool_call.function.arguments)

            content = message.content
        except (
            OpenAIError,
            PriceLookupError,
            IndexError,
            KeyError,
            AttributeError,
            TypeError,
            ValueError,
        ) as e:
            logger.error(f"Error getting AI response: {e}")
            return AI_ERROR_MESSAGE

        if not content:
            logger.warning("AI response had no content")
            return AI_ERROR_MESSAGE
        return content

    def _find_price_tool_call(self, message: Any) -> Any | None:
        """Return the first price tool call of a completion message."""
        if not self.tools_enabled:
            return None
        for tool_call in getattr(message, "tool_calls", None) or []:
            if tool_call.type == "function" and tool_call.function.name == PRICE_TOOL_NAME:
                return tool_call
        return None

    async def _answer_price_call(self, arguments: str) -> str:
        """Run the price tool with the model-supplied arguments.

        Raises:
            ValueError: If arguments are not a JSON object with ``crypto``.
            PriceLookupError: If the price API fails.
        """
        parsed = json.loads(arguments or "{}")
        if not isinstance(parsed, dict) or not str(parsed.get("crypto", "")).strip():
            raise ValueError(f"Bad {PRICE_TOOL_NAME} arguments: {arguments!r}")

        crypto = str(parsed["crypto"]).strip()
        logger.info(f"Model requested price of {crypto}")

        price = await self.price_service.get_usd_price(crypto)
        if price is None:
            return PRICE_NOT_FOUND_MESSAGE.format(crypto=crypto)
        return PRICE_MESSAGE.format(crypto=crypto, price=format_price(price))
