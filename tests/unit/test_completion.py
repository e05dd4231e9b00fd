"""Tests for the AI completion service and its price tool."""

import json
import re
from decimal import Decimal
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import httpx
import openai
import pytest

from chainbot.bot.messages import AI_ERROR_MESSAGE
from chainbot.services.completion import PRICE_TOOL_NAME, CompletionService, format_price
from chainbot.services.price import PriceLookupError, PriceService


def _completion(content=None, tool_calls=None):
    message = SimpleNamespace(content=content, tool_calls=tool_calls)
    return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def _tool_call(arguments: dict | str, name: str = PRICE_TOOL_NAME):
    if not isinstance(arguments, str):
        arguments = json.dumps(arguments)
    return SimpleNamespace(
        id="call_1",
        type="function",
        function=SimpleNamespace(name=name, arguments=arguments),
    )


@pytest.fixture
def openai_client():
    client = MagicMock()
    client.chat.completions.create = AsyncMock()
    return client


@pytest.fixture
def price_service():
    service = MagicMock(spec=PriceService)
    service.get_usd_price = AsyncMock(return_value=Decimal("64250.5"))
    return service


class TestCompletionService:
    @pytest.mark.asyncio
    async def test_plain_reply(self, openai_client, price_service) -> None:
        openai_client.chat.completions.create.return_value = _completion("Hello there!")
        service = CompletionService(openai_client, price_service, tools_enabled=False)

        assert await service.reply("hi") == "Hello there!"

        kwargs = openai_client.chat.completions.create.await_args.kwargs
        assert kwargs["model"] == "gpt-3.5-turbo"
        assert kwargs["messages"] == [{"role": "user", "content": "hi"}]
        assert "tools" not in kwargs

    @pytest.mark.asyncio
    async def test_tools_are_advertised(self, openai_client, price_service) -> None:
        openai_client.chat.completions.create.return_value = _completion("ok")
        service = CompletionService(openai_client, price_service, model="gpt-4o-mini")

        await service.reply("what's up")

        kwargs = openai_client.chat.completions.create.await_args.kwargs
        assert kwargs["model"] == "gpt-4o-mini"
        assert [tool["function"]["name"] for tool in kwargs["tools"]] == [PRICE_TOOL_NAME]

    @pytest.mark.asyncio
    async def test_price_tool_call_returns_price(self, openai_client, price_service) -> None:
        openai_client.chat.completions.create.return_value = _completion(
            tool_calls=[_tool_call({"crypto": "bitcoin"})]
        )
        service = CompletionService(openai_client, price_service)

        reply = await service.reply("How much is BTC?")

        assert re.search(r"current price of bitcoin is \$\d+(\.\d+)?$", reply)
        price_service.get_usd_price.assert_awaited_once_with("bitcoin")

    @pytest.mark.asyncio
    async def test_unknown_asset(self, openai_client, price_service) -> None:
        price_service.get_usd_price.return_value = None
        openai_client.chat.completions.create.return_value = _completion(
            tool_calls=[_tool_call({"crypto": "dogwifrock"})]
        )
        service = CompletionService(openai_client, price_service)

        reply = await service.reply("price of dogwifrock")

        assert "couldn't find the price for dogwifrock" in reply

    @pytest.mark.asyncio
    async def test_other_tools_are_ignored(self, openai_client, price_service) -> None:
        openai_client.chat.completions.create.return_value = _completion(
            content="fallback text", tool_calls=[_tool_call({"q": 1}, name="search_web")]
        )
        service = CompletionService(openai_client, price_service)

        assert await service.reply("search") == "fallback text"
        price_service.get_usd_price.assert_not_awaited()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("arguments", ["not json", "{}", '["bitcoin"]'])
    async def test_bad_tool_arguments_give_apology(
        self, openai_client, price_service, arguments
    ) -> None:
        openai_client.chat.completions.create.return_value = _completion(
            tool_calls=[_tool_call(arguments)]
        )
        service = CompletionService(openai_client, price_service)

        assert await service.reply("price?") == AI_ERROR_MESSAGE

    @pytest.mark.asyncio
    async def test_price_api_failure_gives_apology(self, openai_client, price_service) -> None:
        price_service.get_usd_price.side_effect = PriceLookupError("timeout")
        openai_client.chat.completions.create.return_value = _completion(
            tool_calls=[_tool_call({"crypto": "bitcoin"})]
        )
        service = CompletionService(openai_client, price_service)

        assert await service.reply("btc?") == AI_ERROR_MESSAGE

    @pytest.mark.asyncio
    async def test_api_error_gives_apology(self, openai_client, price_service) -> None:
        request = httpx.Request("POST", "https://api.example.com/v1/chat/completions")
        openai_client.chat.completions.create.side_effect = openai.APIConnectionError(
            request=request
        )
        service = CompletionService(openai_client, price_service)

        assert await service.reply("hi") == AI_ERROR_MESSAGE

    @pytest.mark.asyncio
    async def test_empty_choices_give_apology(self, openai_client, price_service) -> None:
        openai_client.chat.completions.create.return_value = SimpleNamespace(choices=[])
        service = CompletionService(openai_client, price_service)

        assert await service.reply("hi") == AI_ERROR_MESSAGE

    @pytest.mark.asyncio
    async def test_missing_choices_give_apology(self, openai_client, price_service) -> None:
        openai_client.chat.completions.create.return_value = SimpleNamespace(choices=None)
        service = CompletionService(openai_client, price_service)

        assert await service.reply("hi") == AI_ERROR_MESSAGE

    @pytest.mark.asyncio
    async def test_empty_content_gives_apology(self, openai_client, price_service) -> None:
        openai_client.chat.completions.create.return_value = _completion(content="")
        service = CompletionService(openai_client, price_service)

        assert await service.reply("hi") == AI_ERROR_MESSAGE


@pytest.mark.parametrize(
    ("price", "expected"),
    [
        (Decimal("64250.5"), "64250.50"),
        (Decimal("1"), "1.00"),
        (Decimal("0.00001234"), "0.00001234"),
        (Decimal("1E-7"), "0.0000001"),
    ],
)
def test_format_price(price: Decimal, expected: str) -> None:
    assert format_price(price) == expected
