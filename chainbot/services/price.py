"""Crypto price lookup service.

Queries a CoinGecko-compatible ``simple/price`` endpoint for a single asset
in USD. Prices are fetched on every call; nothing is cached.
"""

import logging
from decimal import Decimal, InvalidOperation
from typing import Any

import aiohttp

logger = logging.getLogger(__name__)

VS_CURRENCY = "usd"


class PriceLookupError(Exception):
    """Raised when the price API cannot be reached or answers with an error."""


class PriceService:
    """Simple CoinGecko API client for USD spot prices."""

    def __init__(self, base_url: str = "https://api.coingecko.com/api/v3", timeout: int = 20):
        """Initialize price service.

        Args:
            base_url: API root without trailing slash.
            timeout: Request timeout in seconds.
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    async def get_usd_price(self, asset_id: str) -> Decimal | None:
        """Get the current USD price of an asset.

        Args:
            asset_id: CoinGecko asset id, e.g. "bitcoin".

        Returns:
            Price in USD, or None if the API does not know the asset.

        Raises:
            PriceLookupError: On transport errors, non-200 answers or
                malformed bodies.
        """
        asset = asset_id.strip().lower()
        if not asset:
            return None

        data = await self._fetch_json(
            f"{self.base_url}/simple/price",
            {"ids": asset, "vs_currencies": VS_CURRENCY},
        )

        entry = data.get(asset)
        if not isinstance(entry, dict) or VS_CURRENCY not in entry:
            logger.info(f"No USD price for {asset}")
            return None

        try:
            return Decimal(str(entry[VS_CURRENCY]))
        except InvalidOperation as e:
            raise PriceLookupError(f"Malformed price for {asset}: {entry[VS_CURRENCY]!r}") from e

    async def _fetch_json(self, url: str, params: dict[str, str]) -> dict[str, Any]:
        """GET a JSON object.

        Raises:
            PriceLookupError: On any transport or decoding failure.
        """
        try:
            timeout = aiohttp.ClientTimeout(total=self.timeout)
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.get(url, params=params) as response:
                    if response.status != 200:
                        error_text = await response.text()
                        raise PriceLookupError(f"Price API returned {response.status}: {error_text}")
                    data = await response.json()
        except (aiohttp.ClientError, TimeoutError, ValueError) as e:
            raise PriceLookupError(f"Price API request failed: {e}") from e

        if not isinstance(data, dict):
            raise PriceLookupError("Price API returned a non-object body")
        return data
