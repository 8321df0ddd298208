"""DexScreener pair API client."""

from __future__ import annotations

import asyncio
import json
import logging
from decimal import Decimal

import requests
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..constants import DEXSCREENER_API_URL

logger = logging.getLogger(__name__)


class DexToken(BaseModel):
    address: str | None = None
    name: str | None = None
    symbol: str

    model_config = ConfigDict(extra="ignore")


class DexPair(BaseModel):
    """The subset of a DexScreener pair that valuation depends on."""

    chain_id: str | None = Field(default=None, alias="chainId")
    dex_id: str | None = Field(default=None, alias="dexId")
    pair_address: str | None = Field(default=None, alias="pairAddress")
    base_token: DexToken = Field(alias="baseToken")
    quote_token: DexToken = Field(alias="quoteToken")
    price_native: Decimal = Field(alias="priceNative", gt=0)

    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class DexPairResponse(BaseModel):
    pair: DexPair

    model_config = ConfigDict(extra="ignore")


def decode_pair_response(payload: object) -> DexPair:
    """Validate a decoded JSON body and return its ``pair`` entry.

    Raises:
        ValueError: If the body is missing ``pair`` or ``pair.priceNative``,
            or any field has the wrong shape.
    """
    try:
        return DexPairResponse.model_validate(payload).pair
    except ValidationError as e:
        raise ValueError(f"Invalid DexScreener pair response: {e}") from e


class DexScreenerClient:
    """Client for the DexScreener ``/latest/dex/pairs/<chain>/<pair>`` endpoint."""

    def __init__(
        self,
        api_url: str = DEXSCREENER_API_URL,
        *,
        request_timeout: float = 10.0,
        session: requests.Session | None = None,
    ):
        self.api_url = api_url.rstrip("/")
        self.request_timeout = request_timeout
        self.session = session or requests.Session()

    def pair_url(self, pair_address: str) -> str:
        return f"{self.api_url}/{pair_address}"

    def _get(self, url: str) -> requests.Response:
        return self.session.get(url, timeout=self.request_timeout)

    async def fetch_pair(self, pair_address: str) -> DexPair:
        """Fetch and decode a single pair.

        Raises:
            requests.exceptions.RequestException: On network errors or non-2xx status
            ValueError: If the body is not JSON or fails validation
        """
        url = self.pair_url(pair_address)
        logger.info("Fetching SUI price from %s", url)
        response = await asyncio.to_thread(self._get, url)
        response.raise_for_status()

        try:
            payload = response.json()
        except (json.JSONDecodeError, requests.exceptions.JSONDecodeError) as e:
            raise ValueError("Invalid JSON from DexScreener API") from e

        pair = decode_pair_response(payload)
        logger.debug(
            "Pair %s/%s priceNative=%s",
            pair.quote_token.symbol,
            pair.base_token.symbol,
            pair.price_native,
        )
        return pair
