"""Wallet valuation: cached SUI price and balance lookups rendered for display."""

from __future__ import annotations

import asyncio
import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Awaitable, Callable, Protocol, TypeVar

from ..cache import TieredCache
from ..clients.dexscreener import DexPair
from ..constants import (
    CETUS_SUI_USDC_POOL,
    PORTFOLIO_CACHE_KEY_PREFIX,
    PRICES_CACHE_KEY,
    UNAVAILABLE_MESSAGE,
)
from ..domain import Portfolio, PricePoint
from ..retry import RetryingFetcher
from ..units import mist_to_sui, normalize_sui_address

logger = logging.getLogger(__name__)

T = TypeVar("T")

USD_QUANTUM = Decimal("0.01")
SUI_QUANTUM = Decimal("0.0001")


class PriceSource(Protocol):
    async def fetch_pair(self, pair_address: str) -> DexPair: ...


class BalanceSource(Protocol):
    async def get_balance(self, owner: str) -> int: ...


def portfolio_cache_key(address: str) -> str:
    return PORTFOLIO_CACHE_KEY_PREFIX + address


class WalletProvider:
    """Produces USD valuations of Sui wallets.

    Prices and portfolios are cached through a ``TieredCache``. The price
    fetch is wrapped in a ``RetryingFetcher``; the balance lookup is not
    retried. All failures propagate from ``fetch_prices`` and
    ``fetch_portfolio_value``; only ``get_formatted_portfolio`` turns them
    into a fixed message.

    Concurrent misses on the same key each fetch independently unless
    ``coalesce_misses`` is set, in which case they share one in-flight fetch.
    """

    def __init__(
        self,
        cache: TieredCache,
        fetcher: RetryingFetcher,
        price_source: PriceSource,
        balance_source: BalanceSource,
        *,
        pair_address: str = CETUS_SUI_USDC_POOL,
        agent_name: str = "Sui Wallet",
        coalesce_misses: bool = False,
    ):
        self.cache = cache
        self.fetcher = fetcher
        self.price_source = price_source
        self.balance_source = balance_source
        self.pair_address = pair_address
        self.agent_name = agent_name
        self.coalesce_misses = coalesce_misses
        self._inflight: dict[str, asyncio.Future[Any]] = {}

    async def _single_flight(
        self, key: str, factory: Callable[[], Awaitable[T]]
    ) -> T:
        if not self.coalesce_misses:
            return await factory()

        task = self._inflight.get(key)
        if task is None:
            task = asyncio.ensure_future(factory())
            self._inflight[key] = task

            def _forget(done: asyncio.Future[Any], key: str = key) -> None:
                if self._inflight.get(key) is done:
                    del self._inflight[key]
                # Every waiter may have been cancelled; mark the failure as seen
                if not done.cancelled():
                    done.exception()

            task.add_done_callback(_forget)
        else:
            logger.debug("Joining in-flight fetch for %s", key)

        # A cancelled waiter must not cancel the fetch other waiters share
        return await asyncio.shield(task)

    async def _read_cached(
        self, key: str, decode: Callable[[dict[str, Any]], T]
    ) -> T | None:
        cached = await self.cache.read(key)
        if cached is None:
            return None
        try:
            return decode(cached)
        except (KeyError, TypeError, ValueError) as e:
            logger.warning("Discarding undecodable cache entry %s: %s", key, e)
            return None

    async def fetch_prices(self) -> PricePoint:
        """Return the SUI price, from cache when fresh.

        Raises:
            Exception: The last price-source error once retries are exhausted
        """
        cached = await self._read_cached(PRICES_CACHE_KEY, PricePoint.from_dict)
        if cached is not None:
            logger.debug("Cache hit for fetch_prices")
            return cached

        logger.debug("Cache miss for fetch_prices")
        return await self._single_flight(PRICES_CACHE_KEY, self._refresh_prices)

    async def _refresh_prices(self) -> PricePoint:
        try:
            pair = await self.fetcher.fetch(
                lambda: self.price_source.fetch_pair(self.pair_address),
                description="SUI price fetch",
            )
        except Exception as e:
            logger.error("Error fetching SUI price: %s", e)
            raise

        price = PricePoint(
            quote_symbol=pair.quote_token.symbol,
            base_symbol=pair.base_token.symbol,
            price_native=pair.price_native,
        )
        await self.cache.write(PRICES_CACHE_KEY, price.to_dict())
        logger.info(
            "Fetched %s price: %s %s per %s",
            price.quote_symbol,
            price.usd_per_unit,
            price.base_symbol,
            price.quote_symbol,
        )
        return price

    async def fetch_portfolio_value(self, address: str) -> Portfolio:
        """Return the valuation of ``address``, from cache when fresh.

        Args:
            address: Sui address; normalized before use

        Raises:
            ValueError: If the address is malformed
            Exception: Any price or balance failure, unchanged
        """
        address = normalize_sui_address(address)
        key = portfolio_cache_key(address)

        cached = await self._read_cached(key, Portfolio.from_dict)
        if cached is not None:
            logger.debug("Cache hit for fetch_portfolio_value: %s", address)
            return cached

        logger.debug("Cache miss for fetch_portfolio_value: %s", address)
        return await self._single_flight(
            key, lambda: self._refresh_portfolio(address, key)
        )

    async def _refresh_portfolio(self, address: str, key: str) -> Portfolio:
        try:
            prices, balance_mist = await asyncio.gather(
                self.fetch_prices(),
                self.balance_source.get_balance(address),
            )
        except Exception as e:
            logger.error("Error fetching portfolio for %s: %s", address, e)
            raise

        total_native = mist_to_sui(balance_mist)
        portfolio = Portfolio(
            total_native=total_native,
            total_usd=total_native * prices.usd_per_unit,
        )
        await self.cache.write(key, portfolio.to_dict())
        logger.info(
            "Fetched portfolio for %s: %s SUI ($%s)",
            address,
            portfolio.total_native,
            portfolio.total_usd,
        )
        return portfolio

    def format_portfolio(self, address: str, portfolio: Portfolio) -> str:
        total_usd = portfolio.total_usd.quantize(USD_QUANTUM, rounding=ROUND_HALF_UP)
        total_sui = portfolio.total_native.quantize(
            SUI_QUANTUM, rounding=ROUND_HALF_UP
        )

        output = f"{self.agent_name}\n"
        output += f"Wallet Address: {address}\n"
        output += f"Total Value: ${total_usd:f} ({total_sui:f} SUI)\n"
        return output

    async def get_formatted_portfolio(self, address: str) -> str:
        """Render the wallet summary, or a fixed apology if valuation fails."""
        try:
            portfolio = await self.fetch_portfolio_value(address)
        except Exception as e:
            logger.error("Error generating portfolio report: %s", e)
            return UNAVAILABLE_MESSAGE
        return self.format_portfolio(normalize_sui_address(address), portfolio)
