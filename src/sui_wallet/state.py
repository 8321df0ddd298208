"""Application state container."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .cache import FileCacheAdapter, TieredCache, TransientCache
from .clients import DexScreenerClient, SuiBalanceClient
from .providers import WalletProvider
from .retry import RetryingFetcher
from .settings import WalletSettings


@dataclass
class AppState:
    """Container for application-wide state and dependencies.

    Built once per process and passed to callers to avoid global state and
    enable testing.
    """

    settings: WalletSettings
    logger: logging.Logger
    provider: WalletProvider


def build_wallet_provider(settings: WalletSettings) -> WalletProvider:
    """Wire caches, retry policy and network clients from settings."""
    cache = TieredCache(
        FileCacheAdapter(settings.cache_dir),
        transient=TransientCache(settings.cache_ttl_seconds),
        ttl_seconds=settings.cache_ttl_seconds,
        namespace=settings.cache_namespace,
    )
    fetcher = RetryingFetcher(
        max_attempts=settings.price_max_attempts,
        base_delay=settings.price_base_delay,
    )
    return WalletProvider(
        cache,
        fetcher,
        DexScreenerClient(
            settings.price_api_url, request_timeout=settings.request_timeout
        ),
        SuiBalanceClient(
            settings.rpc_url_resolved, request_timeout=settings.request_timeout
        ),
        pair_address=settings.price_pair_address,
        agent_name=settings.agent_name,
        coalesce_misses=settings.coalesce_misses,
    )


def build_app_state(settings: WalletSettings, logger: logging.Logger) -> AppState:
    return AppState(
        settings=settings,
        logger=logger,
        provider=build_wallet_provider(settings),
    )
