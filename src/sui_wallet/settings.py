"""Settings module with unified configuration precedence: CLI > ENV > CONFIG FILE."""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from .constants import (
    CACHE_NAMESPACE,
    CACHE_TTL_SECONDS,
    CETUS_SUI_USDC_POOL,
    DEXSCREENER_API_URL,
    FULLNODE_URLS,
    PRICE_BASE_DELAY_SECONDS,
    PRICE_MAX_ATTEMPTS,
    Network,
)
from .units import normalize_sui_address

load_dotenv()

CONFIG_ENV_VAR = "SUI_WALLET_CONFIG"


class TomlConfigSource(PydanticBaseSettingsSource):
    """Lowest-precedence source reading a TOML file.

    The file may hold settings at the top level or under a ``[sui_wallet]``
    table. Without an explicit path, ``./sui-wallet.toml`` and then
    ``~/.config/sui-wallet/config.toml`` are tried.
    """

    def __init__(self, settings_cls: type[BaseSettings], path: Path | None):
        super().__init__(settings_cls)
        self._path = path

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        return None, "", False

    def _resolve_path(self) -> Path | None:
        if self._path:
            return self._path
        local_config = Path("sui-wallet.toml")
        user_config = Path.home() / ".config" / "sui-wallet" / "config.toml"
        if local_config.exists():
            return local_config
        if user_config.exists():
            return user_config
        return None

    def __call__(self) -> dict[str, Any]:
        path = self._resolve_path()
        if path is None or not path.exists():
            return {}

        with path.open("rb") as f:
            data = tomllib.load(f)
        body = data.get("sui_wallet", data)
        if not isinstance(body, dict):
            return {}
        return body


class WalletSettings(BaseSettings):
    """Single source of truth for configuration. Values may come from:
    - CLI (init kwargs)
    - ENV / .env (prefixed with SUI_WALLET_)
    - Config file (TOML), lowest precedence

    Do not read os.environ or files elsewhere in the codebase.
    """

    # --- network ---
    network: Network = Network.MAINNET
    rpc_url: str | None = None
    wallet_address: str | None = None

    # --- display ---
    agent_name: str = "Sui Wallet"

    # --- caching ---
    cache_dir: Path = Field(
        default_factory=lambda: Path.home() / ".cache" / "sui-wallet"
    )
    cache_namespace: str = CACHE_NAMESPACE
    cache_ttl_seconds: int = Field(default=CACHE_TTL_SECONDS, gt=0)
    coalesce_misses: bool = False

    # --- price source and retries ---
    price_api_url: str = DEXSCREENER_API_URL
    price_pair_address: str = CETUS_SUI_USDC_POOL
    price_max_attempts: int = Field(default=PRICE_MAX_ATTEMPTS, ge=1)
    price_base_delay: float = Field(
        default=PRICE_BASE_DELAY_SECONDS,
        ge=0,
        description="Delay before the first retry in seconds; doubles on each further retry.",
    )
    request_timeout: float = Field(default=10.0, gt=0)

    # --- logging ---
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="SUI_WALLET_",
        env_file=".env",
        extra="ignore",  # ignore unknown keys in env/config file
    )

    @field_validator("wallet_address")
    @classmethod
    def normalize_wallet_address(cls, v: str | None) -> str | None:
        if v is None:
            return v
        return normalize_sui_address(v)

    @field_validator("log_level")
    @classmethod
    def upper_log_level(cls, v: str) -> str:
        return v.upper()

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Custom config-file source with explicit precedence: CLI > ENV > FILE."""
        env_cfg = os.environ.get(CONFIG_ENV_VAR)
        cfg_path = Path(env_cfg) if env_cfg else None

        return (
            init_settings,  # CLI (highest)
            env_settings,  # ENV
            dotenv_settings,  # .env
            TomlConfigSource(settings_cls, cfg_path),  # CONFIG (lowest)
        )

    @property
    def rpc_url_resolved(self) -> str:
        """RPC override if set, otherwise the network's public fullnode."""
        if self.rpc_url:
            return self.rpc_url
        return FULLNODE_URLS[self.network]

    @property
    def wallet_address_required(self) -> str:
        """Get wallet_address, raising ValueError if not set."""
        if self.wallet_address is None:
            raise ValueError("wallet_address must be configured")
        return self.wallet_address

    def as_safe_dict(self) -> dict[str, Any]:
        """Return the config as a JSON-friendly dict."""
        return self.model_dump(mode="json")
