"""Sui network and price-source constants."""

from enum import Enum


class Network(str, Enum):
    MAINNET = "mainnet"
    TESTNET = "testnet"
    DEVNET = "devnet"
    LOCALNET = "localnet"


FULLNODE_URLS: dict[Network, str] = {
    Network.MAINNET: "https://fullnode.mainnet.sui.io:443",
    Network.TESTNET: "https://fullnode.testnet.sui.io:443",
    Network.DEVNET: "https://fullnode.devnet.sui.io:443",
    Network.LOCALNET: "http://127.0.0.1:9000",
}

SUI_COIN_TYPE = "0x2::sui::SUI"

# 1 SUI = 10**9 MIST
MIST_PER_SUI = 10**9

SUI_ADDRESS_LENGTH = 32

DEXSCREENER_API_URL = "https://api.dexscreener.com/latest/dex/pairs/sui"

# Cetus SUI/USDC pool
CETUS_SUI_USDC_POOL = (
    "0x51e883ba7c0b566a26cbc8a94cd33eb0abd418a77cc1e60ad22fd9b1f29cd2ab"
)

CACHE_NAMESPACE = "sui/wallet"
CACHE_TTL_SECONDS = 30

PRICES_CACHE_KEY = "prices"
PORTFOLIO_CACHE_KEY_PREFIX = "portfolio-"

PRICE_MAX_ATTEMPTS = 3
PRICE_BASE_DELAY_SECONDS = 2.0

UNAVAILABLE_MESSAGE = "Unable to fetch wallet information. Please try again later."
