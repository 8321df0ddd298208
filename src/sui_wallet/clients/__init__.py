from __future__ import annotations

from .dexscreener import DexPair, DexScreenerClient
from .sui_rpc import SuiBalanceClient, SuiRpcError

__all__ = ["DexPair", "DexScreenerClient", "SuiBalanceClient", "SuiRpcError"]
