from __future__ import annotations

from .wallet import BalanceSource, PriceSource, WalletProvider

__all__ = ["BalanceSource", "PriceSource", "WalletProvider"]
