"""Domain models for wallet valuation."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any


def _to_decimal(value: Any, field_name: str) -> Decimal:
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError) as e:
        raise ValueError(f"Invalid {field_name}: {value!r}") from e


@dataclass(frozen=True)
class PricePoint:
    """Price of one unit of the quote token expressed in the base token.

    For the SUI/USDC pool the quote is SUI and the base is the USD-pegged
    USDC, so ``usd_per_unit`` is the reciprocal of ``price_native``.
    """

    quote_symbol: str
    base_symbol: str
    price_native: Decimal

    def __post_init__(self) -> None:
        if self.price_native <= 0:
            raise ValueError(
                f"price_native must be positive, got {self.price_native}"
            )

    @property
    def usd_per_unit(self) -> Decimal:
        return Decimal(1) / self.price_native

    def to_dict(self) -> dict[str, str]:
        return {
            "quote_symbol": self.quote_symbol,
            "base_symbol": self.base_symbol,
            "price_native": str(self.price_native),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PricePoint:
        return cls(
            quote_symbol=str(data["quote_symbol"]),
            base_symbol=str(data["base_symbol"]),
            price_native=_to_decimal(data["price_native"], "price_native"),
        )


@dataclass(frozen=True)
class Portfolio:
    """Valuation of a wallet's SUI balance."""

    total_native: Decimal
    total_usd: Decimal

    def to_dict(self) -> dict[str, str]:
        return {
            "total_native": str(self.total_native),
            "total_usd": str(self.total_usd),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Portfolio:
        return cls(
            total_native=_to_decimal(data["total_native"], "total_native"),
            total_usd=_to_decimal(data["total_usd"], "total_usd"),
        )
