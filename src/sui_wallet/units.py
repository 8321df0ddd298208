from __future__ import annotations

import re
from decimal import Decimal

from .constants import MIST_PER_SUI, SUI_ADDRESS_LENGTH

_HEX_RE = re.compile(r"^[0-9a-f]*$")


def mist_to_sui(mist: int) -> Decimal:
    """Convert an on-chain MIST amount to whole SUI.

    Args:
        mist: Integer balance in the chain's smallest unit.

    Returns:
        The balance in SUI as an exact Decimal.
    """
    return Decimal(mist) / Decimal(MIST_PER_SUI)


def normalize_sui_address(address: str) -> str:
    """Normalize a Sui address to its canonical ``0x`` + 64 hex form.

    Args:
        address: Address with or without ``0x`` prefix, any case, possibly
            short (leading zeros omitted).

    Returns:
        Lowercase address left-padded to 32 bytes.

    Raises:
        ValueError: If the address is empty, not hex, or longer than 32 bytes.
    """
    value = address.strip().lower()
    if value.startswith("0x"):
        value = value[2:]

    if not value or not _HEX_RE.match(value):
        raise ValueError(f"Invalid Sui address: {address!r}")
    if len(value) > SUI_ADDRESS_LENGTH * 2:
        raise ValueError(
            f"Invalid Sui address: {address!r} is longer than {SUI_ADDRESS_LENGTH} bytes"
        )

    return "0x" + value.rjust(SUI_ADDRESS_LENGTH * 2, "0")
