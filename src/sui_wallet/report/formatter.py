"""Rich console formatter for wallet valuations."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ..domain import Portfolio, PricePoint


def _truncate_address(address: str) -> str:
    """Truncate address for display."""
    return f"{address[:10]}...{address[-4:]}"


def _fixed(value: Decimal, places: int) -> str:
    return f"{value.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP):,f}"


def build_portfolio_panel(
    agent_name: str,
    address: str,
    portfolio: Portfolio,
    price: PricePoint | None = None,
) -> Panel:
    """Build a panel summarizing one wallet's valuation.

    Args:
        agent_name: Title shown on the panel
        address: Normalized wallet address
        portfolio: Valuation to render
        price: Optional price used for the valuation, shown as an extra row
    """
    table = Table(show_header=False, box=None, padding=(0, 1))
    table.add_column("Key", style="dim")
    table.add_column("Value", style="cyan")
    table.add_row("Address", _truncate_address(address))
    table.add_row("Balance", f"{_fixed(portfolio.total_native, 4)} SUI")
    table.add_row("Value", f"[green]${_fixed(portfolio.total_usd, 2)}[/]")
    if price is not None:
        table.add_row(
            "Price",
            f"${_fixed(price.usd_per_unit, 4)} per {price.quote_symbol}",
        )

    return Panel(table, title=f"[bold]{agent_name}[/]", border_style="blue")


def print_portfolio_table(
    agent_name: str,
    address: str,
    portfolio: Portfolio,
    price: PricePoint | None = None,
    *,
    console: Console | None = None,
) -> None:
    """Print the valuation panel to stdout (or the given console)."""
    console = console or Console()
    console.print(build_portfolio_panel(agent_name, address, portfolio, price))
