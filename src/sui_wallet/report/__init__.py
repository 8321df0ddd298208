from __future__ import annotations

from .formatter import build_portfolio_panel, print_portfolio_table

__all__ = ["build_portfolio_panel", "print_portfolio_table"]
