"""CLI entrypoint for sui-wallet."""

from __future__ import annotations

import asyncio
import json
import logging
import os
from pathlib import Path
from typing import Annotated

import typer

from .constants import Network
from .logger import setup_logging
from .report import print_portfolio_table
from .settings import CONFIG_ENV_VAR, WalletSettings
from .state import AppState, build_app_state
from .units import normalize_sui_address

app = typer.Typer(
    add_completion=False,
    no_args_is_help=False,
    add_help_option=True,
    pretty_exceptions_enable=True,
    pretty_exceptions_short=True,
    pretty_exceptions_show_locals=False,
    rich_markup_mode="rich",
    help="Cached USD valuation of a Sui wallet.",
)


def _build_logger() -> logging.Logger:
    """Build a logger instance."""
    return logging.getLogger("sui_wallet")


async def _render_table(state: AppState, address: str) -> None:
    provider = state.provider
    portfolio = await provider.fetch_portfolio_value(address)
    price = await provider.fetch_prices()
    print_portfolio_table(
        state.settings.agent_name,
        normalize_sui_address(address),
        portfolio,
        price,
    )


@app.command()
def report(
    address: Annotated[
        str | None, typer.Argument(help="Sui address to value.")
    ] = None,
    config_path: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to a TOML config file (can include [sui_wallet] table).",
        ),
    ] = None,
    network: Annotated[
        Network | None,
        typer.Option(
            "--network",
            "-n",
            help="Network to use (mainnet, testnet, devnet or localnet).",
        ),
    ] = None,
    rpc_url: Annotated[
        str | None,
        typer.Option(
            "--rpc-url",
            help="Fullnode RPC endpoint; overrides the network default.",
        ),
    ] = None,
    cache_dir: Annotated[
        Path | None,
        typer.Option(
            "--cache-dir",
            help="Directory for the persistent cache.",
        ),
    ] = None,
    log_level: Annotated[
        str | None,
        typer.Option(
            "--log-level",
            help="Override logging verbosity (TRACE, DEBUG, INFO, WARNING, ERROR, CRITICAL).",
        ),
    ] = None,
    table: Annotated[
        bool,
        typer.Option(
            "--table",
            help="Render a rich panel instead of plain text. Errors are not hidden.",
        ),
    ] = False,
    show_config: Annotated[
        bool,
        typer.Option(
            "--show-config",
            help="Print effective config and exit.",
        ),
    ] = False,
):
    """Print the USD value of a wallet's SUI balance.

    Loads configuration, wires the cached wallet provider once, and values the
    address given on the command line (or SUI_WALLET_WALLET_ADDRESS).
    """
    if config_path:
        os.environ[CONFIG_ENV_VAR] = str(config_path)

    init_kwargs: dict[str, Network | Path | str] = {}
    if network is not None:
        init_kwargs["network"] = network
    if rpc_url is not None:
        init_kwargs["rpc_url"] = rpc_url
    if cache_dir is not None:
        init_kwargs["cache_dir"] = cache_dir
    if log_level is not None:
        init_kwargs["log_level"] = log_level
    if address is not None:
        init_kwargs["wallet_address"] = address

    try:
        settings = WalletSettings(**init_kwargs)
    except ValueError as e:
        raise typer.BadParameter(str(e)) from e

    setup_logging(settings.log_level)

    if show_config:
        typer.echo(json.dumps(settings.as_safe_dict(), indent=2))
        raise typer.Exit(code=0)

    if not settings.wallet_address:
        raise typer.BadParameter(
            "wallet address must be given as an argument or configured",
            param_hint=["ADDRESS", "SUI_WALLET_WALLET_ADDRESS"],
        )

    state = build_app_state(settings, _build_logger())
    wallet_address = settings.wallet_address_required

    if table:
        asyncio.run(_render_table(state, wallet_address))
        return

    output = asyncio.run(state.provider.get_formatted_portfolio(wallet_address))
    typer.echo(output.rstrip("\n"))


def run() -> None:
    """Entrypoint used by the console script."""
    app()


if __name__ == "__main__":
    run()
