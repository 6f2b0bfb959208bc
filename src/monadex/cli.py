"""
Monadex CLI

Command-line interface for the MonadToken and OrderBookDEX contracts on
Monad.  Every command builds its own chain context from the group options,
the environment and ``.env`` files; no state is kept between invocations.

Commands:
  deploy    - Deploy a contract and save the deployment record
  verify    - Check that an address holds contract code
  config    - Show the deployment record
  token     - MonadToken operations
  dex       - OrderBookDEX operations
  invoke    - Execute an arbitrary contract call
  whoami    - Show the current wallet address
"""

from __future__ import annotations

import sys
from typing import Optional

import click

from .chain import ChainContext, ChainError
from .chain.tracker import DEFAULT_AWAIT_TIMEOUT, DEFAULT_POLL_INTERVAL
from .config import Settings, load_env_files
from .logging import configure_logging, get_logger
from .utils import short_address
from .wallet.eth import get_address, load_private_key


# ============ Constants ============

VERSION = "0.1.0"

log = get_logger(__name__)


# ============ Banner ============


def _print_banner() -> None:
    click.echo(
        click.style("  ◆ ", fg="magenta")
        + click.style("M O N A D E X", fg="bright_white", bold=True)
        + click.style(f"  v{VERSION}", dim=True)
    )
    click.echo()


# ============ Main CLI Group ============


@click.group(invoke_without_command=True)
@click.version_option(version=VERSION, prog_name="monadex")
@click.option("--rpc-url", default=None, help="JSON-RPC endpoint (default: RPC_URL or Monad testnet)")
@click.option("--chain-id", type=int, default=None, help="Chain id (default: CHAIN_ID or ask the node)")
@click.option("--gas-price", type=click.IntRange(min=1), default=None, help="Gas price in wei (default: GAS_PRICE or 20 gwei)")
@click.option(
    "--timeout",
    type=click.FloatRange(min=0, min_open=True),
    default=DEFAULT_AWAIT_TIMEOUT,
    show_default=True,
    help="Seconds to wait for a receipt",
)
@click.option(
    "--poll-interval",
    type=click.FloatRange(min=0, min_open=True),
    default=DEFAULT_POLL_INTERVAL,
    show_default=True,
    help="Seconds between receipt polls",
)
@click.option("--confirmations", type=click.IntRange(min=0), default=0, show_default=True)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    envvar="MONADEX_LOG_LEVEL",
    default="WARNING",
    show_default=True,
)
@click.option("--log-json", is_flag=True, help="Emit logs as JSON lines")
@click.pass_context
def cli(
    ctx: click.Context,
    rpc_url: Optional[str],
    chain_id: Optional[int],
    gas_price: Optional[int],
    timeout: float,
    poll_interval: float,
    confirmations: int,
    log_level: str,
    log_json: bool,
) -> None:
    """Monadex - MonadToken and OrderBookDEX on Monad."""
    configure_logging(level=log_level.upper(), format_json=log_json)
    ctx.ensure_object(dict)

    try:
        settings = Settings.from_env()
    except ValueError as exc:
        raise click.UsageError(str(exc)) from exc

    chain = ChainContext(
        rpc_url=rpc_url or settings.rpc_url,
        gas_price=gas_price or settings.gas_price,
        chain_id=chain_id if chain_id is not None else settings.chain_id,
        timeout=timeout,
        poll_interval=poll_interval,
        confirmations=confirmations,
        transport=ctx.obj.get("transport"),
    )
    ctx.obj["settings"] = settings
    ctx.obj["chain"] = chain
    log.debug("cli.context", rpc_url=chain.rpc_url, chain_id=chain.chain_id, gas_price=chain.gas_price)

    if ctx.invoked_subcommand is None:
        _print_banner()
        click.echo(ctx.get_help())


# ============ Top-level Commands ============

from .commands.common import fail
from .commands.deploy import config, deploy, verify
from .commands.dex import dex
from .commands.invoke import invoke
from .commands.token import token

cli.add_command(deploy)
cli.add_command(verify)
cli.add_command(config)
cli.add_command(token)
cli.add_command(dex)
cli.add_command(invoke)


# ============ Identity ============


@cli.command()
@click.option("--private-key", envvar="PRIVATE_KEY", default=None, help="Hex private key")
@click.option("--balance", "show_balance", is_flag=True, help="Also show the native balance")
@click.pass_context
def whoami(ctx: click.Context, private_key: Optional[str], show_balance: bool) -> None:
    """Show current wallet identity."""
    if private_key:
        try:
            address = get_address(private_key)
        except ValueError as exc:
            fail(str(exc))
    else:
        try:
            address = get_address(load_private_key())
        except ValueError:
            click.echo("No wallet found.")
            click.echo("Set PRIVATE_KEY in the environment or ~/.monadex/.env.")
            sys.exit(1)

    click.echo(f"Address: {address}")
    if not show_balance:
        return

    chain = ctx.find_root().obj["chain"]
    try:
        wei = chain.reader().get_balance(address)
    except ChainError as exc:
        click.secho(f"ERROR: {type(exc).__name__}: {exc}", fg="red", err=True)
        sys.exit(exc.exit_code)
    click.echo(f"Balance of {short_address(address)}: {wei} wei")


# ============ Entry Points ============


def main() -> None:
    """Monadex CLI entry point."""
    load_env_files()
    cli(auto_envvar_prefix="MONADEX")


if __name__ == "__main__":
    main()
