"""
Token - MonadToken operations.

Commands:
- info:        Name, symbol, total supply and decimals
- balance:     Token balance of an account
- mint:        Mint tokens to an address (owner only)
- public-mint: Public mint for the caller
- burn:        Burn the caller's tokens
- transfer:    Transfer tokens to a recipient
"""

from __future__ import annotations

from typing import Optional

import click

from ..chain import ContractDescriptor, read
from ..interfaces import MONAD_TOKEN_ABI, TokenInfo
from ..logging import get_logger
from .common import (
    ADDRESS,
    chain_errors,
    gas_limit_option,
    get_context,
    private_key_option,
    send_and_report,
)

log = get_logger(__name__)

_token_address = click.option(
    "--address", "-a",
    type=ADDRESS,
    required=True,
    envvar="TOKEN_ADDRESS",
    help="MonadToken contract address",
)


@click.group()
def token() -> None:
    """MonadToken operations.

    \b
    Examples:
      monadex token info -a 0x...
      monadex token balance -a 0x... --account 0x...
      monadex token transfer -a 0x... --to 0x... --amount 1000
    """


@token.command()
@_token_address
@click.pass_context
def info(ctx: click.Context, address: str) -> None:
    """Show token information."""
    log.info("token.info", contract=address)
    with chain_errors():
        result = read(
            get_context(ctx),
            ContractDescriptor.from_abi(address, MONAD_TOKEN_ABI),
            "getTokenInfo",
        )
        token_info = TokenInfo.from_result(result)

    click.echo("Token Information:")
    click.echo(f"Name: {token_info.name}")
    click.echo(f"Symbol: {token_info.symbol}")
    click.echo(f"Total Supply: {token_info.total_supply}")
    click.echo(f"Decimals: {token_info.decimals}")


@token.command()
@_token_address
@click.option("--account", type=ADDRESS, required=True, help="Account address")
@click.pass_context
def balance(ctx: click.Context, address: str, account: str) -> None:
    """Show the token balance of an account."""
    log.info("token.balance", contract=address, account=account)
    with chain_errors():
        amount = read(
            get_context(ctx),
            ContractDescriptor.from_abi(address, MONAD_TOKEN_ABI),
            "getBalance",
            [account],
        )
    click.echo(f"Account Balance: {amount} tokens")


@token.command()
@_token_address
@click.option("--to", "recipient", type=ADDRESS, required=True, help="Recipient address")
@click.option("--amount", type=click.IntRange(min=1), required=True, help="Amount in raw units")
@private_key_option
@gas_limit_option
@click.pass_context
def mint(
    ctx: click.Context,
    address: str,
    recipient: str,
    amount: int,
    private_key: Optional[str],
    gas_limit: Optional[int],
) -> None:
    """Mint tokens to an address (owner only)."""
    click.echo(f"Minting {amount} tokens to {recipient}")
    send_and_report(
        ctx, MONAD_TOKEN_ABI, address, "mint", [recipient, amount],
        private_key, gas_limit, "Mint transaction",
    )


@token.command("public-mint")
@_token_address
@private_key_option
@gas_limit_option
@click.pass_context
def public_mint(
    ctx: click.Context,
    address: str,
    private_key: Optional[str],
    gas_limit: Optional[int],
) -> None:
    """Perform a public mint."""
    click.echo(f"Performing public mint on {address}")
    send_and_report(
        ctx, MONAD_TOKEN_ABI, address, "publicMint", [],
        private_key, gas_limit, "Public mint transaction",
    )


@token.command()
@_token_address
@click.option("--amount", type=click.IntRange(min=1), required=True, help="Amount in raw units")
@private_key_option
@gas_limit_option
@click.pass_context
def burn(
    ctx: click.Context,
    address: str,
    amount: int,
    private_key: Optional[str],
    gas_limit: Optional[int],
) -> None:
    """Burn tokens held by the signer."""
    click.echo(f"Burning {amount} tokens")
    send_and_report(
        ctx, MONAD_TOKEN_ABI, address, "burn", [amount],
        private_key, gas_limit, "Burn transaction",
    )


@token.command()
@_token_address
@click.option("--to", "recipient", type=ADDRESS, required=True, help="Recipient address")
@click.option("--amount", type=click.IntRange(min=1), required=True, help="Amount in raw units")
@private_key_option
@gas_limit_option
@click.pass_context
def transfer(
    ctx: click.Context,
    address: str,
    recipient: str,
    amount: int,
    private_key: Optional[str],
    gas_limit: Optional[int],
) -> None:
    """Transfer tokens to a recipient."""
    click.echo(f"Transferring {amount} tokens to {recipient}")
    send_and_report(
        ctx, MONAD_TOKEN_ABI, address, "transfer", [recipient, amount],
        private_key, gas_limit, "Transfer transaction",
    )
