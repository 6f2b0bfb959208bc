"""
DEX - OrderBookDEX operations.

Order matching and balances live in the contract; these commands only
encode the calls and show the results.
"""

from __future__ import annotations

from typing import Optional

import click

from ..chain import ContractDescriptor, read
from ..interfaces import ORDERBOOK_DEX_ABI, OrderBook
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

_dex_address = click.option(
    "--address", "-a",
    type=ADDRESS,
    required=True,
    envvar="DEX_ADDRESS",
    help="OrderBookDEX contract address",
)
_base_token = click.option("--base-token", type=ADDRESS, required=True, help="Base token address")
_quote_token = click.option("--quote-token", type=ADDRESS, required=True, help="Quote token address")
_side = click.option(
    "--buy/--sell", "is_buy", required=True, help="Order side"
)


def _dex(address: str) -> ContractDescriptor:
    return ContractDescriptor.from_abi(address, ORDERBOOK_DEX_ABI)


@click.group()
def dex() -> None:
    """OrderBookDEX operations.

    \b
    Examples:
      monadex dex order-book -a 0x... --base-token 0x... --quote-token 0x...
      monadex dex limit-order -a 0x... --base-token 0x... --quote-token 0x... \\
          --amount 100 --price 25 --buy
      monadex dex balance -a 0x... --user 0x... --token 0x...
    """


@dex.command("add-pair")
@_dex_address
@_base_token
@_quote_token
@click.option("--min-order-size", type=click.IntRange(min=0), required=True)
@click.option("--price-precision", type=click.IntRange(min=0), required=True)
@private_key_option
@gas_limit_option
@click.pass_context
def add_pair(
    ctx: click.Context,
    address: str,
    base_token: str,
    quote_token: str,
    min_order_size: int,
    price_precision: int,
    private_key: Optional[str],
    gas_limit: Optional[int],
) -> None:
    """Add a trading pair (owner only)."""
    click.echo(f"Adding trading pair: {base_token} / {quote_token}")
    send_and_report(
        ctx, ORDERBOOK_DEX_ABI, address, "addTradingPair",
        [base_token, quote_token, min_order_size, price_precision],
        private_key, gas_limit, "Trading pair added",
    )


@dex.command("limit-order")
@_dex_address
@_base_token
@_quote_token
@click.option("--amount", type=click.IntRange(min=1), required=True)
@click.option("--price", type=click.IntRange(min=1), required=True)
@_side
@private_key_option
@gas_limit_option
@click.pass_context
def limit_order(
    ctx: click.Context,
    address: str,
    base_token: str,
    quote_token: str,
    amount: int,
    price: int,
    is_buy: bool,
    private_key: Optional[str],
    gas_limit: Optional[int],
) -> None:
    """Place a limit order."""
    click.echo(f"Placing limit order: {'BUY' if is_buy else 'SELL'} {amount} at price {price}")
    send_and_report(
        ctx, ORDERBOOK_DEX_ABI, address, "placeLimitOrder",
        [base_token, quote_token, amount, price, is_buy],
        private_key, gas_limit, "Limit order placed",
    )


@dex.command("market-order")
@_dex_address
@_base_token
@_quote_token
@click.option("--amount", type=click.IntRange(min=1), required=True)
@_side
@private_key_option
@gas_limit_option
@click.pass_context
def market_order(
    ctx: click.Context,
    address: str,
    base_token: str,
    quote_token: str,
    amount: int,
    is_buy: bool,
    private_key: Optional[str],
    gas_limit: Optional[int],
) -> None:
    """Place a market order."""
    click.echo(f"Placing market order: {'BUY' if is_buy else 'SELL'} {amount}")
    send_and_report(
        ctx, ORDERBOOK_DEX_ABI, address, "placeMarketOrder",
        [base_token, quote_token, amount, is_buy],
        private_key, gas_limit, "Market order placed",
    )


@dex.command("cancel-order")
@_dex_address
@click.option("--order-id", type=click.IntRange(min=0), required=True)
@private_key_option
@gas_limit_option
@click.pass_context
def cancel_order(
    ctx: click.Context,
    address: str,
    order_id: int,
    private_key: Optional[str],
    gas_limit: Optional[int],
) -> None:
    """Cancel an order."""
    click.echo(f"Cancelling order: {order_id}")
    send_and_report(
        ctx, ORDERBOOK_DEX_ABI, address, "cancelOrder", [order_id],
        private_key, gas_limit, "Order cancelled",
    )


@dex.command("order-book")
@_dex_address
@_base_token
@_quote_token
@click.pass_context
def order_book(ctx: click.Context, address: str, base_token: str, quote_token: str) -> None:
    """Show the order book for a trading pair."""
    log.info("dex.order_book", contract=address, base=base_token, quote=quote_token)
    with chain_errors():
        book = OrderBook.from_result(
            read(get_context(ctx), _dex(address), "getOrderBook", [base_token, quote_token])
        )

    click.echo(f"Order Book for {base_token} / {quote_token}")
    click.echo("==========================================")
    click.echo("Buy Orders:")
    for i, (price, amount) in enumerate(book.buys, start=1):
        click.echo(f"  {i}: Price: {price}, Amount: {amount}")
    click.echo("")
    click.echo("Sell Orders:")
    for i, (price, amount) in enumerate(book.sells, start=1):
        click.echo(f"  {i}: Price: {price}, Amount: {amount}")


@dex.command("orders")
@_dex_address
@click.option("--user", type=ADDRESS, required=True, help="User address")
@click.pass_context
def user_orders(ctx: click.Context, address: str, user: str) -> None:
    """Show a user's active orders."""
    with chain_errors():
        order_ids = read(get_context(ctx), _dex(address), "getUserOrders", [user])

    click.echo(f"Active Orders for {user}")
    click.echo("================================")
    if not order_ids:
        click.echo("No active orders found.")
        return
    for i, order_id in enumerate(order_ids, start=1):
        click.echo(f"Order {i}: ID {order_id}")


@dex.command("balance")
@_dex_address
@click.option("--user", type=ADDRESS, required=True, help="User address")
@click.option("--token", type=ADDRESS, required=True, help="Token address")
@click.pass_context
def user_balance(ctx: click.Context, address: str, user: str, token: str) -> None:
    """Show a user's balance held by the DEX."""
    with chain_errors():
        amount = read(get_context(ctx), _dex(address), "getUserBalance", [user, token])
    click.echo(f"Balance: {amount} tokens")


@dex.command()
@_dex_address
@click.option("--token", type=ADDRESS, required=True, help="Token address")
@click.option("--amount", type=click.IntRange(min=1), required=True)
@private_key_option
@gas_limit_option
@click.pass_context
def withdraw(
    ctx: click.Context,
    address: str,
    token: str,
    amount: int,
    private_key: Optional[str],
    gas_limit: Optional[int],
) -> None:
    """Withdraw tokens from the DEX."""
    click.echo(f"Withdrawing {amount} tokens")
    send_and_report(
        ctx, ORDERBOOK_DEX_ABI, address, "withdraw", [token, amount],
        private_key, gas_limit, "Withdrawal",
    )
