"""
Shared plumbing for the command modules: option types, key resolution,
error reporting and receipt display.
"""

from __future__ import annotations

import contextlib
import json
import sys
from typing import Any, Iterator, NoReturn, Optional, Sequence

import click
from eth_utils import is_hex_address

from ..chain import ChainContext, ChainError, ContractDescriptor, Receipt, transact
from ..wallet.eth import load_private_key


class AddressType(click.ParamType):
    """A 0x-prefixed 20-byte hex address."""

    name = "address"

    def convert(self, value: Any, param: Optional[click.Parameter], ctx: Optional[click.Context]) -> str:
        if isinstance(value, str) and is_hex_address(value):
            return value
        self.fail(f"{value!r} is not a 0x-prefixed 20-byte hex address", param, ctx)


ADDRESS = AddressType()


def private_key_option(func: Any) -> Any:
    return click.option(
        "--private-key",
        envvar="PRIVATE_KEY",
        default=None,
        help="Hex private key (default: PRIVATE_KEY from env or ~/.monadex/.env)",
    )(func)


def gas_limit_option(func: Any) -> Any:
    return click.option(
        "--gas-limit",
        type=click.IntRange(min=21_000),
        default=None,
        help="Gas limit (default: estimated by the node)",
    )(func)


def get_context(ctx: click.Context) -> ChainContext:
    return ctx.find_root().obj["chain"]


def fail(message: str, exit_code: int = 1) -> NoReturn:
    click.secho(f"ERROR: {message}", fg="red", err=True)
    sys.exit(exit_code)


def resolve_private_key(private_key: Optional[str]) -> str:
    """Use the given key, else fall back to PRIVATE_KEY / ~/.monadex/.env."""
    if private_key:
        return private_key
    try:
        return load_private_key()
    except ValueError as exc:
        fail(str(exc))


@contextlib.contextmanager
def chain_errors() -> Iterator[None]:
    """Turn chain and configuration errors into an ERROR line and exit code."""
    try:
        yield
    except ChainError as exc:
        fail(f"{type(exc).__name__}: {exc}", exc.exit_code)
    except (ValueError, FileNotFoundError) as exc:
        fail(str(exc))


def parse_json_args(args_json: str) -> list[Any]:
    try:
        args = json.loads(args_json)
    except json.JSONDecodeError as exc:
        raise click.BadParameter(f"Invalid JSON: {exc}", param_hint="--args") from exc
    if not isinstance(args, list):
        raise click.BadParameter("Args must be a JSON array", param_hint="--args")
    return args


def echo_receipt(receipt: Receipt, label: str) -> None:
    """Print a receipt; a reverted transaction exits non-zero."""
    if receipt.succeeded:
        click.secho(f"SUCCESS: {label}", fg="green")
    else:
        click.secho(f"FAILED: {label} reverted", fg="red")
    click.echo(f"  Transaction hash: {receipt.tx_hash}")
    click.echo(f"  Block:            {receipt.block_number}")
    click.echo(f"  Gas used:         {receipt.gas_used}")
    if not receipt.succeeded:
        sys.exit(1)


def send_and_report(
    ctx: click.Context,
    abi: list[dict[str, Any]],
    address: str,
    method: str,
    args: Sequence[Any],
    private_key: Optional[str],
    gas_limit: Optional[int],
    label: str,
) -> None:
    """Encode, sign, send and await one write call, then print the receipt."""
    chain = get_context(ctx)
    key = resolve_private_key(private_key)
    with chain_errors():
        receipt = transact(
            chain,
            ContractDescriptor.from_abi(address, abi),
            method,
            args,
            key,
            gas_limit=gas_limit,
        )
    echo_receipt(receipt, label)
