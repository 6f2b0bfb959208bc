"""
Invoke - execute an arbitrary contract call.

Reads (view/pure) are evaluated with eth_call and print the decoded value;
everything else is signed, sent and awaited.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

import click

from ..chain import ContractBinding, ContractDescriptor, Receipt, invoke as invoke_call
from ..chain.artifacts import load_abi
from .common import (
    ADDRESS,
    chain_errors,
    echo_receipt,
    gas_limit_option,
    get_context,
    parse_json_args,
    private_key_option,
    resolve_private_key,
)


def _render(value: Any) -> str:
    if isinstance(value, bytes):
        return "0x" + value.hex()
    if isinstance(value, (list, tuple)):
        return "[" + ", ".join(_render(v) for v in value) + "]"
    return str(value)


@click.command()
@click.option("--contract", type=ADDRESS, required=True, help="Target contract address")
@click.option(
    "--abi",
    "abi_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    required=True,
    help="ABI or build artifact JSON",
)
@click.option("--function", "func_name", required=True, help="Function name to call")
@click.option("--args", "args_json", default="[]", help="Function args as JSON array")
@click.option("--value", default=0, type=click.IntRange(min=0), help="Native value in wei")
@private_key_option
@gas_limit_option
@click.pass_context
def invoke(
    ctx: click.Context,
    contract: str,
    abi_path: Path,
    func_name: str,
    args_json: str,
    value: int,
    private_key: Optional[str],
    gas_limit: Optional[int],
) -> None:
    """
    Execute a contract call described by an ABI file.

    View and pure functions are evaluated without a transaction; all other
    functions are sent from your account and awaited.
    """
    args = parse_json_args(args_json)
    chain = get_context(ctx)

    with chain_errors():
        descriptor = ContractDescriptor.from_abi(contract, load_abi(abi_path))
        call = ContractBinding(descriptor).build_call(func_name, args)
        if call.is_read and value:
            raise click.UsageError(
                f"--value is only valid for state-changing functions; {func_name} is {call.mutability.value}"
            )
        key = None if call.is_read else resolve_private_key(private_key)

        click.echo(f"  Target:   {contract}")
        click.echo(f"  Function: {func_name}")
        click.echo(f"  Args:     {args}")
        click.echo(f"  Kind:     {call.mutability.value}")
        click.echo("")

        result = invoke_call(chain, descriptor, call, key, gas_limit=gas_limit, value=value)

    if isinstance(result, Receipt):
        echo_receipt(result, f"{func_name} transaction")
    else:
        click.echo(f"Result: {_render(result)}")
