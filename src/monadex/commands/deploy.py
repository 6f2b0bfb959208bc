"""
Deploy - contract deployment and the deployment record.

Commands:
- deploy:  Deploy a contract from a build artifact or raw bytecode
- verify:  Check that an address holds contract code
- config:  Show the stored deployment record
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import click

from ..chain import ContractBinding, ContractDescriptor, deploy_contract
from ..chain.artifacts import load_abi, load_artifact, parse_bytecode
from ..logging import get_logger
from ..records import DeploymentStore, InvalidRecordError
from .common import (
    ADDRESS,
    chain_errors,
    fail,
    gas_limit_option,
    get_context,
    parse_json_args,
    private_key_option,
    resolve_private_key,
)

log = get_logger(__name__)

_config_path = click.option(
    "--config-path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Deployment record file (default: DEPLOYMENT_CONFIG or config/deployment.json)",
)


def _store(ctx: click.Context, config_path: Optional[Path]) -> DeploymentStore:
    settings = ctx.find_root().obj["settings"]
    return DeploymentStore(config_path or settings.deployment_config)


@click.command()
@click.option(
    "--artifact",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Foundry/Hardhat artifact JSON (ABI + bytecode)",
)
@click.option("--bytecode", "bytecode_hex", default=None, help="Creation bytecode as hex")
@click.option(
    "--abi",
    "abi_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="ABI JSON for constructor arguments (with --bytecode)",
)
@click.option("--args", "args_json", default="[]", help="Constructor args as JSON array")
@click.option("--network", default=None, help="Network label stored in the record")
@_config_path
@private_key_option
@gas_limit_option
@click.pass_context
def deploy(
    ctx: click.Context,
    artifact: Optional[Path],
    bytecode_hex: Optional[str],
    abi_path: Optional[Path],
    args_json: str,
    network: Optional[str],
    config_path: Optional[Path],
    private_key: Optional[str],
    gas_limit: Optional[int],
) -> None:
    """Deploy a contract and save its deployment record.

    The record is written only after the receipt reports a contract address.
    """
    if (artifact is None) == (bytecode_hex is None):
        raise click.UsageError("Pass exactly one of --artifact or --bytecode")

    args = parse_json_args(args_json)
    log.info("deploy.requested", artifact=str(artifact) if artifact else None, arg_count=len(args))
    chain = get_context(ctx)
    settings = ctx.find_root().obj["settings"]
    key = resolve_private_key(private_key)

    with chain_errors():
        if artifact is not None:
            loaded = load_artifact(artifact)
            bytecode = loaded.require_bytecode()
            abi = loaded.abi
        else:
            bytecode = parse_bytecode(bytecode_hex)
            abi = load_abi(abi_path) if abi_path is not None else []

        constructor_data = ContractBinding(
            ContractDescriptor.from_abi("", abi)
        ).encode_constructor(args)

        signer = chain.signer(key)
        click.echo("Starting contract deployment...")
        click.echo(f"  Deployer: {signer.address}")
        click.echo(f"  RPC:      {chain.rpc_url}")

        record = deploy_contract(
            signer,
            chain.tracker(signer.reader),
            bytecode,
            constructor_data,
            gas_price=chain.gas_price,
            gas_limit=gas_limit,
            network=network or settings.network,
            timeout=chain.timeout,
        )

    click.secho("Contract deployed successfully!", fg="green", bold=True)
    click.echo(f"  Contract address: {record.contract_address}")
    click.echo(f"  Transaction hash: {record.deployment_tx}")

    store = _store(ctx, config_path)
    try:
        saved_to = store.save(record)
    except (OSError, InvalidRecordError) as exc:
        fail(
            f"Contract deployed at {record.contract_address} (tx {record.deployment_tx}) "
            f"but the record could not be saved to {store.path}: {exc}"
        )
    click.echo(f"  Configuration saved to {saved_to}")


@click.command()
@click.option("--address", "-a", type=ADDRESS, required=True, help="Contract address")
@click.option("--constructor-args", default=None, help="ABI-encoded constructor args (hex)")
@click.pass_context
def verify(ctx: click.Context, address: str, constructor_args: Optional[str]) -> None:
    """Check that an address holds deployed contract code.

    Source verification on the block explorer is not automated.
    """
    click.echo(f"Verifying contract at address: {address}")
    with chain_errors():
        code = get_context(ctx).reader().get_code(address)

    if not code:
        click.secho(f"No contract code at {address}", fg="red")
        ctx.exit(1)

    click.secho(f"Contract code found ({len(code)} bytes)", fg="green")
    if constructor_args:
        click.echo(f"Constructor arguments: {constructor_args}")
    click.secho("Verify the source manually on the Monad block explorer.", fg="yellow")


@click.command()
@_config_path
@click.pass_context
def config(ctx: click.Context, config_path: Optional[Path]) -> None:
    """Show the stored deployment configuration."""
    with chain_errors():
        record = _store(ctx, config_path).load()

    if record is None:
        click.echo("No deployment configuration found")
        return

    click.echo("Deployment Configuration:")
    click.echo(f"Network: {record.network}")
    click.echo(f"Contract Address: {record.contract_address or 'Not deployed'}")
    click.echo(f"Deployer Address: {record.deployer_address or 'Unknown'}")
    click.echo(f"Deployment TX: {record.deployment_tx or 'Unknown'}")
