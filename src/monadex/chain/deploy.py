"""
Contract deployment.

Builds a creation transaction (no ``to``; data = bytecode + constructor
args), signs and sends it, waits for the receipt and extracts the created
contract's address.  A ``DeploymentRecord`` is only produced once a
non-empty contract address has been observed.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Optional

from ..logging import get_logger
from .errors import DeploymentFailed, InsufficientBalance
from .tracker import DEFAULT_AWAIT_TIMEOUT, TransactionTracker
from .tx import SigningClient

log = get_logger(__name__)

DEFAULT_NETWORK = "monad_testnet"


@dataclass(frozen=True)
class DeploymentRecord:
    """
    Outcome of one successful deployment.

    Attributes:
        contract_address: Address of the created contract
        deployer_address: Address that signed the creation transaction
        network: Network label (e.g. "monad_testnet")
        deployment_tx: Hash of the creation transaction
    """
    contract_address: Optional[str]
    deployer_address: Optional[str]
    network: str
    deployment_tx: Optional[str]

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "DeploymentRecord":
        return cls(
            contract_address=payload.get("contract_address"),
            deployer_address=payload.get("deployer_address"),
            network=payload["network"],
            deployment_tx=payload.get("deployment_tx"),
        )


def deploy_contract(
    signer: SigningClient,
    tracker: TransactionTracker,
    bytecode: bytes,
    constructor_args: bytes = b"",
    *,
    gas_price: int,
    gas_limit: Optional[int] = None,
    network: str = DEFAULT_NETWORK,
    timeout: float = DEFAULT_AWAIT_TIMEOUT,
) -> DeploymentRecord:
    """
    Deploy a contract and wait for its address.

    Args:
        signer: Signing client for the deployer account
        tracker: Tracker used to await the creation receipt
        bytecode: Creation bytecode
        constructor_args: ABI-encoded constructor arguments
        gas_price: Flat gas price in wei
        gas_limit: Gas limit (default: eth_estimateGas)
        network: Label stored in the record
        timeout: Receipt wait timeout in seconds

    Returns:
        DeploymentRecord for the created contract

    Raises:
        InsufficientBalance: The deployer holds no native balance
        DeploymentFailed: The receipt reverted or carries no contract address
        AwaitTimeout: The creation was not mined in time (fate unknown)
    """
    if not bytecode:
        raise ValueError("Bytecode is empty")

    balance = signer.reader.get_balance(signer.address)
    log.info("deployment.preflight", deployer=signer.address, balance=balance)
    if balance == 0:
        raise InsufficientBalance(f"Deployer {signer.address} has no balance")

    pending = signer.submit(
        None,
        bytes(bytecode) + bytes(constructor_args),
        gas_price,
        gas_limit=gas_limit,
        method="constructor",
    )
    receipt = tracker.wait(pending, timeout=timeout)

    if receipt.reverted:
        raise DeploymentFailed(
            f"Creation transaction {receipt.tx_hash} reverted", receipt=receipt
        )
    if not receipt.contract_address:
        raise DeploymentFailed(
            f"No contract address in receipt for {receipt.tx_hash}", receipt=receipt
        )

    record = DeploymentRecord(
        contract_address=receipt.contract_address,
        deployer_address=signer.address,
        network=network,
        deployment_tx=receipt.tx_hash,
    )
    log.info(
        "deployment.completed",
        contract_address=record.contract_address,
        tx_hash=record.deployment_tx,
        gas_used=receipt.gas_used,
    )
    return record
