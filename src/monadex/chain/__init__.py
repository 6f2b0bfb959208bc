"""
Chain - on-chain interaction layer for monadex.

Provides the JSON-RPC read client, ABI binding, transaction signing,
receipt tracking and contract deployment used by every command.

Uses httpx + eth-account + eth-abi instead of the heavyweight web3.py.
"""

from .contract import Call, ContractBinding, ContractDescriptor, MethodSpec, Mutability
from .deploy import DeploymentRecord, deploy_contract
from .errors import (
    AwaitTimeout,
    CallReverted,
    ChainError,
    DecodingError,
    DeploymentFailed,
    EncodingError,
    EndpointError,
    InsufficientBalance,
    RpcError,
    TransactionRejected,
    TransportFailure,
)
from .models import PendingTransaction, Receipt
from .rpc import ReadClient, RpcClient, validate_endpoint
from .session import ChainContext, invoke, read, transact
from .tracker import TransactionTracker, TxState
from .tx import SigningClient

__all__ = [
    "AwaitTimeout",
    "Call",
    "CallReverted",
    "ChainContext",
    "ChainError",
    "ContractBinding",
    "ContractDescriptor",
    "DecodingError",
    "DeploymentFailed",
    "DeploymentRecord",
    "EncodingError",
    "EndpointError",
    "InsufficientBalance",
    "MethodSpec",
    "Mutability",
    "PendingTransaction",
    "ReadClient",
    "Receipt",
    "RpcClient",
    "RpcError",
    "SigningClient",
    "TransactionRejected",
    "TransactionTracker",
    "TransportFailure",
    "TxState",
    "deploy_contract",
    "invoke",
    "read",
    "transact",
    "validate_endpoint",
]
