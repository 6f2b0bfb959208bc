__all__ = [
    # Context and operations
    "ChainContext",
    "read",
    "transact",
    "invoke",
    "deploy_contract",
    # Clients
    "ReadClient",
    "SigningClient",
    "TransactionTracker",
    "TxState",
    # Binding
    "Call",
    "ContractBinding",
    "ContractDescriptor",
    "Mutability",
    # Results
    "DeploymentRecord",
    "PendingTransaction",
    "Receipt",
    # Errors
    "ChainError",
    "AwaitTimeout",
    "CallReverted",
    "DecodingError",
    "DeploymentFailed",
    "EncodingError",
    "EndpointError",
    "InsufficientBalance",
    "RpcError",
    "TransactionRejected",
    "TransportFailure",
    # Contracts
    "MONAD_TOKEN_ABI",
    "ORDERBOOK_DEX_ABI",
    "OrderBook",
    "TokenInfo",
    # Records
    "DeploymentStore",
    "InvalidRecordError",
    # Identity
    "get_address",
    "load_private_key",
]

from .chain import (
    AwaitTimeout,
    Call,
    CallReverted,
    ChainContext,
    ChainError,
    ContractBinding,
    ContractDescriptor,
    DecodingError,
    DeploymentFailed,
    DeploymentRecord,
    EncodingError,
    EndpointError,
    InsufficientBalance,
    Mutability,
    PendingTransaction,
    ReadClient,
    Receipt,
    RpcError,
    SigningClient,
    TransactionRejected,
    TransactionTracker,
    TransportFailure,
    TxState,
    deploy_contract,
    invoke,
    read,
    transact,
)
from .interfaces import MONAD_TOKEN_ABI, ORDERBOOK_DEX_ABI, OrderBook, TokenInfo
from .records import DeploymentStore, InvalidRecordError
from .wallet.eth import get_address, load_private_key
