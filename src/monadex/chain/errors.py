"""
Chain error taxonomy.

Every failure surfaced by the chain layer is a ``ChainError``.  Errors carry
the contract method and address they relate to (when known) so a failed
command can be diagnosed without re-running it.  Nothing here is retried.
"""

from __future__ import annotations

from typing import Any, Optional


class ChainError(RuntimeError):
    exit_code: int = 1

    def __init__(
        self,
        message: str,
        *,
        method: Optional[str] = None,
        contract: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.method = method
        self.contract = contract

    def __str__(self) -> str:
        context = []
        if self.method:
            context.append(self.method)
        if self.contract:
            context.append(f"on {self.contract}")
        if context:
            return f"{' '.join(context)}: {self.message}"
        return self.message


class EndpointError(ChainError, ValueError):
    exit_code = 2


class TransportFailure(ChainError):
    exit_code = 3


class RpcError(ChainError):
    """JSON-RPC ``error`` member returned by the node."""

    exit_code = 3

    def __init__(
        self,
        message: str,
        *,
        code: Optional[int] = None,
        data: Any = None,
        method: Optional[str] = None,
        contract: Optional[str] = None,
    ) -> None:
        super().__init__(message, method=method, contract=contract)
        self.code = code
        self.data = data


class EncodingError(ChainError, ValueError):
    exit_code = 4


class DecodingError(ChainError):
    exit_code = 5


class CallReverted(ChainError):
    exit_code = 6

    def __init__(
        self,
        message: str,
        *,
        revert_data: bytes = b"",
        reason: Optional[str] = None,
        method: Optional[str] = None,
        contract: Optional[str] = None,
    ) -> None:
        super().__init__(message, method=method, contract=contract)
        self.revert_data = revert_data
        self.reason = reason


class TransactionRejected(ChainError):
    exit_code = 7


class AwaitTimeout(ChainError):
    """Receipt not observed in time.  The transaction may still be mined."""

    exit_code = 8

    def __init__(self, tx_hash: str, timeout: float) -> None:
        super().__init__(
            f"transaction {tx_hash} not mined within {timeout:g}s; "
            "its outcome is unknown"
        )
        self.tx_hash = tx_hash
        self.timeout = timeout


class InsufficientBalance(ChainError):
    exit_code = 9


class DeploymentFailed(ChainError):
    exit_code = 10

    def __init__(self, message: str, *, receipt: Any = None) -> None:
        super().__init__(message)
        self.receipt = receipt


__all__ = [
    "AwaitTimeout",
    "CallReverted",
    "ChainError",
    "DecodingError",
    "DeploymentFailed",
    "EncodingError",
    "EndpointError",
    "InsufficientBalance",
    "RpcError",
    "TransactionRejected",
    "TransportFailure",
]
