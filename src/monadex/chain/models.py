from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from ..utils import parse_quantity
from .errors import DecodingError


@dataclass(frozen=True)
class PendingTransaction:
    """
    A transaction accepted by the node's pool but not yet observed mined.

    Attributes:
        tx_hash: 0x-prefixed transaction hash returned by the node
        submitted_at: Unix timestamp of the successful broadcast
        sender: Checksummed sender address
        nonce: Sequence number the transaction was signed with
        to: Target address, or None for a contract creation
    """
    tx_hash: str
    submitted_at: float
    sender: str
    nonce: int
    to: Optional[str] = None


@dataclass(frozen=True)
class Receipt:
    """
    The node's record of a mined transaction.

    ``status`` is 1 for success and 0 for revert; it is None only for
    pre-Byzantium receipts that carry no status field.
    """
    tx_hash: str
    block_number: int
    block_hash: str
    gas_used: int
    status: Optional[int]
    contract_address: Optional[str] = None
    logs: tuple[dict[str, Any], ...] = field(default_factory=tuple)

    @property
    def succeeded(self) -> bool:
        return self.status == 1

    @property
    def reverted(self) -> bool:
        return self.status == 0

    @classmethod
    def from_rpc(cls, payload: dict[str, Any]) -> "Receipt":
        """Build a receipt from an eth_getTransactionReceipt result."""
        try:
            tx_hash = payload["transactionHash"]
            block_number = parse_quantity(payload["blockNumber"])
            block_hash = payload["blockHash"]
            gas_used = parse_quantity(payload["gasUsed"])
            raw_status = payload.get("status")
            status = parse_quantity(raw_status) if raw_status is not None else None
        except (KeyError, TypeError, ValueError) as exc:
            raise DecodingError(
                f"Malformed receipt: {exc}", method="eth_getTransactionReceipt"
            ) from exc

        return cls(
            tx_hash=tx_hash,
            block_number=block_number,
            block_hash=block_hash,
            gas_used=gas_used,
            status=status,
            contract_address=payload.get("contractAddress") or None,
            logs=tuple(payload.get("logs") or ()),
        )
