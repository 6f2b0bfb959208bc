"""
Transaction Builder - Build, sign, and broadcast legacy transactions.

Uses eth-account for signing and the httpx-based JSON-RPC client for
sending.  ``SigningClient.submit`` returns as soon as the node accepts the
transaction into its pool; waiting for inclusion is the tracker's job.
"""

from __future__ import annotations

import time
from typing import Any, Optional

from eth_account.signers.local import LocalAccount
from eth_utils import to_checksum_address

from ..logging import get_logger
from ..utils import to_hex, to_quantity
from .errors import DecodingError, RpcError, TransactionRejected
from .models import PendingTransaction
from .rpc import ReadClient, require_address

log = get_logger(__name__)


class SigningClient:
    """
    A Read Client plus an account that can sign.

    The sequence number is read from the network for every transaction; no
    local nonce cache is kept, so two concurrent senders on one account race
    at the node and one of them is rejected.
    """

    def __init__(
        self,
        reader: ReadClient,
        account: LocalAccount,
        chain_id: Optional[int] = None,
    ) -> None:
        self.reader = reader
        self._account = account
        self._chain_id = chain_id

    @property
    def address(self) -> str:
        return self._account.address

    @property
    def chain_id(self) -> int:
        if self._chain_id is None:
            self._chain_id = self.reader.get_chain_id()
        return self._chain_id

    def build_transaction(
        self,
        to: Optional[str],
        data: bytes,
        gas_price: int,
        *,
        value: int = 0,
        gas_limit: Optional[int] = None,
        nonce: Optional[int] = None,
        method: Optional[str] = None,
    ) -> dict[str, Any]:
        """
        Build an unsigned legacy transaction.

        Args:
            to: Target address, or None for a contract creation
            data: Encoded payload (calldata, or bytecode + constructor args)
            gas_price: Flat gas price in wei
            value: Native value in wei
            gas_limit: Gas limit (default: eth_estimateGas)
            nonce: Pinned sequence number (default: the network's pending count)
            method: Contract method name carried by a rejection

        Raises:
            TransactionRejected: If gas estimation is refused by the node
        """
        if gas_price <= 0:
            raise ValueError(f"Gas price must be positive, got {gas_price}")

        if nonce is None:
            nonce = self.reader.get_transaction_count(self.address, "pending")

        tx: dict[str, Any] = {
            "nonce": nonce,
            "gasPrice": gas_price,
            "value": value,
            "data": to_hex(data),
            "chainId": self.chain_id,
        }
        if to is not None:
            tx["to"] = to_checksum_address(require_address(to, "target address"))

        if gas_limit is None:
            gas_limit = self._estimate_gas(tx, method)
        tx["gas"] = gas_limit

        return tx

    def _estimate_gas(self, tx: dict[str, Any], method: Optional[str] = None) -> int:
        query: dict[str, Any] = {
            "from": self.address,
            "data": tx["data"],
            "value": to_quantity(tx["value"]),
            "gasPrice": to_quantity(tx["gasPrice"]),
        }
        if "to" in tx:
            query["to"] = tx["to"]
        try:
            return self.reader.estimate_gas(query)
        except RpcError as exc:
            raise TransactionRejected(
                f"gas estimation failed: {exc.message}",
                method=method,
                contract=tx.get("to"),
            ) from exc

    def sign(self, tx: dict[str, Any]) -> tuple[str, str]:
        """Sign a transaction; returns (raw_tx_hex, local_tx_hash)."""
        signed = self._account.sign_transaction(tx)
        return to_hex(bytes(signed.raw_transaction)), to_hex(bytes(signed.hash))

    def submit(
        self,
        to: Optional[str],
        data: bytes,
        gas_price: int,
        *,
        value: int = 0,
        gas_limit: Optional[int] = None,
        nonce: Optional[int] = None,
        method: Optional[str] = None,
    ) -> PendingTransaction:
        """
        Sign and broadcast one transaction without waiting for inclusion.

        Exactly one transaction enters the pool per successful call.  Nothing
        is retried: resubmitting is the caller's decision.

        Returns:
            PendingTransaction identifying the broadcast

        Raises:
            TransactionRejected: The node refused the transaction (stale
                nonce, insufficient funds, bad signature, ...)
        """
        tx = self.build_transaction(
            to,
            data,
            gas_price,
            value=value,
            gas_limit=gas_limit,
            nonce=nonce,
            method=method,
        )
        raw_tx, local_hash = self.sign(tx)

        try:
            tx_hash = self.reader.rpc.request("eth_sendRawTransaction", [raw_tx])
        except RpcError as exc:
            raise TransactionRejected(
                exc.message, method=method or "eth_sendRawTransaction", contract=to
            ) from exc

        if not isinstance(tx_hash, str):
            raise DecodingError(
                f"Expected transaction hash, got {tx_hash!r}",
                method="eth_sendRawTransaction",
            )
        if tx_hash.lower() != local_hash.lower():
            log.warning("transaction.hash_mismatch", node_hash=tx_hash, local_hash=local_hash)

        pending = PendingTransaction(
            tx_hash=tx_hash,
            submitted_at=time.time(),
            sender=self.address,
            nonce=tx["nonce"],
            to=tx.get("to"),
        )
        log.info(
            "transaction.broadcast",
            tx_hash=tx_hash,
            sender=self.address,
            to=pending.to,
            nonce=pending.nonce,
            gas=tx["gas"],
            gas_price=gas_price,
        )
        return pending
