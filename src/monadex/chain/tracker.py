"""
Transaction lifecycle tracking.

    BROADCAST -> PENDING -> MINED_SUCCESS | MINED_REVERTED -> CONFIRMED

``wait`` blocks the caller, polling for a receipt until it appears or the
timeout elapses.  A timeout says nothing about the transaction's fate.
"""

from __future__ import annotations

import enum
import time
from typing import Callable, Optional, Union

from ..logging import get_logger
from .errors import AwaitTimeout
from .models import PendingTransaction, Receipt
from .rpc import ReadClient

log = get_logger(__name__)

DEFAULT_POLL_INTERVAL = 2.0
DEFAULT_AWAIT_TIMEOUT = 120.0


class TxState(enum.Enum):
    """
    Lifecycle of a broadcast transaction.

    CONFIRMED applies to successful receipts only.  A reverted receipt is
    final as MINED_REVERTED however deep its block is buried.
    """

    BROADCAST = "broadcast"
    PENDING = "pending"
    MINED_SUCCESS = "mined_success"
    MINED_REVERTED = "mined_reverted"
    CONFIRMED = "confirmed"


class TransactionTracker:
    def __init__(
        self,
        reader: ReadClient,
        *,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
        confirmations: int = 0,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if poll_interval < 0:
            raise ValueError("poll_interval must be non-negative")
        if confirmations < 0:
            raise ValueError("confirmations must be non-negative")
        self.reader = reader
        self.poll_interval = poll_interval
        self.confirmations = confirmations
        self._clock = clock
        self._sleep = sleep

    def _depth_reached(self, receipt: Receipt) -> bool:
        if self.confirmations <= 0:
            return True
        head = self.reader.get_block_number()
        return head - receipt.block_number + 1 >= self.confirmations

    def state(self, tx_hash: str) -> TxState:
        """Probe the node once and report where the transaction stands."""
        receipt = self.reader.get_transaction_receipt(tx_hash)
        if receipt is None:
            if self.reader.get_transaction(tx_hash) is not None:
                return TxState.PENDING
            return TxState.BROADCAST
        if receipt.succeeded and self.confirmations > 0 and self._depth_reached(receipt):
            return TxState.CONFIRMED
        return TxState.MINED_SUCCESS if receipt.succeeded else TxState.MINED_REVERTED

    def wait(
        self,
        pending: Union[PendingTransaction, str],
        timeout: float = DEFAULT_AWAIT_TIMEOUT,
    ) -> Receipt:
        """
        Wait for a transaction receipt.

        Args:
            pending: PendingTransaction or bare transaction hash
            timeout: Maximum wait time in seconds

        Returns:
            The receipt, successful or reverted; callers check ``succeeded``

        Raises:
            AwaitTimeout: If no receipt (or not enough confirmations) was
                observed in time.  The hash remains valid for another wait.
        """
        tx_hash = pending.tx_hash if isinstance(pending, PendingTransaction) else pending
        deadline = self._clock() + timeout
        receipt: Optional[Receipt] = None

        while True:
            if receipt is None:
                receipt = self.reader.get_transaction_receipt(tx_hash)
                if receipt is not None:
                    log.info(
                        "transaction.mined",
                        tx_hash=tx_hash,
                        block=receipt.block_number,
                        gas_used=receipt.gas_used,
                        status=receipt.status,
                    )
            if receipt is not None and self._depth_reached(receipt):
                return receipt

            remaining = deadline - self._clock()
            if remaining <= 0:
                log.warning("transaction.await_timeout", tx_hash=tx_hash, timeout=timeout)
                raise AwaitTimeout(tx_hash, timeout)
            self._sleep(min(self.poll_interval, remaining))
