"""
Chain session - one parameterised entry point for contract operations.

Every command, whatever the contract, goes through the same three steps:
encode with the contract's ABI, then either evaluate (read) or sign, send
and await (write).  The context is built per invocation and holds no
account material.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional, Sequence

import httpx

from ..wallet.eth import get_account
from .contract import Call, ContractBinding, ContractDescriptor, Mutability
from .errors import EncodingError
from .models import Receipt
from .rpc import DEFAULT_REQUEST_TIMEOUT, DEFAULT_RPC_URL, ReadClient
from .tracker import DEFAULT_AWAIT_TIMEOUT, DEFAULT_POLL_INTERVAL, TransactionTracker
from .tx import SigningClient

DEFAULT_GAS_PRICE = 20_000_000_000  # 20 gwei


@dataclass(frozen=True)
class ChainContext:
    """
    Explicit per-invocation context.

    Attributes:
        rpc_url: JSON-RPC endpoint
        gas_price: Flat legacy gas price in wei
        chain_id: EIP-155 chain id (None: ask the node)
        timeout: Receipt wait timeout in seconds
        poll_interval: Receipt polling interval in seconds
        confirmations: Block depth required before a receipt is returned
        request_timeout: HTTP timeout per JSON-RPC request
        transport: Optional httpx transport (tests use a mock node)
    """
    rpc_url: str = DEFAULT_RPC_URL
    gas_price: int = DEFAULT_GAS_PRICE
    chain_id: Optional[int] = None
    timeout: float = DEFAULT_AWAIT_TIMEOUT
    poll_interval: float = DEFAULT_POLL_INTERVAL
    confirmations: int = 0
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    transport: Optional[httpx.BaseTransport] = field(default=None, repr=False, compare=False)

    def reader(self) -> ReadClient:
        return ReadClient(self.rpc_url, timeout=self.request_timeout, transport=self.transport)

    def signer(self, private_key: Optional[str]) -> SigningClient:
        return SigningClient(self.reader(), get_account(private_key), chain_id=self.chain_id)

    def tracker(self, reader: Optional[ReadClient] = None) -> TransactionTracker:
        return TransactionTracker(
            reader or self.reader(),
            poll_interval=self.poll_interval,
            confirmations=self.confirmations,
        )


def read(
    ctx: ChainContext,
    descriptor: ContractDescriptor,
    method: str,
    args: Sequence[Any] = (),
) -> Any:
    """
    Evaluate a read-only method and decode its result.

    Raises:
        EncodingError: The method is not read-only, or args don't fit the ABI
        CallReverted: The contract rejected the call
        DecodingError: The return data doesn't match the declared outputs
    """
    binding = ContractBinding(descriptor)
    call = binding.build_call(method, args)
    if call.mutability is not Mutability.READ:
        raise EncodingError(
            "method mutates state; send it as a transaction",
            method=method,
            contract=descriptor.address,
        )
    return _evaluate(ctx, binding, call)


def _evaluate(ctx: ChainContext, binding: ContractBinding, call: Call) -> Any:
    data = binding.encode_call(call)
    output = ctx.reader().call(binding.address, data, method=call.method)
    return binding.decode(call.method, output, len(call.args))


def transact(
    ctx: ChainContext,
    descriptor: ContractDescriptor,
    method: str,
    args: Sequence[Any],
    private_key: Optional[str],
    *,
    gas_limit: Optional[int] = None,
    value: int = 0,
    nonce: Optional[int] = None,
) -> Receipt:
    """
    Sign, send and await a state-changing call.

    Returns:
        The receipt (check ``succeeded``; reverts are not raised)

    Raises:
        EncodingError: Args don't fit the ABI (nothing is sent)
        TransactionRejected: The node refused the transaction
        AwaitTimeout: No receipt within ``ctx.timeout``
    """
    binding = ContractBinding(descriptor)
    call = binding.build_call(method, args)
    return _send(ctx, binding, call, private_key, gas_limit=gas_limit, value=value, nonce=nonce)


def _send(
    ctx: ChainContext,
    binding: ContractBinding,
    call: Call,
    private_key: Optional[str],
    *,
    gas_limit: Optional[int] = None,
    value: int = 0,
    nonce: Optional[int] = None,
) -> Receipt:
    data = binding.encode_call(call)
    signer = ctx.signer(private_key)
    pending = signer.submit(
        binding.address,
        data,
        ctx.gas_price,
        value=value,
        gas_limit=gas_limit,
        nonce=nonce,
        method=call.method,
    )
    return ctx.tracker(signer.reader).wait(pending, timeout=ctx.timeout)


def invoke(
    ctx: ChainContext,
    descriptor: ContractDescriptor,
    call: Call,
    private_key: Optional[str] = None,
    *,
    gas_limit: Optional[int] = None,
    value: int = 0,
) -> Any:
    """
    Run a tagged call: reads return the decoded value, writes the receipt.

    Raises:
        ValueError: A write call without a private key
    """
    binding = ContractBinding(descriptor)
    if call.is_read:
        return _evaluate(ctx, binding, call)
    if not private_key:
        raise ValueError(f"{call.method} mutates state and needs a private key")
    return _send(ctx, binding, call, private_key, gas_limit=gas_limit, value=value)
