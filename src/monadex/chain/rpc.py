"""
JSON-RPC client for Ethereum-compatible nodes.

Lightweight alternative to web3.py: uses httpx for HTTP and plain dicts for
the request/response shapes.  ``RpcClient`` is the transport; ``ReadClient``
exposes the non-mutating queries (balances, eth_call, receipts) on top of it.
"""

from __future__ import annotations

import itertools
from typing import Any, Optional
from urllib.parse import urlparse

import httpx
from eth_abi import decode
from eth_abi.exceptions import DecodingError as AbiDecodingError
from eth_utils import is_hex_address

from ..logging import get_logger
from ..utils import hex_to_bytes, parse_quantity, to_hex
from .errors import (
    CallReverted,
    DecodingError,
    EncodingError,
    EndpointError,
    RpcError,
    TransportFailure,
)
from .models import Receipt

log = get_logger(__name__)

# Default RPC endpoint (Monad testnet)
DEFAULT_RPC_URL = "https://rpc.testnet.monad.xyz"
DEFAULT_REQUEST_TIMEOUT = 30.0

# Error(string) and Panic(uint256) selectors used in revert payloads
_ERROR_SELECTOR = bytes.fromhex("08c379a0")
_PANIC_SELECTOR = bytes.fromhex("4e487b71")


def validate_endpoint(url: str) -> str:
    """
    Check that an endpoint is an absolute HTTP(S) URL.

    Returns:
        The URL, stripped of surrounding whitespace

    Raises:
        EndpointError: If the URL has no http/https scheme or no host
    """
    candidate = (url or "").strip()
    parsed = urlparse(candidate)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise EndpointError(f"Invalid RPC endpoint {url!r}: expected an http(s) URL")
    return candidate


def require_address(address: str, what: str = "address") -> str:
    """Reject anything that is not a 20-byte hex address before any I/O."""
    if not isinstance(address, str) or not is_hex_address(address):
        raise EncodingError(f"Invalid {what}: {address!r}")
    return address


def decode_revert_reason(data: bytes) -> Optional[str]:
    """Decode a standard Error(string) / Panic(uint256) revert payload."""
    try:
        if data[:4] == _ERROR_SELECTOR:
            (reason,) = decode(["string"], data[4:])
            return reason
        if data[:4] == _PANIC_SELECTOR:
            (code,) = decode(["uint256"], data[4:])
            return f"panic 0x{code:02x}"
    except AbiDecodingError:  # malformed payloads keep the raw bytes only
        return None
    return None


class RpcClient:
    """
    Minimal JSON-RPC 2.0 client.

    A fresh ``httpx.Client`` is opened per request; no connection state is
    kept between calls.
    """

    def __init__(
        self,
        rpc_url: str,
        *,
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self.rpc_url = validate_endpoint(rpc_url)
        self.timeout = timeout
        self._transport = transport
        self._ids = itertools.count(1)

    def request(self, method: str, params: list) -> Any:
        """
        Make a JSON-RPC call.

        Args:
            method: RPC method name (e.g., "eth_call")
            params: RPC parameters

        Returns:
            Result field from the RPC response

        Raises:
            TransportFailure: Endpoint unreachable, timed out or non-2xx
            DecodingError: Response is not a JSON-RPC envelope
            RpcError: Response carries an ``error`` member
        """
        payload = {
            "jsonrpc": "2.0",
            "method": method,
            "params": params,
            "id": next(self._ids),
        }
        log.debug("rpc.request", rpc_method=method, endpoint=self.rpc_url)

        try:
            with httpx.Client(timeout=self.timeout, transport=self._transport) as client:
                response = client.post(self.rpc_url, json=payload)
                response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise TransportFailure(
                f"HTTP {exc.response.status_code} from {self.rpc_url}",
                method=method,
            ) from exc
        except httpx.HTTPError as exc:
            raise TransportFailure(
                f"{type(exc).__name__} talking to {self.rpc_url}: {exc}",
                method=method,
            ) from exc

        try:
            data = response.json()
        except ValueError as exc:
            raise DecodingError(
                f"Non-JSON response from {self.rpc_url}", method=method
            ) from exc

        if not isinstance(data, dict) or ("result" not in data and "error" not in data):
            raise DecodingError(
                f"Malformed JSON-RPC response from {self.rpc_url}", method=method
            )

        if data.get("error") is not None:
            error = data["error"]
            if isinstance(error, dict):
                raise RpcError(
                    str(error.get("message", "unknown error")),
                    code=error.get("code"),
                    data=error.get("data"),
                    method=method,
                )
            raise RpcError(str(error), method=method)

        return data["result"]


class ReadClient:
    """Non-mutating queries against a single endpoint."""

    def __init__(
        self,
        rpc_url: str,
        *,
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self.rpc = RpcClient(rpc_url, timeout=timeout, transport=transport)

    @property
    def endpoint(self) -> str:
        return self.rpc.rpc_url

    def _quantity(self, method: str, params: list) -> int:
        result = self.rpc.request(method, params)
        try:
            return parse_quantity(result)
        except ValueError as exc:
            raise DecodingError(f"Expected hex quantity, got {result!r}", method=method) from exc

    def _data(
        self,
        method: str,
        params: list,
        contract: Optional[str] = None,
        label: Optional[str] = None,
    ) -> bytes:
        result = self.rpc.request(method, params)
        try:
            return hex_to_bytes(result)
        except ValueError as exc:
            raise DecodingError(
                f"Expected hex data from {method}, got {result!r}",
                method=label or method,
                contract=contract,
            ) from exc

    def get_balance(self, address: str, block: str = "latest") -> int:
        """
        Get the native balance for an address.

        Returns:
            Balance in the chain's smallest unit (wei); exactly 0 when empty
        """
        require_address(address)
        return self._quantity("eth_getBalance", [address, block])

    def get_transaction_count(self, address: str, block: str = "pending") -> int:
        """Get the account's next transaction sequence number."""
        require_address(address)
        return self._quantity("eth_getTransactionCount", [address, block])

    def get_gas_price(self) -> int:
        return self._quantity("eth_gasPrice", [])

    def get_chain_id(self) -> int:
        return self._quantity("eth_chainId", [])

    def get_block_number(self) -> int:
        return self._quantity("eth_blockNumber", [])

    def get_code(self, address: str, block: str = "latest") -> bytes:
        require_address(address)
        return self._data("eth_getCode", [address, block])

    def estimate_gas(self, tx: dict[str, Any]) -> int:
        return self._quantity("eth_estimateGas", [tx])

    def call(
        self,
        to: str,
        data: bytes,
        block: str = "latest",
        sender: Optional[str] = None,
        *,
        method: Optional[str] = None,
    ) -> bytes:
        """
        Evaluate a call without mutating state (eth_call).

        Args:
            to: Contract address
            data: Encoded call payload
            block: Block tag
            sender: Optional ``from`` address for msg.sender-dependent views
            method: Contract method name carried by any error raised

        Returns:
            Raw output bytes (possibly empty)

        Raises:
            CallReverted: The node rejected the call (revert data attached)
        """
        require_address(to, "contract address")
        tx: dict[str, Any] = {"to": to, "data": to_hex(data)}
        if sender is not None:
            tx["from"] = require_address(sender, "sender address")

        try:
            output = self._data("eth_call", [tx, block], contract=to, label=method)
        except RpcError as exc:
            revert_data = _revert_bytes(exc.data)
            reason = decode_revert_reason(revert_data)
            raise CallReverted(
                reason or exc.message,
                revert_data=revert_data,
                reason=reason,
                method=method,
                contract=to,
            ) from exc

        log.debug("call.evaluated", contract=to, contract_method=method, output_size=len(output))
        return output

    def get_transaction(self, tx_hash: str) -> Optional[dict[str, Any]]:
        return self.rpc.request("eth_getTransactionByHash", [tx_hash])

    def get_transaction_receipt(self, tx_hash: str) -> Optional[Receipt]:
        payload = self.rpc.request("eth_getTransactionReceipt", [tx_hash])
        if payload is None:
            return None
        if not isinstance(payload, dict):
            raise DecodingError(
                f"Malformed receipt for {tx_hash}", method="eth_getTransactionReceipt"
            )
        return Receipt.from_rpc(payload)


def _revert_bytes(data: Any) -> bytes:
    """Extract revert bytes from an error ``data`` member (string or object)."""
    if isinstance(data, dict):
        data = data.get("data")
    if isinstance(data, str):
        try:
            return hex_to_bytes(data)
        except ValueError:
            return b""
    return b""
