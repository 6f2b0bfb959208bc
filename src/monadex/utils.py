from __future__ import annotations

import re
from typing import Any

HEX_RE = re.compile(r"^(0x)?[0-9a-fA-F]*$")


def strip_0x(value: str) -> str:
    return value[2:] if value[:2].lower() == "0x" else value


def hex_to_bytes(value: str) -> bytes:
    """Decode a hex string with or without the 0x prefix."""
    if not isinstance(value, str) or not HEX_RE.match(value):
        raise ValueError(f"Not a hex string: {value!r}")
    body = strip_0x(value)
    if len(body) % 2:
        raise ValueError(f"Hex string has odd length: {value!r}")
    return bytes.fromhex(body)


def to_hex(data: bytes) -> str:
    return "0x" + bytes(data).hex()


def to_quantity(value: int) -> str:
    """Encode a non-negative integer as a JSON-RPC quantity."""
    if value < 0:
        raise ValueError(f"Quantity must be non-negative: {value}")
    return hex(value)


def parse_quantity(value: Any) -> int:
    """Decode a JSON-RPC quantity ("0x1a") into an int."""
    if not isinstance(value, str) or not value.lower().startswith("0x"):
        raise ValueError(f"Not a hex quantity: {value!r}")
    return int(value, 16)


def short_address(address: str) -> str:
    return address[:10] + "..." if len(address) > 10 else address
