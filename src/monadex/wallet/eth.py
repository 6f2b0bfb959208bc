"""
ECDSA / secp256k1 key handling.

A private key is supplied per invocation (``--private-key`` / ``PRIVATE_KEY``)
or read from ``~/.monadex/.env``.  The key is turned into an eth-account
``LocalAccount`` and never written anywhere by this module.

Dependencies: eth-account (no full web3.py needed)
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from eth_account import Account
from eth_account.signers.local import LocalAccount

from ..utils import HEX_RE, strip_0x

# Default config directory
MONADEX_DIR = Path.home() / ".monadex"
MONADEX_ENV = MONADEX_DIR / ".env"


def normalize_private_key(private_key: str) -> str:
    """
    Validate the shape of a hex private key and add the 0x prefix.

    Raises:
        ValueError: If the key is not 32 bytes of hex.  The message never
            echoes the key itself.
    """
    key = (private_key or "").strip()
    body = strip_0x(key)
    if len(body) != 64 or not HEX_RE.match(body):
        raise ValueError("Private key must be 32 bytes of hex (64 hex characters)")
    return "0x" + body


def load_private_key(env_path: Optional[Path] = None) -> str:
    """
    Load private key from the environment or a .env file.

    Args:
        env_path: Path to .env file (default: ~/.monadex/.env)

    Returns:
        0x-prefixed hex private key

    Raises:
        ValueError: If PRIVATE_KEY is not set anywhere
    """
    env_path = env_path or MONADEX_ENV

    if env_path.exists():
        load_dotenv(env_path, override=False)

    private_key = os.environ.get("PRIVATE_KEY")
    if not private_key:
        raise ValueError(
            f"PRIVATE_KEY not found. Pass --private-key or set PRIVATE_KEY "
            f"in the environment or {env_path}"
        )

    return normalize_private_key(private_key)


def get_account(private_key: Optional[str] = None) -> LocalAccount:
    """
    Get an eth-account LocalAccount from a private key.

    Args:
        private_key: hex private key.  If None, loads from the environment.

    Returns:
        LocalAccount instance for signing transactions
    """
    if private_key is None:
        private_key = load_private_key()
    key = normalize_private_key(private_key)
    return Account.from_key(key)


def get_address(private_key: Optional[str] = None) -> str:
    """
    Get the address for a private key.

    Returns:
        0x-prefixed checksummed address
    """
    return get_account(private_key).address
