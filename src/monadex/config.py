"""
Runtime configuration.

Plain strings and integers only, read from the environment.  ``.env`` files
are loaded first (working directory, then ``~/.monadex/.env``); variables
already set in the environment always win.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv

from .chain.deploy import DEFAULT_NETWORK
from .chain.rpc import DEFAULT_RPC_URL
from .chain.session import DEFAULT_GAS_PRICE
from .records import DEFAULT_CONFIG_PATH
from .wallet.eth import MONADEX_ENV


def load_env_files(cwd: Optional[Path] = None) -> list[Path]:
    """Load ./.env and ~/.monadex/.env without overriding set variables."""
    loaded = []
    for candidate in ((cwd or Path.cwd()) / ".env", MONADEX_ENV):
        if candidate.is_file():
            load_dotenv(candidate, override=False)
            loaded.append(candidate)
    return loaded


def _int_env(env: Mapping[str, str], name: str) -> Optional[int]:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return None
    try:
        return int(raw.strip(), 0)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


@dataclass(frozen=True)
class Settings:
    rpc_url: str = DEFAULT_RPC_URL
    chain_id: Optional[int] = None
    gas_price: int = DEFAULT_GAS_PRICE
    network: str = DEFAULT_NETWORK
    deployment_config: Path = DEFAULT_CONFIG_PATH

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if env is None else env
        gas_price = _int_env(env, "GAS_PRICE")
        return cls(
            rpc_url=env.get("RPC_URL") or DEFAULT_RPC_URL,
            chain_id=_int_env(env, "CHAIN_ID"),
            gas_price=DEFAULT_GAS_PRICE if gas_price is None else gas_price,
            network=env.get("NETWORK_NAME") or DEFAULT_NETWORK,
            deployment_config=Path(env.get("DEPLOYMENT_CONFIG") or DEFAULT_CONFIG_PATH),
        )
