"""
Artifact Loader - Loads contract ABIs and bytecode from build output.

The artifacts are produced by an external build step (Foundry or Hardhat).
Supported layouts:
- Foundry:  {"abi": [...], "bytecode": {"object": "0x..."}}
- Hardhat:  {"abi": [...], "bytecode": "0x..."}
- Bare ABI: [...]
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from ..utils import hex_to_bytes


@dataclass(frozen=True)
class Artifact:
    abi: list[dict[str, Any]]
    bytecode: Optional[bytes] = None

    def require_bytecode(self) -> bytes:
        if not self.bytecode:
            raise ValueError("Artifact carries no deployment bytecode")
        return self.bytecode


def parse_bytecode(value: str) -> bytes:
    """
    Parse hex bytecode (with or without 0x).

    Raises:
        ValueError: If the value is empty or not hex
    """
    data = hex_to_bytes(value.strip())
    if not data:
        raise ValueError("Bytecode is empty")
    return data


def load_artifact(path: Path) -> Artifact:
    """
    Load an ABI (and bytecode, when present) from a JSON build artifact.

    Args:
        path: Path to the artifact JSON file

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the JSON has no recognisable ABI
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Artifact not found: {path}")

    with path.open("r", encoding="utf-8") as f:
        payload = json.load(f)

    if isinstance(payload, list):
        return Artifact(abi=payload)

    if not isinstance(payload, dict) or not isinstance(payload.get("abi"), list):
        raise ValueError(f"No ABI found in {path}")

    raw_bytecode = payload.get("bytecode")
    if isinstance(raw_bytecode, dict):
        raw_bytecode = raw_bytecode.get("object")

    bytecode = hex_to_bytes(raw_bytecode) if raw_bytecode else None
    return Artifact(abi=payload["abi"], bytecode=bytecode or None)


def load_abi(path: Path) -> list[dict[str, Any]]:
    """Load only the ABI from an artifact or bare ABI file."""
    return load_artifact(path).abi
