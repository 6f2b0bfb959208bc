from __future__ import annotations

import functools
import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import jsonschema
from jsonschema import FormatChecker

from ..chain.deploy import DeploymentRecord
from ..logging import get_logger

log = get_logger(__name__)

DEFAULT_CONFIG_PATH = Path("config") / "deployment.json"
SCHEMA_PATH = Path(__file__).resolve().parent / "schemas" / "deployment.schema.json"


class InvalidRecordError(ValueError):
    """A deployment record that does not match the bundled schema."""

    def __init__(self, message: str, errors: Optional[list[str]] = None) -> None:
        super().__init__(message)
        self.errors = errors or []

    def __str__(self) -> str:
        if not self.errors:
            return super().__str__()
        return f"{super().__str__()} " + "; ".join(self.errors)


@functools.lru_cache(maxsize=1)
def _validator() -> jsonschema.Validator:
    with SCHEMA_PATH.open("r", encoding="utf-8") as f:
        schema = json.load(f)
    validator_cls = jsonschema.validators.validator_for(schema)
    validator_cls.check_schema(schema)
    return validator_cls(schema, format_checker=FormatChecker())


def validate_record(payload: Any) -> None:
    """Raise InvalidRecordError listing every `path: message` violation."""
    errors = sorted(_validator().iter_errors(payload), key=lambda e: list(e.path))
    if errors:
        raise InvalidRecordError(
            "Invalid deployment record.",
            errors=[f"{'/'.join(str(p) for p in err.path) or '<root>'}: {err.message}" for err in errors],
        )


@dataclass(frozen=True)
class DeploymentStore:
    """
    JSON file holding the latest DeploymentRecord.

    Both writes and reads are validated against the bundled schema, so a
    hand-edited file with extra keys or wrong types is rejected.
    """
    path: Path = DEFAULT_CONFIG_PATH

    def save(self, record: DeploymentRecord) -> Path:
        payload = record.to_dict()
        validate_record(payload)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(payload, indent=2) + "\n", encoding="utf-8")
        log.info("deployment.saved", path=str(self.path), contract_address=record.contract_address)
        return self.path

    def load(self) -> Optional[DeploymentRecord]:
        if not self.path.exists():
            return None
        payload = json.loads(self.path.read_text(encoding="utf-8"))
        validate_record(payload)
        return DeploymentRecord.from_dict(payload)
