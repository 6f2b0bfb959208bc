"""Tests for the on-disk deployment record."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from monadex.chain import DeploymentRecord
from monadex.records import DeploymentStore, InvalidRecordError, validate_record
from monadex.records.store import SCHEMA_PATH

CONTRACT = "0x5FbDB2315678afecb367f032d93F642f64180aa3"
DEPLOYER = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"
TX = "0x" + "12" * 32


@pytest.fixture()
def record() -> DeploymentRecord:
    return DeploymentRecord(
        contract_address=CONTRACT,
        deployer_address=DEPLOYER,
        network="monad_testnet",
        deployment_tx=TX,
    )


class TestDeploymentStore:
    def test_save_then_load(self, tmp_path: Path, record: DeploymentRecord) -> None:
        store = DeploymentStore(tmp_path / "config" / "deployment.json")
        saved = store.save(record)
        assert saved.exists()
        assert store.load() == record

    def test_file_is_flat_json(self, tmp_path: Path, record: DeploymentRecord) -> None:
        path = DeploymentStore(tmp_path / "deployment.json").save(record)
        assert json.loads(path.read_text(encoding="utf-8")) == {
            "contract_address": CONTRACT,
            "deployer_address": DEPLOYER,
            "network": "monad_testnet",
            "deployment_tx": TX,
        }

    def test_missing_file_is_none(self, tmp_path: Path) -> None:
        assert DeploymentStore(tmp_path / "absent.json").load() is None

    def test_null_fields_are_allowed(self, tmp_path: Path) -> None:
        path = tmp_path / "deployment.json"
        path.write_text(
            json.dumps(
                {
                    "contract_address": None,
                    "deployer_address": None,
                    "network": "monad_testnet",
                    "deployment_tx": None,
                }
            ),
            encoding="utf-8",
        )
        loaded = DeploymentStore(path).load()
        assert loaded is not None
        assert loaded.contract_address is None

    def test_rejects_extra_keys(self, tmp_path: Path, record: DeploymentRecord) -> None:
        path = tmp_path / "deployment.json"
        payload = {**record.to_dict(), "private_key": "0x" + "11" * 32}
        path.write_text(json.dumps(payload), encoding="utf-8")
        with pytest.raises(InvalidRecordError, match="Additional properties"):
            DeploymentStore(path).load()

    def test_rejects_bad_address_before_writing(self, tmp_path: Path) -> None:
        path = tmp_path / "deployment.json"
        bad = DeploymentRecord(
            contract_address="0x1234", deployer_address=DEPLOYER, network="x", deployment_tx=TX
        )
        with pytest.raises(InvalidRecordError, match="contract_address"):
            DeploymentStore(path).save(bad)
        assert not path.exists()


class TestValidateRecord:
    def test_bundled_schema_exists(self, record: DeploymentRecord) -> None:
        assert SCHEMA_PATH.exists()
        validate_record(record.to_dict())

    def test_missing_required(self) -> None:
        with pytest.raises(InvalidRecordError) as exc_info:
            validate_record({"network": "x"})
        assert any("required" in err for err in exc_info.value.errors)

    def test_errors_name_the_field(self, record: DeploymentRecord) -> None:
        with pytest.raises(InvalidRecordError) as exc_info:
            validate_record({**record.to_dict(), "deployment_tx": "0xabc"})
        assert [err.split(":")[0] for err in exc_info.value.errors] == ["deployment_tx"]
