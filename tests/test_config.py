"""Tests for settings, key loading and log redaction."""

from __future__ import annotations

import io
import json
import os
from pathlib import Path
from unittest.mock import patch

import pytest

from conftest import PRIVATE_KEY
from monadex.chain.deploy import DEFAULT_NETWORK
from monadex.chain.rpc import DEFAULT_RPC_URL
from monadex.chain.session import DEFAULT_GAS_PRICE
from monadex.config import Settings, load_env_files
from monadex.logging import configure_logging, get_logger
from monadex.logging.config import REDACTED, redact_secrets
from monadex.wallet.eth import get_account, load_private_key, normalize_private_key


class TestSettings:
    def test_defaults(self) -> None:
        settings = Settings.from_env({})
        assert settings.rpc_url == DEFAULT_RPC_URL
        assert settings.chain_id is None
        assert settings.gas_price == DEFAULT_GAS_PRICE == 20_000_000_000
        assert settings.network == DEFAULT_NETWORK == "monad_testnet"
        assert settings.deployment_config == Path("config") / "deployment.json"

    def test_from_env(self) -> None:
        settings = Settings.from_env(
            {
                "RPC_URL": "http://localhost:8545",
                "CHAIN_ID": "10143",
                "GAS_PRICE": "0x3b9aca00",
                "NETWORK_NAME": "local",
                "DEPLOYMENT_CONFIG": "/tmp/d.json",
            }
        )
        assert settings.rpc_url == "http://localhost:8545"
        assert settings.chain_id == 10143
        assert settings.gas_price == 1_000_000_000
        assert settings.network == "local"
        assert settings.deployment_config == Path("/tmp/d.json")

    def test_blank_values_fall_back(self) -> None:
        settings = Settings.from_env({"RPC_URL": "", "CHAIN_ID": "  "})
        assert settings.rpc_url == DEFAULT_RPC_URL
        assert settings.chain_id is None

    def test_invalid_integer_names_variable(self) -> None:
        with pytest.raises(ValueError, match="GAS_PRICE"):
            Settings.from_env({"GAS_PRICE": "twenty"})

    def test_env_file_does_not_override(self, tmp_path: Path) -> None:
        (tmp_path / ".env").write_text("RPC_URL=http://from-file\nMONADEX_TEST_ONLY=1\n", encoding="utf-8")
        with patch.dict(os.environ, {"RPC_URL": "http://from-env"}):
            with patch("monadex.config.MONADEX_ENV", tmp_path / "missing.env"):
                loaded = load_env_files(tmp_path)
            assert loaded == [tmp_path / ".env"]
            assert os.environ["RPC_URL"] == "http://from-env"
            assert os.environ["MONADEX_TEST_ONLY"] == "1"
        os.environ.pop("MONADEX_TEST_ONLY", None)


class TestPrivateKey:
    def test_normalize_adds_prefix(self) -> None:
        assert normalize_private_key(PRIVATE_KEY[2:]) == PRIVATE_KEY

    def test_normalize_rejects_without_echo(self) -> None:
        bad = "zz" * 32
        with pytest.raises(ValueError) as exc_info:
            normalize_private_key(bad)
        assert bad not in str(exc_info.value)

    def test_load_from_env_file(self, tmp_path: Path) -> None:
        env_path = tmp_path / ".env"
        env_path.write_text(f"PRIVATE_KEY={PRIVATE_KEY}\n", encoding="utf-8")
        with patch.dict(os.environ, {}, clear=True):
            assert load_private_key(env_path) == PRIVATE_KEY

    def test_missing_key(self, tmp_path: Path) -> None:
        with patch.dict(os.environ, {}, clear=True):
            with pytest.raises(ValueError, match="PRIVATE_KEY not found"):
                load_private_key(tmp_path / "absent.env")

    def test_account_address(self) -> None:
        assert get_account(PRIVATE_KEY).address == "0x2c7536E3605D9C16a7a3D7b1898e529396a65c23"


class TestLogging:
    def test_redact_secrets(self) -> None:
        event = {"event": "x", "private_key": PRIVATE_KEY, "DB_PASSWORD": "hunter2", "tx_hash": "0xab"}
        redacted = redact_secrets(None, "info", event)
        assert redacted["private_key"] == REDACTED
        assert redacted["DB_PASSWORD"] == REDACTED
        assert redacted["tx_hash"] == "0xab"

    def test_json_output_is_redacted(self) -> None:
        stream = io.StringIO()
        configure_logging(level="INFO", format_json=True, stream=stream)
        get_logger("monadex.test").info("key.loaded", private_key=PRIVATE_KEY, sender="0xabc")
        line = json.loads(stream.getvalue().strip().splitlines()[-1])
        assert line["event"] == "key.loaded"
        assert line["private_key"] == REDACTED
        assert PRIVATE_KEY not in stream.getvalue()

    def test_level_filters(self) -> None:
        stream = io.StringIO()
        configure_logging(level="WARNING", stream=stream)
        get_logger("monadex.test").info("quiet")
        assert stream.getvalue() == ""

    def test_unknown_level(self) -> None:
        with pytest.raises(ValueError):
            configure_logging(level="LOUD")
