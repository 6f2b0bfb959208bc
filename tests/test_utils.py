"""Unit tests for utils.py functions."""

from __future__ import annotations

import pytest

from monadex.utils import hex_to_bytes, parse_quantity, short_address, strip_0x, to_hex, to_quantity


class TestHex:
    def test_strip_0x(self) -> None:
        assert strip_0x("0xab") == "ab"
        assert strip_0x("0XAB") == "AB"
        assert strip_0x("ab") == "ab"

    def test_hex_to_bytes(self) -> None:
        assert hex_to_bytes("0x") == b""
        assert hex_to_bytes("0x00ff") == b"\x00\xff"
        assert hex_to_bytes("00ff") == b"\x00\xff"

    @pytest.mark.parametrize("value", ["0x0", "0xgg", 12, None])
    def test_hex_to_bytes_rejects(self, value) -> None:
        with pytest.raises(ValueError):
            hex_to_bytes(value)

    def test_to_hex(self) -> None:
        assert to_hex(b"\x01\x02") == "0x0102"
        assert to_hex(b"") == "0x"


class TestQuantity:
    def test_to_quantity(self) -> None:
        assert to_quantity(0) == "0x0"
        assert to_quantity(255) == "0xff"
        with pytest.raises(ValueError):
            to_quantity(-1)

    def test_parse_quantity(self) -> None:
        assert parse_quantity("0x0") == 0
        assert parse_quantity("0x1A") == 26

    @pytest.mark.parametrize("value", ["26", 26, None, ""])
    def test_parse_quantity_rejects(self, value) -> None:
        with pytest.raises(ValueError):
            parse_quantity(value)


def test_short_address() -> None:
    assert short_address("0x1234567890abcdef1234567890abcdef12345678") == "0x12345678..."
    assert short_address("0x1234") == "0x1234"
