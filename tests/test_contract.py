"""Tests for ABI-driven call encoding and result decoding."""

from __future__ import annotations

import pytest
from eth_abi import decode, encode

from conftest import DEX, QUOTE, TOKEN, USER
from monadex.chain import ContractBinding, ContractDescriptor, DecodingError, EncodingError, Mutability
from monadex.chain.contract import MethodSpec
from monadex.interfaces import MONAD_TOKEN_ABI, ORDERBOOK_DEX_ABI, OrderBook, TokenInfo

ECHO_ABI = [
    {
        "type": "function",
        "name": "echo",
        "inputs": [{"name": "value", "type": "uint256"}],
        "outputs": [{"name": "", "type": "uint256"}],
        "stateMutability": "pure",
    },
    {
        "type": "function",
        "name": "pair",
        "inputs": [
            {
                "name": "p",
                "type": "tuple",
                "components": [
                    {"name": "a", "type": "address"},
                    {"name": "b", "type": "uint256"},
                ],
            }
        ],
        "outputs": [],
        "stateMutability": "nonpayable",
    },
    {"type": "function", "name": "poke", "inputs": [], "outputs": [], "constant": True},
    {
        "type": "constructor",
        "inputs": [{"name": "owner", "type": "address"}, {"name": "cap", "type": "uint256"}],
        "stateMutability": "nonpayable",
    },
]


@pytest.fixture()
def token() -> ContractBinding:
    return ContractBinding.from_abi(TOKEN, MONAD_TOKEN_ABI)


class TestMethodSpec:
    def test_selector_matches_known_value(self) -> None:
        spec = ContractDescriptor.from_abi(TOKEN, MONAD_TOKEN_ABI).method("transfer")
        assert spec.signature == "transfer(address,uint256)"
        assert spec.selector == bytes.fromhex("a9059cbb")

    def test_tuple_inputs_are_expanded(self) -> None:
        spec = ContractDescriptor.from_abi(TOKEN, ECHO_ABI).method("pair")
        assert spec.signature == "pair((address,uint256))"

    def test_legacy_constant_flag_is_read(self) -> None:
        spec = ContractDescriptor.from_abi(TOKEN, ECHO_ABI).method("poke")
        assert spec.mutability is Mutability.READ

    def test_mutability(self) -> None:
        descriptor = ContractDescriptor.from_abi(TOKEN, MONAD_TOKEN_ABI)
        assert descriptor.method("balanceOf").mutability is Mutability.READ
        assert descriptor.method("mint").mutability is Mutability.WRITE


class TestDescriptor:
    def test_unknown_method(self) -> None:
        with pytest.raises(EncodingError, match="not found"):
            ContractDescriptor.from_abi(TOKEN, MONAD_TOKEN_ABI).method("rugPull")

    def test_overload_resolved_by_arity(self) -> None:
        abi = [
            {"type": "function", "name": "f", "inputs": [], "outputs": []},
            {"type": "function", "name": "f", "inputs": [{"name": "x", "type": "uint8"}], "outputs": []},
        ]
        descriptor = ContractDescriptor.from_abi(TOKEN, abi)
        assert descriptor.method("f", 1).inputs == ("uint8",)
        with pytest.raises(EncodingError, match="ambiguous"):
            descriptor.method("f")

    def test_events_are_ignored(self) -> None:
        abi = [{"type": "event", "name": "Transfer", "inputs": []}] + MONAD_TOKEN_ABI
        descriptor = ContractDescriptor.from_abi(TOKEN, abi)
        assert all(m.name != "Transfer" for m in descriptor.methods)


class TestEncode:
    def test_transfer_calldata(self, token: ContractBinding) -> None:
        data = token.encode("transfer", [USER, 1000])
        assert data[:4] == bytes.fromhex("a9059cbb")
        assert decode(["address", "uint256"], data[4:]) == (USER.lower(), 1000)

    def test_no_args_is_selector_only(self, token: ContractBinding) -> None:
        assert token.encode("publicMint") == MethodSpec("publicMint", ()).selector

    def test_wrong_arity(self, token: ContractBinding) -> None:
        with pytest.raises(EncodingError, match="expected 2 argument"):
            token.encode("transfer", [USER])

    def test_incompatible_value(self, token: ContractBinding) -> None:
        with pytest.raises(EncodingError, match="not encodable as uint256"):
            token.encode("transfer", [USER, -1])

    def test_bad_address(self, token: ContractBinding) -> None:
        with pytest.raises(EncodingError):
            token.encode("balanceOf", ["0x1234"])

    def test_hex_string_for_bytes(self) -> None:
        abi = [{"type": "function", "name": "store", "inputs": [{"name": "d", "type": "bytes32"}], "outputs": []}]
        binding = ContractBinding.from_abi(TOKEN, abi)
        data = binding.encode("store", ["0x" + "ab" * 32])
        assert data[4:] == bytes.fromhex("ab" * 32)

    def test_invalid_hex_for_bytes(self) -> None:
        abi = [{"type": "function", "name": "store", "inputs": [{"name": "d", "type": "bytes"}], "outputs": []}]
        with pytest.raises(EncodingError, match="argument 0"):
            ContractBinding.from_abi(TOKEN, abi).encode("store", ["0xzz"])

    def test_build_call_tags_mutability(self, token: ContractBinding) -> None:
        assert token.build_call("balanceOf", [USER]).is_read
        assert not token.build_call("burn", [5]).is_read


class TestConstructor:
    def test_encodes_without_selector(self) -> None:
        binding = ContractBinding.from_abi("", ECHO_ABI)
        assert binding.encode_constructor([USER, 7]) == encode(["address", "uint256"], [USER, 7])

    def test_no_constructor_no_args(self) -> None:
        assert ContractBinding.from_abi("", MONAD_TOKEN_ABI).encode_constructor([]) == b""

    def test_no_constructor_with_args(self) -> None:
        with pytest.raises(EncodingError):
            ContractBinding.from_abi("", MONAD_TOKEN_ABI).encode_constructor([1])


class TestDecode:
    def test_echo_round_trip(self) -> None:
        binding = ContractBinding.from_abi(TOKEN, ECHO_ABI)
        calldata = binding.encode("echo", [987654321])
        assert binding.decode("echo", calldata[4:]) == 987654321

    def test_no_outputs_is_none(self, token: ContractBinding) -> None:
        assert token.decode("burn", b"") is None

    def test_empty_data_is_an_error_not_zero(self, token: ContractBinding) -> None:
        with pytest.raises(DecodingError, match="empty return data"):
            token.decode("balanceOf", b"")

    def test_short_data(self, token: ContractBinding) -> None:
        with pytest.raises(DecodingError):
            token.decode("balanceOf", b"\x00" * 7)

    def test_multiple_outputs(self, token: ContractBinding) -> None:
        raw = encode(["string", "string", "uint256", "uint8"], ["Monad Token", "MTK", 10**24, 18])
        info = TokenInfo.from_result(token.decode("getTokenInfo", raw))
        assert info == TokenInfo("Monad Token", "MTK", 10**24, 18)


class TestOrderBook:
    def test_pairs_levels(self) -> None:
        dex = ContractBinding.from_abi(DEX, ORDERBOOK_DEX_ABI)
        raw = encode(
            ["uint256[]", "uint256[]", "uint256[]", "uint256[]"],
            [[25, 24], [100, 50], [26], [70]],
        )
        book = OrderBook.from_result(dex.decode("getOrderBook", raw))
        assert book.buys == [(25, 100), (24, 50)]
        assert book.sells == [(26, 70)]

    def test_mismatched_lengths(self) -> None:
        with pytest.raises(DecodingError):
            OrderBook.from_result(([1, 2], [3], [], []))

    def test_get_order_book_encodes_pair(self) -> None:
        dex = ContractBinding.from_abi(DEX, ORDERBOOK_DEX_ABI)
        data = dex.encode("getOrderBook", [TOKEN, QUOTE])
        assert decode(["address", "address"], data[4:]) == (TOKEN, QUOTE)
