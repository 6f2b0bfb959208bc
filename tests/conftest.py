"""Shared fixtures: a scripted node, a funded key and a chain context."""

from __future__ import annotations

import pytest
from eth_account import Account

from _mock_node import MockNode
from monadex.chain import ChainContext, ReadClient, SigningClient

RPC_URL = "http://node.test"

# Well-known throwaway key; never holds real funds
PRIVATE_KEY = "0x4c0883a69102937d6231471b5dbb6204fe5129617082792ae468d01a3f362318"

TOKEN = "0x1111111111111111111111111111111111111111"
DEX = "0x2222222222222222222222222222222222222222"
QUOTE = "0x3333333333333333333333333333333333333333"
USER = "0x4444444444444444444444444444444444444444"


class FakeClock:
    """Monotonic clock that only moves when ``sleep`` is called."""

    def __init__(self) -> None:
        self.now = 0.0
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


@pytest.fixture()
def node() -> MockNode:
    return MockNode()


@pytest.fixture()
def private_key() -> str:
    return PRIVATE_KEY


@pytest.fixture()
def sender_address() -> str:
    return Account.from_key(PRIVATE_KEY).address


@pytest.fixture()
def reader(node: MockNode) -> ReadClient:
    return ReadClient(RPC_URL, transport=node.transport)


@pytest.fixture()
def signer(reader: ReadClient) -> SigningClient:
    return SigningClient(reader, Account.from_key(PRIVATE_KEY))


@pytest.fixture()
def chain(node: MockNode) -> ChainContext:
    return ChainContext(
        rpc_url=RPC_URL,
        timeout=5.0,
        poll_interval=0.0,
        transport=node.transport,
    )


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()
