"""
Contract interfaces for the MonadToken ERC-20 and the OrderBookDEX.

The ABIs describe only what the commands call.  Result helpers turn the
raw decoded tuples into named values for display.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .chain.errors import DecodingError


def _fn(
    name: str,
    inputs: list[tuple[str, str]],
    outputs: list[str],
    mutability: str = "nonpayable",
) -> dict[str, Any]:
    return {
        "type": "function",
        "name": name,
        "inputs": [{"name": n, "type": t} for n, t in inputs],
        "outputs": [{"name": "", "type": t} for t in outputs],
        "stateMutability": mutability,
    }


# ---------------------------------------------------------------------------
# MonadToken (ERC-20 with owner mint, public mint and burn)
# ---------------------------------------------------------------------------
MONAD_TOKEN_ABI: list[dict[str, Any]] = [
    _fn("name", [], ["string"], "view"),
    _fn("symbol", [], ["string"], "view"),
    _fn("decimals", [], ["uint8"], "view"),
    _fn("totalSupply", [], ["uint256"], "view"),
    _fn("balanceOf", [("account", "address")], ["uint256"], "view"),
    _fn("transfer", [("to", "address"), ("amount", "uint256")], ["bool"]),
    _fn("approve", [("spender", "address"), ("amount", "uint256")], ["bool"]),
    _fn("allowance", [("owner", "address"), ("spender", "address")], ["uint256"], "view"),
    _fn("mint", [("to", "address"), ("amount", "uint256")], []),
    _fn("publicMint", [], []),
    _fn("burn", [("amount", "uint256")], []),
    _fn("getTokenInfo", [], ["string", "string", "uint256", "uint8"], "view"),
    _fn("getBalance", [("account", "address")], ["uint256"], "view"),
]

# ---------------------------------------------------------------------------
# OrderBookDEX
# ---------------------------------------------------------------------------
ORDERBOOK_DEX_ABI: list[dict[str, Any]] = [
    _fn(
        "addTradingPair",
        [
            ("baseToken", "address"),
            ("quoteToken", "address"),
            ("minOrderSize", "uint256"),
            ("pricePrecision", "uint256"),
        ],
        [],
    ),
    _fn(
        "placeLimitOrder",
        [
            ("baseToken", "address"),
            ("quoteToken", "address"),
            ("amount", "uint256"),
            ("price", "uint256"),
            ("isBuy", "bool"),
        ],
        ["uint256"],
    ),
    _fn(
        "placeMarketOrder",
        [
            ("baseToken", "address"),
            ("quoteToken", "address"),
            ("amount", "uint256"),
            ("isBuy", "bool"),
        ],
        [],
    ),
    _fn("cancelOrder", [("orderId", "uint256")], []),
    _fn(
        "getOrderBook",
        [("baseToken", "address"), ("quoteToken", "address")],
        ["uint256[]", "uint256[]", "uint256[]", "uint256[]"],
        "view",
    ),
    _fn("getUserOrders", [("user", "address")], ["uint256[]"], "view"),
    _fn(
        "getUserBalance",
        [("user", "address"), ("token", "address")],
        ["uint256"],
        "view",
    ),
    _fn("withdraw", [("token", "address"), ("amount", "uint256")], []),
    _fn(
        "tradingPairs",
        [("", "address"), ("", "address")],
        ["address", "address", "bool", "uint256", "uint256"],
        "view",
    ),
    _fn(
        "orders",
        [("", "uint256")],
        ["uint256", "address", "address", "address", "uint256", "uint256", "bool", "bool", "uint256"],
        "view",
    ),
]


@dataclass(frozen=True)
class TokenInfo:
    name: str
    symbol: str
    total_supply: int
    decimals: int

    @classmethod
    def from_result(cls, result: tuple) -> "TokenInfo":
        name, symbol, total_supply, decimals = result
        return cls(name=name, symbol=symbol, total_supply=total_supply, decimals=decimals)


@dataclass(frozen=True)
class OrderBook:
    """Buy and sell levels as ordered (price, amount) pairs."""
    buys: list[tuple[int, int]]
    sells: list[tuple[int, int]]

    @classmethod
    def from_result(cls, result: tuple) -> "OrderBook":
        """
        Pair the four parallel arrays returned by ``getOrderBook``.

        Raises:
            DecodingError: If a price array and its amount array differ in length
        """
        buy_prices, buy_amounts, sell_prices, sell_amounts = result
        if len(buy_prices) != len(buy_amounts) or len(sell_prices) != len(sell_amounts):
            raise DecodingError(
                "price and amount arrays differ in length", method="getOrderBook"
            )
        return cls(
            buys=list(zip(buy_prices, buy_amounts)),
            sells=list(zip(sell_prices, sell_amounts)),
        )
