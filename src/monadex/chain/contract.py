"""
Contract Binding - ABI-driven encoding and decoding of contract calls.

A ``ContractDescriptor`` pairs a contract address with the methods of its
ABI.  ``ContractBinding`` turns (method, args) into calldata and raw return
bytes back into Python values, validating everything it can before any
network round trip.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Iterable, Optional, Sequence

from eth_abi import decode, encode, is_encodable
from eth_abi.exceptions import DecodingError as AbiDecodingError
from eth_abi.exceptions import EncodingError as AbiEncodingError
from eth_utils import keccak

from ..utils import hex_to_bytes
from .errors import DecodingError, EncodingError

READ_ONLY_MUTABILITIES = frozenset({"view", "pure"})


class Mutability(enum.Enum):
    READ = "read"
    WRITE = "write"


def _canonical_type(param: dict[str, Any]) -> str:
    """Canonical ABI type string, expanding tuple components."""
    typ = param["type"]
    if typ.startswith("tuple"):
        inner = ",".join(_canonical_type(c) for c in param.get("components", []))
        return f"({inner}){typ[len('tuple'):]}"
    return typ


@dataclass(frozen=True)
class MethodSpec:
    name: str
    inputs: tuple[str, ...]
    outputs: tuple[str, ...] = ()
    state_mutability: str = "nonpayable"

    @classmethod
    def from_abi_entry(cls, entry: dict[str, Any]) -> "MethodSpec":
        mutability = entry.get("stateMutability")
        if mutability is None:
            # Pre-0.5 ABIs only carry the constant/payable flags
            if entry.get("constant"):
                mutability = "view"
            elif entry.get("payable"):
                mutability = "payable"
            else:
                mutability = "nonpayable"
        return cls(
            name=entry.get("name", ""),
            inputs=tuple(_canonical_type(p) for p in entry.get("inputs", [])),
            outputs=tuple(_canonical_type(p) for p in entry.get("outputs", [])),
            state_mutability=mutability,
        )

    @property
    def signature(self) -> str:
        return f"{self.name}({','.join(self.inputs)})"

    @property
    def selector(self) -> bytes:
        return keccak(text=self.signature)[:4]

    @property
    def mutability(self) -> Mutability:
        if self.state_mutability in READ_ONLY_MUTABILITIES:
            return Mutability.READ
        return Mutability.WRITE


@dataclass(frozen=True)
class ContractDescriptor:
    """
    A deployed contract's address and its callable interface.

    The interface is trusted as given: a mismatch with the deployed bytecode
    shows up when results are decoded, not when calls are encoded.
    """
    address: str
    methods: tuple[MethodSpec, ...]
    constructor: Optional[MethodSpec] = None

    @classmethod
    def from_abi(cls, address: str, abi: Iterable[dict[str, Any]]) -> "ContractDescriptor":
        methods: list[MethodSpec] = []
        constructor = None
        for entry in abi:
            kind = entry.get("type", "function")
            if kind == "function":
                methods.append(MethodSpec.from_abi_entry(entry))
            elif kind == "constructor":
                constructor = MethodSpec.from_abi_entry({**entry, "name": "constructor"})
        return cls(address=address, methods=tuple(methods), constructor=constructor)

    def method(self, name: str, arg_count: Optional[int] = None) -> MethodSpec:
        """
        Look up a method by name, resolving overloads by argument count.

        Raises:
            EncodingError: Unknown method, or no overload takes ``arg_count``
        """
        candidates = [m for m in self.methods if m.name == name]
        if not candidates:
            raise EncodingError(
                "method not found in interface", method=name, contract=self.address
            )
        if len(candidates) == 1:
            return candidates[0]
        if arg_count is not None:
            matching = [m for m in candidates if len(m.inputs) == arg_count]
            if len(matching) == 1:
                return matching[0]
        raise EncodingError(
            f"ambiguous overload ({len(candidates)} candidates)",
            method=name,
            contract=self.address,
        )


@dataclass(frozen=True)
class Call:
    """One invocation of a contract method, tagged read or write."""
    method: str
    args: tuple[Any, ...] = field(default_factory=tuple)
    mutability: Mutability = Mutability.READ

    @property
    def is_read(self) -> bool:
        return self.mutability is Mutability.READ


def _coerce_arg(typ: str, value: Any) -> Any:
    """Accept hex strings for byte types; everything else passes unchanged."""
    if typ.endswith("]") and isinstance(value, (list, tuple)):
        base = typ[: typ.rindex("[")]
        return [_coerce_arg(base, v) for v in value]
    if typ.startswith("bytes") and isinstance(value, str):
        return hex_to_bytes(value)
    return value


class ContractBinding:
    """Encode calls for, and decode results from, one contract."""

    def __init__(self, descriptor: ContractDescriptor) -> None:
        self.descriptor = descriptor

    @classmethod
    def from_abi(cls, address: str, abi: Iterable[dict[str, Any]]) -> "ContractBinding":
        return cls(ContractDescriptor.from_abi(address, abi))

    @property
    def address(self) -> str:
        return self.descriptor.address

    def build_call(self, method: str, args: Sequence[Any] = ()) -> Call:
        spec = self.descriptor.method(method, len(args))
        return Call(method=method, args=tuple(args), mutability=spec.mutability)

    def _encode_args(self, spec: MethodSpec, args: Sequence[Any]) -> bytes:
        if len(args) != len(spec.inputs):
            raise EncodingError(
                f"expected {len(spec.inputs)} argument(s), got {len(args)}",
                method=spec.name,
                contract=self.address,
            )
        values = []
        for index, (typ, value) in enumerate(zip(spec.inputs, args)):
            try:
                coerced = _coerce_arg(typ, value)
            except ValueError as exc:
                raise EncodingError(
                    f"argument {index} is not valid for {typ}: {exc}",
                    method=spec.name,
                    contract=self.address,
                ) from exc
            if not is_encodable(typ, coerced):
                raise EncodingError(
                    f"argument {index} ({value!r}) is not encodable as {typ}",
                    method=spec.name,
                    contract=self.address,
                )
            values.append(coerced)
        if not values:
            return b""
        try:
            return encode(list(spec.inputs), values)
        except (AbiEncodingError, ValueError, TypeError) as exc:
            raise EncodingError(str(exc), method=spec.name, contract=self.address) from exc

    def encode(self, method: str, args: Sequence[Any] = ()) -> bytes:
        """
        ABI-encode a method call.

        Returns:
            4-byte selector followed by the encoded arguments

        Raises:
            EncodingError: Unknown method, wrong arity or incompatible value
        """
        spec = self.descriptor.method(method, len(args))
        return spec.selector + self._encode_args(spec, args)

    def encode_call(self, call: Call) -> bytes:
        return self.encode(call.method, call.args)

    def encode_constructor(self, args: Sequence[Any] = ()) -> bytes:
        """ABI-encode constructor arguments (no selector)."""
        constructor = self.descriptor.constructor
        if constructor is None:
            if args:
                raise EncodingError(
                    "interface has no constructor but arguments were given",
                    method="constructor",
                )
            return b""
        return self._encode_args(constructor, args)

    def decode(self, method: str, raw: bytes, arg_count: Optional[int] = None) -> Any:
        """
        ABI-decode a method's return data.

        Returns:
            None for methods without outputs, the value for a single output,
            otherwise a tuple

        Raises:
            DecodingError: Empty, short or malformed data.  A zero value is
            never substituted for missing data.
        """
        spec = self.descriptor.method(method, arg_count)
        if not spec.outputs:
            return None
        if not raw:
            raise DecodingError(
                "empty return data (is the interface right for this contract?)",
                method=method,
                contract=self.address,
            )
        try:
            decoded = decode(list(spec.outputs), bytes(raw))
        except AbiDecodingError as exc:
            raise DecodingError(str(exc), method=method, contract=self.address) from exc

        if len(decoded) == 1:
            return decoded[0]
        return decoded

