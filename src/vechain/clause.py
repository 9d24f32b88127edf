"""
Clauses
^^^^^^^

.. contents:: Table of Contents
    :backlinks: none
    :local:

Introduction
------------

A clause is one operation inside a transaction: a value transfer, a
contract call or a contract deployment. A transaction carries an ordered
list of them and they execute atomically.
"""

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from ethereum_types.bytes import Bytes
from ethereum_types.frozen import slotted_freezable
from ethereum_types.numeric import U256

from vechain.base_types import (
    Address,
    to_bytes,
    to_optional_fixed_bytes,
    to_uint,
)
from vechain.exceptions import FieldValidationError, InvalidClauseError
from vechain.rlp import HexBlob, Numeric, OptionalFixedHexBlob, Profile

CLAUSE_PROFILE = Profile.struct(
    "clause",
    [
        Profile("to", OptionalFixedHexBlob(20)),
        Profile("value", Numeric(32)),
        Profile("data", HexBlob()),
    ],
)


@slotted_freezable
@dataclass
class Clause:
    """
    A single operation of a transaction. `to` is `None` for a contract
    deployment, in which case `data` holds the bytecode.
    """

    to: Optional[Address]
    value: U256
    data: Bytes

    def __post_init__(self) -> None:
        self.to = to_optional_fixed_bytes(self.to, Address, "clause.to")
        self.value = to_uint(self.value, U256, "clause.value")
        self.data = to_bytes(self.data, "clause.data")
        if self.to is None and not self.data:
            raise InvalidClauseError(
                "contract creation requires bytecode", "clause.data"
            )

    @classmethod
    def transfer(cls, to: Any, value: Any) -> "Clause":
        """
        Build a clause moving `value` wei of VET to `to`.
        """
        if to is None or to in ("", "0x", b""):
            raise InvalidClauseError(
                "transfer requires a recipient", "clause.to"
            )
        return cls(to=to, value=value, data=b"")

    @classmethod
    def call(cls, to: Any, value: Any, data: Any) -> "Clause":
        """
        Build a clause invoking the contract at `to` with ABI encoded `data`.
        """
        if to is None or to in ("", "0x", b""):
            raise InvalidClauseError("call requires a contract", "clause.to")
        return cls(to=to, value=value, data=data)

    @classmethod
    def deploy(cls, bytecode: Any, value: Any = 0) -> "Clause":
        """
        Build a clause creating a contract from `bytecode`.
        """
        return cls(to=None, value=value, data=bytecode)

    @classmethod
    def from_dict(cls, fields: Mapping[str, Any]) -> "Clause":
        """
        Build a clause from a mapping with `to`, `value` and `data` keys.
        Missing keys take their empty value.
        """
        unknown = set(fields) - set(CLAUSE_PROFILE.field_names)
        if unknown:
            raise FieldValidationError(
                f"unknown field(s) {', '.join(sorted(unknown))}", "clause"
            )
        return cls(
            to=fields.get("to"),
            value=fields.get("value", 0),
            data=fields.get("data", b""),
        )

    @property
    def is_contract_creation(self) -> bool:
        """
        Whether this clause deploys a contract.
        """
        return self.to is None


def encode_value(value: Any) -> Bytes:
    """
    Encode a clause value as its minimal big endian byte string.

    Parameters
    ----------
    value :
        Amount of wei, at most 32 bytes wide.

    Returns
    -------
    encoded : `Bytes`
        Big endian bytes without leading zeros. Zero is the empty string.
    """
    return Numeric(32).encode(value, "clause.value")


def decode_value(buffer: Bytes) -> U256:
    """
    Decode a big endian clause value.

    Parameters
    ----------
    buffer :
        Minimal big endian bytes, as produced by `encode_value`.

    Returns
    -------
    value : `U256`
        The decoded amount.
    """
    return U256(Numeric(32).decode(buffer, "clause.value"))
