"""
Field Kinds
^^^^^^^^^^^

.. contents:: Table of Contents
    :backlinks: none
    :local:

Introduction
------------

A kind converts one field between its in-memory value and the RLP node
(a byte string or a nested list of them) that carries it on the wire.
Every kind validates before it transforms: a malformed value raises, it is
never coerced.

Scalar kinds hold their options as attributes. `Array` and `Struct` hold
child kinds and child profiles, so a complete record schema is a tree of
kind objects.
"""

from dataclasses import dataclass
from typing import (
    TYPE_CHECKING,
    Any,
    Dict,
    List,
    Mapping,
    Optional,
    Protocol,
    Sequence,
    Tuple,
)

from ethereum_rlp import Simple
from ethereum_types.bytes import Bytes
from ethereum_types.numeric import Uint, Unsigned

from vechain.exceptions import DecodingError, FieldValidationError
from vechain.utils.hexadecimal import hex_to_bytes, hex_to_uint

if TYPE_CHECKING:
    from .profile import Profile


class Kind(Protocol):
    """
    Encoding and decoding of a single field.
    """

    def encode(self, value: Any, path: str) -> Simple:
        """
        Validate `value` and convert it to an RLP node.
        """
        ...

    def decode(self, node: Simple, path: str) -> Any:
        """
        Validate the RLP node and convert it to an in-memory value.
        """
        ...


def _expect_bytes(node: Simple, path: str) -> Bytes:
    if not isinstance(node, bytes):
        raise DecodingError("expected byte string, got list", path)
    return node


def _expect_list(node: Simple, path: str) -> Sequence[Simple]:
    if isinstance(node, bytes):
        raise DecodingError("expected list, got byte string", path)
    return node


def _to_binary(value: Any, path: str) -> Bytes:
    if isinstance(value, str):
        return hex_to_bytes(value, path)
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    raise FieldValidationError(
        f"expected hex string or bytes, got {type(value).__name__}", path
    )


@dataclass(frozen=True)
class Numeric:
    """
    Non-negative integer stored as its minimal big endian byte string. Zero
    is the empty string.
    """

    max_bytes: Optional[int] = None

    def encode(self, value: Any, path: str) -> Bytes:
        """
        Encode an `int`, an unsigned integer or a hex quantity.
        """
        if isinstance(value, bool):
            raise FieldValidationError("expected integer, got bool", path)
        if isinstance(value, str):
            number = int(hex_to_uint(value, path))
        elif isinstance(value, (int, Unsigned)):
            number = int(value)
        else:
            raise FieldValidationError(
                f"expected integer, got {type(value).__name__}", path
            )
        if number < 0:
            raise FieldValidationError("expected non-negative integer", path)

        encoded = Uint(number).to_be_bytes()
        if self.max_bytes is not None and len(encoded) > self.max_bytes:
            raise FieldValidationError(
                f"value exceeds {self.max_bytes} byte(s)", path
            )
        return encoded

    def decode(self, node: Simple, path: str) -> Uint:
        """
        Decode a big endian byte string, rejecting leading zero bytes.
        """
        buffer = _expect_bytes(node, path)
        if self.max_bytes is not None and len(buffer) > self.max_bytes:
            raise DecodingError(
                f"value exceeds {self.max_bytes} byte(s)", path
            )
        if buffer and buffer[0] == 0:
            raise DecodingError("numeric value has leading zero", path)
        return Uint.from_be_bytes(buffer)


@dataclass(frozen=True)
class Buffer:
    """
    Pass-through for data that is already binary.
    """

    def encode(self, value: Any, path: str) -> Bytes:
        """
        Return `value` unchanged if it is a byte string.
        """
        if not isinstance(value, (bytes, bytearray)):
            raise FieldValidationError(
                f"expected bytes, got {type(value).__name__}", path
            )
        return bytes(value)

    def decode(self, node: Simple, path: str) -> Bytes:
        """
        Return the byte string unchanged.
        """
        return _expect_bytes(node, path)


@dataclass(frozen=True)
class HexBlob:
    """
    Byte string of any length. Text must be `0x`-prefixed hex.
    """

    def encode(self, value: Any, path: str) -> Bytes:
        """
        Convert hex text or bytes to bytes.
        """
        return _to_binary(value, path)

    def decode(self, node: Simple, path: str) -> Bytes:
        """
        Return the byte string unchanged.
        """
        return _expect_bytes(node, path)


@dataclass(frozen=True)
class FixedHexBlob:
    """
    Byte string of exactly `size` bytes (addresses, hashes).
    """

    size: int

    def encode(self, value: Any, path: str) -> Bytes:
        """
        Convert to bytes and check the length.
        """
        buffer = _to_binary(value, path)
        if len(buffer) != self.size:
            raise FieldValidationError(
                f"expected {self.size} bytes, got {len(buffer)}", path
            )
        return buffer

    def decode(self, node: Simple, path: str) -> Bytes:
        """
        Check the length of the byte string.
        """
        buffer = _expect_bytes(node, path)
        if len(buffer) != self.size:
            raise DecodingError(
                f"expected {self.size} bytes, got {len(buffer)}", path
            )
        return buffer


@dataclass(frozen=True)
class OptionalFixedHexBlob:
    """
    Like `FixedHexBlob`, but an absent value is carried as the empty string.
    """

    size: int

    def encode(self, value: Any, path: str) -> Bytes:
        """
        `None`, `""`, `"0x"` and `b""` encode to the empty string.
        """
        if value is None or value in ("", "0x", b""):
            return b""
        return FixedHexBlob(self.size).encode(value, path)

    def decode(self, node: Simple, path: str) -> Optional[Bytes]:
        """
        The empty string decodes to `None`.
        """
        if node == b"":
            return None
        return FixedHexBlob(self.size).decode(node, path)


@dataclass(frozen=True)
class CompactFixedHexBlob:
    """
    Fixed size value whose leading zero bytes are dropped on the wire. At
    least one byte is always kept, so all zeros encode to `0x00`.
    """

    size: int

    def encode(self, value: Any, path: str) -> Bytes:
        """
        Check the length, then strip leading zeros.
        """
        buffer = FixedHexBlob(self.size).encode(value, path)
        return buffer.lstrip(b"\x00") or b"\x00"

    def decode(self, node: Simple, path: str) -> Bytes:
        """
        Left-pad with zeros back to `size` bytes. Only the form `encode`
        produces is accepted.
        """
        buffer = _expect_bytes(node, path)
        if len(buffer) > self.size:
            raise DecodingError(
                f"expected at most {self.size} bytes, got {len(buffer)}", path
            )
        if not buffer:
            raise DecodingError("compact value is empty", path)
        if buffer[0] == 0 and buffer != b"\x00":
            raise DecodingError("compact value has leading zero", path)
        return buffer.rjust(self.size, b"\x00")


@dataclass(frozen=True)
class Array:
    """
    Homogeneous list; every element uses `item`.
    """

    item: Kind

    def encode(self, value: Any, path: str) -> List[Simple]:
        """
        Encode each element with the item kind.
        """
        if isinstance(value, (str, bytes, bytearray)) or not isinstance(
            value, Sequence
        ):
            raise FieldValidationError(
                f"expected list, got {type(value).__name__}", path
            )
        return [
            self.item.encode(element, f"{path}[{index}]")
            for index, element in enumerate(value)
        ]

    def decode(self, node: Simple, path: str) -> List[Any]:
        """
        Decode each element with the item kind.
        """
        return [
            self.item.decode(element, f"{path}[{index}]")
            for index, element in enumerate(_expect_list(node, path))
        ]


_MISSING = object()


def _lookup(value: Any, name: str) -> Any:
    if isinstance(value, Mapping):
        return value.get(name, _MISSING)
    return getattr(value, name, _MISSING)


@dataclass(frozen=True)
class Struct:
    """
    Fixed-order, fixed-arity record. RLP carries no field names, so the
    order of `fields` is the whole contract.
    """

    fields: Tuple["Profile", ...]

    def encode(self, value: Any, path: str) -> List[Simple]:
        """
        Encode the fields of a mapping or record in declared order.
        """
        if value is None or isinstance(value, (str, bytes, bytearray)):
            raise FieldValidationError(
                f"expected record, got {type(value).__name__}", path
            )
        encoded = []
        for profile in self.fields:
            field_path = f"{path}.{profile.name}"
            field_value = _lookup(value, profile.name)
            if field_value is _MISSING:
                raise FieldValidationError("missing field", field_path)
            encoded.append(profile.kind.encode(field_value, field_path))
        return encoded

    def decode(self, node: Simple, path: str) -> Dict[str, Any]:
        """
        Zip the decoded list positionally against the field profiles.
        """
        items = _expect_list(node, path)
        if len(items) != len(self.fields):
            raise DecodingError(
                f"expected {len(self.fields)} fields, got {len(items)}", path
            )
        return {
            profile.name: profile.kind.decode(item, f"{path}.{profile.name}")
            for profile, item in zip(self.fields, items)
        }
