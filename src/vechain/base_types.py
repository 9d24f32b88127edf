"""
Types and conversions shared by clauses and transactions.

.. contents:: Table of Contents
    :backlinks: none
    :local:

Introduction
------------

Records store fixed-width `ethereum_types` values. The helpers here turn
caller input (integers, hex text, raw bytes) into those values and report
a failure as a `FieldValidationError` naming the field.
"""

from typing import Any, Optional, Type, TypeVar

from ethereum_types.bytes import Bytes, Bytes8, Bytes20, Bytes32, FixedBytes
from ethereum_types.numeric import FixedUnsigned, Unsigned

from vechain.exceptions import FieldValidationError
from vechain.utils.hexadecimal import hex_to_bytes, hex_to_uint

Address = Bytes20
Hash32 = Bytes32
BlockRef = Bytes8

U = TypeVar("U", bound=FixedUnsigned)
B = TypeVar("B", bound=FixedBytes)


def to_uint(value: Any, cls: Type[U], path: str) -> U:
    """
    Convert `value` to the fixed-width unsigned type `cls`.

    Parameters
    ----------
    value :
        An `int`, an unsigned integer or a `0x`-prefixed hex quantity.
    cls :
        Target type, e.g. `U64`.
    path :
        Field location used in error messages.

    Returns
    -------
    converted : `cls`
        The value as `cls`.
    """
    if isinstance(value, bool):
        raise FieldValidationError("expected integer, got bool", path)
    if isinstance(value, str):
        value = hex_to_uint(value, path)
    if not isinstance(value, (int, Unsigned)):
        raise FieldValidationError(
            f"expected integer, got {type(value).__name__}", path
        )
    try:
        return cls(int(value))
    except OverflowError as e:
        raise FieldValidationError(
            f"value {int(value)} out of range for {cls.__name__}", path
        ) from e


def to_fixed_bytes(value: Any, cls: Type[B], path: str) -> B:
    """
    Convert hex text or raw bytes to the fixed-length type `cls`.
    """
    if isinstance(value, str):
        value = hex_to_bytes(value, path)
    if not isinstance(value, (bytes, bytearray)):
        raise FieldValidationError(
            f"expected hex string or bytes, got {type(value).__name__}", path
        )
    if len(value) != cls.LENGTH:
        raise FieldValidationError(
            f"expected {cls.LENGTH} bytes, got {len(value)}", path
        )
    return cls(value)


def to_optional_fixed_bytes(
    value: Any, cls: Type[B], path: str
) -> Optional[B]:
    """
    Like `to_fixed_bytes`, but `None`, `""`, `"0x"` and `b""` mean absent.
    """
    if value is None or value in ("", "0x", b""):
        return None
    return to_fixed_bytes(value, cls, path)


def to_bytes(value: Any, path: str) -> Bytes:
    """
    Convert hex text or raw bytes to `Bytes`. `None` is the empty string.
    """
    if value is None:
        return b""
    if isinstance(value, str):
        return hex_to_bytes(value, path)
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    raise FieldValidationError(
        f"expected hex string or bytes, got {type(value).__name__}", path
    )
