"""
Utility Functions For Hexadecimal Strings
^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^

.. contents:: Table of Contents
    :backlinks: none
    :local:

Introduction
------------

Hexadecimal strings only exist at the textual boundary of the library.
Everything past these helpers is binary.
"""
import string
from typing import Optional

from ethereum_types.bytes import Bytes
from ethereum_types.numeric import Uint

from vechain.exceptions import FieldValidationError

HEX_DIGITS = frozenset(string.hexdigits)


def has_hex_prefix(hex_string: str) -> bool:
    """
    Check if a hex string starts with hex prefix (0x).

    Parameters
    ----------
    hex_string :
        The hexadecimal string to be checked for presence of prefix.

    Returns
    -------
    has_prefix : `bool`
        Boolean indicating whether the hex string has 0x prefix.
    """
    return hex_string.startswith(("0x", "0X"))


def remove_hex_prefix(hex_string: str) -> str:
    """
    Remove 0x prefix from a hex string if present. This function returns the
    passed hex string if it isn't prefixed with 0x.

    Parameters
    ----------
    hex_string :
        The hexadecimal string whose prefix is to be removed.

    Returns
    -------
    modified_hex_string : `str`
        The hexadecimal string with the 0x prefix removed if present.
    """
    if has_hex_prefix(hex_string):
        return hex_string[len("0x") :]

    return hex_string


def hex_to_bytes(hex_string: str, path: Optional[str] = None) -> Bytes:
    """
    Convert a `0x`-prefixed hex string to bytes.

    Unlike `bytes.fromhex` the prefix is mandatory and the digit count must
    be even.

    Parameters
    ----------
    hex_string :
        The hexadecimal string to be converted to bytes.
    path :
        Field location used in error messages.

    Returns
    -------
    byte_stream : `bytes`
        Byte stream corresponding to the given hexadecimal string.
    """
    if not isinstance(hex_string, str):
        raise FieldValidationError(
            f"expected hex string, got {type(hex_string).__name__}", path
        )
    if not has_hex_prefix(hex_string):
        raise FieldValidationError("hex string must start with 0x", path)
    digits = remove_hex_prefix(hex_string)
    if len(digits) % 2 != 0:
        raise FieldValidationError("hex string must have even length", path)
    if not HEX_DIGITS.issuperset(digits):
        raise FieldValidationError("invalid hex digits", path)
    return bytes.fromhex(digits)


def hex_to_uint(hex_string: str, path: Optional[str] = None) -> Uint:
    """
    Convert a `0x`-prefixed hex quantity to an unsigned integer. An odd
    number of digits is allowed, `"0x"` is zero.

    Parameters
    ----------
    hex_string :
        The hexadecimal string to be converted to Uint.
    path :
        Field location used in error messages.

    Returns
    -------
    converted : `ethereum_types.numeric.Uint`
        The unsigned integer obtained from the given hexadecimal string.
    """
    if not has_hex_prefix(hex_string):
        raise FieldValidationError("hex quantity must start with 0x", path)
    digits = remove_hex_prefix(hex_string)
    if not HEX_DIGITS.issuperset(digits):
        raise FieldValidationError("invalid hex digits", path)
    if not digits:
        return Uint(0)
    return Uint(int(digits, 16))


def bytes_to_hex(buffer: Bytes) -> str:
    """
    Lower-case `0x`-prefixed rendering of `buffer`.
    """
    return "0x" + buffer.hex()
