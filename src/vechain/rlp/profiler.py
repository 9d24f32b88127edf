"""
Profiler
^^^^^^^^

.. contents:: Table of Contents
    :backlinks: none
    :local:

Introduction
------------

Two-direction walker between objects and RLP. `pack` and `unpack` work on
the node tree (nested lists of byte strings); `encode_object` and
`decode_object` add the byte-level RLP serialisation on top.
"""

from typing import Any

from ethereum_rlp import Simple, rlp
from ethereum_rlp.exceptions import DecodingError as RLPDecodingError
from ethereum_types.bytes import Bytes

from vechain.exceptions import DecodingError

from .profile import Profile


def pack(obj: Any, profile: Profile) -> Simple:
    """
    Convert `obj` into an RLP node tree as described by `profile`.

    Parameters
    ----------
    obj :
        Value, mapping or record to encode.
    profile :
        Schema of `obj`.

    Returns
    -------
    node : `ethereum_rlp.Simple`
        Byte string or nested list of byte strings.
    """
    return profile.kind.encode(obj, profile.name)


def unpack(node: Simple, profile: Profile) -> Any:
    """
    Convert an RLP node tree back into a value as described by `profile`.
    Struct profiles produce a `dict` keyed by field name.
    """
    return profile.kind.decode(node, profile.name)


def encode_object(obj: Any, profile: Profile) -> Bytes:
    """
    Encode `obj` into RLP bytes as described by `profile`.

    Parameters
    ----------
    obj :
        Value, mapping or record to encode.
    profile :
        Schema of `obj`.

    Returns
    -------
    encoded : `ethereum_types.bytes.Bytes`
        The RLP serialisation.
    """
    return rlp.encode(pack(obj, profile))


def decode_node(data: Bytes, path: str) -> Simple:
    """
    Parse RLP bytes into a node tree. The whole of `data` must be a single
    RLP item.
    """
    try:
        length = rlp.decode_item_length(data)
        if length > len(data):
            raise DecodingError("truncated RLP item", path)
        if length < len(data):
            raise DecodingError("trailing bytes after RLP item", path)
        return rlp.decode(data)
    except RLPDecodingError as e:
        raise DecodingError("malformed RLP", path) from e


def decode_object(data: Bytes, profile: Profile) -> Any:
    """
    Decode RLP bytes as described by `profile`.

    Parameters
    ----------
    data :
        RLP serialisation.
    profile :
        Schema of the encoded value.

    Returns
    -------
    obj :
        Decoded value; a `dict` of named fields for struct profiles.
    """
    return unpack(decode_node(data, profile.name), profile)
