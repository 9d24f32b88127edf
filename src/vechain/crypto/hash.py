"""
Cryptographic Hash Functions
^^^^^^^^^^^^^^^^^^^^^^^^^^^^

.. contents:: Table of Contents
    :backlinks: none
    :local:

Introduction
------------

Blake2b-256 binds transactions to their signers; Keccak-256 derives
account addresses from public keys.
"""

from Crypto.Hash import BLAKE2b, keccak
from ethereum_types.bytes import Bytes, Bytes32

Hash32 = Bytes32


def blake2b256(buffer: Bytes) -> Hash32:
    """
    Computes the 256-bit blake2b hash of the input `buffer`.

    Parameters
    ----------
    buffer :
        Input for the hashing function.

    Returns
    -------
    hash : `vechain.crypto.hash.Hash32`
        Output of the hash function.
    """
    h = BLAKE2b.new(digest_bits=256)
    h.update(buffer)
    return Hash32(h.digest())


def keccak256(buffer: Bytes) -> Hash32:
    """
    Computes the keccak256 hash of the input `buffer`.

    Parameters
    ----------
    buffer :
        Input for the hashing function.

    Returns
    -------
    hash : `vechain.crypto.hash.Hash32`
        Output of the hash function.
    """
    k = keccak.new(digest_bits=256)
    return Hash32(k.update(buffer).digest())
