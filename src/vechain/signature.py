"""
Transaction Signatures
^^^^^^^^^^^^^^^^^^^^^^

.. contents:: Table of Contents
    :backlinks: none
    :local:

Introduction
------------

The origin signs the blake2b-256 hash of the unsigned encoding. Under fee
delegation a second party, the delegator, signs
`blake2b256(signing_hash ++ origin)`; binding the origin into the message
stops a delegator signature from being replayed for a different sender.
The wire carries both 65 byte signatures concatenated, origin first.

Signers are never trusted from memory. They are always recovered from the
signature, and the transaction id is derived from the recovered origin.
"""

from dataclasses import replace
from typing import Optional, Tuple

from ethereum_types.bytes import Bytes

from vechain.base_types import Address, Hash32
from vechain.crypto.elliptic_curve import (
    SIGNATURE_LENGTH,
    PrivateKey,
    recover_address,
    secp256k1_sign,
)
from vechain.crypto.hash import blake2b256
from vechain.exceptions import (
    FeeDelegationError,
    InvalidSignatureError,
    UnsignedTransactionError,
)
from vechain.transaction_types import (
    DUAL_SIGNATURE_LENGTH,
    Transaction,
    encode_transaction,
)


def signing_hash(tx: Transaction) -> Hash32:
    """
    Compute the hash the origin signs.

    Parameters
    ----------
    tx :
        Transaction of interest. Any signature it carries is ignored.

    Returns
    -------
    hash : `Hash32`
        blake2b-256 of the unsigned encoding, type prefix included.
    """
    return blake2b256(encode_transaction(tx, include_signature=False))


def delegator_signing_hash(tx: Transaction, origin: Address) -> Hash32:
    """
    Compute the hash a fee delegator signs on behalf of `origin`.

    Parameters
    ----------
    tx :
        Transaction of interest.
    origin :
        Address of the sender the delegator agrees to pay for.

    Returns
    -------
    hash : `Hash32`
        `blake2b256(signing_hash(tx) ++ origin)`.
    """
    return blake2b256(signing_hash(tx) + origin)


def compute_id(tx: Transaction, origin: Address) -> Hash32:
    """
    Transaction id: the signing hash bound to the sender's address.
    """
    return blake2b256(signing_hash(tx) + origin)


def is_signed(tx: Transaction) -> bool:
    """
    Whether `tx` carries a signature.
    """
    return tx.signature is not None


def is_delegated(tx: Transaction) -> bool:
    """
    Whether `tx` requests fee delegation.
    """
    return tx.reserved.is_fee_delegated


def recover_signers(tx: Transaction) -> Tuple[Address, Optional[Address]]:
    """
    Recover the origin and, for a 130 byte signature, the delegator.

    Parameters
    ----------
    tx :
        Signed transaction.

    Returns
    -------
    origin : `Address`
        The sender.
    delegator : `Optional[Address]`
        The fee payer, or `None` for a single signature.
    """
    signature = tx.signature
    if signature is None:
        raise UnsignedTransactionError("transaction is not signed")

    tx_hash = signing_hash(tx)
    if len(signature) == SIGNATURE_LENGTH:
        return recover_address(tx_hash, signature), None

    if len(signature) == DUAL_SIGNATURE_LENGTH:
        origin = recover_address(tx_hash, signature[:SIGNATURE_LENGTH])
        delegator = recover_address(
            blake2b256(tx_hash + origin), signature[SIGNATURE_LENGTH:]
        )
        return origin, delegator

    raise InvalidSignatureError(
        f"signature must be {SIGNATURE_LENGTH} or {DUAL_SIGNATURE_LENGTH} "
        f"bytes, got {len(signature)}"
    )


def with_recovered_signers(tx: Transaction) -> Transaction:
    """
    Copy of `tx` with `origin`, `delegator` and `id` derived from its
    signature. All three are cleared on an unsigned transaction.
    """
    if not is_signed(tx):
        return replace(tx, origin=None, delegator=None, id=None)
    origin, delegator = recover_signers(tx)
    return replace(
        tx,
        origin=origin,
        delegator=delegator,
        id=compute_id(tx, origin),
    )


def sign_transaction(tx: Transaction, private_key: PrivateKey) -> Transaction:
    """
    Sign `tx` as its origin.

    Any previous signature is replaced, so a delegated transaction signed
    here still needs `co_sign`.

    Parameters
    ----------
    tx :
        Transaction to sign.
    private_key :
        Origin's secp256k1 private key.

    Returns
    -------
    signed : `Transaction`
        Copy with `signature`, `origin` and `id` set.
    """
    signature = secp256k1_sign(signing_hash(tx), private_key)
    return with_recovered_signers(replace(tx, signature=signature))


def sign_as_delegator(
    tx: Transaction, origin: Address, private_key: PrivateKey
) -> Bytes:
    """
    Produce the 65 byte delegator signature for `tx` sent by `origin`.

    A gas payer service uses this to answer a request without access to
    the origin's signature.
    """
    if not is_delegated(tx):
        raise FeeDelegationError("transaction does not request delegation")
    return secp256k1_sign(delegator_signing_hash(tx, origin), private_key)


def co_sign(tx: Transaction, private_key: PrivateKey) -> Transaction:
    """
    Add the fee delegator's signature to an origin-signed transaction.

    Parameters
    ----------
    tx :
        Transaction with the delegation feature set and exactly one
        signature.
    private_key :
        Delegator's secp256k1 private key.

    Returns
    -------
    signed : `Transaction`
        Copy carrying both signatures, with `origin`, `delegator` and `id`
        recovered.
    """
    if not is_delegated(tx):
        raise FeeDelegationError("transaction does not request delegation")
    if tx.signature is None or len(tx.signature) != SIGNATURE_LENGTH:
        raise FeeDelegationError(
            "transaction must carry exactly the origin signature"
        )

    origin, _ = recover_signers(tx)
    delegator_signature = sign_as_delegator(tx, origin, private_key)
    return with_recovered_signers(
        replace(tx, signature=tx.signature + delegator_signature)
    )
