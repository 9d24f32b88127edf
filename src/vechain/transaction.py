"""
Building, Signing and Decoding Transactions
^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^

.. contents:: Table of Contents
    :backlinks: none
    :local:

Introduction
------------

Entry points for the whole transaction lifecycle. A transaction is built
unsigned with defaults filled in, may have clauses appended, is signed by
its origin (and, under fee delegation, co-signed by a gas payer), and is
finally encoded for submission. Every step returns a new transaction;
nothing is modified in place.

Typical use:

.. code-block:: python

    tx = new_transaction([Clause.transfer(recipient, 10**18)])
    tx = sign(tx, private_key)
    raw = encode(tx)
"""

import logging
from dataclasses import replace
from typing import Any, Dict, Iterable, Optional, Union

from ethereum_types.bytes import Bytes

from vechain.base_types import BlockRef, Hash32
from vechain.client import ThorClient
from vechain.clause import Clause
from vechain.config import Config, generate_nonce
from vechain.crypto.elliptic_curve import PrivateKey
from vechain.exceptions import (
    FieldValidationError,
    TransactionRevertedError,
    TransactionTypeError,
    UnsignedTransactionError,
)
from vechain.gas import calculate_intrinsic_gas
from vechain.reserved import coerce_reserved
from vechain.responses import Receipt
from vechain.signature import co_sign as co_sign_transaction
from vechain.signature import (
    is_signed,
    sign_transaction,
    with_recovered_signers,
)
from vechain.transaction_types import (
    DynamicFeeTransaction,
    LegacyTransaction,
    Transaction,
    TransactionType,
    coerce_clause,
    decode_transaction,
    encode_transaction,
)
from vechain.utils.hexadecimal import bytes_to_hex

logger = logging.getLogger(__name__)

TX_TYPE_NAMES = {
    "legacy": TransactionType.LEGACY,
    "dynamic_fee": TransactionType.DYNAMIC_FEE,
}


def _resolve_tx_type(
    tx_type: Union[TransactionType, int, str, None],
    gas_price_coef: Optional[Any],
    max_priority_fee_per_gas: Optional[Any],
    max_fee_per_gas: Optional[Any],
    config: Config,
) -> TransactionType:
    has_legacy_fields = gas_price_coef is not None
    has_dynamic_fields = (
        max_priority_fee_per_gas is not None or max_fee_per_gas is not None
    )
    if has_legacy_fields and has_dynamic_fields:
        raise TransactionTypeError(
            "gas_price_coef cannot be combined with dynamic fee fields"
        )

    if isinstance(tx_type, str):
        if tx_type not in TX_TYPE_NAMES:
            raise TransactionTypeError(
                f"unknown transaction type {tx_type}"
            )
        tx_type = TX_TYPE_NAMES[tx_type]
    elif tx_type is not None:
        try:
            tx_type = TransactionType(tx_type)
        except ValueError as e:
            raise TransactionTypeError(
                f"unknown transaction type {tx_type}",
                transaction_type=tx_type,
            ) from e

    if tx_type is None:
        if has_dynamic_fields:
            return TransactionType.DYNAMIC_FEE
        if has_legacy_fields:
            return TransactionType.LEGACY
        return TX_TYPE_NAMES[config.default_tx_type]

    if tx_type == TransactionType.LEGACY and has_dynamic_fields:
        raise TransactionTypeError(
            "legacy transactions do not take dynamic fee fields",
            transaction_type=int(tx_type),
        )
    if tx_type == TransactionType.DYNAMIC_FEE and has_legacy_fields:
        raise TransactionTypeError(
            "dynamic fee transactions do not take gas_price_coef",
            transaction_type=int(tx_type),
        )
    return TransactionType(tx_type)


def new_transaction(
    clauses: Iterable[Union[Clause, Dict[str, Any]]] = (),
    *,
    config: Optional[Config] = None,
    client: Optional[ThorClient] = None,
    tx_type: Union[TransactionType, int, str, None] = None,
    chain_tag: Optional[int] = None,
    block_ref: Union[BlockRef, str, None] = None,
    expiration: Optional[int] = None,
    gas_price_coef: Optional[int] = None,
    max_priority_fee_per_gas: Optional[int] = None,
    max_fee_per_gas: Optional[int] = None,
    gas: Optional[int] = None,
    depends_on: Union[Hash32, str, None] = None,
    nonce: Optional[int] = None,
    reserved: Any = None,
    fee_delegation: bool = False,
) -> Transaction:
    """
    Build an unsigned transaction, filling every field not given.

    Parameters
    ----------
    clauses :
        Initial clauses, as `Clause` objects or mappings of clause fields.
    config :
        Source of the network and default values. A default `Config` is
        used when omitted.
    client :
        Node used to read the best block when `block_ref` is not given.
        When omitted, a client for the configured node is created.
    tx_type :
        Format of the transaction. Inferred from the fee fields given, then
        from `config`.
    chain_tag :
        Defaults to the chain tag of the configured network.
    block_ref :
        Defaults to the reference of the node's best block.
    expiration :
        Defaults to `config.default_expiration`.
    gas_price_coef :
        Legacy transactions only.
    max_priority_fee_per_gas, max_fee_per_gas :
        Dynamic-fee transactions only.
    gas :
        Defaults to the intrinsic gas of `clauses`.
    depends_on :
        Id of a transaction that must be executed first.
    nonce :
        Defaults to a random 8 byte value.
    reserved :
        Reserved fields; `None` means no features.
    fee_delegation :
        Set the fee delegation feature.

    Returns
    -------
    tx : `Transaction`
        The unsigned transaction.
    """
    if config is None:
        config = Config()

    resolved_type = _resolve_tx_type(
        tx_type,
        gas_price_coef,
        max_priority_fee_per_gas,
        max_fee_per_gas,
        config,
    )

    clauses = tuple(
        coerce_clause(clause, f"transaction.clauses[{index}]")
        for index, clause in enumerate(clauses)
    )

    if chain_tag is None:
        chain_tag = config.get_chain_tag()
    if block_ref is None:
        if client is None:
            client = ThorClient(config.get_node_url())
        block_ref = client.best_block_ref()
    if expiration is None:
        expiration = config.default_expiration
    if isinstance(expiration, int) and expiration <= 0:
        raise FieldValidationError(
            "expiration must be positive", "transaction.expiration"
        )
    if gas is None:
        gas = calculate_intrinsic_gas(clauses)
    if nonce is None:
        nonce = generate_nonce()

    reserved = coerce_reserved(reserved, "transaction.reserved")
    if fee_delegation:
        reserved = reserved.with_fee_delegation()

    common: Dict[str, Any] = dict(
        chain_tag=chain_tag,
        block_ref=block_ref,
        expiration=expiration,
        clauses=clauses,
        gas=gas,
        depends_on=depends_on,
        nonce=nonce,
        reserved=reserved,
        signature=None,
        id=None,
        origin=None,
        delegator=None,
    )
    tx: Transaction
    if resolved_type == TransactionType.LEGACY:
        if gas_price_coef is None:
            gas_price_coef = config.default_gas_price_coef
        tx = LegacyTransaction(gas_price_coef=gas_price_coef, **common)
    else:
        if max_priority_fee_per_gas is None:
            max_priority_fee_per_gas = config.default_max_priority_fee_per_gas
        if max_fee_per_gas is None:
            max_fee_per_gas = config.default_max_fee_per_gas
        tx = DynamicFeeTransaction(
            max_priority_fee_per_gas=max_priority_fee_per_gas,
            max_fee_per_gas=max_fee_per_gas,
            **common,
        )

    logger.debug(
        "built %s transaction with %d clause(s), gas %d",
        resolved_type.name.lower(),
        len(tx.clauses),
        int(tx.gas),
    )
    return tx


def append_clause(
    tx: Transaction, clause: Union[Clause, Dict[str, Any]]
) -> Transaction:
    """
    Append a clause and recompute the intrinsic gas.

    Signatures cover the clause list, so appending to a signed transaction
    returns an unsigned copy.

    Parameters
    ----------
    tx :
        Transaction to extend.
    clause :
        Clause to add at the end.

    Returns
    -------
    tx : `Transaction`
        Unsigned copy with the extra clause.
    """
    clauses = tx.clauses + (
        coerce_clause(clause, f"transaction.clauses[{len(tx.clauses)}]"),
    )
    if tx.signature is not None:
        logger.debug("appending a clause drops the existing signature")
    return replace(
        tx,
        clauses=clauses,
        gas=calculate_intrinsic_gas(clauses),
        signature=None,
        id=None,
        origin=None,
        delegator=None,
    )


def encode(tx: Transaction, include_signature: bool = True) -> Bytes:
    """
    Serialize `tx`. With `include_signature` the transaction must be
    signed; the result is what a node accepts.
    """
    return encode_transaction(tx, include_signature)


def cast(raw: Bytes) -> Transaction:
    """
    Decode a transaction and recover its signers.

    Parameters
    ----------
    raw :
        Encoded transaction, signed or unsigned.

    Returns
    -------
    tx : `Transaction`
        The decoded transaction. For a signed one `origin`, `id` and, if
        co-signed, `delegator` are filled in.
    """
    tx = with_recovered_signers(decode_transaction(raw))
    if tx.id is not None:
        logger.debug("decoded transaction %s", bytes_to_hex(tx.id))
    return tx


def sign(tx: Transaction, private_key: PrivateKey) -> Transaction:
    """
    Sign `tx` as its origin.
    """
    signed = sign_transaction(tx, private_key)
    assert signed.origin is not None and signed.id is not None
    logger.debug(
        "signed transaction %s as %s",
        bytes_to_hex(signed.id),
        bytes_to_hex(signed.origin),
    )
    return signed


def co_sign(tx: Transaction, private_key: PrivateKey) -> Transaction:
    """
    Add a fee delegator signature to an origin-signed transaction.
    """
    signed = co_sign_transaction(tx, private_key)
    assert signed.delegator is not None
    logger.debug(
        "co-signed transaction as delegator %s",
        bytes_to_hex(signed.delegator),
    )
    return signed


def broadcast(tx: Transaction, client: ThorClient) -> Hash32:
    """
    Submit a signed transaction to a node.

    Parameters
    ----------
    tx :
        Signed transaction.
    client :
        Node to submit to.

    Returns
    -------
    id : `Hash32`
        Transaction id reported by the node.
    """
    if not is_signed(tx):
        raise UnsignedTransactionError(
            "cannot broadcast unsigned transaction"
        )
    tx_id = client.send_raw_transaction(encode(tx, include_signature=True))
    if tx.id is not None and tx_id != tx.id:
        logger.warning(
            "node reported id %s, expected %s",
            bytes_to_hex(tx_id),
            bytes_to_hex(tx.id),
        )
    return tx_id


def wait_for_receipt(
    client: ThorClient,
    tx_id: Hash32,
    timeout: float = 60.0,
    interval: float = 1.0,
    *,
    check_revert: bool = True,
) -> Receipt:
    """
    Block until the transaction `tx_id` is included, then return its
    receipt.

    Parameters
    ----------
    client :
        Node to poll.
    tx_id :
        Id of the transaction.
    timeout, interval :
        Seconds to wait in total and between polls.
    check_revert :
        Raise `TransactionRevertedError` if the transaction was reverted.

    Returns
    -------
    receipt : `vechain.responses.Receipt`
        The receipt of the included transaction.
    """
    receipt = client.wait_for_receipt(
        tx_id, timeout=timeout, interval=interval
    )
    if receipt.reverted:
        logger.debug(
            "transaction %s reverted: %s",
            bytes_to_hex(tx_id),
            receipt.revert_reason,
        )
        if check_revert:
            raise TransactionRevertedError(receipt)
    return receipt
