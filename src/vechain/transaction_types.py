"""
Transactions are atomic units of work submitted to a Thor node. Each one
carries an ordered list of clauses, the gas it may burn, replay protection
(chain tag, block reference, expiration, nonce) and, once signed, the
signature of its origin and optionally of a fee delegator.

Two formats exist. Legacy transactions price gas with a single
`gas_price_coef` and are plain RLP lists. Dynamic-fee transactions carry a
priority fee and a fee cap instead, and their RLP payload is prefixed with
the type byte `0x51`.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Dict, Optional, Tuple, Type, Union

from ethereum_rlp import Simple
from ethereum_types.bytes import Bytes
from ethereum_types.frozen import slotted_freezable
from ethereum_types.numeric import U8, U32, U64, U256

from vechain.base_types import (
    Address,
    BlockRef,
    Hash32,
    to_fixed_bytes,
    to_optional_fixed_bytes,
    to_uint,
)
from vechain.clause import CLAUSE_PROFILE, Clause
from vechain.exceptions import (
    DecodingError,
    FieldValidationError,
    InvalidSignatureError,
    TransactionTypeError,
    UnsignedTransactionError,
)
from vechain.reserved import Reserved, coerce_reserved
from vechain.rlp import (
    Buffer,
    CompactFixedHexBlob,
    Numeric,
    OptionalFixedHexBlob,
    Profile,
    encode_object,
    unpack,
)
from vechain.rlp.profiler import decode_node

SINGLE_SIGNATURE_LENGTH = 65
DUAL_SIGNATURE_LENGTH = 130


class TransactionType(IntEnum):
    """
    Type byte of a transaction. Legacy transactions have no prefix on the
    wire, so `LEGACY` is only ever used in memory.
    """

    LEGACY = 0x00
    DYNAMIC_FEE = 0x51


@slotted_freezable
@dataclass
class LegacyTransaction:
    """
    Transaction priced with a gas price coefficient.

    `signature`, `id`, `origin` and `delegator` are `None` until the
    transaction is signed. `id`, `origin` and `delegator` are derived from
    the signature and never appear on the wire.
    """

    chain_tag: U8
    block_ref: BlockRef
    expiration: U32
    clauses: Tuple[Clause, ...]
    gas_price_coef: U8
    gas: U64
    depends_on: Optional[Hash32]
    nonce: U64
    reserved: Reserved
    signature: Optional[Bytes]
    id: Optional[Hash32]
    origin: Optional[Address]
    delegator: Optional[Address]

    def __post_init__(self) -> None:
        self.gas_price_coef = to_uint(
            self.gas_price_coef, U8, "transaction.gas_price_coef"
        )
        _normalize_common_fields(self)


@slotted_freezable
@dataclass
class DynamicFeeTransaction:
    """
    Transaction priced with a priority fee and a fee cap, both in wei per
    unit of gas.
    """

    chain_tag: U8
    block_ref: BlockRef
    expiration: U32
    clauses: Tuple[Clause, ...]
    max_priority_fee_per_gas: U256
    max_fee_per_gas: U256
    gas: U64
    depends_on: Optional[Hash32]
    nonce: U64
    reserved: Reserved
    signature: Optional[Bytes]
    id: Optional[Hash32]
    origin: Optional[Address]
    delegator: Optional[Address]

    def __post_init__(self) -> None:
        self.max_priority_fee_per_gas = to_uint(
            self.max_priority_fee_per_gas,
            U256,
            "transaction.max_priority_fee_per_gas",
        )
        self.max_fee_per_gas = to_uint(
            self.max_fee_per_gas, U256, "transaction.max_fee_per_gas"
        )
        _normalize_common_fields(self)


Transaction = Union[LegacyTransaction, DynamicFeeTransaction]


def coerce_clause(value: Any, path: str) -> Clause:
    """
    Accept a `Clause` or a mapping of clause fields.
    """
    if isinstance(value, Clause):
        return value
    if isinstance(value, dict):
        return Clause.from_dict(value)
    raise FieldValidationError(
        f"expected clause, got {type(value).__name__}", path
    )


def _normalize_common_fields(tx: Any) -> None:
    tx.chain_tag = to_uint(tx.chain_tag, U8, "transaction.chain_tag")
    tx.block_ref = to_fixed_bytes(
        tx.block_ref, BlockRef, "transaction.block_ref"
    )
    tx.expiration = to_uint(tx.expiration, U32, "transaction.expiration")
    if isinstance(tx.clauses, (str, bytes, dict)):
        raise FieldValidationError(
            "expected list of clauses", "transaction.clauses"
        )
    tx.clauses = tuple(
        coerce_clause(clause, f"transaction.clauses[{index}]")
        for index, clause in enumerate(tx.clauses)
    )
    tx.gas = to_uint(tx.gas, U64, "transaction.gas")
    tx.depends_on = to_optional_fixed_bytes(
        tx.depends_on, Hash32, "transaction.depends_on"
    )
    tx.nonce = to_uint(tx.nonce, U64, "transaction.nonce")
    tx.reserved = coerce_reserved(tx.reserved, "transaction.reserved")

    if tx.signature is not None:
        if not isinstance(tx.signature, bytes):
            raise FieldValidationError(
                "expected bytes", "transaction.signature"
            )
        if len(tx.signature) not in (
            SINGLE_SIGNATURE_LENGTH,
            DUAL_SIGNATURE_LENGTH,
        ):
            raise InvalidSignatureError(
                f"signature must be {SINGLE_SIGNATURE_LENGTH} or "
                f"{DUAL_SIGNATURE_LENGTH} bytes, got {len(tx.signature)}"
            )
        tx.signature = bytes(tx.signature)


def transaction_type(tx: Transaction) -> TransactionType:
    """
    Type of the transaction `tx`.
    """
    if isinstance(tx, LegacyTransaction):
        return TransactionType.LEGACY
    elif isinstance(tx, DynamicFeeTransaction):
        return TransactionType.DYNAMIC_FEE
    else:
        raise TypeError(f"not a transaction: {type(tx).__name__}")


def _body_profile(pricing: Tuple[Profile, ...]) -> Profile:
    return Profile.struct(
        "transaction",
        [
            Profile("chain_tag", Numeric(1)),
            Profile("block_ref", CompactFixedHexBlob(8)),
            Profile("expiration", Numeric(4)),
            Profile.array("clauses", CLAUSE_PROFILE.kind),
            *pricing,
            Profile("gas", Numeric(8)),
            Profile("depends_on", OptionalFixedHexBlob(32)),
            Profile("nonce", Numeric(8)),
            Profile.array("reserved", Buffer()),
        ],
    )


UNSIGNED_LEGACY_PROFILE = _body_profile(
    (Profile("gas_price_coef", Numeric(1)),)
)
SIGNED_LEGACY_PROFILE = UNSIGNED_LEGACY_PROFILE.extend(
    Profile("signature", Buffer())
)
UNSIGNED_DYNAMIC_FEE_PROFILE = _body_profile(
    (
        Profile("max_priority_fee_per_gas", Numeric(32)),
        Profile("max_fee_per_gas", Numeric(32)),
    )
)
SIGNED_DYNAMIC_FEE_PROFILE = UNSIGNED_DYNAMIC_FEE_PROFILE.extend(
    Profile("signature", Buffer())
)

PROFILES: Dict[Tuple[TransactionType, int], Profile] = {
    (TransactionType.LEGACY, 9): UNSIGNED_LEGACY_PROFILE,
    (TransactionType.LEGACY, 10): SIGNED_LEGACY_PROFILE,
    (TransactionType.DYNAMIC_FEE, 10): UNSIGNED_DYNAMIC_FEE_PROFILE,
    (TransactionType.DYNAMIC_FEE, 11): SIGNED_DYNAMIC_FEE_PROFILE,
}
"""
Wire profile of each format, keyed by type and number of list elements.
"""

TRANSACTION_CLASSES: Dict[TransactionType, Type[Any]] = {
    TransactionType.LEGACY: LegacyTransaction,
    TransactionType.DYNAMIC_FEE: DynamicFeeTransaction,
}


def profile_for(
    tx_type: TransactionType, include_signature: bool
) -> Profile:
    """
    Wire profile of a transaction format, with or without the signature.
    """
    if tx_type == TransactionType.LEGACY:
        if include_signature:
            return SIGNED_LEGACY_PROFILE
        return UNSIGNED_LEGACY_PROFILE
    if include_signature:
        return SIGNED_DYNAMIC_FEE_PROFILE
    return UNSIGNED_DYNAMIC_FEE_PROFILE


def encode_transaction(tx: Transaction, include_signature: bool) -> Bytes:
    """
    Serialize a transaction.

    Parameters
    ----------
    tx :
        Transaction to encode.
    include_signature :
        Append the signature as the last list element. The transaction must
        then be signed.

    Returns
    -------
    encoded : `Bytes`
        RLP list, prefixed with the type byte for dynamic-fee
        transactions.
    """
    if include_signature and tx.signature is None:
        raise UnsignedTransactionError(
            "cannot encode signature of an unsigned transaction"
        )
    tx_type = transaction_type(tx)
    profile = profile_for(tx_type, include_signature)

    fields: Dict[str, Any] = {
        name: getattr(tx, name) for name in profile.field_names
    }
    fields["reserved"] = tx.reserved.to_list()

    encoded = encode_object(fields, profile)
    if tx_type == TransactionType.DYNAMIC_FEE:
        return bytes([TransactionType.DYNAMIC_FEE]) + encoded
    return encoded


def classify(raw: Bytes) -> Tuple[TransactionType, Profile, Simple]:
    """
    Work out the format of an encoded transaction.

    A leading `0x51` selects the dynamic-fee format; a leading RLP list
    header selects the legacy format. The number of list elements then
    tells signed and unsigned encodings apart.

    Parameters
    ----------
    raw :
        Encoded transaction.

    Returns
    -------
    tx_type : `TransactionType`
        Format of the transaction.
    profile : `Profile`
        Profile matching the number of list elements.
    node : `Simple`
        Decoded RLP list.
    """
    if not raw:
        raise DecodingError("empty transaction", "transaction")

    if raw[0] == TransactionType.DYNAMIC_FEE:
        tx_type = TransactionType.DYNAMIC_FEE
        payload = raw[1:]
    elif raw[0] >= 0xC0:
        tx_type = TransactionType.LEGACY
        payload = raw
    else:
        raise TransactionTypeError(
            f"unknown transaction type 0x{raw[0]:02x}",
            transaction_type=raw[0],
        )

    node = decode_node(payload, "transaction")
    if isinstance(node, bytes):
        raise DecodingError("expected list, got byte string", "transaction")

    profile = PROFILES.get((tx_type, len(node)))
    if profile is None:
        raise TransactionTypeError(
            f"{tx_type.name.lower()} transaction cannot have "
            f"{len(node)} fields",
            transaction_type=int(tx_type),
            field_count=len(node),
        )
    return tx_type, profile, node


def decode_transaction(raw: Bytes) -> Transaction:
    """
    Decode an encoded transaction. The signature, if present, is kept as
    is; signers are not recovered here.

    Parameters
    ----------
    raw :
        Encoded transaction.

    Returns
    -------
    tx : `Transaction`
        The decoded transaction.
    """
    tx_type, profile, node = classify(raw)
    fields = unpack(node, profile)

    fields["clauses"] = tuple(
        Clause(**clause) for clause in fields["clauses"]
    )
    fields["reserved"] = Reserved.from_list(
        fields["reserved"], "transaction.reserved"
    )
    fields.setdefault("signature", None)

    return TRANSACTION_CLASSES[tx_type](
        **fields, id=None, origin=None, delegator=None
    )
