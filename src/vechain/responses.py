"""
Models of the JSON documents returned by a Thor node.

Hex text is converted to binary while validating, so a response that parses
holds addresses, hashes and amounts in the same form as the rest of the
package. A response that does not parse raises `pydantic.ValidationError`;
the client turns that into a `NodeError`.
"""

from typing import Annotated, Any, Callable, List, Optional

from ethereum_types.bytes import Bytes
from pydantic import BaseModel, ConfigDict, Field, PlainValidator
from pydantic.alias_generators import to_camel

from vechain.base_types import Address, Hash32
from vechain.utils.hexadecimal import hex_to_bytes, hex_to_uint

UNKNOWN_REVERT_REASON = "unknown reason"


def _hex_bytes(value: Any) -> Bytes:
    if not isinstance(value, str):
        raise ValueError(f"expected hex string, got {type(value).__name__}")
    return hex_to_bytes(value)


def _fixed_hex(cls: Any) -> Callable[[Any], Any]:
    def validate(value: Any) -> Any:
        buffer = _hex_bytes(value)
        if len(buffer) != cls.LENGTH:
            raise ValueError(
                f"expected {cls.LENGTH} bytes, got {len(buffer)}"
            )
        return cls(buffer)

    return validate


def _quantity(value: Any) -> int:
    if isinstance(value, bool):
        raise ValueError("expected quantity, got bool")
    if isinstance(value, str):
        return int(hex_to_uint(value))
    if isinstance(value, int) and value >= 0:
        return value
    raise ValueError(f"expected non-negative quantity, got {value!r}")


HexBytes = Annotated[bytes, PlainValidator(_hex_bytes)]
HexHash = Annotated[bytes, PlainValidator(_fixed_hex(Hash32))]
HexAddress = Annotated[bytes, PlainValidator(_fixed_hex(Address))]
Quantity = Annotated[int, PlainValidator(_quantity)]


class NodeModel(BaseModel):
    """
    Base of all node responses. Field names are camel case on the wire;
    unknown fields are ignored.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class BlockResponse(NodeModel):
    """
    The parts of a block used to build transactions.
    """

    id: HexHash
    number: Quantity
    timestamp: Optional[Quantity] = None


class SendTransactionResponse(NodeModel):
    """
    Reply to a raw transaction submission.
    """

    id: HexHash


class Event(NodeModel):
    """
    Log emitted by a contract while executing a clause.
    """

    address: HexAddress
    topics: List[HexHash]
    data: HexBytes


class Transfer(NodeModel):
    """
    VET moved while executing a clause.
    """

    sender: HexAddress
    recipient: HexAddress
    amount: Quantity


class Output(NodeModel):
    """
    Result of one clause.
    """

    contract_address: Optional[HexAddress] = None
    events: List[Event] = Field(default_factory=list)
    transfers: List[Transfer] = Field(default_factory=list)
    vm_error: Optional[str] = None


class ReceiptMeta(NodeModel):
    """
    Where and when the transaction was included.
    """

    block_id: HexHash = Field(alias="blockID")
    block_number: Quantity
    block_timestamp: Quantity
    tx_id: HexHash = Field(alias="txID")
    tx_origin: HexAddress


class Receipt(NodeModel):
    """
    Outcome of an included transaction.

    `paid` is the energy (VTHO, in wei) charged for gas and `reward` the
    share of it paid to the block signer.
    """

    gas_payer: HexAddress
    gas_used: Quantity
    paid: Quantity
    reward: Quantity
    reverted: bool
    meta: ReceiptMeta
    outputs: List[Output] = Field(default_factory=list)

    @property
    def revert_reason(self) -> str:
        """
        VM error of the first output, if the node reported one.
        """
        if self.outputs and self.outputs[0].vm_error:
            return self.outputs[0].vm_error
        return UNKNOWN_REVERT_REASON
