"""
Reserved Fields
^^^^^^^^^^^^^^^

.. contents:: Table of Contents
    :backlinks: none
    :local:

Introduction
------------

The last body field of every transaction is a list reserved for protocol
extensions. Its first element is a bitmask of enabled features; anything
after that is kept verbatim. Trailing empty elements are trimmed on the
wire, so a transaction with no features carries an empty list.
"""

from dataclasses import dataclass, replace
from typing import Any, Sequence, Tuple

from ethereum_rlp import Simple
from ethereum_types.bytes import Bytes
from ethereum_types.frozen import slotted_freezable
from ethereum_types.numeric import U32

from vechain.base_types import to_uint
from vechain.exceptions import DecodingError, FieldValidationError
from vechain.rlp import Numeric

FEATURE_DELEGATION = 1
"""
Bit set in `features` when the transaction is fee delegated.
"""

FEATURES_KIND = Numeric(4)


@slotted_freezable
@dataclass
class Reserved:
    """
    Feature bitmask plus any unrecognised trailing elements.
    """

    features: U32
    unused: Tuple[Bytes, ...]

    def __post_init__(self) -> None:
        self.features = to_uint(self.features, U32, "reserved.features")
        unused = tuple(self.unused)
        for index, item in enumerate(unused):
            if not isinstance(item, bytes):
                raise FieldValidationError(
                    f"expected bytes, got {type(item).__name__}",
                    f"reserved.unused[{index}]",
                )
        self.unused = unused

    @classmethod
    def empty(cls) -> "Reserved":
        """
        No features and nothing else.
        """
        return cls(features=U32(0), unused=())

    @property
    def is_fee_delegated(self) -> bool:
        """
        Whether the fee delegation feature bit is set.
        """
        return bool(int(self.features) & FEATURE_DELEGATION)

    def with_fee_delegation(self) -> "Reserved":
        """
        Copy with the fee delegation bit set.
        """
        return replace(
            self, features=U32(int(self.features) | FEATURE_DELEGATION)
        )

    def without_fee_delegation(self) -> "Reserved":
        """
        Copy with the fee delegation bit cleared.
        """
        return replace(
            self, features=U32(int(self.features) & ~FEATURE_DELEGATION)
        )

    def to_list(self) -> Sequence[Bytes]:
        """
        Wire form of the reserved field.

        Returns
        -------
        items : `Sequence[Bytes]`
            The encoded feature mask followed by the unused elements, with
            trailing empty elements removed.
        """
        items = [FEATURES_KIND.encode(self.features, "reserved.features")]
        items.extend(self.unused)
        while items and items[-1] == b"":
            items.pop()
        return items

    @classmethod
    def from_list(
        cls, items: Sequence[Simple], path: str = "reserved"
    ) -> "Reserved":
        """
        Rebuild from the wire form produced by `to_list`.

        Parameters
        ----------
        items :
            Decoded elements of the reserved list.
        path :
            Location of the list, used in error messages.

        Returns
        -------
        reserved : `Reserved`
            The decoded record.
        """
        for index, item in enumerate(items):
            if not isinstance(item, bytes):
                raise DecodingError(
                    "expected byte string, got list", f"{path}[{index}]"
                )
        if items and items[-1] == b"":
            raise DecodingError("reserved fields not trimmed", path)
        if not items:
            return cls.empty()
        features = FEATURES_KIND.decode(items[0], f"{path}[0]")
        return cls(features=U32(features), unused=tuple(items[1:]))


def coerce_reserved(value: Any, path: str = "reserved") -> Reserved:
    """
    Accept a `Reserved`, `None` (no features) or a mapping with `features`
    and `unused` keys.
    """
    if value is None:
        return Reserved.empty()
    if isinstance(value, Reserved):
        return value
    if isinstance(value, dict):
        return Reserved(
            features=value.get("features", 0),
            unused=tuple(value.get("unused", ())),
        )
    raise FieldValidationError(
        f"expected reserved record, got {type(value).__name__}", path
    )
