from typing import Any, Dict, List, Optional

from ethereum_types.bytes import Bytes, Bytes8

from vechain.clause import Clause
from vechain.responses import Receipt
from vechain.utils.hexadecimal import hex_to_bytes

ORIGIN_KEY = "0x" + "00" * 31 + "01"
ORIGIN_ADDRESS = hex_to_bytes("0x7e5f4552091a69125d5dfcb7b8c2659029395bdf")
DELEGATOR_KEY = "0x" + "00" * 31 + "02"
DELEGATOR_ADDRESS = hex_to_bytes("0x2b5ad5c4795c026514f8317c7a215e218dccd6cf")

RECIPIENT = "0x7567d83b7b8d80addcb281a71d54fc7b3364ffed"

# Unsigned encoding of the `legacy_tx` fixture.
LEGACY_UNSIGNED = hex_to_bytes(
    "0xf8540184aabbccdd20f840df947567d83b7b8d80addcb281a71d54fc7b3364ffed"
    "82271086000000606060df947567d83b7b8d80addcb281a71d54fc7b3364ffed824e"
    "208600000060606081808252088083bc614ec0"
)
LEGACY_INTRINSIC_GAS = 37432


def make_clauses() -> List[Clause]:
    return [
        Clause.call(RECIPIENT, 10000, "0x000000606060"),
        Clause.call(RECIPIENT, 20000, "0x000000606060"),
    ]


def receipt_payload(
    reverted: bool = False, vm_error: Optional[str] = None
) -> Dict[str, Any]:
    """
    Receipt of a single transfer clause, in the form a node returns it.
    """
    output: Dict[str, Any] = {
        "contractAddress": None,
        "events": [],
        "transfers": [
            {
                "sender": "0x7e5f4552091a69125d5dfcb7b8c2659029395bdf",
                "recipient": RECIPIENT,
                "amount": "0xde0b6b3a7640000",
            }
        ],
    }
    if vm_error is not None:
        output["vmError"] = vm_error
    return {
        "gasUsed": 21000,
        "gasPayer": "0x7e5f4552091a69125d5dfcb7b8c2659029395bdf",
        "paid": "0x1236efcbcbb340000",
        "reward": "0x576e189f04f60000",
        "reverted": reverted,
        "meta": {
            "blockID": "0x0000000a" + "bb" * 28,
            "blockNumber": 10,
            "blockTimestamp": 1700000000,
            "txID": "0x" + "cd" * 32,
            "txOrigin": "0x7e5f4552091a69125d5dfcb7b8c2659029395bdf",
        },
        "outputs": [output],
    }


def make_receipt(
    reverted: bool = False, vm_error: Optional[str] = None
) -> Receipt:
    return Receipt.model_validate(receipt_payload(reverted, vm_error))


class FakeClient:
    """
    Stands in for `ThorClient` in facade tests.
    """

    def __init__(self, block_ref: Bytes = b"\x00\x00\x01\x02abcd"):
        self.block_ref = Bytes8(block_ref)
        self.sent: List[Bytes] = []
        self.receipts: Dict[Bytes, Receipt] = {}
        self.reply_id: Optional[Bytes] = None

    def best_block_ref(self) -> Bytes8:
        return self.block_ref

    def send_raw_transaction(self, raw: Bytes) -> Bytes:
        self.sent.append(raw)
        assert self.reply_id is not None
        return self.reply_id

    def wait_for_receipt(
        self, tx_id: Bytes, timeout: float = 60.0, interval: float = 1.0
    ) -> Receipt:
        return self.receipts[tx_id]
