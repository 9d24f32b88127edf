from typing import Any, Dict, List, Optional

import pytest
import requests

import vechain.client
from vechain.client import ThorClient
from vechain.exceptions import NodeError
from vechain.responses import Receipt
from tests.helpers import receipt_payload

NODE = "https://node.example.org"
BLOCK_ID = "0x0000000a" + "bb" * 28
TX_ID = "0x" + "cd" * 32


class FakeResponse:
    def __init__(
        self, status_code: int, payload: Any = None, text: str = ""
    ):
        self.status_code = status_code
        self.payload = payload
        self.text = text

    def json(self) -> Any:
        if isinstance(self.payload, Exception):
            raise self.payload
        return self.payload


class Recorder:
    """
    Replays canned responses and records the requests made.
    """

    def __init__(self, *responses: Any):
        self.responses = list(responses)
        self.calls: List[Dict[str, Any]] = []

    def __call__(self, url: str, **kwargs: Any) -> FakeResponse:
        self.calls.append({"url": url, **kwargs})
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


@pytest.fixture
def client() -> ThorClient:
    return ThorClient(NODE + "/", {"X-Api-Key": "secret"}, timeout=3.0)


def patch_get(
    monkeypatch: pytest.MonkeyPatch, *responses: Any
) -> Recorder:
    recorder = Recorder(*responses)
    monkeypatch.setattr(requests, "get", recorder)
    return recorder


def test_best_block_ref(
    monkeypatch: pytest.MonkeyPatch, client: ThorClient
) -> None:
    recorder = patch_get(
        monkeypatch, FakeResponse(200, {"id": BLOCK_ID, "number": 10})
    )

    assert client.best_block_ref() == bytes.fromhex("0000000abbbbbbbb")

    call = recorder.calls[0]
    assert call["url"] == f"{NODE}/blocks/best"
    assert call["headers"]["X-Api-Key"] == "secret"
    assert call["timeout"] == 3.0


@pytest.mark.parametrize(
    "payload",
    [
        None,
        {"number": 10},
        {"id": "0x0000000a", "number": 10},
        {"id": 5, "number": 10},
        {"id": BLOCK_ID, "number": "ten"},
    ],
)
def test_best_block_ref_rejects_bad_block(
    monkeypatch: pytest.MonkeyPatch,
    client: ThorClient,
    payload: Optional[Dict[str, Any]],
) -> None:
    patch_get(monkeypatch, FakeResponse(200, payload))
    with pytest.raises(NodeError):
        client.best_block_ref()


def test_send_raw_transaction(
    monkeypatch: pytest.MonkeyPatch, client: ThorClient
) -> None:
    recorder = Recorder(FakeResponse(200, {"id": TX_ID}))
    monkeypatch.setattr(requests, "post", recorder)

    tx_id = client.send_raw_transaction(b"\xf8\x01")

    assert tx_id == b"\xcd" * 32
    assert recorder.calls[0]["url"] == f"{NODE}/transactions"
    assert recorder.calls[0]["json"] == {"raw": "0xf801"}


def test_send_raw_transaction_rejected(
    monkeypatch: pytest.MonkeyPatch, client: ThorClient
) -> None:
    monkeypatch.setattr(
        requests,
        "post",
        Recorder(FakeResponse(400, text="bad tx: insufficient energy\n")),
    )

    with pytest.raises(NodeError, match="insufficient energy") as info:
        client.send_raw_transaction(b"\xf8\x01")
    assert info.value.status_code == 400


@pytest.mark.parametrize(
    "payload", [{"id": "0x12"}, {"id": 5}, {}, ["0x" + "cd" * 32]]
)
def test_send_raw_transaction_malformed_response(
    monkeypatch: pytest.MonkeyPatch, client: ThorClient, payload: Any
) -> None:
    monkeypatch.setattr(
        requests, "post", Recorder(FakeResponse(200, payload))
    )

    with pytest.raises(NodeError, match="malformed transaction") as info:
        client.send_raw_transaction(b"\xf8\x01")
    assert info.value.__cause__ is not None


def test_connection_error(
    monkeypatch: pytest.MonkeyPatch, client: ThorClient
) -> None:
    patch_get(monkeypatch, requests.ConnectionError("refused"))
    with pytest.raises(NodeError, match="refused"):
        client.get_block()


def test_invalid_json(
    monkeypatch: pytest.MonkeyPatch, client: ThorClient
) -> None:
    patch_get(monkeypatch, FakeResponse(200, ValueError("no json")))
    with pytest.raises(NodeError, match="invalid JSON"):
        client.get_block()


def test_receipt_not_found_is_pending(
    monkeypatch: pytest.MonkeyPatch, client: ThorClient
) -> None:
    recorder = patch_get(monkeypatch, FakeResponse(404))

    assert client.get_transaction_receipt(b"\xcd" * 32) is None
    assert recorder.calls[0]["url"] == f"{NODE}/transactions/{TX_ID}/receipt"


def test_wait_for_receipt_polls(
    monkeypatch: pytest.MonkeyPatch, client: ThorClient
) -> None:
    sleeps: List[float] = []
    monkeypatch.setattr(vechain.client.time, "sleep", sleeps.append)
    patch_get(
        monkeypatch,
        FakeResponse(200, None),
        FakeResponse(404),
        FakeResponse(200, receipt_payload()),
    )

    receipt = client.wait_for_receipt(b"\xcd" * 32, interval=0.5)

    assert isinstance(receipt, Receipt)
    assert not receipt.reverted
    assert receipt.gas_used == 21000
    assert receipt.paid == 21 * 10**18
    assert receipt.gas_payer == bytes.fromhex(
        "7e5f4552091a69125d5dfcb7b8c2659029395bdf"
    )
    assert receipt.meta.tx_id == b"\xcd" * 32
    assert receipt.outputs[0].transfers[0].amount == 10**18
    assert sleeps == [0.5, 0.5]


def test_wait_for_receipt_times_out(
    monkeypatch: pytest.MonkeyPatch, client: ThorClient
) -> None:
    monkeypatch.setattr(vechain.client.time, "sleep", lambda _: None)
    patch_get(monkeypatch, FakeResponse(404))

    with pytest.raises(NodeError, match="not included"):
        client.wait_for_receipt(b"\xcd" * 32, timeout=-1)


def test_malformed_receipt(
    monkeypatch: pytest.MonkeyPatch, client: ThorClient
) -> None:
    payload = receipt_payload()
    payload["gasPayer"] = "0x1234"
    patch_get(monkeypatch, FakeResponse(200, payload))

    with pytest.raises(NodeError, match="malformed receipt"):
        client.get_transaction_receipt(b"\xcd" * 32)
