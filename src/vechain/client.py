"""
Minimal client for the REST API of a Thor node.

Only the calls needed to build and submit transactions are covered:
reading the best block for a block reference, posting a raw transaction
and polling for its receipt.
"""

import logging
import time
from typing import Any, Dict, Optional, Type, TypeVar

import requests
from pydantic import BaseModel, ValidationError

from vechain.base_types import BlockRef, Hash32
from vechain.exceptions import NodeError
from vechain.responses import BlockResponse, Receipt, SendTransactionResponse
from vechain.utils.hexadecimal import bytes_to_hex

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


class ThorClient:
    """
    Talks to one Thor node over HTTP.

    Parameters
    ----------
    url :
        Base URL of the node, e.g. `https://testnet.veblocks.net`.
    extra_headers :
        Headers added to every request.
    timeout :
        Seconds to wait for each HTTP response.
    """

    def __init__(
        self,
        url: str,
        extra_headers: Optional[Dict[str, str]] = None,
        *,
        timeout: float = 10.0,
    ):
        if extra_headers is None:
            extra_headers = {}
        self.url = url.rstrip("/")
        self.extra_headers = extra_headers
        self.timeout = timeout

    def _request(
        self,
        method: str,
        path: str,
        *,
        body: Optional[Dict[str, Any]] = None,
        not_found_ok: bool = False,
    ) -> Any:
        headers = {"Accept": "application/json"} | self.extra_headers
        url = f"{self.url}{path}"
        logger.debug("%s %s", method, url)

        try:
            if method == "POST":
                response = requests.post(
                    url, json=body, headers=headers, timeout=self.timeout
                )
            else:
                response = requests.get(
                    url, headers=headers, timeout=self.timeout
                )
        except requests.RequestException as e:
            raise NodeError(f"request to {url} failed: {e}") from e

        if not_found_ok and response.status_code == 404:
            return None
        if response.status_code != 200:
            raise NodeError(
                f"{method} {path} failed: {response.text.strip()}",
                status_code=response.status_code,
            )
        try:
            return response.json()
        except ValueError as e:
            raise NodeError(f"{method} {path} returned invalid JSON") from e

    @staticmethod
    def _parse(model: Type[M], payload: Any, what: str) -> M:
        try:
            return model.model_validate(payload)
        except ValidationError as e:
            raise NodeError(f"malformed {what} response: {e}") from e

    def get_block(self, revision: str = "best") -> Optional[BlockResponse]:
        """
        Fetch a block by number, id or `"best"`. Returns `None` when the
        node does not know the block.
        """
        payload = self._request(
            "GET", f"/blocks/{revision}", not_found_ok=True
        )
        if payload is None:
            return None
        return self._parse(BlockResponse, payload, "block")

    def best_block_ref(self) -> BlockRef:
        """
        Block reference of the current best block: the first 8 bytes of its
        id.
        """
        block = self.get_block("best")
        if block is None:
            raise NodeError("node returned no best block")
        return BlockRef(block.id[:8])

    def send_raw_transaction(self, raw: bytes) -> Hash32:
        """
        Submit an encoded, signed transaction and return the id the node
        assigned to it.
        """
        payload = self._request(
            "POST", "/transactions", body={"raw": bytes_to_hex(raw)}
        )
        return Hash32(
            self._parse(SendTransactionResponse, payload, "transaction").id
        )

    def get_transaction_receipt(self, tx_id: bytes) -> Optional[Receipt]:
        """
        Receipt of the transaction `tx_id`, or `None` while it is pending.
        """
        payload = self._request(
            "GET",
            f"/transactions/{bytes_to_hex(tx_id)}/receipt",
            not_found_ok=True,
        )
        if payload is None:
            return None
        return self._parse(Receipt, payload, "receipt")

    def wait_for_receipt(
        self, tx_id: bytes, timeout: float = 60.0, interval: float = 1.0
    ) -> Receipt:
        """
        Poll until the transaction `tx_id` is included in a block.

        Parameters
        ----------
        tx_id :
            Transaction id.
        timeout :
            Seconds to wait before giving up.
        interval :
            Seconds between polls.

        Returns
        -------
        receipt : `vechain.responses.Receipt`
            The receipt, reverted or not.
        """
        start_time = time.time()
        while True:
            receipt = self.get_transaction_receipt(tx_id)
            if receipt is not None:
                return receipt
            if (time.time() - start_time) > timeout:
                break
            time.sleep(interval)
        raise NodeError(
            f"transaction {bytes_to_hex(tx_id)} not included in a block "
            f"after {timeout} seconds"
        )
