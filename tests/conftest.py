import pytest

from vechain.reserved import Reserved
from vechain.transaction_types import DynamicFeeTransaction, LegacyTransaction

from tests.helpers import FakeClient, make_clauses


@pytest.fixture
def legacy_tx() -> LegacyTransaction:
    return LegacyTransaction(
        chain_tag=1,
        block_ref="0x00000000aabbccdd",
        expiration=32,
        clauses=make_clauses(),
        gas_price_coef=128,
        gas=21000,
        depends_on=None,
        nonce=12345678,
        reserved=Reserved.empty(),
        signature=None,
        id=None,
        origin=None,
        delegator=None,
    )


@pytest.fixture
def dynamic_fee_tx() -> DynamicFeeTransaction:
    return DynamicFeeTransaction(
        chain_tag=1,
        block_ref="0x00000000aabbccdd",
        expiration=32,
        clauses=make_clauses(),
        max_priority_fee_per_gas=10_000_000_000,
        max_fee_per_gas=20_000_000_000,
        gas=21000,
        depends_on=None,
        nonce=12345678,
        reserved=Reserved.empty(),
        signature=None,
        id=None,
        origin=None,
        delegator=None,
    )


@pytest.fixture
def fake_client() -> FakeClient:
    return FakeClient()
