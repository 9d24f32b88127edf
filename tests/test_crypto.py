import hashlib

import pytest

from vechain.crypto.elliptic_curve import (
    SECP256K1N,
    private_key_to_address,
    public_key_to_address,
    recover_address,
    secp256k1_recover,
    secp256k1_sign,
    to_private_key,
)
from vechain.crypto.hash import blake2b256, keccak256
from vechain.exceptions import FieldValidationError, InvalidSignatureError
from tests.helpers import (
    DELEGATOR_ADDRESS,
    DELEGATOR_KEY,
    ORIGIN_ADDRESS,
    ORIGIN_KEY,
)

MESSAGE_HASH = blake2b256(b"vechain")


def test_keccak256_of_empty_string() -> None:
    assert keccak256(b"").hex() == (
        "c5d2460186f7233c927e7db2dcc703c0e500b653ca82273b7bfad8045d85a470"
    )


@pytest.mark.parametrize("data", [b"", b"abc", bytes(range(256))])
def test_blake2b256_matches_hashlib(data: bytes) -> None:
    expected = hashlib.blake2b(data, digest_size=32).digest()
    assert blake2b256(data) == expected


def test_blake2b256_of_empty_string() -> None:
    assert blake2b256(b"").hex() == (
        "0e5751c026e543b2e8ab2eb06099daa1d1e5df47778f7787faab45cdf12fe3a8"
    )


def test_private_key_to_address() -> None:
    assert private_key_to_address(ORIGIN_KEY) == ORIGIN_ADDRESS
    assert private_key_to_address(DELEGATOR_KEY) == DELEGATOR_ADDRESS


@pytest.mark.parametrize(
    "key",
    ["0x01", b"\x01" * 31, b"\x01" * 33, "01" * 32, 1],
)
def test_private_key_must_be_32_bytes(key: object) -> None:
    with pytest.raises(FieldValidationError):
        to_private_key(key)  # type: ignore[arg-type]


def test_private_key_must_be_in_range() -> None:
    with pytest.raises(FieldValidationError):
        secp256k1_sign(MESSAGE_HASH, bytes(32))
    with pytest.raises(FieldValidationError):
        secp256k1_sign(MESSAGE_HASH, SECP256K1N.to_be_bytes32())


def test_sign_then_recover() -> None:
    signature = secp256k1_sign(MESSAGE_HASH, ORIGIN_KEY)

    assert len(signature) == 65
    assert signature[64] in (0, 1)
    assert recover_address(MESSAGE_HASH, signature) == ORIGIN_ADDRESS
    assert (
        public_key_to_address(secp256k1_recover(MESSAGE_HASH, signature))
        == ORIGIN_ADDRESS
    )


def test_signing_is_deterministic() -> None:
    assert secp256k1_sign(MESSAGE_HASH, ORIGIN_KEY) == secp256k1_sign(
        MESSAGE_HASH, ORIGIN_KEY
    )


def test_recover_with_other_hash_gives_other_address() -> None:
    signature = secp256k1_sign(MESSAGE_HASH, ORIGIN_KEY)
    other = blake2b256(b"thor")
    assert recover_address(other, signature) != ORIGIN_ADDRESS


@pytest.mark.parametrize("length", [0, 64, 66, 130])
def test_recover_rejects_wrong_length(length: int) -> None:
    with pytest.raises(InvalidSignatureError):
        secp256k1_recover(MESSAGE_HASH, b"\x01" * length)


def test_recover_rejects_out_of_range_components() -> None:
    signature = secp256k1_sign(MESSAGE_HASH, ORIGIN_KEY)
    r, s = signature[:32], signature[32:64]
    n = SECP256K1N.to_be_bytes32()

    with pytest.raises(InvalidSignatureError, match="bad r"):
        secp256k1_recover(MESSAGE_HASH, bytes(32) + s + b"\x00")
    with pytest.raises(InvalidSignatureError, match="bad r"):
        secp256k1_recover(MESSAGE_HASH, n + s + b"\x00")
    with pytest.raises(InvalidSignatureError, match="bad s"):
        secp256k1_recover(MESSAGE_HASH, r + bytes(32) + b"\x00")
    with pytest.raises(InvalidSignatureError, match="bad recovery id"):
        secp256k1_recover(MESSAGE_HASH, r + s + b"\x02")


def test_public_key_must_be_64_bytes() -> None:
    with pytest.raises(FieldValidationError):
        public_key_to_address(b"\x04" + b"\x01" * 64)
