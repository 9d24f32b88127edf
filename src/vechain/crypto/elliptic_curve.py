"""
Elliptic Curves
^^^^^^^^^^^^^^^
"""

from typing import Union

import coincurve
from ethereum_types.bytes import Bytes, Bytes20, Bytes32, Bytes64
from ethereum_types.numeric import U256

from vechain.exceptions import FieldValidationError, InvalidSignatureError
from vechain.utils.hexadecimal import hex_to_bytes

from .hash import Hash32, keccak256

SECP256K1N = U256(
    0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141
)

SIGNATURE_LENGTH = 65

Address = Bytes20
PrivateKey = Union[Bytes, str]


def to_private_key(private_key: PrivateKey) -> Bytes32:
    """
    Normalise a private key given as raw bytes or `0x`-prefixed hex text.

    Parameters
    ----------
    private_key :
        32 raw bytes or 64 hex digits with `0x` prefix.

    Returns
    -------
    private_key : `ethereum_types.bytes.Bytes32`
        The key as exactly 32 bytes.
    """
    if isinstance(private_key, str):
        private_key = hex_to_bytes(private_key)
    if not isinstance(private_key, (bytes, bytearray)):
        raise FieldValidationError(
            f"expected private key bytes, got {type(private_key).__name__}"
        )
    if len(private_key) != 32:
        raise FieldValidationError(
            f"expected 32 byte private key, got {len(private_key)}"
        )
    return Bytes32(private_key)


def secp256k1_sign(msg_hash: Hash32, private_key: PrivateKey) -> Bytes:
    """
    Signs a 32 byte hash with a secp256k1 private key.

    Parameters
    ----------
    msg_hash :
        Hash of the message being signed.
    private_key :
        The signer's private key.

    Returns
    -------
    signature : `ethereum_types.bytes.Bytes`
        65 bytes: `r` and `s` (32 bytes each, big endian) followed by the
        recovery id (0 or 1).
    """
    if len(msg_hash) != 32:
        raise FieldValidationError(
            f"expected 32 byte message hash, got {len(msg_hash)}"
        )
    try:
        key = coincurve.PrivateKey(to_private_key(private_key))
    except ValueError as e:
        raise FieldValidationError("private key is out of range") from e
    return Bytes(key.sign_recoverable(bytes(msg_hash), hasher=None))


def secp256k1_recover(msg_hash: Hash32, signature: Bytes) -> Bytes64:
    """
    Recovers the public key from a given signature.

    Parameters
    ----------
    msg_hash :
        Hash of the message being recovered.
    signature :
        65 byte recoverable signature, `r || s || v`.

    Returns
    -------
    public_key : `ethereum_types.bytes.Bytes64`
        Recovered public key, without the `0x04` prefix.
    """
    if len(signature) != SIGNATURE_LENGTH:
        raise InvalidSignatureError(
            f"expected {SIGNATURE_LENGTH} byte signature, got {len(signature)}"
        )

    r = U256.from_be_bytes(signature[0:32])
    s = U256.from_be_bytes(signature[32:64])
    v = signature[64]

    if U256(0) >= r or r >= SECP256K1N:
        raise InvalidSignatureError("bad r")
    if U256(0) >= s or s >= SECP256K1N:
        raise InvalidSignatureError("bad s")
    if v not in (0, 1):
        raise InvalidSignatureError("bad recovery id")

    # The point at infinity makes coincurve raise a ValueError.
    try:
        public_key = coincurve.PublicKey.from_signature_and_message(
            bytes(signature), bytes(msg_hash), hasher=None
        )
    except ValueError as e:
        raise InvalidSignatureError("public key recovery failed") from e

    return Bytes64(public_key.format(compressed=False)[1:])


def public_key_to_address(public_key: Bytes64) -> Address:
    """
    Derive an account address from an uncompressed public key.

    Parameters
    ----------
    public_key :
        The 64 byte public key (no `0x04` prefix).

    Returns
    -------
    address : `vechain.crypto.elliptic_curve.Address`
        The last 20 bytes of the keccak256 hash of the key.
    """
    if len(public_key) != 64:
        raise FieldValidationError(
            f"expected 64 byte public key, got {len(public_key)}"
        )
    return Address(keccak256(public_key)[12:32])


def private_key_to_address(private_key: PrivateKey) -> Address:
    """
    Derive the address controlled by `private_key`.
    """
    try:
        key = coincurve.PrivateKey(to_private_key(private_key))
    except ValueError as e:
        raise FieldValidationError("private key is out of range") from e
    return public_key_to_address(
        Bytes64(key.public_key.format(compressed=False)[1:])
    )


def recover_address(msg_hash: Hash32, signature: Bytes) -> Address:
    """
    Recover the address that produced `signature` over `msg_hash`.
    """
    return public_key_to_address(secp256k1_recover(msg_hash, signature))
