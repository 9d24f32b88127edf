import pytest

from vechain.exceptions import FieldValidationError
from vechain.utils.hexadecimal import (
    bytes_to_hex,
    hex_to_bytes,
    hex_to_uint,
)


def test_hex_to_bytes() -> None:
    assert hex_to_bytes("0x") == b""
    assert hex_to_bytes("0xDEADbeef") == b"\xde\xad\xbe\xef"
    assert hex_to_bytes("0X00") == b"\x00"


@pytest.mark.parametrize("text", ["deadbeef", "0xabc", "0xzz", b"0x00"])
def test_hex_to_bytes_rejects(text: str) -> None:
    with pytest.raises(FieldValidationError) as info:
        hex_to_bytes(text, "clause.data")
    assert info.value.path == "clause.data"


def test_hex_to_uint() -> None:
    assert hex_to_uint("0x") == 0
    assert hex_to_uint("0x0") == 0
    assert hex_to_uint("0xabc") == 0xABC
    with pytest.raises(FieldValidationError):
        hex_to_uint("123")
    with pytest.raises(FieldValidationError):
        hex_to_uint("0xg1")


def test_rendering() -> None:
    assert bytes_to_hex(b"\xab\xcd") == "0xabcd"
    assert bytes_to_hex(b"") == "0x"
