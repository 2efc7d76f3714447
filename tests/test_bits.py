import os

import pytest

from evmcore.bits import B160, B256, FixedHash, FromHexError, decode_hex, to_hex_raw


def test_b160_hex_round_trip():
    value = B160(os.urandom(20))
    assert B160.from_hex(value.to_hex()) == value


def test_b256_hex_round_trip():
    value = B256(os.urandom(32))
    assert B256.from_hex(value.to_hex()) == value


def test_b256_int_round_trip():
    value = B256(os.urandom(32))
    assert B256.from_int(value.to_int()) == value


def test_b160_int_round_trip():
    value = B160(os.urandom(20))
    assert B160.from_int(value.to_int()) == value


def test_b160_from_u64_layout():
    value = B160.from_int(0x0102030405060708)
    assert bytes(value) == bytes(12) + bytes([1, 2, 3, 4, 5, 6, 7, 8])


def test_zero_values():
    assert bytes(B160.zero()) == bytes(20)
    assert bytes(B256.zero()) == bytes(32)
    assert B256.zero().to_int() == 0


def test_wrong_length_rejected():
    with pytest.raises(ValueError):
        B160(bytes(19))


def test_int_argument_rejected():
    with pytest.raises(TypeError):
        B160(20)


def test_from_int_overflow():
    with pytest.raises(OverflowError):
        B160.from_int(1 << 160)


def test_from_int_negative():
    with pytest.raises(ValueError):
        B256.from_int(-1)


def test_from_hex_without_prefix():
    data = os.urandom(20)
    assert B160.from_hex(data.hex()) == B160(data)


def test_from_hex_uppercase():
    data = os.urandom(32)
    assert B256.from_hex("0x" + data.hex().upper()) == B256(data)


def test_decode_hex_bad_length():
    with pytest.raises(ValueError):
        decode_hex("0x1234", 20)


def test_decode_hex_invalid_character_index_with_prefix():
    text = "0x" + "0" * 10 + "g" + "0" * 29
    with pytest.raises(FromHexError) as info:
        decode_hex(text, 20)
    assert info.value.character == "g"
    assert info.value.index == 12
    assert str(info.value) == "invalid hex character: g, at 12"


def test_decode_hex_invalid_character_index_without_prefix():
    text = "z" + "0" * 39
    with pytest.raises(FromHexError) as info:
        decode_hex(text, 20)
    assert info.value.index == 0


def test_decode_hex_skips_whitespace():
    text = "ab cd" + "0" * 35
    decoded = decode_hex(text, 20)
    assert decoded[:2] == b"\xab\xcd"
    assert len(decoded) == 20
    assert decoded[-1] == 0


def test_to_hex_raw_keeps_leading_zero():
    assert to_hex_raw(b"\x0a\xbc", False) == "0x0abc"


def test_to_hex_raw_skips_leading_zero():
    assert to_hex_raw(b"\x0a\xbc", True) == "0xabc"


def test_to_hex_raw_empty():
    assert to_hex_raw(b"", False) == "0x"


def test_to_hex_full_length():
    value = B256(os.urandom(32))
    text = value.to_hex()
    assert text.startswith("0x")
    assert len(text) == 2 + 64


def test_fixed_hash_subclasses_share_base():
    short = B160.from_int(5)
    long = B256.from_int(5)
    assert isinstance(short, FixedHash)
    assert isinstance(long, FixedHash)
    assert bytes(short) == bytes(19) + b"\x05"
    assert bytes(long) == bytes(31) + b"\x05"