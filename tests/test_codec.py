import pytest

from virtualfirmata.codec import (decode14, decode_14bit_pairs, decode_extended, encode14,
                                  encode_ascii_as_7bit, encode_extended)


@pytest.mark.parametrize("value", [0, 1, 127, 128, 1023, 8191, 16383])
def test_14bit_values_survive_encoding(value):
    low, high = encode14(value)
    assert low < 0x80 and high < 0x80
    assert decode14(low, high) == value


def test_encode14_splits_low_group_first():
    assert encode14(0x3FFF) == (0x7F, 0x7F)
    assert encode14(300) == (300 & 0x7F, 2)


def test_encode14_masks_values_wider_than_14_bits():
    assert encode14(0x4001) == (0x01, 0x00)


def test_encode_extended():
    assert encode_extended(0x1FFFFF, 3) == b"\x7f\x7f\x7f"
    assert encode_extended(0x4000, 3) == b"\x00\x00\x01"
    assert encode_extended(5, 1) == b"\x05"


def test_decode_extended_reassembles_groups():
    assert decode_extended(b"\x00\x00\x01") == 0x4000
    assert decode_extended(encode_extended(123456, 3)) == 123456
    assert decode_extended(b"") == 0


def test_encode_ascii_as_7bit():
    assert encode_ascii_as_7bit("AB") == bytes([0x41, 0x00, 0x42, 0x00])
    assert encode_ascii_as_7bit("") == b""


def test_decode_14bit_pairs_drops_trailing_byte():
    assert decode_14bit_pairs(bytes([0x01, 0x01, 0x7F, 0x00, 0x05])) == [129, 127]
