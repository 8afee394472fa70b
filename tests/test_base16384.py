import pytest

from plugbot.base16384 import decode, decode_string, encode, encode_string


@pytest.mark.parametrize("length", range(0, 30))
def test_round_trip_all_lengths(length):
    data = bytes((i * 37 + 11) % 256 for i in range(length))
    assert decode(encode(data)) == data


def test_empty():
    assert encode(b"") == ""
    assert decode("") == b""


def test_full_block_of_zeros():
    assert encode(b"\x00" * 7) == "\u4e00" * 4


def test_full_block_of_ones():
    assert encode(b"\xff" * 7) == "\u8dff" * 4


def test_single_byte_has_marker():
    assert encode(b"\x00") == "\u4e00\u3d01"


@pytest.mark.parametrize("remainder", range(1, 7))
def test_marker_records_remainder(remainder):
    encoded = encode(bytes(7 + remainder))
    assert ord(encoded[-1]) == 0x3D00 + remainder


def test_characters_in_alphabet():
    encoded = encode(bytes(range(256)))
    body = encoded[:-1]
    assert all(0x4E00 <= ord(c) <= 0x8DFF for c in body)


def test_full_blocks_have_no_marker():
    assert len(encode(bytes(14))) == 8


def test_string_round_trip():
    text = "ZeroBot 插件 ✓"
    assert decode_string(encode_string(text)) == text


def test_decode_rejects_foreign_characters():
    with pytest.raises(ValueError):
        decode("abc")


def test_decode_rejects_truncated():
    encoded = encode(bytes(14))
    with pytest.raises(ValueError):
        decode(encoded[:-1])


def test_decode_rejects_bad_marker():
    with pytest.raises(ValueError):
        decode("\u4e00\u3d09")